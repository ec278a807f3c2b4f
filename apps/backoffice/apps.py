from django.apps import AppConfig


class BackofficeConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.backoffice'
    verbose_name = 'Marketplace administration'
