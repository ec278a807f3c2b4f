from django.apps import AppConfig


class CustomerAnalyticsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.customer_analytics'
