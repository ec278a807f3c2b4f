from celery import Celery
import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'Root.settings.production')

app = Celery('amzify')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
