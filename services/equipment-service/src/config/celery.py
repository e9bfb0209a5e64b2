"""
Celery application for Equipment Service.

The beat schedule lives in ``CELERY_BEAT_SCHEDULE`` in settings.
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

app = Celery('equipment_service')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
