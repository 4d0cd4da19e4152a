"""
Celery application for the pCash project.

Workers are started with `celery -A pcash worker`.
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'pcash.settings')

app = Celery('pcash')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
