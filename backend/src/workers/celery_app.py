"""Celery application for background group sync jobs.

Start a worker with:
    celery -A workers.celery_app worker --loglevel=info
"""

from celery import Celery

from config import settings

celery_app = Celery(
    "groupmirror",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["workers.group_resync"],
)

celery_app.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
)
