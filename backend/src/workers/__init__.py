"""Background workers: Celery application and group sync tasks."""

from .celery_app import celery_app
from .group_resync import resync_all_groups, run_resync

__all__ = [
    "celery_app",
    "resync_all_groups",
    "run_resync",
]
