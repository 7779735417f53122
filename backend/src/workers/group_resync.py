"""Celery task for a full group-to-mirror resync.

Re-runs the group sync over every collaboration group in batches and deletes
mirrors whose source group no longer exists. Safe to run at any time: active
mirrors that already match their group are left untouched.
"""

import logging
from typing import Any, Dict, Optional

from celery import shared_task

from config import settings
from database import get_db_session
from domain.group_sync import GroupSyncService
from infrastructure.groups import SqlAlchemyGroupSource
from observability.request_id import request_id_scope

logger = logging.getLogger(__name__)


def run_resync(session, batch_size: int, photo_base_url: str) -> Dict[str, int]:
    """Resync every group using the given session (no commit)."""
    service = GroupSyncService(session, SqlAlchemyGroupSource(session, photo_base_url))
    return service.resync_all(batch_size=batch_size).as_dict()


@shared_task(name="group_sync.resync_all", bind=True)
def resync_all_groups(self, batch_size: Optional[int] = None) -> Dict[str, Any]:
    """Resync all collaboration groups into mirror_group.

    Args:
        batch_size: Groups per batch (defaults to GROUP_SYNC_BATCH_SIZE)

    Returns:
        Dict with the sync counters (created, updated, unchanged,
        skipped_inactive, skipped_by_policy, deleted)
    """
    batch_size = batch_size or settings.GROUP_SYNC_BATCH_SIZE
    with request_id_scope(self.request.id):
        logger.info(f"Full group resync started (batch_size={batch_size})")
        with get_db_session() as session:
            counts = run_resync(session, batch_size, settings.PHOTO_BASE_URL)
        logger.info(f"Full group resync completed: {counts}")
    return {"status": "completed", **counts}
