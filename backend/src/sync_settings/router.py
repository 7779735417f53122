"""Group sync settings API endpoints (singleton auto-create policy)"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.group_sync_settings import GroupSyncSettings
from .schemas import GroupSyncSettingsResponse, GroupSyncSettingsUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/group-sync-settings", tags=["group-sync-settings"])


def _to_response(row: GroupSyncSettings | None) -> GroupSyncSettingsResponse:
    if row is None:
        return GroupSyncSettingsResponse(configured=False)
    return GroupSyncSettingsResponse(
        configured=True,
        allow_public_groups=row.allow_public_groups,
        allow_private_groups=row.allow_private_groups,
        allow_unlisted_groups=row.allow_unlisted_groups,
        updated_at=row.updated_at,
    )


@router.get("", response_model=GroupSyncSettingsResponse)
def get_group_sync_settings(db: Session = Depends(get_db)):
    """Current org defaults; every flag reads False until configured."""
    return _to_response(GroupSyncSettings.get_org_defaults(db))


@router.put("", response_model=GroupSyncSettingsResponse)
def update_group_sync_settings(
    data: GroupSyncSettingsUpdate,
    db: Session = Depends(get_db),
):
    """Replace the org defaults, creating the singleton row if needed.

    Only affects mirrors created from now on; existing mirrors are kept.
    """
    row = GroupSyncSettings.get_org_defaults(db)
    if row is None:
        row = GroupSyncSettings()
        db.add(row)

    row.allow_public_groups = data.allow_public_groups
    row.allow_private_groups = data.allow_private_groups
    row.allow_unlisted_groups = data.allow_unlisted_groups
    db.commit()
    db.refresh(row)

    logger.info(f"Group sync settings updated: {row!r}")
    return _to_response(row)
