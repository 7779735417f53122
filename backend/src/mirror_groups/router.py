"""Mirror group API endpoints"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from database import get_db
from domain.records import is_valid_id
from models.mirror_group import MirrorGroup
from workers.group_resync import resync_all_groups
from .schemas import MirrorGroupResponse, MirrorGroupUpdate, ResyncRequest, ResyncResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mirror-groups", tags=["mirror-groups"])


def _get_mirror_or_404(db: Session, mirror_id: int) -> MirrorGroup:
    mirror = db.get(MirrorGroup, mirror_id)
    if mirror is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Mirror group {mirror_id} not found",
        )
    return mirror


@router.get("", response_model=List[MirrorGroupResponse])
def list_mirror_groups(
    active: Optional[bool] = Query(None, description="Filter by active flag"),
    group_id: Optional[str] = Query(None, description="Source group id (15 or 18 characters)"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    query = select(MirrorGroup)
    if active is not None:
        query = query.where(MirrorGroup.active == active)
    if group_id is not None:
        if not is_valid_id(group_id):
            return []
        query = query.where(MirrorGroup.group_id_matches([group_id]))
    query = query.order_by(MirrorGroup.name, MirrorGroup.id).limit(limit).offset(offset)

    mirrors = db.execute(query).scalars().all()
    return [MirrorGroupResponse.model_validate(m) for m in mirrors]


@router.get("/{mirror_id}", response_model=MirrorGroupResponse)
def get_mirror_group(mirror_id: int, db: Session = Depends(get_db)):
    return MirrorGroupResponse.model_validate(_get_mirror_or_404(db, mirror_id))


@router.patch("/{mirror_id}", response_model=MirrorGroupResponse)
def update_mirror_group(
    mirror_id: int,
    data: MirrorGroupUpdate,
    db: Session = Depends(get_db),
):
    """Activate or deactivate a mirror.

    An inactive mirror is skipped by every later sync; reactivating it lets
    the next sync of its group overwrite it again.
    """
    mirror = _get_mirror_or_404(db, mirror_id)
    mirror.active = data.active
    db.commit()
    db.refresh(mirror)

    logger.info(f"Mirror group {mirror.id} ({mirror.group_id}) active={mirror.active}")
    return MirrorGroupResponse.model_validate(mirror)


@router.post("/resync", response_model=ResyncResponse, status_code=status.HTTP_202_ACCEPTED)
def resync_mirror_groups(data: Optional[ResyncRequest] = None):
    """Enqueue a full resync of every group (Celery task group_sync.resync_all)."""
    batch_size = data.batch_size if data else None
    task = resync_all_groups.delay(batch_size=batch_size)
    logger.info(f"Enqueued full group resync: task_id={task.id}")
    return ResyncResponse(task_id=str(task.id))
