"""Collaboration group API endpoints.

Groups are the source side of the group sync: every create, update and
delete committed here fires the collaboration-group triggers.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from domain.records import is_valid_id, to_18
from models.collaboration_group import CollaborationGroup, CollaborationType
from .schemas import GroupCreate, GroupResponse, GroupUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/groups", tags=["groups"])

# Columns a PATCH may omit but never set to null
NON_NULLABLE_FIELDS = (
    "name",
    "owner_id",
    "collaboration_type",
    "member_count",
    "is_archived",
    "is_broadcast",
)


def _get_group_or_404(db: Session, group_id: str) -> CollaborationGroup:
    group = db.get(CollaborationGroup, to_18(group_id)) if is_valid_id(group_id) else None
    if group is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Group {group_id} not found",
        )
    return group


def _ensure_name_available(db: Session, name: str, exclude_id: Optional[str] = None) -> None:
    stmt = select(CollaborationGroup.id).where(CollaborationGroup.name == name)
    if exclude_id:
        stmt = stmt.where(CollaborationGroup.id != exclude_id)
    if db.execute(stmt).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Group with name '{name}' already exists",
        )


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Group write failed due to constraint violation",
        )


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
def create_group(data: GroupCreate, db: Session = Depends(get_db)):
    """Create a group; the group sync mirrors it when the policy allows its type."""
    _ensure_name_available(db, data.name)

    group = CollaborationGroup(**data.model_dump())
    db.add(group)
    _commit(db)
    db.refresh(group)

    logger.info(f"Created group {group.id} ({group.collaboration_type})")
    return GroupResponse.model_validate(group)


@router.get("", response_model=List[GroupResponse])
def list_groups(
    collaboration_type: Optional[CollaborationType] = Query(None, description="Filter by type"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    query = select(CollaborationGroup)
    if collaboration_type is not None:
        query = query.where(CollaborationGroup.collaboration_type == collaboration_type.value)
    query = query.order_by(CollaborationGroup.name).limit(limit).offset(offset)

    groups = db.execute(query).scalars().all()
    return [GroupResponse.model_validate(g) for g in groups]


@router.get("/{group_id}", response_model=GroupResponse)
def get_group(group_id: str, db: Session = Depends(get_db)):
    """Get a group by its 15- or 18-character id."""
    return GroupResponse.model_validate(_get_group_or_404(db, group_id))


@router.patch("/{group_id}", response_model=GroupResponse)
def update_group(group_id: str, data: GroupUpdate, db: Session = Depends(get_db)):
    group = _get_group_or_404(db, group_id)

    changes = data.model_dump(exclude_unset=True)
    null_fields = [f for f in NON_NULLABLE_FIELDS if f in changes and changes[f] is None]
    if null_fields:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"{', '.join(null_fields)} cannot be null",
        )

    if "name" in changes and changes["name"] != group.name:
        _ensure_name_available(db, changes["name"], exclude_id=group.id)

    for field, value in changes.items():
        setattr(group, field, value)

    _commit(db)
    db.refresh(group)
    return GroupResponse.model_validate(group)


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_group(group_id: str, db: Session = Depends(get_db)):
    """Delete a group; its mirror record is removed in the same transaction."""
    group = _get_group_or_404(db, group_id)
    deleted_id = group.id
    db.delete(group)
    db.commit()

    logger.info(f"Deleted group {deleted_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
