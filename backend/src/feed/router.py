"""Feed item API endpoints (read-only; items are posted by the feed bot)"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from database import get_db
from domain.records import id_forms, is_valid_id
from models.feed_item import FeedItem
from .schemas import FeedItemResponse

router = APIRouter(prefix="/feed-items", tags=["feed-items"])


@router.get("", response_model=List[FeedItemResponse])
def list_feed_items(
    parent_id: str = Query(..., description="User or group id (15 or 18 characters)"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """Newest first."""
    if not is_valid_id(parent_id):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid parent_id: {parent_id}",
        )
    query = (
        select(FeedItem)
        .where(FeedItem.parent_id.in_(id_forms(parent_id)))
        .order_by(FeedItem.created_at.desc(), FeedItem.id)
        .limit(limit)
        .offset(offset)
    )
    items = db.execute(query).scalars().all()
    return [FeedItemResponse.model_validate(item) for item in items]


@router.get("/{feed_item_id}", response_model=FeedItemResponse)
def get_feed_item(feed_item_id: str, db: Session = Depends(get_db)):
    item = None
    if is_valid_id(feed_item_id):
        item = db.execute(
            select(FeedItem).where(FeedItem.id.in_(id_forms(feed_item_id)))
        ).scalar_one_or_none()
    if item is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Feed item {feed_item_id} not found",
        )
    return FeedItemResponse.model_validate(item)
