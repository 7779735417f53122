"""Pydantic schemas for mirror groups"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MirrorGroupResponse(BaseModel):
    """Schema for mirror record response"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    group_id: str
    active: bool
    name: str
    owner_id: Optional[str] = None
    description: Optional[str] = None
    email: Optional[str] = None
    member_count: Optional[int] = None
    full_photo_url: Optional[str] = None
    medium_photo_url: Optional[str] = None
    small_photo_url: Optional[str] = None
    banner_photo_url: Optional[str] = None
    collaboration_type: Optional[str] = None
    is_archived: bool
    is_broadcast: bool
    last_synced_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class MirrorGroupUpdate(BaseModel):
    """Only the active flag is writable; tracked fields belong to the sync."""
    active: bool = Field(..., description="False freezes the mirror against future syncs")


class ResyncRequest(BaseModel):
    batch_size: Optional[int] = Field(None, ge=1, le=10000)


class ResyncResponse(BaseModel):
    status: str = "enqueued"
    task_id: str
