"""Pydantic schemas for the group sync auto-create settings"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class GroupSyncSettingsUpdate(BaseModel):
    """Auto-create switches per collaboration type"""
    allow_public_groups: bool = False
    allow_private_groups: bool = False
    allow_unlisted_groups: bool = False


class GroupSyncSettingsResponse(GroupSyncSettingsUpdate):
    """configured is False while the singleton row does not exist yet"""
    configured: bool
    updated_at: Optional[datetime] = None
