"""Pydantic schemas for collaboration groups"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.records import is_valid_id, to_18
from models.collaboration_group import CollaborationType


def _normalize_id(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if not is_valid_id(value):
        raise ValueError(f"Invalid record id: {value}")
    return to_18(value)


def _normalize_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if not value.strip():
        raise ValueError("Group name cannot be blank")
    return value.strip()


class GroupBase(BaseModel):
    """Fields shared by create and response schemas"""
    name: str = Field(..., min_length=1, max_length=40)
    owner_id: str = Field(..., description="User id (15 or 18 characters)")
    description: Optional[str] = None
    group_email: Optional[str] = None
    member_count: int = Field(1, ge=0)
    collaboration_type: CollaborationType = CollaborationType.PUBLIC
    is_archived: bool = False
    is_broadcast: bool = False
    photo_id: Optional[str] = None
    network_id: Optional[str] = None


class GroupCreate(GroupBase):
    """Schema for creating a group"""

    @field_validator("owner_id", "photo_id", "network_id")
    @classmethod
    def validate_record_ids(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_id(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _normalize_name(v)


class GroupUpdate(BaseModel):
    """Schema for updating a group (all fields optional)"""
    name: Optional[str] = Field(None, min_length=1, max_length=40)
    owner_id: Optional[str] = None
    description: Optional[str] = None
    group_email: Optional[str] = None
    member_count: Optional[int] = Field(None, ge=0)
    collaboration_type: Optional[CollaborationType] = None
    is_archived: Optional[bool] = None
    is_broadcast: Optional[bool] = None
    photo_id: Optional[str] = None
    network_id: Optional[str] = None

    @field_validator("owner_id", "photo_id", "network_id")
    @classmethod
    def validate_record_ids(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_id(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_name(v)


class GroupResponse(GroupBase):
    """Schema for group response"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime
