"""Pydantic schemas for feed items"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class FeedItemResponse(BaseModel):
    """Schema for feed item response"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    parent_id: str
    network_id: Optional[str] = None
    created_by_id: str
    type: str
    body: str
    message_segments: List[Dict[str, Any]]
    created_at: datetime
