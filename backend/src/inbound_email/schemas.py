"""Pydantic schemas for the inbound email API"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.email_to_feed import InboundEmail


class InboundEmailRequest(BaseModel):
    """An already-parsed email, as delivered by an external mail service"""
    plain_text_body: Optional[str] = None
    html_body: Optional[str] = None
    subject: Optional[str] = None
    from_address: Optional[str] = None
    from_name: Optional[str] = None
    to_addresses: List[str] = Field(default_factory=list)
    message_id: Optional[str] = None

    def to_domain(self) -> InboundEmail:
        return InboundEmail(**self.model_dump())


class InboundEmailResultResponse(BaseModel):
    """Outcome of processing; message carries the error and stack trace on failure"""
    success: bool
    message: Optional[str] = None
    feed_item_id: Optional[str] = None


class InboundEmailLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    source: str
    message_id: Optional[str] = None
    from_address: Optional[str] = None
    to_address: Optional[str] = None
    subject: Optional[str] = None
    subject_id: Optional[str] = None
    feed_item_id: Optional[str] = None
    status: str
    error_message: Optional[str] = None
    received_at: datetime
    updated_at: datetime
