"""Inbound email API endpoints.

HTTP entry point of the feed bot, for mail services that parse messages
themselves. Processing is identical to the SMTP listener.
"""

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from domain.email_to_feed import EmailToFeedHandler
from infrastructure.feed import DatabaseFeedPoster
from models.inbound_email_log import InboundEmailLog, InboundEmailStatus
from .schemas import InboundEmailLogResponse, InboundEmailRequest, InboundEmailResultResponse

router = APIRouter(prefix="/inbound-email", tags=["inbound-email"])


@router.post("", response_model=InboundEmailResultResponse)
def receive_inbound_email(data: InboundEmailRequest, db: Session = Depends(get_db)):
    """Post the email's message to the subject's feed.

    Always answers 200: a rejected email is reported with success=false, and
    the failure is kept in the inbound email log.
    """
    handler = EmailToFeedHandler(
        db,
        DatabaseFeedPoster(db, settings.FEED_BOT_USER_ID),
        default_network_id=settings.DEFAULT_NETWORK_ID,
        source="API",
    )
    result = handler.handle_inbound_email(data.to_domain())
    db.commit()
    return InboundEmailResultResponse(**asdict(result))


@router.get("/logs", response_model=List[InboundEmailLogResponse])
def list_inbound_email_logs(
    status: Optional[InboundEmailStatus] = Query(None, description="Filter by status"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """Most recent first."""
    query = select(InboundEmailLog)
    if status is not None:
        query = query.where(InboundEmailLog.status == status.value)
    query = query.order_by(InboundEmailLog.id.desc()).limit(limit).offset(offset)

    logs = db.execute(query).scalars().all()
    return [InboundEmailLogResponse.model_validate(log) for log in logs]
