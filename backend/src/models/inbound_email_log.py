"""InboundEmailLog model - Audit trail of emails received by the feed bot.

One row per received email, written outside the processing savepoint so
that failed posts stay visible after their side effects are rolled back.
"""

from enum import Enum
from sqlalchemy import Column, Integer, String, Text, DateTime, Index, func
from sqlalchemy.orm import validates

from .base import Base, utcnow


class InboundEmailStatus(str, Enum):
    """Processing status for inbound emails.

    None → RECEIVED → POSTED
                  ↓
                FAILED

    RECEIVED: Email accepted, processing started
    POSTED: Feed item created (terminal)
    FAILED: Parsing or posting failed (terminal)
    """
    RECEIVED = "RECEIVED"
    POSTED = "POSTED"
    FAILED = "FAILED"


# Allowed state transitions for validation
ALLOWED_TRANSITIONS = {
    None: [InboundEmailStatus.RECEIVED],
    InboundEmailStatus.RECEIVED: [
        InboundEmailStatus.POSTED,
        InboundEmailStatus.FAILED,
    ],
    InboundEmailStatus.POSTED: [],
    InboundEmailStatus.FAILED: [],
}


class InboundEmailLog(Base):
    """
    InboundEmailLog model - Tracks each inbound email and its outcome.

    source is SMTP or API depending on which entry point received it.
    """
    __tablename__ = "inbound_email_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source = Column(Text, nullable=False, default="SMTP")
    message_id = Column(Text, nullable=True)
    from_address = Column(Text, nullable=True)
    to_address = Column(Text, nullable=True)
    subject = Column(Text, nullable=True)

    subject_id = Column(String(18), nullable=True)
    feed_item_id = Column(String(18), nullable=True)
    status = Column(Text, nullable=False)
    error_message = Column(Text, nullable=True)

    received_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    __table_args__ = (
        Index('idx_inbound_email_log_status', 'status', 'received_at'),
    )

    @validates('status')
    def validate_status_transition(self, key, new_status):
        """
        Validate status state machine transitions.

        Raises:
            ValueError: If transition is not allowed by state machine
        """
        current_status = None
        if self.status is not None:
            current_status = InboundEmailStatus(self.status)

        if isinstance(new_status, str):
            try:
                new_status = InboundEmailStatus(new_status)
            except ValueError:
                raise ValueError(f"Invalid status value: {new_status}")

        allowed = ALLOWED_TRANSITIONS.get(current_status, [])
        if new_status not in allowed:
            raise ValueError(
                f"Invalid status transition: {current_status} → {new_status}. "
                f"Allowed transitions from {current_status}: {allowed}"
            )

        return new_status.value

    def __repr__(self):
        return (
            f"<InboundEmailLog(id={self.id}, status={self.status}, "
            f"from={self.from_address}, subject_id={self.subject_id})>"
        )
