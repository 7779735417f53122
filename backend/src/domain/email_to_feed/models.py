"""Domain models for the inbound email handler."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class InboundEmail:
    """An email as delivered to the feed bot.

    Attributes:
        plain_text_body: text/plain body (may be empty)
        html_body: text/html body, used when there is no plain text
        subject: Subject header
        from_address: Sender address from the From header
        from_name: Display name from the From header
        to_addresses: Addresses from the To header
        message_id: Message-ID header
    """
    plain_text_body: Optional[str] = None
    html_body: Optional[str] = None
    subject: Optional[str] = None
    from_address: Optional[str] = None
    from_name: Optional[str] = None
    to_addresses: list[str] = field(default_factory=list)
    message_id: Optional[str] = None


@dataclass
class InboundEnvelope:
    """SMTP envelope: who actually sent the mail and to which address."""
    from_address: Optional[str] = None
    to_address: Optional[str] = None


@dataclass
class FeedRequest:
    """The two fields extracted from an email body."""
    subject_id: str
    message: str


@dataclass
class InboundEmailResult:
    """
    Outcome reported back to the email service.

    Attributes:
        success: Whether the feed item was posted
        message: Error message and stack trace when success is False
        feed_item_id: Id of the created feed item when success is True
    """
    success: bool
    message: Optional[str] = None
    feed_item_id: Optional[str] = None
