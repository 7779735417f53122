"""MIME parser for the inbound feed bot.

Turns raw MIME bytes into an InboundEmail: text/plain and text/html bodies,
sender, recipients and Message-ID. Attachments are ignored.
"""

import email
import email.policy
import logging
from email.message import EmailMessage
from email.utils import getaddresses, parseaddr
from typing import Optional

from domain.email_to_feed import InboundEmail

logger = logging.getLogger(__name__)


def parse_mime_message(raw_mime: bytes) -> EmailMessage:
    """Parse raw MIME bytes into an EmailMessage.

    Raises:
        ValueError: If MIME parsing fails
    """
    try:
        return email.message_from_bytes(raw_mime, policy=email.policy.default)
    except Exception as e:
        logger.error(f"Failed to parse MIME message: {e}")
        raise ValueError(f"Invalid MIME message: {e}")


def _body_text(msg: EmailMessage, subtype: str) -> Optional[str]:
    part = msg.get_body(preferencelist=(subtype,))
    if part is None or part.get_content_type() != f"text/{subtype}":
        return None
    # Attachments that happen to be text/plain are not bodies
    if part.get_content_disposition() == "attachment":
        return None
    try:
        return part.get_content()
    except (LookupError, UnicodeDecodeError) as e:
        logger.warning(f"Could not decode text/{subtype} body: {e}")
        payload = part.get_payload(decode=True) or b""
        return payload.decode("utf-8", errors="replace")


def extract_inbound_email(msg: EmailMessage) -> InboundEmail:
    """Extract the fields the feed bot needs from a parsed message."""
    from_name, from_address = parseaddr(str(msg.get("From", "")))
    to_addresses = [
        address
        for _, address in getaddresses([str(value) for value in msg.get_all("To", [])])
        if address
    ]

    subject = msg.get("Subject")
    message_id = msg.get("Message-ID")
    return InboundEmail(
        plain_text_body=_body_text(msg, "plain"),
        html_body=_body_text(msg, "html"),
        subject=str(subject) if subject is not None else None,
        from_address=from_address or None,
        from_name=from_name or None,
        to_addresses=to_addresses,
        message_id=str(message_id).strip() if message_id is not None else None,
    )


def parse_inbound_email_bytes(raw_mime: bytes) -> InboundEmail:
    """Parse raw MIME bytes straight into an InboundEmail."""
    return extract_inbound_email(parse_mime_message(raw_mime))
