"""SMTP handler for the feed bot's inbound email address.

Implements an aiosmtpd handler. Every accepted message is parsed and handed
to EmailToFeedHandler in a worker thread with its own database session, and
the handler's result is mapped onto the SMTP reply:

    250  feed item posted
    554  message rejected by the handler (error message in the reply)
    550  recipient is not the configured inbound address
    451  MIME parsing failed or an unexpected server error
"""

import asyncio
import logging
from typing import Callable, ContextManager, Optional

from aiosmtpd.smtp import Envelope, Session, SMTP
from sqlalchemy.orm import Session as DbSession

from domain.email_to_feed import (
    EmailToFeedHandler,
    InboundEmail,
    InboundEmailResult,
    InboundEnvelope,
)
from infrastructure.feed import DatabaseFeedPoster
from observability.request_id import request_id_scope
from .mime_parser import parse_inbound_email_bytes

logger = logging.getLogger(__name__)

# Longest error text echoed back in a 554 reply line
MAX_REPLY_LENGTH = 400


class FeedBotSMTPHandler:
    """aiosmtpd handler posting emails to feeds.

    Args:
        session_factory: Context manager yielding a Session that commits on exit
        bot_user_id: Author of the posted feed items
        default_network_id: Network for subjects without one
        inbound_address: Only accept mail for this address (None accepts any)
    """

    def __init__(
        self,
        session_factory: Callable[[], ContextManager[DbSession]],
        bot_user_id: str,
        default_network_id: Optional[str] = None,
        inbound_address: Optional[str] = None,
    ):
        self.session_factory = session_factory
        self.bot_user_id = bot_user_id
        self.default_network_id = default_network_id
        self.inbound_address = inbound_address.lower() if inbound_address else None

    async def handle_RCPT(
        self,
        server: SMTP,
        session: Session,
        envelope: Envelope,
        address: str,
        rcpt_options: list,
    ) -> str:
        if self.inbound_address and address.lower() != self.inbound_address:
            logger.warning(f"Rejecting mail for unknown recipient {address}")
            return "550 Unknown recipient"
        envelope.rcpt_tos.append(address)
        return "250 OK"

    def process_email(
        self,
        email: InboundEmail,
        envelope: InboundEnvelope,
    ) -> InboundEmailResult:
        """Run the email handler in its own session (blocking)."""
        with self.session_factory() as db:
            handler = EmailToFeedHandler(
                db,
                DatabaseFeedPoster(db, self.bot_user_id),
                default_network_id=self.default_network_id,
                source="SMTP",
            )
            return handler.handle_inbound_email(email, envelope)

    async def handle_DATA(
        self,
        server: SMTP,
        session: Session,
        envelope: Envelope,
    ) -> str:
        """Handle the DATA command (main entry point)."""
        with request_id_scope():
            return await self._handle_data(envelope)

    async def _handle_data(self, envelope: Envelope) -> str:
        if not envelope.rcpt_tos:
            logger.warning("Email received with no recipients")
            return "550 No valid recipients"

        to_address = envelope.rcpt_tos[0]
        logger.info(
            f"Received email: from={envelope.mail_from}, to={to_address}, "
            f"size={len(envelope.content or b'')} bytes"
        )

        try:
            content = envelope.original_content or envelope.content
            if isinstance(content, str):
                content = content.encode("utf-8")
            email = parse_inbound_email_bytes(content)
        except Exception as e:
            logger.error(f"Failed to parse MIME message: {e}")
            return "451 Message parsing failed"

        try:
            result = await asyncio.to_thread(
                self.process_email,
                email,
                InboundEnvelope(from_address=envelope.mail_from, to_address=to_address),
            )
        except Exception as e:
            logger.error(f"Unexpected error processing email: {e}", exc_info=True)
            return "451 Temporary server error"

        if result.success:
            return f"250 Message accepted (feed item {result.feed_item_id})"

        first_line = (result.message or "Message rejected").splitlines()[0]
        return f"554 {first_line[:MAX_REPLY_LENGTH]}"
