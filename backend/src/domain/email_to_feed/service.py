"""Inbound email handler - posts emailed messages to a feed as the bot user.

Processing:
1. Record the email in inbound_email_log (RECEIVED)
2. Open a savepoint
3. Parse subjectId and message from the body
4. Resolve the subject's network
5. Post the feed item through the FeedPosterPort
6. On any exception: roll back to the savepoint, mark the log FAILED and
   return a failure result carrying the error message and stack trace

The savepoint guarantees that a failed post leaves no partial side effects;
the log row lives outside it. The caller owns the outer transaction.
"""

import logging
import traceback
from typing import Optional

from sqlalchemy.orm import Session

from domain.feed import FeedPosterPort
from domain.records import is_valid_id
from models.inbound_email_log import InboundEmailLog, InboundEmailStatus
from observability.metrics import inbound_emails_total
from .models import InboundEmail, InboundEmailResult, InboundEnvelope
from .network import resolve_network_id
from .parser import parse_inbound_email

logger = logging.getLogger(__name__)


class EmailToFeedHandler:
    """Turns inbound emails into feed posts.

    Args:
        session: Database session; the handler flushes but never commits
        feed_poster: Port used to create the feed item
        default_network_id: Network for subjects without one (None = internal org)
        source: Entry point label stored on the log row (SMTP or API)
    """

    def __init__(
        self,
        session: Session,
        feed_poster: FeedPosterPort,
        default_network_id: Optional[str] = None,
        source: str = "SMTP",
    ):
        self.session = session
        self.feed_poster = feed_poster
        self.default_network_id = default_network_id
        self.source = source

    def handle_inbound_email(
        self,
        email: InboundEmail,
        envelope: Optional[InboundEnvelope] = None,
    ) -> InboundEmailResult:
        envelope = envelope or InboundEnvelope()
        log = InboundEmailLog(
            source=self.source,
            message_id=email.message_id,
            from_address=envelope.from_address or email.from_address,
            to_address=envelope.to_address or next(iter(email.to_addresses), None),
            subject=email.subject,
            status=InboundEmailStatus.RECEIVED,
        )
        self.session.add(log)
        self.session.flush()

        subject_id = None
        savepoint = self.session.begin_nested()
        try:
            request = parse_inbound_email(email)
            subject_id = request.subject_id
            network_id = resolve_network_id(
                self.session, request.subject_id, self.default_network_id
            )
            posted = self.feed_poster.post_feed_item(
                network_id, request.subject_id, request.message
            )
            savepoint.commit()
        except Exception as e:
            savepoint.rollback()
            error_message = str(e) or type(e).__name__

            log.status = InboundEmailStatus.FAILED
            log.error_message = error_message
            log.subject_id = subject_id if is_valid_id(subject_id) else None
            self.session.flush()

            inbound_emails_total.labels(source=self.source.lower(), status="failed").inc()
            logger.warning(
                f"Inbound email {log.id} from {log.from_address} failed: {error_message}",
                extra={"email_status": log.status},
                exc_info=True,
            )
            return InboundEmailResult(
                success=False,
                message=f"{error_message}\n{traceback.format_exc()}",
            )

        log.status = InboundEmailStatus.POSTED
        log.subject_id = posted.parent_id
        log.feed_item_id = posted.id
        self.session.flush()

        inbound_emails_total.labels(source=self.source.lower(), status="posted").inc()
        logger.info(
            f"Inbound email {log.id} posted as feed item {posted.id} on {posted.parent_id}",
            extra={"email_status": log.status},
        )
        return InboundEmailResult(success=True, feed_item_id=posted.id)
