"""Integration tests for the feed bot SMTP handler"""

from email.message import EmailMessage

import pytest
from aiosmtpd.smtp import Envelope
from sqlalchemy import select

from database import get_db_session
from domain.records import USER_KEY_PREFIX, new_record_id
from infrastructure.ingest.smtp_handler import FeedBotSMTPHandler
from models.feed_item import FeedItem
from models.inbound_email_log import InboundEmailLog

BOT_ID = "005000000000001AAA"
INBOUND_ADDRESS = "feedbot@example.com"


def _raw_email(body: str) -> bytes:
    msg = EmailMessage()
    msg["From"] = "Ada <ada@example.com>"
    msg["To"] = INBOUND_ADDRESS
    msg["Subject"] = "Post this"
    msg["Message-ID"] = "<smtp-test@example.com>"
    msg.set_content(body)
    return msg.as_bytes()


def _envelope(content: bytes | None) -> Envelope:
    envelope = Envelope()
    envelope.mail_from = "ada@example.com"
    envelope.rcpt_tos = [INBOUND_ADDRESS]
    envelope.content = content
    envelope.original_content = content
    return envelope


@pytest.fixture
def handler(db_session):
    # The handler opens its own sessions; nothing may be pending here
    db_session.commit()
    return FeedBotSMTPHandler(
        session_factory=get_db_session,
        bot_user_id=BOT_ID,
        inbound_address=INBOUND_ADDRESS,
    )


@pytest.mark.asyncio
async def test_posted_email_is_accepted(handler, db_session):
    user_id = new_record_id(USER_KEY_PREFIX)
    envelope = _envelope(_raw_email(f"subjectId={user_id}\nmessage=Hello from SMTP\n"))

    reply = await handler.handle_DATA(None, None, envelope)

    item = db_session.execute(select(FeedItem)).scalar_one()
    assert reply == f"250 Message accepted (feed item {item.id})"
    assert item.parent_id == user_id
    assert item.created_by_id == BOT_ID
    assert item.body == "Hello from SMTP"

    log = db_session.execute(select(InboundEmailLog)).scalar_one()
    assert log.status == "POSTED"
    assert log.source == "SMTP"
    assert log.message_id == "<smtp-test@example.com>"


@pytest.mark.asyncio
async def test_rejected_email_returns_554(handler, db_session):
    envelope = _envelope(_raw_email("subjectId=005xx0000012345\n"))

    reply = await handler.handle_DATA(None, None, envelope)

    assert reply.startswith("554 ")
    assert "message=" in reply
    assert "\n" not in reply
    assert db_session.execute(select(FeedItem)).first() is None
    log = db_session.execute(select(InboundEmailLog)).scalar_one()
    assert log.status == "FAILED"


@pytest.mark.asyncio
async def test_unknown_recipient_rejected(handler):
    envelope = Envelope()

    reply = await handler.handle_RCPT(None, None, envelope, "someone@example.com", [])

    assert reply == "550 Unknown recipient"
    assert envelope.rcpt_tos == []


@pytest.mark.asyncio
async def test_recipient_match_is_case_insensitive(handler):
    envelope = Envelope()

    reply = await handler.handle_RCPT(None, None, envelope, "FeedBot@Example.com", [])

    assert reply == "250 OK"
    assert envelope.rcpt_tos == ["FeedBot@Example.com"]


@pytest.mark.asyncio
async def test_no_recipients(handler):
    envelope = _envelope(_raw_email("subjectId=x\nmessage=y"))
    envelope.rcpt_tos = []

    assert await handler.handle_DATA(None, None, envelope) == "550 No valid recipients"


@pytest.mark.asyncio
async def test_unparseable_content_returns_451(handler):
    envelope = _envelope(None)

    assert await handler.handle_DATA(None, None, envelope) == "451 Message parsing failed"
