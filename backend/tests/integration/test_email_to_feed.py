"""Integration tests for the email-to-feed handler with the database feed poster"""

from typing import Optional

import pytest
from sqlalchemy import func, select

from domain.email_to_feed import EmailToFeedHandler, InboundEmail, InboundEnvelope
from domain.feed import FeedPosterPort, PostedFeedItem
from domain.records import NETWORK_KEY_PREFIX, USER_KEY_PREFIX, new_record_id, to_15
from infrastructure.feed import DatabaseFeedPoster
from models.feed_item import FeedItem
from models.inbound_email_log import InboundEmailLog

BOT_ID = "005000000000001AAA"


def _email(body: Optional[str], **fields) -> InboundEmail:
    return InboundEmail(plain_text_body=body, from_address="ada@example.com", **fields)


def _handler(session, default_network_id=None, poster=None) -> EmailToFeedHandler:
    return EmailToFeedHandler(
        session,
        poster or DatabaseFeedPoster(session, BOT_ID),
        default_network_id=default_network_id,
    )


def _feed_items(session) -> list[FeedItem]:
    session.expire_all()
    return session.execute(select(FeedItem)).scalars().all()


def _only_log(session) -> InboundEmailLog:
    session.expire_all()
    return session.execute(select(InboundEmailLog)).scalar_one()


class TestSuccessfulPosts:
    def test_post_to_user_feed(self, db_session):
        user_id = new_record_id(USER_KEY_PREFIX)

        result = _handler(db_session).handle_inbound_email(
            _email(f"subjectId={to_15(user_id)}\nmessage=Hello World")
        )
        db_session.commit()

        assert result.success is True
        assert result.message is None
        items = _feed_items(db_session)
        assert len(items) == 1
        item = items[0]
        assert result.feed_item_id == item.id
        assert item.parent_id == user_id
        assert item.created_by_id == BOT_ID
        assert item.network_id is None
        assert item.body == "Hello World"
        assert item.type == "TextPost"

    def test_post_to_group_uses_group_network(self, db_session, make_group):
        network_id = new_record_id(NETWORK_KEY_PREFIX)
        group = make_group(network_id=network_id)

        result = _handler(db_session, default_network_id=new_record_id(NETWORK_KEY_PREFIX)) \
            .handle_inbound_email(_email(f"subjectId={group.id}\nmessage=Team update"))

        assert result.success is True
        assert _feed_items(db_session)[0].network_id == network_id

    def test_user_subject_gets_default_network(self, db_session):
        network_id = new_record_id(NETWORK_KEY_PREFIX)
        user_id = new_record_id(USER_KEY_PREFIX)

        result = _handler(db_session, default_network_id=network_id).handle_inbound_email(
            _email(f"subjectId={user_id}\nmessage=hi")
        )

        assert result.success is True
        assert _feed_items(db_session)[0].network_id == network_id

    def test_mentions_are_stored_as_segments(self, db_session):
        subject_id = new_record_id(USER_KEY_PREFIX)
        mentioned = new_record_id(USER_KEY_PREFIX)

        _handler(db_session).handle_inbound_email(
            _email(f"subjectId={subject_id}\nmessage=Ask {{{mentioned}}} please")
        )

        item = _feed_items(db_session)[0]
        assert item.message_segments == [
            {"type": "Text", "text": "Ask "},
            {"type": "Mention", "id": mentioned},
            {"type": "Text", "text": " please"},
        ]
        assert item.body == f"Ask @{mentioned} please"

    def test_log_marked_posted(self, db_session):
        user_id = new_record_id(USER_KEY_PREFIX)
        result = _handler(db_session).handle_inbound_email(
            _email(f"subjectId={user_id}\nmessage=hi", subject="Hello", message_id="<m1@x>"),
            InboundEnvelope(from_address="bounce@example.com", to_address="bot@example.com"),
        )
        db_session.commit()

        log = _only_log(db_session)
        assert log.status == "POSTED"
        assert log.feed_item_id == result.feed_item_id
        assert log.subject_id == user_id
        assert log.from_address == "bounce@example.com"
        assert log.to_address == "bot@example.com"
        assert log.subject == "Hello"
        assert log.message_id == "<m1@x>"
        assert log.source == "SMTP"

    def test_html_only_email(self, db_session):
        user_id = new_record_id(USER_KEY_PREFIX)
        email = InboundEmail(html_body=f"<p>subjectId={user_id}</p><p>message=From HTML</p>")

        result = _handler(db_session).handle_inbound_email(email)

        assert result.success is True
        assert _feed_items(db_session)[0].body == "From HTML"


class TestFailedPosts:
    def test_missing_message_fails_without_feed_item(self, db_session):
        result = _handler(db_session).handle_inbound_email(
            _email("subjectId=005xx0000012345")
        )
        db_session.commit()

        assert result.success is False
        assert result.feed_item_id is None
        assert "message=" in result.message
        assert "Traceback" in result.message
        assert "InvalidEmailBodyError" in result.message
        assert _feed_items(db_session) == []

        log = _only_log(db_session)
        assert log.status == "FAILED"
        assert "message=" in log.error_message
        assert log.subject_id is None

    def test_unknown_group_fails(self, db_session):
        result = _handler(db_session).handle_inbound_email(
            _email("subjectId=0F9000000000042\nmessage=anyone there?")
        )

        assert result.success is False
        assert "does not exist" in result.message
        assert _feed_items(db_session) == []

    def test_invalid_subject_id_fails(self, db_session):
        result = _handler(db_session).handle_inbound_email(
            _email("subjectId=not-an-id\nmessage=hi")
        )
        db_session.commit()

        assert result.success is False
        log = _only_log(db_session)
        assert log.status == "FAILED"
        assert log.subject_id is None

    def test_partial_post_is_rolled_back(self, db_session):
        class HalfwayPoster(FeedPosterPort):
            """Writes a feed item, then fails."""

            def post_feed_item(self, network_id, subject_id, text) -> PostedFeedItem:
                db_session.add(FeedItem(
                    parent_id=subject_id,
                    created_by_id=BOT_ID,
                    body=text,
                    message_segments=[],
                ))
                db_session.flush()
                raise RuntimeError("feed service unavailable")

        user_id = new_record_id(USER_KEY_PREFIX)
        result = _handler(db_session, poster=HalfwayPoster()).handle_inbound_email(
            _email(f"subjectId={user_id}\nmessage=hi")
        )
        db_session.commit()

        assert result.success is False
        assert result.message.startswith("feed service unavailable")
        assert _feed_items(db_session) == []
        assert _only_log(db_session).status == "FAILED"

    def test_failure_keeps_earlier_work_in_transaction(self, db_session, make_group):
        group = make_group(name="Untouched")
        group_id = group.id

        _handler(db_session).handle_inbound_email(_email("no markers at all"))
        db_session.commit()

        count = db_session.execute(select(func.count()).select_from(InboundEmailLog)).scalar()
        assert count == 1
        assert db_session.get(type(group), group_id) is not None
