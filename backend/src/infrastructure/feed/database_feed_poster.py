"""FeedPosterPort adapter storing posts in the feed_item table."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from domain.feed import (
    FeedPosterPort,
    FeedPostError,
    PostedFeedItem,
    parse_message_segments,
    mentioned_ids,
    render_plain_text,
)
from domain.records import GROUP_KEY_PREFIX, is_valid_id, key_prefix, to_18
from models.collaboration_group import CollaborationGroup
from models.feed_item import FeedItem
from observability.metrics import feed_items_posted_total

logger = logging.getLogger(__name__)


class DatabaseFeedPoster(FeedPosterPort):
    """Creates FeedItem rows on behalf of a fixed author.

    Args:
        session: Database session (flushes, never commits)
        author_id: User id recorded as created_by_id (the bot identity)
    """

    def __init__(self, session: Session, author_id: str):
        if not is_valid_id(author_id):
            raise ValueError(f"Invalid author id: {author_id!r}")
        self.session = session
        self.author_id = to_18(author_id)

    def post_feed_item(
        self,
        network_id: Optional[str],
        subject_id: str,
        text: str,
    ) -> PostedFeedItem:
        if not is_valid_id(subject_id):
            raise FeedPostError(f"Invalid subject id: {subject_id!r}")
        if network_id is not None and not is_valid_id(network_id):
            raise FeedPostError(f"Invalid network id: {network_id!r}")
        if not text or not text.strip():
            raise FeedPostError("Feed item text cannot be empty")

        parent_id = to_18(subject_id)
        if key_prefix(parent_id) == GROUP_KEY_PREFIX:
            if self.session.get(CollaborationGroup, parent_id) is None:
                raise FeedPostError(f"Group {parent_id} does not exist")

        segments = parse_message_segments(text)
        feed_item = FeedItem(
            parent_id=parent_id,
            network_id=to_18(network_id) if network_id else None,
            created_by_id=self.author_id,
            type="TextPost",
            body=render_plain_text(segments),
            message_segments=segments,
        )
        self.session.add(feed_item)
        self.session.flush()

        mentions = mentioned_ids(segments)
        feed_items_posted_total.labels(
            has_mentions="true" if mentions else "false"
        ).inc()
        logger.info(
            f"Posted feed item {feed_item.id} to {parent_id} "
            f"(network={feed_item.network_id}, mentions={len(mentions)})"
        )

        return PostedFeedItem(
            id=feed_item.id,
            parent_id=parent_id,
            network_id=feed_item.network_id,
            body=feed_item.body,
            mentioned_ids=mentions,
        )
