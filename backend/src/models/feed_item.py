"""FeedItem model - Posts in a subject's chat feed."""

from sqlalchemy import Column, String, Text, DateTime, Index, func

from domain.records import FEED_ITEM_KEY_PREFIX, new_record_id
from .base import Base, PortableJSONB, utcnow


def _new_feed_item_id() -> str:
    return new_record_id(FEED_ITEM_KEY_PREFIX)


class FeedItem(Base):
    """
    FeedItem model - A text post on a user or group feed.

    message_segments keeps the structured body (text and mention segments)
    as posted; body is its plain-text rendering.
    network_id NULL means the post belongs to the internal org.
    """
    __tablename__ = "feed_item"

    id = Column(String(18), primary_key=True, default=_new_feed_item_id)
    parent_id = Column(String(18), nullable=False)
    network_id = Column(String(18), nullable=True)
    created_by_id = Column(String(18), nullable=False)
    type = Column(Text, nullable=False, default="TextPost")
    body = Column(Text, nullable=False)
    message_segments = Column(PortableJSONB, nullable=False, default=list)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    __table_args__ = (
        Index('idx_feed_item_parent_created', 'parent_id', 'created_at'),
    )

    def __repr__(self):
        return (
            f"<FeedItem(id={self.id}, parent_id={self.parent_id}, "
            f"network_id={self.network_id})>"
        )
