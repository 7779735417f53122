"""Feed domain module - posting text with mentions to user and group feeds"""

from .ports import FeedPosterPort, FeedPostError, PostedFeedItem
from .segments import (
    parse_message_segments,
    mentioned_ids,
    render_plain_text,
    TEXT_SEGMENT,
    MENTION_SEGMENT,
)

__all__ = [
    "FeedPosterPort",
    "FeedPostError",
    "PostedFeedItem",
    "parse_message_segments",
    "mentioned_ids",
    "render_plain_text",
    "TEXT_SEGMENT",
    "MENTION_SEGMENT",
]
