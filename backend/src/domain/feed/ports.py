"""
FeedPosterPort - Port interface for posting into a chat feed

The inbound email handler depends only on this Port; the concrete adapter
decides where feed items live.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PostedFeedItem:
    """
    Standard return structure for FeedPosterPort.post_feed_item().

    Attributes:
        id: Id of the created feed item
        parent_id: Subject the item was posted to (18-character form)
        network_id: Network of the post, None for the internal org
        body: Plain-text rendering of the post
        mentioned_ids: Ids mentioned in the post
    """
    id: str
    parent_id: str
    network_id: Optional[str]
    body: str
    mentioned_ids: list[str] = field(default_factory=list)


class FeedPostError(Exception):
    """
    Raised by feed posters when a post cannot be created
    (invalid subject, unknown group, empty message).
    """
    pass


class FeedPosterPort(ABC):
    """
    Abstract interface for feed posting.

    Implementations:
    - DatabaseFeedPoster: stores posts in the feed_item table
    """

    @abstractmethod
    def post_feed_item(
        self,
        network_id: Optional[str],
        subject_id: str,
        text: str,
    ) -> PostedFeedItem:
        """
        Post text to the feed of subject_id, parsing `{id}` mentions.

        Args:
            network_id: Network to post in, None for the internal org
            subject_id: User or group whose feed receives the post
            text: Message text with optional mention tokens

        Returns:
            PostedFeedItem describing the created item

        Raises:
            FeedPostError: If the post is rejected
        """
        pass
