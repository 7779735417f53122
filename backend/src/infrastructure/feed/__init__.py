"""Feed poster adapters."""

from .database_feed_poster import DatabaseFeedPoster

__all__ = ["DatabaseFeedPoster"]
