"""SQLAlchemy Models for GroupMirror"""

from .base import Base
from .collaboration_group import CollaborationGroup, CollaborationType
from .mirror_group import MirrorGroup, TRACKED_FIELDS
from .group_sync_settings import GroupSyncSettings
from .feed_item import FeedItem
from .inbound_email_log import InboundEmailLog, InboundEmailStatus

__all__ = [
    "Base",
    "CollaborationGroup",
    "CollaborationType",
    "MirrorGroup",
    "TRACKED_FIELDS",
    "GroupSyncSettings",
    "FeedItem",
    "InboundEmailLog",
    "InboundEmailStatus",
]
