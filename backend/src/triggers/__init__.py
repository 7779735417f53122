"""Session-event triggers. Importing this package registers the listeners."""

from .collaboration_group import (
    GroupTriggerHandler,
    collect_group_changes,
    dispatch_group_changes,
    PENDING_CHANGES_KEY,
)

__all__ = [
    "GroupTriggerHandler",
    "collect_group_changes",
    "dispatch_group_changes",
    "PENDING_CHANGES_KEY",
]
