"""Collaboration-group triggers.

Hooks SQLAlchemy session events so that every insert, update and delete of a
CollaborationGroup runs the group sync in the same transaction:

- after_flush: collect ids of flushed groups into session.info
  (new/dirty/deleted still show the pre-flush state at this point)
- after_flush_postexec: run the sync handler for the collected ids

If the sync fails the exception propagates out of flush() and the caller's
transaction is rolled back, group write included.
"""

import logging
from typing import Iterable

from sqlalchemy import event
from sqlalchemy.orm import Session

from config import get_settings
from domain.group_sync import GroupSyncResult, GroupSyncService
from infrastructure.groups import SqlAlchemyGroupSource
from models.collaboration_group import CollaborationGroup

logger = logging.getLogger(__name__)

PENDING_CHANGES_KEY = "collaboration_group_changes"


class GroupTriggerHandler:
    """Dispatches collaboration-group trigger events to the group sync."""

    def __init__(self, session: Session, photo_base_url: str):
        self.session = session
        self.service = GroupSyncService(
            session,
            SqlAlchemyGroupSource(session, photo_base_url),
        )

    def on_after_upsert(self, group_ids: Iterable[str]) -> GroupSyncResult:
        """After insert/after update: mirror the groups."""
        return self.service.sync_groups(group_ids)

    def on_after_delete(self, group_ids: Iterable[str]) -> GroupSyncResult:
        """After delete: remove their mirrors."""
        return self.service.delete_mirrors(group_ids)


def _pending_changes(session: Session) -> dict[str, list[str]]:
    return session.info.setdefault(
        PENDING_CHANGES_KEY, {"upserted": [], "deleted": []}
    )


@event.listens_for(Session, "after_flush")
def collect_group_changes(session, flush_context):
    """Record which groups were inserted, modified or deleted by this flush."""
    if not get_settings().GROUP_SYNC_TRIGGERS_ENABLED:
        return

    upserted = [
        instance.id for instance in session.new
        if isinstance(instance, CollaborationGroup)
    ]
    upserted += [
        instance.id for instance in session.dirty
        if isinstance(instance, CollaborationGroup)
        and session.is_modified(instance, include_collections=False)
    ]
    deleted = [
        instance.id for instance in session.deleted
        if isinstance(instance, CollaborationGroup)
    ]
    if not upserted and not deleted:
        return

    pending = _pending_changes(session)
    pending["upserted"].extend(upserted)
    pending["deleted"].extend(deleted)


@event.listens_for(Session, "after_flush_postexec")
def dispatch_group_changes(session, flush_context):
    """Run the group sync for the changes collected by collect_group_changes."""
    pending = session.info.pop(PENDING_CHANGES_KEY, None)
    if not pending:
        return

    handler = GroupTriggerHandler(session, get_settings().PHOTO_BASE_URL)
    if pending["deleted"]:
        logger.debug(f"Group delete trigger for {len(pending['deleted'])} groups")
        handler.on_after_delete(pending["deleted"])
    if pending["upserted"]:
        logger.debug(f"Group upsert trigger for {len(pending['upserted'])} groups")
        handler.on_after_upsert(pending["upserted"])
