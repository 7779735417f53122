"""Group sync service - keeps mirror_group rows in line with collaboration groups.

Invoked by the collaboration-group triggers (insert/update/delete) inside the
triggering transaction, and by the full resync job. Database errors are not
handled here: they propagate so that the surrounding transaction is rolled
back as a whole.
"""

import logging
import time
from typing import Iterable, Optional

from sqlalchemy import select, update, delete, bindparam, true
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from domain.records import is_valid_id, lookup_keys, to_18
from models.base import utcnow
from models.group_sync_settings import GroupSyncSettings
from models.mirror_group import MirrorGroup, TRACKED_FIELDS
from observability.metrics import (
    mirror_records_written_total,
    group_sync_skipped_total,
    group_sync_duration_seconds,
)
from .models import AutoCreatePolicy, GroupSyncResult
from .ports import GroupSourcePort

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

# Columns rewritten by both the upsert and the plain update batches
_WRITTEN_COLUMNS = TRACKED_FIELDS + ("last_synced_at", "updated_at")


class GroupSyncService:
    """Mirror collaboration groups into the mirror_group table.

    Args:
        session: Session of the triggering transaction
        group_source: Port used to re-fetch authoritative group values
        policy: Auto-create policy; read from group_sync_settings when omitted
    """

    def __init__(
        self,
        session: Session,
        group_source: GroupSourcePort,
        policy: Optional[AutoCreatePolicy] = None,
    ):
        self.session = session
        self.group_source = group_source
        self._policy = policy

    @property
    def policy(self) -> AutoCreatePolicy:
        if self._policy is None:
            self._policy = AutoCreatePolicy.from_settings(
                GroupSyncSettings.get_org_defaults(self.session)
            )
        return self._policy

    def sync_groups(self, group_ids: Iterable[str]) -> GroupSyncResult:
        """Create or refresh mirrors for groups that were inserted or updated.

        Steps:
        1. Re-fetch the groups through the source port
        2. Find existing mirrors by both id forms
        3. No mirror + policy allows the group's type → new active mirror
           Active mirror → overwrite tracked fields (skipped when nothing changed)
           Inactive mirror → left untouched
        4. Write new mirrors as an upsert on group_id, existing ones as a
           plain update by primary key
        """
        started = time.perf_counter()
        result = GroupSyncResult()

        snapshots = self.group_source.fetch_groups(group_ids)
        if not snapshots:
            return result

        mirrors = self._find_mirrors(snapshot.group_id for snapshot in snapshots)
        now = utcnow()
        upserts: list[dict] = []
        updates: list[dict] = []

        for snapshot in snapshots:
            group_key = to_18(snapshot.group_id)
            mirror = mirrors.get(group_key)
            values = snapshot.tracked_values()

            if mirror is None:
                if not self.policy.allows(snapshot.collaboration_type):
                    result.skipped_by_policy += 1
                    continue
                upserts.append({
                    "group_id": group_key,
                    "active": True,
                    **values,
                    "last_synced_at": now,
                    "created_at": now,
                    "updated_at": now,
                })
            elif not mirror["active"]:
                result.skipped_inactive += 1
            elif all(mirror[field] == value for field, value in values.items()):
                result.unchanged += 1
            else:
                updates.append({
                    "b_id": mirror["id"],
                    **values,
                    "last_synced_at": now,
                    "updated_at": now,
                })

        created = self._write_upserts(upserts)
        self._write_updates(updates)
        # Rows the upsert skipped hit a mirror deactivated since the lookup
        result.skipped_inactive += len(upserts) - created
        result.created = created
        result.updated = len(updates)

        self._record_metrics(result)
        group_sync_duration_seconds.labels(trigger="upsert").observe(
            time.perf_counter() - started
        )
        logger.info(
            f"Group sync: {result.created} created, {result.updated} updated, "
            f"{result.unchanged} unchanged, {result.skipped_inactive} inactive, "
            f"{result.skipped_by_policy} not allowed by policy",
            extra={"sync_result": result.as_dict()},
        )
        return result

    def delete_mirrors(self, group_ids: Iterable[str]) -> GroupSyncResult:
        """Delete every mirror whose group_id matches a deleted group (both id forms)."""
        started = time.perf_counter()
        keys = lookup_keys(group_ids)
        result = GroupSyncResult()
        if not keys:
            return result

        table = MirrorGroup.__table__
        outcome = self.session.execute(
            delete(table).where(MirrorGroup.group_id_matches(keys))
        )
        result.deleted = outcome.rowcount or 0

        self._record_metrics(result)
        group_sync_duration_seconds.labels(trigger="delete").observe(
            time.perf_counter() - started
        )
        logger.info(f"Group sync: {result.deleted} mirror records deleted")
        return result

    def resync_all(self, batch_size: int = 200) -> GroupSyncResult:
        """Sync every group in batches, then delete mirrors of vanished groups."""
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")

        started = time.perf_counter()
        total = GroupSyncResult()
        seen: set[str] = set()
        after_id = None

        while True:
            batch = self.group_source.list_group_ids(after_id, batch_size)
            if not batch:
                break
            total = total.merge(self.sync_groups(batch))
            seen.update(to_18(group_id) for group_id in batch)
            after_id = batch[-1]

        table = MirrorGroup.__table__
        orphan_ids = [
            row.id
            for row in self.session.execute(select(table.c.id, table.c.group_id))
            if not is_valid_id(row.group_id) or to_18(row.group_id) not in seen
        ]
        for start in range(0, len(orphan_ids), batch_size):
            chunk = orphan_ids[start:start + batch_size]
            outcome = self.session.execute(delete(table).where(table.c.id.in_(chunk)))
            total.deleted += outcome.rowcount or 0

        if orphan_ids:
            mirror_records_written_total.labels(operation="deleted").inc(len(orphan_ids))
        group_sync_duration_seconds.labels(trigger="resync").observe(
            time.perf_counter() - started
        )
        logger.info(
            f"Full group resync finished: {len(seen)} groups scanned",
            extra={"sync_result": total.as_dict()},
        )
        return total

    def _find_mirrors(self, group_ids: Iterable[str]) -> dict[str, dict]:
        """Existing mirror rows keyed by the 18-character group id.

        When a group is mirrored under both id forms, the active row wins.
        """
        keys = lookup_keys(group_ids)
        if not keys:
            return {}

        table = MirrorGroup.__table__
        rows = self.session.execute(
            select(table).where(MirrorGroup.group_id_matches(keys)).order_by(table.c.id)
        ).mappings()

        mirrors: dict[str, dict] = {}
        for row in rows:
            group_key = to_18(row["group_id"])
            current = mirrors.get(group_key)
            if current is None or (row["active"] and not current["active"]):
                mirrors[group_key] = dict(row)
        return mirrors

    def _write_upserts(self, rows: list[dict]) -> int:
        """Insert new mirrors; on a group_id conflict refresh the active row instead.

        Returns the number of rows written. Conflicts with an inactive row
        write nothing.
        """
        if not rows:
            return 0

        dialect_name = self.session.get_bind().dialect.name
        try:
            insert = _UPSERT_INSERTS[dialect_name]
        except KeyError:
            raise NotImplementedError(
                f"Mirror upsert is not supported on dialect '{dialect_name}'"
            )

        table = MirrorGroup.__table__
        stmt = insert(table)
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.group_id],
            set_={column: stmt.excluded[column] for column in _WRITTEN_COLUMNS},
            where=table.c.active == true(),
        ).returning(table.c.id)
        return len(self.session.execute(stmt, rows).all())

    def _write_updates(self, rows: list[dict]) -> None:
        if not rows:
            return
        table = MirrorGroup.__table__
        self.session.execute(
            update(table).where(table.c.id == bindparam("b_id")),
            rows,
        )

    @staticmethod
    def _record_metrics(result: GroupSyncResult) -> None:
        for operation in ("created", "updated", "deleted"):
            count = getattr(result, operation)
            if count:
                mirror_records_written_total.labels(operation=operation).inc(count)
        for reason, count in (
            ("inactive", result.skipped_inactive),
            ("policy", result.skipped_by_policy),
            ("unchanged", result.unchanged),
        ):
            if count:
                group_sync_skipped_total.labels(reason=reason).inc(count)

