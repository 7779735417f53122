"""Integration tests for the full resync (service and Celery task)"""

import pytest
from sqlalchemy import select

from config import get_settings
from domain.group_sync import GroupSyncService
from domain.records import to_15
from infrastructure.groups import SqlAlchemyGroupSource
from models.mirror_group import MirrorGroup
from workers.group_resync import resync_all_groups


def _mirrors(session) -> list[MirrorGroup]:
    session.expire_all()
    return session.execute(select(MirrorGroup).order_by(MirrorGroup.group_id)).scalars().all()


def _service(session) -> GroupSyncService:
    return GroupSyncService(
        session, SqlAlchemyGroupSource(session, get_settings().PHOTO_BASE_URL)
    )


class TestResyncAll:
    def test_creates_missing_mirrors_in_batches(self, db_session, set_policy, make_group):
        set_policy()
        group_ids = {make_group().id for _ in range(5)}
        assert _mirrors(db_session) == []

        set_policy(public=True)
        result = _service(db_session).resync_all(batch_size=2)

        assert result.created == 5
        assert {m.group_id for m in _mirrors(db_session)} == group_ids

    def test_second_run_changes_nothing(self, db_session, allow_all_groups, make_group):
        for _ in range(3):
            make_group()

        result = _service(db_session).resync_all(batch_size=2)

        assert result.unchanged == 3
        assert result.created == result.updated == result.deleted == 0

    def test_deletes_orphan_mirrors(self, db_session, allow_all_groups, make_group):
        kept = make_group()
        db_session.add(MirrorGroup(group_id="0F9000000000099", name="Orphan"))
        db_session.add(MirrorGroup(group_id="garbage", name="Broken key"))
        db_session.commit()

        result = _service(db_session).resync_all()

        assert result.deleted == 2
        assert [m.group_id for m in _mirrors(db_session)] == [kept.id]

    def test_keeps_15_char_mirror_of_existing_group(self, db_session, set_policy, make_group):
        set_policy()
        group = make_group()
        db_session.add(MirrorGroup(group_id=to_15(group.id), name=group.name))
        db_session.commit()

        result = _service(db_session).resync_all()

        assert result.deleted == 0
        assert result.updated == 1
        assert len(_mirrors(db_session)) == 1

    def test_rejects_invalid_batch_size(self, db_session):
        with pytest.raises(ValueError):
            _service(db_session).resync_all(batch_size=0)


class TestResyncTask:
    def test_task_runs_eagerly_and_commits(self, db_session, set_policy, make_group):
        set_policy()
        make_group()
        make_group()
        set_policy(unlisted=True, public=True)
        # Hand the shared in-memory database over to the task's own session
        db_session.commit()

        outcome = resync_all_groups.apply(kwargs={"batch_size": 1}).get()

        assert outcome["status"] == "completed"
        assert outcome["created"] == 2
        assert len(_mirrors(db_session)) == 2

    def test_task_name(self):
        assert resync_all_groups.name == "group_sync.resync_all"
