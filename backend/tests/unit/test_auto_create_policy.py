"""Unit tests for the auto-create policy and sync result counters"""

from types import SimpleNamespace

import pytest

from domain.group_sync import AutoCreatePolicy, GroupSyncResult
from models.collaboration_group import CollaborationType


class TestAutoCreatePolicy:
    def test_missing_settings_row_disables_everything(self):
        policy = AutoCreatePolicy.from_settings(None)
        for collaboration_type in CollaborationType:
            assert policy.allows(collaboration_type.value) is False

    @pytest.mark.parametrize("collaboration_type, flag", [
        ("Public", "allow_public_groups"),
        ("Private", "allow_private_groups"),
        ("Unlisted", "allow_unlisted_groups"),
    ])
    def test_each_type_follows_its_flag(self, collaboration_type, flag):
        row = SimpleNamespace(
            allow_public_groups=False,
            allow_private_groups=False,
            allow_unlisted_groups=False,
        )
        setattr(row, flag, True)
        policy = AutoCreatePolicy.from_settings(row)

        assert policy.allows(collaboration_type) is True
        others = {t.value for t in CollaborationType} - {collaboration_type}
        assert not any(policy.allows(other) for other in others)

    def test_unknown_type_never_allowed(self):
        policy = AutoCreatePolicy(allow_public=True, allow_private=True, allow_unlisted=True)
        assert policy.allows("Secret") is False
        assert policy.allows(None) is False


class TestGroupSyncResult:
    def test_merge_adds_counters(self):
        merged = GroupSyncResult(created=1, unchanged=2).merge(
            GroupSyncResult(created=3, deleted=1, skipped_inactive=4)
        )
        assert merged.as_dict() == {
            "created": 4,
            "updated": 0,
            "unchanged": 2,
            "skipped_inactive": 4,
            "skipped_by_policy": 0,
            "deleted": 1,
        }
