"""Domain models for group synchronization."""

from dataclasses import dataclass, asdict
from typing import Any, Optional

from models.collaboration_group import CollaborationType
from models.mirror_group import TRACKED_FIELDS


@dataclass(frozen=True)
class GroupSnapshot:
    """Authoritative field values of a collaboration group at sync time.

    Includes derived fields (photo URLs) that are not part of the stored
    group row.
    """
    group_id: str
    name: str
    owner_id: Optional[str]
    description: Optional[str]
    email: Optional[str]
    member_count: Optional[int]
    full_photo_url: Optional[str]
    medium_photo_url: Optional[str]
    small_photo_url: Optional[str]
    banner_photo_url: Optional[str]
    collaboration_type: Optional[str]
    is_archived: bool = False
    is_broadcast: bool = False

    def tracked_values(self) -> dict[str, Any]:
        """Values for every mirror field the sync overwrites."""
        values = asdict(self)
        return {field: values[field] for field in TRACKED_FIELDS}


@dataclass(frozen=True)
class AutoCreatePolicy:
    """Which group visibility types get a mirror record created automatically."""
    allow_public: bool = False
    allow_private: bool = False
    allow_unlisted: bool = False

    @classmethod
    def from_settings(cls, settings_row) -> "AutoCreatePolicy":
        """Build the policy from the settings row; a missing row disables everything."""
        if settings_row is None:
            return cls()
        return cls(
            allow_public=bool(settings_row.allow_public_groups),
            allow_private=bool(settings_row.allow_private_groups),
            allow_unlisted=bool(settings_row.allow_unlisted_groups),
        )

    def allows(self, collaboration_type: Optional[str]) -> bool:
        if collaboration_type == CollaborationType.PUBLIC.value:
            return self.allow_public
        if collaboration_type == CollaborationType.PRIVATE.value:
            return self.allow_private
        if collaboration_type == CollaborationType.UNLISTED.value:
            return self.allow_unlisted
        return False


@dataclass
class GroupSyncResult:
    """Outcome counters of a sync or delete run."""
    created: int = 0
    updated: int = 0
    unchanged: int = 0
    skipped_inactive: int = 0
    skipped_by_policy: int = 0
    deleted: int = 0

    def merge(self, other: "GroupSyncResult") -> "GroupSyncResult":
        return GroupSyncResult(
            created=self.created + other.created,
            updated=self.updated + other.updated,
            unchanged=self.unchanged + other.unchanged,
            skipped_inactive=self.skipped_inactive + other.skipped_inactive,
            skipped_by_policy=self.skipped_by_policy + other.skipped_by_policy,
            deleted=self.deleted + other.deleted,
        )

    def as_dict(self) -> dict[str, int]:
        return asdict(self)
