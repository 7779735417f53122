"""MirrorGroup model - Cached projection of a collaboration group.

Rows are maintained by the group sync: created on first sync when the
auto-create policy allows it, overwritten on every sync while active,
deleted when the source group is deleted.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Index, and_, func, or_

from domain.records import lookup_keys
from .base import Base, utcnow


# Fields copied from the source group on every sync of an active mirror.
TRACKED_FIELDS = (
    "name",
    "owner_id",
    "description",
    "email",
    "member_count",
    "full_photo_url",
    "medium_photo_url",
    "small_photo_url",
    "banner_photo_url",
    "collaboration_type",
    "is_archived",
    "is_broadcast",
)


class MirrorGroup(Base):
    """
    MirrorGroup model - One row per mirrored collaboration group.

    group_id is the external key. It may hold either the 15- or the
    18-character form of the source group id; lookups always match both.
    At most one row exists per distinct group (unique group_id, and the
    sync never inserts a second row for an already-mirrored group).

    An inactive row (active=False) is frozen: the sync neither updates
    nor reactivates it.
    """
    __tablename__ = "mirror_group"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # External key
    group_id = Column(String(18), nullable=False, unique=True)
    active = Column(Boolean, nullable=False, default=True)

    # Tracked fields
    name = Column(Text, nullable=False)
    owner_id = Column(String(18), nullable=True)
    description = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    member_count = Column(Integer, nullable=True)
    full_photo_url = Column(Text, nullable=True)
    medium_photo_url = Column(Text, nullable=True)
    small_photo_url = Column(Text, nullable=True)
    banner_photo_url = Column(Text, nullable=True)
    collaboration_type = Column(Text, nullable=True)
    is_archived = Column(Boolean, nullable=False, default=False)
    is_broadcast = Column(Boolean, nullable=False, default=False)

    last_synced_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    __table_args__ = (
        Index('idx_mirror_group_active', 'active'),
    )

    @classmethod
    def group_id_matches(cls, group_ids):
        """Condition matching mirrors of the given groups under any id form.

        The checksum suffix of an 18-character id is case-insensitive, so
        18-character rows are matched on their 15-character prefix.
        """
        id15s = {key for key in lookup_keys(group_ids) if len(key) == 15}
        return or_(
            cls.group_id.in_(id15s),
            and_(
                func.length(cls.group_id) == 18,
                func.substr(cls.group_id, 1, 15).in_(id15s),
            ),
        )

    def __repr__(self):
        return (
            f"<MirrorGroup(id={self.id}, group_id={self.group_id}, "
            f"name='{self.name}', active={self.active})>"
        )
