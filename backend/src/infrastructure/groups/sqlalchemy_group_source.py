"""SQLAlchemy adapter for GroupSourcePort.

Reads collaboration groups straight from the table (bypassing ORM instances
that may still carry trigger-time state) and derives photo URLs.
"""

from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from domain.group_sync.models import GroupSnapshot
from domain.group_sync.ports import GroupSourcePort
from domain.records import GROUP_KEY_PREFIX, lookup_keys
from models.collaboration_group import CollaborationGroup

# Photo size suffixes
FULL_PHOTO = "F"
MEDIUM_PHOTO = "M"
SMALL_PHOTO = "T"
BANNER_PHOTO = "B"


def build_photo_url(base_url: str, photo_id: Optional[str], size: str) -> str:
    """Photo URL for a group; groups without a photo get the default group image.

    Examples:
        build_photo_url("https://x.example.com", "069000000000001AAA", "F")
            → 'https://x.example.com/profilephoto/069000000000001AAA/F'
        build_photo_url("https://x.example.com", None, "T")
            → 'https://x.example.com/profilephoto/0F9/T'
    """
    return f"{base_url.rstrip('/')}/profilephoto/{photo_id or GROUP_KEY_PREFIX}/{size}"


class SqlAlchemyGroupSource(GroupSourcePort):
    """Group source backed by the collaboration_group table.

    Args:
        session: Database session (the triggering transaction's session)
        photo_base_url: Base URL for derived photo URLs
    """

    def __init__(self, session: Session, photo_base_url: str):
        self.session = session
        self.photo_base_url = photo_base_url

    def fetch_groups(self, group_ids: Iterable[str]) -> list[GroupSnapshot]:
        keys = lookup_keys(group_ids)
        if not keys:
            return []

        table = CollaborationGroup.__table__
        # network_id is optional in the schema and not mirrored
        stmt = select(
            table.c.id,
            table.c.name,
            table.c.owner_id,
            table.c.description,
            table.c.group_email,
            table.c.member_count,
            table.c.collaboration_type,
            table.c.is_archived,
            table.c.is_broadcast,
            table.c.photo_id,
        ).where(table.c.id.in_(keys)).order_by(table.c.id)

        return [self._to_snapshot(row) for row in self.session.execute(stmt).mappings()]

    def list_group_ids(self, after_id: Optional[str], limit: int) -> list[str]:
        table = CollaborationGroup.__table__
        stmt = select(table.c.id).order_by(table.c.id).limit(limit)
        if after_id is not None:
            stmt = stmt.where(table.c.id > after_id)
        return list(self.session.execute(stmt).scalars())

    def _to_snapshot(self, row) -> GroupSnapshot:
        photo_id = row["photo_id"]
        return GroupSnapshot(
            group_id=row["id"],
            name=row["name"],
            owner_id=row["owner_id"],
            description=row["description"],
            email=row["group_email"],
            member_count=row["member_count"],
            full_photo_url=build_photo_url(self.photo_base_url, photo_id, FULL_PHOTO),
            medium_photo_url=build_photo_url(self.photo_base_url, photo_id, MEDIUM_PHOTO),
            small_photo_url=build_photo_url(self.photo_base_url, photo_id, SMALL_PHOTO),
            banner_photo_url=build_photo_url(self.photo_base_url, photo_id, BANNER_PHOTO),
            collaboration_type=row["collaboration_type"],
            is_archived=bool(row["is_archived"]),
            is_broadcast=bool(row["is_broadcast"]),
        )
