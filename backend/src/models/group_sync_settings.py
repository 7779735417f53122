"""GroupSyncSettings model - Singleton auto-create configuration.

A single row (id=1) holds the org-wide defaults. When the row is absent
every flag is treated as False.
"""

from sqlalchemy import Column, Integer, Boolean, DateTime, CheckConstraint, func

from .base import Base, utcnow

SINGLETON_ID = 1


class GroupSyncSettings(Base):
    """Org-wide switches controlling automatic mirror creation per group type."""
    __tablename__ = "group_sync_settings"

    id = Column(
        Integer,
        CheckConstraint(f"id = {SINGLETON_ID}", name="ck_group_sync_settings_singleton"),
        primary_key=True,
        default=SINGLETON_ID,
    )
    allow_public_groups = Column(Boolean, nullable=False, default=False)
    allow_private_groups = Column(Boolean, nullable=False, default=False)
    allow_unlisted_groups = Column(Boolean, nullable=False, default=False)

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    @classmethod
    def get_org_defaults(cls, session) -> "GroupSyncSettings | None":
        """Return the singleton settings row, or None when not configured."""
        return session.get(cls, SINGLETON_ID)

    def __repr__(self):
        return (
            f"<GroupSyncSettings(public={self.allow_public_groups}, "
            f"private={self.allow_private_groups}, "
            f"unlisted={self.allow_unlisted_groups})>"
        )
