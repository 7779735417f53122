"""CollaborationGroup model - Source groups mirrored by the group sync.

Writes to this table fire the group sync triggers (see triggers/).
Photo URLs are not stored here; they are derived when groups are fetched
for synchronization.
"""

from enum import Enum
from sqlalchemy import (
    Column, String, Text, Integer, Boolean, DateTime, CheckConstraint, func
)
from sqlalchemy.orm import validates

from domain.records import GROUP_KEY_PREFIX, is_valid_id, new_record_id, to_18
from .base import Base, utcnow


class CollaborationType(str, Enum):
    """Group visibility type.

    PUBLIC: Anyone can see and join
    PRIVATE: Members only, join on approval
    UNLISTED: Hidden from non-members
    """
    PUBLIC = "Public"
    PRIVATE = "Private"
    UNLISTED = "Unlisted"


def _new_group_id() -> str:
    return new_record_id(GROUP_KEY_PREFIX)


class CollaborationGroup(Base):
    """
    CollaborationGroup model - A chat/collaboration group.

    id is an 18-character record id with key prefix 0F9.
    network_id is optional: deployments without communities may not have
    the column at all, so readers outside the ORM introspect for it.
    """
    __tablename__ = "collaboration_group"

    id = Column(String(18), primary_key=True, default=_new_group_id)
    name = Column(Text, nullable=False, unique=True)
    owner_id = Column(String(18), nullable=False)
    description = Column(Text, nullable=True)
    group_email = Column(Text, nullable=True)
    member_count = Column(Integer, nullable=False, default=1)
    collaboration_type = Column(
        Text,
        CheckConstraint(
            "collaboration_type IN ('Public', 'Private', 'Unlisted')",
            name="ck_collaboration_group_type",
        ),
        nullable=False,
        default=CollaborationType.PUBLIC.value,
    )
    is_archived = Column(Boolean, nullable=False, default=False)
    is_broadcast = Column(Boolean, nullable=False, default=False)
    photo_id = Column(String(18), nullable=True)
    network_id = Column(String(18), nullable=True)

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

    @validates('collaboration_type')
    def validate_collaboration_type(self, key, value):
        """Accept enum members or their string values."""
        if isinstance(value, CollaborationType):
            return value.value
        try:
            return CollaborationType(value).value
        except ValueError:
            raise ValueError(
                f"Invalid collaboration_type: {value}. "
                f"Must be one of: {', '.join(t.value for t in CollaborationType)}"
            )

    @validates('owner_id', 'photo_id', 'network_id')
    def validate_record_id(self, key, value):
        """Store referenced ids in their 18-character form."""
        if value is None and key != 'owner_id':
            return None
        if not is_valid_id(value):
            raise ValueError(f"Invalid {key}: {value!r}")
        return to_18(value)

    @validates('name')
    def validate_name(self, key, value):
        if not value or not value.strip():
            raise ValueError("Group name cannot be empty")
        if len(value) > 40:
            raise ValueError("Group name cannot exceed 40 characters")
        return value.strip()

    def __repr__(self):
        return (
            f"<CollaborationGroup(id={self.id}, name='{self.name}', "
            f"type={self.collaboration_type})>"
        )
