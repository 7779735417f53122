"""
GroupSourcePort - Port interface for reading authoritative group data

The sync never trusts the values carried by a trigger payload; it always
re-reads groups through this port. Following hexagonal architecture, the
sync service depends only on this Port, not on the concrete adapter.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from .models import GroupSnapshot


class GroupSourcePort(ABC):
    """
    Abstract interface for the collaboration-group source.

    Implementations:
    - SqlAlchemyGroupSource: reads the collaboration_group table
    """

    @abstractmethod
    def fetch_groups(self, group_ids: Iterable[str]) -> list[GroupSnapshot]:
        """
        Fetch current values for the given groups.

        Args:
            group_ids: Group ids in 15- or 18-character form

        Returns:
            Snapshots of the groups that still exist (missing ids are
            silently absent from the result)
        """
        pass

    @abstractmethod
    def list_group_ids(self, after_id: Optional[str], limit: int) -> list[str]:
        """
        Page through all group ids in ascending order.

        Args:
            after_id: Last id of the previous page, None for the first page
            limit: Page size

        Returns:
            Up to limit group ids greater than after_id
        """
        pass
