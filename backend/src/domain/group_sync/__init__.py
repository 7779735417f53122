"""Group sync domain module - mirroring collaboration groups into mirror_group"""

from .models import AutoCreatePolicy, GroupSnapshot, GroupSyncResult
from .ports import GroupSourcePort
from .service import GroupSyncService

__all__ = [
    "AutoCreatePolicy",
    "GroupSnapshot",
    "GroupSyncResult",
    "GroupSourcePort",
    "GroupSyncService",
]
