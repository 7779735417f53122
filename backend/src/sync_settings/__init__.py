"""Group sync settings module - the org-wide auto-create policy"""

from .router import router
from .schemas import GroupSyncSettingsResponse, GroupSyncSettingsUpdate

__all__ = [
    "router",
    "GroupSyncSettingsResponse",
    "GroupSyncSettingsUpdate",
]
