"""Groups module - API over the collaboration groups that feed the group sync"""

from .router import router
from .schemas import GroupCreate, GroupUpdate, GroupResponse

__all__ = [
    "router",
    "GroupCreate",
    "GroupUpdate",
    "GroupResponse",
]
