"""Mirror groups module - read and (de)activate mirror records, trigger resyncs"""

from .router import router
from .schemas import MirrorGroupResponse, MirrorGroupUpdate, ResyncRequest, ResyncResponse

__all__ = [
    "router",
    "MirrorGroupResponse",
    "MirrorGroupUpdate",
    "ResyncRequest",
    "ResyncResponse",
]
