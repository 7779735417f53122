"""Inbound email module - HTTP entry point of the feed bot"""

from .router import router
from .schemas import InboundEmailLogResponse, InboundEmailRequest, InboundEmailResultResponse

__all__ = [
    "router",
    "InboundEmailLogResponse",
    "InboundEmailRequest",
    "InboundEmailResultResponse",
]
