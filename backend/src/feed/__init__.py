"""Feed module - read access to posted feed items"""

from .router import router
from .schemas import FeedItemResponse

__all__ = ["router", "FeedItemResponse"]
