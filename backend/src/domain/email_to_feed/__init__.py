"""Email-to-feed domain module - inbound emails posted to feeds by the bot user"""

from .errors import EmailToFeedError, InvalidEmailBodyError
from .models import FeedRequest, InboundEmail, InboundEmailResult, InboundEnvelope
from .network import group_network_column_available, resolve_network_id
from .parser import html_to_text, parse_email_body, parse_inbound_email
from .service import EmailToFeedHandler

__all__ = [
    "EmailToFeedError",
    "InvalidEmailBodyError",
    "FeedRequest",
    "InboundEmail",
    "InboundEmailResult",
    "InboundEnvelope",
    "group_network_column_available",
    "resolve_network_id",
    "html_to_text",
    "parse_email_body",
    "parse_inbound_email",
    "EmailToFeedHandler",
]
