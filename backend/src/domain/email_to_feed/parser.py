"""Email body parsing for the feed bot.

The body carries two markers:

    subjectId=<user or group id>
    message=<text to post>

subjectId captures the rest of its line; message captures the rest of the
body, so multi-line messages are posted as written. Both values are trimmed.
"""

import html
import re
from typing import Optional

from .errors import InvalidEmailBodyError
from .models import FeedRequest, InboundEmail

SUBJECT_ID_PATTERN = re.compile(r"subjectId=(.*)")
MESSAGE_PATTERN = re.compile(r"message=(.*)", re.DOTALL)

_LINE_BREAK_TAGS = re.compile(r"<\s*(br\s*/?|/p|/div|/li|/tr)\s*>", re.IGNORECASE)
_TAGS = re.compile(r"<[^>]+>")
_STYLE_BLOCKS = re.compile(r"<(style|script)[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)


def _capture(pattern: re.Pattern, body: str) -> Optional[str]:
    match = pattern.search(body)
    if not match:
        return None
    return match.group(1).strip()


def parse_email_body(body: Optional[str]) -> FeedRequest:
    """Extract subjectId and message from an email body.

    Raises:
        InvalidEmailBodyError: If either value is missing or blank
    """
    body = body or ""
    subject_id = _capture(SUBJECT_ID_PATTERN, body)
    message = _capture(MESSAGE_PATTERN, body)

    if not subject_id:
        raise InvalidEmailBodyError(
            "Email body must contain a non-blank 'subjectId=' line"
        )
    if not message:
        raise InvalidEmailBodyError(
            "Email body must contain a non-blank 'message=' value"
        )
    return FeedRequest(subject_id=subject_id, message=message)


def html_to_text(html_body: str) -> str:
    """Rough text rendering of an HTML body (line breaks kept, tags dropped)."""
    text = _STYLE_BLOCKS.sub("", html_body)
    text = _LINE_BREAK_TAGS.sub("\n", text)
    text = _TAGS.sub("", text)
    return html.unescape(text)


def parse_inbound_email(email: InboundEmail) -> FeedRequest:
    """Parse the plain text body, falling back to the HTML body when it is empty."""
    body = email.plain_text_body
    if (not body or not body.strip()) and email.html_body:
        body = html_to_text(email.html_body)
    return parse_email_body(body)
