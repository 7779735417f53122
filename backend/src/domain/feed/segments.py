"""Message segment parsing for feed posts.

A post body is plain text in which `{<record id>}` tokens mention a user or
group, e.g. "Ping {005000000000001AAA} about the launch". Parsing turns the
body into an ordered list of segments:

    [{"type": "Text", "text": "Ping "},
     {"type": "Mention", "id": "005000000000001AAA"},
     {"type": "Text", "text": " about the launch"}]

Braces that do not wrap a valid record id are kept as literal text.
"""

import re

from domain.records import is_valid_id, to_18

_MENTION_PATTERN = re.compile(r"\{([a-zA-Z0-9]{15}(?:[a-zA-Z0-9]{3})?)\}")

TEXT_SEGMENT = "Text"
MENTION_SEGMENT = "Mention"


def parse_message_segments(text: str) -> list[dict]:
    """Split text into Text and Mention segments.

    Mention ids are normalized to the 18-character form. Adjacent text is
    merged so that rejected mention tokens do not fragment the output.
    """
    segments: list[dict] = []

    def add_text(chunk: str) -> None:
        if not chunk:
            return
        if segments and segments[-1]["type"] == TEXT_SEGMENT:
            segments[-1]["text"] += chunk
        else:
            segments.append({"type": TEXT_SEGMENT, "text": chunk})

    position = 0
    for match in _MENTION_PATTERN.finditer(text):
        add_text(text[position:match.start()])
        record_id = match.group(1)
        if is_valid_id(record_id):
            segments.append({"type": MENTION_SEGMENT, "id": to_18(record_id)})
        else:
            add_text(match.group(0))
        position = match.end()
    add_text(text[position:])

    return segments


def mentioned_ids(segments: list[dict]) -> list[str]:
    """Ids of all mention segments in order of first appearance."""
    seen: list[str] = []
    for segment in segments:
        if segment["type"] == MENTION_SEGMENT and segment["id"] not in seen:
            seen.append(segment["id"])
    return seen


def render_plain_text(segments: list[dict]) -> str:
    """Plain-text body: mentions are rendered as @<id>."""
    parts = []
    for segment in segments:
        if segment["type"] == MENTION_SEGMENT:
            parts.append(f"@{segment['id']}")
        else:
            parts.append(segment["text"])
    return "".join(parts)
