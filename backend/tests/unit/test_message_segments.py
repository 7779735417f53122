"""Unit tests for mention-aware message segments"""

from domain.feed import mentioned_ids, parse_message_segments, render_plain_text

USER_15 = "005000000000002"
USER_18 = "005000000000002AAA"


class TestParseMessageSegments:
    def test_plain_text_is_one_segment(self):
        assert parse_message_segments("Hello World") == [
            {"type": "Text", "text": "Hello World"},
        ]

    def test_mention_between_text(self):
        segments = parse_message_segments(f"Ping {{{USER_18}}} about it")
        assert segments == [
            {"type": "Text", "text": "Ping "},
            {"type": "Mention", "id": USER_18},
            {"type": "Text", "text": " about it"},
        ]

    def test_mention_ids_normalized_to_18(self):
        segments = parse_message_segments(f"{{{USER_15}}}")
        assert segments == [{"type": "Mention", "id": USER_18}]

    def test_invalid_checksum_kept_as_text(self):
        text = "see {005000000000002ZZZ} now"
        assert parse_message_segments(text) == [{"type": "Text", "text": text}]

    def test_non_id_braces_kept_as_text(self):
        assert parse_message_segments("{not an id}") == [
            {"type": "Text", "text": "{not an id}"},
        ]

    def test_empty_text(self):
        assert parse_message_segments("") == []


class TestHelpers:
    def test_mentioned_ids_deduplicated_in_order(self):
        segments = parse_message_segments(
            f"{{{USER_15}}} and {{0F9000000000001}} and {{{USER_18}}}"
        )
        assert mentioned_ids(segments) == [USER_18, "0F9000000000001CAA"]

    def test_render_plain_text(self):
        segments = parse_message_segments(f"Hi {{{USER_15}}}!")
        assert render_plain_text(segments) == f"Hi @{USER_18}!"
