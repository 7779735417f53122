"""Unit tests for the InboundEmailLog status state machine"""

import pytest

from models.inbound_email_log import (
    ALLOWED_TRANSITIONS,
    InboundEmailLog,
    InboundEmailStatus,
)


class TestInboundEmailStatus:
    def test_enum_values(self):
        assert InboundEmailStatus.RECEIVED.value == "RECEIVED"
        assert InboundEmailStatus.POSTED.value == "POSTED"
        assert InboundEmailStatus.FAILED.value == "FAILED"

    def test_terminal_states(self):
        assert ALLOWED_TRANSITIONS[InboundEmailStatus.POSTED] == []
        assert ALLOWED_TRANSITIONS[InboundEmailStatus.FAILED] == []

    def test_received_to_posted(self):
        log = InboundEmailLog(status=InboundEmailStatus.RECEIVED)
        log.status = InboundEmailStatus.POSTED
        assert log.status == "POSTED"

    def test_received_to_failed_accepts_strings(self):
        log = InboundEmailLog(status="RECEIVED")
        log.status = "FAILED"
        assert log.status == "FAILED"

    def test_new_log_must_start_received(self):
        with pytest.raises(ValueError, match="Invalid status transition"):
            InboundEmailLog(status=InboundEmailStatus.POSTED)

    def test_failed_is_terminal(self):
        log = InboundEmailLog(status=InboundEmailStatus.RECEIVED)
        log.status = InboundEmailStatus.FAILED
        with pytest.raises(ValueError):
            log.status = InboundEmailStatus.POSTED

    def test_unknown_status_rejected(self):
        log = InboundEmailLog(status=InboundEmailStatus.RECEIVED)
        with pytest.raises(ValueError, match="Invalid status value"):
            log.status = "BOUNCED"
