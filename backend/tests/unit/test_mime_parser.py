"""Unit tests for MIME parsing into InboundEmail"""

from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import pytest

from infrastructure.ingest.mime_parser import parse_inbound_email_bytes, parse_mime_message


def _plain_email(body: str) -> bytes:
    msg = MIMEText(body, "plain", "utf-8")
    msg["From"] = "Ada Lovelace <ada@example.com>"
    msg["To"] = "feedbot@groupmirror.test, other@example.com"
    msg["Subject"] = "Weekly update"
    msg["Message-ID"] = "<abc123@example.com>"
    return msg.as_bytes()


class TestParseInboundEmail:
    def test_plain_text_email(self):
        email = parse_inbound_email_bytes(_plain_email("subjectId=005xx0000012345\nmessage=Hi"))

        assert email.plain_text_body.strip() == "subjectId=005xx0000012345\nmessage=Hi"
        assert email.html_body is None
        assert email.from_address == "ada@example.com"
        assert email.from_name == "Ada Lovelace"
        assert email.to_addresses == ["feedbot@groupmirror.test", "other@example.com"]
        assert email.subject == "Weekly update"
        assert email.message_id == "<abc123@example.com>"

    def test_non_ascii_body_is_decoded(self):
        email = parse_inbound_email_bytes(_plain_email("subjectId=005xx0000012345\nmessage=Grüße"))
        assert "Grüße" in email.plain_text_body

    def test_multipart_alternative(self):
        msg = MIMEMultipart("alternative")
        msg["From"] = "ada@example.com"
        msg["To"] = "feedbot@groupmirror.test"
        msg.attach(MIMEText("subjectId=005xx0000012345\nmessage=plain", "plain"))
        msg.attach(MIMEText("<p>subjectId=005xx0000012345</p><p>message=html</p>", "html"))

        email = parse_inbound_email_bytes(msg.as_bytes())

        assert "message=plain" in email.plain_text_body
        assert "message=html" in email.html_body
        assert email.message_id is None

    def test_html_only(self):
        msg = MIMEText("<p>subjectId=005xx0000012345</p>", "html")
        email = parse_inbound_email_bytes(msg.as_bytes())
        assert email.plain_text_body is None
        assert "subjectId" in email.html_body

    def test_attachments_are_not_bodies(self):
        msg = MIMEMultipart()
        msg["From"] = "ada@example.com"
        msg.attach(MIMEText("subjectId=005xx0000012345\nmessage=see attached", "plain"))
        attachment = MIMEApplication(b"%PDF-1.4", _subtype="pdf")
        attachment.add_header("Content-Disposition", "attachment", filename="a.pdf")
        msg.attach(attachment)

        email = parse_inbound_email_bytes(msg.as_bytes())
        assert "see attached" in email.plain_text_body


class TestParseMimeErrors:
    def test_non_bytes_input_raises_value_error(self):
        with pytest.raises(ValueError, match="Invalid MIME message"):
            parse_mime_message(None)
