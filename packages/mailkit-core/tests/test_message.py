"""Tests for mailkit_core.message -- MessageID and RFC 5322 rendering."""

from __future__ import annotations

from datetime import datetime, timezone
from email.header import decode_header, make_header
from email.headerregistry import Address as HeaderAddress

import pytest

from mailkit_core.errors import HeaderValueError, MessageIDError
from mailkit_core.headers import MAX_LINE_LENGTH, Header
from mailkit_core.message import Message, MessageID

DATE = datetime(2021, 1, 1, tzinfo=timezone.utc)


def _message(**overrides) -> Message:
    fields = dict(
        from_=HeaderAddress(username="sender", domain="example.com"),
        to=(HeaderAddress(username="recipient", domain="example.com"),),
        date=DATE,
        subject="Test Email",
        message_id=MessageID(unique_id="abc123", domain="example.com"),
        body=b"Hello, World!",
    )
    fields.update(overrides)
    return Message(**fields)


class TestMessageID:
    def test_str(self):
        assert str(MessageID(unique_id="abc", domain="example.com")) == "<abc@example.com>"

    @pytest.mark.parametrize(
        "unique_id,domain",
        [("", "example.com"), ("abc", ""), ("a@b", "example.com"), ("abc", "exa mple.com"), ("a>b", "x.com")],
    )
    def test_invalid(self, unique_id, domain):
        with pytest.raises(MessageIDError):
            MessageID(unique_id=unique_id, domain=domain)


class TestRender:
    def test_basic_headers_and_body(self):
        rendered = _message().render()
        assert "From: sender@example.com\r\n" in rendered
        assert "To: recipient@example.com\r\n" in rendered
        assert "Subject: Test Email\r\n" in rendered
        assert "Date: Fri, 01 Jan 2021 00:00:00 +0000\r\n" in rendered
        assert "Message-ID: <abc123@example.com>\r\n" in rendered
        assert rendered.endswith("\r\n\r\nHello, World!")

    def test_header_order(self):
        msg = _message(
            cc=(HeaderAddress(username="cc", domain="example.com"),),
            reply_to=HeaderAddress(username="reply", domain="example.com"),
            additional_headers=(Header("X-Custom-Header", "custom-value"),),
        )
        names = [str(field.name) for field in msg.header_fields()]
        assert names == [
            "From",
            "To",
            "Cc",
            "Reply-To",
            "Date",
            "Subject",
            "Message-ID",
            "X-Custom-Header",
        ]

    def test_bcc_never_rendered(self):
        hidden = HeaderAddress(username="hidden", domain="example.com")
        msg = _message(bcc=(hidden,))
        assert msg.bcc == (hidden,)
        assert b"hidden@example.com" not in msg.as_bytes()
        assert b"Bcc" not in msg.as_bytes()
        assert hidden in msg.envelope_recipients

    def test_mime_version_added_with_content_type(self):
        msg = _message(additional_headers=(Header("Content-Type", "text/plain; charset=UTF-8"),))
        assert "MIME-Version: 1.0\r\n" in msg.render()

    def test_mime_version_not_duplicated(self):
        msg = _message(
            additional_headers=(
                Header("mime-version", "1.0"),
                Header("Content-Type", "text/plain"),
            )
        )
        assert msg.render().lower().count("mime-version") == 1

    def test_display_names(self):
        msg = _message(
            from_=HeaderAddress(display_name="Doe, Jane", username="jane", domain="example.com"),
            to=(
                HeaderAddress(display_name="Zoë", username="zoe", domain="example.com"),
                HeaderAddress(username="bob", domain="example.com"),
            ),
        )
        rendered = msg.render()
        assert 'From: "Doe, Jane" <jane@example.com>\r\n' in rendered
        assert "To: =?utf-8?" in rendered
        assert "<zoe@example.com>, bob@example.com\r\n" in rendered

    def test_non_ascii_subject_encoded(self):
        rendered = _message(subject="Grüße").render()
        assert "Subject: =?utf-8?" in rendered
        assert "Grüße" not in rendered

    def test_long_non_ascii_subject_folded(self):
        subject = "Grüße aus München " * 12
        rendered = _message(subject=subject).render_headers()
        start = rendered.index("Subject: ")
        end = rendered.index("\r\nMessage-ID:")
        field = rendered[start:end]
        lines = field.split("\r\n")
        assert len(lines) > 1
        assert all(len(line) <= MAX_LINE_LENGTH for line in lines)
        value = field.replace("\r\n", "")[len("Subject: "):]
        assert str(make_header(decode_header(value))) == subject

    def test_long_recipient_list_folded(self):
        to = tuple(HeaderAddress(username=f"user{i}", domain="example.com") for i in range(60))
        rendered = _message(to=to).render_headers()
        assert all(len(line) <= MAX_LINE_LENGTH for line in rendered.split("\r\n"))
        unfolded = rendered.replace("\r\n ", " ")
        assert "To: " + ", ".join(a.addr_spec for a in to) + "\r\n" in unfolded

    def test_subject_line_break_rejected(self):
        with pytest.raises(HeaderValueError):
            _message(subject="Hi\r\nBcc: evil@example.com")

    def test_as_bytes_keeps_body_bytes(self):
        msg = _message(body=b"\xff\xfe")
        assert msg.as_bytes().endswith(b"\r\n\r\n\xff\xfe")
        assert msg.body_text is None
        assert _message().body_text == "Hello, World!"
