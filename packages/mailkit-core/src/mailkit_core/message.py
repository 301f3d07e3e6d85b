"""RFC 5322 wire-format message.

``Message`` holds addresses, date, subject, identifier, raw body bytes, and
the additional header fields of one outgoing message, and renders them as a
CRLF-delimited header block, an empty line, and the body.  The ``bcc`` list
is kept for the SMTP envelope only and is never written to the header block.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from email.header import Header as EncodedWord
from email.headerregistry import Address as HeaderAddress
from email.utils import format_datetime

from mailkit_core import headers as names
from mailkit_core.errors import MessageIDError
from mailkit_core.headers import Header

CRLF = "\r\n"

# Encoded words stay short enough to share a line with the field name.
_ENCODED_WORD_LENGTH = 60


@dataclass(frozen=True)
class MessageID:
    """A ``Message-ID`` value of the form ``<unique_id@domain>``."""

    unique_id: str
    domain: str

    def __post_init__(self) -> None:
        for part_name, part in (("unique_id", self.unique_id), ("domain", self.domain)):
            if (
                not part
                or not part.isascii()
                or any(ch in part for ch in "<>@ \t\r\n")
            ):
                raise MessageIDError(
                    f"Invalid Message-ID {part_name} {part!r}", field=part_name
                )

    def __str__(self) -> str:
        return f"<{self.unique_id}@{self.domain}>"


def _encode_phrase(text: str) -> str:
    if text.isascii():
        return text
    encoded = EncodedWord(text, "utf-8").encode(maxlinelen=_ENCODED_WORD_LENGTH)
    # one line of space-separated words; Header.render folds between them
    return " ".join(encoded.split())


def _format_address(address: HeaderAddress) -> str:
    if not address.display_name:
        return address.addr_spec
    if address.display_name.isascii():
        return str(address)
    return f"{_encode_phrase(address.display_name)} <{address.addr_spec}>"


def _format_address_list(addresses: tuple[HeaderAddress, ...]) -> str:
    return ", ".join(_format_address(address) for address in addresses)


@dataclass(frozen=True)
class Message:
    """An immutable RFC 5322 message ready to be written or sent."""

    from_: HeaderAddress
    to: tuple[HeaderAddress, ...]
    date: datetime
    subject: str
    message_id: MessageID
    body: bytes
    cc: tuple[HeaderAddress, ...] | None = None
    bcc: tuple[HeaderAddress, ...] | None = None
    reply_to: HeaderAddress | None = None
    additional_headers: tuple[Header, ...] = ()

    def __post_init__(self) -> None:
        # A Message must always render; a bad subject fails here, not later.
        self.header_fields()

    @property
    def body_text(self) -> str | None:
        """The body decoded as UTF-8, or ``None`` if it is not valid UTF-8."""
        try:
            return self.body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    @property
    def envelope_recipients(self) -> tuple[HeaderAddress, ...]:
        """Every recipient the transport must deliver to, Bcc included."""
        return self.to + (self.cc or ()) + (self.bcc or ())

    def header_fields(self) -> list[Header]:
        """The header fields in render order (Bcc is never included)."""
        fields = [
            Header(names.FROM, _format_address(self.from_)),
            Header(names.TO, _format_address_list(self.to)),
        ]
        if self.cc:
            fields.append(Header(names.CC, _format_address_list(self.cc)))
        if self.reply_to is not None:
            fields.append(Header(names.REPLY_TO, _format_address(self.reply_to)))
        fields.append(Header(names.DATE, format_datetime(self.date)))
        fields.append(Header(names.SUBJECT, _encode_phrase(self.subject)))
        fields.append(Header(names.MESSAGE_ID, str(self.message_id)))

        extra_names = {header.name for header in self.additional_headers}
        if names.CONTENT_TYPE in extra_names and names.MIME_VERSION not in extra_names:
            fields.append(Header(names.MIME_VERSION, "1.0"))
        fields.extend(self.additional_headers)
        return fields

    def render_headers(self) -> str:
        """The header block, each field terminated by CRLF."""
        return "".join(field.render() + CRLF for field in self.header_fields())

    def as_bytes(self) -> bytes:
        return self.render_headers().encode("ascii") + CRLF.encode("ascii") + self.body

    def render(self) -> str:
        """Render the full message as text.

        Body bytes that are not valid UTF-8 are replaced with U+FFFD; use
        :meth:`as_bytes` when the exact bytes matter.
        """
        return self.as_bytes().decode("utf-8", errors="replace")
