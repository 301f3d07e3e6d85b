"""Header field names and ASCII-validated header fields.

``HeaderName`` is a ``str`` that compares and hashes case-insensitively, so
``HeaderName("message-id") == "Message-ID"``.  ``Header`` pairs a name with
a value and refuses anything that cannot be written verbatim into an RFC
5322 header block.
"""

from __future__ import annotations

from dataclasses import dataclass

from mailkit_core.errors import HeaderNameError, HeaderValueError

# RFC 5322 s2.1.1: lines SHOULD stay within 78 characters.
MAX_LINE_LENGTH = 78


class HeaderName(str):
    """Case-insensitive header field name that keeps its original spelling."""

    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            return self.lower() == other.lower()
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash(self.lower())

    def __repr__(self) -> str:
        return f"HeaderName({str.__repr__(self)})"


FROM = HeaderName("From")
TO = HeaderName("To")
CC = HeaderName("Cc")
BCC = HeaderName("Bcc")
REPLY_TO = HeaderName("Reply-To")
DATE = HeaderName("Date")
SUBJECT = HeaderName("Subject")
MESSAGE_ID = HeaderName("Message-ID")
MIME_VERSION = HeaderName("MIME-Version")
CONTENT_TYPE = HeaderName("Content-Type")
CONTENT_TRANSFER_ENCODING = HeaderName("Content-Transfer-Encoding")


def _is_field_name(name: str) -> bool:
    # RFC 5322 ftext: printable US-ASCII except colon
    return bool(name) and all(33 <= ord(ch) <= 126 and ch != ":" for ch in name)


@dataclass(frozen=True)
class Header:
    """A single header field ready for rendering.

    Raises
    ------
    HeaderNameError
        If ``name`` is empty or contains characters outside RFC 5322 ftext.
    HeaderValueError
        If ``value`` contains non-ASCII characters, CR, or LF.
    """

    name: HeaderName
    value: str

    def __post_init__(self) -> None:
        if not _is_field_name(self.name):
            raise HeaderNameError(
                f"Invalid header field name {self.name!r}", field="name"
            )
        if not self.value.isascii():
            raise HeaderValueError(
                f"Header {self.name!s} contains non-ASCII characters",
                field=str(self.name),
            )
        if "\r" in self.value or "\n" in self.value:
            raise HeaderValueError(
                f"Header {self.name!s} contains a line break",
                field=str(self.name),
            )
        if not isinstance(self.name, HeaderName):
            object.__setattr__(self, "name", HeaderName(self.name))

    def render(self) -> str:
        """Render as ``Name: value``, folded at spaces to fit ``MAX_LINE_LENGTH``.

        Folding only inserts CRLF before an existing space, so unfolding
        restores the value exactly.  A single word longer than the limit
        stays on its own line.
        """
        words = self.value.split(" ")
        lines = [f"{self.name}: {words[0]}"]
        for word in words[1:]:
            if word and len(lines[-1]) + 1 + len(word) > MAX_LINE_LENGTH:
                lines.append(" " + word)
            else:
                lines[-1] += " " + word
        return "\r\n".join(lines)
