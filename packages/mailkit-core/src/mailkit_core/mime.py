"""MIME content types, transfer encodings, and multipart bodies.

Covers the parts of RFC 2045 and RFC 2046 that outgoing messages need:
``ContentType`` renders a ``type/subtype; key=value`` header value,
``ContentTransferEncoding`` names the body encoding, ``BodyPart`` is one
entity inside a multipart body, and ``Multipart`` assembles parts between
boundary delimiters.

The pydantic models are the serializable values.  Transfer encoding and
rendering go through the standard library's ``email.message.MIMEPart``
under ``email.policy.SMTP``.
"""

from __future__ import annotations

import codecs
import re
import uuid
from collections.abc import Mapping
from email.message import MIMEPart
from email.policy import SMTP
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mailkit_core.errors import ContentTypeError, MultipartConstructionError

CRLF = "\r\n"

# RFC 5322 s2.1.1 hard limit, CRLF excluded.
_MAX_7BIT_LINE = 998
# RFC 2045 tspecials plus space and controls are not allowed in a token.
_TSPECIALS = set('()<>@,;:\\"/[]?=')
# RFC 2046 bcharsnospace plus space.
_BOUNDARY_RE = re.compile(r"^[0-9A-Za-z'()+_,\-./:=? ]{0,69}[0-9A-Za-z'()+_,\-./:=?]$")


def _is_token(text: str) -> bool:
    return bool(text) and all(
        33 <= ord(ch) <= 126 and ch not in _TSPECIALS for ch in text
    )


def _quote_parameter(value: str) -> str:
    if _is_token(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


# ---------------------------------------------------------------------------
# Content-Type / Content-Transfer-Encoding
# ---------------------------------------------------------------------------


class ContentTransferEncoding(str, Enum):
    """Values of the ``Content-Transfer-Encoding`` header (RFC 2045 s6)."""

    SEVEN_BIT = "7bit"
    EIGHT_BIT = "8bit"
    BINARY = "binary"
    QUOTED_PRINTABLE = "quoted-printable"
    BASE64 = "base64"

    @property
    def header_value(self) -> str:
        return self.value


class ContentType(BaseModel):
    """A MIME media type with parameters.

    ``type`` and ``subtype`` are lower-cased on construction.  ``parameters``
    accepts a mapping or ``(name, value)`` pairs and is stored as a tuple of
    pairs, keeping spelling and order.  Equality is structural and instances
    are hashable.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    subtype: str
    parameters: tuple[tuple[str, str], ...] = ()

    @field_validator("type", "subtype")
    @classmethod
    def _check_token(cls, value: str) -> str:
        if not _is_token(value):
            raise ContentTypeError(
                f"Invalid media type token {value!r}", field="content_type"
            )
        return value.lower()

    @field_validator("parameters", mode="before")
    @classmethod
    def _coerce_parameters(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return tuple(value.items())
        return value

    @field_validator("parameters")
    @classmethod
    def _check_parameters(
        cls, value: tuple[tuple[str, str], ...]
    ) -> tuple[tuple[str, str], ...]:
        seen: set[str] = set()
        for name, param in value:
            if not _is_token(name):
                raise ContentTypeError(
                    f"Invalid parameter name {name!r}", field="content_type"
                )
            if name.lower() in seen:
                raise ContentTypeError(
                    f"Duplicate parameter {name!r}", field="content_type"
                )
            seen.add(name.lower())
            if not param.isascii() or "\r" in param or "\n" in param:
                raise ContentTypeError(
                    f"Parameter {name!r} must be single-line ASCII",
                    field="content_type",
                )
        return value

    @property
    def mime_type(self) -> str:
        return f"{self.type}/{self.subtype}"

    def parameter(self, name: str) -> str | None:
        """Value of parameter *name* (case-insensitive), or *None*."""
        for key, value in self.parameters:
            if key.lower() == name.lower():
                return value
        return None

    @property
    def header_value(self) -> str:
        """Render as a ``Content-Type`` header value."""
        rendered = self.mime_type
        for name, value in self.parameters:
            rendered += f"; {name}={_quote_parameter(value)}"
        return rendered

    def __str__(self) -> str:
        return self.header_value


# ---------------------------------------------------------------------------
# Body parts
# ---------------------------------------------------------------------------


def _choose_encoding(raw: bytes) -> ContentTransferEncoding:
    if raw.isascii() and all(len(line) <= _MAX_7BIT_LINE for line in raw.splitlines()):
        return ContentTransferEncoding.SEVEN_BIT
    return ContentTransferEncoding.QUOTED_PRINTABLE


class BodyPart(BaseModel):
    """One entity of a multipart body.

    ``content`` holds the already transfer-encoded payload that is written
    between the part headers and the next boundary.
    """

    model_config = ConfigDict(frozen=True)

    content_type: ContentType
    transfer_encoding: ContentTransferEncoding | None = None
    content: str

    @classmethod
    def text(
        cls, content: str, subtype: str = "plain", charset: str = "UTF-8"
    ) -> BodyPart:
        """Build a ``text/<subtype>`` part.

        Content that encodes to ASCII with lines of at most 998 characters
        is sent as ``7bit``; anything else is quoted-printable encoded from
        its ``charset`` bytes.  Line endings are normalized.

        Raises
        ------
        MultipartConstructionError
            If ``charset`` is unknown or cannot represent ``content``.
        """
        try:
            codecs.lookup(charset)
        except LookupError as exc:
            raise MultipartConstructionError(
                f"Unknown charset {charset!r}", field="charset"
            ) from exc
        try:
            raw = content.encode(charset)
        except UnicodeEncodeError as exc:
            raise MultipartConstructionError(
                f"Content cannot be encoded as {charset}: {exc.reason}",
                field="charset",
            ) from exc

        content_type = ContentType(
            type="text", subtype=subtype, parameters={"charset": charset}
        )
        encoding = _choose_encoding(raw)
        entity = MIMEPart(policy=SMTP)
        entity.set_content(
            content, subtype=content_type.subtype, charset=charset, cte=encoding.value
        )
        return cls(
            content_type=content_type,
            transfer_encoding=encoding,
            content=entity.get_payload(),
        )

    def to_mime(self) -> MIMEPart:
        """This part as a ``MIMEPart`` carrying its headers and encoded payload."""
        entity = MIMEPart(policy=SMTP)
        entity["Content-Type"] = self.content_type.header_value
        if self.transfer_encoding is not None:
            entity["Content-Transfer-Encoding"] = self.transfer_encoding.header_value
        entity.set_payload(self.content)
        return entity

    def render(self) -> str:
        return self.to_mime().as_string(policy=SMTP)


# ---------------------------------------------------------------------------
# Multipart
# ---------------------------------------------------------------------------


def _make_boundary() -> str:
    # "=_" cannot occur in quoted-printable output
    return f"=_{uuid.uuid4().hex}"


class Multipart(BaseModel):
    """A ``multipart/<subtype>`` body (RFC 2046 s5.1).

    Raises
    ------
    MultipartConstructionError
        If there are no parts, the boundary is malformed, or a part's
        content contains the boundary delimiter.
    """

    model_config = ConfigDict(frozen=True)

    subtype: str = "mixed"
    parts: tuple[BodyPart, ...]
    boundary: str = Field(default_factory=_make_boundary)

    @model_validator(mode="after")
    def _check_structure(self) -> Multipart:
        if not self.parts:
            raise MultipartConstructionError(
                "A multipart body needs at least one part", field="parts"
            )
        if not _BOUNDARY_RE.match(self.boundary):
            raise MultipartConstructionError(
                f"Invalid boundary {self.boundary!r}", field="boundary"
            )
        delimiter = f"--{self.boundary}"
        for index, part in enumerate(self.parts):
            if delimiter in part.content:
                raise MultipartConstructionError(
                    f"Part {index} contains the boundary delimiter",
                    field="boundary",
                )
        return self

    @classmethod
    def alternative(
        cls, text_content: str, html_content: str, charset: str = "UTF-8"
    ) -> Multipart:
        """Plain-text and HTML renderings of the same content, in that order."""
        return cls(
            subtype="alternative",
            parts=(
                BodyPart.text(text_content, subtype="plain", charset=charset),
                BodyPart.text(html_content, subtype="html", charset=charset),
            ),
        )

    @classmethod
    def mixed(cls, *parts: BodyPart) -> Multipart:
        return cls(subtype="mixed", parts=parts)

    @property
    def content_type(self) -> ContentType:
        return ContentType(
            type="multipart",
            subtype=self.subtype,
            parameters={"boundary": self.boundary},
        )

    def to_mime(self) -> MIMEPart:
        """The multipart entity as a ``MIMEPart`` tree with this boundary."""
        entity = MIMEPart(policy=SMTP)
        entity["Content-Type"] = self.content_type.header_value
        entity.set_payload([part.to_mime() for part in self.parts])
        return entity

    def render(self) -> str:
        """Render all parts between boundary delimiters, closing delimiter included."""
        flattened = self.to_mime().as_string(policy=SMTP)
        # the entity's own header block belongs to the enclosing message
        return flattened.split(CRLF + CRLF, 1)[1]

    def as_bytes(self) -> bytes:
        """Render to bytes.

        Parts declared ``8bit`` or ``binary`` may carry non-ASCII text and
        are written as UTF-8; everything else must be ASCII.
        """
        rendered = self.render()
        if rendered.isascii():
            return rendered.encode("ascii")
        eight_bit = {ContentTransferEncoding.EIGHT_BIT, ContentTransferEncoding.BINARY}
        if all(
            part.content.isascii() or part.transfer_encoding in eight_bit
            for part in self.parts
        ):
            return rendered.encode("utf-8")
        raise MultipartConstructionError(
            "Multipart body contains non-ASCII content in a 7bit part",
            stage="render",
        )
