"""Email body variants and their MIME mapping.

A body is exactly one of :class:`TextBody`, :class:`HtmlBody`, or
:class:`MultipartBody`.  ``Body`` is the Pydantic discriminated union over
the three, keyed by the ``type`` field, so serialized bodies always carry an
explicit discriminator.

Every variant implements the abstract ``content_type``,
``transfer_encoding``, ``render()`` and ``data`` members; a new variant that
misses one of them cannot be instantiated.

=============  ============================  =================
Variant        Content-Type                  Transfer-Encoding
=============  ============================  =================
TextBody       text/plain; charset=<cs>      7bit
HtmlBody       text/html; charset=<cs>       7bit
MultipartBody  multipart/<sub>; boundary=..  (none)
=============  ============================  =================
"""

from __future__ import annotations

import codecs
from abc import abstractmethod
from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from mailkit_core.errors import BodyEncodingError
from mailkit_core.mime import ContentTransferEncoding, ContentType, Multipart

__all__ = [
    "Body",
    "TextBody",
    "HtmlBody",
    "MultipartBody",
    "negotiate_mime",
]


class _BodyVariant(BaseModel):
    model_config = ConfigDict(frozen=True)

    @property
    @abstractmethod
    def content_type(self) -> ContentType:
        """The top-level ``Content-Type`` of this body."""

    @property
    @abstractmethod
    def transfer_encoding(self) -> ContentTransferEncoding | None:
        """The top-level ``Content-Transfer-Encoding``, if any."""

    @abstractmethod
    def render(self) -> str:
        """The body as text, exactly as it follows the header block."""

    @property
    @abstractmethod
    def data(self) -> bytes:
        """The rendered body encoded for the wire."""


class _CharsetBody(_BodyVariant):
    subtype: ClassVar[str]

    content: str
    charset: str = "UTF-8"

    @property
    def content_type(self) -> ContentType:
        return ContentType(
            type="text", subtype=self.subtype, parameters={"charset": self.charset}
        )

    @property
    def transfer_encoding(self) -> ContentTransferEncoding | None:
        return ContentTransferEncoding.SEVEN_BIT

    def render(self) -> str:
        return self.content

    @property
    def data(self) -> bytes:
        try:
            codecs.lookup(self.charset)
        except LookupError as exc:
            raise BodyEncodingError(
                f"Unknown charset {self.charset!r}", stage="convert", field="charset"
            ) from exc
        try:
            return self.content.encode(self.charset)
        except UnicodeEncodeError as exc:
            raise BodyEncodingError(
                f"Body cannot be encoded as {self.charset}: {exc.reason}",
                stage="convert",
                field="charset",
            ) from exc


class TextBody(_CharsetBody):
    """Plain text content."""

    subtype: ClassVar[str] = "plain"
    type: Literal["text"] = "text"


class HtmlBody(_CharsetBody):
    """HTML content."""

    subtype: ClassVar[str] = "html"
    type: Literal["html"] = "html"


class MultipartBody(_BodyVariant):
    """A multipart body; nested parts carry their own transfer encodings."""

    type: Literal["multipart"] = "multipart"
    multipart: Multipart

    @property
    def content_type(self) -> ContentType:
        return self.multipart.content_type

    @property
    def transfer_encoding(self) -> ContentTransferEncoding | None:
        return None

    def render(self) -> str:
        return self.multipart.render()

    @property
    def data(self) -> bytes:
        return self.multipart.as_bytes()


Body = Annotated[Union[TextBody, HtmlBody, MultipartBody], Field(discriminator="type")]


def negotiate_mime(
    body: TextBody | HtmlBody | MultipartBody,
) -> tuple[ContentType, ContentTransferEncoding | None]:
    """Return the ``(Content-Type, Content-Transfer-Encoding)`` pair for *body*."""
    return body.content_type, body.transfer_encoding
