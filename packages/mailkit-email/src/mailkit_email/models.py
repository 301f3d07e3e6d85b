"""Pydantic models for composing email: ``HeaderEntry`` and ``Email``.

``Email`` is the immutable, high-level composition value.  The only check
it performs is that at least one ``to`` recipient exists; header and
subject content are validated later, when the email is converted to a
wire-format :class:`~mailkit_core.message.Message`.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mailkit_core.address import Address
from mailkit_core.headers import CONTENT_TRANSFER_ENCODING, CONTENT_TYPE
from mailkit_core.mime import Multipart

from mailkit_email.body import Body, HtmlBody, MultipartBody, TextBody, negotiate_mime
from mailkit_email.errors import EmptyRecipientsError

__all__ = [
    "Address",
    "HeaderEntry",
    "Email",
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HeaderEntry(BaseModel):
    """A caller-supplied header field; names compare case-insensitively."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str

    def matches(self, name: str) -> bool:
        return self.name.lower() == name.lower()


class Email(BaseModel):
    """An immutable email composition.

    Addresses may be given as :class:`Address` instances or strings, and a
    plain string ``body`` becomes a UTF-8 :class:`TextBody`.
    ``additional_headers`` accepts ``HeaderEntry`` objects, ``(name, value)``
    pairs, or a mapping; insertion order is preserved and duplicate names
    are kept.  ``date`` defaults to the current UTC time.

    Raises
    ------
    EmptyRecipientsError
        If ``to`` is empty.
    AddressError
        If an address string cannot be parsed.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    to: tuple[Address, ...]
    from_: Address = Field(alias="from")
    reply_to: Address | None = None
    cc: tuple[Address, ...] | None = None
    bcc: tuple[Address, ...] | None = None
    subject: str
    body: Body
    additional_headers: tuple[HeaderEntry, ...] = ()
    date: datetime = Field(default_factory=_utcnow)

    @field_validator("additional_headers", mode="before")
    @classmethod
    def _coerce_headers(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return tuple({"name": k, "value": v} for k, v in value.items())
        if isinstance(value, (list, tuple)):
            return tuple(
                {"name": item[0], "value": item[1]}
                if isinstance(item, (list, tuple)) and len(item) == 2
                else item
                for item in value
            )
        return value

    @field_validator("body", mode="before")
    @classmethod
    def _coerce_body(cls, value: Any) -> Any:
        if isinstance(value, str):
            return TextBody(content=value)
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _default_date(cls, value: Any) -> Any:
        return _utcnow() if value is None else value

    @model_validator(mode="after")
    def _require_recipients(self) -> Email:
        if not self.to:
            raise EmptyRecipientsError(
                "Email must have at least one recipient in the 'to' field",
                stage="compose",
                field="to",
            )
        return self

    # ------------------------------------------------------------------
    # Convenience constructors
    # ------------------------------------------------------------------

    @classmethod
    def compose(
        cls,
        *,
        to: Any,
        from_: Address | str,
        subject: str,
        text: str | None = None,
        html: str | None = None,
        **kwargs: Any,
    ) -> Email:
        """Build an email from plain text and/or HTML content.

        Text alone gives a ``TextBody``, HTML alone an ``HtmlBody``, and both
        a ``multipart/alternative`` body.  Remaining keyword arguments
        (``reply_to``, ``cc``, ``bcc``, ``additional_headers``, ``date``) are
        passed through.

        Raises
        ------
        TypeError
            If neither ``text`` nor ``html`` is given.
        MultipartConstructionError
            If the alternative body cannot be built.
        """
        body: TextBody | HtmlBody | MultipartBody
        if text is not None and html is not None:
            body = MultipartBody(multipart=Multipart.alternative(text, html))
        elif text is not None:
            body = TextBody(content=text)
        elif html is not None:
            body = HtmlBody(content=html)
        else:
            raise TypeError("compose() requires text, html, or both")
        return cls(to=to, from_=from_, subject=subject, body=body, **kwargs)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def header(self, name: str) -> str | None:
        """Value of the first additional header named *name* (any case), or *None*."""
        for entry in self.additional_headers:
            if entry.matches(name):
                return entry.value
        return None

    @property
    def all_headers(self) -> tuple[HeaderEntry, ...]:
        """Additional headers followed by the MIME headers derived from the body."""
        content_type, transfer_encoding = negotiate_mime(self.body)
        derived = [HeaderEntry(name=CONTENT_TYPE, value=content_type.header_value)]
        if transfer_encoding is not None:
            derived.append(
                HeaderEntry(
                    name=CONTENT_TRANSFER_ENCODING,
                    value=transfer_encoding.header_value,
                )
            )
        return self.additional_headers + tuple(derived)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_json(self) -> str:
        """Serialize to JSON; the body carries a ``type`` discriminator."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> Email:
        return cls.model_validate_json(data)
