"""Validated email address value.

``Address`` wraps a syntactically valid mailbox (``local@domain`` with an
optional display name).  Syntax checks are delegated to the
``email-validator`` library; deliverability (DNS) is never checked.

Two levels of validation exist.  :meth:`Address.parse` accepts anything
``email-validator`` accepts, including internationalized local parts.
:meth:`Address.to_wire` is stricter: the result must be representable in
an ASCII RFC 5322 header, so addresses that need SMTPUTF8 are rejected and
internationalized domains are converted to their IDNA form.
"""

from __future__ import annotations

from email.headerregistry import Address as HeaderAddress
from email.utils import parseaddr
from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, model_serializer, model_validator

from mailkit_core.errors import AddressConversionError, AddressError


def _validated_fields(text: str) -> dict[str, Any]:
    display_name, addr_spec = parseaddr(text)
    if not addr_spec:
        raise AddressError(f"Not an email address: {text!r}", field="address")
    try:
        validated = validate_email(addr_spec, check_deliverability=False)
    except EmailNotValidError as exc:
        raise AddressError(
            f"Invalid email address {addr_spec!r}: {exc}", field="address"
        ) from exc
    return {
        "local_part": validated.local_part,
        "domain": validated.domain,
        "display_name": display_name or None,
    }


class Address(BaseModel):
    """An immutable, syntax-validated mailbox address.

    Anywhere an ``Address`` is expected a plain string such as
    ``"user@example.com"`` or ``"Jane Doe <jane@example.com>"`` is accepted
    and parsed.  Addresses serialize back to that string form.
    """

    model_config = ConfigDict(frozen=True)

    local_part: str
    domain: str
    display_name: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        if isinstance(data, str):
            return _validated_fields(data)
        if isinstance(data, dict) and "local_part" in data and "domain" in data:
            fields = _validated_fields(f"{data['local_part']}@{data['domain']}")
            fields["display_name"] = data.get("display_name")
            return fields
        return data

    @classmethod
    def parse(cls, text: str) -> Address:
        """Parse ``text`` into an ``Address``.

        Raises
        ------
        AddressError
            If ``text`` does not contain a valid email address.
        """
        return cls.model_validate(text)

    @property
    def addr_spec(self) -> str:
        return f"{self.local_part}@{self.domain}"

    def to_wire(self) -> HeaderAddress:
        """Convert to a header-ready ``email.headerregistry.Address``.

        Raises
        ------
        AddressConversionError
            If the address cannot be expressed in ASCII (SMTPUTF8 local
            part) or the display name contains line breaks.
        """
        try:
            validated = validate_email(self.addr_spec, check_deliverability=False)
        except EmailNotValidError as exc:
            raise AddressConversionError(
                f"Address {self.addr_spec!r} rejected for wire format: {exc}",
                stage="convert",
            ) from exc

        if validated.ascii_email is None:
            raise AddressConversionError(
                f"Address {self.addr_spec!r} requires SMTPUTF8 and cannot be "
                "written to an ASCII header",
                stage="convert",
            )

        username, _, domain = validated.ascii_email.rpartition("@")
        try:
            return HeaderAddress(
                display_name=self.display_name or "",
                username=username,
                domain=domain,
            )
        except ValueError as exc:
            raise AddressConversionError(
                f"Address {self.addr_spec!r} has an invalid display name: {exc}",
                stage="convert",
            ) from exc

    @model_serializer
    def _serialize(self) -> str:
        return str(self)

    def __str__(self) -> str:
        if self.display_name:
            return str(
                HeaderAddress(
                    display_name=self.display_name,
                    username=self.local_part,
                    domain=self.domain,
                )
            )
        return self.addr_spec
