"""Shared error codes, structured error model, and exceptions for mailkit.

``CoreErrorCode`` contains the error codes raised by the wire-level
primitives.  ``MailError`` is a Pydantic model describing a single failure;
``MailkitError`` is the raisable exception that carries one as ``.error``.
Each concrete exception fixes its own default code so callers can catch by
type or inspect ``exc.code``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class CoreErrorCode(str, Enum):
    """Error codes shared across all mailkit packages.

    Values equal their names so they are stable strings suitable for logs
    and alerting.
    """

    # Address errors
    E_ADDRESS_INVALID = "E_ADDRESS_INVALID"
    E_ADDRESS_CONVERSION = "E_ADDRESS_CONVERSION"

    # Header errors
    E_HEADER_NAME_INVALID = "E_HEADER_NAME_INVALID"
    E_HEADER_VALUE_INVALID = "E_HEADER_VALUE_INVALID"

    # MIME errors
    E_CONTENT_TYPE_INVALID = "E_CONTENT_TYPE_INVALID"
    E_MULTIPART_CONSTRUCTION = "E_MULTIPART_CONSTRUCTION"
    E_BODY_ENCODING = "E_BODY_ENCODING"

    # Message errors
    E_MESSAGE_ID_INVALID = "E_MESSAGE_ID_INVALID"


class MailError(BaseModel):
    """Structured error with code, message, and context.

    The ``code`` field is typed as ``str`` so it accepts any package-specific
    ``ErrorCode`` enum member.
    """

    code: str
    message: str
    stage: str | None = None
    field: str | None = None


class MailkitError(Exception):
    """Raisable exception wrapping a :class:`MailError` data model.

    Carries the structured ``MailError`` as the ``.error`` attribute for
    inspection and serialization.  Subclasses set ``default_code``; an
    explicit ``code`` keyword overrides it.
    """

    default_code: str | None = None

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        stage: str | None = None,
        field: str | None = None,
    ) -> None:
        resolved = code or self.default_code
        if resolved is None:
            raise TypeError(f"{type(self).__name__} requires an error code")
        if isinstance(resolved, Enum):
            resolved = resolved.value
        self.error = MailError(
            code=resolved,
            message=message,
            stage=stage,
            field=field,
        )
        super().__init__(message)

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def stage(self) -> str | None:
        return self.error.stage


class AddressError(MailkitError):
    """A string could not be parsed as an email address."""

    default_code = CoreErrorCode.E_ADDRESS_INVALID


class AddressConversionError(MailkitError):
    """A valid address cannot be represented in an RFC 5322 header."""

    default_code = CoreErrorCode.E_ADDRESS_CONVERSION


class HeaderNameError(MailkitError):
    default_code = CoreErrorCode.E_HEADER_NAME_INVALID


class HeaderValueError(MailkitError):
    """A header value contains non-ASCII bytes or line breaks."""

    default_code = CoreErrorCode.E_HEADER_VALUE_INVALID


class ContentTypeError(MailkitError):
    default_code = CoreErrorCode.E_CONTENT_TYPE_INVALID


class MultipartConstructionError(MailkitError):
    """A multipart body could not be built or rendered."""

    default_code = CoreErrorCode.E_MULTIPART_CONSTRUCTION


class BodyEncodingError(MailkitError):
    """Body content cannot be encoded in its declared charset."""

    default_code = CoreErrorCode.E_BODY_ENCODING


class MessageIDError(MailkitError):
    default_code = CoreErrorCode.E_MESSAGE_ID_INVALID
