"""Error codes and exceptions for the mailkit-email package.

``ErrorCode`` contains the composition-specific codes plus the shared codes
from the core taxonomy that conversion can surface.  The wire-level
exceptions are re-exported so callers only need one import.
"""

from __future__ import annotations

from enum import Enum

from mailkit_core.errors import (
    AddressConversionError,
    AddressError,
    BodyEncodingError,
    HeaderNameError,
    HeaderValueError,
    MailError,
    MailkitError,
    MultipartConstructionError,
)

__all__ = [
    "ErrorCode",
    "MailError",
    "MailkitError",
    "EmptyRecipientsError",
    "AddressError",
    "AddressConversionError",
    "HeaderNameError",
    "HeaderValueError",
    "MultipartConstructionError",
    "BodyEncodingError",
]


class ErrorCode(str, Enum):
    """Error codes for mailkit-email.

    Values equal their names for stable log/alerting strings.
    """

    # Composition errors
    E_EMAIL_EMPTY_RECIPIENTS = "E_EMAIL_EMPTY_RECIPIENTS"

    # Conversion errors (reused from core taxonomy)
    E_ADDRESS_INVALID = "E_ADDRESS_INVALID"
    E_ADDRESS_CONVERSION = "E_ADDRESS_CONVERSION"
    E_HEADER_NAME_INVALID = "E_HEADER_NAME_INVALID"
    E_HEADER_VALUE_INVALID = "E_HEADER_VALUE_INVALID"
    E_CONTENT_TYPE_INVALID = "E_CONTENT_TYPE_INVALID"
    E_MULTIPART_CONSTRUCTION = "E_MULTIPART_CONSTRUCTION"
    E_BODY_ENCODING = "E_BODY_ENCODING"
    E_MESSAGE_ID_INVALID = "E_MESSAGE_ID_INVALID"


class EmptyRecipientsError(MailkitError):
    """An ``Email`` was constructed without any ``to`` recipient."""

    default_code = ErrorCode.E_EMAIL_EMPTY_RECIPIENTS
