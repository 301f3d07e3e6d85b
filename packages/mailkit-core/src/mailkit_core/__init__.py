"""mailkit-core -- Wire-level primitives for the mailkit framework.

Re-exports all public types: errors, addresses, headers, MIME types,
multipart bodies, and the RFC 5322 message.
"""

from mailkit_core.address import Address
from mailkit_core.errors import (
    AddressConversionError,
    AddressError,
    BodyEncodingError,
    ContentTypeError,
    CoreErrorCode,
    HeaderNameError,
    HeaderValueError,
    MailError,
    MailkitError,
    MessageIDError,
    MultipartConstructionError,
)
from mailkit_core.headers import Header, HeaderName
from mailkit_core.message import Message, MessageID
from mailkit_core.mime import (
    BodyPart,
    ContentTransferEncoding,
    ContentType,
    Multipart,
)

__all__ = [
    # Errors
    "CoreErrorCode",
    "MailError",
    "MailkitError",
    "AddressError",
    "AddressConversionError",
    "HeaderNameError",
    "HeaderValueError",
    "ContentTypeError",
    "MultipartConstructionError",
    "BodyEncodingError",
    "MessageIDError",
    # Addresses
    "Address",
    # Headers
    "Header",
    "HeaderName",
    # MIME
    "ContentType",
    "ContentTransferEncoding",
    "BodyPart",
    "Multipart",
    # Message
    "Message",
    "MessageID",
]
