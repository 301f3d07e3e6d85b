"""mailkit-email -- Compose emails and convert them to RFC 5322 messages.

Re-exports all public types: the ``Email`` model, body variants, the
converter, Message-ID generation, config, and errors.
"""

from mailkit_core.address import Address
from mailkit_core.message import Message, MessageID

from mailkit_email.body import (
    Body,
    HtmlBody,
    MultipartBody,
    TextBody,
    negotiate_mime,
)
from mailkit_email.config import EmailConfig
from mailkit_email.converter import EmailConverter, to_message
from mailkit_email.errors import (
    AddressConversionError,
    AddressError,
    BodyEncodingError,
    EmptyRecipientsError,
    ErrorCode,
    HeaderNameError,
    HeaderValueError,
    MailkitError,
    MultipartConstructionError,
)
from mailkit_email.message_id import MessageIdGenerator, RandomMessageIdGenerator
from mailkit_email.models import Email, HeaderEntry

__all__ = [
    # Models
    "Email",
    "HeaderEntry",
    "Address",
    # Body
    "Body",
    "TextBody",
    "HtmlBody",
    "MultipartBody",
    "negotiate_mime",
    # Conversion
    "EmailConverter",
    "to_message",
    "Message",
    "MessageID",
    # Message-ID
    "MessageIdGenerator",
    "RandomMessageIdGenerator",
    # Config
    "EmailConfig",
    # Errors
    "ErrorCode",
    "MailkitError",
    "EmptyRecipientsError",
    "AddressError",
    "AddressConversionError",
    "HeaderNameError",
    "HeaderValueError",
    "MultipartConstructionError",
    "BodyEncodingError",
]
