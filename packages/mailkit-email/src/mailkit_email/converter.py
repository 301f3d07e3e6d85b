"""Email -> Message conversion.

Turns an :class:`~mailkit_email.models.Email` composition into a wire-ready
:class:`~mailkit_core.message.Message`:

1. convert every address to its wire form,
2. drop caller-supplied ``Message-ID`` headers,
3. generate a fresh Message-ID from the sender's domain,
4. append the MIME headers derived from the body,
5. assemble the message with the encoded body bytes.

Caller-supplied ``Content-Type`` headers are passed through untouched, so
the output may carry two ``Content-Type`` fields.
"""

from __future__ import annotations

import logging
from email.headerregistry import Address as HeaderAddress

from mailkit_core.address import Address
from mailkit_core.errors import MailkitError
from mailkit_core.headers import (
    CONTENT_TRANSFER_ENCODING,
    CONTENT_TYPE,
    MESSAGE_ID,
    Header,
)
from mailkit_core.message import Message

from mailkit_email.body import negotiate_mime
from mailkit_email.config import EmailConfig
from mailkit_email.message_id import MessageIdGenerator, RandomMessageIdGenerator
from mailkit_email.models import Email

logger = logging.getLogger("mailkit_email")


def _to_wire_list(
    addresses: tuple[Address, ...] | None,
) -> tuple[HeaderAddress, ...] | None:
    if addresses is None:
        return None
    return tuple(address.to_wire() for address in addresses)


class EmailConverter:
    """Convert :class:`Email` values to :class:`Message` values.

    Parameters
    ----------
    config:
        Converter configuration.  Uses defaults when *None*.
    id_generator:
        Source of Message-IDs.  Defaults to a
        :class:`RandomMessageIdGenerator`.
    """

    def __init__(
        self,
        config: EmailConfig | None = None,
        id_generator: MessageIdGenerator | None = None,
    ) -> None:
        self._config = config or EmailConfig()
        self._id_generator = id_generator or RandomMessageIdGenerator()

    def convert(self, email: Email) -> Message:
        """Build a new :class:`Message` from *email*.

        Every call generates a new Message-ID; nothing else differs between
        two conversions of the same email.

        Raises
        ------
        AddressConversionError
            If an address cannot be written to an ASCII header.
        HeaderNameError, HeaderValueError
            If an additional header or the subject is not valid ASCII.
        MultipartConstructionError, BodyEncodingError
            If the body cannot be rendered to bytes.
        """
        try:
            message = self._build(email)
        except MailkitError as exc:
            logger.error(
                "mailkit_email | stage=convert | code=%s | detail=%s",
                exc.code,
                exc.message,
            )
            raise

        if self._config.log_sample_data:
            logger.debug(
                "mailkit_email | stage=convert | message_id=%s | subject=%r",
                message.message_id,
                message.subject,
            )
        logger.debug(
            "mailkit_email | stage=convert | message_id=%s | recipients=%d | "
            "headers=%d | body_bytes=%d",
            message.message_id,
            len(message.envelope_recipients),
            len(message.additional_headers),
            len(message.body),
        )
        return message

    def _build(self, email: Email) -> Message:
        # Step 1: addresses
        sender = email.from_.to_wire()
        to = tuple(address.to_wire() for address in email.to)
        cc = _to_wire_list(email.cc)
        bcc = _to_wire_list(email.bcc)
        reply_to = email.reply_to.to_wire() if email.reply_to is not None else None

        # Step 2: this converter is the only source of Message-IDs
        kept = [entry for entry in email.additional_headers if not entry.matches(MESSAGE_ID)]
        if len(kept) != len(email.additional_headers):
            logger.debug(
                "mailkit_email | stage=convert | dropped=%d | reason=caller_message_id",
                len(email.additional_headers) - len(kept),
            )

        # Step 3: identifier
        message_id = self._id_generator.generate(sender.domain)

        # Step 4: headers, derived MIME headers last
        content_type, transfer_encoding = negotiate_mime(email.body)
        headers = [Header(entry.name, entry.value) for entry in kept]
        headers.append(Header(CONTENT_TYPE, content_type.header_value))
        if transfer_encoding is not None:
            headers.append(
                Header(CONTENT_TRANSFER_ENCODING, transfer_encoding.header_value)
            )

        # Step 5: assemble
        return Message(
            from_=sender,
            to=to,
            cc=cc,
            bcc=bcc,
            reply_to=reply_to,
            date=email.date,
            subject=email.subject,
            message_id=message_id,
            body=email.body.data,
            additional_headers=tuple(headers),
        )


def to_message(
    email: Email, id_generator: MessageIdGenerator | None = None
) -> Message:
    """Convert *email* with a default-configured :class:`EmailConverter`."""
    return EmailConverter(id_generator=id_generator).convert(email)
