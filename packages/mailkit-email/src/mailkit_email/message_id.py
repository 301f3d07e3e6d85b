"""Message-ID generation.

:class:`RandomMessageIdGenerator` draws 16 random bytes, hex-encodes them in
lower case, and pairs the 32-character token with the sender's domain,
producing ``<3f2a...c9@example.com>``.  Uniqueness is probabilistic; nothing
is tracked between calls.

The converter accepts anything satisfying :class:`MessageIdGenerator`, so
tests can substitute a fixed random source.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from mailkit_core.errors import MessageIDError
from mailkit_core.message import MessageID

MESSAGE_ID_NBYTES = 16


@runtime_checkable
class MessageIdGenerator(Protocol):
    """Interface for Message-ID generators."""

    def generate(self, domain: str) -> MessageID:
        """Return a fresh identifier for a message sent from *domain*."""
        ...


class RandomMessageIdGenerator:
    """Generate identifiers from ``MESSAGE_ID_NBYTES`` random bytes.

    Parameters
    ----------
    random_bytes:
        Callable returning *n* random bytes.  Defaults to
        :func:`secrets.token_bytes`, which is safe for concurrent use.
    """

    def __init__(
        self, random_bytes: Callable[[int], bytes] = secrets.token_bytes
    ) -> None:
        self._random_bytes = random_bytes

    def generate(self, domain: str) -> MessageID:
        raw = self._random_bytes(MESSAGE_ID_NBYTES)
        if len(raw) != MESSAGE_ID_NBYTES:
            raise MessageIDError(
                f"Random source returned {len(raw)} bytes, "
                f"expected {MESSAGE_ID_NBYTES}",
                field="unique_id",
            )
        return MessageID(unique_id=raw.hex(), domain=domain)
