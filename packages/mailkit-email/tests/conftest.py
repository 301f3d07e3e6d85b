"""Shared fixtures for mailkit-email tests."""

from __future__ import annotations

from datetime import datetime, timezone
from itertools import count

import pytest

from mailkit_email.body import TextBody
from mailkit_email.converter import EmailConverter
from mailkit_email.message_id import RandomMessageIdGenerator
from mailkit_email.models import Email

PLAIN_BODY = "Hello, World!"
HTML_BODY = "<h1>Hello, World!</h1>"
FIXED_DATE = datetime(2021, 1, 1, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Deterministic randomness
# ---------------------------------------------------------------------------


class CountingRandom:
    """Random source returning 0x00.., 0x01.., ... on successive calls."""

    def __init__(self) -> None:
        self._counter = count()
        self.calls = 0

    def __call__(self, n: int) -> bytes:
        self.calls += 1
        return bytes([next(self._counter) % 256]) * n


@pytest.fixture
def counting_random() -> CountingRandom:
    return CountingRandom()


@pytest.fixture
def fixed_generator(counting_random: CountingRandom) -> RandomMessageIdGenerator:
    return RandomMessageIdGenerator(random_bytes=counting_random)


@pytest.fixture
def converter(fixed_generator: RandomMessageIdGenerator) -> EmailConverter:
    return EmailConverter(id_generator=fixed_generator)


# ---------------------------------------------------------------------------
# Emails
# ---------------------------------------------------------------------------


@pytest.fixture
def text_email() -> Email:
    """The canonical plain-text email."""
    return Email(
        to=["r@example.com"],
        from_="s@example.com",
        subject="Test Email",
        body=TextBody(content=PLAIN_BODY),
        date=FIXED_DATE,
    )


@pytest.fixture
def alternative_email() -> Email:
    return Email.compose(
        to=["recipient@example.com"],
        from_="sender@example.com",
        subject="Newsletter",
        text="Plain text version",
        html="<p>HTML version</p>",
        date=FIXED_DATE,
    )
