"""pytest configuration and fixtures for uartpacket tests.

Provides:
- random_payload: Random payload generator with a fixed seed
- Markers for unit tests
"""

import random
from collections.abc import Callable

import pytest

from uartpacket.protocol import HEADER, MAX_PAYLOAD_SIZE, MIN_PAYLOAD_SIZE


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")


@pytest.fixture
def rng() -> random.Random:
    """Seeded RNG so failures are reproducible."""
    return random.Random(0x5A5A)


@pytest.fixture
def random_payload(rng: random.Random) -> Callable[..., bytes]:
    """Return a function generating random payloads that contain no header.

    The header is excluded so tests can place frames by index without
    the payload itself being mistaken for a frame start.
    """

    def make(size: int | None = None) -> bytes:
        if size is None:
            size = rng.randint(MIN_PAYLOAD_SIZE, MAX_PAYLOAD_SIZE)
        while True:
            payload = bytes(rng.getrandbits(8) for _ in range(size))
            if HEADER not in payload:
                return payload

    return make
