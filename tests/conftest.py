# tests/conftest.py
import random

import pytest

from aggbls import TINY_BLS, Z_BLS, Keypair, Message


@pytest.fixture(scope="module", params=[Z_BLS, TINY_BLS], ids=["usual", "tiny"])
def engine(request):
    """Runs a test module once per orientation."""
    return request.param


@pytest.fixture
def rng():
    """A seeded randomness source so key material is reproducible."""
    return random.Random(0xB15)


@pytest.fixture(scope="module")
def keypairs(engine):
    """Three keypairs under the current engine."""
    source = random.Random(2024)
    return [Keypair.generate(engine, source) for _ in range(3)]


@pytest.fixture(scope="module")
def messages():
    return [
        Message.new(b"aggbls-test", b"Hello, world!"),
        Message.new(b"aggbls-test", b"This is a test message."),
        Message.new(b"aggbls-test", b"Another message for aggregation."),
    ]
