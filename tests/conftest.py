"""
Shared test configuration and fixtures for record resolution tests.

Provides an in-memory TXT client standing in for DNS so resolver and HTTP
tests never touch the network.
"""

import pytest

from selfie.records.resolve.batch import RecordsResolver
from selfie.records.resolve.txt import TxtLookup
from tests.test_helpers import FakeTxtClient


@pytest.fixture
def fake_client() -> FakeTxtClient:
    """Provide a fake TXT client with records for example.com."""
    return FakeTxtClient(
        answers={
            "_pgp.example.com": TxtLookup.found(["v=1", "k=abc"]),
            "_nostr.example.com": TxtLookup.found(["npub1abc"]),
            "_bitcoin-payment.example.com": TxtLookup.found([]),
            "alice.user._pgp.example.com": TxtLookup.found(["alice-key"]),
        }
    )


@pytest.fixture
def resolver(fake_client: FakeTxtClient) -> RecordsResolver:
    """Provide a records resolver backed by the fake TXT client."""
    return RecordsResolver(client=fake_client)
