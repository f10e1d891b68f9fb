"""pytest fixtures for testing."""

import socket

import pytest

from revdns.models.host_entry import HostEntry


class FakeBackend:
    """Backend returning canned host entries keyed by dotted address."""

    name = "fake"
    thread_safe = True

    def __init__(self, entries=None):
        self.entries = dict(entries or {})
        self.calls = []

    def lookup(self, packed, family):
        self.calls.append((packed, family))
        return self.entries.get(socket.inet_ntoa(packed))


@pytest.fixture
def apple_entry():
    """Host entry with a reverse-pointer artifact and two aliases."""
    return HostEntry(
        hostname="example.apple.com",
        aliases=(
            "47.224.172.17.in-addr.arpa",
            "alias1.apple.com",
            "alias2.apple.com",
        ),
        addresses=("17.172.224.47",),
    )


@pytest.fixture
def fake_backend(apple_entry):
    """Fake backend knowing a handful of addresses."""
    return FakeBackend(
        {
            "17.172.224.47": apple_entry,
            "192.0.2.10": HostEntry(hostname="solo.example.com", aliases=()),
            "192.0.2.20": HostEntry(hostname="bare.example.com", aliases=None),
        }
    )


@pytest.fixture
def backend_factory():
    """Build a FakeBackend from a {address: HostEntry} mapping."""
    return FakeBackend
