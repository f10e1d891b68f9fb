"""Unit tests for the asynchronous delivery mode."""

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

from unittest.mock import MagicMock

from revdns.models.host_entry import HostEntry
from revdns.models.resolution import OutcomeKind
from revdns.services.async_resolver import AsyncHostResolver
from revdns.services.host_resolver import HostResolver


class BlockingBackend:
    """Backend that waits for a release signal before answering."""

    thread_safe = True

    def __init__(self):
        self.release = threading.Event()
        self.started = threading.Event()

    def lookup(self, packed, family):
        self.started.set()
        self.release.wait(5)
        return HostEntry(hostname="slow.example.com", aliases=())


class TestAsyncResolve:
    """Test awaitable resolution."""

    def test_resolve_matches_sync_outcome(self, fake_backend):
        resolver = HostResolver(fake_backend)

        with AsyncHostResolver(resolver) as async_resolver:
            outcome = asyncio.run(async_resolver.resolve("17.172.224.47"))

        assert outcome == resolver.resolve("17.172.224.47")
        assert outcome.result.aliases == ["alias1.apple.com", "alias2.apple.com"]

    def test_resolve_all_outcome_kinds(self, fake_backend):
        addresses = ["17.172.224.47", "192.0.2.99", "192.0.2.20", "999.1.1.1"]

        with AsyncHostResolver(HostResolver(fake_backend)) as async_resolver:
            outcomes = asyncio.run(async_resolver.resolve_many(addresses))

        assert [o.kind for o in outcomes] == [
            OutcomeKind.RESOLVED,
            OutcomeKind.ADDRESS_UNRESOLVABLE,
            OutcomeKind.NO_ALIASES_AVAILABLE,
            OutcomeKind.INVALID_ADDRESS,
        ]


class TestCallbackDelivery:
    """Test start() / PendingResolution."""

    def test_callback_invoked_exactly_once(self, fake_backend):
        received = []
        delivered = threading.Event()

        def callback(outcome):
            received.append(outcome)
            delivered.set()

        with AsyncHostResolver(HostResolver(fake_backend)) as async_resolver:
            pending = async_resolver.start("17.172.224.47", callback)
            assert delivered.wait(5)

        assert len(received) == 1
        assert received[0].result.canonical_name == "example.apple.com"
        assert pending.done() is True
        assert pending.cancelled() is False
        assert pending.cancel() is False

    def test_handle_released_after_completion(self, fake_backend):
        delivered = threading.Event()

        with AsyncHostResolver(HostResolver(fake_backend)) as async_resolver:
            pending = async_resolver.start("192.0.2.10", lambda o: delivered.set())
            assert delivered.wait(5)

        assert pending._future is None
        assert pending._callback is None

    def test_cancelled_resolution_never_delivers(self):
        backend = BlockingBackend()
        executor = ThreadPoolExecutor(max_workers=1)
        async_resolver = AsyncHostResolver(HostResolver(backend), executor=executor)
        callback = MagicMock()

        try:
            # First request occupies the only worker; second one stays queued
            first = async_resolver.start("192.0.2.1", lambda o: None)
            assert backend.started.wait(5)
            second = async_resolver.start("192.0.2.2", callback)

            assert second.cancel() is True
            assert second.cancelled() is True
            assert second._future is None
        finally:
            backend.release.set()
            executor.shutdown(wait=True)

        callback.assert_not_called()
        assert first.done() is True

    def test_cancel_while_running_discards_result(self):
        backend = BlockingBackend()
        callback = MagicMock()

        with AsyncHostResolver(HostResolver(backend)) as async_resolver:
            pending = async_resolver.start("192.0.2.1", callback)
            assert backend.started.wait(5)

            assert pending.cancel() is True
            backend.release.set()

        callback.assert_not_called()
        assert pending.done() is False

    def test_unexpected_error_delivered_as_unresolvable(self):
        backend = MagicMock()
        backend.thread_safe = True
        backend.lookup.side_effect = RuntimeError("boom")
        received = []
        delivered = threading.Event()

        def callback(outcome):
            received.append(outcome)
            delivered.set()

        with AsyncHostResolver(HostResolver(backend)) as async_resolver:
            async_resolver.start("192.0.2.1", callback)
            assert delivered.wait(5)

        assert received[0].is_unresolvable() is True

    def test_close_keeps_external_executor(self, fake_backend):
        executor = ThreadPoolExecutor(max_workers=1)
        async_resolver = AsyncHostResolver(HostResolver(fake_backend), executor=executor)

        async_resolver.close()

        # Caller-owned executor still accepts work
        assert executor.submit(lambda: 42).result() == 42
        executor.shutdown()


class TestAsyncErrorHandling:
    """Test backend errors collapse the same way as in the sync resolver."""

    def test_resolve_many_keeps_batch_on_backend_error(self):
        backend = MagicMock()
        backend.thread_safe = True
        backend.lookup.side_effect = RuntimeError("boom")
        resolver = HostResolver(backend)

        with AsyncHostResolver(resolver) as async_resolver:
            outcomes = asyncio.run(
                async_resolver.resolve_many(["192.0.2.1", "not.an.ip"])
            )

        assert [o.kind for o in outcomes] == [
            OutcomeKind.ADDRESS_UNRESOLVABLE,
            OutcomeKind.INVALID_ADDRESS,
        ]
        assert outcomes[0] == resolver.resolve_many(["192.0.2.1"])[0]

    def test_resolve_backend_error_is_unresolvable(self):
        backend = MagicMock()
        backend.thread_safe = True
        backend.lookup.side_effect = RuntimeError("boom")

        with AsyncHostResolver(HostResolver(backend)) as async_resolver:
            outcome = asyncio.run(async_resolver.resolve("192.0.2.1"))

        assert outcome.is_unresolvable() is True
        assert outcome.address == "192.0.2.1"


def test_done_only_after_callback_returns(fake_backend):
    """done() stays False while the callback is still running."""
    seen_during_callback = []
    handle = []
    ready = threading.Event()
    delivered = threading.Event()

    def callback(outcome):
        ready.wait(5)
        seen_during_callback.append(handle[0].done())
        delivered.set()

    with AsyncHostResolver(HostResolver(fake_backend)) as async_resolver:
        handle.append(async_resolver.start("17.172.224.47", callback))
        ready.set()
        assert delivered.wait(5)

    assert seen_during_callback == [False]
    assert handle[0].done() is True
