"""Event-driven delivery of reverse resolution outcomes.

Runs the blocking HostResolver in an executor and hands the outcome either
to an awaiting coroutine or to a registered callback.
"""

import asyncio
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from revdns.models.resolution import ResolutionOutcome
from revdns.services.host_resolver import HostResolver


logger = logging.getLogger(__name__)


OutcomeCallback = Callable[[ResolutionOutcome], None]


class PendingResolution:
    """Handle for a resolution started with AsyncHostResolver.start().

    The callback runs at most once. Cancelling deregisters it and releases
    the underlying future; a lookup already running in a worker thread is
    left to finish and its result is discarded.
    """

    def __init__(self, address: str, future: Future, callback: OutcomeCallback):
        self.address = address
        self._future: Optional[Future] = future
        self._callback: Optional[OutcomeCallback] = callback
        self._lock = threading.Lock()
        self._claimed = False
        self._delivered = False
        self._cancelled = False
        future.add_done_callback(self._on_done)

    def _release(self) -> None:
        self._future = None
        self._callback = None

    def _on_done(self, future: Future) -> None:
        with self._lock:
            if self._cancelled or self._claimed:
                return
            callback = self._callback
            self._claimed = True
            self._release()

        if future.cancelled():
            return

        exc = future.exception()
        if exc is not None:
            logger.error(f"Unexpected error resolving {self.address}: {exc}")
            outcome = ResolutionOutcome.unresolvable(self.address)
        else:
            outcome = future.result()

        if callback is not None:
            callback(outcome)
        self._delivered = True

    def cancel(self) -> bool:
        """Deregister the callback before it fires.

        Returns:
            bool: True if the resolution was cancelled, False if it had
            already completed.
        """
        with self._lock:
            if self._claimed:
                return False
            if self._cancelled:
                return True
            self._cancelled = True
            future = self._future
            self._release()

        if future is not None:
            future.cancel()
        return True

    def done(self) -> bool:
        """Check if the callback has returned."""
        return self._delivered

    def cancelled(self) -> bool:
        return self._cancelled


class AsyncHostResolver:
    """Asynchronous front-end for HostResolver.

    Delivers the same four outcomes with the same alias rule as the
    synchronous resolver.
    """

    def __init__(
        self,
        resolver: Optional[HostResolver] = None,
        executor: Optional[ThreadPoolExecutor] = None,
        max_workers: int = 10,
    ):
        """Initialize async resolver.

        Args:
            resolver: Synchronous resolver to delegate to.
            executor: Executor running lookups; one is created if omitted.
            max_workers: Worker count for a created executor.
        """
        self.resolver = resolver if resolver is not None else HostResolver()
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="revdns"
        )

    async def resolve(self, address: str) -> ResolutionOutcome:
        """Resolve an address without blocking the event loop."""
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(
                self.executor, self.resolver.resolve, address
            )
        except Exception as e:
            # Unexpected backend error - treat as unresolvable
            logger.error(f"Unexpected error resolving {address}: {e}")
            return ResolutionOutcome.unresolvable(address)

    async def resolve_many(self, addresses: Sequence[str]) -> List[ResolutionOutcome]:
        """Resolve several addresses, outcomes in input order."""
        return list(await asyncio.gather(*(self.resolve(a) for a in addresses)))

    def start(self, address: str, callback: OutcomeCallback) -> PendingResolution:
        """Start a resolution and deliver its outcome to a callback.

        The callback is invoked exactly once from a worker thread, unless the
        returned handle is cancelled first.

        Args:
            address: Dotted-decimal IPv4 address.
            callback: Receives the final ResolutionOutcome.

        Returns:
            PendingResolution: Handle used to cancel or inspect the request.
        """
        future = self.executor.submit(self.resolver.resolve, address)
        return PendingResolution(address, future, callback)

    def close(self) -> None:
        """Shut down the executor if this instance created it."""
        if self._owns_executor:
            self.executor.shutdown(wait=True)

    def __enter__(self) -> "AsyncHostResolver":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
