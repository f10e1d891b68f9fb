"""Reverse host name and alias resolution."""

import logging
import socket
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Sequence

from revdns.models.resolution import (
    ResolutionOutcome,
    ResolutionRequest,
    ResolutionResult,
)
from revdns.services.backends import SystemResolverBackend


logger = logging.getLogger(__name__)


def extract_aliases(alias_array: Sequence[str]) -> List[str]:
    """Extract real aliases from a decoded alias array.

    The first entry of a non-empty array is the reverse pointer name
    (e.g. "47.224.172.17.in-addr.arpa") and is always skipped.

    Args:
        alias_array: Alias array with the sentinel already stripped.

    Returns:
        List[str]: Aliases after index 0, in resolver order.
    """
    if not alias_array:
        return []
    return list(alias_array[1:])


class HostResolver:
    """Resolves an IPv4 address to its canonical name and aliases.

    Every call performs exactly one backend lookup; nothing is cached or
    retried. Lookup failures are returned as outcomes, never raised.
    """

    def __init__(self, backend: Optional[object] = None):
        """Initialize resolver.

        Args:
            backend: Object with lookup(packed, family) returning a HostEntry
                or None. Defaults to SystemResolverBackend.
        """
        self.backend = backend if backend is not None else SystemResolverBackend()
        # Serialize lookups for backends that cannot run concurrently
        self._lock = (
            None if getattr(self.backend, "thread_safe", False) else threading.Lock()
        )

    def _lookup(self, packed: bytes):
        if self._lock is None:
            return self.backend.lookup(packed, socket.AF_INET)
        with self._lock:
            return self.backend.lookup(packed, socket.AF_INET)

    def resolve(self, address: str) -> ResolutionOutcome:
        """Resolve an address to a ResolutionOutcome.

        Args:
            address: Dotted-decimal IPv4 address.

        Returns:
            ResolutionOutcome: RESOLVED, ADDRESS_UNRESOLVABLE,
            NO_ALIASES_AVAILABLE or INVALID_ADDRESS.
        """
        start = time.time()
        outcome = self._resolve(ResolutionRequest(address))
        logger.debug(
            f"Resolved {address!r}: {outcome.kind.value}",
            extra={
                "address": address,
                "outcome": outcome.kind.value,
                "duration_ms": int((time.time() - start) * 1000),
            },
        )
        return outcome

    def _resolve(self, request: ResolutionRequest) -> ResolutionOutcome:
        if not request.is_valid():
            return ResolutionOutcome.invalid(request.address)

        entry = self._lookup(request.packed())
        if entry is None or not entry.hostname:
            return ResolutionOutcome.unresolvable(request.address)

        if entry.aliases is None:
            return ResolutionOutcome.no_aliases(request.address, entry.hostname)

        result = ResolutionResult(
            canonical_name=entry.hostname,
            aliases=extract_aliases(entry.aliases),
        )
        return ResolutionOutcome.resolved(request.address, result)

    def resolve_many(
        self, addresses: Sequence[str], concurrency: int = 10
    ) -> List[ResolutionOutcome]:
        """Resolve several addresses concurrently.

        Args:
            addresses: Dotted-decimal IPv4 addresses.
            concurrency: Max concurrent lookups.

        Returns:
            List[ResolutionOutcome]: Outcomes in the order of `addresses`.
        """
        outcomes: List[Optional[ResolutionOutcome]] = [None] * len(addresses)
        if not addresses:
            return []

        with ThreadPoolExecutor(max_workers=concurrency) as executor:
            futures = {
                executor.submit(self.resolve, address): index
                for index, address in enumerate(addresses)
            }

            for future in as_completed(futures):
                index = futures[future]
                try:
                    outcomes[index] = future.result()
                except Exception as e:
                    # Unexpected backend error - treat as unresolvable
                    logger.error(f"Unexpected error resolving {addresses[index]}: {e}")
                    outcomes[index] = ResolutionOutcome.unresolvable(addresses[index])

        return outcomes  # type: ignore
