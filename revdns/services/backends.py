"""Resolver backends wrapping the OS resolver and dnspython.

Backends are the only place that talks to a name-resolution facility. They
turn whatever the facility returns into a HostEntry with bounded alias
sequences, and map every lookup failure to None.
"""

import logging
import socket
from typing import Iterable, List, Optional, Tuple

import dns.exception
import dns.name
import dns.resolver

from revdns.models.host_entry import HostEntry
from revdns.utils.ip_utils import reverse_pointer_name, unpack_ipv4


logger = logging.getLogger(__name__)


def decode_alias_array(raw: Optional[Iterable[object]]) -> Optional[Tuple[str, ...]]:
    """Decode a sentinel-terminated alias array into a bounded tuple.

    Iteration stops at the first None entry; nothing after it is read.
    Entries that are not text (or bytes decodable as UTF-8) are dropped and
    reported, so a partially decodable array never aborts a lookup.

    Args:
        raw: Alias array from the facility, or None if the field was absent.

    Returns:
        Optional[Tuple[str, ...]]: Decoded aliases, or None if raw is None.

    Examples:
        >>> decode_alias_array(["a.example", None, "never.read"])
        ('a.example',)
        >>> decode_alias_array([None])
        ()
    """
    if raw is None:
        return None

    decoded: List[str] = []
    raw_length = 0
    for entry in raw:
        if entry is None:
            break
        raw_length += 1

        if isinstance(entry, str):
            decoded.append(entry)
        elif isinstance(entry, (bytes, bytearray)):
            try:
                decoded.append(bytes(entry).decode("utf-8"))
            except UnicodeDecodeError:
                continue

    if len(decoded) < raw_length:
        logger.warning(
            "Alias array decoded to fewer entries than it holds",
            extra={"raw_length": raw_length, "decoded_length": len(decoded)},
        )

    return tuple(decoded)


def _require_ipv4(family: int) -> None:
    if family != socket.AF_INET:
        raise ValueError(f"Unsupported address family: {family}")


class SystemResolverBackend:
    """Reverse lookups through the operating system resolver.

    Uses socket.gethostbyaddr, which may consult hosts files, local caches or
    the network. Timeouts are controlled by the OS resolver configuration.
    """

    name = "system"
    thread_safe = True

    def lookup(self, packed: bytes, family: int = socket.AF_INET) -> Optional[HostEntry]:
        """Resolve a packed IPv4 address.

        Args:
            packed: 4-byte network-order address.
            family: Address family tag, must be AF_INET.

        Returns:
            Optional[HostEntry]: Decoded record, or None if no entry was found
            or the lookup failed.
        """
        _require_ipv4(family)
        ip = socket.inet_ntop(family, packed)

        try:
            hostname, aliaslist, ipaddrlist = socket.gethostbyaddr(ip)
        except (OSError, UnicodeError) as e:
            # herror, gaierror and timeout are all OSError subclasses
            logger.debug(f"System lookup failed for {ip}: {type(e).__name__}: {e}")
            return None

        if not hostname:
            return None

        return HostEntry(
            hostname=hostname,
            aliases=decode_alias_array(aliaslist),
            addresses=tuple(ipaddrlist or ()),
        )


class DnsResolverBackend:
    """Reverse lookups through PTR queries with dnspython.

    The record is laid out like the system resolver's: the alias array
    starts with the reverse pointer name, followed by every PTR target
    after the first.
    """

    name = "dns"
    thread_safe = True

    def __init__(self, nameservers: Optional[List[str]] = None, timeout: int = 5):
        """Initialize DNS backend.

        Args:
            nameservers: Nameserver IPs to query; system configuration if empty.
            timeout: Total lifetime of each query in seconds.
        """
        self.nameservers = list(nameservers or [])
        self.timeout = timeout

    def _build_resolver(self) -> dns.resolver.Resolver:
        if self.nameservers:
            resolver = dns.resolver.Resolver(configure=False)
            resolver.nameservers = self.nameservers
        else:
            resolver = dns.resolver.Resolver()
        resolver.timeout = self.timeout
        resolver.lifetime = self.timeout  # Total timeout for query
        return resolver

    def lookup(self, packed: bytes, family: int = socket.AF_INET) -> Optional[HostEntry]:
        """Resolve a packed IPv4 address with a PTR query.

        Args:
            packed: 4-byte network-order address.
            family: Address family tag, must be AF_INET.

        Returns:
            Optional[HostEntry]: Decoded record, or None on NXDOMAIN, empty
            answer, timeout or any other DNS failure.
        """
        _require_ipv4(family)
        ip = unpack_ipv4(packed)
        pointer = reverse_pointer_name(ip)

        try:
            resolver = self._build_resolver()
            answers = resolver.resolve(dns.name.from_text(pointer), "PTR")
        except (
            dns.resolver.NXDOMAIN,
            dns.resolver.NoAnswer,
            dns.resolver.NoNameservers,
            dns.exception.Timeout,
            dns.exception.DNSException,
        ) as e:
            logger.debug(f"PTR lookup failed for {ip}: {type(e).__name__}")
            return None

        targets = [str(rdata).rstrip(".") for rdata in answers]
        targets = [target for target in targets if target]
        if not targets:
            return None

        return HostEntry(
            hostname=targets[0],
            aliases=decode_alias_array([pointer, *targets[1:]]),
            addresses=(ip,),
        )
