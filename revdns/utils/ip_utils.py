"""IP address utilities for reverse lookups."""

import ipaddress


def is_valid_ipv4(ip: str) -> bool:
    """Validate if string is a valid IPv4 address.

    Args:
        ip: IP address string to validate.

    Returns:
        bool: True if valid IPv4, False otherwise.

    Examples:
        >>> is_valid_ipv4("17.172.224.47")
        True
        >>> is_valid_ipv4("999.1.1.1")
        False
        >>> is_valid_ipv4("::1")
        False
    """
    if not isinstance(ip, str):
        return False
    try:
        addr = ipaddress.ip_address(ip)
        return isinstance(addr, ipaddress.IPv4Address)
    except ValueError:
        return False


def pack_ipv4(ip: str) -> bytes:
    """Convert dotted-decimal IPv4 address to its 4-byte network-order form.

    Args:
        ip: IPv4 address in dotted-quad format.

    Returns:
        bytes: Packed address, most significant octet first.

    Raises:
        ValueError: If IP is not a valid IPv4 address.

    Examples:
        >>> pack_ipv4("17.172.224.47")
        b'\\x11\\xac\\xe0/'
    """
    if not is_valid_ipv4(ip):
        raise ValueError(f"Invalid IPv4 address: {ip}")

    return ipaddress.IPv4Address(ip).packed


def unpack_ipv4(packed: bytes) -> str:
    """Convert 4-byte network-order address back to dotted-decimal form.

    Raises:
        ValueError: If packed is not exactly 4 bytes long.
    """
    if len(packed) != 4:
        raise ValueError(f"Packed IPv4 address must be 4 bytes, got {len(packed)}")

    return str(ipaddress.IPv4Address(packed))


def reverse_pointer_name(ip: str) -> str:
    """Build the in-addr.arpa name used for PTR lookups.

    Args:
        ip: IPv4 address in dotted-quad format.

    Returns:
        str: Reverse pointer name without trailing dot.

    Raises:
        ValueError: If IP is not a valid IPv4 address.

    Examples:
        >>> reverse_pointer_name("17.172.224.47")
        '47.224.172.17.in-addr.arpa'
    """
    if not is_valid_ipv4(ip):
        raise ValueError(f"Invalid IPv4 address: {ip}")

    octets = ip.split(".")
    return ".".join(reversed(octets)) + ".in-addr.arpa"
