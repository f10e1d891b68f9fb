"""Host entry record returned by resolver backends."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class HostEntry:
    """Decoded host record for one reverse lookup.

    Backends build this from whatever the underlying facility hands back, so
    the resolver only ever sees bounded Python sequences.

    Attributes:
        hostname: Canonical host name.
        aliases: Alias array with the sentinel already stripped, or None when
            the facility reported no alias field at all.
        addresses: Addresses attached to the record.
    """

    hostname: str
    aliases: Optional[Tuple[str, ...]] = ()
    addresses: Tuple[str, ...] = ()

    def has_alias_field(self) -> bool:
        """Check if the alias field was present (possibly empty)."""
        return self.aliases is not None
