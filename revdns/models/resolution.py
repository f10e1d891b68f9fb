"""Reverse resolution request, result and outcome models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from revdns.utils.ip_utils import is_valid_ipv4, pack_ipv4


class OutcomeKind(Enum):
    """Classification of a reverse resolution."""

    RESOLVED = "RESOLVED"  # Canonical name found, aliases extracted
    ADDRESS_UNRESOLVABLE = "ADDRESS_UNRESOLVABLE"  # No entry, error or timeout
    NO_ALIASES_AVAILABLE = "NO_ALIASES_AVAILABLE"  # Name found, alias field absent
    INVALID_ADDRESS = "INVALID_ADDRESS"  # Input is not dotted-decimal IPv4


# Process exit codes per outcome
EXIT_CODES = {
    OutcomeKind.RESOLVED: 0,
    OutcomeKind.ADDRESS_UNRESOLVABLE: 1,
    OutcomeKind.NO_ALIASES_AVAILABLE: 2,
    OutcomeKind.INVALID_ADDRESS: 3,
}


@dataclass(frozen=True)
class ResolutionRequest:
    """A single reverse lookup request.

    Attributes:
        address: Dotted-decimal IPv4 address to resolve.
    """

    address: str

    def is_valid(self) -> bool:
        """Check if the address parses as IPv4."""
        return is_valid_ipv4(self.address)

    def packed(self) -> bytes:
        """Return the 4-byte network-order form of the address.

        Raises:
            ValueError: If the address is not a valid IPv4 address.
        """
        return pack_ipv4(self.address)


@dataclass
class ResolutionResult:
    """Names resolved for an address.

    Attributes:
        canonical_name: Primary host name returned by the resolver.
        aliases: Secondary names, in the order the resolver returned them.
    """

    canonical_name: str
    aliases: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.canonical_name:
            raise ValueError("canonical_name must not be empty")

    def all_names(self) -> List[str]:
        """Return canonical name followed by every alias."""
        return [self.canonical_name, *self.aliases]


@dataclass
class ResolutionOutcome:
    """Tagged outcome of HostResolver.resolve().

    Exactly one of the four OutcomeKind variants. `result` is set only for
    RESOLVED; `canonical_name` is set for RESOLVED and NO_ALIASES_AVAILABLE.

    Attributes:
        kind: Outcome variant.
        address: Address the caller asked about.
        result: Resolved names (RESOLVED only).
        canonical_name: Name found before the alias field was inspected.
    """

    kind: OutcomeKind
    address: str
    result: Optional[ResolutionResult] = None
    canonical_name: Optional[str] = None

    @classmethod
    def resolved(cls, address: str, result: ResolutionResult) -> "ResolutionOutcome":
        return cls(
            kind=OutcomeKind.RESOLVED,
            address=address,
            result=result,
            canonical_name=result.canonical_name,
        )

    @classmethod
    def unresolvable(cls, address: str) -> "ResolutionOutcome":
        return cls(kind=OutcomeKind.ADDRESS_UNRESOLVABLE, address=address)

    @classmethod
    def no_aliases(cls, address: str, canonical_name: str) -> "ResolutionOutcome":
        return cls(
            kind=OutcomeKind.NO_ALIASES_AVAILABLE,
            address=address,
            canonical_name=canonical_name,
        )

    @classmethod
    def invalid(cls, address: str) -> "ResolutionOutcome":
        return cls(kind=OutcomeKind.INVALID_ADDRESS, address=address)

    def is_resolved(self) -> bool:
        """Check if the address resolved to a canonical name and alias list.

        Returns:
            bool: True if kind is RESOLVED, False otherwise.
        """
        return self.kind == OutcomeKind.RESOLVED

    def is_unresolvable(self) -> bool:
        return self.kind == OutcomeKind.ADDRESS_UNRESOLVABLE

    def has_no_aliases(self) -> bool:
        return self.kind == OutcomeKind.NO_ALIASES_AVAILABLE

    def is_invalid(self) -> bool:
        return self.kind == OutcomeKind.INVALID_ADDRESS

    @property
    def aliases(self) -> List[str]:
        """Aliases of a RESOLVED outcome, empty for every other kind."""
        if self.result is None:
            return []
        return list(self.result.aliases)

    @property
    def exit_code(self) -> int:
        """Process exit code for this outcome (0 only when resolved)."""
        return EXIT_CODES[self.kind]

    def to_json(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary.

        Returns:
            Dict[str, Any]: Outcome fields; aliases is null unless RESOLVED.
        """
        return {
            "address": self.address,
            "outcome": self.kind.value,
            "canonical_name": self.canonical_name,
            "aliases": self.aliases if self.is_resolved() else None,
        }
