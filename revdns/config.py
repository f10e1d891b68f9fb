"""Configuration module for the reverse-DNS resolver.

Loads and validates environment variables.
"""

import os
from dataclasses import dataclass
from typing import List

from revdns.services.backends import DnsResolverBackend, SystemResolverBackend
from revdns.services.reporter import OUTPUT_FORMATS
from revdns.utils.ip_utils import is_valid_ipv4


RESOLVER_BACKENDS = ("system", "dns")


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Resolution Configuration
    addresses: List[str]
    resolver_backend: str
    dns_timeout: int
    dns_nameservers: List[str]
    concurrency: int

    # Operational Configuration
    output_format: str
    verbose: bool

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Raises:
            ValueError: If variables are invalid.

        Returns:
            Config: Validated configuration instance.
        """
        addresses = cls._get_list_env("RESOLVE_ADDRESSES")

        resolver_backend = os.getenv("RESOLVER_BACKEND", "system").strip().lower()
        if resolver_backend not in RESOLVER_BACKENDS:
            raise ValueError(
                f"RESOLVER_BACKEND must be one of: {', '.join(RESOLVER_BACKENDS)}"
            )

        dns_timeout = cls._get_int_env("DNS_TIMEOUT", "5")
        if not 1 <= dns_timeout <= 60:
            raise ValueError("DNS_TIMEOUT must be between 1 and 60 seconds")

        dns_nameservers = cls._get_list_env("DNS_NAMESERVERS")
        for nameserver in dns_nameservers:
            if not is_valid_ipv4(nameserver):
                raise ValueError(
                    f"DNS_NAMESERVERS contains invalid IPv4 address: {nameserver}"
                )

        concurrency = cls._get_int_env("RESOLVE_CONCURRENCY", "10")
        if not 1 <= concurrency <= 100:
            raise ValueError("RESOLVE_CONCURRENCY must be between 1 and 100")

        # Operational Configuration
        output_format = os.getenv("OUTPUT_FORMAT", "text").strip().lower()
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"OUTPUT_FORMAT must be one of: {', '.join(OUTPUT_FORMATS)}"
            )

        verbose_str = os.getenv("VERBOSE", "false").lower()
        verbose = verbose_str in ("true", "1", "yes")

        return cls(
            addresses=addresses,
            resolver_backend=resolver_backend,
            dns_timeout=dns_timeout,
            dns_nameservers=dns_nameservers,
            concurrency=concurrency,
            output_format=output_format,
            verbose=verbose,
        )

    @staticmethod
    def _get_list_env(key: str) -> List[str]:
        """Get comma-separated environment variable as a list.

        Args:
            key: Environment variable name.

        Returns:
            List[str]: Stripped, non-empty items (empty if unset).
        """
        value = os.getenv(key, "")
        return [item.strip() for item in value.split(",") if item.strip()]

    @staticmethod
    def _get_int_env(key: str, default: str) -> int:
        value = os.getenv(key, default)
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{key} must be an integer, got {value!r}") from None

    def build_backend(self):
        """Create the resolver backend selected by RESOLVER_BACKEND.

        Returns:
            SystemResolverBackend or DnsResolverBackend.
        """
        if self.resolver_backend == "dns":
            return DnsResolverBackend(
                nameservers=self.dns_nameservers, timeout=self.dns_timeout
            )
        return SystemResolverBackend()
