"""Main entry point for the reverse-DNS resolver."""

import logging
import sys
import time
from typing import List, Optional

from revdns.config import Config
from revdns.services.host_resolver import HostResolver
from revdns.services.logger import log_resolution, log_run_summary, setup_logging
from revdns.services.reporter import ResolutionReporter


logger = logging.getLogger(__name__)

# Apple
DEFAULT_ADDRESS = "17.172.224.47"


def select_addresses(argv: List[str], config: Config) -> List[str]:
    """Pick addresses to resolve.

    Command-line arguments win over RESOLVE_ADDRESSES; with neither, the
    default address is used.
    """
    if argv:
        return list(argv)
    if config.addresses:
        return list(config.addresses)
    return [DEFAULT_ADDRESS]


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function.

    Args:
        argv: Addresses to resolve; defaults to sys.argv[1:].

    Returns:
        int: Highest outcome exit code, or 1 on a fatal error.
    """
    start_time = time.time()
    if argv is None:
        argv = sys.argv[1:]

    try:
        config = Config.from_env()
    except ValueError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(config.verbose)

    try:
        addresses = select_addresses(argv, config)
        backend = config.build_backend()
        logger.info(
            f"Resolving {len(addresses)} address(es) with {backend.name} backend"
        )

        resolver = HostResolver(backend)
        outcomes = resolver.resolve_many(addresses, concurrency=config.concurrency)

        for outcome in outcomes:
            log_resolution(
                address=outcome.address,
                outcome=outcome.kind.value,
                canonical_name=outcome.canonical_name,
                alias_count=len(outcome.aliases),
            )

        sys.stdout.write(ResolutionReporter.render(outcomes, config.output_format))
        sys.stdout.flush()

        summary = ResolutionReporter.summarize(outcomes)
        log_run_summary(duration_sec=time.time() - start_time, **summary)

        return max((outcome.exit_code for outcome in outcomes), default=0)

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
