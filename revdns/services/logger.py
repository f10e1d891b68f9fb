"""Structured JSON logging."""

import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger


# Run ID for correlation across log entries of one process
RUN_ID = str(uuid.uuid4())


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter that adds run_id and standardized fields."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to log record.

        Args:
            log_record: The log record to modify.
            record: The original logging.LogRecord.
            message_dict: Additional fields from the logging call.
        """
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = (
            datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"
        )
        log_record["run_id"] = RUN_ID
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure structured JSON logging for the application.

    Logs go to stderr so stdout stays free for resolution output.

    Args:
        verbose: Log at DEBUG instead of INFO.

    Returns:
        logging.Logger: Configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    json_handler = logging.StreamHandler(sys.stderr)
    formatter = CustomJsonFormatter("%(message)s")
    json_handler.setFormatter(formatter)
    logger.addHandler(json_handler)

    return logger


def log_resolution(
    address: str,
    outcome: str,
    canonical_name: str | None,
    alias_count: int,
) -> None:
    """Log structured per-address resolution result.

    Args:
        address: Address that was resolved.
        outcome: OutcomeKind value.
        canonical_name: Canonical name, if one was found.
        alias_count: Number of aliases extracted.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "Resolution completed",
        extra={
            "address": address,
            "outcome": outcome,
            "canonical_name": canonical_name,
            "alias_count": alias_count,
        },
    )


def log_run_summary(
    total: int,
    resolved: int,
    unresolvable: int,
    no_aliases: int,
    invalid: int,
    duration_sec: float,
) -> None:
    """Log run completion summary.

    Args:
        total: Number of addresses processed.
        resolved: Number of RESOLVED outcomes.
        unresolvable: Number of ADDRESS_UNRESOLVABLE outcomes.
        no_aliases: Number of NO_ALIASES_AVAILABLE outcomes.
        invalid: Number of INVALID_ADDRESS outcomes.
        duration_sec: Total run time in seconds.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "Run completed",
        extra={
            "total": total,
            "resolved": resolved,
            "unresolvable": unresolvable,
            "no_aliases": no_aliases,
            "invalid": invalid,
            "duration_sec": duration_sec,
        },
    )
