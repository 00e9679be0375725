"""Runtime configuration and logging setup."""

import logging
import os
from dataclasses import dataclass
from typing import IO, Optional, Tuple

import structlog

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

_log_file: Optional[IO[str]] = None


@dataclass(frozen=True)
class Settings:
    currency: str = "SEK"
    log_level: str = "info"
    log_file: Optional[str] = None
    revenue_log: Optional[str] = "total-revenue.log"
    offline_item_ids: Tuple[int, ...] = (69,)


def parse_id_list(raw: str) -> Tuple[int, ...]:
    """Parse a comma separated list of integer ids, skipping blanks."""
    ids = []
    for part in raw.split(","):
        part = part.strip()
        if part:
            ids.append(int(part))
    return tuple(ids)


def load_settings() -> Settings:
    """Read settings from the environment.

    Environment variables:
        POS_CURRENCY: Currency label printed on receipts (default: SEK)
        POS_LOG_LEVEL: debug, info, warning, error or critical (default: info)
        POS_LOG_FILE: Append logs to this file instead of stdout
        POS_REVENUE_LOG: File for running revenue totals; empty disables it
        POS_OFFLINE_ITEM_IDS: Item ids whose lookup simulates an inventory outage
    """
    defaults = Settings()
    log_level = os.environ.get("POS_LOG_LEVEL", defaults.log_level).lower()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {log_level}")

    return Settings(
        currency=os.environ.get("POS_CURRENCY", defaults.currency),
        log_level=log_level,
        log_file=os.environ.get("POS_LOG_FILE") or None,
        revenue_log=os.environ.get("POS_REVENUE_LOG", defaults.revenue_log) or None,
        offline_item_ids=parse_id_list(
            os.environ.get("POS_OFFLINE_ITEM_IDS", ",".join(str(i) for i in defaults.offline_item_ids))
        ),
    )


def configure_logging(level: str = "info", log_file: Optional[str] = None) -> None:
    """Configure structlog with JSON rendering and ISO timestamps.

    A log file opened by an earlier call is closed first.
    """
    global _log_file
    close_log_file()
    if log_file:
        _log_file = open(log_file, "a", encoding="utf-8")
        logger_factory = structlog.WriteLoggerFactory(file=_log_file)
    else:
        logger_factory = structlog.PrintLoggerFactory()

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVELS[level]),
        context_class=dict,
        logger_factory=logger_factory,
    )


def close_log_file() -> None:
    """Close the file opened by ``configure_logging``, if any."""
    global _log_file
    if _log_file is not None:
        _log_file.close()
        _log_file = None
