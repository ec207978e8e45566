"""Loguru logging configuration for scrape runs.

Every record goes to a human-readable console sink.  Records bound with
``json_output=True`` (percentage mismatches and the end-of-run summary) are
also emitted as serialized JSON lines, so a run's anomaly report can be
collected without parsing the text log.  When ``log_dir`` is set, the text
log and the structured records are written to separate rotating files.
"""

import sys
from pathlib import Path
from typing import Any, TextIO

from loguru import logger

STRUCTURED_FLAG = "json_output"

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"


def _is_structured(record: dict[str, Any]) -> bool:
    return bool(record["extra"].get(STRUCTURED_FLAG, False))


def setup_logging(
    log_level: str = "INFO",
    log_dir: str | None = None,
    *,
    stream: TextIO | None = None,
) -> None:
    """Replace all Loguru sinks with the scraper's console and file sinks.

    Args:
        log_level: Minimum log level to emit (case-insensitive).
        log_dir: Optional directory for ``municipal-results.log`` (text) and
            ``municipal-results.jsonl`` (structured records), rotated every
            24 hours and retained 7 days.
        stream: Console stream; defaults to ``sys.stderr``.
    """
    level = log_level.upper()
    console = stream if stream is not None else sys.stderr

    logger.remove()
    logger.add(console, level=level, format=_LOG_FORMAT)
    logger.add(console, level=level, serialize=True, filter=_is_structured)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / "municipal-results.log",
            level=level,
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )
        logger.add(
            log_path / "municipal-results.jsonl",
            level=level,
            serialize=True,
            filter=_is_structured,
            rotation="24h",
            retention="7 days",
        )
