"""
Structured logging for the commit store and commitctl.

Library modules log through ``logging.getLogger(__name__)`` and never configure
handlers themselves; applications (commitctl, tests) call setup_logging().
Records that concern one aggregate carry its id as ``trace_id``.

Environment Variables:
    COMMITSTORE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL - default: INFO
    COMMITSTORE_LOG_FORMAT: json or text - default: json

Usage:
    from commitstore.logging_config import setup_logging, get_logger

    setup_logging()
    log = get_logger(__name__, trace_id="order-12345")
    log.info("Appended commit", extra={"version": 3})
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

NO_TRACE = "N/A"

JSON_FIELDS = "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s"
JSON_RENAMES = {"asctime": "timestamp", "name": "logger", "levelname": "level"}
TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s [trace_id=%(trace_id)s]"

# Chatty at DEBUG; the AWS SDK logs every request body.
QUIET_LOGGERS = ("botocore", "boto3", "urllib3")


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Install a single stderr handler on the root logger.

    stdout is left to CLI output so `commitctl ... --json` stays parseable.

    Args:
        level: Level name (default: COMMITSTORE_LOG_LEVEL, then INFO);
            unknown names fall back to INFO
        log_format: "json" or "text" (default: COMMITSTORE_LOG_FORMAT, then json)
    """
    level_name = (level or os.getenv("COMMITSTORE_LOG_LEVEL", "INFO")).upper()
    numeric = logging.getLevelName(level_name)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    fmt = (log_format or os.getenv("COMMITSTORE_LOG_FORMAT", "json")).lower()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric)
    handler.addFilter(TraceIDFilter())
    handler.setFormatter(build_formatter(fmt))

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(numeric)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric, logging.WARNING))


def build_formatter(log_format: str) -> logging.Formatter:
    """JSON formatter for "json", plain text for anything else."""
    if log_format == "json":
        return JsonFormatter(JSON_FIELDS, rename_fields=JSON_RENAMES)
    return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Logger that stamps every record with trace_id.

    Args:
        name: Logger name (typically __name__)
        trace_id: Correlation id, normally the aggregate id

    Returns:
        LoggerAdapter; per-call ``extra`` fields are merged with trace_id
    """
    return _TraceAdapter(logging.getLogger(name), {"trace_id": trace_id or NO_TRACE})


class _TraceAdapter(logging.LoggerAdapter):
    # LoggerAdapter replaces per-call extra before Python 3.13; merge instead.
    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


class TraceIDFilter(logging.Filter):
    """Give records logged without an adapter the placeholder trace_id."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = NO_TRACE  # type: ignore
        return True
