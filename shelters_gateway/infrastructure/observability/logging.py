"""JSON log lines for the gateway, one object per record"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(timestamp)s %(level)s %(name)s %(message)s"

# Client libraries log every outbound request at INFO
CHATTY_LOGGERS = ("httpx", "httpcore")


class GatewayJsonFormatter(jsonlogger.JsonFormatter):
    """
    Stamps each record with the service it came from.

    The timestamp is the record's creation time in UTC, so a line queued
    behind a slow handler still carries the moment it was logged.
    """

    def __init__(self, *args: Any, service_name: str = "shelters-gateway", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "shelters-gateway") -> logging.Handler:
    """Route the root logger to stdout as JSON; returns the installed handler"""
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(GatewayJsonFormatter(LOG_FORMAT, service_name=service_name))
    root.addHandler(handler)

    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler


def log_lead(
    request_id: str,
    lead_type: str,
    referral_id: Optional[str],
    captured: bool,
    duration_ms: float,
) -> None:
    """One line per lead submission, stored or not"""
    log = logging.info if captured else logging.warning
    log(
        "Lead processed",
        extra={
            "request_id": request_id,
            "lead_type": lead_type,
            "referral_id": referral_id,
            "outcome": "captured" if captured else "failed",
            "duration_ms": round(duration_ms, 2),
        },
    )
