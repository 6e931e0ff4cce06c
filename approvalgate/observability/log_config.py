"""
Log formatting for approval checks.

Records emitted while checking a pull request carry `repo`, `pr_number`,
`event` and `rule` through `extra=`; both formatters surface them so a
status can be traced back to the rule that produced it.
"""
import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict

CHECK_FIELDS = ("event", "repo", "pr_number", "rule", "approved", "approval_count", "required_count")


def check_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        name: getattr(record, name)
        for name in CHECK_FIELDS
        if getattr(record, name, None) is not None
    }


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(check_fields(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


class CheckTextFormatter(logging.Formatter):
    """Plain text with check fields appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = check_fields(record)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


def configure_logging() -> None:
    level_name = (os.getenv("APPROVALGATE_LOG_LEVEL", "INFO") or "INFO").upper()
    log_format = (os.getenv("APPROVALGATE_LOG_FORMAT", "json") or "json").strip().lower()

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    formatter = JsonLogFormatter() if log_format == "json" else CheckTextFormatter()

    if not root.handlers:
        root.addHandler(logging.StreamHandler())
    for handler in root.handlers:
        handler.setFormatter(formatter)
