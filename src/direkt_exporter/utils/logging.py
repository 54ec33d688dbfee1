import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, MutableMapping, Tuple


CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            log_entry.update(record.extra_fields)

        return json.dumps(log_entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human readable output for development, context fields appended as key=value."""

    def __init__(self):
        super().__init__(CONSOLE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = getattr(record, "extra_fields", None)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


class ContextAdapter(logging.LoggerAdapter):
    """Attaches bound context fields to every record as ``extra_fields``."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        fields = dict(self.extra)
        fields.update(extra.pop("extra_fields", {}))
        extra["extra_fields"] = fields
        kwargs["extra"] = extra
        return msg, kwargs

    def bind(self, **fields: Any) -> "ContextAdapter":
        merged: Dict[str, Any] = dict(self.extra)
        merged.update(fields)
        return ContextAdapter(self.logger, merged)


def bind(logger: logging.Logger, **fields: Any) -> ContextAdapter:
    return ContextAdapter(logger, fields)


def setup_logging(dev: bool = False, level: str = "INFO") -> logging.Logger:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ConsoleFormatter() if dev else JsonFormatter())

    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)

    return root
