"""Shared logging utilities.

Every service entrypoint calls `configure_logging` once so that all components
emit the same format at the same level. Modules themselves only ever do
`logging.getLogger(__name__)`.

Two formats are supported:
- `text`: human-readable lines for local development
- `json`: one JSON object per line for log shippers
"""

import json
import logging
from datetime import datetime, timezone

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# marks the handler we install so repeated calls don't stack handlers
_HANDLER_NAME = "common.logging"


class JsonFormatter(logging.Formatter):
    """Render a log record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Install the shared root handler.

    Safe to call more than once (the app factory runs per test); the existing
    handler is replaced rather than duplicated.

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG".
        fmt: "text" or "json".

    Raises:
        ValueError: If `fmt` is not a supported format.
    """
    if fmt == "json":
        formatter = JsonFormatter()
    elif fmt == "text":
        formatter = logging.Formatter(TEXT_FORMAT)
    else:
        raise ValueError(f"Unsupported log format: {fmt}")

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(level.upper())
