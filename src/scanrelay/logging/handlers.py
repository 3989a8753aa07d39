"""JSON log formatting for scanrelay."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else arrived via extra= or a filter
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {
    "message",
    "asctime",
    "taskName",
}

# ScanContextFilter attribute -> key in the "scan" object
_SCAN_FIELDS = {
    "scan_target": "target",
    "scan_path": "path",
    "scan_library": "library",
}


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line.

    Keys: timestamp (ISO-8601 UTC), level, logger, message, plus
    "scan" when the record was emitted inside a scan context, "extra" for
    attributes passed via extra=, and "exception" when exc_info is set.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        scan = {
            key: getattr(record, attr)
            for attr, key in _SCAN_FIELDS.items()
            if getattr(record, attr, None)
        }
        if scan:
            entry["scan"] = scan

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
            and key not in _SCAN_FIELDS
            and key != "scan_tag"
            and not key.startswith("_")
        }
        if extra:
            entry["extra"] = extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
