from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional

from adbridge.infra.log_sanitizer import sanitize_dict

_DEFAULT_FMT = "%(asctime)s %(levelname)s %(name)s | %(message)s"


class StructuredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "function": record.funcName,
            "message": record.getMessage(),
        }

        if hasattr(record, "extra_data"):
            # nested so event fields never clobber the record keys
            log_entry["fields"] = sanitize_dict(getattr(record, "extra_data"))

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def configure_logging(
    *,
    level: Optional[str] = None,
    fmt: Optional[str] = None,
) -> None:
    """
    Idempotent-ish logging config.
    Importing this module does nothing; call configure_logging() from entry points.
    Level/format default to settings (logging.level / logging.format).
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured by app/test runner; keep hands off.
        return

    from adbridge.infra.settings import get_settings

    s = get_settings()
    level_name = (level or s.get("logging.level", "INFO")).upper()
    log_format = fmt or s.get("logging.format", "text")

    handler = logging.StreamHandler(sys.stderr)
    if log_format == "json":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(_DEFAULT_FMT))

    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), handlers=[handler])


def log_kv(logger: logging.Logger, msg: str, *, level: int = logging.INFO, **kv: Any) -> None:
    if not kv:
        logger.log(level, msg)
        return
    clean = sanitize_dict(kv)
    extra = " ".join([f"{k}={clean[k]!r}" for k in sorted(clean.keys())])
    logger.log(level, "%s | %s", msg, extra, extra={"extra_data": clean})
