"""Injectable observability for distributors and API clients.

Every component takes a ``tracer`` and reports named events with keyword
fields. Fields are sanitised before they leave the process so access tokens
never end up in logs or event files.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

from adbridge.infra.log_sanitizer import sanitize_dict
from adbridge.infra.logging_std import log_kv
from adbridge.infra.time_utc import isoformat_z, now_utc


class Tracer(Protocol):
    def event(self, name: str, **fields: Any) -> None: ...


_WARNING_EVENTS = {"api.error", "distribution.validation_failed", "distribution.warning"}


class LoggingTracer:
    """Default tracer: one key=value log line per event."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger("adbridge.trace")

    def event(self, name: str, **fields: Any) -> None:
        level = logging.WARNING if name in _WARNING_EVENTS else logging.INFO
        log_kv(self.logger, name, level=level, **fields)


@dataclass
class RecordedEvent:
    name: str
    fields: Dict[str, Any]


@dataclass
class RecordingTracer:
    """In-memory tracer; lets callers assert on call sequencing."""

    events: List[RecordedEvent] = field(default_factory=list)

    def event(self, name: str, **fields: Any) -> None:
        self.events.append(RecordedEvent(name=name, fields=dict(fields)))

    def names(self) -> List[str]:
        return [e.name for e in self.events]

    def named(self, name: str) -> List[RecordedEvent]:
        return [e for e in self.events if e.name == name]

    def states(self) -> List[str]:
        return [e.fields.get("state") for e in self.named("distribution.state")]


class NdjsonTracer:
    """Append-only NDJSON event file (one JSON object per line)."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def event(self, name: str, **fields: Any) -> None:
        row = {
            "ts_utc": isoformat_z(now_utc()),
            "event_type": name,
            "payload": sanitize_dict(fields),
        }
        line = json.dumps(row, ensure_ascii=False, sort_keys=True, default=str)
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8", newline="\n") as f:
                f.write(line + "\n")


@dataclass
class MultiTracer:
    tracers: List[Tracer] = field(default_factory=list)

    def event(self, name: str, **fields: Any) -> None:
        for t in self.tracers:
            t.event(name, **fields)


logger = logging.getLogger(__name__)


@dataclass
class GuardedTracer:
    """Swallows and logs tracer failures so observability never breaks a distribution."""

    inner: Tracer

    def event(self, name: str, **fields: Any) -> None:
        try:
            self.inner.event(name, **fields)
        except Exception:
            logger.exception("tracer failed on event %s", name)


def guarded(tracer: Optional[Tracer]) -> GuardedTracer:
    if isinstance(tracer, GuardedTracer):
        return tracer
    return GuardedTracer(tracer if tracer is not None else LoggingTracer())
