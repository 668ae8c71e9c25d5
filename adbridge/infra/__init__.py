# adbridge/infra/__init__.py
"""
Infra package: settings, logging, tracing, log sanitising, UTC time.

Do not import the CLI from here; `python -m adbridge` would warn via runpy.
"""

from __future__ import annotations

from .tracer import GuardedTracer, LoggingTracer, MultiTracer, NdjsonTracer, RecordingTracer, Tracer, guarded

__all__ = ["Tracer", "LoggingTracer", "RecordingTracer", "NdjsonTracer", "MultiTracer", "GuardedTracer", "guarded"]
