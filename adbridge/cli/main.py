from __future__ import annotations

import argparse
import sys
from typing import Sequence

from adbridge.cli.commands import distribute_cmd, insights_cmd, status_cmd, validate_cmd


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="adbridge",
        description="adbridge CLI (validate, distribute, status, insights).",
    )
    p.add_argument("--log-level", default=None, help="Override logging.level (DEBUG, INFO, ...).")
    p.add_argument("--log-format", choices=("text", "json"), default=None)
    sub = p.add_subparsers(dest="command", required=True)

    validate_cmd.register(sub)
    distribute_cmd.register(sub)
    status_cmd.register(sub)
    insights_cmd.register(sub)

    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    fn = getattr(args, "_fn", None)
    if fn is None:
        parser.print_help()
        return 2

    from adbridge.infra.logging_std import configure_logging

    configure_logging(level=args.log_level, fmt=args.log_format)

    try:
        rc = fn(args)
        if rc is None:
            return 0
        if isinstance(rc, bool):
            return 0 if rc else 1
        if isinstance(rc, int):
            return rc
        return 0

    except KeyboardInterrupt:
        print("adbridge: CANCELLED (KeyboardInterrupt)", file=sys.stderr, flush=True)
        return 130

    except (FileNotFoundError, ValueError) as e:
        # unreadable or malformed campaign file
        print(f"adbridge: ERROR - {e}", file=sys.stderr, flush=True)
        return 2

    except Exception as e:
        print(f"adbridge: ERROR - {type(e).__name__}: {e}", file=sys.stderr, flush=True)
        return 3
