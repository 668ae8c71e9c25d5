from __future__ import annotations

import argparse

from adbridge.cli.commands._common import CREDENTIAL_LOADERS, emit, parse_platforms


def register(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("distribute", help="Create the campaign (PAUSED) on each platform in parallel.")
    p.add_argument("campaign", help="Campaign file (.yml/.yaml/.json).")
    p.add_argument("--platforms", type=parse_platforms, default="all", help="Comma list or 'all' (default).")
    p.add_argument("--ledger", default=None, help="Append every distribution event to this NDJSON file.")
    p.add_argument("--max-workers", type=int, default=None, help="Parallel platforms (default from settings).")
    p.set_defaults(_fn=_run)


def _run(args: argparse.Namespace) -> int:
    from adbridge.distributors import distribute_all
    from adbridge.infra.tracer import LoggingTracer, MultiTracer, NdjsonTracer
    from adbridge.loader import load_campaign

    data = load_campaign(args.campaign)
    tracers = [LoggingTracer()]
    if args.ledger:
        tracers.append(NdjsonTracer(args.ledger))
    tracer = MultiTracer(tracers)

    targets = {p: CREDENTIAL_LOADERS[p]() for p in args.platforms}
    result = distribute_all(data, targets, tracer=tracer, max_workers=args.max_workers)
    emit(result.to_dict())
    return 0 if result.failed == 0 else 1
