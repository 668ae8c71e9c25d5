from __future__ import annotations

import argparse

from adbridge.cli.commands._common import CREDENTIAL_LOADERS, emit, parse_platform


def register(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("status", help="Activate or pause an existing campaign.")
    p.add_argument("--platform", type=parse_platform, required=True)
    p.add_argument("--campaign-id", required=True)
    p.add_argument("--action", choices=("activate", "pause"), required=True)
    p.set_defaults(_fn=_run)


def _run(args: argparse.Namespace) -> int:
    from adbridge.distributors import get_distributor
    from adbridge.integrations.errors import DistributionError

    distributor = get_distributor(args.platform)
    credentials = CREDENTIAL_LOADERS[args.platform]()
    op = distributor.activate_campaign if args.action == "activate" else distributor.pause_campaign
    try:
        resp = op(args.campaign_id, credentials)
    except DistributionError as e:
        emit({"platform": args.platform.value, "success": False, "error": {"code": e.code, "message": e.message}})
        return 1
    emit({"platform": args.platform.value, "success": True, "action": args.action, "response": resp})
    return 0
