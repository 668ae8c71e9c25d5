from __future__ import annotations

import argparse

from adbridge.cli.commands._common import CREDENTIAL_LOADERS, emit, parse_platform


def register(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("insights", help="Read back basic delivery metrics for a campaign.")
    p.add_argument("--platform", type=parse_platform, required=True)
    p.add_argument("--campaign-id", required=True)
    p.set_defaults(_fn=_run)


def _run(args: argparse.Namespace) -> int:
    from adbridge.distributors import get_distributor
    from adbridge.integrations.errors import DistributionError

    distributor = get_distributor(args.platform)
    credentials = CREDENTIAL_LOADERS[args.platform]()
    try:
        metrics = distributor.get_campaign_insights(args.campaign_id, credentials)
    except DistributionError as e:
        emit({"platform": args.platform.value, "success": False, "error": {"code": e.code, "message": e.message}})
        return 1
    emit({"platform": args.platform.value, "success": True, "campaignId": args.campaign_id, "insights": metrics})
    return 0
