from __future__ import annotations

import argparse
from typing import Any, Dict

from adbridge.cli.commands._common import emit, parse_platforms


def register(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("validate", help="Validate a campaign file against each platform's rules (no network).")
    p.add_argument("campaign", help="Campaign file (.yml/.yaml/.json).")
    p.add_argument("--platforms", type=parse_platforms, default="all", help="Comma list or 'all' (default).")
    p.set_defaults(_fn=_run)


def _run(args: argparse.Namespace) -> int:
    from adbridge.distributors import DISTRIBUTORS, get_distributor
    from adbridge.loader import load_campaign
    from adbridge.models import ValidationReport

    data = load_campaign(args.campaign)
    reports: Dict[str, Any] = {}
    for p in args.platforms:
        if p in DISTRIBUTORS:
            report = get_distributor(p).validate_campaign_data(data)
        else:
            report = ValidationReport()
            report.error(f"No campaign distributor for platform {p.value!r}")
        reports[p.value] = report.to_dict()
    emit(reports)
    return 0 if all(r["valid"] for r in reports.values()) else 1
