from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Callable, Dict, List

from adbridge.integrations.credentials import (
    load_google_credentials,
    load_linkedin_credentials,
    load_meta_credentials,
    load_tiktok_credentials,
)
from adbridge.models import Platform

DISTRIBUTABLE = (Platform.META, Platform.GOOGLE, Platform.TIKTOK)

CREDENTIAL_LOADERS: Dict[Platform, Callable[[], Any]] = {
    Platform.META: load_meta_credentials,
    Platform.GOOGLE: load_google_credentials,
    Platform.TIKTOK: load_tiktok_credentials,
    Platform.LINKEDIN: load_linkedin_credentials,
}


def parse_platforms(value: str) -> List[Platform]:
    """``"meta,google"`` -> [Platform.META, Platform.GOOGLE]; ``"all"`` -> every distributable platform."""
    if not value or value.strip().lower() == "all":
        return list(DISTRIBUTABLE)
    out: List[Platform] = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            p = Platform.parse(part)
        except ValueError as e:
            raise argparse.ArgumentTypeError(f"unknown platform: {part!r}") from e
        if p not in out:
            out.append(p)
    return out


def parse_platform(value: str) -> Platform:
    try:
        return Platform.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"unknown platform: {value!r}") from e


def emit(obj: Any) -> None:
    sys.stdout.write(json.dumps(obj, indent=2, ensure_ascii=False, sort_keys=True, default=str) + "\n")
    sys.stdout.flush()
