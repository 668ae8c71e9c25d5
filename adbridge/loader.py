"""Load a UnifiedCampaignData from a YAML or JSON campaign file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from adbridge.models import UnifiedCampaignData


class CampaignFileError(ValueError):
    pass


def parse_campaign(raw: Any, *, source: str = "<campaign>") -> UnifiedCampaignData:
    """Build the unified model from an already-decoded mapping.

    Accepts either the campaign itself or ``{"campaign": {...}}``.
    """
    if not isinstance(raw, Mapping):
        raise CampaignFileError(f"{source}: campaign must be a mapping, got {type(raw).__name__}")
    if isinstance(raw.get("campaign"), Mapping):
        raw = raw["campaign"]
    try:
        return UnifiedCampaignData.from_dict(raw)
    except KeyError as e:
        raise CampaignFileError(f"{source}: missing required field {e.args[0]!r}") from e
    except (TypeError, ValueError, ArithmeticError) as e:
        raise CampaignFileError(f"{source}: {e}") from e


def load_campaign(path: Union[str, Path]) -> UnifiedCampaignData:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Campaign file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        if path.suffix.lower() in {".yml", ".yaml"}:
            try:
                raw = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise CampaignFileError(f"{path}: invalid YAML: {e}") from e
        else:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as e:
                raise CampaignFileError(f"{path}: invalid JSON: {e}") from e

    return parse_campaign(raw, source=str(path))
