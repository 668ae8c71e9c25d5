from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from adbridge.config.thresholds import META_LIMITS
from adbridge.models import BudgetType, Platform, UnifiedCampaignData, ValidationReport
from adbridge.platforms.meta import MetaApiClient

from .base import CampaignDistributor


class MetaCampaignDistributor(CampaignDistributor):
    """Facebook/Instagram via the Marketing API. No connectivity probe."""

    platform = Platform.META
    label = "Meta Marketing"
    client_class = MetaApiClient

    def _check_platform(self, data: UnifiedCampaignData, report: ValidationReport) -> None:
        if data.budget.type is BudgetType.DAILY:
            minimum = META_LIMITS.min_daily_budget
        else:
            minimum = META_LIMITS.min_lifetime_budget
        if data.budget.amount > 0 and data.budget.amount < minimum:
            report.error(f"Minimum {data.budget.type.value} budget is ${minimum}")

    def _flatten(self, created: Dict[str, Any]) -> Tuple[Optional[str], Optional[str], List[str]]:
        ad = created.get("ad") or {}
        return (
            (created.get("campaign") or {}).get("id"),
            (created.get("ad_set") or {}).get("id"),
            [ad["id"]] if ad.get("id") else [],
        )

    def get_reach_estimate(self, data: UnifiedCampaignData, credentials: Any) -> Dict[str, Any]:
        return self.make_client(credentials).get_reach_estimate(data)
