from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlparse

from adbridge.config.thresholds import GOOGLE_LIMITS
from adbridge.models import MediaType, Platform, UnifiedCampaignData, ValidationReport
from adbridge.platforms.google import GoogleAdsApiClient

from .base import CampaignDistributor


class GoogleCampaignDistributor(CampaignDistributor):
    platform = Platform.GOOGLE
    label = "Google Ads"
    client_class = GoogleAdsApiClient
    probe_before_create = True

    def _check_platform(self, data: UnifiedCampaignData, report: ValidationReport) -> None:
        creative = data.creative
        limits = GOOGLE_LIMITS

        if len(creative.headline) > limits.max_headline_chars:
            report.error(f"Ad headline must be {limits.max_headline_chars} characters or less for Google Ads")

        if not creative.description:
            report.error("Ad description is required")
        elif len(creative.description) > limits.max_description_chars:
            report.error(f"Ad description must be {limits.max_description_chars} characters or less for Google Ads")

        self._check_objective(data, report, limits.allowed_objectives)

        lead = timedelta(hours=limits.min_start_lead_hours)
        if data.schedule.start_date < self.clock() + lead:
            report.warn("Campaign start date is very soon. Consider starting at least 1 day in the future.")
        if data.targeting.age_min < limits.restricted_age_below:
            report.warn(
                f"Google Ads restricts targeting below age {limits.restricted_age_below}; "
                "ads may not serve to the youngest part of this range."
            )

    def _flatten(self, created: Dict[str, Any]) -> Tuple[Optional[str], Optional[str], List[str]]:
        return (
            (created.get("campaign") or {}).get("id"),
            (created.get("ad_group") or {}).get("id"),
            [a["id"] for a in created.get("ads") or [] if a.get("id")],
        )

    def preview_campaign(self, data: UnifiedCampaignData) -> Dict[str, str]:
        """Plain-text renderings of the search and display ads."""
        creative = data.creative
        host = urlparse(creative.destination_url).hostname or "example.com"
        media = creative.primary_media
        image = media.url if media is not None and media.type is MediaType.IMAGE else "No image"
        search = "\n".join(
            [
                f"Ad - {host}",
                creative.headline,
                creative.description or "",
                creative.destination_url,
            ]
        )
        display = "\n".join(
            [
                f"[Image: {image}]",
                creative.headline,
                creative.description or "",
                f"[Button: {creative.call_to_action or 'Learn More'}]",
            ]
        )
        return {"search_ad_preview": search, "display_ad_preview": display}
