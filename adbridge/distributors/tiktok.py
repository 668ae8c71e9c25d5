from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from adbridge.config.thresholds import TIKTOK_LIMITS
from adbridge.models import BudgetType, MediaType, Platform, UnifiedCampaignData, ValidationReport
from adbridge.platforms.tiktok import TikTokApiClient

from .base import CampaignDistributor

PRIMARY_AUDIENCE_MAX_AGE = 35
RECOMMENDED_DAILY_BUDGET = 50


class TikTokCampaignDistributor(CampaignDistributor):
    platform = Platform.TIKTOK
    label = "TikTok Marketing"
    client_class = TikTokApiClient
    probe_before_create = True

    def _check_platform(self, data: UnifiedCampaignData, report: ValidationReport) -> None:
        limits = TIKTOK_LIMITS
        creative = data.creative

        if data.schedule.start_date <= self.clock():
            report.error("Campaign start date must be in the future for TikTok")

        text = creative.ad_text
        if not text:
            report.error("Ad text (description or headline) is required")
        elif len(text) > limits.max_ad_text_chars:
            report.error(f"Ad text must be {limits.max_ad_text_chars} characters or less for TikTok")

        self._check_objective(data, report, limits.allowed_objectives)

        if data.budget.type is BudgetType.DAILY and 0 < data.budget.amount < limits.recommended_min_daily_budget:
            report.warn(f"Daily budget below ${limits.recommended_min_daily_budget} may not meet TikTok minimums")

    def _flatten(self, created: Dict[str, Any]) -> Tuple[Optional[str], Optional[str], List[str]]:
        ad = created.get("ad") or {}
        ad_ids = list(ad.get("ad_ids") or ([ad["id"]] if ad.get("id") else []))
        return (
            (created.get("campaign") or {}).get("id"),
            (created.get("ad_group") or {}).get("id"),
            ad_ids,
        )

    def preview_campaign(self, data: UnifiedCampaignData) -> Dict[str, str]:
        creative = data.creative
        media = creative.primary_media
        is_video = media is not None and media.type is MediaType.VIDEO
        is_image = media is not None and media.type is MediaType.IMAGE
        text = creative.ad_text
        cta = creative.call_to_action or "Learn More"

        feed = "\n".join(
            [
                "[TikTok]",
                "[Video Player]" if is_video else "[Image Display]",
                text or "Ad text",
                f"[{cta}]",
            ]
        )
        specs = "\n".join(
            [
                f"Video: {'Yes' if is_video else 'No'}",
                f"Image: {'Yes' if is_image else 'No'}",
                f"Ad Text: {text or 'N/A'} ({len(text)}/{TIKTOK_LIMITS.max_ad_text_chars} chars)",
                f"CTA: {cta}",
                f"Landing URL: {creative.destination_url or 'N/A'}",
                "",
                "Recommended:",
                "- Video: 9:16 aspect ratio, 5-60 seconds",
                "- Image: 9:16 aspect ratio (1080x1920)",
                "- File size: 500KB - 500MB",
                "- Format: MP4, MOV (video) or JPG, PNG (image)",
            ]
        )
        return {"feed_preview": feed, "specifications": specs}

    def get_campaign_recommendations(self, data: UnifiedCampaignData) -> List[str]:
        out: List[str] = []
        media = data.creative.primary_media
        if media is None or media.type is not MediaType.VIDEO:
            out.append("TikTok performs best with video content. Consider adding a video for better engagement.")
        out += [
            "Use 9:16 vertical video/image format for optimal TikTok display",
            "Keep videos between 9-15 seconds for best performance on TikTok",
            "Add trending music or sounds to increase engagement",
            "Use native TikTok effects and transitions for authentic content",
            "Include captions - 85% of TikTok users watch with sound off",
        ]
        if data.targeting.age_min > PRIMARY_AUDIENCE_MAX_AGE:
            out.append("Note: TikTok's primary audience is 18-34. Consider this for your targeting.")
        if data.budget.amount < RECOMMENDED_DAILY_BUDGET:
            out.append(f"Consider increasing budget to at least ${RECOMMENDED_DAILY_BUDGET}/day for better reach on TikTok")
        return out
