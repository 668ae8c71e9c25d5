"""Meta Marketing API (Graph) client: campaign -> ad set -> creative -> ad.

Everything is created PAUSED. Budgets and bid caps go out in cents.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from adbridge.infra.time_utc import isoformat_z
from adbridge.integrations.credentials import MetaCredentials
from adbridge.mappings.call_to_action import to_platform_call_to_action
from adbridge.mappings.objectives import (
    get_meta_bid_strategy,
    get_meta_optimization_goal,
    get_platform_objective,
)
from adbridge.models import BudgetType, CampaignStatus, MediaType, Platform, UnifiedCampaignData
from adbridge.platforms.base import CENTS, PlatformApiClient, to_minor_units
from adbridge.platforms.meta.targeting import MetaTargetingTransformer

GRAPH_API_VERSION = "v18.0"
GRAPH_URL = "https://graph.facebook.com"

INSIGHT_FIELDS = "impressions,clicks,spend,reach,cpm,cpc,ctr"


class MetaApiClient(PlatformApiClient):
    platform = Platform.META
    label = "Meta"

    def __init__(self, credentials: MetaCredentials, *, api_version: str = GRAPH_API_VERSION, **kwargs: Any) -> None:
        super().__init__(credentials, **kwargs)
        self.base_url = f"{GRAPH_URL}/{api_version}"
        self.transformer = MetaTargetingTransformer()

    @property
    def account_url(self) -> str:
        return f"{self.base_url}/{self.credentials.account_path}"

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.credentials.access_token}"}

    def _error_message(self, body: Any) -> Optional[str]:
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            err = body["error"]
            return err.get("error_user_msg") or err.get("message")
        return None

    def _remote_code(self, body: Any) -> Any:
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            return body["error"].get("code")
        return None

    # ------------------------------------------------------------------
    # creation sequence
    # ------------------------------------------------------------------

    def create_campaign(self, data: UnifiedCampaignData) -> Dict[str, Any]:
        created: Dict[str, Any] = {}
        with self._tracking(created):
            campaign = self._create_campaign_object(data)
            created["campaign_id"] = campaign["id"]

            ad_set = self._create_ad_set(campaign["id"], data)
            created["ad_set_id"] = ad_set["id"]

            creative = self._create_ad_creative(data)
            created["creative_id"] = creative["id"]

            ad = self._create_ad(ad_set["id"], creative["id"], data)
            created["ad_id"] = ad["id"]

        return {"campaign": campaign, "ad_set": ad_set, "creative": creative, "ad": ad}

    def _create_campaign_object(self, data: UnifiedCampaignData) -> Dict[str, Any]:
        objective = get_platform_objective(data.objective, Platform.META)
        body = {
            "name": data.name,
            "objective": objective,
            "status": CampaignStatus.PAUSED.value,
            "special_ad_categories": [],
        }
        resp = self._send_json("create_campaign", "POST", f"{self.account_url}/campaigns", payload=body)
        return {
            "id": self._require_id("create_campaign", resp.get("id")),
            "name": data.name,
            "objective": objective,
            "status": CampaignStatus.PAUSED.value,
        }

    def build_ad_set_payload(self, campaign_id: str, data: UnifiedCampaignData) -> Dict[str, Any]:
        targeting = self.transformer.transform(data.targeting)
        objective = get_platform_objective(data.objective, Platform.META)
        budget = to_minor_units(data.budget.amount, CENTS)

        body: Dict[str, Any] = {
            "name": f"{data.name} - Ad Set",
            "campaign_id": campaign_id,
            "targeting": targeting,
            "optimization_goal": get_meta_optimization_goal(objective),
            "billing_event": "IMPRESSIONS",
            "bid_strategy": get_meta_bid_strategy(data.bidding.strategy) if data.bidding else "LOWEST_COST_WITHOUT_CAP",
            "status": CampaignStatus.PAUSED.value,
            "start_time": isoformat_z(data.schedule.start_date, microsecond_precision=False),
            "end_time": isoformat_z(data.schedule.end_date, microsecond_precision=False),
        }
        if data.budget.type is BudgetType.DAILY:
            body["daily_budget"] = budget
        else:
            body["lifetime_budget"] = budget
        if data.bidding is not None and data.bidding.bid_cap is not None:
            body["bid_amount"] = to_minor_units(data.bidding.bid_cap, CENTS)
        return body

    def _create_ad_set(self, campaign_id: str, data: UnifiedCampaignData) -> Dict[str, Any]:
        body = self.build_ad_set_payload(campaign_id, data)
        resp = self._send_json("create_ad_set", "POST", f"{self.account_url}/adsets", payload=body)
        return {
            "id": self._require_id("create_ad_set", resp.get("id")),
            "name": body["name"],
            "campaign_id": campaign_id,
            "status": CampaignStatus.PAUSED.value,
        }

    def upload_video(self, video_url: str, name: str) -> str:
        resp = self._send_json(
            "upload_video",
            "POST",
            f"{self.account_url}/advideos",
            payload={"file_url": video_url, "name": name},
            timeout_s=self.upload_timeout_s,
        )
        return self._require_id("upload_video", resp.get("id"))

    def _create_ad_creative(self, data: UnifiedCampaignData) -> Dict[str, Any]:
        creative = data.creative
        media = creative.primary_media
        if media is None:
            raise ValueError("At least one media item is required")

        cta = {
            "type": to_platform_call_to_action(creative.call_to_action, Platform.META),
            "value": {"link": creative.destination_url},
        }
        spec: Dict[str, Any] = {"page_id": self.credentials.page_id}
        video_id = None

        if media.type is MediaType.VIDEO:
            video_id = self.upload_video(media.url, f"{data.name} - Video")
            video_data: Dict[str, Any] = {
                "video_id": video_id,
                "message": creative.primary_text,
                "title": creative.headline,
                "call_to_action": cta,
            }
            if media.thumbnail:
                video_data["image_url"] = media.thumbnail
            spec["video_data"] = video_data
        else:
            spec["link_data"] = {
                "link": creative.destination_url,
                "message": creative.primary_text,
                "name": creative.headline,
                "description": creative.description or "",
                "picture": media.url,
                "call_to_action": cta,
            }

        body = {"name": f"{data.name} - Creative", "object_story_spec": spec}
        resp = self._send_json("create_ad_creative", "POST", f"{self.account_url}/adcreatives", payload=body)
        out = {"id": self._require_id("create_ad_creative", resp.get("id")), "name": body["name"]}
        if video_id:
            out["video_id"] = video_id
        return out

    def _create_ad(self, ad_set_id: str, creative_id: str, data: UnifiedCampaignData) -> Dict[str, Any]:
        body = {
            "name": f"{data.name} - Ad",
            "adset_id": ad_set_id,
            "creative": {"creative_id": creative_id},
            "status": CampaignStatus.PAUSED.value,
        }
        resp = self._send_json("create_ad", "POST", f"{self.account_url}/ads", payload=body)
        return {
            "id": self._require_id("create_ad", resp.get("id")),
            "name": body["name"],
            "adset_id": ad_set_id,
            "status": CampaignStatus.PAUSED.value,
        }

    # ------------------------------------------------------------------
    # pass-through reads / status
    # ------------------------------------------------------------------

    def test_connection(self) -> bool:
        return self._probe("GET", self.account_url, params={"fields": "id,name,account_status"})

    def update_campaign_status(self, campaign_id: str, status: CampaignStatus) -> Dict[str, Any]:
        status = CampaignStatus(status)
        return self._send_json(
            "update_campaign_status",
            "POST",
            f"{self.base_url}/{campaign_id}",
            payload={"status": status.value},
        )

    def get_campaign_insights(self, campaign_id: str, *, date_preset: Optional[str] = None) -> Dict[str, Any]:
        resp = self._send_json(
            "get_campaign_insights",
            "GET",
            f"{self.base_url}/{campaign_id}/insights",
            params={"fields": INSIGHT_FIELDS, "date_preset": date_preset},
        )
        rows: List[Dict[str, Any]] = resp.get("data") or []
        return rows[0] if rows else {}

    def get_reach_estimate(self, data: UnifiedCampaignData) -> Dict[str, Any]:
        """Delivery estimate for the transformed targeting of ``data``."""
        targeting: Mapping[str, Any] = self.transformer.transform(data.targeting)
        objective = get_platform_objective(data.objective, Platform.META)
        resp = self._send_json(
            "get_reach_estimate",
            "GET",
            f"{self.account_url}/delivery_estimate",
            params={
                "targeting_spec": json.dumps(targeting, separators=(",", ":")),
                "optimization_goal": get_meta_optimization_goal(objective),
            },
        )
        rows: List[Dict[str, Any]] = resp.get("data") or []
        if not rows:
            return {}
        row = rows[0]
        return {
            "min_reach": row.get("estimate_mau_lower_bound"),
            "max_reach": row.get("estimate_mau_upper_bound"),
            "ready": row.get("estimate_ready"),
        }
