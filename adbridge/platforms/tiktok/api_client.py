"""TikTok Business API client.

Media is uploaded by URL before anything else, then campaign -> ad group -> ad,
all created DISABLE. TikTok answers HTTP 200 with a body ``code``; any
non-zero code is a rejection.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from adbridge.integrations.credentials import TikTokCredentials
from adbridge.integrations.errors import RemoteRejectionError
from adbridge.mappings.call_to_action import to_platform_call_to_action
from adbridge.mappings.objectives import (
    get_platform_objective,
    get_tiktok_billing_event,
    get_tiktok_optimization_goal,
)
from adbridge.models import BudgetType, CampaignStatus, MediaType, Platform, UnifiedCampaignData
from adbridge.platforms.base import CENTS, PlatformApiClient, to_minor_units
from adbridge.platforms.tiktok.targeting import TikTokTargetingTransformer

TIKTOK_API_VERSION = "v1.3"
TIKTOK_URL = "https://business-api.tiktok.com/open_api"

SCHEDULE_FORMAT = "%Y-%m-%d %H:%M:%S"

_STATUS = {
    CampaignStatus.ACTIVE: "ENABLE",
    CampaignStatus.PAUSED: "DISABLE",
    CampaignStatus.DELETED: "DELETE",
}

REPORT_METRICS = ["spend", "impressions", "clicks", "ctr", "cpc", "cpm", "reach", "conversion"]


def _first(data: Any) -> Dict[str, Any]:
    """Upload endpoints answer with either an object or a one-element list."""
    if isinstance(data, list):
        return data[0] if data and isinstance(data[0], dict) else {}
    return data if isinstance(data, dict) else {}


class TikTokApiClient(PlatformApiClient):
    platform = Platform.TIKTOK
    label = "TikTok"

    def __init__(self, credentials: TikTokCredentials, *, api_version: str = TIKTOK_API_VERSION, **kwargs: Any) -> None:
        super().__init__(credentials, **kwargs)
        self.base_url = f"{TIKTOK_URL}/{api_version}"
        self.transformer = TikTokTargetingTransformer()

    @property
    def advertiser_id(self) -> str:
        return self.credentials.advertiser_id

    def _auth_headers(self) -> Dict[str, str]:
        return {"Access-Token": self.credentials.access_token}

    def _error_message(self, body: Any) -> Optional[str]:
        if isinstance(body, dict):
            return body.get("message")
        return None

    def _remote_code(self, body: Any) -> Any:
        if isinstance(body, dict):
            return body.get("code")
        return None

    def _check_body(self, step: str, status: int, body: Any) -> None:
        code = body.get("code") if isinstance(body, dict) else None
        if code in (0, None):
            return
        msg = body.get("message") or f"code {code}"
        self.tracer.event("api.error", platform=self.platform.value, step=step, status=status, message=msg)
        raise RemoteRejectionError(
            self.platform.value,
            step,
            f"{self.label} API error during {step}: {msg}",
            status=status,
            remote_code=code,
            details={"request_id": body.get("request_id")} if body.get("request_id") else None,
        )

    def _post(self, step: str, path: str, body: Mapping[str, Any], **kwargs: Any) -> Dict[str, Any]:
        payload = {"advertiser_id": self.advertiser_id, **body}
        resp = self._send_json(step, "POST", f"{self.base_url}/{path}", payload=payload, **kwargs)
        return resp.get("data") if isinstance(resp.get("data"), (dict, list)) else {}

    # ------------------------------------------------------------------
    # creation sequence
    # ------------------------------------------------------------------

    def create_campaign(self, data: UnifiedCampaignData) -> Dict[str, Any]:
        created: Dict[str, Any] = {}
        with self._tracking(created):
            media = data.creative.primary_media
            video_id: Optional[str] = None
            image_ids: List[str] = []
            if media is not None and media.type is MediaType.VIDEO:
                video_id = self.upload_video(media.url)
                created["video_id"] = video_id
            elif media is not None:
                image_ids = [self.upload_image(media.url)]
                created["image_ids"] = list(image_ids)

            campaign = self._create_campaign_object(data)
            created["campaign_id"] = campaign["id"]

            ad_group = self._create_ad_group(campaign["id"], data)
            created["ad_group_id"] = ad_group["id"]

            ad = self._create_ad(ad_group["id"], data, video_id, image_ids)
            created["ad_ids"] = list(ad["ad_ids"])

        return {"campaign": campaign, "ad_group": ad_group, "ad": ad}

    def upload_video(self, video_url: str) -> str:
        data = self._post(
            "upload_video",
            "file/video/ad/upload/",
            {"upload_type": "UPLOAD_BY_URL", "video_url": video_url},
            timeout_s=self.upload_timeout_s,
        )
        return self._require_id("upload_video", _first(data).get("video_id"))

    def upload_image(self, image_url: str) -> str:
        data = self._post(
            "upload_image",
            "file/image/ad/upload/",
            {"upload_type": "UPLOAD_BY_URL", "image_url": image_url},
            timeout_s=self.upload_timeout_s,
        )
        return self._require_id("upload_image", _first(data).get("image_id"))

    @staticmethod
    def _budget_mode(data: UnifiedCampaignData) -> str:
        return "BUDGET_MODE_DAY" if data.budget.type is BudgetType.DAILY else "BUDGET_MODE_TOTAL"

    def _create_campaign_object(self, data: UnifiedCampaignData) -> Dict[str, Any]:
        objective = get_platform_objective(data.objective, Platform.TIKTOK)
        body = {
            "campaign_name": data.name,
            "objective_type": objective,
            "budget_mode": self._budget_mode(data),
            "budget": to_minor_units(data.budget.amount, CENTS),
            "operation_status": _STATUS[CampaignStatus.PAUSED],
        }
        resp = self._post("create_campaign", "campaign/create/", body)
        return {
            "id": self._require_id("create_campaign", _first(resp).get("campaign_id")),
            "name": data.name,
            "objective_type": objective,
            "operation_status": body["operation_status"],
        }

    def build_ad_group_payload(self, campaign_id: str, data: UnifiedCampaignData) -> Dict[str, Any]:
        targeting = self.transformer.transform(data.targeting)
        bid = None
        if data.bidding is not None and data.bidding.bid_cap is not None:
            bid = to_minor_units(data.bidding.bid_cap, CENTS)

        body: Dict[str, Any] = {
            "campaign_id": campaign_id,
            "adgroup_name": f"{data.name} - Ad Group",
            "placement_type": "PLACEMENT_TYPE_AUTOMATIC",
            "placements": ["PLACEMENT_TIKTOK"],
            "budget_mode": self._budget_mode(data),
            "budget": to_minor_units(data.budget.amount, CENTS),
            "schedule_type": "SCHEDULE_START_END",
            "schedule_start_time": data.schedule.start_date.strftime(SCHEDULE_FORMAT),
            "schedule_end_time": data.schedule.end_date.strftime(SCHEDULE_FORMAT),
            "billing_event": get_tiktok_billing_event(data.objective),
            "bid_type": "BID_TYPE_CUSTOM" if bid is not None else "BID_TYPE_NO_BID",
            "optimization_goal": get_tiktok_optimization_goal(data.objective),
            "operation_status": _STATUS[CampaignStatus.PAUSED],
        }
        if bid is not None:
            body["bid"] = bid
        body.update({k: v for k, v in targeting.items() if v not in (None, [], "")})
        return body

    def _create_ad_group(self, campaign_id: str, data: UnifiedCampaignData) -> Dict[str, Any]:
        body = self.build_ad_group_payload(campaign_id, data)
        resp = self._post("create_ad_group", "adgroup/create/", body)
        return {
            "id": self._require_id("create_ad_group", _first(resp).get("adgroup_id")),
            "name": body["adgroup_name"],
            "campaign_id": campaign_id,
        }

    def build_ad_payload(
        self, ad_group_id: str, data: UnifiedCampaignData, video_id: Optional[str], image_ids: List[str]
    ) -> Dict[str, Any]:
        creative = data.creative
        ad: Dict[str, Any] = {
            "ad_name": f"{data.name} - Ad",
            "ad_format": "SINGLE_VIDEO" if video_id else "SINGLE_IMAGE",
            "ad_text": creative.ad_text,
            "call_to_action": to_platform_call_to_action(creative.call_to_action, Platform.TIKTOK),
            "landing_page_url": creative.destination_url,
            "display_name": self.credentials.display_name or data.name,
            "identity_type": "CUSTOMIZED_USER",
            "identity_id": self.credentials.identity_id or self.advertiser_id,
        }
        if video_id:
            ad["video_id"] = video_id
        if image_ids:
            ad["image_ids"] = list(image_ids)
        return {
            "adgroup_id": ad_group_id,
            "operation_status": _STATUS[CampaignStatus.PAUSED],
            "creatives": [ad],
        }

    def _create_ad(
        self, ad_group_id: str, data: UnifiedCampaignData, video_id: Optional[str], image_ids: List[str]
    ) -> Dict[str, Any]:
        body = self.build_ad_payload(ad_group_id, data, video_id, image_ids)
        resp = _first(self._post("create_ad", "ad/create/", body))
        ad_ids = [str(a) for a in resp.get("ad_ids") or []]
        if not ad_ids and resp.get("ad_id"):
            ad_ids = [str(resp["ad_id"])]
        self._require_id("create_ad", ad_ids[0] if ad_ids else None)
        return {"id": ad_ids[0], "ad_ids": ad_ids, "adgroup_id": ad_group_id}

    # ------------------------------------------------------------------
    # pass-through reads / status
    # ------------------------------------------------------------------

    def test_connection(self) -> bool:
        return self._probe(
            "GET",
            f"{self.base_url}/advertiser/info/",
            params={"advertiser_ids": json.dumps([self.advertiser_id])},
        )

    def update_campaign_status(self, campaign_id: str, status: CampaignStatus) -> Dict[str, Any]:
        status = CampaignStatus(status)
        data = self._post(
            "update_campaign_status",
            "campaign/status/update/",
            {"campaign_ids": [campaign_id], "operation_status": _STATUS[status]},
        )
        return _first(data)

    def get_campaign_insights(self, campaign_id: str) -> Dict[str, Any]:
        resp = self._send_json(
            "get_campaign_insights",
            "GET",
            f"{self.base_url}/report/integrated/get/",
            params={
                "advertiser_id": self.advertiser_id,
                "report_type": "BASIC",
                "data_level": "AUCTION_CAMPAIGN",
                "dimensions": json.dumps(["campaign_id"]),
                "metrics": json.dumps(REPORT_METRICS),
                "query_lifetime": "true",
                "filtering": json.dumps(
                    [{"field_name": "campaign_ids", "filter_type": "IN", "filter_value": json.dumps([campaign_id])}]
                ),
            },
        )
        rows: List[Dict[str, Any]] = (resp.get("data") or {}).get("list") or []
        return dict(rows[0].get("metrics") or {}) if rows else {}

    def get_locations(self) -> List[Dict[str, Any]]:
        resp = self._send_json(
            "get_locations",
            "GET",
            f"{self.base_url}/tool/region/",
            params={"advertiser_id": self.advertiser_id, "placements": json.dumps(["PLACEMENT_TIKTOK"])},
        )
        return list((resp.get("data") or {}).get("region_info") or [])

    def get_interest_categories(self, language: str = "en") -> List[Dict[str, Any]]:
        resp = self._send_json(
            "get_interest_categories",
            "GET",
            f"{self.base_url}/tool/interest_category/",
            params={"advertiser_id": self.advertiser_id, "language": language},
        )
        return list((resp.get("data") or {}).get("interest_categories") or [])
