"""LinkedIn Marketing REST client (versioned API).

Campaign group (PAUSED) -> campaign (budget, schedule, targetingCriteria) ->
sponsored post -> creative. Create calls answer 201 with an empty body and the
new id in the ``x-restli-id`` header. Budgets are decimal strings, schedules
epoch milliseconds.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

from adbridge.infra.time_utc import now_utc
from adbridge.integrations.credentials import LinkedInCredentials
from adbridge.mappings.call_to_action import to_platform_call_to_action
from adbridge.mappings.languages import linkedin_locale
from adbridge.mappings.objectives import get_platform_objective
from adbridge.models import BudgetType, CampaignStatus, Platform, UnifiedCampaignData
from adbridge.platforms.base import PlatformApiClient
from adbridge.platforms.linkedin.targeting import LinkedInTargetingTransformer, to_targeting_criteria

LINKEDIN_API_VERSION = "202401"
LINKEDIN_URL = "https://api.linkedin.com/rest"

_STATUS = {
    CampaignStatus.ACTIVE: "ACTIVE",
    CampaignStatus.PAUSED: "PAUSED",
    CampaignStatus.DELETED: "ARCHIVED",
}

ANALYTICS_FIELDS = "impressions,clicks,costInLocalCurrency,landingPageClicks,externalWebsiteConversions"
DEFAULT_INSIGHTS_LOOKBACK = timedelta(days=90)


def epoch_ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def money(amount: Decimal, currency: str) -> Dict[str, str]:
    return {"amount": str(Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)), "currencyCode": currency}


def _restli_date(d: date) -> str:
    return f"(year:{d.year},month:{d.month},day:{d.day})"


class LinkedInApiClient(PlatformApiClient):
    platform = Platform.LINKEDIN
    label = "LinkedIn"

    def __init__(self, credentials: LinkedInCredentials, *, api_version: str = LINKEDIN_API_VERSION, **kwargs: Any) -> None:
        super().__init__(credentials, **kwargs)
        self.base_url = LINKEDIN_URL
        self.api_version = api_version
        self.transformer = LinkedInTargetingTransformer()

    @property
    def account_id(self) -> str:
        return self.credentials.account_urn.rsplit(":", 1)[-1]

    @property
    def account_url(self) -> str:
        return f"{self.base_url}/adAccounts/{self.account_id}"

    def _auth_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.credentials.access_token}",
            "LinkedIn-Version": self.api_version,
            "X-Restli-Protocol-Version": "2.0.0",
        }

    def _error_message(self, body: Any) -> Optional[str]:
        if isinstance(body, dict):
            return body.get("message")
        return None

    def _remote_code(self, body: Any) -> Any:
        if isinstance(body, dict):
            return body.get("code") or body.get("serviceErrorCode")
        return None

    def _create(self, step: str, url: str, payload: Mapping[str, Any]) -> str:
        resp = self._send(step, "POST", url, payload=payload)
        rid = resp.header("x-restli-id") or resp.header("x-linkedin-id")
        if not rid and resp.body:
            try:
                rid = (resp.json() or {}).get("id")
            except ValueError:
                rid = None
        return self._require_id(step, rid)

    # ------------------------------------------------------------------
    # creation sequence
    # ------------------------------------------------------------------

    def create_campaign(self, data: UnifiedCampaignData) -> Dict[str, Any]:
        created: Dict[str, Any] = {}
        with self._tracking(created):
            group = self._create_campaign_group(data)
            created["campaign_group_id"] = group["id"]

            campaign = self._create_campaign_object(group["id"], data)
            created["campaign_id"] = campaign["id"]

            post_urn = self._create_post(data)
            created["post_urn"] = post_urn

            creative = self._create_creative(campaign["id"], post_urn)
            created["creative_id"] = creative["id"]

        return {"campaign_group": group, "campaign": campaign, "post": {"urn": post_urn}, "creative": creative}

    def _create_campaign_group(self, data: UnifiedCampaignData) -> Dict[str, Any]:
        body = {
            "account": self.credentials.account_urn,
            "name": f"{data.name} - Group",
            "status": _STATUS[CampaignStatus.PAUSED],
            "runSchedule": {
                "start": epoch_ms(data.schedule.start_date),
                "end": epoch_ms(data.schedule.end_date),
            },
        }
        gid = self._create("create_campaign_group", f"{self.account_url}/adCampaignGroups", body)
        return {"id": gid, "urn": f"urn:li:sponsoredCampaignGroup:{gid}", "name": body["name"]}

    def build_campaign_payload(self, group_id: str, data: UnifiedCampaignData) -> Dict[str, Any]:
        targeting = self.transformer.transform(data.targeting)
        locale = linkedin_locale(data.targeting.languages[0] if data.targeting.languages else "")
        language, _, country = locale.partition("_")
        currency = data.budget.currency

        body: Dict[str, Any] = {
            "account": self.credentials.account_urn,
            "campaignGroup": f"urn:li:sponsoredCampaignGroup:{group_id}",
            "name": data.name,
            "type": "SPONSORED_UPDATES",
            "costType": "CPM",
            "objectiveType": get_platform_objective(data.objective, Platform.LINKEDIN),
            "locale": {"country": country, "language": language},
            "runSchedule": {
                "start": epoch_ms(data.schedule.start_date),
                "end": epoch_ms(data.schedule.end_date),
            },
            "targetingCriteria": to_targeting_criteria(targeting),
            "offsiteDeliveryEnabled": False,
            "status": _STATUS[CampaignStatus.PAUSED],
        }
        if data.budget.type is BudgetType.DAILY:
            body["dailyBudget"] = money(data.budget.amount, currency)
        else:
            body["totalBudget"] = money(data.budget.amount, currency)
        if data.bidding is not None and data.bidding.bid_cap is not None:
            body["unitCost"] = money(data.bidding.bid_cap, currency)
        return body

    def _create_campaign_object(self, group_id: str, data: UnifiedCampaignData) -> Dict[str, Any]:
        body = self.build_campaign_payload(group_id, data)
        cid = self._create("create_campaign", f"{self.account_url}/adCampaigns", body)
        return {"id": cid, "urn": f"urn:li:sponsoredCampaign:{cid}", "name": data.name, "status": body["status"]}

    def build_post_payload(self, data: UnifiedCampaignData) -> Dict[str, Any]:
        creative = data.creative
        article: Dict[str, Any] = {"source": creative.destination_url, "title": creative.headline}
        if creative.description:
            article["description"] = creative.description
        return {
            "author": self.credentials.organization_urn,
            "commentary": creative.primary_text,
            "visibility": "PUBLIC",
            "distribution": {"feedDistribution": "NONE", "targetEntities": [], "thirdPartyDistributionChannels": []},
            "content": {"article": article},
            "contentCallToActionLabel": to_platform_call_to_action(creative.call_to_action, Platform.LINKEDIN),
            "lifecycleState": "PUBLISHED",
            "isReshareDisabledByAuthor": False,
            "adContext": {"dscAdAccount": self.credentials.account_urn, "dscStatus": "ACTIVE"},
        }

    def _create_post(self, data: UnifiedCampaignData) -> str:
        return self._create("create_post", f"{self.base_url}/posts", self.build_post_payload(data))

    def _create_creative(self, campaign_id: str, post_urn: str) -> Dict[str, Any]:
        body = {
            "campaign": f"urn:li:sponsoredCampaign:{campaign_id}",
            "intendedStatus": _STATUS[CampaignStatus.PAUSED],
            "content": {"reference": post_urn},
        }
        rid = self._create("create_creative", f"{self.account_url}/creatives", body)
        # creative ids come back as full URNs
        return {"id": rid.rsplit(":", 1)[-1], "urn": rid, "campaign": body["campaign"]}

    # ------------------------------------------------------------------
    # pass-through reads / status
    # ------------------------------------------------------------------

    def test_connection(self) -> bool:
        return self._probe("GET", self.account_url)

    def update_campaign_status(self, campaign_id: str, status: CampaignStatus) -> Dict[str, Any]:
        status = CampaignStatus(status)
        self._send(
            "update_campaign_status",
            "POST",
            f"{self.account_url}/adCampaigns/{campaign_id}",
            payload={"patch": {"$set": {"status": _STATUS[status]}}},
            headers={"X-RestLi-Method": "PARTIAL_UPDATE"},
        )
        return {"id": str(campaign_id), "status": _STATUS[status]}

    def get_campaign_insights(self, campaign_id: str, *, since: Optional[date] = None) -> Dict[str, Any]:
        start = since or (now_utc() - DEFAULT_INSIGHTS_LOOKBACK).date()
        campaign_urn = quote(f"urn:li:sponsoredCampaign:{campaign_id}", safe="")
        # Rest.li query syntax: parentheses stay literal, values are encoded
        query = "&".join(
            [
                "q=analytics",
                "pivot=CAMPAIGN",
                "timeGranularity=ALL",
                f"dateRange=(start:{_restli_date(start)})",
                f"campaigns=List({campaign_urn})",
                f"fields={ANALYTICS_FIELDS}",
            ]
        )
        resp = self._send_json("get_campaign_insights", "GET", f"{self.base_url}/adAnalytics?{query}")
        rows: List[Dict[str, Any]] = resp.get("elements") or []
        return dict(rows[0]) if rows else {}
