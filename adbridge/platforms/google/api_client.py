"""Google Ads REST client.

Sequence: campaign budget -> campaign (PAUSED) -> ad group -> criteria ->
image asset -> responsive search ad (+ responsive display ad when the first
media item is an image). Money goes out in micros. Every mutate answers with
resource names; ids are parsed from them.
"""

from __future__ import annotations

import base64
from typing import Any, Dict, List, Mapping, Optional, Tuple

from adbridge.integrations.credentials import GoogleCredentials
from adbridge.integrations.errors import CampaignValidationError
from adbridge.mappings.call_to_action import to_platform_call_to_action
from adbridge.mappings.objectives import get_google_default_bidding, get_platform_objective
from adbridge.models import BidStrategy, BudgetType, CampaignStatus, MediaType, Platform, UnifiedCampaignData
from adbridge.platforms.base import MICROS, PlatformApiClient, dedupe, to_minor_units
from adbridge.platforms.google.targeting import GoogleTargetingTransformer

GOOGLE_ADS_API_VERSION = "v14"
GOOGLE_ADS_URL = "https://googleads.googleapis.com"

RSA_HEADLINE_LIMIT = 30
RSA_DESCRIPTION_LIMIT = 90
DISPLAY_BUSINESS_NAME_LIMIT = 25

_STATUS = {
    CampaignStatus.ACTIVE: "ENABLED",
    CampaignStatus.PAUSED: "PAUSED",
    CampaignStatus.DELETED: "REMOVED",
}

INSIGHTS_QUERY = (
    "SELECT campaign.id, metrics.impressions, metrics.clicks, metrics.cost_micros, "
    "metrics.ctr, metrics.average_cpc, metrics.conversions "
    "FROM campaign WHERE campaign.id = {campaign_id}"
)


def id_from_resource_name(resource_name: Optional[str]) -> Optional[str]:
    """``customers/1/campaigns/42`` -> ``42``; ``customers/1/adGroupAds/7~99`` -> ``99``."""
    if not resource_name:
        return None
    tail = str(resource_name).rstrip("/").rsplit("/", 1)[-1]
    return tail.rsplit("~", 1)[-1] or None


RSA_MIN_HEADLINES = 3
RSA_MIN_DESCRIPTIONS = 2
HEADLINE_SUFFIX = " - Special Offer"
HEADLINE_PREFIX = "Limited Time: "
FALLBACK_HEADLINES = ("Shop Now", "Learn More Today", "Visit Our Website")
FALLBACK_DESCRIPTIONS = ("Find out more on our website.", "Get started today.")


def _pad(texts: List[str], fallbacks: Tuple[str, ...], minimum: int) -> List[str]:
    for f in fallbacks:
        if len(texts) >= minimum:
            break
        if f not in texts:
            texts.append(f)
    return texts


def rsa_headlines(headline: str) -> List[str]:
    """At least three distinct headlines, each within the RSA limit.

    The headline is clipped before the suffix/prefix is added so the variants
    never collapse back onto the plain headline.
    """
    headline = headline.strip()
    candidates = [
        headline[:RSA_HEADLINE_LIMIT],
        headline[: RSA_HEADLINE_LIMIT - len(HEADLINE_SUFFIX)].rstrip() + HEADLINE_SUFFIX if headline else None,
        HEADLINE_PREFIX + headline[: RSA_HEADLINE_LIMIT - len(HEADLINE_PREFIX)].rstrip() if headline else None,
    ]
    return _pad(dedupe(c or None for c in candidates), FALLBACK_HEADLINES, RSA_MIN_HEADLINES)


def rsa_descriptions(description: Optional[str], primary_text: str) -> List[str]:
    """At least two distinct descriptions, each within the RSA limit."""
    candidates = [(description or "")[:RSA_DESCRIPTION_LIMIT], primary_text[:RSA_DESCRIPTION_LIMIT]]
    return _pad(dedupe(c or None for c in candidates), FALLBACK_DESCRIPTIONS, RSA_MIN_DESCRIPTIONS)


class GoogleAdsApiClient(PlatformApiClient):
    platform = Platform.GOOGLE
    label = "Google Ads"

    def __init__(self, credentials: GoogleCredentials, *, api_version: str = GOOGLE_ADS_API_VERSION, **kwargs: Any) -> None:
        super().__init__(credentials, **kwargs)
        self.base_url = f"{GOOGLE_ADS_URL}/{api_version}"
        self.transformer = GoogleTargetingTransformer()

    @property
    def customer_id(self) -> str:
        return self.credentials.normalized_customer_id

    @property
    def customer_url(self) -> str:
        return f"{self.base_url}/customers/{self.customer_id}"

    def _resource(self, kind: str, rid: str) -> str:
        return f"customers/{self.customer_id}/{kind}/{rid}"

    def _auth_headers(self) -> Dict[str, str]:
        h = {
            "Authorization": f"Bearer {self.credentials.access_token}",
            "developer-token": self.credentials.developer_token,
        }
        if self.credentials.login_customer_id:
            h["login-customer-id"] = self.credentials.login_customer_id.replace("-", "")
        return h

    def _error_message(self, body: Any) -> Optional[str]:
        if not (isinstance(body, dict) and isinstance(body.get("error"), dict)):
            return None
        err = body["error"]
        # GoogleAdsFailure nests the useful message under details[].errors[]
        for detail in err.get("details") or []:
            for e in (detail or {}).get("errors") or []:
                if e.get("message"):
                    return e["message"]
        return err.get("message")

    def _remote_code(self, body: Any) -> Any:
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            return body["error"].get("status") or body["error"].get("code")
        return None

    def _mutate(self, step: str, resource: str, operations: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        resp = self._send_json(step, "POST", f"{self.customer_url}/{resource}:mutate", payload={"operations": operations})
        results = resp.get("results") or []
        if not results:
            self._require_id(step, None)
        return results

    # ------------------------------------------------------------------
    # creation sequence
    # ------------------------------------------------------------------

    def create_campaign(self, data: UnifiedCampaignData) -> Dict[str, Any]:
        targeting = self.transformer.transform(data.targeting)
        created: Dict[str, Any] = {}
        with self._tracking(created):
            budget_rn = self._create_budget(data)
            created["budget"] = budget_rn

            campaign = self._create_campaign_object(data, targeting, budget_rn)
            created["campaign_id"] = campaign["id"]

            ad_group = self._create_ad_group(campaign, data, targeting)
            created["ad_group_id"] = ad_group["id"]

            self._add_campaign_criteria(campaign["resource_name"], targeting)
            self._add_ad_group_criteria(ad_group["resource_name"], targeting)

            media = data.creative.primary_media
            image_asset = None
            if media is not None and media.type is MediaType.IMAGE:
                image_asset = self.upload_image(media.url, f"{data.name} - Image")
                created["image_asset"] = image_asset

            ads = self._create_ads(ad_group["resource_name"], data, image_asset)

        return {"campaign": campaign, "ad_group": ad_group, "ads": ads}

    def _create_budget(self, data: UnifiedCampaignData) -> str:
        micros = to_minor_units(data.budget.amount, MICROS)
        budget: Dict[str, Any] = {
            "name": f"Budget for {data.name}",
            "deliveryMethod": "STANDARD",
            "explicitlyShared": False,
        }
        if data.budget.type is BudgetType.DAILY:
            budget["amountMicros"] = str(micros)
        else:
            budget["totalAmountMicros"] = str(micros)
            budget["period"] = "CUSTOM_PERIOD"
        results = self._mutate("create_budget", "campaignBudgets", [{"create": budget}])
        rn = results[0].get("resourceName")
        self._require_id("create_budget", id_from_resource_name(rn))
        return rn

    @staticmethod
    def channel_type(data: UnifiedCampaignData, targeting: Mapping[str, Any]) -> str:
        if targeting.get("keywords"):
            return "SEARCH"
        if targeting.get("placements") or targeting.get("topics"):
            return "DISPLAY"
        channel = get_platform_objective(data.objective, Platform.GOOGLE)
        return channel if channel in ("SEARCH", "DISPLAY") else "SEARCH"

    @staticmethod
    def bidding_fields(data: UnifiedCampaignData) -> Dict[str, Any]:
        """Campaign bidding strategy as the REST oneof field."""
        bidding = data.bidding
        if bidding is not None and bidding.strategy is BidStrategy.BID_CAP:
            return {"manualCpc": {}}
        if bidding is not None and bidding.strategy is BidStrategy.COST_CAP and bidding.bid_cap is not None:
            return {"targetCpa": {"targetCpaMicros": str(to_minor_units(bidding.bid_cap, MICROS))}}

        default = get_google_default_bidding(data.objective)
        if default == "MAXIMIZE_CONVERSIONS":
            return {"maximizeConversions": {}}
        if default == "TARGET_CPA":
            if bidding is not None and bidding.bid_cap is not None:
                return {"targetCpa": {"targetCpaMicros": str(to_minor_units(bidding.bid_cap, MICROS))}}
            return {"maximizeConversions": {}}
        # maximize clicks
        return {"targetSpend": {}}

    def build_campaign_payload(self, data: UnifiedCampaignData, targeting: Mapping[str, Any], budget_rn: str) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "name": data.name,
            "status": "PAUSED",
            "advertisingChannelType": self.channel_type(data, targeting),
            "campaignBudget": budget_rn,
            "networkSettings": {
                "targetGoogleSearch": bool(targeting.get("targetGoogleSearch", True)),
                "targetSearchNetwork": bool(targeting.get("targetSearchNetwork", False)),
                "targetContentNetwork": bool(targeting.get("targetContentNetwork", True)),
                "targetPartnerSearchNetwork": bool(targeting.get("targetPartnerSearchNetwork", False)),
            },
            "geoTargetTypeSetting": {"positiveGeoTargetType": "PRESENCE_OR_INTEREST"},
            "startDate": data.schedule.start_date.strftime("%Y-%m-%d"),
            "endDate": data.schedule.end_date.strftime("%Y-%m-%d"),
        }
        body.update(self.bidding_fields(data))
        return body

    def _create_campaign_object(
        self, data: UnifiedCampaignData, targeting: Mapping[str, Any], budget_rn: str
    ) -> Dict[str, Any]:
        body = self.build_campaign_payload(data, targeting, budget_rn)
        results = self._mutate("create_campaign", "campaigns", [{"create": body}])
        rn = results[0].get("resourceName")
        return {
            "id": self._require_id("create_campaign", id_from_resource_name(rn)),
            "resource_name": rn,
            "name": data.name,
            "status": "PAUSED",
            "advertising_channel_type": body["advertisingChannelType"],
        }

    def _create_ad_group(
        self, campaign: Mapping[str, Any], data: UnifiedCampaignData, targeting: Mapping[str, Any]
    ) -> Dict[str, Any]:
        display = campaign["advertising_channel_type"] == "DISPLAY"
        body: Dict[str, Any] = {
            "name": f"{data.name} - Ad Group",
            "campaign": campaign["resource_name"],
            "status": "ENABLED",
            "type": "DISPLAY_STANDARD" if display else "SEARCH_STANDARD",
        }
        if data.bidding is not None and data.bidding.bid_cap is not None:
            body["cpcBidMicros"] = str(to_minor_units(data.bidding.bid_cap, MICROS))
        results = self._mutate("create_ad_group", "adGroups", [{"create": body}])
        rn = results[0].get("resourceName")
        return {
            "id": self._require_id("create_ad_group", id_from_resource_name(rn)),
            "resource_name": rn,
            "name": body["name"],
            "campaign": campaign["resource_name"],
        }

    def build_campaign_criteria(self, campaign_rn: str, targeting: Mapping[str, Any]) -> List[Dict[str, Any]]:
        ops: List[Dict[str, Any]] = []
        for loc in targeting.get("locationIds") or []:
            ops.append({"create": {"campaign": campaign_rn, "location": {"geoTargetConstant": f"geoTargetConstants/{loc}"}}})
        for lang in targeting.get("languageIds") or []:
            ops.append({"create": {"campaign": campaign_rn, "language": {"languageConstant": f"languageConstants/{lang}"}}})
        for device in targeting.get("deviceTypes") or []:
            ops.append({"create": {"campaign": campaign_rn, "device": {"type": device}}})
        return ops

    def build_ad_group_criteria(self, ad_group_rn: str, targeting: Mapping[str, Any]) -> List[Dict[str, Any]]:
        def op(**criterion: Any) -> Dict[str, Any]:
            return {"create": {"adGroup": ad_group_rn, "status": "ENABLED", **criterion}}

        ops: List[Dict[str, Any]] = []
        ops += [op(ageRange={"type": a}) for a in targeting.get("ageRanges") or []]
        ops += [op(gender={"type": g}) for g in targeting.get("genders") or []]
        ops += [op(incomeRange={"type": i}) for i in targeting.get("householdIncomes") or []]
        ops += [op(keyword={"text": k, "matchType": "BROAD"}) for k in targeting.get("keywords") or []]
        ops += [
            op(userInterest={"userInterestCategory": self._resource("userInterests", str(a))})
            for a in targeting.get("affinityAudiences") or []
        ]
        ops += [
            op(customAudience={"customAudience": self._resource("customAudiences", str(c))})
            for c in targeting.get("customAudiences") or []
        ]
        ops += [op(userList={"userList": self._resource("userLists", str(r))}) for r in targeting.get("remarketingLists") or []]
        ops += [op(topic={"topicConstant": f"topicConstants/{t}"}) for t in targeting.get("topics") or []]
        ops += [op(placement={"url": p}) for p in targeting.get("placements") or []]
        return ops

    def _add_campaign_criteria(self, campaign_rn: str, targeting: Mapping[str, Any]) -> None:
        ops = self.build_campaign_criteria(campaign_rn, targeting)
        if ops:
            self._mutate("add_campaign_criteria", "campaignCriteria", ops)

    def _add_ad_group_criteria(self, ad_group_rn: str, targeting: Mapping[str, Any]) -> None:
        ops = self.build_ad_group_criteria(ad_group_rn, targeting)
        if ops:
            self._mutate("add_ad_group_criteria", "adGroupCriteria", ops)

    def upload_image(self, image_url: str, name: str) -> str:
        """Fetch the image and register it as an IMAGE asset; returns the asset resource name."""
        raw = self._download("upload_image", image_url)
        asset = {
            "name": name,
            "type": "IMAGE",
            "imageAsset": {"data": base64.b64encode(raw).decode("ascii")},
        }
        results = self._mutate("upload_image", "assets", [{"create": asset}])
        rn = results[0].get("resourceName")
        self._require_id("upload_image", id_from_resource_name(rn))
        return rn

    def build_ad_operations(
        self, ad_group_rn: str, data: UnifiedCampaignData, image_asset: Optional[str]
    ) -> List[Dict[str, Any]]:
        creative = data.creative
        description = (creative.description or creative.primary_text or "")[:RSA_DESCRIPTION_LIMIT]
        final_urls = [creative.destination_url]

        ops: List[Dict[str, Any]] = [
            {
                "create": {
                    "adGroup": ad_group_rn,
                    "status": "ENABLED",
                    "ad": {
                        "finalUrls": final_urls,
                        "responsiveSearchAd": {
                            "headlines": [{"text": h} for h in rsa_headlines(creative.headline)],
                            "descriptions": [
                                {"text": d} for d in rsa_descriptions(creative.description, creative.primary_text)
                            ],
                        },
                    },
                }
            }
        ]

        if image_asset:
            business = self.credentials.business_name or data.name
            ops.append(
                {
                    "create": {
                        "adGroup": ad_group_rn,
                        "status": "ENABLED",
                        "ad": {
                            "finalUrls": final_urls,
                            "responsiveDisplayAd": {
                                "headlines": [{"text": creative.headline}],
                                "longHeadline": {"text": creative.primary_text[:RSA_DESCRIPTION_LIMIT] or creative.headline},
                                "descriptions": [{"text": description}],
                                "marketingImages": [{"asset": image_asset}],
                                "squareMarketingImages": [{"asset": image_asset}],
                                "businessName": business[:DISPLAY_BUSINESS_NAME_LIMIT],
                                "callToActionText": to_platform_call_to_action(creative.call_to_action, Platform.GOOGLE),
                            },
                        },
                    }
                }
            )
        return ops

    def _create_ads(self, ad_group_rn: str, data: UnifiedCampaignData, image_asset: Optional[str]) -> List[Dict[str, Any]]:
        ops = self.build_ad_operations(ad_group_rn, data, image_asset)
        results = self._mutate("create_ads", "adGroupAds", ops)
        kinds = ["responsive_search", "responsive_display"]
        ads = []
        for i, row in enumerate(results):
            rn = row.get("resourceName")
            ads.append(
                {
                    "id": self._require_id("create_ads", id_from_resource_name(rn)),
                    "resource_name": rn,
                    "type": kinds[i] if i < len(kinds) else "unknown",
                }
            )
        return ads

    # ------------------------------------------------------------------
    # pass-through reads / status
    # ------------------------------------------------------------------

    def _search(self, step: str, query: str, **kwargs: Any) -> Dict[str, Any]:
        return self._send_json(step, "POST", f"{self.customer_url}/googleAds:search", payload={"query": query}, **kwargs)

    def test_connection(self) -> bool:
        return self._probe(
            "POST",
            f"{self.customer_url}/googleAds:search",
            payload={"query": "SELECT customer.id FROM customer LIMIT 1"},
        )

    def update_campaign_status(self, campaign_id: str, status: CampaignStatus) -> Dict[str, Any]:
        status = CampaignStatus(status)
        rn = self._resource("campaigns", campaign_id)
        if status is CampaignStatus.DELETED:
            op: Dict[str, Any] = {"remove": rn}
        else:
            op = {"update": {"resourceName": rn, "status": _STATUS[status]}, "updateMask": "status"}
        results = self._mutate("update_campaign_status", "campaigns", [op])
        return results[0]

    def get_campaign_insights(self, campaign_id: str) -> Dict[str, Any]:
        if not str(campaign_id).isdigit():
            raise CampaignValidationError([f"Google Ads campaign id must be numeric: {campaign_id!r}"])
        resp = self._search("get_campaign_insights", INSIGHTS_QUERY.format(campaign_id=campaign_id))
        rows: List[Dict[str, Any]] = resp.get("results") or []
        return dict(rows[0].get("metrics") or {}) if rows else {}
