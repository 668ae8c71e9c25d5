"""Unified objective -> platform objective / goal / billing enums."""

from __future__ import annotations

from typing import Dict, List, Mapping

from adbridge.models import BidStrategy, CampaignObjective, Platform

O = CampaignObjective

META_OBJECTIVES: Dict[CampaignObjective, str] = {
    O.AWARENESS: "OUTCOME_AWARENESS",
    O.TRAFFIC: "OUTCOME_TRAFFIC",
    O.ENGAGEMENT: "OUTCOME_ENGAGEMENT",
    O.LEADS: "OUTCOME_LEADS",
    O.CONVERSIONS: "OUTCOME_SALES",
    O.APP_PROMOTION: "OUTCOME_APP_PROMOTION",
}

# Google advertising channel types
GOOGLE_OBJECTIVES: Dict[CampaignObjective, str] = {
    O.AWARENESS: "DISPLAY",
    O.TRAFFIC: "SEARCH",
    O.ENGAGEMENT: "VIDEO",
    O.LEADS: "SEARCH",
    O.CONVERSIONS: "SHOPPING",
    O.APP_PROMOTION: "MULTI_CHANNEL",
}

LINKEDIN_OBJECTIVES: Dict[CampaignObjective, str] = {
    O.AWARENESS: "BRAND_AWARENESS",
    O.TRAFFIC: "WEBSITE_VISITS",
    O.ENGAGEMENT: "ENGAGEMENT",
    O.LEADS: "LEAD_GENERATION",
    O.CONVERSIONS: "WEBSITE_CONVERSIONS",
    O.APP_PROMOTION: "JOB_APPLICANTS",  # no app promotion on LinkedIn
}

TIKTOK_OBJECTIVES: Dict[CampaignObjective, str] = {
    O.AWARENESS: "REACH",
    O.TRAFFIC: "TRAFFIC",
    O.ENGAGEMENT: "VIDEO_VIEWS",
    O.LEADS: "LEAD_GENERATION",
    O.CONVERSIONS: "CONVERSIONS",
    O.APP_PROMOTION: "APP_PROMOTION",
}

OBJECTIVES_BY_PLATFORM: Mapping[Platform, Mapping[CampaignObjective, str]] = {
    Platform.META: META_OBJECTIVES,
    Platform.GOOGLE: GOOGLE_OBJECTIVES,
    Platform.LINKEDIN: LINKEDIN_OBJECTIVES,
    Platform.TIKTOK: TIKTOK_OBJECTIVES,
}

META_OPTIMIZATION_GOALS: Dict[str, List[str]] = {
    "OUTCOME_AWARENESS": ["REACH", "IMPRESSIONS"],
    "OUTCOME_TRAFFIC": ["LINK_CLICKS", "LANDING_PAGE_VIEWS"],
    "OUTCOME_ENGAGEMENT": ["POST_ENGAGEMENT", "VIDEO_VIEWS"],
    "OUTCOME_LEADS": ["LEAD_GENERATION", "CONVERSATIONS"],
    "OUTCOME_SALES": ["CONVERSIONS", "VALUE"],
    "OUTCOME_APP_PROMOTION": ["APP_INSTALLS", "APP_EVENTS"],
}

META_BID_STRATEGIES: Dict[BidStrategy, str] = {
    BidStrategy.LOWEST_COST: "LOWEST_COST_WITHOUT_CAP",
    BidStrategy.COST_CAP: "COST_CAP",
    BidStrategy.BID_CAP: "LOWEST_COST_WITH_BID_CAP",
}

# Google bidding when the campaign carries no explicit strategy
GOOGLE_DEFAULT_BIDDING: Dict[CampaignObjective, str] = {
    O.AWARENESS: "MAXIMIZE_CONVERSIONS",
    O.TRAFFIC: "MAXIMIZE_CLICKS",
    O.CONVERSIONS: "TARGET_CPA",
    O.LEADS: "TARGET_CPA",
}

TIKTOK_BILLING_EVENTS: Dict[CampaignObjective, str] = {
    O.AWARENESS: "CPM",
    O.TRAFFIC: "CPC",
    O.CONVERSIONS: "OCPC",
    O.LEADS: "OCPC",
}

TIKTOK_OPTIMIZATION_GOALS: Dict[CampaignObjective, str] = {
    O.AWARENESS: "REACH",
    O.TRAFFIC: "CLICK",
    O.CONVERSIONS: "CONVERT",
    O.LEADS: "LEAD_GENERATION",
}


def get_platform_objective(objective: CampaignObjective, platform: Platform) -> str:
    return OBJECTIVES_BY_PLATFORM[Platform.parse(platform)][CampaignObjective(objective)]


def get_supported_objectives(platform: Platform) -> List[CampaignObjective]:
    return list(OBJECTIVES_BY_PLATFORM[Platform.parse(platform)].keys())


def get_meta_optimization_goal(meta_objective: str) -> str:
    goals = META_OPTIMIZATION_GOALS.get(meta_objective)
    return goals[0] if goals else "REACH"


def get_meta_bid_strategy(strategy: BidStrategy) -> str:
    return META_BID_STRATEGIES.get(strategy, "LOWEST_COST_WITHOUT_CAP")


def get_tiktok_billing_event(objective: CampaignObjective) -> str:
    return TIKTOK_BILLING_EVENTS.get(objective, "CPC")


def get_tiktok_optimization_goal(objective: CampaignObjective) -> str:
    return TIKTOK_OPTIMIZATION_GOALS.get(objective, "CLICK")


def get_google_default_bidding(objective: CampaignObjective) -> str:
    return GOOGLE_DEFAULT_BIDDING.get(objective, "MAXIMIZE_CLICKS")
