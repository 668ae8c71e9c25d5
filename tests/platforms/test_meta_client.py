from __future__ import annotations

import pytest

from adbridge.integrations.errors import PlatformConnectionError, RemoteRejectionError
from adbridge.models import CampaignStatus
from adbridge.platforms.meta import MetaApiClient

BASE = "https://graph.facebook.com/v18.0/act_1234"


def _client(creds, transport, tracer):
    return MetaApiClient(creds, http=transport, tracer=tracer)


def test_image_campaign_sequence(make_campaign, meta_creds, transport, tracer):
    transport.reply({"id": "c1"}).reply({"id": "as1"}).reply({"id": "cr1"}).reply({"id": "ad1"})
    out = _client(meta_creds, transport, tracer).create_campaign(make_campaign())

    assert transport.urls() == [
        f"{BASE}/campaigns",
        f"{BASE}/adsets",
        f"{BASE}/adcreatives",
        f"{BASE}/ads",
    ]
    assert out["campaign"]["id"] == "c1"
    assert out["ad_set"]["id"] == "as1"
    assert out["creative"]["id"] == "cr1"
    assert out["ad"]["id"] == "ad1"
    assert transport.requests[0].headers["Authorization"] == "Bearer meta-test-token"


def test_everything_is_created_paused_with_cent_budgets(make_campaign, meta_creds, transport, tracer):
    transport.reply({"id": "c1"}).reply({"id": "as1"}).reply({"id": "cr1"}).reply({"id": "ad1"})
    _client(meta_creds, transport, tracer).create_campaign(make_campaign(budget={"amount": "25.50"}))

    campaign, ad_set, creative, ad = (transport.payload(i) for i in range(4))
    assert campaign["status"] == "PAUSED"
    assert campaign["objective"] == "OUTCOME_TRAFFIC"
    assert ad_set["status"] == "PAUSED"
    assert ad_set["daily_budget"] == 2550
    assert ad_set["campaign_id"] == "c1"
    assert ad_set["optimization_goal"] == "LINK_CLICKS"
    assert ad_set["targeting"]["geo_locations"] == {"countries": ["US"]}
    assert ad_set["start_time"] == "2026-03-04T12:00:00Z"
    assert creative["object_story_spec"]["page_id"] == "555"
    assert creative["object_story_spec"]["link_data"]["picture"] == "https://cdn.example.com/spring.jpg"
    assert creative["object_story_spec"]["link_data"]["call_to_action"]["type"] == "SHOP_NOW"
    assert ad["status"] == "PAUSED"
    assert ad["creative"] == {"creative_id": "cr1"}


def test_lifetime_budget_and_bid_cap(make_campaign, meta_creds, transport, tracer):
    data = make_campaign(budget={"amount": 300, "type": "lifetime"}, bidding={"strategy": "bid_cap", "bidCap": 1.25})
    body = _client(meta_creds, transport, tracer).build_ad_set_payload("c1", data)
    assert body["lifetime_budget"] == 30000
    assert "daily_budget" not in body
    assert body["bid_amount"] == 125
    assert body["bid_strategy"] == "LOWEST_COST_WITH_BID_CAP"


def test_video_is_uploaded_before_the_creative(make_campaign, meta_creds, transport, tracer):
    media = [{"type": "video", "url": "https://cdn.example.com/spot.mp4", "thumbnail": "https://cdn.example.com/t.jpg"}]
    transport.reply({"id": "c1"}).reply({"id": "as1"}).reply({"id": "v1"}).reply({"id": "cr1"}).reply({"id": "ad1"})
    out = _client(meta_creds, transport, tracer).create_campaign(make_campaign(creative={"media": media}))

    assert transport.urls()[2] == f"{BASE}/advideos"
    video_data = transport.payload(3)["object_story_spec"]["video_data"]
    assert video_data["video_id"] == "v1"
    assert video_data["image_url"] == "https://cdn.example.com/t.jpg"
    assert out["creative"]["video_id"] == "v1"


def test_rejection_mid_sequence_reports_created_ids(make_campaign, meta_creds, transport, tracer):
    transport.reply({"id": "c1"}).reject(400, {"error": {"message": "Invalid targeting spec", "code": 100}})
    with pytest.raises(RemoteRejectionError) as ei:
        _client(meta_creds, transport, tracer).create_campaign(make_campaign())

    err = ei.value
    assert err.step == "create_ad_set"
    assert "Invalid targeting spec" in err.message
    assert err.details["created"] == {"campaign_id": "c1"}
    assert err.details["remote_code"] == 100
    assert err.details["status"] == 400
    assert tracer.named("api.partial_failure")
    assert transport.pending == 0


def test_error_user_msg_is_preferred(make_campaign, meta_creds, transport, tracer):
    transport.reject(400, {"error": {"message": "raw", "error_user_msg": "Budget too low"}})
    with pytest.raises(RemoteRejectionError) as ei:
        _client(meta_creds, transport, tracer).create_campaign(make_campaign())
    assert "Budget too low" in ei.value.message
    assert "created" not in ei.value.details


def test_network_failure_is_a_connection_error(make_campaign, meta_creds, transport, tracer):
    transport.drop()
    with pytest.raises(PlatformConnectionError):
        _client(meta_creds, transport, tracer).create_campaign(make_campaign())


def test_missing_id_is_a_rejection(make_campaign, meta_creds, transport, tracer):
    transport.reply({"success": True})
    with pytest.raises(RemoteRejectionError) as ei:
        _client(meta_creds, transport, tracer).create_campaign(make_campaign())
    assert ei.value.step == "create_campaign"


def test_test_connection(meta_creds, transport, tracer):
    transport.reply({"id": "act_1234"}).reject(401, {"error": {"message": "Invalid OAuth access token"}})
    client = _client(meta_creds, transport, tracer)
    assert client.test_connection() is True
    assert client.test_connection() is False
    assert tracer.named("api.probe_failed")


def test_status_update_and_insights(meta_creds, transport, tracer):
    transport.reply({"success": True}).reply({"data": [{"impressions": "10", "clicks": "2"}]})
    client = _client(meta_creds, transport, tracer)
    assert client.update_campaign_status("c1", CampaignStatus.ACTIVE) == {"success": True}
    assert transport.payload(0) == {"status": "ACTIVE"}
    assert client.get_campaign_insights("c1") == {"impressions": "10", "clicks": "2"}
    assert transport.urls()[1].startswith("https://graph.facebook.com/v18.0/c1/insights?fields=")


def test_reach_estimate(make_campaign, meta_creds, transport, tracer):
    transport.reply({"data": [{"estimate_mau_lower_bound": 1000, "estimate_mau_upper_bound": 5000, "estimate_ready": True}]})
    out = _client(meta_creds, transport, tracer).get_reach_estimate(make_campaign())
    assert out == {"min_reach": 1000, "max_reach": 5000, "ready": True}
    assert "/delivery_estimate?" in transport.urls()[0]
