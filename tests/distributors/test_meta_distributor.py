from __future__ import annotations

from adbridge.distributors import MetaCampaignDistributor


def test_end_to_end_success_against_scripted_graph_api(make_campaign, meta_creds, transport, tracer, clock):
    transport.reply({"id": "120200000001"}).reply({"id": "120200000002"})
    transport.reply({"id": "120200000003"}).reply({"id": "120200000004"})
    d = MetaCampaignDistributor(http=transport, tracer=tracer, clock=clock)

    result = d.distribute(make_campaign(), meta_creds)

    assert result.success, result.error
    out = result.to_dict()
    assert out["campaignId"] == "120200000001"
    assert out["adSetId"] == "120200000002"
    assert out["adId"] == "120200000004"
    # no connectivity probe: exactly the four creation calls
    assert len(transport.requests) == 4


def test_budget_minimums(make_campaign):
    d = MetaCampaignDistributor()
    daily = d.validate_campaign_data(make_campaign(budget={"amount": "0.50"}))
    assert "Minimum daily budget is $1" in daily.errors

    lifetime = d.validate_campaign_data(make_campaign(budget={"amount": 5, "type": "lifetime"}))
    assert "Minimum lifetime budget is $10" in lifetime.errors


def test_creative_requirements(make_campaign):
    report = MetaCampaignDistributor().validate_campaign_data(
        make_campaign(creative={"headline": "", "primaryText": " ", "media": []})
    )
    assert "Ad headline is required" in report.errors
    assert "Ad primary text is required" in report.errors
    assert "At least one media item is required" in report.errors


def test_meta_does_not_check_objective_or_start(make_campaign):
    data = make_campaign(objective="app_promotion", schedule={"startDate": "2020-01-01", "endDate": "2020-02-01"})
    assert MetaCampaignDistributor().validate_campaign_data(data).valid


def test_partial_failure_surfaces_created_ids(make_campaign, meta_creds, transport, tracer, clock):
    transport.reply({"id": "c1"}).reply({"id": "as1"}).reject(500, {"error": {"message": "Service unavailable"}})
    result = MetaCampaignDistributor(http=transport, tracer=tracer, clock=clock).distribute(make_campaign(), meta_creds)

    assert result.state == "failed"
    assert result.error.details["created"] == {"campaign_id": "c1", "ad_set_id": "as1"}
    assert result.error.details["step"] == "create_ad_creative"


def test_reach_estimate_goes_through_client(make_campaign, meta_creds, transport):
    transport.reply({"data": [{"estimate_mau_lower_bound": 10, "estimate_mau_upper_bound": 20, "estimate_ready": False}]})
    out = MetaCampaignDistributor(http=transport).get_reach_estimate(make_campaign(), meta_creds)
    assert out["max_reach"] == 20
