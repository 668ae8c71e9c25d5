from __future__ import annotations

from datetime import timedelta

from adbridge.distributors import GoogleCampaignDistributor

CREATED = {
    "campaign": {"id": "22", "resource_name": "customers/1/campaigns/22"},
    "ad_group": {"id": "33", "resource_name": "customers/1/adGroups/33"},
    "ads": [{"id": "55", "type": "responsive_search"}, {"id": "56", "type": "responsive_display"}],
}


def _d(fake, tracer, clock):
    return GoogleCampaignDistributor(client_factory=lambda creds: fake, tracer=tracer, clock=clock)


def test_headline_over_30_chars_is_rejected(make_campaign, google_creds, fake_client, tracer, clock):
    fake = fake_client(CREATED)
    data = make_campaign(creative={"headline": "H" * 31})
    result = _d(fake, tracer, clock).distribute(data, google_creds)

    assert not result.success
    assert result.error.code == "VALIDATION_ERROR"
    assert "Ad headline must be 30 characters or less for Google Ads" in result.error.details["errors"]
    assert fake.calls == []


def test_description_rules(make_campaign, clock):
    d = GoogleCampaignDistributor(clock=clock)
    assert "Ad description is required" in d.validate_campaign_data(make_campaign(creative={"description": None})).errors
    long = d.validate_campaign_data(make_campaign(creative={"description": "d" * 91}))
    assert "Ad description must be 90 characters or less for Google Ads" in long.errors


def test_objective_must_be_supported(make_campaign, clock):
    report = GoogleCampaignDistributor(clock=clock).validate_campaign_data(make_campaign(objective="engagement"))
    assert "Invalid campaign objective. Must be one of: awareness, traffic, conversions, leads" in report.errors


def test_soon_start_and_young_audience_only_warn(make_campaign, clock):
    soon = (clock() + timedelta(hours=2)).isoformat()
    data = make_campaign(schedule={"startDate": soon}, targeting={"ageMin": 16})
    report = GoogleCampaignDistributor(clock=clock).validate_campaign_data(data)
    assert report.valid
    assert "Campaign start date is very soon. Consider starting at least 1 day in the future." in report.warnings
    assert any("below age 18" in w for w in report.warnings)


def test_probe_runs_before_creation(make_campaign, google_creds, fake_client, tracer, clock):
    fake = fake_client(CREATED)
    result = _d(fake, tracer, clock).distribute(make_campaign(), google_creds)

    assert result.success
    assert fake.calls == ["test_connection", "create_campaign"]
    assert result.campaign_id == "22"
    assert result.ad_group_id == "33"
    assert result.ad_ids == ["55", "56"]
    assert result.to_dict()["adGroupId"] == "33"
    assert result.to_dict()["adIds"] == ["55", "56"]


def test_failed_probe_stops_before_creation(make_campaign, google_creds, fake_client, tracer, clock):
    fake = fake_client(CREATED, connected=False)
    result = _d(fake, tracer, clock).distribute(make_campaign(), google_creds)

    assert result.state == "connection_failed"
    assert result.error.message == "Failed to connect to Google Ads API. Check your credentials."
    assert fake.calls == ["test_connection"]


def test_warnings_are_carried_on_the_result(make_campaign, google_creds, fake_client, tracer, clock):
    data = make_campaign(targeting={"ageMin": 16})
    result = _d(fake_client(CREATED), tracer, clock).distribute(data, google_creds)
    assert result.success
    assert result.warnings
    assert tracer.named("distribution.warning")


def test_end_to_end_against_scripted_api(make_campaign, google_creds, transport, tracer, clock):
    rn = "customers/1234567890"
    transport.reply({"results": [{"customer": {"id": "1234567890"}}]})
    for path in ("campaignBudgets/1", "campaigns/2", "adGroups/3", "campaignCriteria/2~2840", "adGroupCriteria/3~1"):
        transport.reply({"results": [{"resourceName": f"{rn}/{path}"}]})
    data = make_campaign(creative={"media": [{"type": "video", "url": "https://cdn.example.com/spot.mp4"}]})
    transport.reply({"results": [{"resourceName": f"{rn}/adGroupAds/3~4"}]})

    result = GoogleCampaignDistributor(http=transport, tracer=tracer, clock=clock).distribute(data, google_creds)
    assert result.success, result.error
    assert (result.campaign_id, result.ad_group_id, result.ad_ids) == ("2", "3", ["4"])


def test_preview(make_campaign, clock):
    out = GoogleCampaignDistributor(clock=clock).preview_campaign(make_campaign())
    assert out["search_ad_preview"].startswith("Ad - shop.example.com")
    assert "[Image: https://cdn.example.com/spring.jpg]" in out["display_ad_preview"]
    assert "[Button: Shop Now]" in out["display_ad_preview"]
