from __future__ import annotations

from datetime import timedelta

from adbridge.distributors import TikTokCampaignDistributor

CREATED = {"campaign": {"id": "cmp1"}, "ad_group": {"id": "ag1"}, "ad": {"id": "ad1", "ad_ids": ["ad1"]}}


def _d(fake, tracer, clock):
    return TikTokCampaignDistributor(client_factory=lambda creds: fake, tracer=tracer, clock=clock)


def test_start_in_the_past_is_rejected_without_creating(make_campaign, tiktok_creds, fake_client, tracer, clock):
    fake = fake_client(CREATED)
    yesterday = (clock() - timedelta(days=1)).isoformat()
    result = _d(fake, tracer, clock).distribute(make_campaign(schedule={"startDate": yesterday}), tiktok_creds)

    assert not result.success
    assert result.state == "rejected"
    assert any("start date" in e for e in result.error.details["errors"])
    assert "create_campaign" not in fake.calls


def test_media_and_text_rules(make_campaign, clock):
    d = TikTokCampaignDistributor(clock=clock)
    report = d.validate_campaign_data(make_campaign(creative={"media": [], "description": None, "headline": ""}))
    assert "At least one media item is required" in report.errors
    assert "Ad text (description or headline) is required" in report.errors

    long = d.validate_campaign_data(make_campaign(creative={"description": "x" * 101}))
    assert "Ad text must be 100 characters or less for TikTok" in long.errors


def test_headline_is_used_when_no_description(make_campaign, clock):
    report = TikTokCampaignDistributor(clock=clock).validate_campaign_data(make_campaign(creative={"description": None}))
    assert report.valid


def test_low_budget_warns(make_campaign, clock):
    report = TikTokCampaignDistributor(clock=clock).validate_campaign_data(make_campaign(budget={"amount": 10}))
    assert report.valid
    assert report.warnings == ["Daily budget below $20 may not meet TikTok minimums"]


def test_success(make_campaign, tiktok_creds, fake_client, tracer, clock):
    fake = fake_client(CREATED)
    result = _d(fake, tracer, clock).distribute(make_campaign(), tiktok_creds)
    assert result.success
    assert fake.calls == ["test_connection", "create_campaign"]
    assert result.to_dict() == {
        "platform": "tiktok",
        "success": True,
        "campaignId": "cmp1",
        "adGroupId": "ag1",
        "adId": "ad1",
        "state": "created",
    }


def test_remote_code_rejection_end_to_end(make_campaign, tiktok_creds, transport, tracer, clock):
    transport.reply({"code": 0, "data": {"list": [{"advertiser_id": "7000"}]}})
    transport.reply({"code": 0, "data": {"image_id": "img1"}})
    transport.reply({"code": 40002, "message": "Budget is too low", "data": {}})
    result = TikTokCampaignDistributor(http=transport, tracer=tracer, clock=clock).distribute(make_campaign(), tiktok_creds)

    assert result.state == "failed"
    assert result.error.code == "REMOTE_REJECTION"
    assert result.error.details["remote_code"] == 40002
    assert result.error.details["created"] == {"image_ids": ["img1"]}


def test_preview_and_recommendations(make_campaign, clock):
    d = TikTokCampaignDistributor(clock=clock)
    data = make_campaign(budget={"amount": 25}, targeting={"ageMin": 40, "ageMax": 60})
    preview = d.preview_campaign(data)
    assert "[Image Display]" in preview["feed_preview"]
    assert "Ad Text: Free shipping on orders over $50. (33/100 chars)" in preview["specifications"]

    tips = d.get_campaign_recommendations(data)
    assert tips[0].startswith("TikTok performs best with video content")
    assert "Note: TikTok's primary audience is 18-34. Consider this for your targeting." in tips
    assert tips[-1] == "Consider increasing budget to at least $50/day for better reach on TikTok"
