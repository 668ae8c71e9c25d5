"""Tests for the adbridge CLI (in-process via main())."""

from __future__ import annotations

import json
from datetime import timedelta
from pathlib import Path

import pytest
import yaml

from adbridge.cli import main
from adbridge.distributors import MetaCampaignDistributor
from adbridge.infra.time_utc import now_utc

CRED_VARS = [
    "ADBRIDGE_META_ACCESS_TOKEN",
    "ADBRIDGE_META_AD_ACCOUNT_ID",
    "ADBRIDGE_META_PAGE_ID",
    "ADBRIDGE_GOOGLE_ACCESS_TOKEN",
    "ADBRIDGE_GOOGLE_CUSTOMER_ID",
    "ADBRIDGE_GOOGLE_DEVELOPER_TOKEN",
    "ADBRIDGE_TIKTOK_ACCESS_TOKEN",
    "ADBRIDGE_TIKTOK_ADVERTISER_ID",
]


@pytest.fixture
def campaign_file(tmp_path: Path, raw_campaign):
    def _write(**overrides) -> Path:
        start = now_utc() + timedelta(days=7)
        raw = raw_campaign(
            schedule={"startDate": start.isoformat(), "endDate": (start + timedelta(days=30)).isoformat()},
            **overrides,
        )
        p = tmp_path / "campaign.yml"
        p.write_text(yaml.safe_dump({"campaign": raw}), encoding="utf-8")
        return p

    return _write


@pytest.fixture
def no_credentials(monkeypatch):
    for name in CRED_VARS:
        monkeypatch.delenv(name, raising=False)


def test_validate_all_platforms_ok(campaign_file, capsys):
    rc = main(["validate", str(campaign_file())])
    out = json.loads(capsys.readouterr().out)
    assert rc == 0
    assert set(out) == {"meta", "google", "tiktok"}
    assert all(r["valid"] for r in out.values())


def test_validate_reports_platform_errors(campaign_file, capsys):
    rc = main(["validate", str(campaign_file(creative={"headline": "H" * 31})), "--platforms", "google,meta"])
    out = json.loads(capsys.readouterr().out)
    assert rc == 1
    assert out["google"]["valid"] is False
    assert "Ad headline must be 30 characters or less for Google Ads" in out["google"]["errors"]
    assert out["meta"]["valid"] is True


def test_missing_campaign_file_exits_2(tmp_path, capsys):
    rc = main(["validate", str(tmp_path / "nope.yml")])
    assert rc == 2
    assert "Campaign file not found" in capsys.readouterr().err


def test_unknown_platform_is_an_argument_error(campaign_file):
    with pytest.raises(SystemExit) as ei:
        main(["validate", str(campaign_file()), "--platforms", "myspace"])
    assert ei.value.code == 2


def test_distribute_without_credentials_never_touches_the_network(campaign_file, no_credentials, tmp_path, capsys):
    ledger = tmp_path / "events.ndjson"
    rc = main(["distribute", str(campaign_file()), "--ledger", str(ledger)])
    out = json.loads(capsys.readouterr().out)

    assert rc == 1
    assert (out["totalPlatforms"], out["successful"], out["failed"]) == (3, 0, 3)
    assert {r["state"] for r in out["results"]} == {"connection_failed"}
    assert all(r["error"]["code"] == "CONNECTION_ERROR" for r in out["results"])

    events = [json.loads(line)["event_type"] for line in ledger.read_text(encoding="utf-8").splitlines()]
    assert "distribution.state" in events
    assert "distribution.fanout" in events
    assert "api.request" not in events


def test_status_and_insights(monkeypatch, fake_client, capsys):
    fake = fake_client()
    monkeypatch.setattr(
        "adbridge.distributors.get_distributor",
        lambda platform: MetaCampaignDistributor(client_factory=lambda creds: fake),
    )

    assert main(["status", "--platform", "meta", "--campaign-id", "c1", "--action", "pause"]) == 0
    status = json.loads(capsys.readouterr().out)
    assert status == {"platform": "meta", "success": True, "action": "pause", "response": {"id": "c1", "status": "PAUSED"}}

    assert main(["insights", "--platform", "facebook", "--campaign-id", "c1"]) == 0
    insights = json.loads(capsys.readouterr().out)
    assert insights["insights"] == {"impressions": 1}
    assert fake.calls == ["status:c1:PAUSED", "insights:c1"]


def test_validate_reports_platforms_without_a_distributor(campaign_file, capsys):
    rc = main(["validate", str(campaign_file()), "--platforms", "meta,linkedin"])
    out = json.loads(capsys.readouterr().out)
    assert rc == 1
    assert out["meta"]["valid"] is True
    assert out["linkedin"] == {
        "valid": False,
        "errors": ["No campaign distributor for platform 'linkedin'"],
        "warnings": [],
    }
