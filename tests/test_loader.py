from __future__ import annotations

import json

import pytest
import yaml

from adbridge.loader import CampaignFileError, load_campaign, parse_campaign


def test_yaml_file(tmp_path, raw_campaign):
    p = tmp_path / "spring.yml"
    p.write_text(yaml.safe_dump({"campaign": raw_campaign()}), encoding="utf-8")
    data = load_campaign(p)
    assert data.name == "Spring Sale"
    assert data.targeting.locations[0].name == "United States"


def test_json_file(tmp_path, raw_campaign):
    p = tmp_path / "spring.json"
    p.write_text(json.dumps(raw_campaign(name="From JSON")), encoding="utf-8")
    assert load_campaign(str(p)).name == "From JSON"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_campaign(tmp_path / "nope.yml")


def test_invalid_yaml(tmp_path):
    p = tmp_path / "bad.yaml"
    p.write_text("campaign: [unclosed\n", encoding="utf-8")
    with pytest.raises(CampaignFileError, match="invalid YAML"):
        load_campaign(p)


def test_invalid_json(tmp_path):
    p = tmp_path / "bad.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(CampaignFileError, match="invalid JSON"):
        load_campaign(p)


def test_missing_required_field(raw_campaign):
    raw = raw_campaign()
    del raw["budget"]
    with pytest.raises(CampaignFileError, match="missing required field 'budget'"):
        parse_campaign(raw, source="spring.yml")


def test_bad_values_are_wrapped(raw_campaign):
    with pytest.raises(CampaignFileError, match="spring.yml"):
        parse_campaign(raw_campaign(budget={"amount": "lots"}), source="spring.yml")
    with pytest.raises(CampaignFileError):
        parse_campaign(["not", "a", "mapping"])
