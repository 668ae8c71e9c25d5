from __future__ import annotations

from adbridge.models import Gender, LocationType, TikTokExtension, UnifiedLocation, UnifiedTargeting
from adbridge.platforms.tiktok.targeting import TikTokTargetingTransformer, get_targeting_suggestions

US = UnifiedLocation(LocationType.COUNTRY, "United States")


def _t(**kw) -> UnifiedTargeting:
    kw.setdefault("locations", [US])
    return UnifiedTargeting(**kw)


def test_basic_transform():
    out = TikTokTargetingTransformer().transform(
        _t(age_min=25, age_max=44, languages=["Spanish"], interests=["Gaming", "Nope"])
    )
    assert out["location_ids"] == [6252001]
    assert out["age_groups"] == ["AGE_25_34", "AGE_35_44"]
    assert out["languages"] == ["es"]
    assert out["interest_category_ids"] == [100003]


def test_gender_all_and_both_are_omitted():
    tr = TikTokTargetingTransformer()
    assert "gender" not in tr.transform(_t(genders=[Gender.ALL]))
    assert "gender" not in tr.transform(_t(genders=[Gender.MALE, Gender.FEMALE]))


def test_single_gender():
    assert TikTokTargetingTransformer().transform(_t(genders=[Gender.FEMALE]))["gender"] == "GENDER_FEMALE"


def test_full_range_covers_every_group():
    out = TikTokTargetingTransformer().transform(_t(age_min=13, age_max=65))
    assert out["age_groups"] == ["AGE_13_17", "AGE_18_24", "AGE_25_34", "AGE_35_44", "AGE_45_54", "AGE_55_100"]


def test_extension_fields():
    ext = TikTokExtension(
        hashtags=["123", "#summer", " 456 "],
        video_categories=["VIDEO_VIEW"],
        device_models=["iphone15"],
        operating_systems=["ios", "symbian"],
        connection_types=["wifi", "5g", "dialup"],
    )
    out = TikTokTargetingTransformer().transform(_t(tiktok=ext))
    assert out["hashtag_ids"] == [123, 456]
    assert out["video_related_action"] == ["VIDEO_VIEW"]
    assert out["device_model_ids"] == ["iphone15"]
    assert out["operating_systems"] == ["IOS"]
    assert out["network_types"] == ["WIFI", "5G"]


def test_validation():
    tr = TikTokTargetingTransformer()
    report = tr.validate(tr.transform(_t(locations=[UnifiedLocation(LocationType.CITY, "Atlantis")], age_min=60, age_max=20)))
    assert report.errors == ["At least one location is required", "Age targeting is required"]


def test_suggestions():
    assert "Focus on WiFi users for app downloads" in get_targeting_suggestions("app_promotion")
    assert get_targeting_suggestions("leads") == get_targeting_suggestions("awareness")
