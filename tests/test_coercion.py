import pytest

from app.core.coercion import (
    coerce_creator_profile,
    coerce_engagement,
    coerce_float,
    coerce_mapping,
    coerce_match_spec,
    coerce_platform_metrics,
    coerce_string_list,
)
from app.core.types import PlatformMetric


@pytest.mark.parametrize(
    "raw, expected",
    [
        (["instagram", " TikTok ", ""], ["instagram", "TikTok"]),
        ('["youtube", "x"]', ["youtube", "x"]),
        ("instagram", ["instagram"]),
        ("[broken json", ["[broken json"]),
        ("[beta] fitness", ["[beta] fitness"]),
        ("[not, json]", []),
        ('{"not": "a list"}', []),
        (None, []),
        (float("nan"), []),
        (42, []),
        ([None, "a", float("nan")], ["a"]),
    ],
)
def test_coerce_string_list(raw, expected):
    assert coerce_string_list(raw) == expected


def test_coerce_mapping_accepts_json_and_rejects_garbage():
    assert coerce_mapping('{"a": 1}') == {"a": 1}
    assert coerce_mapping("[1, 2]") == {}
    assert coerce_mapping("nope") == {}
    assert coerce_mapping(None) == {}


def test_coerce_float_drops_non_finite_and_bools():
    assert coerce_float("0.5") == 0.5
    assert coerce_float(True) is None
    assert coerce_float(float("inf")) is None
    assert coerce_float("nan") is None
    assert coerce_float("abc") is None


@pytest.mark.parametrize("raw, expected", [(0.08, 0.08), (0, None), (-1, None), (3.0, 1.0), ("x", None)])
def test_coerce_engagement(raw, expected):
    assert coerce_engagement(raw) == expected


def test_platform_metrics_are_clamped_and_keyed_by_lowercase_platform():
    metrics = coerce_platform_metrics(
        '{"Instagram": {"followers": "1200.4", "engagement_rate": 1.7, "avg_views": -3},'
        ' "tiktok": {}, "x": "garbage"}'
    )
    assert list(metrics) == ["instagram"]
    assert metrics["instagram"] == PlatformMetric(followers=1200, avg_views=0.0, engagement_rate=1.0)


def test_creator_profile_from_json_encoded_row():
    creator = coerce_creator_profile(
        {
            "id": 7,
            "niche": "Fitness Coaching",
            "platforms": '["Instagram", "instagram", "TikTok"]',
            "estimated_engagement": float("nan"),
            "metrics": '{"top_topics": ["Gym Routines", "gym routines"], "platform_metrics": {"tiktok": {"engagement_rate": 0.03}}}',
        }
    )
    assert creator.id == "7"
    assert creator.niche == "Fitness Coaching"
    assert creator.platforms == ("instagram", "tiktok")
    assert creator.estimated_engagement is None
    assert creator.metrics.top_topics == ("gym routines",)
    assert creator.metrics.platform_metrics["tiktok"].engagement_rate == pytest.approx(0.03)


def test_creator_profile_never_fails_on_malformed_row():
    creator = coerce_creator_profile(
        {"niche": None, "platforms": '{"oops": 1}', "metrics": "not json", "products_sold": 12},
        fallback_id="candidate-3",
    )
    assert creator.id == "candidate-3"
    assert creator.niche == ""
    assert creator.platforms == ()
    assert creator.products_sold == ()
    assert creator.metrics.top_topics == ()
    assert creator.metrics.platform_metrics == {}


def test_match_spec_keeps_campaign_angles_out_of_match_topics():
    spec = coerce_match_spec(
        {
            "category": "  ",
            "campaign_angles": ["Summer Shred Challenge"],
            "match_topics": '["Gym Routines"]',
        }
    )
    assert spec.category is None
    assert spec.campaign_angles == ("summer shred challenge",)
    assert spec.match_topics == ("gym routines",)

