import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app.core.coercion import coerce_creator_profile, coerce_match_spec  # noqa: E402
from app.core.match_store import MatchStore  # noqa: E402


FITNESS_BRAND = {
    "category": "fitness coaching",
    "preferred_platforms": ["instagram", "tiktok"],
    "target_audience": ["weight loss", "gym beginners"],
    "goals": ["sales"],
    "campaign_angles": ["weight loss tips", "nutrition routine"],
    "match_topics": ["gym routines", "weight loss transformations", "nutrition for fat loss"],
}

CREATOR_ROWS = [
    {
        "id": "cr_fit",
        "niche": "fitness coaching",
        "platforms": ["instagram", "tiktok"],
        "audience_types": ["gym beginners", "weight loss"],
        "estimated_engagement": 0.058,
        "metrics": {"top_topics": ["gym routines", "weight loss transformations"]},
    },
    {
        "id": "cr_fin",
        "niche": "personal finance",
        "platforms": ["youtube"],
        "audience_types": ["young professionals"],
        "estimated_engagement": 0.05,
        "metrics": {"top_topics": ["investing", "credit cards"]},
    },
    {
        "id": "cr_yoga",
        "niche": "yoga and mobility",
        "platforms": ["instagram"],
        "audience_types": ["women 25-44"],
        "estimated_engagement": None,
        "metrics": {
            "top_topics": ["nutrition for fat loss"],
            "platform_metrics": {"instagram": {"followers": 20000, "avg_views": 600}},
        },
    },
]


@pytest.fixture()
def creator_rows():
    return [dict(row) for row in CREATOR_ROWS]


@pytest.fixture()
def fitness_brand():
    return dict(FITNESS_BRAND)


@pytest.fixture()
def fitness_spec(fitness_brand):
    return coerce_match_spec(fitness_brand)


@pytest.fixture()
def creator_pool():
    return [coerce_creator_profile(row) for row in CREATOR_ROWS]


@pytest.fixture()
def make_creator():
    def factory(**fields):
        row = {"id": "cr_test"}
        row.update(fields)
        return coerce_creator_profile(row)

    return factory


@pytest.fixture()
def match_store(tmp_path):
    store = MatchStore(f"sqlite:///{tmp_path / 'matches.db'}")
    store.init_db()
    return store
