import pytest

from app.core.coercion import coerce_creator_profile, coerce_match_spec
from app.core.reasons import ReasonCode
from app.core.scoring import CompatibilityScorer, ScoringModule, ScoringPolicy, compute_compatibility_score
from app.core.types import ScoreResult


def test_weights_favour_semantic_fit():
    weights = {module.name: module.weight for module in CompatibilityScorer().modules}
    assert weights == {
        "niche_affinity": 0.45,
        "topic_similarity": 0.35,
        "platform_alignment": 0.10,
        "engagement_fit": 0.10,
    }
    assert sum(weights.values()) == pytest.approx(1.0)


def test_fitness_creator_breakdown(fitness_spec, creator_pool):
    result = compute_compatibility_score(fitness_spec, creator_pool[0])
    breakdown = result.breakdown()
    assert breakdown["niche_score"] == 1.0
    assert breakdown["topic_score"] == pytest.approx(0.6667, abs=1e-4)
    assert breakdown["platform_score"] == 1.0
    assert breakdown["engagement_score"] == 1.0
    assert breakdown["best_platform"] == "instagram"
    assert breakdown["priority_boost"] == 0.0
    expected = 0.45 + 0.35 * (2 / 3) + 0.10 + 0.10
    assert result.total == pytest.approx(round(expected, 4))
    assert result.reason_labels() == ["category/niche match", "topic overlap", "platform alignment"]


def test_reasons_are_deduplicated_and_capped(fitness_spec, creator_pool):
    result = CompatibilityScorer(policy=ScoringPolicy(reason_limit=2)).score(fitness_spec, creator_pool[0])
    assert len(result.reasons) == 2
    assert len(set(result.reasons)) == len(result.reasons)


def test_totals_and_modules_stay_in_bounds(fitness_spec, creator_rows):
    scorer = CompatibilityScorer()
    rows = creator_rows + [
        {"id": "weird", "niche": 5, "platforms": "{", "estimated_engagement": "12", "metrics": "[]"},
        {"id": "empty"},
    ]
    for row in rows:
        result = scorer.score(fitness_spec, coerce_creator_profile(row))
        assert 0.0 <= result.total <= 1.0
        for module in result.modules:
            assert 0.0 <= module.score <= 1.0
            assert 0.0 <= module.confidence <= 1.0


def test_scoring_is_deterministic(fitness_spec, creator_pool):
    first = [compute_compatibility_score(fitness_spec, c) for c in creator_pool]
    second = [CompatibilityScorer().score(fitness_spec, c) for c in creator_pool]
    assert first == second


@pytest.mark.parametrize("brand", [{}, {"category": "fitness coaching", "match_topics": ["gym"], "preferred_platforms": ["tiktok"]}])
def test_missing_data_floor(brand):
    result = compute_compatibility_score(coerce_match_spec(brand), coerce_creator_profile({"id": "ghost"}))
    assert result.total < 0.5
    assert all(module.confidence <= 0.5 for module in result.modules)
    assert result.best_platform is None


def test_priority_boost_is_bounded_and_recorded(fitness_spec, creator_pool):
    directed = coerce_match_spec(
        {
            "category": "fitness coaching",
            "match_topics": ["gym routines"],
            "priority_niches": ["fitness"],
            "priority_topics": ["gym routines", "weight loss transformations"],
        }
    )
    scorer = CompatibilityScorer()
    boosted = scorer.score(directed, creator_pool[0])
    assert boosted.priority_boost == pytest.approx(0.05)
    assert boosted.total <= 1.0

    policy = ScoringPolicy(priority_boost_step=0.01, priority_boost_cap=0.02, reason_limit=10)
    result = CompatibilityScorer(policy=policy).score(directed, creator_pool[2])
    assert result.priority_boost == 0.0
    result = CompatibilityScorer(policy=policy).score(directed, creator_pool[0])
    assert result.priority_boost == pytest.approx(0.02)
    assert ReasonCode.PRIORITY_NICHE_MATCH in result.reasons
    assert ReasonCode.PRIORITY_TOPIC_MATCH in result.reasons


def test_priority_boost_nudges_but_does_not_dominate():
    spec = coerce_match_spec({"category": "personal finance", "priority_topics": ["travel hacks"]})
    on_niche = coerce_creator_profile({"id": "a", "niche": "personal finance"})
    off_niche = coerce_creator_profile({"id": "b", "niche": "travel", "metrics": {"top_topics": ["travel hacks"]}})
    scorer = CompatibilityScorer()
    assert scorer.score(spec, on_niche).total > scorer.score(spec, off_niche).total


class ConstantModule(ScoringModule):
    name = "constant"
    weight = 1.0

    def score(self, spec, creator):
        return ScoreResult(score=2.0, confidence=-1.0)


def test_custom_module_list_is_clamped(fitness_spec, creator_pool):
    result = CompatibilityScorer(modules=[ConstantModule()]).score(fitness_spec, creator_pool[1])
    assert result.total == 1.0
    assert result.modules[0].confidence == 0.0
    assert result.breakdown()["niche_score"] is None


def test_duplicate_module_names_rejected():
    with pytest.raises(ValueError):
        CompatibilityScorer(modules=[ConstantModule(), ConstantModule()])


def test_priority_niche_hits_use_containment_only():
    scorer = CompatibilityScorer()
    spec = coerce_match_spec({"priority_niches": ["fitness coaching", "skincare"]})
    alias_only = coerce_creator_profile({"id": "a", "niche": "fitness"})
    contained = coerce_creator_profile({"id": "b", "niche": "skincare for teens"})
    assert scorer.priority_hits(spec, alias_only) == (0, 0)
    assert scorer.priority_hits(spec, contained) == (1, 0)
    assert scorer.score(spec, alias_only).priority_boost == 0.0
