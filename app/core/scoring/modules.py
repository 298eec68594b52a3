"""The four independent scoring signals.

Each module scores one ``(MatchSpec, CreatorProfile)`` pair and returns a
``ScoreResult``. Modules are pure and order-independent; the aggregator runs
them as an ordered list of strategies.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from app.core.reasons import ReasonCode
from app.core.scoring.policy import ScoringPolicy
from app.core.types import CreatorProfile, MatchSpec, PlatformMetric, ScoreResult, normalize_term


def clamp01(value: float) -> float:
    if value != value:  # NaN
        return 0.0
    return max(0.0, min(1.0, value))


class ScoringModule:
    """Shared interface for scoring strategies."""

    name: str = ""
    weight: float = 0.0

    def score(self, spec: MatchSpec, creator: CreatorProfile) -> ScoreResult:
        raise NotImplementedError


class NicheAffinity(ScoringModule):
    """Does the creator's niche contain the brand's category?

    Containment rather than equality: creator niches are compound free text
    ("fitness coaching for new moms") while the brand gives one label. The
    check is one-way and never goes through the niche catalog, so category
    "fitness coaching" against niche "fitness" is a mismatch.
    """

    name = "niche_affinity"
    weight = 0.45

    NEUTRAL_SCORE = 0.4
    MATCH_SCORE = 1.0
    MISMATCH_SCORE = 0.3

    def score(self, spec: MatchSpec, creator: CreatorProfile) -> ScoreResult:
        category = normalize_term(spec.category) if spec.category else ""
        if not category:
            return ScoreResult(score=self.NEUTRAL_SCORE, confidence=0.5)

        niche = normalize_term(creator.niche) if creator.niche else ""
        if not niche:
            return ScoreResult(score=self.MISMATCH_SCORE, confidence=0.3)

        if category in niche:
            return ScoreResult(
                score=self.MATCH_SCORE,
                confidence=0.9,
                reasons=(ReasonCode.CATEGORY_NICHE_MATCH,),
            )
        return ScoreResult(score=self.MISMATCH_SCORE, confidence=0.8)


class TopicSimilarity(ScoringModule):
    """Share of the brand's match topics the creator covers, plus a priority-topic boost."""

    name = "topic_similarity"
    weight = 0.35

    def __init__(self, policy: ScoringPolicy) -> None:
        self.policy = policy

    def priority_boost(self, spec: MatchSpec, creator_topics: set) -> float:
        hits = sum(1 for topic in spec.priority_topics if topic in creator_topics)
        return min(self.policy.topic_boost_cap, hits * self.policy.topic_boost_step)

    def score(self, spec: MatchSpec, creator: CreatorProfile) -> ScoreResult:
        brand_topics = spec.match_topics
        creator_topics = set(creator.metrics.top_topics)
        boost = self.priority_boost(spec, creator_topics)

        if not brand_topics or not creator_topics:
            overlap = 0.0
            confidence = 0.3
        else:
            shared = sum(1 for topic in brand_topics if topic in creator_topics)
            overlap = shared / len(brand_topics)
            confidence = min(0.95, 0.45 + 0.1 * len(brand_topics))

        reasons: List[ReasonCode] = []
        if overlap >= 0.3:
            reasons.append(ReasonCode.TOPIC_OVERLAP)
        if boost > 0:
            reasons.append(ReasonCode.PRIORITY_TOPIC_MATCH)

        return ScoreResult(
            score=clamp01(overlap + boost),
            confidence=confidence,
            reasons=tuple(reasons),
            meta={"overlap": overlap, "boost": boost},
        )


def _metric_strength(metric: Optional[PlatformMetric]) -> Optional[float]:
    """Engagement rate when known, else views per follower."""
    if metric is None:
        return None
    if metric.engagement_rate is not None and metric.engagement_rate > 0:
        return metric.engagement_rate
    if metric.avg_views is not None and metric.followers:
        return metric.avg_views / metric.followers
    return None


class PlatformAlignment(ScoringModule):
    """Share of the brand's preferred platforms the creator is active on.

    Directive platforms are merged into ``preferred_platforms`` before this
    module runs, so it does not tell the two apart.
    """

    name = "platform_alignment"
    weight = 0.10

    def best_platform(self, spec: MatchSpec, creator: CreatorProfile) -> Optional[str]:
        creator_platforms = set(creator.platforms)
        shared = [p for p in spec.preferred_platforms if p in creator_platforms]
        if not shared:
            return None

        best: Optional[str] = None
        best_strength = None
        for platform in shared:
            strength = _metric_strength(creator.metrics.platform_metrics.get(platform))
            if strength is not None and (best_strength is None or strength > best_strength):
                best, best_strength = platform, strength
        return best if best is not None else shared[0]

    def score(self, spec: MatchSpec, creator: CreatorProfile) -> ScoreResult:
        brand_platforms = spec.preferred_platforms
        if not brand_platforms:
            return ScoreResult(score=0.5, confidence=0.2)
        if not creator.platforms:
            return ScoreResult(score=0.0, confidence=0.4)

        creator_platforms = set(creator.platforms)
        overlap = sum(1 for p in brand_platforms if p in creator_platforms) / len(brand_platforms)
        reasons = (ReasonCode.PLATFORM_ALIGNMENT,) if overlap >= 0.5 else ()
        return ScoreResult(
            score=clamp01(overlap),
            confidence=min(0.95, 0.5 + 0.1 * len(brand_platforms)),
            reasons=reasons,
            meta={"best_platform": self.best_platform(spec, creator)},
        )


class EngagementFit(ScoringModule):
    """Effective engagement rate against the target rate.

    A creator with no engagement data scores 0 at confidence 0.25. Known but
    low engagement also scores near 0, at confidence 0.7 or higher, so the two
    cases stay distinguishable downstream.
    """

    name = "engagement_fit"
    weight = 0.10

    MISSING_CONFIDENCE = 0.25

    def __init__(self, policy: ScoringPolicy) -> None:
        self.policy = policy

    @staticmethod
    def effective_rate(creator: CreatorProfile) -> Tuple[Optional[float], float, int]:
        """Return ``(rate, confidence, platform_signal_count)``."""
        direct = creator.estimated_engagement
        if direct is not None and direct > 0:
            return direct, 0.9, 0

        metrics = list(creator.metrics.platform_metrics.values())
        rates = [m.engagement_rate for m in metrics if m.engagement_rate is not None and m.engagement_rate > 0]
        if rates:
            return sum(rates) / len(rates), 0.7, len(rates)

        proxies = [
            m.avg_views / m.followers
            for m in metrics
            if m.avg_views is not None and m.followers is not None and m.followers > 0
        ]
        if proxies:
            return sum(proxies) / len(proxies), 0.7, len(proxies)

        return None, EngagementFit.MISSING_CONFIDENCE, 0

    def score(self, spec: MatchSpec, creator: CreatorProfile) -> ScoreResult:
        rate, confidence, signal_count = self.effective_rate(creator)
        if rate is None:
            return ScoreResult(score=0.0, confidence=confidence)

        score = clamp01(rate / self.policy.engagement_target_rate)
        reasons: List[ReasonCode] = []
        if score >= 0.8:
            reasons.append(ReasonCode.STRONG_ENGAGEMENT)
        if signal_count >= 2:
            reasons.append(ReasonCode.MULTI_PLATFORM_ENGAGEMENT)
        return ScoreResult(score=score, confidence=confidence, reasons=tuple(reasons), meta={"rate": rate})


def default_modules(policy: ScoringPolicy) -> List[ScoringModule]:
    """Semantic fit (niche + topics) carries 80% of the weight, execution quality 20%."""
    return [
        NicheAffinity(),
        TopicSimilarity(policy),
        PlatformAlignment(),
        EngagementFit(policy),
    ]


__all__ = [
    "ScoringModule",
    "NicheAffinity",
    "TopicSimilarity",
    "PlatformAlignment",
    "EngagementFit",
    "default_modules",
    "clamp01",
]
