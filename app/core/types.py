"""Records consumed and produced by the compatibility scoring engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.core.reasons import ReasonCode, describe_reasons


def normalize_term(value: Any) -> str:
    """Lowercase and collapse whitespace so terms compare across sources."""
    return " ".join(str(value).split()).lower()


def unique_terms(values: Iterable[Any]) -> Tuple[str, ...]:
    """Normalized, de-duplicated terms in first-seen order."""
    seen = set()
    ordered: List[str] = []
    for raw in values:
        if raw is None:
            continue
        term = normalize_term(raw)
        if term and term not in seen:
            seen.add(term)
            ordered.append(term)
    return tuple(ordered)


@dataclass(frozen=True)
class PlatformMetric:
    """Per-platform audience numbers for one creator."""

    followers: Optional[int] = None
    avg_views: Optional[float] = None
    engagement_rate: Optional[float] = None
    confidence: Optional[float] = None
    sample_size: Optional[int] = None
    source: Optional[str] = None


@dataclass
class CreatorMetrics:
    top_topics: Tuple[str, ...] = ()
    platform_metrics: Dict[str, PlatformMetric] = field(default_factory=dict)


@dataclass
class CreatorProfile:
    """Creator-side record. Niche stays free text; it is normalized at scoring time."""

    id: str
    niche: str = ""
    platforms: Tuple[str, ...] = ()
    audience_types: Tuple[str, ...] = ()
    content_style: Optional[str] = None
    products_sold: Tuple[str, ...] = ()
    estimated_engagement: Optional[float] = None
    metrics: CreatorMetrics = field(default_factory=CreatorMetrics)


@dataclass(frozen=True)
class RankingDirectives:
    """Operator-supplied nudges applied on top of the brand's own profile."""

    priority_niches: Tuple[str, ...] = ()
    priority_topics: Tuple[str, ...] = ()
    preferred_platforms: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MatchSpec:
    """Brand-side projection used only for scoring.

    ``match_topics`` is expressed in creator-native topic vocabulary.
    ``campaign_angles`` is marketing copy and is never used for topic scoring.
    """

    category: Optional[str] = None
    target_audience: Tuple[str, ...] = ()
    goals: Tuple[str, ...] = ()
    preferred_platforms: Tuple[str, ...] = ()
    campaign_angles: Tuple[str, ...] = ()
    match_topics: Tuple[str, ...] = ()
    priority_niches: Tuple[str, ...] = ()
    priority_topics: Tuple[str, ...] = ()

    def with_directives(self, directives: Optional[RankingDirectives]) -> "MatchSpec":
        """Merge directives in: brand values first, directive values appended, case-insensitive dedup."""
        if directives is None:
            return self
        return MatchSpec(
            category=self.category,
            target_audience=self.target_audience,
            goals=self.goals,
            preferred_platforms=unique_terms(self.preferred_platforms + directives.preferred_platforms),
            campaign_angles=self.campaign_angles,
            match_topics=self.match_topics,
            priority_niches=unique_terms(self.priority_niches + directives.priority_niches),
            priority_topics=unique_terms(self.priority_topics + directives.priority_topics),
        )


@dataclass(frozen=True)
class ScoreResult:
    """Output of one scoring module."""

    score: float
    confidence: float
    reasons: Tuple[ReasonCode, ...] = ()
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ModuleScore:
    name: str
    score: float
    confidence: float


@dataclass(frozen=True)
class CompatibilityResult:
    """Aggregated compatibility of one creator against one brand."""

    total: float
    reasons: Tuple[ReasonCode, ...]
    modules: Tuple[ModuleScore, ...]
    best_platform: Optional[str] = None
    priority_boost: float = 0.0

    def module(self, name: str) -> Optional[ModuleScore]:
        for module in self.modules:
            if module.name == name:
                return module
        return None

    def reason_labels(self) -> List[str]:
        return describe_reasons(self.reasons)

    def breakdown(self) -> Dict[str, Any]:
        def score_of(name: str) -> Optional[float]:
            module = self.module(name)
            return module.score if module else None

        return {
            "niche_score": score_of("niche_affinity"),
            "topic_score": score_of("topic_similarity"),
            "platform_score": score_of("platform_alignment"),
            "engagement_score": score_of("engagement_fit"),
            "best_platform": self.best_platform,
            "priority_boost": self.priority_boost,
        }


@dataclass(frozen=True)
class RankedCreator:
    creator_id: str
    result: CompatibilityResult

    @property
    def score(self) -> float:
        return self.result.total
