"""Combine module outputs into one CompatibilityResult."""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from app.core.catalog import DEFAULT_CATALOG, NicheCatalog
from app.core.reasons import ReasonCode
from app.core.scoring.modules import ScoringModule, clamp01, default_modules
from app.core.scoring.policy import ScoringPolicy
from app.core.types import CompatibilityResult, CreatorProfile, MatchSpec, ModuleScore, normalize_term

SCORE_PRECISION = 4


def _dedupe(reasons: Iterable[ReasonCode], limit: int) -> tuple:
    seen = set()
    ordered: List[ReasonCode] = []
    for reason in reasons:
        if reason in seen:
            continue
        seen.add(reason)
        ordered.append(reason)
    return tuple(ordered[:limit])


class CompatibilityScorer:
    """Weighted sum over an ordered list of scoring modules.

    Adding a module means adding a strategy to ``modules``; the aggregation
    below never names individual modules.
    """

    def __init__(
        self,
        *,
        catalog: NicheCatalog = DEFAULT_CATALOG,
        policy: Optional[ScoringPolicy] = None,
        modules: Optional[Sequence[ScoringModule]] = None,
    ) -> None:
        self.catalog = catalog
        self.policy = policy or ScoringPolicy()
        self.modules: List[ScoringModule] = list(modules) if modules is not None else default_modules(self.policy)
        if not self.modules:
            raise ValueError("CompatibilityScorer needs at least one scoring module")
        names = [module.name for module in self.modules]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate scoring module names: {names}")

    def priority_hits(self, spec: MatchSpec, creator: CreatorProfile) -> tuple:
        """Return ``(niche_hits, topic_hits)`` against the priority directives."""
        niche = normalize_term(creator.niche) if creator.niche else ""
        niche_hits = sum(1 for p in spec.priority_niches if p in niche) if niche else 0
        topics = set(creator.metrics.top_topics)
        topic_hits = sum(1 for t in spec.priority_topics if t in topics)
        return niche_hits, topic_hits

    def score(self, spec: MatchSpec, creator: CreatorProfile) -> CompatibilityResult:
        module_scores: List[ModuleScore] = []
        reasons: List[ReasonCode] = []
        best_platform: Optional[str] = None
        weighted = 0.0

        for module in self.modules:
            result = module.score(spec, creator)
            score = clamp01(result.score)
            confidence = clamp01(result.confidence)
            weighted += module.weight * score
            module_scores.append(
                ModuleScore(
                    name=module.name,
                    score=round(score, SCORE_PRECISION),
                    confidence=round(confidence, SCORE_PRECISION),
                )
            )
            reasons.extend(result.reasons)
            if best_platform is None and result.meta.get("best_platform"):
                best_platform = result.meta["best_platform"]

        niche_hits, topic_hits = self.priority_hits(spec, creator)
        boost = min(self.policy.priority_boost_cap, (niche_hits + topic_hits) * self.policy.priority_boost_step)
        if niche_hits:
            reasons.append(ReasonCode.PRIORITY_NICHE_MATCH)

        total = round(clamp01(weighted + boost), SCORE_PRECISION)
        return CompatibilityResult(
            total=total,
            reasons=_dedupe(reasons, self.policy.reason_limit),
            modules=tuple(module_scores),
            best_platform=best_platform,
            priority_boost=round(boost, SCORE_PRECISION),
        )


_default_scorer: Optional[CompatibilityScorer] = None


def compute_compatibility_score(
    spec: MatchSpec,
    creator: CreatorProfile,
    scorer: Optional[CompatibilityScorer] = None,
) -> CompatibilityResult:
    """Score one creator with ``scorer`` or a lazily built default scorer."""
    global _default_scorer
    if scorer is None:
        if _default_scorer is None:
            _default_scorer = CompatibilityScorer()
        scorer = _default_scorer
    return scorer.score(spec, creator)


__all__ = ["CompatibilityScorer", "compute_compatibility_score", "SCORE_PRECISION"]
