"""Rank a candidate pool against one brand's MatchSpec."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from app.core.scoring import CompatibilityScorer
from app.core.types import CreatorProfile, MatchSpec, RankedCreator


def rank_creators(
    spec: MatchSpec,
    pool: Sequence[CreatorProfile],
    *,
    limit: int,
    scorer: Optional[CompatibilityScorer] = None,
    concurrency: int = 1,
) -> List[RankedCreator]:
    """Score every candidate, sort by total descending and keep the top ``limit``.

    Equal totals keep their pool order (stable sort, no secondary key).
    Scoring is pure, so it may fan out across threads; results are collected
    in pool order either way.
    """
    scorer = scorer or CompatibilityScorer()
    candidates = list(pool)

    def score_one(creator: CreatorProfile) -> RankedCreator:
        return RankedCreator(creator_id=creator.id, result=scorer.score(spec, creator))

    if concurrency > 1 and len(candidates) > 1:
        with ThreadPoolExecutor(max_workers=concurrency) as executor:
            scored = list(executor.map(score_one, candidates))
    else:
        scored = [score_one(creator) for creator in candidates]

    ranked = sorted(scored, key=lambda item: item.result.total, reverse=True)
    return ranked[: max(0, limit)]


__all__ = ["rank_creators"]
