"""Service that runs a ranking: validate → score → rank → persist."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from app.core.catalog import NicheCatalog
from app.core.coercion import coerce_directives, coerce_match_spec
from app.core.creator_source import CreatorSource, InlineCreatorSource
from app.core.errors import ComponentUnavailable, PersistenceFailure, SpecViolation
from app.core.match_store import MatchStore
from app.core.ranker import rank_creators
from app.core.scoring import CompatibilityScorer
from app.core.types import MatchSpec, RankedCreator
from app.models.match import MatchRequest

logger = logging.getLogger(__name__)

ProgressCallback = Optional[Callable[[str, Dict[str, object]], None]]


@dataclass
class MatchOutcome:
    brand_id: str
    ranked: List[RankedCreator]
    source: str
    persisted_count: int = 0
    failures: List[PersistenceFailure] = field(default_factory=list)


class MatchService:
    """Rank a creator pool for one brand and optionally persist the result."""

    def __init__(
        self,
        scorer: CompatibilityScorer,
        *,
        creator_source: Optional[CreatorSource] = None,
        match_store: Optional[MatchStore] = None,
        default_limit: int = 12,
        max_limit: int = 100,
        max_pool_size: int = 500,
        concurrency: int = 1,
        strict_vocabulary: bool = False,
    ) -> None:
        self._scorer = scorer
        self._source = creator_source
        self._store = match_store
        self.default_limit = default_limit
        self.max_limit = max_limit
        self.max_pool_size = max_pool_size
        self.concurrency = max(1, concurrency)
        self.strict_vocabulary = strict_vocabulary

    @property
    def catalog(self) -> NicheCatalog:
        return self._scorer.catalog

    @property
    def match_store(self) -> Optional[MatchStore]:
        return self._store

    def _resolve_limit(self, limit: Optional[int]) -> int:
        value = self.default_limit if limit is None else limit
        if not 1 <= value <= self.max_limit:
            raise SpecViolation(f"limit must be between 1 and {self.max_limit}, got {value}")
        return value

    def _resolve_source(self, request: MatchRequest) -> CreatorSource:
        if request.creator_pool is not None:
            return InlineCreatorSource(request.creator_pool)
        if self._source is None:
            raise ComponentUnavailable("No stored creator source is configured; supply creator_pool")
        return self._source

    def check_vocabulary(self, spec: MatchSpec) -> None:
        """Match topics must come from the shared creator topic vocabulary."""
        unknown = self.catalog.unknown_topics(spec.match_topics)
        if not unknown:
            return
        message = f"match_topics outside the creator topic vocabulary: {', '.join(unknown)}"
        if self.strict_vocabulary:
            raise SpecViolation(message)
        logger.warning(message)

    def build_spec(self, request: MatchRequest) -> MatchSpec:
        spec = coerce_match_spec(request.brand.model_dump())
        directives = coerce_directives(request.ranking_directives.model_dump())
        return spec.with_directives(directives)

    def run(self, request: MatchRequest, *, progress_cb: ProgressCallback = None) -> MatchOutcome:
        """Validate the request, rank the pool and persist when the pool is stored."""

        def emit(stage: str, data: Dict[str, object]) -> None:
            if progress_cb:
                progress_cb(stage, data)

        brand_id = (request.brand_id or "").strip()
        if not brand_id:
            raise SpecViolation("brand_id is required")
        limit = self._resolve_limit(request.limit)
        source = self._resolve_source(request)
        if request.persist and not source.persisted:
            raise SpecViolation("persist=true requires the stored creator pool; inline pools are never persisted")
        if request.persist and self._store is None:
            raise ComponentUnavailable("Match store is not configured")

        spec = self.build_spec(request)
        self.check_vocabulary(spec)

        pool = source.load(self.max_pool_size)
        emit("ranking_started", {"brand_id": brand_id, "pool_size": len(pool), "source": source.name})

        ranked = rank_creators(
            spec,
            pool,
            limit=limit,
            scorer=self._scorer,
            concurrency=self.concurrency,
        )
        emit("ranking_completed", {"count": len(ranked)})

        outcome = MatchOutcome(brand_id=brand_id, ranked=ranked, source=source.name)
        if not request.persist:
            emit("persist_skipped", {"count": len(ranked)})
            return outcome

        persisted = self._store.save_ranking(brand_id, ranked)
        outcome.persisted_count = persisted.persisted_count
        outcome.failures = persisted.failures
        emit(
            "persist_completed",
            {"persisted_count": persisted.persisted_count, "failures": len(persisted.failures)},
        )
        return outcome


__all__ = ["MatchService", "MatchOutcome"]
