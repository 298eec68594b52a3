"""
SQLAlchemy-backed store for match records.

One row per (brand_id, creator_id), enforced by a unique constraint. Writes use
the dialect's INSERT ... ON CONFLICT DO UPDATE so a rescore overwrites the
score and reasons in place instead of adding a row. SQLite and PostgreSQL are
supported.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from sqlalchemy import JSON, Column, Float, Integer, String, UniqueConstraint, create_engine, delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base

from app.core.errors import PersistenceFailure
from app.core.types import RankedCreator

logger = logging.getLogger(__name__)

Base = declarative_base()

SUPPORTED_DIALECTS = {"sqlite": sqlite.insert, "postgresql": postgresql.insert}


class MatchRow(Base):
    """Persisted compatibility of one creator for one brand."""

    __tablename__ = "matches"
    __table_args__ = (UniqueConstraint("brand_id", "creator_id", name="uq_matches_brand_creator"),)

    id = Column(String(32), primary_key=True)
    brand_id = Column(String(128), nullable=False, index=True)
    creator_id = Column(String(128), nullable=False)
    score = Column(Float, nullable=False)
    reasons = Column(JSON, nullable=False)  # {"reasons": [...], "reason_codes": [...], "breakdown": {...}}
    created_at = Column(Integer, nullable=False)  # Unix
    updated_at = Column(Integer, nullable=False)  # Unix


@dataclass
class MatchRecord:
    id: str
    brand_id: str
    creator_id: str
    score: float
    reasons: Dict[str, Any]
    created_at: int
    updated_at: int

    @classmethod
    def from_row(cls, row: Any) -> "MatchRecord":
        return cls(
            id=row.id,
            brand_id=row.brand_id,
            creator_id=row.creator_id,
            score=row.score,
            reasons=row.reasons or {},
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "brand_id": self.brand_id,
            "creator_id": self.creator_id,
            "score": self.score,
            "reasons": self.reasons,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass
class PersistOutcome:
    persisted_count: int = 0
    failures: List[PersistenceFailure] = field(default_factory=list)


def new_match_id() -> str:
    return f"mt_{uuid.uuid4().hex[:12]}"


def reasons_document(item: RankedCreator) -> Dict[str, Any]:
    return {
        "reasons": item.result.reason_labels(),
        "reason_codes": [code.value for code in item.result.reasons],
        "breakdown": item.result.breakdown(),
    }


class MatchStore:
    """Upsert and read back match records."""

    def __init__(self, url: str) -> None:
        # Checked before create_engine, which imports the DBAPI driver
        dialect = make_url(url).get_backend_name()
        if dialect not in SUPPORTED_DIALECTS:
            raise ValueError(f"Unsupported match store dialect: {dialect}")
        connect_args = {}
        if dialect == "sqlite":
            connect_args["check_same_thread"] = False
        self.url = url
        self.engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True)
        self._insert = SUPPORTED_DIALECTS[dialect]

    def init_db(self) -> None:
        """Create the matches table if it does not exist. Safe to call on every startup."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Match store ready | url=%s", self.url.split("?")[0].split("//")[-1])

    def upsert(self, brand_id: str, item: RankedCreator) -> None:
        """Insert or overwrite one record in its own transaction."""
        now = int(time.time())
        table = MatchRow.__table__
        stmt = self._insert(table).values(
            id=new_match_id(),
            brand_id=brand_id,
            creator_id=item.creator_id,
            score=item.result.total,
            reasons=reasons_document(item),
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.brand_id, table.c.creator_id],
            set_={
                "score": stmt.excluded.score,
                "reasons": stmt.excluded.reasons,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        try:
            with self.engine.begin() as conn:
                conn.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceFailure(item.creator_id, str(exc)) from exc

    def save_ranking(self, brand_id: str, ranked: Sequence[RankedCreator]) -> PersistOutcome:
        """Upsert every ranked result; one failure never stops the rest."""
        outcome = PersistOutcome()
        for item in ranked:
            try:
                self.upsert(brand_id, item)
            except PersistenceFailure as exc:
                logger.warning("Match upsert failed | brand=%s creator=%s error=%s", brand_id, exc.creator_id, exc)
                outcome.failures.append(exc)
            else:
                outcome.persisted_count += 1
        return outcome

    def list_for_brand(self, brand_id: str) -> List[MatchRecord]:
        table = MatchRow.__table__
        stmt = (
            select(table)
            .where(table.c.brand_id == brand_id)
            .order_by(table.c.score.desc(), table.c.creator_id)
        )
        with self.engine.connect() as conn:
            return [MatchRecord.from_row(row) for row in conn.execute(stmt)]

    def count(self, brand_id: str) -> int:
        stmt = select(func.count()).select_from(MatchRow.__table__).where(MatchRow.__table__.c.brand_id == brand_id)
        with self.engine.connect() as conn:
            return int(conn.execute(stmt).scalar_one())

    def clear_brand(self, brand_id: str) -> int:
        """Bulk delete for a recompute-from-scratch run. Returns rows removed."""
        with self.engine.begin() as conn:
            result = conn.execute(delete(MatchRow.__table__).where(MatchRow.__table__.c.brand_id == brand_id))
        logger.info("Cleared matches | brand=%s rows=%s", brand_id, result.rowcount)
        return int(result.rowcount or 0)


__all__ = ["MatchStore", "MatchRecord", "MatchRow", "PersistOutcome", "reasons_document"]
