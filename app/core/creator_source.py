"""
Candidate pool sources for ranking runs.

A source says whether its creators come from a persisted table. Only
persisted pools may have their matches written back; ephemeral pools (request
payloads, synthetic fixtures) are scored and returned, never stored.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import lancedb

from app.core.coercion import coerce_creator_profile
from app.core.errors import ComponentUnavailable
from app.core.types import CreatorProfile

logger = logging.getLogger(__name__)

CreatorInput = Union[CreatorProfile, Mapping[str, Any]]


class CreatorSource:
    """Base class for candidate pools."""

    persisted: bool = False
    name: str = "creators"

    def load(self, limit: int) -> List[CreatorProfile]:
        raise NotImplementedError


def _profiles_from(records: Iterable[CreatorInput], prefix: str) -> List[CreatorProfile]:
    profiles: List[CreatorProfile] = []
    for index, record in enumerate(records):
        if isinstance(record, CreatorProfile):
            profiles.append(record)
        elif isinstance(record, Mapping):
            profiles.append(coerce_creator_profile(record, fallback_id=f"{prefix}-{index}"))
        else:
            logger.warning("Skipping candidate %s: unsupported payload %r", index, type(record))
    return profiles


class InlineCreatorSource(CreatorSource):
    """Ephemeral pool handed over with the request."""

    persisted = False
    name = "inline"

    def __init__(self, records: Iterable[CreatorInput]) -> None:
        self._records = list(records)

    def load(self, limit: int) -> List[CreatorProfile]:
        return _profiles_from(self._records[:limit], prefix="candidate")


class LanceCreatorSource(CreatorSource):
    """Creators stored in a LanceDB table.

    List and metrics columns may hold native values or JSON-encoded strings
    depending on the writer; rows are coerced on read.
    """

    persisted = True

    def __init__(self, db_path: str, table_name: str = "creators") -> None:
        self.db_path = db_path
        self.table_name = table_name
        self.name = table_name

    def connect(self) -> "lancedb.DBConnection":
        if not os.path.exists(self.db_path):
            raise ComponentUnavailable(f"Creator database not found at: {self.db_path}")
        return lancedb.connect(self.db_path)

    def _open_table(self):
        db = self.connect()
        if self.table_name not in db.table_names():
            raise ComponentUnavailable(f"Creator table '{self.table_name}' not found in database")
        return db.open_table(self.table_name)

    def fetch_rows(self, limit: int) -> List[Dict[str, Any]]:
        df = self._open_table().to_pandas()
        if "id" in df.columns:
            df = df.sort_values("id", kind="mergesort")
        return df.head(limit).to_dict(orient="records")

    def load(self, limit: int) -> List[CreatorProfile]:
        rows = self.fetch_rows(limit)
        logger.info("Loaded creator pool | table=%s count=%s", self.table_name, len(rows))
        return _profiles_from(rows, prefix=self.table_name)

    def get(self, creator_id: str) -> Optional[CreatorProfile]:
        df = self._open_table().to_pandas()
        if "id" not in df.columns:
            return None
        matches = df[df["id"].astype(str) == str(creator_id)]
        if matches.empty:
            return None
        return coerce_creator_profile(matches.iloc[0].to_dict())


__all__ = ["CreatorSource", "InlineCreatorSource", "LanceCreatorSource"]
