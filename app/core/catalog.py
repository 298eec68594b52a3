"""Versioned reference catalog of creator niches.

Active niches are the current canonical taxonomy. Legacy labels from earlier
seed data are aliases of an active niche and are never shown as canonical.
Planned niches are recognized but not yet weighted specially.

Catalogs are immutable and injected into the scorer, so a new catalog version
can be rolled out (or substituted in tests) without touching scoring code.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Iterable, List, Mapping, Optional

from app.core.types import normalize_term


@dataclass(frozen=True)
class NicheLookup:
    canonical: Optional[str]
    is_legacy_alias: bool = False


@dataclass(frozen=True)
class NicheCatalog:
    version: str
    active: FrozenSet[str]
    legacy_aliases: Mapping[str, str]
    planned: FrozenSet[str] = frozenset()
    topic_vocabulary: FrozenSet[str] = field(default_factory=frozenset)

    def normalize_niche(self, raw: Optional[str]) -> NicheLookup:
        """Case-insensitive exact lookup; unknown labels return ``canonical=None``."""
        if not raw:
            return NicheLookup(canonical=None)
        key = normalize_term(raw)
        if key in self.active or key in self.planned:
            return NicheLookup(canonical=key)
        if key in self.legacy_aliases:
            return NicheLookup(canonical=self.legacy_aliases[key], is_legacy_alias=True)
        return NicheLookup(canonical=None)

    def all_niches(self) -> List[str]:
        return sorted(self.active | self.planned | frozenset(self.legacy_aliases))

    def unknown_topics(self, topics: Iterable[str]) -> List[str]:
        """Topics outside the controlled vocabulary. Empty vocabulary disables the check."""
        if not self.topic_vocabulary:
            return []
        return [topic for topic in topics if normalize_term(topic) not in self.topic_vocabulary]

    def with_topic_vocabulary(self, topics: Iterable[str]) -> "NicheCatalog":
        return NicheCatalog(
            version=self.version,
            active=self.active,
            legacy_aliases=self.legacy_aliases,
            planned=self.planned,
            topic_vocabulary=frozenset(normalize_term(t) for t in topics if t),
        )


def build_catalog(
    version: str,
    *,
    active: Iterable[str],
    legacy_aliases: Mapping[str, str],
    planned: Iterable[str] = (),
    topic_vocabulary: Iterable[str] = (),
) -> NicheCatalog:
    active_set = frozenset(normalize_term(n) for n in active)
    aliases = {normalize_term(k): normalize_term(v) for k, v in legacy_aliases.items()}
    for alias, target in aliases.items():
        if target not in active_set:
            raise ValueError(f"Legacy niche '{alias}' points at unknown active niche '{target}'")
    return NicheCatalog(
        version=version,
        active=active_set,
        legacy_aliases=MappingProxyType(aliases),
        planned=frozenset(normalize_term(n) for n in planned),
        topic_vocabulary=frozenset(normalize_term(t) for t in topic_vocabulary),
    )


DEFAULT_CATALOG = build_catalog(
    "2025.1",
    active=[
        "ai productivity",
        "beauty & skincare",
        "business coaching",
        "creator monetization",
        "ecommerce & marketing",
        "fitness coaching",
        "life coaching",
        "personal finance",
        "real estate investing",
        "wellness & nutrition",
    ],
    legacy_aliases={
        "ai tools": "ai productivity",
        "b2b saas": "ecommerce & marketing",
        "ecommerce growth": "ecommerce & marketing",
        "fitness": "fitness coaching",
        "healthy cooking": "wellness & nutrition",
        "mental wellness": "wellness & nutrition",
        "skincare": "beauty & skincare",
        "study productivity": "ai productivity",
    },
    planned=[
        "fashion & apparel",
        "home & decor",
        "parenting & family",
        "food & recipes",
        "travel",
        "gaming",
        "consumer tech & gadgets",
        "startups & entrepreneurship",
        "careers & job search",
        "education & upskilling",
        "sports & outdoors",
        "pets",
    ],
)


__all__ = ["NicheCatalog", "NicheLookup", "build_catalog", "DEFAULT_CATALOG"]
