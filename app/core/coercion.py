"""Coerce loosely-typed stored values into the engine's records.

Creator and brand rows arrive from several writers: native lists, JSON-encoded
strings, bare strings, NaN-filled DataFrame cells, numpy arrays. Every helper
here returns an empty container (or None) for malformed input instead of
raising, so scoring always has a record to work with.
"""
from __future__ import annotations

import json
import math
from typing import Any, Dict, List, Mapping, Optional

from app.core.types import (
    CreatorMetrics,
    CreatorProfile,
    MatchSpec,
    PlatformMetric,
    RankingDirectives,
    unique_terms,
)


JSON_WRAPPERS = {("[", "]"), ("{", "}")}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value.strip().lower() in {"", "nan", "null", "none"}


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None


def coerce_string_list(value: Any) -> List[str]:
    """List of non-empty strings from a list, a JSON array string, or a bare string.

    A string wrapped in brackets or braces is parsed as JSON and yields ``[]``
    unless it is an array; any other string, "[beta] fitness" included, is a
    single item.
    """
    if _is_missing(value):
        return []
    if isinstance(value, str):
        text = value.strip()
        if len(text) > 1 and (text[0], text[-1]) in JSON_WRAPPERS:
            parsed = _load_json(text)
            if not isinstance(parsed, list):
                return []
            value = parsed
        else:
            return [text]
    elif hasattr(value, "tolist") and not isinstance(value, (list, tuple)):
        # numpy arrays coming out of DataFrame cells
        value = value.tolist()
    if not isinstance(value, (list, tuple, set, frozenset)):
        return []
    items = sorted(value, key=str) if isinstance(value, (set, frozenset)) else value
    return [str(item).strip() for item in items if not _is_missing(item) and str(item).strip()]


def coerce_terms(value: Any) -> tuple:
    """Normalized, de-duplicated terms for scoring."""
    return unique_terms(coerce_string_list(value))


def coerce_mapping(value: Any) -> Dict[str, Any]:
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, str):
        parsed = _load_json(value.strip())
        if isinstance(parsed, dict):
            return parsed
    return {}


def coerce_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or _is_missing(value):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def coerce_int(value: Any) -> Optional[int]:
    number = coerce_float(value)
    return None if number is None else int(round(number))


def coerce_text(value: Any) -> Optional[str]:
    if _is_missing(value):
        return None
    text = str(value).strip()
    return text or None


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def coerce_platform_metric(value: Any) -> Optional[PlatformMetric]:
    row = coerce_mapping(value)
    if not row:
        return None

    followers = coerce_int(row.get("followers"))
    avg_views = coerce_float(row.get("avg_views"))
    engagement_rate = coerce_float(row.get("engagement_rate"))
    confidence = coerce_float(row.get("confidence"))
    sample_size = coerce_int(row.get("sample_size"))
    source = coerce_text(row.get("source"))

    metric = PlatformMetric(
        followers=max(0, followers) if followers is not None else None,
        avg_views=max(0.0, avg_views) if avg_views is not None else None,
        engagement_rate=_clamp(engagement_rate, 0.0, 1.0) if engagement_rate is not None else None,
        confidence=_clamp(confidence, 0.0, 1.0) if confidence is not None else None,
        sample_size=max(0, sample_size) if sample_size is not None else None,
        source=source,
    )
    if metric == PlatformMetric():
        return None
    return metric


def coerce_platform_metrics(value: Any) -> Dict[str, PlatformMetric]:
    metrics: Dict[str, PlatformMetric] = {}
    for platform_raw, payload in sorted(coerce_mapping(value).items(), key=lambda kv: str(kv[0])):
        platform = coerce_text(platform_raw)
        metric = coerce_platform_metric(payload)
        if platform and metric is not None:
            metrics[platform.lower()] = metric
    return metrics


def coerce_metrics(value: Any) -> CreatorMetrics:
    row = coerce_mapping(value)
    return CreatorMetrics(
        top_topics=coerce_terms(row.get("top_topics")),
        platform_metrics=coerce_platform_metrics(row.get("platform_metrics")),
    )


def coerce_engagement(value: Any) -> Optional[float]:
    """Engagement estimate in (0, 1]; non-positive or unparseable values count as missing."""
    rate = coerce_float(value)
    if rate is None or rate <= 0:
        return None
    return min(rate, 1.0)


def coerce_creator_profile(record: Mapping[str, Any], *, fallback_id: str = "") -> CreatorProfile:
    """Build a CreatorProfile from a stored row or request payload."""
    return CreatorProfile(
        id=coerce_text(record.get("id")) or fallback_id,
        niche=coerce_text(record.get("niche")) or "",
        platforms=coerce_terms(record.get("platforms")),
        audience_types=coerce_terms(record.get("audience_types")),
        content_style=coerce_text(record.get("content_style")),
        products_sold=coerce_terms(record.get("products_sold")),
        estimated_engagement=coerce_engagement(record.get("estimated_engagement")),
        metrics=coerce_metrics(record.get("metrics")),
    )


def coerce_match_spec(record: Mapping[str, Any]) -> MatchSpec:
    """Build a MatchSpec from a brand row. ``campaign_angles`` stays out of topic scoring."""
    return MatchSpec(
        category=coerce_text(record.get("category")),
        target_audience=coerce_terms(record.get("target_audience")),
        goals=coerce_terms(record.get("goals")),
        preferred_platforms=coerce_terms(record.get("preferred_platforms")),
        campaign_angles=coerce_terms(record.get("campaign_angles")),
        match_topics=coerce_terms(record.get("match_topics")),
        priority_niches=coerce_terms(record.get("priority_niches")),
        priority_topics=coerce_terms(record.get("priority_topics")),
    )


def coerce_directives(record: Optional[Mapping[str, Any]]) -> RankingDirectives:
    record = record or {}
    return RankingDirectives(
        priority_niches=coerce_terms(record.get("priority_niches")),
        priority_topics=coerce_terms(record.get("priority_topics")),
        preferred_platforms=coerce_terms(record.get("preferred_platforms")),
    )


__all__ = [
    "coerce_string_list",
    "coerce_terms",
    "coerce_mapping",
    "coerce_float",
    "coerce_int",
    "coerce_text",
    "coerce_platform_metric",
    "coerce_platform_metrics",
    "coerce_metrics",
    "coerce_engagement",
    "coerce_creator_profile",
    "coerce_match_spec",
    "coerce_directives",
]
