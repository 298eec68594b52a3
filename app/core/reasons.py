"""Closed set of match reason codes and their display labels."""
from enum import Enum
from typing import Iterable, List


class ReasonCode(str, Enum):
    CATEGORY_NICHE_MATCH = "category_niche_match"
    TOPIC_OVERLAP = "topic_overlap"
    PRIORITY_TOPIC_MATCH = "priority_topic_match"
    PLATFORM_ALIGNMENT = "platform_alignment"
    STRONG_ENGAGEMENT = "strong_engagement"
    MULTI_PLATFORM_ENGAGEMENT = "multi_platform_engagement"
    PRIORITY_NICHE_MATCH = "priority_niche_match"


REASON_LABELS = {
    ReasonCode.CATEGORY_NICHE_MATCH: "category/niche match",
    ReasonCode.TOPIC_OVERLAP: "topic overlap",
    ReasonCode.PRIORITY_TOPIC_MATCH: "priority topic match",
    ReasonCode.PLATFORM_ALIGNMENT: "platform alignment",
    ReasonCode.STRONG_ENGAGEMENT: "strong engagement",
    ReasonCode.MULTI_PLATFORM_ENGAGEMENT: "engagement backed by multi-platform signals",
    ReasonCode.PRIORITY_NICHE_MATCH: "priority niche match",
}


def describe_reason(code: ReasonCode) -> str:
    return REASON_LABELS[ReasonCode(code)]


def describe_reasons(codes: Iterable[ReasonCode]) -> List[str]:
    return [describe_reason(code) for code in codes]


__all__ = ["ReasonCode", "REASON_LABELS", "describe_reason", "describe_reasons"]
