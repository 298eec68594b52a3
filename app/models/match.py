"""Match-related Pydantic models for the API."""
from typing import List, Optional, Dict, Any, Union

from pydantic import BaseModel, Field

# Stored brand rows may carry JSON-encoded strings where lists are expected;
# coercion happens in the engine, not at validation time.
LooseList = Optional[Union[List[str], str]]


class BrandPayload(BaseModel):
    category: Optional[str] = Field(default=None)
    target_audience: LooseList = Field(default=None)
    goals: LooseList = Field(default=None)
    preferred_platforms: LooseList = Field(default=None)
    campaign_angles: LooseList = Field(default=None, description="Marketing copy; not used for topic scoring")
    match_topics: LooseList = Field(
        default=None, description="Topics in creator-native vocabulary"
    )
    priority_niches: LooseList = Field(default=None)
    priority_topics: LooseList = Field(default=None)


class RankingDirectivesPayload(BaseModel):
    priority_niches: LooseList = Field(default=None)
    priority_topics: LooseList = Field(default=None)
    preferred_platforms: LooseList = Field(default=None)


class MatchRequest(BaseModel):
    brand_id: Optional[str] = Field(default=None, description="Brand the ranking is computed for")
    brand: BrandPayload = Field(default_factory=BrandPayload)
    creator_pool: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        description="Ephemeral candidate pool; when omitted the stored creator table is used",
    )
    ranking_directives: RankingDirectivesPayload = Field(default_factory=RankingDirectivesPayload)
    limit: Optional[int] = Field(default=None, description="Maximum results to return")
    persist: bool = Field(default=False, description="Write matches back (stored creator table only)")


class MatchBreakdown(BaseModel):
    niche_score: Optional[float] = None
    topic_score: Optional[float] = None
    platform_score: Optional[float] = None
    engagement_score: Optional[float] = None
    best_platform: Optional[str] = None
    priority_boost: float = 0.0


class RankedCreatorPayload(BaseModel):
    creator_id: str
    score: float
    reasons: List[str]
    reason_codes: List[str]
    breakdown: MatchBreakdown


class MatchFailurePayload(BaseModel):
    creator_id: str
    error: str


class MatchResponse(BaseModel):
    success: bool
    brand_id: str
    ranked: List[RankedCreatorPayload]
    persisted_count: int
    failures: List[MatchFailurePayload]
    count: int
    source: str


class StoredMatchesResponse(BaseModel):
    success: bool
    brand_id: str
    matches: List[Dict[str, Any]]
    count: int


class ClearMatchesResponse(BaseModel):
    success: bool
    brand_id: str
    deleted: int
