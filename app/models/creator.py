"""Creator-related Pydantic models."""
from typing import Dict, List, Optional

from pydantic import BaseModel


class PlatformMetricPayload(BaseModel):
    followers: Optional[int] = None
    avg_views: Optional[float] = None
    engagement_rate: Optional[float] = None
    confidence: Optional[float] = None
    sample_size: Optional[int] = None
    source: Optional[str] = None


class CreatorDetail(BaseModel):
    id: str
    niche: str
    platforms: List[str]
    audience_types: List[str]
    content_style: Optional[str] = None
    products_sold: List[str]
    estimated_engagement: Optional[float] = None
    top_topics: List[str]
    platform_metrics: Dict[str, PlatformMetricPayload]


class CreatorDetailResponse(BaseModel):
    success: bool
    result: CreatorDetail
