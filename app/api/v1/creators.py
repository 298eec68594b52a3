"""Creator-related API endpoints"""
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Depends

from app.core.errors import ComponentUnavailable
from app.dependencies import get_creator_source
from app.models.creator import CreatorDetailResponse


router = APIRouter()


def creator_to_dict(creator) -> dict:
    return {
        "id": creator.id,
        "niche": creator.niche,
        "platforms": list(creator.platforms),
        "audience_types": list(creator.audience_types),
        "content_style": creator.content_style,
        "products_sold": list(creator.products_sold),
        "estimated_engagement": creator.estimated_engagement,
        "top_topics": list(creator.metrics.top_topics),
        "platform_metrics": {
            platform: asdict(metric) for platform, metric in creator.metrics.platform_metrics.items()
        },
    }


@router.get("/{creator_id}", response_model=CreatorDetailResponse)
async def get_creator_detail(
    creator_id: str,
    creator_source=Depends(get_creator_source)
):
    """
    Get the stored creator profile, coerced the same way the scorer sees it.
    """
    try:
        creator = creator_source.get(creator_id)
    except ComponentUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    if creator is None:
        raise HTTPException(status_code=404, detail=f"Creator '{creator_id}' not found")
    return {"success": True, "result": creator_to_dict(creator)}
