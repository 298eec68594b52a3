"""Main API router for v1 endpoints"""
from fastapi import APIRouter

from app.api.v1 import matches, creators

# Create main API router
api_router = APIRouter()

# Include sub-routers
api_router.include_router(matches.router, prefix="/matches", tags=["Matches"])
api_router.include_router(creators.router, prefix="/creators", tags=["Creators"])
