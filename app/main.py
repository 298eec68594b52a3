"""FastAPI application entry point"""
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.router import api_router
from app.config import settings
from app.dependencies import (
    get_match_service,
    get_optional_match_store,
    init_creator_source,
    init_match_service,
    init_match_store,
)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    print(f"🚀 Starting {settings.APP_NAME} v{settings.VERSION}")
    init_creator_source()
    init_match_store()
    init_match_service()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/health")
async def health(
    match_service=Depends(get_match_service),
    match_store=Depends(get_optional_match_store),
):
    return {
        "status": "ok",
        "version": settings.VERSION,
        "catalog_version": match_service.catalog.version,
        "match_store": match_store is not None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT, reload=settings.DEBUG)
