"""Shared dependencies for FastAPI endpoints"""
import os
from fastapi import HTTPException

from app.config import settings

# Global instances
_match_service = None
_match_store = None
_creator_source = None


def build_catalog():
    """Default niche catalog, with the configured topic vocabulary attached."""
    from app.core.catalog import DEFAULT_CATALOG

    if settings.TOPIC_VOCABULARY:
        return DEFAULT_CATALOG.with_topic_vocabulary(settings.TOPIC_VOCABULARY)
    return DEFAULT_CATALOG


def init_creator_source() -> bool:
    """Initialize the stored creator pool"""
    global _creator_source
    from app.core.creator_source import LanceCreatorSource

    db_path = settings.CREATOR_DB_PATH
    if db_path and os.path.exists(db_path):
        _creator_source = LanceCreatorSource(db_path, settings.CREATOR_TABLE_NAME)
        print("✅ Creator source initialized")
        print(f"   • DB path: {db_path}")
        print(f"   • Table: {settings.CREATOR_TABLE_NAME}")
        return True
    print(f"⚠️ Creator database not found at: {db_path}; only inline pools can be ranked")
    _creator_source = None
    return False


def init_match_store() -> bool:
    """Initialize the match store"""
    global _match_store
    from sqlalchemy.exc import SQLAlchemyError

    from app.core.match_store import MatchStore

    url = settings.MATCH_DATABASE_URL
    try:
        if url and url.startswith("sqlite:///"):
            os.makedirs(os.path.dirname(os.path.abspath(url[len("sqlite:///"):])), exist_ok=True)
        store = MatchStore(url)
        store.init_db()
    except (SQLAlchemyError, ValueError, OSError, ImportError) as e:
        print(f"❌ Error initializing match store: {e}")
        _match_store = None
        return False
    _match_store = store
    print("✅ Match store initialized")
    return True


def init_match_service() -> bool:
    """Initialize the match service from whichever stores are available"""
    global _match_service
    from app.core.scoring import CompatibilityScorer, ScoringPolicy
    from app.services.matching import MatchService

    scorer = CompatibilityScorer(
        catalog=build_catalog(),
        policy=ScoringPolicy.from_settings(settings),
    )
    _match_service = MatchService(
        scorer,
        creator_source=_creator_source,
        match_store=_match_store,
        default_limit=settings.DEFAULT_MATCH_LIMIT,
        max_limit=settings.MAX_MATCH_LIMIT,
        max_pool_size=settings.MAX_POOL_SIZE,
        concurrency=settings.SCORING_CONCURRENCY,
        strict_vocabulary=settings.STRICT_TOPIC_VOCABULARY,
    )
    print(f"✅ Match service initialized (catalog {scorer.catalog.version})")
    return True


def get_match_service():
    """Dependency to get match service instance"""
    if _match_service is None:
        raise HTTPException(
            status_code=503,
            detail="Match service not initialized."
        )
    return _match_service


def get_match_store():
    """Dependency to get match store instance"""
    if _match_store is None:
        raise HTTPException(
            status_code=503,
            detail="Match store not available. Check MATCH_DATABASE_URL."
        )
    return _match_store


def get_creator_source():
    """Dependency to get the stored creator source"""
    if _creator_source is None:
        raise HTTPException(
            status_code=503,
            detail="Creator source not initialized. Please ensure the creator database is available."
        )
    return _creator_source


async def get_optional_match_store():
    """Get match store if available, None otherwise"""
    return _match_store
