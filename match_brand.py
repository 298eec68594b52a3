#!/usr/bin/env python3
"""
Brand Match Script
Ranks creators for a brand profile from the command line, against the stored
LanceDB creator table or a JSON file of candidates.
"""

import argparse
import json
import sys
from typing import List, Optional

from app.config import settings
from app.core.creator_source import LanceCreatorSource
from app.core.errors import MatchEngineError
from app.core.match_store import MatchStore
from app.core.scoring import CompatibilityScorer, ScoringPolicy
from app.dependencies import build_catalog
from app.models.match import MatchRequest
from app.services.matching import MatchService


def load_json(path: str):
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def format_result(rank: int, item) -> str:
    """Format one ranked creator for display"""
    breakdown = item.result.breakdown()
    output = []
    output.append(f"{rank:>2}. {item.creator_id}  score={item.result.total:.4f}")
    output.append(
        "    niche={niche_score} topics={topic_score} platform={platform_score} engagement={engagement_score}".format(
            **breakdown
        )
    )
    output.append(f"    best platform: {breakdown['best_platform'] or 'N/A'}  boost: {breakdown['priority_boost']}")
    if item.result.reasons:
        output.append(f"    reasons: {', '.join(item.result.reason_labels())}")
    return "\n".join(output)


def build_service(args) -> MatchService:
    store = None
    if args.persist:
        store = MatchStore(args.database_url or settings.MATCH_DATABASE_URL)
        store.init_db()
    return MatchService(
        CompatibilityScorer(catalog=build_catalog(), policy=ScoringPolicy.from_settings(settings)),
        creator_source=LanceCreatorSource(args.db_path or settings.CREATOR_DB_PATH, args.table),
        match_store=store,
        max_limit=settings.MAX_MATCH_LIMIT,
        max_pool_size=settings.MAX_POOL_SIZE,
        concurrency=settings.SCORING_CONCURRENCY,
        strict_vocabulary=settings.STRICT_TOPIC_VOCABULARY,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main function"""
    parser = argparse.ArgumentParser(description="Rank creators for a brand profile")
    parser.add_argument("brand_file", help="JSON file with the brand profile (MatchSpec fields)")
    parser.add_argument("--brand-id", required=True, help="Brand identifier used for persisted matches")
    parser.add_argument("--creators", help="JSON file with an inline candidate pool (never persisted)")
    parser.add_argument("--directives", help="JSON file with ranking directives (priority_niches, priority_topics, preferred_platforms)")
    parser.add_argument("--db-path", help="Path to LanceDB database")
    parser.add_argument("--table", default=settings.CREATOR_TABLE_NAME, help="Creator table name")
    parser.add_argument("--database-url", help="Match store URL (default: MATCH_DATABASE_URL)")
    parser.add_argument("--limit", type=int, default=settings.DEFAULT_MATCH_LIMIT, help="Number of results")
    parser.add_argument("--persist", action="store_true", help="Write matches to the match store")
    parser.add_argument("--json", action="store_true", help="Output results in JSON format")

    args = parser.parse_args(argv)

    request = MatchRequest(
        brand_id=args.brand_id,
        brand=load_json(args.brand_file),
        creator_pool=load_json(args.creators) if args.creators else None,
        ranking_directives=load_json(args.directives) if args.directives else {},
        limit=args.limit,
        persist=args.persist,
    )

    try:
        outcome = build_service(args).run(request)
    except MatchEngineError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        payload = [
            {
                "creator_id": item.creator_id,
                "score": item.result.total,
                "reasons": item.result.reason_labels(),
                "breakdown": item.result.breakdown(),
            }
            for item in outcome.ranked
        ]
        print(
            json.dumps(
                {
                    "ranked": payload,
                    "persisted_count": outcome.persisted_count,
                    "failures": [{"creator_id": f.creator_id, "error": str(f)} for f in outcome.failures],
                },
                indent=2,
            )
        )
        return 0

    print(f"Ranked {len(outcome.ranked)} creator(s) for brand '{outcome.brand_id}' from {outcome.source}:")
    print("=" * 50)
    for rank, item in enumerate(outcome.ranked, 1):
        print(format_result(rank, item))
    if args.persist:
        print(f"\nPersisted {outcome.persisted_count} match(es); {len(outcome.failures)} failure(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
