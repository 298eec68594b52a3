import json

import lancedb
import pandas as pd
import pytest

from app.core.creator_source import InlineCreatorSource, LanceCreatorSource
from app.core.errors import ComponentUnavailable


@pytest.fixture()
def lance_db(tmp_path, creator_rows):
    # Writers store list and metrics columns as JSON strings
    frame = pd.DataFrame(
        [
            {
                "id": row["id"],
                "niche": row["niche"],
                "platforms": json.dumps(row["platforms"]),
                "audience_types": json.dumps(row["audience_types"]),
                "estimated_engagement": row["estimated_engagement"],
                "metrics": json.dumps(row["metrics"]),
            }
            for row in reversed(creator_rows)
        ]
    )
    db_path = tmp_path / "lancedb"
    lancedb.connect(str(db_path)).create_table("creators", data=frame)
    return str(db_path)


def test_load_orders_by_id_and_coerces_rows(lance_db):
    source = LanceCreatorSource(lance_db, "creators")
    assert source.persisted is True
    assert source.name == "creators"

    pool = source.load(limit=10)
    assert [creator.id for creator in pool] == ["cr_fin", "cr_fit", "cr_yoga"]
    yoga = pool[2]
    assert yoga.platforms == ("instagram",)
    assert yoga.estimated_engagement is None
    assert yoga.metrics.platform_metrics["instagram"].followers == 20000


def test_load_respects_limit(lance_db):
    assert len(LanceCreatorSource(lance_db).load(limit=2)) == 2


def test_get_single_creator(lance_db):
    source = LanceCreatorSource(lance_db)
    creator = source.get("cr_fit")
    assert creator.niche == "fitness coaching"
    assert creator.metrics.top_topics == ("gym routines", "weight loss transformations")
    assert source.get("cr_unknown") is None


def test_missing_database_or_table_is_unavailable(tmp_path, lance_db):
    with pytest.raises(ComponentUnavailable):
        LanceCreatorSource(str(tmp_path / "nowhere")).load(limit=5)
    with pytest.raises(ComponentUnavailable):
        LanceCreatorSource(lance_db, "influencers").load(limit=5)


def test_inline_source_is_never_persisted(creator_rows):
    records = [{"niche": "travel"}, "not a creator", creator_rows[0]]
    source = InlineCreatorSource(records)
    pool = source.load(limit=10)
    assert source.persisted is False
    assert source.name == "inline"
    assert [creator.id for creator in pool] == ["candidate-0", "cr_fit"]
