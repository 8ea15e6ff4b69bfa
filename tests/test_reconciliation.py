import pytest
from sqlalchemy import func, select

from miremover_api.core.errors import BadRequest
from miremover_api.models.stat import Stat
from miremover_api.services.reconciliation import reconcile

from tests.conftest import make_user, report


async def _stat(db, stat_id):
    result = await db.execute(select(Stat).where(Stat.stat_id == stat_id))
    return result.scalar_one()


async def _stat_count(db):
    return (await db.execute(select(func.count(Stat.id)))).scalar_one()


@pytest.mark.parametrize("batch", [None, [], {}, "stats", {"stat_id": "s1"}])
async def test_rejects_missing_or_empty_batch(db, batch):
    with pytest.raises(BadRequest):
        await reconcile(db, batch)


async def test_reconcile_is_idempotent(db):
    await make_user(db, "u1")
    batch = [
        report("s1", "u1", images_processed=5, process_time=1.5),
        report("s2", "u1", date="2024-02-02", images_processed=2, resize_operations=1),
    ]

    first = await reconcile(db, batch)
    second = await reconcile(db, batch)

    assert [o.status for o in first] == ["created", "created"]
    assert [o.status for o in second] == ["updated", "updated"]
    assert await _stat_count(db) == 2
    s1 = await _stat(db, "s1")
    assert (s1.images_processed, s1.process_time) == (5, 1.5)


async def test_unknown_user_does_not_abort_batch(db):
    await make_user(db, "u1")
    batch = [
        report("s1", "u1", images_processed=1),
        report("s2", "nobody", images_processed=2),
        report("s3", "u1", images_processed=3),
    ]

    outcomes = await reconcile(db, batch)

    assert [o.status for o in outcomes] == ["created", "error", "created"]
    assert [o.stat_id for o in outcomes] == ["s1", "s2", "s3"]
    assert outcomes[1].message == "User not found"
    assert await _stat_count(db) == 2


async def test_update_replaces_counters_and_keeps_date(db):
    await make_user(db, "u1")
    await reconcile(db, [report("s1", "u1", date="2024-01-01", images_processed=5, face_crop_operations=4)])

    outcomes = await reconcile(db, [report("s1", "u1", date="2024-01-09", images_processed=3)])

    assert outcomes[0].status == "updated"
    stat = await _stat(db, "s1")
    assert stat.images_processed == 3
    assert stat.face_crop_operations == 0
    assert stat.date == "2024-01-01"
    assert stat.sync_timestamp is not None


async def test_duplicate_stat_id_in_batch_last_wins(db):
    await make_user(db, "u1")

    outcomes = await reconcile(db, [
        report("s1", "u1", images_processed=1),
        report("s1", "u1", images_processed=9),
    ])

    assert [o.status for o in outcomes] == ["created", "updated"]
    assert (await _stat(db, "s1")).images_processed == 9


async def test_malformed_item_is_reported_not_raised(db):
    await make_user(db, "u1")
    bad = report("s2", "u1", images_processed="many")

    outcomes = await reconcile(db, [report("s1", "u1"), bad, "garbage", report("s3", "u1")])

    assert [o.status for o in outcomes] == ["created", "error", "error", "created"]
    assert outcomes[1].stat_id == "s2"
    assert outcomes[1].message == "Invalid stat report"
    assert outcomes[2].stat_id is None


async def test_same_day_reports_stay_separate_rows(db):
    await make_user(db, "u1")

    await reconcile(db, [
        report("device-a", "u1", date="2024-02-01", images_processed=1),
        report("device-b", "u1", date="2024-02-01", images_processed=1),
    ])

    assert await _stat_count(db) == 2


async def test_numeric_ids_are_stored_as_strings(db):
    await make_user(db, "42")
    item = {**report("x", "42", images_processed=2), "stat_id": 1001, "user_id": 42}

    outcomes = await reconcile(db, [item])

    assert (outcomes[0].stat_id, outcomes[0].status) == ("1001", "created")
    assert (await _stat(db, "1001")).user_id == "42"


async def test_invalid_item_keeps_numeric_stat_id(db):
    outcomes = await reconcile(db, [{"stat_id": 7, "user_id": "u1", "date": "2024-02-01", "images_processed": "lots"}])

    assert (outcomes[0].stat_id, outcomes[0].status) == ("7", "error")
