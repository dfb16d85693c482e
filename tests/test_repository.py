"""Tests for EntryRepository: ordering, reconciliation and failure policy."""

import asyncio
from datetime import date

import pytest

from daybook.storage import Database, EntryRepository, StorageIOError


async def _storage_contents(database):
    return tuple(await database.read_all())


# =============================================================================
# Scenarios
# =============================================================================

async def test_fresh_repository_is_empty(repo):
    assert repo.entries == ()
    assert repo.observable_entries() == ()


async def test_entries_newest_day_first(repo, clock):
    clock.today = date(2024, 1, 1)
    await repo.add_entry("Had a good day", 3)
    clock.today = date(2024, 1, 2)
    await repo.add_entry("Rough one", 1)

    assert [(e.text, e.rating, e.created_date) for e in repo.entries] == [
        ("Rough one", 1, "02/1/2024"),
        ("Had a good day", 3, "01/1/2024"),
    ]


async def test_delete_first_added_leaves_second(repo):
    first = await repo.add_entry("first", 2, "01/1/2024")
    second = await repo.add_entry("second", 4, "02/1/2024")

    await repo.delete_entry(first)

    assert [e.id for e in repo.entries] == [second]
    assert repo.entries[0].text == "second"


async def test_delete_unknown_id_on_empty_storage(repo):
    await repo.delete_entry(9999)
    assert repo.entries == ()


async def test_schema_bump_hides_old_entries(db_path, clock):
    db = Database(db_path)
    await db.connect(schema_version=1)
    old_repo = await EntryRepository.create(db, clock=clock)
    await old_repo.add_entry("from the old schema", 3)
    await db.close()

    db = Database(db_path)
    await db.connect(schema_version=2)
    try:
        new_repo = await EntryRepository.create(db, clock=clock)
        assert new_repo.entries == ()
    finally:
        await db.close()


# =============================================================================
# Properties
# =============================================================================

async def test_ordering_is_text_descending(repo):
    dates = ["15/3/2024", "01/1/2024", "9/1/2024", "10/1/2024", "28/12/2023"]
    for created in dates:
        await repo.add_entry(f"entry {created}", 2, created)

    assert [e.created_date for e in repo.entries] == sorted(dates, reverse=True)
    # Text order, not calendar order: "9/1" sorts ahead of "10/1"
    listed = [e.created_date for e in repo.entries]
    assert listed.index("9/1/2024") < listed.index("10/1/2024")


async def test_cache_matches_storage_after_every_call(repo, database):
    ids = []
    steps = [
        ("add", "a", 1, "03/1/2024"),
        ("add", "b", 2, "01/1/2024"),
        ("delete", 0),
        ("add", "c", 3, "02/1/2024"),
        ("delete", 4242),
        ("add", "d", 4, "03/1/2024"),
        ("delete", 1),
    ]
    for step in steps:
        if step[0] == "add":
            ids.append(await repo.add_entry(step[1], step[2], step[3]))
        else:
            index = step[1]
            await repo.delete_entry(ids[index] if index < len(ids) else index)
        assert repo.entries == await _storage_contents(database)

    assert len({e.id for e in repo.entries}) == len(repo.entries)


async def test_ids_unique_and_never_reused(repo):
    ids = [await repo.add_entry(f"entry {n}", 1, "01/1/2024") for n in range(5)]
    assert len(set(ids)) == 5
    assert ids == sorted(ids)

    await repo.delete_entry(ids[-1])
    new_id = await repo.add_entry("after delete", 1, "01/1/2024")
    assert new_id > max(ids)


async def test_delete_unknown_id_keeps_entries_and_republishes(repo):
    await repo.add_entry("keep me", 4, "01/1/2024")
    before = repo.entries
    published = []
    repo.subscribe(published.append)

    await repo.delete_entry(9999)

    assert repo.entries == before
    assert published == [before]


async def test_repeated_reads_are_identical(repo):
    await repo.add_entry("one", 1, "01/1/2024")
    await repo.add_entry("two", 2, "02/1/2024")
    first = repo.observable_entries()
    assert repo.observable_entries() == first
    assert repo.entries is first


async def test_ratings_stored_without_validation(repo):
    for rating in (0, 5, -2):
        await repo.add_entry(f"rating {rating}", rating, "01/1/2024")
    assert sorted(e.rating for e in repo.entries) == [-2, 0, 5]
    assert all(e.mood is None for e in repo.entries)


async def test_default_created_date_comes_from_clock(repo, clock):
    clock.today = date(2024, 11, 7)
    entry_id = await repo.add_entry("today", 3)
    assert repo.get(entry_id).created_date == "07/11/2024"


async def test_create_loads_existing_entries(database, clock):
    await database.insert("already there", 4, "05/5/2024")
    repo = await EntryRepository.create(database, clock=clock)
    assert [e.text for e in repo.entries] == ["already there"]


async def test_get_unknown_id(repo):
    assert repo.get(12345) is None


async def test_refresh_picks_up_external_rows(repo, database):
    await database.insert("written elsewhere", 2, "01/1/2024")
    assert repo.entries == ()
    await repo.refresh()
    assert [e.text for e in repo.entries] == ["written elsewhere"]


async def test_concurrent_mutations_are_serialized(repo, database):
    await asyncio.gather(
        *(repo.add_entry(f"entry {n}", n % 4 + 1, f"{n + 10}/1/2024") for n in range(10))
    )
    assert len(repo.entries) == 10
    assert repo.entries == await _storage_contents(database)


# =============================================================================
# Subscriptions
# =============================================================================

async def test_subscribers_receive_each_snapshot(repo):
    published = []
    repo.subscribe(published.append)

    first = await repo.add_entry("one", 1, "01/1/2024")
    await repo.add_entry("two", 2, "02/1/2024")
    await repo.delete_entry(first)

    assert [len(snapshot) for snapshot in published] == [1, 2, 1]
    assert published[-1] == repo.entries


async def test_unsubscribe_stops_notifications(repo):
    published = []
    unsubscribe = repo.subscribe(published.append)
    await repo.add_entry("seen", 1, "01/1/2024")
    unsubscribe()
    await repo.add_entry("unseen", 1, "02/1/2024")
    assert len(published) == 1
    # Calling it twice is harmless
    unsubscribe()


async def test_failing_subscriber_does_not_break_mutation(repo):
    def broken(entries):
        raise ValueError("observer bug")

    published = []
    repo.subscribe(broken)
    repo.subscribe(published.append)

    entry_id = await repo.add_entry("still saved", 3, "01/1/2024")

    assert repo.get(entry_id) is not None
    assert len(published) == 1


# =============================================================================
# Failure Policy
# =============================================================================

async def test_failed_insert_leaves_snapshot_untouched(repo, database):
    await repo.add_entry("before", 3, "01/1/2024")
    before = repo.entries
    published = []
    repo.subscribe(published.append)

    await database.conn.execute("DROP TABLE journal_entries")
    await database.conn.commit()

    with pytest.raises(StorageIOError):
        await repo.add_entry("after", 1, "02/1/2024")

    assert repo.entries == before
    assert published == []


async def test_failed_delete_leaves_snapshot_untouched(repo, database):
    entry_id = await repo.add_entry("before", 3, "01/1/2024")
    before = repo.entries

    await database.conn.execute("DROP TABLE journal_entries")
    await database.conn.commit()

    with pytest.raises(StorageIOError):
        await repo.delete_entry(entry_id)

    assert repo.entries == before


async def test_failed_reload_keeps_previous_snapshot(repo, database, monkeypatch):
    await repo.add_entry("before", 3, "01/1/2024")
    before = repo.entries
    real_read_all = database.read_all

    async def failing_read_all(*args, **kwargs):
        raise StorageIOError("disk went away")

    monkeypatch.setattr(database, "read_all", failing_read_all)

    with pytest.raises(StorageIOError):
        await repo.add_entry("written but not reloaded", 2, "02/1/2024")

    assert repo.entries == before
    # The write itself committed
    assert len(await real_read_all()) == 2

    monkeypatch.setattr(database, "read_all", real_read_all)
    await repo.refresh()
    assert len(repo.entries) == 2


async def test_create_propagates_load_failure(database, clock):
    await database.conn.execute("DROP TABLE journal_entries")
    await database.conn.commit()
    with pytest.raises(StorageIOError):
        await EntryRepository.create(database, clock=clock)


async def test_lock_released_after_failure(repo, database, monkeypatch):
    async def failing_insert(*args, **kwargs):
        raise StorageIOError("read-only")

    real_insert = database.insert
    monkeypatch.setattr(database, "insert", failing_insert)
    with pytest.raises(StorageIOError):
        await repo.add_entry("nope", 1, "01/1/2024")

    monkeypatch.setattr(database, "insert", real_insert)
    await repo.add_entry("yes", 1, "01/1/2024")
    assert [e.text for e in repo.entries] == ["yes"]
