"""
Tests for the listing batch runner.
"""

import pytest

from content_synthesis.core.models.content import MediaFile, MediaGroup
from content_synthesis.core.models.errors import StorageError
from content_synthesis.heuristics import generate_locally
from content_synthesis.integrations.llm.router import ProviderRouter
from content_synthesis.pipeline.batch import BatchRunner, create_listings_from_storage
from content_synthesis.pipeline.grouping import GroupingOrchestrator
from tests.fakes import FakeAdapter, FakeStorage, InMemoryStore, StopAfter, counter_clock, failing_adapter


def _groups(*keys):
    return [
        MediaGroup(folder_key=key, files=[
            MediaFile(path=f"{key}/{n}.jpg", name=f"{n}.jpg", url=f"https://cdn.example.com/{key}/{n}.jpg")
            for n in ("a", "b")
        ])
        for key in keys
    ]


def _generator_failing_for(folder):
    def generate(request):
        if request.context.get("folder") == folder:
            raise RuntimeError("template rendering failed")
        return generate_locally(request)
    return generate


def test_one_failing_item_does_not_stop_the_batch(no_sleep):
    sleeps, sleep = no_sleep
    router = ProviderRouter([failing_adapter("openai/gpt-4o-mini")],
                            local_generator=_generator_failing_for("g3"))
    store = InMemoryStore()
    runner = BatchRunner(router, store, delay=2.0, sleep=sleep)

    result = runner.run_batch(_groups("g1", "g2", "g3", "g4", "g5"))

    assert result.summary() == {
        "message": "4 listings created, 0 skipped, 1 errors",
        "created": 4,
        "skipped": 0,
        "errors": 1,
        "total": 5,
    }
    failed = result.items[2]
    assert failed.state == "failed"
    assert failed.failed_stage == "generating"
    assert len(store.rows) == 4
    assert sleeps == [2.0, 2.0, 2.0]


def test_skipped_groups_count_toward_total(no_sleep):
    _, sleep = no_sleep
    runner = BatchRunner(ProviderRouter([]), InMemoryStore(), sleep=sleep)

    result = runner.run_batch(_groups("g1"), skipped=3)

    assert (result.created, result.skipped, result.total) == (1, 3, 4)


def test_folder_facts_win_in_stored_row(no_sleep):
    _, sleep = no_sleep
    adapter = FakeAdapter("openai/gpt-4o-mini", {
        "title": "Yalı Mahallesi 2+1 Satılık Daire",
        "description_long": "<p>Denize yakın daire.</p>",
        "description_short": "Denize yakın daire",
        "meta_description": "Yalı Mahallesi satılık daire",
        "price": "999.000",
        "room_count": "5+1",
        "neighborhood": "Başka",
        "property_type": "villa",
        "intent": "rent",
    })
    store = InMemoryStore()
    runner = BatchRunner(ProviderRouter([adapter]), store, sleep=sleep)

    result = runner.run_batch(_groups("yali-mahallesi-2+1-850000"))

    row = store.rows[result.items[0].record_id]
    assert row["price_amount"] == 850000
    assert row["features"]["room_count"] == 2
    assert row["location_neighborhood"] == "yali"
    assert row["intent"] == "sale"
    assert row["property_type"] == "villa"
    assert row["slug"] == "yali-mahallesi-2-1-satilik-daire"
    assert row["body"] == "<p>Denize yakın daire.</p>"


def test_slug_collision_gets_suffix(no_sleep):
    _, sleep = no_sleep
    store = InMemoryStore()
    runner = BatchRunner(ProviderRouter([]), store, sleep=sleep, clock=counter_clock(42))

    result = runner.run_batch(_groups("yali-mahallesi-2+1", "yali-mahallesi-2+1"))

    first, second = (item.slug for item in result.items)
    assert second == f"{first}-42"
    assert result.created == 2


def test_persist_failure_is_attributed(no_sleep):
    _, sleep = no_sleep
    store = InMemoryStore(fail_insert=lambda row: row["source_folder"] == "g2")
    runner = BatchRunner(ProviderRouter([]), store, sleep=sleep)

    result = runner.run_batch(_groups("g1", "g2"))

    assert result.errors == 1
    assert result.items[1].failed_stage == "persisting"
    assert "insert rejected" in result.items[1].error


def test_stop_event_ends_run_early(no_sleep):
    _, sleep = no_sleep
    runner = BatchRunner(ProviderRouter([]), InMemoryStore(), sleep=sleep)

    result = runner.run_batch(_groups("g1", "g2", "g3", "g4"), stop_event=StopAfter(2))

    assert result.created == 2
    assert result.stopped_early is True
    assert result.total == 4


def test_create_from_storage_groups_then_runs(storage, no_sleep):
    _, sleep = no_sleep
    store = InMemoryStore()
    runner = BatchRunner(ProviderRouter([]), store, sleep=sleep)

    result = create_listings_from_storage(GroupingOrchestrator(), storage, runner)

    assert result.summary() == {
        "message": "2 listings created, 2 skipped, 0 errors",
        "created": 2,
        "skipped": 2,
        "errors": 0,
        "total": 4,
    }
    folders = sorted(row["source_folder"] for row in store.rows.values())
    assert folders == ["aziziye-kiralik-3+1", "yali-mahallesi-2+1-850000"]


def test_create_from_storage_with_nothing_to_do(no_sleep):
    runner = BatchRunner(ProviderRouter([]), InMemoryStore(), sleep=no_sleep[1])

    result = create_listings_from_storage(GroupingOrchestrator(), FakeStorage({}), runner)

    assert (result.created, result.total) == (0, 0)
    assert result.message == "No image groups found to create listings from"


def test_storage_failure_propagates(no_sleep):
    runner = BatchRunner(ProviderRouter([]), InMemoryStore(), sleep=no_sleep[1])

    with pytest.raises(StorageError):
        create_listings_from_storage(GroupingOrchestrator(),
                                     FakeStorage({}, error=StorageError("down")), runner)
