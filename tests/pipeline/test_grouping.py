"""
Tests for grouping storage images into folders.
"""

import pytest

from content_synthesis.core.models.errors import StorageError
from content_synthesis.pipeline.grouping import GroupingOrchestrator
from tests.fakes import FakeStorage, folder, image


def test_groups_merge_across_root_aliases(storage):
    result = GroupingOrchestrator().list_and_group(storage)

    assert list(result.groups) == ["yali-mahallesi-2+1-850000", "aziziye-kiralik-3+1"]
    yali = result.groups["yali-mahallesi-2+1-850000"]
    assert yali.file_names == ["a.jpg", "b.png", "c.webp"]
    assert yali.urls[0] == "https://cdn.example.com/media/listings/yali-mahallesi-2+1-850000/a.jpg"


def test_small_and_rootless_groups_are_discarded(storage):
    result = GroupingOrchestrator().list_and_group(storage)

    assert set(result.discarded) == {"tek", ""}
    assert result.skipped == 2


def test_alias_folder_itself_is_discarded():
    storage = FakeStorage({
        "": [folder("listings")],
        "listings": [image("a.jpg"), image("b.jpg")],
    })

    result = GroupingOrchestrator().list_and_group(storage)

    assert result.groups == {}
    assert "listings" in result.discarded


def test_min_files_threshold_is_configurable(storage):
    result = GroupingOrchestrator(min_files=1).list_and_group(storage)

    assert "tek" in result.groups


def test_listing_is_paginated():
    storage = FakeStorage({
        "": [folder("ev")],
        "ev": [image("1.jpg"), image("2.jpg"), image("3.jpg")],
    })

    result = GroupingOrchestrator(page_size=2).list_and_group(storage)

    assert len(result.groups["ev"].files) == 3
    assert ("ev", 2, 2) in storage.list_calls


def test_duplicate_roots_do_not_duplicate_files(storage):
    result = GroupingOrchestrator(roots=["", "listings"]).list_and_group(storage)

    assert len(result.groups["yali-mahallesi-2+1-850000"].files) == 3


def test_storage_failure_propagates():
    storage = FakeStorage({}, error=StorageError("bucket unavailable", bucket="media"))

    with pytest.raises(StorageError):
        GroupingOrchestrator().list_and_group(storage)
