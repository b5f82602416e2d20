"""
Tests for the Supabase storage and content store wrappers.
"""

from unittest.mock import MagicMock, patch

import pytest

from content_synthesis.core.models.content import ContentRecord
from content_synthesis.core.models.errors import ConfigurationError, DatastoreError, StorageError
from content_synthesis.integrations.supabase import (
    SupabaseContentStore, SupabaseStorage, get_supabase_client
)


def test_storage_list_passes_paging_options():
    client = MagicMock()
    bucket = client.storage.from_.return_value
    bucket.list.return_value = [{"name": "a.jpg", "id": "1"}]

    entries = SupabaseStorage(client, "media").list("listings", page_size=50, offset=100)

    assert entries == [{"name": "a.jpg", "id": "1"}]
    client.storage.from_.assert_called_with("media")
    bucket.list.assert_called_once_with("listings", {
        "limit": 50,
        "offset": 100,
        "sortBy": {"column": "created_at", "order": "desc"},
    })


def test_storage_failure_raises_storage_error():
    client = MagicMock()
    client.storage.from_.return_value.list.side_effect = RuntimeError("503 upstream")

    with pytest.raises(StorageError) as excinfo:
        SupabaseStorage(client, "media").list("listings")

    assert excinfo.value.bucket == "media"
    assert excinfo.value.path == "listings"


def test_public_url_trailing_question_mark_removed():
    client = MagicMock()
    client.storage.from_.return_value.get_public_url.return_value = "https://x.supabase.co/a.jpg?"

    assert SupabaseStorage(client).get_public_url("a.jpg") == "https://x.supabase.co/a.jpg"


def test_client_requires_credentials():
    with pytest.raises(ConfigurationError):
        get_supabase_client(None, "key")


@patch("content_synthesis.integrations.supabase.client.create_client")
def test_client_is_cached(mock_create):
    first = get_supabase_client("https://cache.supabase.co", "k1")
    second = get_supabase_client("https://cache.supabase.co", "k1")

    assert first is second
    mock_create.assert_called_once_with("https://cache.supabase.co", "k1")


def _table(client):
    return client.table.return_value


def test_insert_record_maps_body_column():
    client = MagicMock()
    _table(client).insert.return_value.execute.return_value = MagicMock(data=[{"id": "abc"}])
    store = SupabaseContentStore(client, "news_articles", body_field="emlak_analysis")

    record = ContentRecord(title="Başlık", slug="baslik", body="<p>Metin</p>")
    record_id = store.insert_record(record)

    row = _table(client).insert.call_args.args[0]
    assert record_id == "abc"
    assert row["emlak_analysis"] == "<p>Metin</p>"
    assert "body" not in row
    client.table.assert_called_with("news_articles")


def test_find_by_slug():
    client = MagicMock()
    query = _table(client).select.return_value.eq.return_value.limit.return_value
    query.execute.return_value = MagicMock(data=[])

    assert SupabaseContentStore(client, "listings").find_by_slug("yok") is None
    _table(client).select.return_value.eq.assert_called_with("slug", "yok")


def test_fetch_improvable_skips_blank_bodies():
    client = MagicMock()
    query = _table(client).select.return_value.not_.is_.return_value
    query.limit.return_value.execute.return_value = MagicMock(data=[
        {"id": 1, "title": "Bir", "content": "<p>Dolu</p>"},
        {"id": 2, "title": "İki", "content": "   "},
        {"id": 3, "title": None, "content": "Başlıksız"},
    ])
    store = SupabaseContentStore(client, "articles", body_field="content")

    items = store.fetch_improvable("articles", limit=10)

    assert [item.id for item in items] == ["1", "3"]
    assert items[1].title == "Untitled"
    assert all(item.source == "articles" for item in items)
    _table(client).select.assert_called_with("id,title,content")
    query.limit.assert_called_with(10)


def test_update_failure_raises_datastore_error():
    client = MagicMock()
    _table(client).update.return_value.eq.return_value.execute.side_effect = RuntimeError("timeout")
    store = SupabaseContentStore(client, "articles")

    with pytest.raises(DatastoreError) as excinfo:
        store.update("1", {"body": "x"})

    assert excinfo.value.operation == "update"
    assert excinfo.value.table == "articles"
