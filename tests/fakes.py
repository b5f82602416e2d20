"""
In-memory stand-ins for providers, storage and the content datastore.
"""

import itertools
import json
from typing import Any, Callable, Dict, List, Optional

from content_synthesis.core.models.content import ContentItem, ContentRecord
from content_synthesis.core.models.errors import InvalidResponseError, ProviderError
from content_synthesis.core.models.llm import LLMResponse
from content_synthesis.integrations.llm.json_extract import extract_json_object


class FakeAdapter:
    """Provider adapter returning canned text or raising a canned error."""

    def __init__(self, name: str, content: Any = None, error: Exception = None):
        self.name = name
        self.content = content
        self.error = error
        self.calls = []

    def complete(self, request) -> LLMResponse:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        content = self.content(request) if callable(self.content) else self.content
        if isinstance(content, dict):
            content = json.dumps(content, ensure_ascii=False)
        return LLMResponse(content=content, provider=self.name, model="fake")

    def complete_json(self, request) -> Dict[str, Any]:
        response = self.complete(request)
        parsed = extract_json_object(response.content)
        if parsed is None:
            raise InvalidResponseError("no JSON", provider=self.name)
        return parsed


def failing_adapter(name: str) -> FakeAdapter:
    return FakeAdapter(name, error=ProviderError("provider down", provider=name))


class FakeStorage:
    """Storage tree keyed by folder path; entries follow the Supabase shape."""

    def __init__(self, tree: Dict[str, List[Dict[str, Any]]], error: Exception = None):
        self.tree = tree
        self.error = error
        self.list_calls = []

    def list(self, path: str = "", page_size: int = 1000, offset: int = 0, sort=None):
        self.list_calls.append((path, page_size, offset))
        if self.error is not None:
            raise self.error
        return self.tree.get(path, [])[offset:offset + page_size]

    def get_public_url(self, path: str) -> str:
        return f"https://cdn.example.com/media/{path}"

    def ping(self) -> bool:
        return True


def folder(name: str) -> Dict[str, Any]:
    return {"name": name, "id": None}


def image(name: str) -> Dict[str, Any]:
    return {"name": name, "id": f"id-{name}"}


class InMemoryStore:
    """Content table with the datastore interface the pipeline uses."""

    def __init__(self, body_field: str = "body", title_field: str = "title",
                 rows: Optional[List[Dict[str, Any]]] = None,
                 fail_insert: Callable[[Dict[str, Any]], bool] = None):
        self.body_field = body_field
        self.title_field = title_field
        self.rows: Dict[str, Dict[str, Any]] = {str(r["id"]): dict(r) for r in rows or []}
        self.updates: List[tuple] = []
        self.fail_insert = fail_insert

    def find_by_slug(self, slug: str):
        for row in self.rows.values():
            if row.get("slug") == slug:
                return row
        return None

    def get(self, record_id: str):
        return self.rows.get(record_id)

    def insert(self, row: Dict[str, Any]) -> str:
        if self.fail_insert and self.fail_insert(row):
            raise RuntimeError("insert rejected")
        self.rows[str(row["id"])] = dict(row)
        return str(row["id"])

    def insert_record(self, record: ContentRecord) -> str:
        row = record.to_row()
        if self.body_field != "body":
            row[self.body_field] = row.pop("body")
        return self.insert(row)

    def update(self, record_id: str, fields: Dict[str, Any]) -> None:
        self.updates.append((record_id, fields))
        self.rows[record_id].update(fields)

    def fetch_improvable(self, source: str, limit: Optional[int] = None) -> List[ContentItem]:
        items = [
            ContentItem(id=rid, title=row.get(self.title_field) or "Untitled",
                        body=row[self.body_field], source=source)
            for rid, row in self.rows.items()
            if (row.get(self.body_field) or "").strip()
        ]
        return items[:limit] if limit else items

    def ping(self) -> bool:
        return True


class StopAfter:
    """Stop flag that trips once ``is_set`` has been polled ``n`` times."""

    def __init__(self, n: int):
        self.n = n
        self.polls = 0

    def is_set(self) -> bool:
        self.polls += 1
        return self.polls > self.n


def counter_clock(start: int = 1000):
    counter = itertools.count(start)
    return lambda: next(counter)
