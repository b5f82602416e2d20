"""
Supabase content datastore.

The pipeline only looks up, inserts and updates rows by id; it never
deletes. No multi-row transaction is assumed.
"""

import logging
from typing import Any, Dict, List, Optional

from ...core.models.content import ContentItem, ContentRecord
from ...core.models.errors import DatastoreError


logger = logging.getLogger(__name__)


class SupabaseContentStore:
    """CRUD access to one content table."""

    def __init__(self, client, table: str, body_field: str = "body", title_field: str = "title"):
        """
        Initialize the store.

        Args:
            client: Supabase client
            table: Table name
            body_field: Column holding the improvable text
            title_field: Column holding the title
        """
        self.client = client
        self.table = table
        self.body_field = body_field
        self.title_field = title_field

    def _execute(self, operation: str, query):
        try:
            return query.execute()
        except Exception as e:
            raise DatastoreError(f"{operation} on {self.table} failed: {e}",
                                 table=self.table, operation=operation)

    def find_by_slug(self, slug: str) -> Optional[Dict[str, Any]]:
        """Row with this slug, or None."""
        response = self._execute(
            "find_by_slug",
            self.client.table(self.table).select("id,slug").eq("slug", slug).limit(1)
        )
        return response.data[0] if response.data else None

    def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        """Row by id, or None."""
        response = self._execute(
            "get",
            self.client.table(self.table).select("*").eq("id", record_id).limit(1)
        )
        return response.data[0] if response.data else None

    def insert(self, row: Dict[str, Any]) -> str:
        """
        Insert a row.

        Returns:
            The id of the new row
        """
        response = self._execute("insert", self.client.table(self.table).insert(row))
        if response.data:
            return str(response.data[0].get("id", row.get("id")))
        return str(row.get("id"))

    def insert_record(self, record: ContentRecord) -> str:
        """Insert a content record, mapping ``body`` onto this table's body column."""
        row = record.to_row()
        if self.body_field != "body":
            row[self.body_field] = row.pop("body")
        return self.insert(row)

    def update(self, record_id: str, fields: Dict[str, Any]) -> None:
        """Update selected columns of one row."""
        self._execute("update", self.client.table(self.table).update(fields).eq("id", record_id))

    def fetch_improvable(self, source: str, limit: Optional[int] = None) -> List[ContentItem]:
        """
        Rows with a non-empty body, as improvement candidates.

        Args:
            source: Source name recorded on each item
            limit: Maximum number of rows
        """
        query = (self.client.table(self.table)
                 .select(f"id,{self.title_field},{self.body_field}")
                 .not_.is_(self.body_field, "null"))
        if limit:
            query = query.limit(limit)

        response = self._execute("fetch_improvable", query)

        items = []
        for row in response.data or []:
            body = row.get(self.body_field) or ""
            if not body.strip():
                continue
            items.append(ContentItem(
                id=str(row["id"]),
                title=row.get(self.title_field) or "Untitled",
                body=body,
                source=source
            ))
        return items

    def ping(self) -> bool:
        """Whether the table answers a minimal query."""
        self._execute("ping", self.client.table(self.table).select("id").limit(1))
        return True
