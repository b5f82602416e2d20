"""
Supabase storage listing.

Entries whose ``id`` is None are folders; everything else is a file.
"""

import logging
from typing import Any, Dict, List

from ...core.models.errors import StorageError


logger = logging.getLogger(__name__)

DEFAULT_SORT = {"column": "created_at", "order": "desc"}


class SupabaseStorage:
    """Read-only view of one storage bucket."""

    def __init__(self, client, bucket: str = "media"):
        """
        Initialize storage access.

        Args:
            client: Supabase client
            bucket: Bucket name
        """
        self.client = client
        self.bucket = bucket

    def list(self, path: str = "", page_size: int = 1000, offset: int = 0,
             sort: Dict[str, str] = None) -> List[Dict[str, Any]]:
        """
        List one page of entries under a path.

        Returns:
            Raw entries with at least ``name`` and ``id``

        Raises:
            StorageError: If the storage service call fails
        """
        options = {
            "limit": page_size,
            "offset": offset,
            "sortBy": sort or DEFAULT_SORT,
        }
        try:
            entries = self.client.storage.from_(self.bucket).list(path, options)
        except Exception as e:
            raise StorageError(f"Failed to list '{path}': {e}", bucket=self.bucket, path=path)
        return list(entries or [])

    def get_public_url(self, path: str) -> str:
        """Public access URL of a file."""
        try:
            url = self.client.storage.from_(self.bucket).get_public_url(path)
        except Exception as e:
            raise StorageError(f"Failed to resolve URL for '{path}': {e}",
                               bucket=self.bucket, path=path)
        # Some client versions append a bare '?' to public URLs
        return url.rstrip("?") if isinstance(url, str) else url

    def ping(self) -> bool:
        """Whether the bucket answers a minimal listing."""
        self.list("", page_size=1)
        return True
