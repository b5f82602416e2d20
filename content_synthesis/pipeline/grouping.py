"""
Grouping of storage images into logical folders.

This module walks a storage bucket, collects image files and groups
them by containing folder. Folders that exist under several root aliases
(``listings/x`` and ``gorseller/x``) merge into one group.
"""

import logging
import posixpath
import re
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from ..core.models.content import MediaFile, MediaGroup


logger = logging.getLogger(__name__)

IMAGE_EXTENSION_RE = re.compile(r'\.(jpe?g|png|webp|gif)$', re.IGNORECASE)

DEFAULT_PREFIX_ALIASES = ('listings', 'gorseller', 'görseller', 'media')
DEFAULT_MIN_FILES = 2
MAX_DEPTH = 10

# Supabase keeps this marker in otherwise empty folders
PLACEHOLDER_NAME = '.emptyFolderPlaceholder'


@dataclass
class GroupingResult:
    """Groups that passed the thresholds, plus what was dropped and why."""
    groups: Dict[str, MediaGroup] = field(default_factory=dict)
    discarded: Dict[str, str] = field(default_factory=dict)

    @property
    def skipped(self) -> int:
        return len(self.discarded)


class GroupingOrchestrator:
    """Lists a storage tree and groups its images by folder."""

    def __init__(
        self,
        roots: Sequence[str] = ('',),
        prefix_aliases: Sequence[str] = DEFAULT_PREFIX_ALIASES,
        min_files: int = DEFAULT_MIN_FILES,
        page_size: int = 1000
    ):
        """
        Initialize the orchestrator.

        Args:
            roots: Storage paths to walk
            prefix_aliases: Top-level folder names stripped from group keys, in order
            min_files: Minimum images per group
            page_size: Storage listing page size
        """
        self.roots = list(roots) or ['']
        self.prefix_aliases = list(prefix_aliases)
        self.min_files = min_files
        self.page_size = page_size

    def _walk(self, storage, path: str, found: List[str], depth: int = 0) -> None:
        if depth > MAX_DEPTH:
            logger.warning(f"Not descending below '{path}': depth limit reached")
            return

        offset = 0
        while True:
            entries = storage.list(path, page_size=self.page_size, offset=offset)

            for entry in entries:
                name = entry.get('name')
                if not name or name == PLACEHOLDER_NAME:
                    continue

                full_path = f"{path}/{name}" if path else name
                if entry.get('id') is None:
                    self._walk(storage, full_path, found, depth + 1)
                elif IMAGE_EXTENSION_RE.search(name):
                    found.append(full_path)

            if len(entries) < self.page_size:
                break
            offset += self.page_size

    def normalize_key(self, folder: str) -> str:
        """Strip known root aliases from a folder path."""
        key = folder.strip('/')
        for alias in self.prefix_aliases:
            prefix = f"{alias}/"
            if key.lower().startswith(prefix.lower()):
                key = key[len(prefix):]
        return key

    def _discard_reason(self, key: str, files: List[MediaFile]) -> str:
        if not key:
            return "empty folder key"
        if key.lower() in (alias.lower() for alias in self.prefix_aliases):
            return "root alias folder"
        if len(files) < self.min_files:
            return f"only {len(files)} image(s), need {self.min_files}"
        return ""

    def list_and_group(self, storage) -> GroupingResult:
        """
        Walk every root and group image files.

        Args:
            storage: Object exposing ``list`` and ``get_public_url``

        Returns:
            GroupingResult with kept groups and discarded keys

        Raises:
            StorageError: If the storage listing itself fails
        """
        paths: List[str] = []
        for root in self.roots:
            self._walk(storage, root.strip('/'), paths)

        buckets: Dict[str, List[MediaFile]] = {}
        seen = set()
        for path in paths:
            if path in seen:
                continue
            seen.add(path)

            key = self.normalize_key(posixpath.dirname(path))
            buckets.setdefault(key, []).append(MediaFile(
                path=path,
                name=posixpath.basename(path),
                url=storage.get_public_url(path)
            ))

        result = GroupingResult()
        for key, files in buckets.items():
            reason = self._discard_reason(key, files)
            if reason:
                result.discarded[key] = reason
                logger.debug(f"Discarding group '{key}': {reason}")
            else:
                result.groups[key] = MediaGroup(folder_key=key, files=files)

        logger.info(f"Grouped {len(seen)} images into {len(result.groups)} groups "
                    f"({result.skipped} discarded)")
        return result
