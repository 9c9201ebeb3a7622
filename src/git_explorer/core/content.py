from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from git_explorer.core.errors import FileNotAtRevision
from git_explorer.core.ports.git import GitReader
from git_explorer.core.result import GitResult
from git_explorer.models import FileContents

logger = logging.getLogger(__name__)

CURRENT_REVISION = "HEAD"
MISSING_BEFORE = "// File not found in previous commit"
MISSING_AFTER = "// File not found in this commit"


@dataclass(frozen=True)
class ContentKey:
    file_path: str
    from_revision: str | None
    to_revision: str | None


@dataclass(frozen=True)
class FetchedContents:
    contents: FileContents
    before_found: bool
    after_found: bool

    @property
    def found(self) -> bool:
        return self.before_found or self.after_found


class ContentCache:
    """Append/lookup map of fetched file pairs; entries are never invalidated."""

    def __init__(self) -> None:
        self._entries: dict[ContentKey, FetchedContents] = {}
        self._lock = threading.Lock()

    def get(self, key: ContentKey) -> FetchedContents | None:
        return self._entries.get(key)

    def put(self, key: ContentKey, value: FetchedContents) -> None:
        with self._lock:
            self._entries.setdefault(key, value)

    def __len__(self) -> int:
        return len(self._entries)


class ContentCacheRegistry:
    """One ``ContentCache`` per repository URL."""

    def __init__(self) -> None:
        self._caches: dict[str, ContentCache] = {}
        self._lock = threading.Lock()

    def for_repository(self, url: str) -> ContentCache:
        with self._lock:
            cache = self._caches.get(url)
            if cache is None:
                cache = self._caches[url] = ContentCache()
            return cache


def read_file_at(reader: GitReader, path: str, revision: str) -> GitResult[str]:
    result = reader.show(revision, path)
    if not result.ok:
        return GitResult.failure(FileNotAtRevision(path, revision, result.error))
    return result


class ContentFetcher:
    def __init__(self, reader: GitReader, cache: ContentCache | None = None) -> None:
        self._reader = reader
        self._cache = cache if cache is not None else ContentCache()

    def fetch(self, file_path: str, from_revision: str | None = None, to_revision: str | None = None) -> FetchedContents:
        """Return the text of *file_path* at both revisions; a missing revision means ``HEAD``.

        A side that does not exist is replaced by a sentinel string, so this
        always returns a pair.
        """
        key = ContentKey(file_path, from_revision, to_revision)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        before = read_file_at(self._reader, file_path, from_revision or CURRENT_REVISION)
        after = read_file_at(self._reader, file_path, to_revision or CURRENT_REVISION)
        for side in (before, after):
            if not side.ok:
                logger.debug("%s", side.error)

        fetched = FetchedContents(
            contents=FileContents(
                before=before.unwrap_or(MISSING_BEFORE),
                after=after.unwrap_or(MISSING_AFTER),
            ),
            before_found=before.ok,
            after_found=after.ok,
        )
        self._cache.put(key, fetched)
        return fetched
