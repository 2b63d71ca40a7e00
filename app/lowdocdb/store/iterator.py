"""Lazy recursive enumeration of document paths."""

import logging
from collections.abc import Iterator
from pathlib import PurePath

from lowdocdb.backend.base import StorageEntry
from lowdocdb.core.docpath import DocPath
from lowdocdb.core.errors import BackendError, InvalidPathError

logger = logging.getLogger(__name__)


class DocumentIterator:
    """One-shot, forward-only iterator over paths below a folder.

    Wraps a backend walk (pre-order, directories interleaved with files)
    and converts every location back into a DocPath relative to the store
    root. When folders are excluded, each directory the walk produces is
    skipped by pulling ahead to the next file, so no bare folder is ever
    returned while files nested at any depth still are.

    Locations that do not form a valid DocPath are dropped.

    Example:
        >>> for path in store.enumerator("notes"):
        ...     print(path)
        notes/a.txt
        notes/archive/b.txt
    """

    def __init__(
        self,
        root: PurePath,
        walk: Iterator[StorageEntry] | None,
        include_folders: bool,
    ) -> None:
        """Initialize the iterator.

        Args:
            root: Absolute store root, stripped from every yielded location.
            walk: Backend walk to consume, or None for an empty sequence.
            include_folders: If True, directories are yielded as well.
        """
        self._root = root
        self._walk = walk
        self._include_folders = include_folders

    def __iter__(self) -> "DocumentIterator":
        return self

    def __next__(self) -> DocPath:
        while True:
            entry = self._pull()
            if entry is None:
                raise StopIteration
            doc_path = self._to_doc_path(entry)
            if doc_path is not None:
                return doc_path

    def _pull(self) -> StorageEntry | None:
        """Take the next entry from the walk, honouring the folder policy."""
        if self._walk is None:
            return None
        entry = self._advance(self._walk)
        if not self._include_folders:
            while entry is not None and entry.is_directory:
                entry = self._advance(self._walk)
        if entry is None:
            # Exhausted; drop the walk so later calls stay cheap
            self._walk = None
        return entry

    @staticmethod
    def _advance(walk: Iterator[StorageEntry]) -> StorageEntry | None:
        try:
            return next(walk, None)
        except OSError as e:
            raise BackendError(f"Failed to enumerate documents: {e}") from e

    def _to_doc_path(self, entry: StorageEntry) -> DocPath | None:
        relative = entry.location.relative_to(self._root).as_posix()
        try:
            return DocPath(relative)
        except InvalidPathError:
            logger.debug("Skipping entry with invalid path: %s", entry.location)
            return None
