"""Local directory tree backend.

Stores documents as regular files below a root directory using pathlib
and shutil.
"""

import logging
import os
import shutil
from collections.abc import Iterator
from pathlib import Path, PurePath

from lowdocdb.backend.base import EntryKind, StorageBackend, StorageEntry, is_hidden

logger = logging.getLogger(__name__)


class LocalBackend(StorageBackend):
    """Storage backend on the local filesystem.

    Symlinks are reported as the type of their target. Symlinked
    directories are listed but never descended into by walk().
    """

    def resolve_root(self, root: str | PurePath) -> Path:
        """Expand ~ and make the root absolute."""
        return Path(root).expanduser().absolute()

    def entry_kind(self, location: PurePath) -> EntryKind:
        path = Path(location)
        if path.is_dir():
            return EntryKind.DIRECTORY
        if path.exists():
            return EntryKind.FILE
        return EntryKind.MISSING

    def make_dirs(self, location: PurePath) -> None:
        Path(location).mkdir(parents=True, exist_ok=True)

    def write_bytes(self, location: PurePath, data: bytes) -> None:
        Path(location).write_bytes(data)

    def read_bytes(self, location: PurePath) -> bytes:
        return Path(location).read_bytes()

    def list_dir(self, location: PurePath) -> list[StorageEntry]:
        with os.scandir(location) as it:
            entries = [
                StorageEntry(location=Path(entry.path), kind=self._dirent_kind(entry))
                for entry in it
                if not is_hidden(entry.name)
            ]
        return sorted(entries, key=lambda e: e.name)

    def walk(self, location: PurePath) -> Iterator[StorageEntry]:
        with os.scandir(location) as it:
            children = sorted(
                (entry for entry in it if not is_hidden(entry.name)),
                key=lambda e: e.name,
            )

        for child in children:
            kind = self._dirent_kind(child)
            yield StorageEntry(location=Path(child.path), kind=kind)
            if kind == EntryKind.DIRECTORY and not child.is_symlink():
                yield from self.walk(Path(child.path))

    def remove_file(self, location: PurePath) -> None:
        Path(location).unlink()

    def remove_tree(self, location: PurePath) -> None:
        path = Path(location)
        # Directories (but not symlinks to directories)
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
            return
        path.unlink()

    @staticmethod
    def _dirent_kind(entry: os.DirEntry[str]) -> EntryKind:
        """Classify a scandir entry, following symlinks."""
        try:
            if entry.is_dir():
                return EntryKind.DIRECTORY
        except OSError:
            logger.debug("Cannot determine type of: %s", entry.path)
        return EntryKind.FILE
