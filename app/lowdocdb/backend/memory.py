"""In-memory storage backend.

Keeps a directory tree in a dictionary keyed by absolute POSIX paths.
Useful for tests and for throwaway stores that never touch disk.
"""

import errno
import os
from collections.abc import Iterator
from pathlib import PurePath, PurePosixPath

from lowdocdb.backend.base import EntryKind, StorageBackend, StorageEntry, is_hidden

_ROOT = PurePosixPath("/")


def _os_error(cls: type[OSError], code: int, location: PurePath) -> OSError:
    return cls(code, os.strerror(code), str(location))


class MemoryBackend(StorageBackend):
    """Storage backend holding the whole tree in memory.

    Directories map to None, files map to their contents. The filesystem
    root "/" always exists.

    Attributes:
        _nodes: Mapping of absolute location to file contents or None.
    """

    def __init__(self) -> None:
        self._nodes: dict[PurePosixPath, bytes | None] = {_ROOT: None}

    def resolve_root(self, root: str | PurePath) -> PurePosixPath:
        """Anchor the root at "/"."""
        return _ROOT / PurePosixPath(root)

    def entry_kind(self, location: PurePath) -> EntryKind:
        key = PurePosixPath(location)
        if key not in self._nodes:
            return EntryKind.MISSING
        if self._nodes[key] is None:
            return EntryKind.DIRECTORY
        return EntryKind.FILE

    def make_dirs(self, location: PurePath) -> None:
        key = PurePosixPath(location)
        for folder in (*reversed(key.parents), key):
            kind = self.entry_kind(folder)
            if kind == EntryKind.FILE:
                raise _os_error(FileExistsError, errno.EEXIST, folder)
            if kind == EntryKind.MISSING:
                self._nodes[folder] = None

    def write_bytes(self, location: PurePath, data: bytes) -> None:
        key = PurePosixPath(location)
        parent_kind = self.entry_kind(key.parent)
        if parent_kind == EntryKind.MISSING:
            raise _os_error(FileNotFoundError, errno.ENOENT, key)
        if parent_kind == EntryKind.FILE:
            raise _os_error(NotADirectoryError, errno.ENOTDIR, key)
        if self.entry_kind(key) == EntryKind.DIRECTORY:
            raise _os_error(IsADirectoryError, errno.EISDIR, key)
        self._nodes[key] = bytes(data)

    def read_bytes(self, location: PurePath) -> bytes:
        key = PurePosixPath(location)
        if key not in self._nodes:
            raise _os_error(FileNotFoundError, errno.ENOENT, key)
        contents = self._nodes[key]
        if contents is None:
            raise _os_error(IsADirectoryError, errno.EISDIR, key)
        return contents

    def list_dir(self, location: PurePath) -> list[StorageEntry]:
        key = PurePosixPath(location)
        kind = self.entry_kind(key)
        if kind == EntryKind.MISSING:
            raise _os_error(FileNotFoundError, errno.ENOENT, key)
        if kind == EntryKind.FILE:
            raise _os_error(NotADirectoryError, errno.ENOTDIR, key)
        children = [
            StorageEntry(location=node, kind=self.entry_kind(node))
            for node in self._nodes
            if node != key and node.parent == key and not is_hidden(node.name)
        ]
        return sorted(children, key=lambda e: e.name)

    def walk(self, location: PurePath) -> Iterator[StorageEntry]:
        for entry in self.list_dir(location):
            yield entry
            if entry.is_directory:
                yield from self.walk(entry.location)

    def remove_file(self, location: PurePath) -> None:
        key = PurePosixPath(location)
        kind = self.entry_kind(key)
        if kind == EntryKind.MISSING:
            raise _os_error(FileNotFoundError, errno.ENOENT, key)
        if kind == EntryKind.DIRECTORY:
            raise _os_error(IsADirectoryError, errno.EISDIR, key)
        del self._nodes[key]

    def remove_tree(self, location: PurePath) -> None:
        key = PurePosixPath(location)
        if self.entry_kind(key) == EntryKind.MISSING:
            raise _os_error(FileNotFoundError, errno.ENOENT, key)
        doomed = [node for node in self._nodes if node == key or key in node.parents]
        for node in doomed:
            del self._nodes[node]
