"""Abstract base class for storage backends.

This module defines the StorageBackend interface the document store is
built on, along with the entry types its listing primitives return.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath


class EntryKind(str, Enum):
    """Type of entry at a backend location.

    Attributes:
        FILE: Regular file (document).
        DIRECTORY: Directory (folder).
        MISSING: Nothing exists at the location.
    """

    FILE = "file"
    DIRECTORY = "directory"
    MISSING = "missing"


@dataclass(frozen=True, slots=True)
class StorageEntry:
    """An entry produced by a directory listing or walk.

    Attributes:
        location: Absolute backend location of the entry.
        kind: Whether the entry is a file or a directory.
    """

    location: PurePath
    kind: EntryKind

    @property
    def name(self) -> str:
        """Base name of the entry."""
        return self.location.name

    @property
    def is_directory(self) -> bool:
        """Check if the entry is a directory."""
        return self.kind == EntryKind.DIRECTORY


def is_hidden(name: str) -> bool:
    """Check if an entry name is hidden and must be skipped by scans."""
    return name.startswith(".")


class StorageBackend(ABC):
    """Abstract base class for hierarchical storage backends.

    Backends expose file and directory primitives on absolute locations.
    Failures are raised as OSError subclasses (FileNotFoundError,
    IsADirectoryError, NotADirectoryError, ...) so the store can handle
    every backend the same way.

    Example:
        >>> backend = LocalBackend()
        >>> root = backend.resolve_root("~/docs")
        >>> backend.make_dirs(root / "notes")
        >>> backend.write_bytes(root / "notes" / "a.txt", b"hello")
    """

    @abstractmethod
    def resolve_root(self, root: str | PurePath) -> PurePath:
        """Turn a user supplied root into an absolute backend location."""

    @abstractmethod
    def entry_kind(self, location: PurePath) -> EntryKind:
        """Return what exists at location."""

    @abstractmethod
    def make_dirs(self, location: PurePath) -> None:
        """Create location and any missing parents.

        Raises:
            FileExistsError: If location or a parent exists as a file.
        """

    @abstractmethod
    def write_bytes(self, location: PurePath, data: bytes) -> None:
        """Create or overwrite the file at location.

        Raises:
            FileNotFoundError: If the parent directory does not exist.
            IsADirectoryError: If location is a directory.
        """

    @abstractmethod
    def read_bytes(self, location: PurePath) -> bytes:
        """Return the contents of the file at location.

        Raises:
            FileNotFoundError: If nothing exists at location.
            IsADirectoryError: If location is a directory.
        """

    @abstractmethod
    def list_dir(self, location: PurePath) -> list[StorageEntry]:
        """List immediate children of a directory, skipping hidden entries.

        Entries are sorted by name.

        Raises:
            FileNotFoundError: If the directory does not exist.
            NotADirectoryError: If location is a file.
        """

    @abstractmethod
    def walk(self, location: PurePath) -> Iterator[StorageEntry]:
        """Yield every entry below a directory in pre-order.

        A directory is yielded before its contents. Hidden entries are
        neither yielded nor descended into. Siblings are visited in name
        order.

        Raises:
            OSError: If a directory cannot be scanned. The error is raised
                lazily, when the walk reaches that directory.
        """

    @abstractmethod
    def remove_file(self, location: PurePath) -> None:
        """Remove a single file.

        Raises:
            FileNotFoundError: If nothing exists at location.
            IsADirectoryError: If location is a directory.
        """

    @abstractmethod
    def remove_tree(self, location: PurePath) -> None:
        """Remove a file, or a directory together with all its contents.

        Raises:
            FileNotFoundError: If nothing exists at location.
        """
