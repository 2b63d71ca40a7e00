"""Validated relative document paths.

A DocPath is the only kind of path the store accepts. Validation rejects
anything that could escape the store root or address a hidden entry:

- the trimmed string starts or ends with ``..``
- any component starts with ``.`` (hidden files, ``.`` and ``..``)
- the string contains a NUL byte, which no backend can store

The store root is the empty path. It is built directly and never validated.
"""

import re
from dataclasses import dataclass

from lowdocdb.core.errors import InvalidPathError

SEPARATOR = "/"

_REDUNDANT_SEPARATORS = re.compile(r"/{2,}")


def _components(path: str) -> list[str]:
    return [part for part in path.split(SEPARATOR) if part]


def _check(path: str) -> None:
    """Raise InvalidPathError if a trimmed path is unsafe."""
    if path.startswith("..") or path.endswith("..") or "\x00" in path:
        raise InvalidPathError(path)
    if any(part.startswith(".") for part in _components(path)):
        raise InvalidPathError(path)


def _join(base: str, suffix: str) -> str:
    """Append suffix to base as a path component, collapsing separators."""
    # A separator-only base is the root
    joined = f"{base}{SEPARATOR}{suffix}" if _components(base) else suffix
    joined = _REDUNDANT_SEPARATORS.sub(SEPARATOR, joined)
    if len(joined) > 1:
        joined = joined.rstrip(SEPARATOR)
    return joined


@dataclass(frozen=True, slots=True)
class DocPath:
    """Relative path to a document or folder inside a store.

    Constructing a DocPath validates the raw string. Use DocPath.root()
    for the top of the store and appending() to derive child paths.

    Attributes:
        path: Trimmed relative path, otherwise exactly as given.

    Example:
        >>> DocPath.root().appending("notes/todo.txt")
        DocPath(path='notes/todo.txt')
    """

    path: str

    def __post_init__(self) -> None:
        """Trim and validate the raw path."""
        trimmed = self.path.strip()
        _check(trimmed)
        object.__setattr__(self, "path", trimmed)

    @classmethod
    def validate(cls, raw: "str | DocPath") -> "DocPath":
        """Return raw as a DocPath, validating it if it is a string.

        Raises:
            InvalidPathError: If the path is unsafe.
        """
        if isinstance(raw, DocPath):
            return raw
        return cls(raw)

    @classmethod
    def root(cls) -> "DocPath":
        """Return the path denoting the top of the store."""
        root = object.__new__(cls)
        object.__setattr__(root, "path", "")
        return root

    def appending(self, suffix: "str | DocPath") -> "DocPath":
        """Return a new path with suffix appended.

        A string suffix is validated on its own first, and the joined
        result is validated again.

        Args:
            suffix: Relative path to append.

        Returns:
            The composed DocPath.

        Raises:
            InvalidPathError: If the suffix or the composed path is unsafe.
        """
        suffix_path = DocPath.validate(suffix).path
        return DocPath(_join(self.path, suffix_path))

    @property
    def components(self) -> tuple[str, ...]:
        """Non-empty path segments."""
        return tuple(_components(self.path))

    @property
    def name(self) -> str:
        """Last component, or an empty string for the root."""
        parts = self.components
        return parts[-1] if parts else ""

    @property
    def depth(self) -> int:
        """Number of intermediate folders between the root and the leaf."""
        return max(len(self.components) - 1, 0)

    @property
    def is_root(self) -> bool:
        """True if this path denotes the store root."""
        return not self.components

    def __str__(self) -> str:
        return self.path
