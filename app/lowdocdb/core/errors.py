"""Exceptions raised by the document store.

All errors a caller can act on derive from LowDocDBError. Root
misconfiguration at construction time is reported separately through
StoreConfigurationError, since no store exists to raise typed errors from.
"""


class LowDocDBError(Exception):
    """Base exception for document store errors."""


class InvalidPathError(LowDocDBError):
    """Raised when a path fails safety validation.

    Attributes:
        path: The trimmed path that was rejected.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Invalid document path: {path!r}")


class MaxDepthExceededError(LowDocDBError):
    """Raised when a write would nest deeper than the configured maximum.

    Attributes:
        depth: Number of intermediate folders in the rejected path.
        max_depth: The configured limit.
    """

    def __init__(self, depth: int, max_depth: int) -> None:
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(f"Path depth {depth} exceeds maximum depth {max_depth}")


class PathMustBeADirectoryError(LowDocDBError):
    """Raised when a folder operation targets something that is not a folder."""


class PathMustBeADocumentError(LowDocDBError):
    """Raised when a document operation targets a folder."""


class CantDeleteRootError(LowDocDBError):
    """Raised when a delete operation targets the store root."""


class FolderDoesNotExistError(LowDocDBError):
    """Raised by strict listings when the requested folder is missing."""


class BackendError(LowDocDBError):
    """Raised when the storage backend fails an I/O operation.

    The underlying OSError is available as ``__cause__``.
    """


class StoreConfigurationError(RuntimeError):
    """Raised when the store root cannot be used as a directory."""
