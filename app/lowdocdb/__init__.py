"""lowdocdb - a low-level hierarchical document store.

Documents are addressed by validated relative paths and stored as files
below a root folder.
"""

from lowdocdb.core.config import MAX_DEPTH_UNLIMITED, StoreConfig
from lowdocdb.core.docpath import DocPath
from lowdocdb.core.errors import (
    BackendError,
    CantDeleteRootError,
    FolderDoesNotExistError,
    InvalidPathError,
    LowDocDBError,
    MaxDepthExceededError,
    PathMustBeADirectoryError,
    PathMustBeADocumentError,
    StoreConfigurationError,
)
from lowdocdb.store import DocumentIterator, DocumentStore

__version__ = "0.1.0"

__all__ = [
    "MAX_DEPTH_UNLIMITED",
    "BackendError",
    "CantDeleteRootError",
    "DocPath",
    "DocumentIterator",
    "DocumentStore",
    "FolderDoesNotExistError",
    "InvalidPathError",
    "LowDocDBError",
    "MaxDepthExceededError",
    "PathMustBeADirectoryError",
    "PathMustBeADocumentError",
    "StoreConfig",
    "StoreConfigurationError",
    "__version__",
]
