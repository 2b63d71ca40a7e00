"""Document store operations.

The DocumentStore maps validated relative paths onto a storage backend
anchored at a root folder. Every path argument goes through DocPath, so
no operation can reach outside the root or touch hidden entries.
"""

import logging
from pathlib import PurePath

from lowdocdb.backend.base import EntryKind, StorageBackend
from lowdocdb.backend.local import LocalBackend
from lowdocdb.core.config import StoreConfig
from lowdocdb.core.docpath import DocPath
from lowdocdb.core.errors import (
    BackendError,
    CantDeleteRootError,
    FolderDoesNotExistError,
    InvalidPathError,
    MaxDepthExceededError,
    PathMustBeADirectoryError,
    PathMustBeADocumentError,
    StoreConfigurationError,
)
from lowdocdb.store.iterator import DocumentIterator

logger = logging.getLogger(__name__)


class DocumentStore:
    """Hierarchical document store rooted at a single folder.

    Paths may be given as DocPath values or raw strings; raw strings are
    validated first. Missing folders passed to the listing operations
    produce empty results unless ``strict=True`` is given, in which case
    FolderDoesNotExistError is raised.

    Attributes:
        _root: Absolute backend location of the store root.
        _config: Store configuration.
        _backend: Storage backend performing the I/O.

    Example:
        >>> store = DocumentStore("~/docs", StoreConfig(max_depth=8))
        >>> store.add_document("notes/todo.txt", b"buy milk")
        >>> store.document("notes/todo.txt")
        b'buy milk'
    """

    def __init__(
        self,
        root: str | PurePath,
        config: StoreConfig | None = None,
        backend: StorageBackend | None = None,
    ) -> None:
        """Initialize the store, creating the root folder if needed.

        Args:
            root: Root folder of the store.
            config: Store configuration. Defaults to unlimited depth.
            backend: Storage backend. Defaults to LocalBackend.

        Raises:
            StoreConfigurationError: If the root exists and is not a
                folder, or cannot be created.
        """
        self._backend = backend if backend is not None else LocalBackend()
        self._config = config if config is not None else StoreConfig()
        self._root = self._backend.resolve_root(root)
        self._ensure_root()

    @property
    def root(self) -> PurePath:
        """Absolute backend location of the store root."""
        return self._root

    @property
    def config(self) -> StoreConfig:
        """Store configuration."""
        return self._config

    @property
    def backend(self) -> StorageBackend:
        """Storage backend used by the store."""
        return self._backend

    def add_document(self, path: str | DocPath, data: bytes) -> None:
        """Write a document, creating missing folders on the way.

        An existing document at the same path is overwritten.

        Args:
            path: Document path.
            data: Document contents.

        Raises:
            InvalidPathError: If the path is unsafe.
            MaxDepthExceededError: If the path nests deeper than max_depth.
            PathMustBeADocumentError: If a folder exists at the path.
            BackendError: If the backend fails to write.
        """
        doc_path = DocPath.validate(path)
        if doc_path.depth > self._config.max_depth:
            raise MaxDepthExceededError(doc_path.depth, self._config.max_depth)

        location = self._resolve(doc_path)
        if doc_path.is_root or self._kind(doc_path, location) == EntryKind.DIRECTORY:
            raise PathMustBeADocumentError(f"Path is a folder: {doc_path}")

        try:
            self._backend.make_dirs(location.parent)
            self._backend.write_bytes(location, data)
        except OSError as e:
            raise BackendError(f"Failed to write document {doc_path}: {e}") from e

        logger.info("Stored document %s (%d bytes)", doc_path, len(data))

    def document(self, path: str | DocPath) -> bytes | None:
        """Read a document.

        Args:
            path: Document path.

        Returns:
            The document contents, or None if nothing readable exists at
            the path (missing, a folder, or an I/O failure).

        Raises:
            InvalidPathError: If the path is unsafe.
        """
        location = self._resolve(DocPath.validate(path))
        try:
            return self._backend.read_bytes(location)
        except OSError as e:
            logger.debug("Document not readable at %s: %s", location, e)
            return None

    def document_exists(self, path: str | DocPath) -> bool:
        """Check if a document or folder exists at the path.

        Raises:
            InvalidPathError: If the path is unsafe.
            BackendError: If the backend cannot inspect the path.
        """
        doc_path = DocPath.validate(path)
        location = self._resolve(doc_path)
        return self._kind(doc_path, location) != EntryKind.MISSING

    def document_is_folder(self, path: str | DocPath) -> bool:
        """Check if the path exists and is a folder.

        Raises:
            InvalidPathError: If the path is unsafe.
            BackendError: If the backend cannot inspect the path.
        """
        doc_path = DocPath.validate(path)
        location = self._resolve(doc_path)
        return self._kind(doc_path, location) == EntryKind.DIRECTORY

    def document_paths(
        self,
        folder: str | DocPath,
        include_folders: bool = False,
        *,
        strict: bool = False,
    ) -> list[DocPath]:
        """List the immediate children of a folder.

        Hidden entries are never listed. Children whose names do not
        form a valid path are skipped.

        Args:
            folder: Folder to list.
            include_folders: If True, subfolders are listed as well.
            strict: If True, a missing folder raises instead of
                returning an empty list.

        Returns:
            Paths of the children, each composed from the folder path.

        Raises:
            InvalidPathError: If the folder path is unsafe.
            PathMustBeADirectoryError: If the path is a document.
            FolderDoesNotExistError: If strict and the folder is missing.
            BackendError: If the backend fails to list the folder.
        """
        folder_path = DocPath.validate(folder)
        location = self._resolve(folder_path)
        if not self._check_folder(folder_path, location, strict):
            return []

        try:
            entries = self._backend.list_dir(location)
        except OSError as e:
            raise BackendError(f"Failed to list folder {folder_path}: {e}") from e

        paths: list[DocPath] = []
        for entry in entries:
            if entry.is_directory and not include_folders:
                continue
            try:
                paths.append(folder_path.appending(entry.name))
            except InvalidPathError:
                logger.debug("Skipping entry with invalid name: %s", entry.location)
        return paths

    def documents(self, folder: str | DocPath, *, strict: bool = False) -> list[bytes]:
        """Read every document directly inside a folder.

        Subfolders are ignored. Documents that cannot be read are
        skipped, so a partial failure yields a partial result.

        Args:
            folder: Folder to read.
            strict: If True, a missing folder raises instead of
                returning an empty list.

        Returns:
            Contents of the readable documents, in name order.

        Raises:
            InvalidPathError: If the folder path is unsafe.
            PathMustBeADirectoryError: If the path is a document.
            FolderDoesNotExistError: If strict and the folder is missing.
            BackendError: If the backend fails to list the folder.
        """
        folder_path = DocPath.validate(folder)
        location = self._resolve(folder_path)
        if not self._check_folder(folder_path, location, strict):
            return []

        try:
            entries = self._backend.list_dir(location)
        except OSError as e:
            raise BackendError(f"Failed to list folder {folder_path}: {e}") from e

        contents: list[bytes] = []
        for entry in entries:
            if entry.is_directory:
                continue
            try:
                contents.append(self._backend.read_bytes(entry.location))
            except OSError as e:
                logger.debug("Skipping unreadable document %s: %s", entry.location, e)
        return contents

    def enumerator(
        self,
        folder: str | DocPath,
        include_folders: bool = False,
        *,
        strict: bool = False,
    ) -> DocumentIterator:
        """Lazily enumerate every path below a folder, recursively.

        The returned iterator can be consumed once. Call enumerator()
        again to start over.

        Args:
            folder: Folder to enumerate.
            include_folders: If True, subfolders are yielded as well.
            strict: If True, a missing folder raises instead of
                producing an empty iterator.

        Returns:
            DocumentIterator yielding paths relative to the store root.

        Raises:
            InvalidPathError: If the folder path is unsafe.
            PathMustBeADirectoryError: If the path is a document.
            FolderDoesNotExistError: If strict and the folder is missing.
            BackendError: If the backend cannot inspect the folder. Walk
                failures are raised as BackendError during iteration.
        """
        folder_path = DocPath.validate(folder)
        location = self._resolve(folder_path)
        if not self._check_folder(folder_path, location, strict):
            return DocumentIterator(self._root, None, include_folders)
        return DocumentIterator(self._root, self._backend.walk(location), include_folders)

    def delete_document(self, path: str | DocPath) -> None:
        """Delete a single document.

        Deleting a missing document is a no-op.

        Args:
            path: Document path.

        Raises:
            InvalidPathError: If the path is unsafe.
            CantDeleteRootError: If the path is the store root.
            PathMustBeADocumentError: If the path is a folder.
            BackendError: If the backend fails to delete.
        """
        doc_path = DocPath.validate(path)
        if doc_path.is_root:
            raise CantDeleteRootError("The store root cannot be deleted")

        location = self._resolve(doc_path)
        kind = self._kind(doc_path, location)
        if kind == EntryKind.DIRECTORY:
            raise PathMustBeADocumentError(f"Path is a folder: {doc_path}")
        if kind == EntryKind.MISSING:
            logger.debug("Nothing to delete at %s", doc_path)
            return

        try:
            self._backend.remove_file(location)
        except OSError as e:
            raise BackendError(f"Failed to delete document {doc_path}: {e}") from e

        logger.info("Deleted document %s", doc_path)

    def delete_item(self, path: str | DocPath) -> None:
        """Delete a document, or a folder together with everything in it.

        Deleting a missing item is a no-op.

        Args:
            path: Document or folder path.

        Raises:
            InvalidPathError: If the path is unsafe.
            CantDeleteRootError: If the path is the store root.
            BackendError: If the backend fails to delete.
        """
        doc_path = DocPath.validate(path)
        if doc_path.is_root:
            raise CantDeleteRootError("The store root cannot be deleted")

        location = self._resolve(doc_path)
        if self._kind(doc_path, location) == EntryKind.MISSING:
            logger.debug("Nothing to delete at %s", doc_path)
            return

        try:
            self._backend.remove_tree(location)
        except OSError as e:
            raise BackendError(f"Failed to delete {doc_path}: {e}") from e

        logger.info("Deleted %s", doc_path)

    def _resolve(self, doc_path: DocPath) -> PurePath:
        """Map a DocPath to its absolute backend location."""
        return self._root.joinpath(*doc_path.components)

    def _kind(self, doc_path: DocPath, location: PurePath) -> EntryKind:
        """Classify a location, wrapping backend failures."""
        try:
            return self._backend.entry_kind(location)
        except OSError as e:
            raise BackendError(f"Failed to inspect {doc_path}: {e}") from e

    def _check_folder(self, folder_path: DocPath, location: PurePath, strict: bool) -> bool:
        """Check that a listing target is a folder.

        Returns:
            True if the folder exists, False if it is missing and the
            caller should return an empty result.

        Raises:
            PathMustBeADirectoryError: If the location is a document.
            FolderDoesNotExistError: If strict and the folder is missing.
        """
        kind = self._kind(folder_path, location)
        if kind == EntryKind.FILE:
            raise PathMustBeADirectoryError(f"Path is not a folder: {folder_path}")
        if kind == EntryKind.MISSING:
            if strict:
                raise FolderDoesNotExistError(f"Folder does not exist: {folder_path}")
            return False
        return True

    def _ensure_root(self) -> None:
        """Create the root folder, or fail if it cannot serve as one."""
        try:
            kind = self._backend.entry_kind(self._root)
        except OSError as e:
            msg = f"Cannot inspect store root {self._root}: {e}"
            raise StoreConfigurationError(msg) from e
        if kind == EntryKind.DIRECTORY:
            return
        if kind == EntryKind.FILE:
            msg = f"Store root exists and is not a folder: {self._root}"
            raise StoreConfigurationError(msg)

        try:
            self._backend.make_dirs(self._root)
        except OSError as e:
            msg = f"Cannot create store root {self._root}: {e}"
            raise StoreConfigurationError(msg) from e
        logger.info("Created store root %s", self._root)
