"""Unit tests for DocumentStore.

Most tests run against both the local and the in-memory backend through
the parametrized ``store`` fixture.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from lowdocdb.backend import LocalBackend, MemoryBackend
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
from lowdocdb.store import DocumentStore


def _paths(paths: list[DocPath]) -> set[str]:
    return {p.path for p in paths}


class TestConstruction:
    """Tests for store creation and root handling."""

    def test_creates_missing_root(self, tmp_path: Path) -> None:
        """A missing root folder is created with its parents."""
        root = tmp_path / "nested" / "doc.db"

        store = DocumentStore(root)

        assert root.is_dir()
        assert store.root == root
        assert store.config == StoreConfig()
        assert isinstance(store.backend, LocalBackend)

    def test_accepts_existing_root(self, tmp_path: Path) -> None:
        """An existing folder is used as is."""
        (tmp_path / "keep.txt").write_text("k")

        store = DocumentStore(tmp_path)

        assert store.document("keep.txt") == b"k"

    def test_root_is_a_file(self, tmp_path: Path) -> None:
        """A root that exists as a file cannot be used."""
        root = tmp_path / "doc.db"
        root.write_text("not a folder")

        with pytest.raises(StoreConfigurationError, match="not a folder"):
            DocumentStore(root)

    def test_root_is_a_file_in_memory(self) -> None:
        """The same rule applies to the in-memory backend."""
        backend = MemoryBackend()
        backend.write_bytes(backend.resolve_root("doc.db"), b"x")

        with pytest.raises(StoreConfigurationError):
            DocumentStore("doc.db", backend=backend)

    def test_root_cannot_be_inspected(self) -> None:
        """Failure to inspect the root is a configuration error."""
        backend = MemoryBackend()
        with patch.object(backend, "entry_kind", side_effect=PermissionError("denied")):
            with pytest.raises(StoreConfigurationError, match="denied"):
                DocumentStore("doc.db", backend=backend)

    def test_root_cannot_be_created(self) -> None:
        """Failure to create the root is a configuration error."""
        backend = MemoryBackend()
        with patch.object(backend, "make_dirs", side_effect=PermissionError("denied")):
            with pytest.raises(StoreConfigurationError, match="denied"):
                DocumentStore("doc.db", backend=backend)


class TestAddDocument:
    """Tests for add_document and document."""

    def test_round_trip(self, store: DocumentStore) -> None:
        """Stored bytes are read back exactly."""
        store.add_document("doc1.txt", b"daniel illescas")
        store.add_document(DocPath("doc2.txt"), b"\x00\xffbinary")

        assert store.document("doc1.txt") == b"daniel illescas"
        assert store.document(DocPath("doc2.txt")) == b"\x00\xffbinary"

    def test_creates_intermediate_folders(self, store: DocumentStore) -> None:
        """Missing folders are created on the way to the document."""
        store.add_document("myFolder1/other0/other1/doc.txt", b"lol")

        assert store.document_is_folder("myFolder1")
        assert store.document_is_folder("myFolder1/other0/other1")
        assert store.document("myFolder1/other0/other1/doc.txt") == b"lol"

    def test_leading_separator_is_relative(self, store: DocumentStore) -> None:
        """A leading separator still addresses a path inside the store."""
        store.add_document("/myFolder1/doc.txt", b"x")

        assert store.document("myFolder1/doc.txt") == b"x"

    def test_overwrites_existing(self, store: DocumentStore) -> None:
        """Writing twice keeps the last contents."""
        store.add_document("doc.txt", b"first")
        store.add_document("doc.txt", b"second")

        assert store.document("doc.txt") == b"second"

    def test_empty_document(self, store: DocumentStore) -> None:
        """Empty documents are stored and read back as empty bytes."""
        store.add_document("empty.txt", b"")

        assert store.document("empty.txt") == b""

    def test_folder_target_rejected(self, store: DocumentStore) -> None:
        """A document cannot replace a folder."""
        store.add_document("folder/doc.txt", b"x")

        with pytest.raises(PathMustBeADocumentError):
            store.add_document("folder", b"y")

    def test_root_target_rejected(self, store: DocumentStore) -> None:
        """The root cannot be written as a document."""
        with pytest.raises(PathMustBeADocumentError):
            store.add_document(DocPath.root(), b"x")

    def test_invalid_path(self, store: DocumentStore) -> None:
        """Unsafe raw paths are rejected before any I/O."""
        with pytest.raises(InvalidPathError):
            store.add_document("../escape.txt", b"x")
        with pytest.raises(InvalidPathError):
            store.add_document("folder/.hidden", b"x")
        with pytest.raises(InvalidPathError):
            store.add_document("a\x00b", b"x")
        with pytest.raises(InvalidPathError):
            store.document("a\x00b")

    def test_backend_failure(self, store: DocumentStore) -> None:
        """Write failures surface as BackendError with the cause attached."""
        error = OSError(28, "No space left on device")
        with patch.object(store.backend, "write_bytes", side_effect=error):
            with pytest.raises(BackendError, match="No space") as exc_info:
                store.add_document("doc.txt", b"x")

        assert exc_info.value.__cause__ is error


class TestMaxDepth:
    """Tests for the max_depth limit."""

    @pytest.mark.parametrize("backend_cls", [LocalBackend, MemoryBackend])
    def test_depth_at_limit_succeeds(
        self, backend_cls: type[LocalBackend] | type[MemoryBackend], tmp_path: Path
    ) -> None:
        """A document exactly at max_depth is accepted."""
        store = DocumentStore(tmp_path / "db", StoreConfig(max_depth=2), backend_cls())

        store.add_document("a/b/doc.txt", b"x")

        assert store.document("a/b/doc.txt") == b"x"

    @pytest.mark.parametrize("backend_cls", [LocalBackend, MemoryBackend])
    def test_depth_above_limit_fails(
        self, backend_cls: type[LocalBackend] | type[MemoryBackend], tmp_path: Path
    ) -> None:
        """A document nested deeper than max_depth is rejected."""
        store = DocumentStore(tmp_path / "db", StoreConfig(max_depth=2), backend_cls())

        with pytest.raises(MaxDepthExceededError) as exc_info:
            store.add_document("a/b/c/doc.txt", b"x")

        assert exc_info.value.depth == 3
        assert exc_info.value.max_depth == 2
        assert not store.document_exists("a")

    def test_zero_depth(self, tmp_path: Path) -> None:
        """With max_depth 0 only top-level documents are allowed."""
        store = DocumentStore(tmp_path / "db", StoreConfig(max_depth=0))

        store.add_document("doc.txt", b"x")
        with pytest.raises(MaxDepthExceededError):
            store.add_document("folder/doc.txt", b"x")

    def test_unlimited_by_default(self, store: DocumentStore) -> None:
        """The default configuration accepts deep nesting."""
        deep = "/".join(f"level{i}" for i in range(30)) + "/doc.txt"

        store.add_document(deep, b"deep")

        assert store.document(deep) == b"deep"


class TestQueries:
    """Tests for document, document_exists and document_is_folder."""

    def test_document_missing(self, store: DocumentStore) -> None:
        """A missing document reads as None."""
        assert store.document("absent.txt") is None

    def test_document_on_folder(self, store: DocumentStore) -> None:
        """A folder reads as None."""
        store.add_document("folder/doc.txt", b"x")

        assert store.document("folder") is None
        assert store.document(DocPath.root()) is None

    def test_document_read_failure(self, store: DocumentStore) -> None:
        """I/O failures read as None instead of raising."""
        store.add_document("doc.txt", b"x")
        with patch.object(store.backend, "read_bytes", side_effect=PermissionError("denied")):
            assert store.document("doc.txt") is None

    def test_exists(self, store: DocumentStore) -> None:
        """document_exists is true for documents and folders."""
        store.add_document("folder/doc.txt", b"x")

        assert store.document_exists("folder/doc.txt")
        assert store.document_exists("folder")
        assert store.document_exists(DocPath.root())
        assert not store.document_exists("folder/absent.txt")

    @pytest.mark.parametrize(
        "call",
        [
            lambda s: s.document_exists("a.txt"),
            lambda s: s.document_is_folder("a.txt"),
            lambda s: s.add_document("a.txt", b"x"),
            lambda s: s.delete_document("a.txt"),
            lambda s: s.delete_item("a.txt"),
            lambda s: s.document_paths("folder"),
            lambda s: s.documents("folder"),
            lambda s: s.enumerator("folder"),
        ],
    )
    def test_inspect_failure(self, store: DocumentStore, call) -> None:
        """Failures classifying a location surface as BackendError."""
        error = PermissionError(13, "denied")
        with patch.object(store.backend, "entry_kind", side_effect=error):
            with pytest.raises(BackendError, match="denied") as exc_info:
                call(store)

        assert exc_info.value.__cause__ is error

    def test_inspect_failure_on_disk(self, local_store: DocumentStore) -> None:
        """Permission errors from the filesystem are wrapped too."""
        with patch("pathlib.Path.is_dir", side_effect=PermissionError(13, "denied")):
            with pytest.raises(BackendError):
                local_store.document_exists("a.txt")

    def test_is_folder(self, store: DocumentStore) -> None:
        """document_is_folder is true only for existing folders."""
        store.add_document("someNewFolder/otherFile", b"test")
        store.add_document("someNewFolder/other/deeper.txt", b"test")

        assert store.document_is_folder(DocPath.root())
        assert store.document_is_folder("someNewFolder")
        assert store.document_is_folder("someNewFolder/other")
        assert not store.document_is_folder("someNewFolder/otherFile")
        assert not store.document_is_folder("absent")


class TestDocumentPaths:
    """Tests for document_paths."""

    def test_including_folders(self, sample_tree: DocumentStore) -> None:
        """Files and subfolders are listed, composed with the folder path."""
        paths = sample_tree.document_paths("f", include_folders=True)

        assert _paths(paths) == {"f/x.txt", "f/y.txt", "f/g"}

    def test_excluding_folders(self, sample_tree: DocumentStore) -> None:
        """Subfolders are dropped when include_folders is false."""
        paths = sample_tree.document_paths("f", include_folders=False)

        assert _paths(paths) == {"f/x.txt", "f/y.txt"}
        assert not any(sample_tree.document_is_folder(p) for p in paths)

    def test_root_listing(self, sample_tree: DocumentStore) -> None:
        """Listing the root yields top-level names."""
        sample_tree.add_document("top.txt", b"t")

        assert _paths(sample_tree.document_paths(DocPath.root(), include_folders=True)) == {
            "f",
            "top.txt",
        }
        assert _paths(sample_tree.document_paths("")) == {"top.txt"}

    def test_separator_root_matches_enumerator(self, sample_tree: DocumentStore) -> None:
        """Listing "/" yields the same path form as enumerating it."""
        sample_tree.add_document("top.txt", b"t")

        assert _paths(sample_tree.document_paths("/")) == {"top.txt"}
        assert "top.txt" in _paths(list(sample_tree.enumerator("/")))

    def test_not_recursive(self, sample_tree: DocumentStore) -> None:
        """Nested documents are not listed."""
        assert "f/g/z.txt" not in _paths(sample_tree.document_paths("f", include_folders=True))

    def test_hidden_entries_skipped(self, sample_tree: DocumentStore) -> None:
        """Hidden files and folders placed directly on the backend are not listed."""
        backend = sample_tree.backend
        backend.write_bytes(sample_tree.root / "f" / ".secret", b"s")
        backend.make_dirs(sample_tree.root / "f" / ".cache")

        paths = sample_tree.document_paths("f", include_folders=True)

        assert _paths(paths) == {"f/x.txt", "f/y.txt", "f/g"}

    def test_missing_folder_is_empty(self, store: DocumentStore) -> None:
        """A missing folder lists as empty."""
        assert store.document_paths("absent") == []

    def test_missing_folder_strict(self, store: DocumentStore) -> None:
        """strict=True turns a missing folder into an error."""
        with pytest.raises(FolderDoesNotExistError):
            store.document_paths("absent", strict=True)

    def test_file_target(self, sample_tree: DocumentStore) -> None:
        """Listing a document raises PathMustBeADirectoryError."""
        with pytest.raises(PathMustBeADirectoryError):
            sample_tree.document_paths("f/x.txt")

    def test_invalid_child_name_skipped(self, sample_tree: DocumentStore) -> None:
        """A child whose name fails validation is skipped, not fatal."""
        sample_tree.backend.write_bytes(sample_tree.root / "f" / "bad..", b"b")

        paths = sample_tree.document_paths("f")

        assert _paths(paths) == {"f/x.txt", "f/y.txt"}


class TestDocuments:
    """Tests for documents."""

    def test_reads_direct_children(self, sample_tree: DocumentStore) -> None:
        """Contents of direct documents are returned; subfolders are ignored."""
        assert sorted(sample_tree.documents("f"), key=len) == [b"x", b"yy"]

    def test_root(self, store: DocumentStore) -> None:
        """Documents at the root are read."""
        for name, data in (("doc1.txt", b"lol"), ("doc2.txt", b"something here")):
            store.add_document(name, data)

        assert sorted(store.documents(DocPath.root()), key=len) == [b"lol", b"something here"]

    def test_skips_unreadable(self, sample_tree: DocumentStore) -> None:
        """An unreadable document is skipped and the rest are returned."""
        backend = sample_tree.backend
        original = backend.read_bytes

        def flaky_read(location: object) -> bytes:
            if str(location).endswith("x.txt"):
                raise PermissionError("denied")
            return original(location)  # type: ignore[arg-type]

        with patch.object(backend, "read_bytes", side_effect=flaky_read):
            assert sample_tree.documents("f") == [b"yy"]

    def test_missing_folder(self, store: DocumentStore) -> None:
        """A missing folder reads as empty, or raises when strict."""
        assert store.documents("absent") == []
        with pytest.raises(FolderDoesNotExistError):
            store.documents("absent", strict=True)

    def test_file_target(self, sample_tree: DocumentStore) -> None:
        """Reading a document as a folder raises PathMustBeADirectoryError."""
        with pytest.raises(PathMustBeADirectoryError):
            sample_tree.documents("f/x.txt")


class TestDeleteDocument:
    """Tests for delete_document."""

    def test_deletes_file(self, store: DocumentStore) -> None:
        """A document is removed."""
        store.add_document("someNewFolder/otherFile", b"test")

        store.delete_document("someNewFolder/otherFile")

        assert not store.document_exists("someNewFolder/otherFile")
        assert store.document_is_folder("someNewFolder")

    def test_folder_rejected(self, store: DocumentStore) -> None:
        """Folders cannot be deleted as documents."""
        store.add_document("someNewFolder/other/doc.txt", b"x")

        with pytest.raises(PathMustBeADocumentError):
            store.delete_document("someNewFolder")
        with pytest.raises(PathMustBeADocumentError):
            store.delete_document("someNewFolder/other")

        assert store.document("someNewFolder/other/doc.txt") == b"x"

    def test_missing_is_noop(self, store: DocumentStore) -> None:
        """Deleting a missing document twice succeeds both times."""
        store.delete_document("absent.txt")
        store.delete_document("absent.txt")

    @pytest.mark.parametrize("root", [DocPath.root(), "", "/", "  "])
    def test_root_rejected(self, store: DocumentStore, root: str | DocPath) -> None:
        """The root cannot be deleted."""
        with pytest.raises(CantDeleteRootError):
            store.delete_document(root)

    def test_backend_failure(self, store: DocumentStore) -> None:
        """Removal failures surface as BackendError."""
        store.add_document("doc.txt", b"x")
        with patch.object(store.backend, "remove_file", side_effect=PermissionError("denied")):
            with pytest.raises(BackendError):
                store.delete_document("doc.txt")


class TestDeleteItem:
    """Tests for delete_item."""

    def test_deletes_folder_recursively(self, store: DocumentStore) -> None:
        """A folder is removed with everything below it."""
        store.add_document("someNewFolder/other/deeper/doc.txt", b"x")

        store.delete_item("someNewFolder/other")

        assert not store.document_exists("someNewFolder/other")
        assert not store.document_exists("someNewFolder/other/deeper/doc.txt")
        assert store.document_is_folder("someNewFolder")

    def test_deletes_file(self, store: DocumentStore) -> None:
        """A document is removed too."""
        store.add_document("someNewFolder/otherFile", b"test")

        store.delete_item("someNewFolder/otherFile")

        assert not store.document_exists("someNewFolder/otherFile")

    def test_missing_is_noop(self, store: DocumentStore) -> None:
        """Deleting a missing item succeeds."""
        store.delete_item("absent")

    @pytest.mark.parametrize("root", [DocPath.root(), "", "/"])
    def test_root_rejected(self, store: DocumentStore, root: str | DocPath) -> None:
        """The root cannot be deleted."""
        store.add_document("doc.txt", b"x")

        with pytest.raises(CantDeleteRootError):
            store.delete_item(root)

        assert store.document("doc.txt") == b"x"


class TestScenarios:
    """End-to-end scenarios across several operations."""

    def test_nested_document_lifecycle(self, tmp_path: Path) -> None:
        """Create, inspect and remove a nested document tree."""
        store = DocumentStore(tmp_path / "db", StoreConfig(max_depth=8))

        store.add_document("a/b/c/file.txt", b"x")

        assert store.document("a/b/c/file.txt") == b"x"
        assert store.document_is_folder("a/b")
        with pytest.raises(PathMustBeADocumentError):
            store.delete_document("a/b")

        store.delete_item("a/b")

        assert not store.document_exists("a/b/c/file.txt")
        assert store.document_is_folder("a")

    def test_paths_point_at_readable_documents(self, sample_tree: DocumentStore) -> None:
        """Every listed document path can be read back."""
        contents = {p.path: sample_tree.document(p) for p in sample_tree.document_paths("f")}

        assert contents == {"f/x.txt": b"x", "f/y.txt": b"yy"}


class TestEnumerator:
    """Tests for enumerator."""

    def test_documents_only(self, sample_tree: DocumentStore) -> None:
        """Nested documents are yielded at every depth; folders are not."""
        paths = list(sample_tree.enumerator("f"))

        assert _paths(paths) == {"f/x.txt", "f/y.txt", "f/g/z.txt"}

    def test_including_folders(self, sample_tree: DocumentStore) -> None:
        """Folders below the start folder are yielded too."""
        paths = list(sample_tree.enumerator("f", include_folders=True))

        assert _paths(paths) == {"f/x.txt", "f/y.txt", "f/g", "f/g/z.txt"}

    def test_from_root(self, sample_tree: DocumentStore) -> None:
        """Enumerating the root yields paths relative to the store root."""
        sample_tree.add_document("top.txt", b"t")

        paths = list(sample_tree.enumerator(DocPath.root(), include_folders=True))

        assert _paths(paths) == {"top.txt", "f", "f/x.txt", "f/y.txt", "f/g", "f/g/z.txt"}
        assert all(not p.path.startswith("/") for p in paths)

    def test_deep_nesting_yields_no_folders(self, store: DocumentStore) -> None:
        """Chains of folders are skipped until a document is reached."""
        store.add_document("a/b/c/d/e/doc.txt", b"x")
        store.backend.make_dirs(store.root / "a" / "b" / "empty" / "deeper")

        paths = list(store.enumerator(DocPath.root()))

        assert _paths(paths) == {"a/b/c/d/e/doc.txt"}

    def test_hidden_entries_skipped(self, sample_tree: DocumentStore) -> None:
        """Hidden folders are not entered and hidden files are not yielded."""
        backend = sample_tree.backend
        backend.make_dirs(sample_tree.root / "f" / ".cache")
        backend.write_bytes(sample_tree.root / "f" / ".cache" / "blob", b"b")
        backend.write_bytes(sample_tree.root / "f" / ".secret", b"s")

        paths = list(sample_tree.enumerator("f", include_folders=True))

        assert _paths(paths) == {"f/x.txt", "f/y.txt", "f/g", "f/g/z.txt"}

    def test_is_one_shot(self, sample_tree: DocumentStore) -> None:
        """A consumed enumerator stays empty; a new one starts over."""
        enumerator = sample_tree.enumerator("f")

        assert len(list(enumerator)) == 3
        assert list(enumerator) == []
        assert len(list(sample_tree.enumerator("f"))) == 3

    def test_is_lazy(self, sample_tree: DocumentStore) -> None:
        """Paths are produced one at a time."""
        enumerator = sample_tree.enumerator("f")

        first = next(enumerator)

        assert first.path in {"f/x.txt", "f/y.txt", "f/g/z.txt"}

    def test_missing_folder(self, store: DocumentStore) -> None:
        """A missing folder enumerates as empty, or raises when strict."""
        assert list(store.enumerator("absent")) == []
        with pytest.raises(FolderDoesNotExistError):
            store.enumerator("absent", strict=True)

    def test_file_target(self, sample_tree: DocumentStore) -> None:
        """Enumerating a document raises PathMustBeADirectoryError."""
        with pytest.raises(PathMustBeADirectoryError):
            sample_tree.enumerator("f/x.txt")

    def test_invalid_start(self, store: DocumentStore) -> None:
        """An unsafe start folder is rejected."""
        with pytest.raises(InvalidPathError):
            store.enumerator("../etc/passwd")

    def test_walk_failure(self, local_store: DocumentStore) -> None:
        """A folder that cannot be scanned surfaces as BackendError."""
        local_store.add_document("f/x.txt", b"x")
        local_store.add_document("f/g/z.txt", b"z")
        blocked = local_store.root / "f" / "g"
        real_scandir = os.scandir

        def scandir(path: object) -> object:
            if Path(str(path)) == blocked:
                raise PermissionError(13, "denied", str(path))
            return real_scandir(path)  # type: ignore[arg-type]

        with patch("lowdocdb.backend.local.os.scandir", side_effect=scandir):
            with pytest.raises(BackendError, match="denied"):
                list(local_store.enumerator(DocPath.root()))
