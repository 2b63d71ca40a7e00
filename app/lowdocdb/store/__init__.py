"""Document store and its enumeration iterator."""

from lowdocdb.store.iterator import DocumentIterator
from lowdocdb.store.store import DocumentStore

__all__ = ["DocumentIterator", "DocumentStore"]
