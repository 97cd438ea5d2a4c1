"""Persistence store implementations for the app's JSON documents."""

from bathttp.backend.store.base import PersistenceStore
from bathttp.backend.store.local import LocalPersistenceStore, read_document, write_document

__all__ = ["LocalPersistenceStore", "PersistenceStore", "read_document", "write_document"]
