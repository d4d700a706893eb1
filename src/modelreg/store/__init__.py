"""
Document store clients.

The registry depends only on the :class:`DocumentStore` protocol; pick an
implementation with :func:`create_store`.
"""

from modelreg.store.base import DocumentStore, Refresh
from modelreg.store.factory import create_store
from modelreg.store.http import HttpDocumentStore
from modelreg.store.memory import InMemoryDocumentStore

__all__ = [
    "DocumentStore",
    "Refresh",
    "HttpDocumentStore",
    "InMemoryDocumentStore",
    "create_store",
]
