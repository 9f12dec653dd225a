"""Mini README: Abstract document store used by every ledger component.

Structure:
    * Document - alias for the plain dictionaries handled by stores.
    * DocumentStore - abstract interface implemented by concrete backends.

The interface mirrors what the business logic needs and nothing more:
insert/get/patch/delete by identifier, equality lookups through declared
indexes, full table scans for reports, and a transaction context that makes
each exposed operation atomic. Documents carry their identifier under
``_id`` and are always returned as copies.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, Dict, List, Optional

Document = Dict[str, Any]


class DocumentStore(ABC):
    """Base interface for document storage backends."""

    backend_name: str = "generic"

    @abstractmethod
    def insert(self, table: str, fields: Document) -> str:
        """Store a new document and return its generated identifier."""

    @abstractmethod
    def get(self, table: str, document_id: str) -> Optional[Document]:
        """Return the document or ``None`` when the identifier is unknown."""

    @abstractmethod
    def patch(self, table: str, document_id: str, fields: Document) -> None:
        """Overwrite the given fields of an existing document."""

    @abstractmethod
    def delete(self, table: str, document_id: str) -> None:
        """Remove a document, raising ``KeyError`` when it does not exist."""

    @abstractmethod
    def find(self, table: str, index: str, **values: Any) -> List[Document]:
        """Return documents whose indexed fields equal ``values``, in insertion order."""

    @abstractmethod
    def scan(self, table: str) -> List[Document]:
        """Return every document of ``table`` in insertion order."""

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """Context manager committing on success and rolling back on error."""

    def first(self, table: str, index: str, **values: Any) -> Optional[Document]:
        """Return the first document matching the index lookup, if any."""

        matches = self.find(table, index, **values)
        return matches[0] if matches else None

    def count(self, table: str) -> int:
        return len(self.scan(table))
