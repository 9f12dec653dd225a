"""Mini README: In-process document stores backing the ledger service.

Structure:
    * InMemoryDocumentStore - dict-backed store with maintained equality
      indexes and snapshot transactions.
    * JsonFileDocumentStore - in-memory store that persists every committed
      writing transaction to a JSON file.

Transactions are serialised with a re-entrant lock. The first write inside
the outermost transaction snapshots the documents and identifier sequences;
when the body or the commit hook raises, the snapshot is restored and the
indexes are rebuilt, so no partial write survives a failed operation.
Read-only transactions take no snapshot and never reach the commit hook.
Nested transactions join the outer one.
"""

from __future__ import annotations

import copy
import json
import os
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from ..logging_utils import get_logger
from .base import Document, DocumentStore
from .schema import ID_PREFIXES, TABLES

LOGGER = get_logger(__name__)

IndexKey = Tuple[Any, ...]


class InMemoryDocumentStore(DocumentStore):
    """Keep every table in ordered dictionaries guarded by one lock."""

    backend_name = "memory"

    def __init__(self, tables: Optional[Mapping[str, Mapping[str, Tuple[str, ...]]]] = None) -> None:
        self._schema = {name: dict(indexes) for name, indexes in (tables or TABLES).items()}
        self._documents: Dict[str, Dict[str, Document]] = {name: {} for name in self._schema}
        self._sequences: Dict[str, int] = {name: 0 for name in self._schema}
        self._indexes: Dict[str, Dict[str, Dict[IndexKey, Dict[str, None]]]] = {}
        self._lock = threading.RLock()
        self._depth = 0
        self._pending: Optional[Tuple[Dict[str, Dict[str, Document]], Dict[str, int]]] = None
        self._rebuild_indexes()
        LOGGER.debug("Initialised %s store with tables %s", self.backend_name, sorted(self._schema))

    # ------------------------------------------------------------------ helpers
    def _table(self, table: str) -> Dict[str, Document]:
        if table not in self._documents:
            raise KeyError(f"Unknown table '{table}'")
        return self._documents[table]

    def _index_fields(self, table: str, index: str) -> Tuple[str, ...]:
        self._table(table)
        fields = self._schema[table].get(index)
        if fields is None:
            raise KeyError(f"Index '{index}' is not declared on table '{table}'")
        return fields

    def _next_id(self, table: str) -> str:
        self._sequences[table] += 1
        prefix = ID_PREFIXES.get(table, table)
        return f"{prefix}_{self._sequences[table]:04d}"

    def _index_add(self, table: str, document: Document) -> None:
        for index, fields in self._schema[table].items():
            key = tuple(document.get(field_name) for field_name in fields)
            self._indexes[table][index].setdefault(key, {})[document["_id"]] = None

    def _index_remove(self, table: str, document: Document) -> None:
        for index, fields in self._schema[table].items():
            key = tuple(document.get(field_name) for field_name in fields)
            bucket = self._indexes[table][index].get(key)
            if bucket is None:
                continue
            bucket.pop(document["_id"], None)
            if not bucket:
                del self._indexes[table][index][key]

    def _rebuild_indexes(self) -> None:
        self._indexes = {
            table: {index: {} for index in indexes} for table, indexes in self._schema.items()
        }
        for table, documents in self._documents.items():
            for document in documents.values():
                self._index_add(table, document)

    # --------------------------------------------------------------- interface
    def insert(self, table: str, fields: Document) -> str:
        with self._lock:
            documents = self._table(table)
            if "_id" in fields:
                raise ValueError("Documents receive their identifier from the store")
            self._before_write()
            document_id = self._next_id(table)
            document = copy.deepcopy(dict(fields))
            document["_id"] = document_id
            documents[document_id] = document
            self._index_add(table, document)
            LOGGER.debug("Inserted %s into %s", document_id, table)
            return document_id

    def get(self, table: str, document_id: str) -> Optional[Document]:
        with self._lock:
            document = self._table(table).get(document_id)
            return copy.deepcopy(document) if document is not None else None

    def patch(self, table: str, document_id: str, fields: Document) -> None:
        with self._lock:
            documents = self._table(table)
            if document_id not in documents:
                raise KeyError(f"Document {document_id} not found in {table}")
            if "_id" in fields:
                raise ValueError("Document identifiers cannot be patched")
            self._before_write()
            document = documents[document_id]
            self._index_remove(table, document)
            document.update(copy.deepcopy(dict(fields)))
            self._index_add(table, document)
            LOGGER.debug("Patched %s in %s fields=%s", document_id, table, sorted(fields))

    def delete(self, table: str, document_id: str) -> None:
        with self._lock:
            documents = self._table(table)
            if document_id not in documents:
                raise KeyError(f"Document {document_id} not found in {table}")
            self._before_write()
            document = documents.pop(document_id)
            self._index_remove(table, document)
            LOGGER.debug("Deleted %s from %s", document_id, table)

    def find(self, table: str, index: str, **values: Any) -> List[Document]:
        with self._lock:
            fields = self._index_fields(table, index)
            if set(values) != set(fields):
                raise ValueError(
                    f"Index '{index}' on '{table}' expects fields {fields}, got {tuple(values)}"
                )
            key = tuple(values[field_name] for field_name in fields)
            bucket = self._indexes[table][index].get(key, {})
            documents = self._documents[table]
            return [copy.deepcopy(documents[document_id]) for document_id in bucket]

    def scan(self, table: str) -> List[Document]:
        with self._lock:
            return [copy.deepcopy(document) for document in self._table(table).values()]

    @contextmanager
    def transaction(self) -> Iterator["InMemoryDocumentStore"]:
        with self._lock:
            outermost = self._depth == 0
            self._depth += 1
            try:
                yield self
                if outermost and self._pending is not None:
                    self._on_commit()
            except BaseException:
                if outermost and self._pending is not None:
                    self._restore(self._pending)
                    LOGGER.info("Transaction rolled back; store restored to snapshot")
                raise
            finally:
                self._depth -= 1
                if outermost:
                    self._pending = None

    # ------------------------------------------------------------ transactions
    def _before_write(self) -> None:
        """Snapshot lazily on the first write of a transaction."""

        if self._depth and self._pending is None:
            self._pending = self._snapshot()

    def _snapshot(self) -> Tuple[Dict[str, Dict[str, Document]], Dict[str, int]]:
        return copy.deepcopy(self._documents), dict(self._sequences)

    def _restore(self, snapshot: Any) -> None:
        documents, sequences = snapshot
        self._documents = documents
        self._sequences = sequences
        self._rebuild_indexes()

    def _on_commit(self) -> None:
        """Hook invoked before an outermost transaction that wrote is released."""


def _encode_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return {"$datetime": value.isoformat()}
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serialisable")


def _decode_object(payload: Dict[str, Any]) -> Any:
    if set(payload) == {"$datetime"}:
        return datetime.fromisoformat(payload["$datetime"])
    return payload


class JsonFileDocumentStore(InMemoryDocumentStore):
    """Persist the in-memory tables to a JSON snapshot on each writing commit."""

    backend_name = "json-file"

    def __init__(
        self,
        path: Path,
        tables: Optional[Mapping[str, Mapping[str, Tuple[str, ...]]]] = None,
    ) -> None:
        self.path = Path(path)
        super().__init__(tables)
        if self.path.exists():
            self._load()

    def _load(self) -> None:
        payload = json.loads(self.path.read_text(encoding="utf-8"), object_hook=_decode_object)
        for table, documents in payload.get("tables", {}).items():
            if table not in self._documents:
                LOGGER.warning("Ignoring unknown table '%s' in %s", table, self.path)
                continue
            self._documents[table] = {document["_id"]: document for document in documents}
        for table, sequence in payload.get("sequences", {}).items():
            if table in self._sequences:
                self._sequences[table] = int(sequence)
        self._rebuild_indexes()
        LOGGER.info(
            "Loaded %s documents from %s",
            sum(len(documents) for documents in self._documents.values()),
            self.path,
        )

    def _on_commit(self) -> None:
        payload = {
            "sequences": self._sequences,
            "tables": {table: list(documents.values()) for table, documents in self._documents.items()},
        }
        temporary = self.path.with_suffix(self.path.suffix + ".tmp")
        temporary.write_text(
            json.dumps(payload, default=_encode_value, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        os.replace(temporary, self.path)
        LOGGER.debug("Persisted store snapshot to %s", self.path)
