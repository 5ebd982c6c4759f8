"""Document store.

Keeps the uploaded documents in insertion order and mirrors every mutation
to the storage port immediately. The persisted value is the JSON array under
``proposalFiles``; the in-memory collection is only replaced after the write
succeeded, so a rejected write leaves both untouched.
"""

import json
import threading
import time
from datetime import date, datetime
from typing import Callable

from pydantic import ValidationError

from shared.exceptions.errors import MissingCategoryError, MissingFileError
from shared.helper.HelperConfig import HelperConfig
from shared.models.document import DocumentCategory, DocumentRecord
from shared.storage.StorageInterface import StorageInterface

STORAGE_KEY = "proposalFiles"

RemovalListener = Callable[[set[int]], None]


class DocumentStore:
    """Durable, insertion-ordered collection of DocumentRecords."""

    def __init__(self, helper_config: HelperConfig, storage: StorageInterface) -> None:
        self.logging = helper_config.get_logger()
        self._storage = storage
        self._tz = helper_config.get_timezone()
        self._records: list[DocumentRecord] = []
        self._last_id = 0
        self._removal_listeners: list[RemovalListener] = []
        # mutations may run on worker threads
        self._lock = threading.Lock()

    ##########################################
    ############### LISTENERS ################
    ##########################################

    def add_removal_listener(self, listener: RemovalListener) -> None:
        """Register a callback invoked with the remaining ids after any removal."""
        self._removal_listeners.append(listener)

    def _notify_removal(self) -> None:
        current_ids = self.get_ids()
        for listener in self._removal_listeners:
            listener(current_ids)

    ##########################################
    ################ GETTER ##################
    ##########################################

    def list_documents(self) -> list[DocumentRecord]:
        """Returns all records in insertion order."""
        return list(self._records)

    def get(self, document_id: int) -> DocumentRecord | None:
        for record in self._records:
            if record.id == document_id:
                return record
        return None

    def get_ids(self) -> set[int]:
        return {record.id for record in self._records}

    def __len__(self) -> int:
        return len(self._records)

    ##########################################
    ################# CORE ###################
    ##########################################

    def load(self) -> None:
        """Rebuild the collection from storage. Absent or corrupt data yields an empty collection."""
        raw = self._storage.get(STORAGE_KEY)
        records: list[DocumentRecord] = []
        if raw is not None:
            try:
                items = json.loads(raw)
            except json.JSONDecodeError as e:
                self.logging.warning("Stored document collection is not valid JSON, starting empty: %s", e)
                items = []
            if not isinstance(items, list):
                self.logging.warning("Stored document collection is not a list, starting empty.")
                items = []
            seen: set[int] = set()
            for index, item in enumerate(items):
                try:
                    record = DocumentRecord.model_validate(item)
                except ValidationError as e:
                    self.logging.warning("Skipping malformed stored document at index %d: %s", index, e.errors()[:1])
                    continue
                if record.id in seen:
                    self.logging.warning("Skipping stored document with duplicate id %d.", record.id)
                    continue
                seen.add(record.id)
                records.append(record)

        self._records = records
        self._last_id = max((r.id for r in records), default=0)
        self.logging.info("Loaded %d stored document(s).", len(records))

    def add(self, name: str, category: DocumentCategory, content: str) -> DocumentRecord:
        """Create, append and persist a new record.

        Args:
            name (str): The original file name.
            category (DocumentCategory): The role of the document.
            content (str): The codec-encoded file content.

        Returns:
            DocumentRecord: The stored record.

        Raises:
            MissingFileError: If name or content is empty.
            MissingCategoryError: If category is not a DocumentCategory.
            StorageQuotaExceededError: If the write exceeds the storage quota. Nothing is recorded.
        """
        if not name or not name.strip():
            raise MissingFileError("Please select a file.")
        if not content:
            raise MissingFileError(f"File '{name}' is empty.")
        if not isinstance(category, DocumentCategory):
            raise MissingCategoryError("Please select a document type.")

        with self._lock:
            record = DocumentRecord(
                id=self._next_id(),
                name=name,
                category=category,
                uploaded_at=self._today(),
                content=content,
            )
            updated = [*self._records, record]
            self._persist(updated)
            self._records = updated
            self._last_id = record.id
        self.logging.info("Stored document '%s' (%s) with id %d.", record.name, record.category.value, record.id)
        return record

    def remove(self, document_id: int) -> None:
        """Remove the record with this id. Unknown ids are ignored."""
        with self._lock:
            updated = [r for r in self._records if r.id != document_id]
            if len(updated) == len(self._records):
                return
            self._persist(updated)
            self._records = updated
        self.logging.info("Removed document %d.", document_id)
        self._notify_removal()

    def clear(self) -> None:
        """Remove every record and persist the empty collection."""
        with self._lock:
            self._persist([])
            count = len(self._records)
            self._records = []
        self.logging.info("Cleared %d document(s).", count)
        self._notify_removal()

    ##########################################
    ############### HELPERS ##################
    ##########################################

    def _persist(self, records: list[DocumentRecord]) -> None:
        payload = json.dumps([r.model_dump(mode="json", by_alias=True) for r in records])
        self._storage.set(STORAGE_KEY, payload)

    def _next_id(self) -> int:
        # creation time in ms, bumped past the last issued id on collisions or clock skew
        return max(int(time.time() * 1000), self._last_id + 1)

    def _today(self) -> date:
        return datetime.now(self._tz).date()
