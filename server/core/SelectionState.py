from typing import Iterable

from shared.models.document import DocumentRecord


class SelectionState:
    """Ids of the documents chosen as inputs for the next generation. Never persisted."""

    def __init__(self) -> None:
        # dict keeps toggle order
        self._selected: dict[int, None] = {}

    def toggle(self, document_id: int) -> bool:
        """Flip membership of the id.

        Returns:
            bool: True if the id is selected afterwards.
        """
        if document_id in self._selected:
            del self._selected[document_id]
            return False
        self._selected[document_id] = None
        return True

    def is_selected(self, document_id: int) -> bool:
        return document_id in self._selected

    def reconcile(self, current_ids: set[int]) -> None:
        """Drop every selected id that no longer references a stored document."""
        self._selected = {i: None for i in list(self._selected) if i in current_ids}

    def clear(self) -> None:
        self._selected = {}

    def get_selected_ids(self) -> list[int]:
        return list(self._selected)

    def is_empty(self) -> bool:
        return not self._selected

    def filter_selected(self, records: Iterable[DocumentRecord]) -> list[DocumentRecord]:
        """Return the selected records, keeping the order of the given sequence."""
        return [r for r in records if r.id in self._selected]
