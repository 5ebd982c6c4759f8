"""Pydantic models for uploaded documents.

The field aliases match the persisted layout (``{id, name, type, date, data}``)
so a stored collection round-trips through ``model_dump(by_alias=True)``.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DocumentCategory(str, Enum):
    """Fixed set of roles a document can play in a proposal."""

    BusinessCapability = "Business Capability"
    ProposalTemplate = "Proposal Template"
    RfiRfp = "RFI/RFP"

    @classmethod
    def parse(cls, raw: str | None) -> "DocumentCategory | None":
        """Resolve a category from its label or its member name. Returns None if unknown."""
        if not raw or not raw.strip():
            return None
        raw = raw.strip()
        for category in cls:
            if raw == category.value or raw.lower() == category.name.lower():
                return category
        return None


class DocumentRecord(BaseModel):
    """One uploaded file's metadata plus its encoded content. Immutable once created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str = Field(min_length=1)
    category: DocumentCategory = Field(alias="type")
    uploaded_at: date = Field(alias="date")
    content: str = Field(alias="data", min_length=1)


class DocumentSummary(BaseModel):
    """Document metadata without content, as listed to the user."""

    id: int
    name: str
    category: DocumentCategory
    uploaded_at: date
    mime_type: str
    size_bytes: int
    is_text: bool
    selected: bool = False
