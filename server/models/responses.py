from datetime import datetime

from pydantic import BaseModel

from shared.models.document import DocumentSummary
from shared.models.generation import GenerationState


class SessionResponse(BaseModel):
    authenticated: bool


class DocumentListResponse(BaseModel):
    documents: list[DocumentSummary]
    selected_ids: list[int]
    total: int


class SelectionResponse(BaseModel):
    document_id: int
    selected: bool


class CredentialStatusResponse(BaseModel):
    configured: bool


class ProposalResponse(BaseModel):
    state: GenerationState
    proposal: str | None = None
    error: str | None = None
    generated_at: datetime | None = None


class StatusResponse(BaseModel):
    status: str
