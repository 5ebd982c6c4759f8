"""Pydantic models for generation sessions and exported results."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class GenerationState(str, Enum):
    Idle = "idle"
    Running = "running"
    Succeeded = "succeeded"
    Failed = "failed"


class GenerationSession(BaseModel):
    """Lifecycle of one call to the generation service.

    Attributes:
        state:       Current state of the session.
        artifact:    Generated text, only set when the session succeeded.
        error:       Failure message, only set when the session failed.
        started_at:  When the request was issued.
        finished_at: When the request completed or failed.
    """

    state: GenerationState = GenerationState.Idle
    artifact: str | None = None
    error: str | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None


class ExportedFile(BaseModel):
    """A generated proposal packaged for download."""

    filename: str
    content: bytes
    mime_type: str
