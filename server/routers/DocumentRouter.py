from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from server.core.ProposalService import ProposalService
from server.dependencies.auth import require_authenticated
from server.dependencies.services import get_proposal_service
from server.models.responses import DocumentListResponse, SelectionResponse, StatusResponse
from shared.models.document import DocumentSummary

router = APIRouter(prefix="/documents", tags=["documents"], dependencies=[Depends(require_authenticated)])


@router.get("", response_model=DocumentListResponse)
async def list_documents(service: ProposalService = Depends(get_proposal_service)) -> DocumentListResponse:
    """List all stored documents in upload order, each with its selection flag."""
    documents = service.list_documents()
    return DocumentListResponse(
        documents=documents,
        selected_ids=[d.id for d in documents if d.selected],
        total=len(documents),
    )


@router.post("", response_model=DocumentSummary, status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: UploadFile | None = File(None),
    category: str | None = Form(None),
    service: ProposalService = Depends(get_proposal_service),
) -> DocumentSummary:
    """Upload a file with its document type.

    Args:
        file (UploadFile | None): The file to store.
        category (str | None): "Business Capability", "Proposal Template" or "RFI/RFP".

    Raises:
        MissingFileError / MissingCategoryError: 400 on missing input.
        StorageQuotaExceededError: 507 if the store is full. Nothing is recorded.
    """
    content = await file.read() if file is not None else None
    # storage writes block, keep them off the event loop
    record = await run_in_threadpool(
        service.upload_document,
        file_name=file.filename if file is not None else None,
        category=category,
        content=content,
        mime_type=file.content_type if file is not None else None,
    )
    return service.summarize(record)


@router.delete("", response_model=StatusResponse)
async def reset_all(service: ProposalService = Depends(get_proposal_service)) -> StatusResponse:
    """Delete every document and clear the selection."""
    await run_in_threadpool(service.reset_all)
    return StatusResponse(status="cleared")


@router.delete("/{document_id}", response_model=StatusResponse)
async def delete_document(
    document_id: int,
    service: ProposalService = Depends(get_proposal_service),
) -> StatusResponse:
    await run_in_threadpool(service.delete_document, document_id)
    return StatusResponse(status="deleted")


@router.post("/{document_id}/toggle", response_model=SelectionResponse)
async def toggle_selection(
    document_id: int,
    service: ProposalService = Depends(get_proposal_service),
) -> SelectionResponse:
    """Select or deselect a document for the next generation.

    Raises:
        DocumentNotFoundError: 404 if the id is unknown.
    """
    selected = service.toggle_selection(document_id)
    return SelectionResponse(document_id=document_id, selected=selected)
