from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from server.core.ProposalService import ProposalService
from server.dependencies.auth import require_authenticated
from server.dependencies.services import get_proposal_service
from server.models.responses import ProposalResponse, StatusResponse

router = APIRouter(prefix="/proposal", tags=["proposal"], dependencies=[Depends(require_authenticated)])


def _build_response(service: ProposalService) -> ProposalResponse:
    session = service.get_generation_session()
    return ProposalResponse(
        state=session.state,
        proposal=service.get_result(),
        error=session.error,
        generated_at=service.get_result_generated_at(),
    )


@router.post("/generate", response_model=ProposalResponse)
async def generate(service: ProposalService = Depends(get_proposal_service)) -> ProposalResponse:
    """Generate a proposal from the selected documents.

    Raises:
        EmptySelectionError / MissingCredentialError: 400, no request is sent.
        GenerationInProgressError: 409 while another generation runs.
        GenerationError: 502 with the most specific message available.
    """
    await service.generate_proposal()
    return _build_response(service)


@router.get("", response_model=ProposalResponse)
async def get_proposal(service: ProposalService = Depends(get_proposal_service)) -> ProposalResponse:
    return _build_response(service)


@router.delete("", response_model=StatusResponse)
async def clear_proposal(service: ProposalService = Depends(get_proposal_service)) -> StatusResponse:
    service.clear_result()
    return StatusResponse(status="cleared")


@router.get("/download")
async def download(service: ProposalService = Depends(get_proposal_service)) -> Response:
    """Download the proposal as proposal_YYYY-MM-DD.txt."""
    exported = service.export_result()
    return Response(
        content=exported.content,
        media_type=f"{exported.mime_type}; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )


@router.post("/copy", response_model=StatusResponse)
async def copy(service: ProposalService = Depends(get_proposal_service)) -> StatusResponse:
    """Copy the proposal to the clipboard.

    Raises:
        ClipboardError: 500 if the clipboard refuses; the proposal is kept.
    """
    # clipboard tools run as subprocesses
    await run_in_threadpool(service.copy_result)
    return StatusResponse(status="copied")
