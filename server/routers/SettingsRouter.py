from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from server.core.ProposalService import ProposalService
from server.dependencies.auth import require_authenticated
from server.dependencies.services import get_proposal_service
from server.models.requests import CredentialRequest
from server.models.responses import CredentialStatusResponse

router = APIRouter(prefix="/settings", tags=["settings"], dependencies=[Depends(require_authenticated)])


@router.get("/credential", response_model=CredentialStatusResponse)
async def credential_status(service: ProposalService = Depends(get_proposal_service)) -> CredentialStatusResponse:
    """Report whether an API key is stored. The key itself is never returned."""
    return CredentialStatusResponse(configured=service.has_credential())


@router.put("/credential", response_model=CredentialStatusResponse)
async def save_credential(
    body: CredentialRequest,
    service: ProposalService = Depends(get_proposal_service),
) -> CredentialStatusResponse:
    await run_in_threadpool(service.save_credential, body.api_key)
    return CredentialStatusResponse(configured=True)
