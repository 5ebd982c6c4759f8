from fastapi import Request

from server.core.ProposalService import ProposalService


async def get_proposal_service(request: Request) -> ProposalService:
    return request.app.state.proposal_service
