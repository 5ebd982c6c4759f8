from fastapi import Request

from server.core.SessionState import SessionState
from shared.exceptions.errors import NotAuthenticatedError


async def get_session_state(request: Request) -> SessionState:
    return request.app.state.session_state


async def require_authenticated(request: Request) -> None:
    """Reject the request unless the session is logged in.

    Args:
        request (Request): The FastAPI request object (provides app.state).

    Raises:
        NotAuthenticatedError: 401 if the login flag is not set.
    """
    session_state: SessionState = request.app.state.session_state
    if not session_state.is_authenticated():
        raise NotAuthenticatedError("Please log in first.")
