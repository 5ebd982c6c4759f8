from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from server.core.SessionState import SessionState
from server.dependencies.auth import get_session_state
from server.models.requests import LoginRequest
from server.models.responses import SessionResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=SessionResponse)
async def login(
    body: LoginRequest,
    session_state: SessionState = Depends(get_session_state),
) -> SessionResponse:
    """Check the username/password pair against the static user table and set the login flag.

    Raises:
        InvalidCredentialsError: 401 if the pair is unknown.
    """
    await run_in_threadpool(session_state.login, body.username, body.password)
    return SessionResponse(authenticated=True)


@router.post("/logout", response_model=SessionResponse)
async def logout(session_state: SessionState = Depends(get_session_state)) -> SessionResponse:
    await run_in_threadpool(session_state.logout)
    return SessionResponse(authenticated=False)


@router.get("/status", response_model=SessionResponse)
async def status(session_state: SessionState = Depends(get_session_state)) -> SessionResponse:
    return SessionResponse(authenticated=session_state.is_authenticated())
