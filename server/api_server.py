"""FastAPI application entry point for the ZProposal generator."""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.logging.logging_setup import setup_logging
from shared.helper.HelperConfig import HelperConfig
from shared.exceptions.errors import ProposalError
from shared.storage.StorageManager import StorageManager
from shared.clients.llm.LLMClientManager import LLMClientManager
from shared.clients.clipboard.ClipboardManager import ClipboardManager
from server.core.CredentialStore import CredentialStore
from server.core.DocumentStore import DocumentStore
from server.core.GenerationService import GenerationService
from server.core.ProposalService import ProposalService
from server.core.ResultManager import ResultManager
from server.core.SelectionState import SelectionState
from server.core.SessionState import SessionState
from server.models.responses import StatusResponse
from server.routers.AuthRouter import router as auth_router
from server.routers.DocumentRouter import router as document_router
from server.routers.ProposalRouter import router as proposal_router
from server.routers.SettingsRouter import router as settings_router

logging = setup_logging()
app_version = os.getenv("APP_VERSION", "unknown")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # when the app starts
    app.state.logging = logging
    app.state.helper_config = HelperConfig(logger=logging)

    storage = StorageManager(helper_config=app.state.helper_config).get_storage()
    llm_client = LLMClientManager(helper_config=app.state.helper_config).get_client()
    clipboard = ClipboardManager(helper_config=app.state.helper_config).get_clipboard()

    logging.info("Booting LLM client '%s'...", llm_client.get_engine_name())
    await llm_client.boot()

    document_store = DocumentStore(helper_config=app.state.helper_config, storage=storage)
    document_store.load()
    result_manager = ResultManager(helper_config=app.state.helper_config, clipboard=clipboard)

    app.state.storage = storage
    app.state.llm_client = llm_client
    app.state.clipboard = clipboard
    app.state.session_state = SessionState(helper_config=app.state.helper_config, storage=storage)
    app.state.proposal_service = ProposalService(
        helper_config=app.state.helper_config,
        document_store=document_store,
        selection_state=SelectionState(),
        credential_store=CredentialStore(helper_config=app.state.helper_config, storage=storage),
        generation_service=GenerationService(
            helper_config=app.state.helper_config,
            llm_client=llm_client,
            result_manager=result_manager,
        ),
        result_manager=result_manager,
    )
    logging.info("ZProposal ready (storage=%s).", storage.get_engine_name(), color="green")

    # while the app is running...
    yield

    # when the app shuts down, close all client connections
    logging.info("Shutting down, closing LLM client...")
    await llm_client.close()
    logging.info("LLM client closed.")


app = FastAPI(
    title="zproposal",
    description=(
        "Collects reference documents (business capabilities, proposal templates, RFI/RFPs) "
        "and has a large language model synthesise them into a single proposal."
    ),
    version=app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(document_router)
app.include_router(settings_router)
app.include_router(proposal_router)


@app.exception_handler(ProposalError)
async def handle_proposal_error(request: Request, exc: ProposalError) -> JSONResponse:
    """Answer every domain error with its own status and message."""
    if exc.status_code >= 500:
        logging.error("%s on %s %s: %s", exc.__class__.__name__, request.method, request.url.path, exc.message)
    else:
        logging.debug("%s on %s %s: %s", exc.__class__.__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/health", response_model=StatusResponse, tags=["health"])
async def health() -> StatusResponse:
    return StatusResponse(status="ok")


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("SERVER_HOST", "0.0.0.0")
    port = int(os.getenv("SERVER_PORT", "8000"))
    logging.info(
        "Starting ZProposal API Server v%s from root dir: %s on %s:%d...",
        app_version,
        os.environ.get("ROOT_DIR", os.getcwd()),
        host,
        port,
    )
    uvicorn.run(app, host=host, port=port)
