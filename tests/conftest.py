"""Shared pytest fixtures for all test suites."""

import logging
from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio

from server.core.CredentialStore import CredentialStore
from server.core.DocumentStore import DocumentStore
from server.core.GenerationService import GenerationService
from server.core.ProposalService import ProposalService
from server.core.ResultManager import ResultManager
from server.core.SelectionState import SelectionState
from shared.clients.clipboard.memory.ClipboardMemory import ClipboardMemory
from shared.clients.llm.anthropic.LLMClientAnthropic import LLMClientAnthropic
from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import ColorLogger
from shared.storage.memory.StorageMemory import StorageMemory

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def helper_config() -> HelperConfig:
    return HelperConfig(logger=ColorLogger(logging.getLogger("zproposal.tests")))


@pytest.fixture
def storage(helper_config: HelperConfig) -> StorageMemory:
    return StorageMemory(helper_config=helper_config)


@pytest.fixture
def document_store(helper_config: HelperConfig, storage: StorageMemory) -> DocumentStore:
    store = DocumentStore(helper_config=helper_config, storage=storage)
    store.load()
    return store


@pytest.fixture
def clipboard(helper_config: HelperConfig) -> ClipboardMemory:
    return ClipboardMemory(helper_config=helper_config)


@pytest.fixture
def result_manager(helper_config: HelperConfig, clipboard: ClipboardMemory) -> ResultManager:
    return ResultManager(helper_config=helper_config, clipboard=clipboard)


@pytest.fixture
def credential_store(helper_config: HelperConfig, storage: StorageMemory) -> CredentialStore:
    return CredentialStore(helper_config=helper_config, storage=storage)


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    """Every request the mocked generation service received."""
    return []


@pytest.fixture
def service_handler() -> dict[str, Handler]:
    """Mutable slot for the mocked generation service behaviour. Tests replace ``handler``."""
    return {
        "handler": lambda request: httpx.Response(200, json={"content": [{"type": "text", "text": "Proposal body"}]}),
    }


@pytest_asyncio.fixture
async def llm_client(
    helper_config: HelperConfig,
    requests_seen: list[httpx.Request],
    service_handler: dict[str, Handler],
) -> AsyncGenerator[LLMClientAnthropic, None]:
    """Anthropic client whose transport is an httpx.MockTransport."""

    def dispatch(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        return service_handler["handler"](request)

    client = LLMClientAnthropic(helper_config=helper_config)
    await client.boot(transport=httpx.MockTransport(dispatch))
    yield client
    await client.close()


@pytest.fixture
def generation_service(
    helper_config: HelperConfig,
    llm_client: LLMClientAnthropic,
    result_manager: ResultManager,
) -> GenerationService:
    return GenerationService(helper_config=helper_config, llm_client=llm_client, result_manager=result_manager)


@pytest.fixture
def proposal_service(
    helper_config: HelperConfig,
    document_store: DocumentStore,
    credential_store: CredentialStore,
    generation_service: GenerationService,
    result_manager: ResultManager,
) -> ProposalService:
    return ProposalService(
        helper_config=helper_config,
        document_store=document_store,
        selection_state=SelectionState(),
        credential_store=credential_store,
        generation_service=generation_service,
        result_manager=result_manager,
    )
