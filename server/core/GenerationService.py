"""Generation service.

Owns the single generation session and enforces that at most one request to
the generation service is in flight. The state check and the transition to
Running happen without an intervening await, so two coroutines on the same
event loop cannot both pass the guard.
"""

from datetime import datetime

from server.core.ResultManager import ResultManager
from shared.clients.llm.LLMClientInterface import LLMClientInterface
from shared.exceptions.errors import GenerationError, GenerationInProgressError, MissingCredentialError
from shared.helper.HelperConfig import HelperConfig
from shared.models.generation import GenerationSession, GenerationState


class GenerationService:
    def __init__(
        self,
        helper_config: HelperConfig,
        llm_client: LLMClientInterface,
        result_manager: ResultManager,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._llm_client = llm_client
        self._result_manager = result_manager
        self._tz = helper_config.get_timezone()
        self._session = GenerationSession()

    ##########################################
    ################ GETTER ##################
    ##########################################

    def get_session(self) -> GenerationSession:
        """Returns a snapshot of the current session."""
        return self._session.model_copy()

    def is_running(self) -> bool:
        return self._session.state == GenerationState.Running

    ##########################################
    ################ CORE ####################
    ##########################################

    async def do_generate(self, prompt: str, credential: str | None) -> str:
        """Run one generation and hand the result to the ResultManager.

        Args:
            prompt (str): The assembled prompt text.
            credential (str | None): The stored access key.

        Returns:
            str: The generated proposal.

        Raises:
            GenerationInProgressError: If a generation is already running.
            MissingCredentialError: If no credential is stored. No request is sent.
            GenerationError: If the service call fails. The previous proposal is kept.
        """
        if self.is_running():
            raise GenerationInProgressError("A proposal is already being generated.")
        if not credential:
            raise MissingCredentialError("Please save your API key in the settings first.")

        self._session = GenerationSession(state=GenerationState.Running, started_at=self._now())
        self.logging.info("Generating proposal (%d prompt characters)...", len(prompt), color="cyan")

        try:
            artifact = await self._llm_client.do_generate(prompt, credential)
        except GenerationError as e:
            self._session = self._session.model_copy(
                update={"state": GenerationState.Failed, "error": e.message, "finished_at": self._now()}
            )
            self.logging.error("Proposal generation failed: %s", e.message)
            raise
        except BaseException as e:
            # never leave the guard stuck in Running
            self._session = self._session.model_copy(
                update={"state": GenerationState.Failed, "error": str(e) or e.__class__.__name__, "finished_at": self._now()}
            )
            raise

        self._session = self._session.model_copy(
            update={"state": GenerationState.Succeeded, "artifact": artifact, "finished_at": self._now()}
        )
        self._result_manager.set_artifact(artifact)
        self.logging.info("Proposal generated (%d characters).", len(artifact), color="green")
        return artifact

    def _now(self) -> datetime:
        return datetime.now(self._tz)
