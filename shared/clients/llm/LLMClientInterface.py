from abc import abstractmethod

import httpx
from shared.clients.ClientInterface import ClientInterface
from shared.exceptions.errors import (
    GenerationResponseFormatError,
    GenerationServiceError,
    GenerationTransportError,
    MissingCredentialError,
)
from shared.helper.HelperConfig import HelperConfig

MAX_OUTPUT_TOKENS = 4000


class LLMClientInterface(ClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self.max_output_tokens = MAX_OUTPUT_TOKENS

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_type(self) -> str:
        return "LLM"

    @abstractmethod
    def get_model(self) -> str:
        """Returns the fixed model identifier sent with every generation request."""
        pass

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_generate(self) -> str:
        """Returns the endpoint path for generation requests (e.g. "/v1/messages")."""
        pass

    ################ HEADERS ##################
    @abstractmethod
    def _get_additional_headers(self) -> dict:
        """Returns backend-specific headers sent with every request (content type, API version, …)."""
        pass

    ################ PAYLOAD BUILDER ##################
    @abstractmethod
    def get_generate_payload(self, prompt: str) -> dict:
        """Build the backend-specific request body for a generation request.

        Args:
            prompt (str): The assembled prompt, sent as a single user message.

        Returns:
            dict: JSON-serialisable request body.
        """
        pass

    ##########################################
    ################# OTHER ##################
    ##########################################

    @abstractmethod
    def extract_generated_text(self, response_data: dict) -> str:
        """Extract the generated text from a successful response body.

        Raises:
            ValueError: If the body does not have the expected shape.
        """
        pass

    @abstractmethod
    def extract_error_message(self, response_data: dict) -> str | None:
        """Extract the service's own error message from an error response body, if present."""
        pass

    def _describe_error_response(self, response: httpx.Response) -> str:
        """Prefer the service's message, fall back to the status line (e.g. "500 Internal Server Error")."""
        try:
            body = response.json()
        except ValueError:
            body = None
        message = self.extract_error_message(body) if isinstance(body, dict) else None
        if message:
            return message
        return f"{response.status_code} {response.reason_phrase}".strip()

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_generate(self, prompt: str, credential: str | None) -> str:
        """Send a single generation request and return the generated text.

        No retry is attempted on any failure.

        Args:
            prompt (str): The assembled prompt text.
            credential (str | None): The access key for the generation service.

        Returns:
            str: The generated text.

        Raises:
            MissingCredentialError: If no credential is given. No request is sent.
            GenerationTransportError: If the service cannot be reached.
            GenerationServiceError: If the service answers with a non-success status.
            GenerationResponseFormatError: If a success body lacks the generated text.
        """
        if not credential or not credential.strip():
            raise MissingCredentialError("Please save your API key in the settings first.")

        body = self.get_generate_payload(prompt)
        self.logging.debug(
            "Sending generation request to %s (model=%s, prompt=%d chars)",
            self.get_engine_name(),
            self.get_model(),
            len(prompt),
        )

        try:
            response = await self.do_post_json(
                endpoint=self._get_endpoint_generate(),
                payload=body,
                credential=credential.strip(),
                headers=self._get_additional_headers(),
            )
        except httpx.RequestError as e:
            description = str(e) or e.__class__.__name__
            self.logging.error("Generation request failed: %s", description)
            raise GenerationTransportError(f"Failed to generate proposal: {description}") from e

        if not response.is_success:
            message = self._describe_error_response(response)
            self.logging.error(
                "Generation request failed with status %d: %s",
                response.status_code,
                message,
            )
            raise GenerationServiceError(message, upstream_status=response.status_code)

        try:
            return self.extract_generated_text(response.json())
        except ValueError as e:
            self.logging.error("Generation response has an unexpected shape: %s", e)
            raise GenerationResponseFormatError() from e
