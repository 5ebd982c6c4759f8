from shared.clients.llm.LLMClientInterface import LLMClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig

DEFAULT_BASE_URL = "https://api.anthropic.com"
DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_API_VERSION = "2023-06-01"


class LLMClientAnthropic(LLMClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default=DEFAULT_BASE_URL, val_type="string")
        self._model = self.get_config_val("MODEL", default=DEFAULT_MODEL, val_type="string")
        self._api_version = self.get_config_val("API_VERSION", default=DEFAULT_API_VERSION, val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Anthropic"

    def get_model(self) -> str:
        return self._model

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default=DEFAULT_BASE_URL),
            EnvConfig(env_key="MODEL", val_type="string", default=DEFAULT_MODEL),
            EnvConfig(env_key="API_VERSION", val_type="string", default=DEFAULT_API_VERSION),
        ]

    ################ AUTH ##################
    def _get_auth_header(self, credential: str) -> dict:
        return {"x-api-key": credential}

    ################ HEADERS ##################
    def _get_additional_headers(self) -> dict:
        return {
            "content-type": "application/json",
            "anthropic-version": self._api_version,
        }

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_generate(self) -> str:
        return "/v1/messages"

    ################ PAYLOAD BUILDER ##################
    def get_generate_payload(self, prompt: str) -> dict:
        """Build the Messages API request body.

        Args:
            prompt (str): The assembled prompt text.

        Returns:
            dict: {"model": "...", "max_tokens": 4000, "messages": [{"role": "user", "content": "..."}]}
        """
        return {
            "model": self._model,
            "max_tokens": self.max_output_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

    ##########################################
    ################# OTHER ##################
    ##########################################

    def extract_generated_text(self, response_data: dict) -> str:
        """Extract the text of the first content block of a Messages API response.

        Raises:
            ValueError: If the response does not contain a text block.
        """
        content = response_data.get("content") if isinstance(response_data, dict) else None
        if not isinstance(content, list) or not content:
            raise ValueError("Response does not contain content blocks.")
        first = content[0]
        text = first.get("text") if isinstance(first, dict) else None
        if not isinstance(text, str):
            raise ValueError(
                "First content block does not contain text. Block keys: %s"
                % (list(first.keys()) if isinstance(first, dict) else type(first).__name__)
            )
        return text

    def extract_error_message(self, response_data: dict) -> str | None:
        error = response_data.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return None
