from shared.helper import HelperEngine
from shared.helper.HelperConfig import HelperConfig
from shared.clients.llm.LLMClientInterface import LLMClientInterface


class LLMClientManager:
    """Instantiates the generation service client selected by ``LLM_ENGINE``."""

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.engine = HelperEngine.get_engine_name(helper_config, "LLM_ENGINE", default="Anthropic")
        self.client: LLMClientInterface = HelperEngine.load_engine(
            helper_config, "LLM", package="shared.clients.llm", prefix="LLMClient", engine=self.engine
        )

    def get_client(self) -> LLMClientInterface:
        return self.client
