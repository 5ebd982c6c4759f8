from shared.clients.clipboard.ClipboardInterface import ClipboardInterface
from shared.helper.HelperConfig import HelperConfig


class ClipboardMemory(ClipboardInterface):
    """Clipboard kept in process memory, for headless runs and tests."""

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self.content: str | None = None

    def _get_engine_name(self) -> str:
        return "Memory"

    def copy(self, text: str) -> None:
        self.content = text
