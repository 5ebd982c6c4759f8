from shared.clients.clipboard.ClipboardInterface import ClipboardInterface
from shared.helper import HelperEngine
from shared.helper.HelperConfig import HelperConfig


class ClipboardManager:
    """Instantiates the clipboard selected by ``CLIPBOARD_ENGINE`` (System or Memory)."""

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.engine = HelperEngine.get_engine_name(helper_config, "CLIPBOARD_ENGINE", default="System")
        self.clipboard: ClipboardInterface = HelperEngine.load_engine(
            helper_config, "clipboard", package="shared.clients.clipboard", prefix="Clipboard", engine=self.engine
        )

    def get_clipboard(self) -> ClipboardInterface:
        return self.clipboard
