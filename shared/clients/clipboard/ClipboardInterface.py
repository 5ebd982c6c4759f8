from abc import abstractmethod

from shared.helper.HelperEngine import ConfigurableEngine


class ClipboardInterface(ConfigurableEngine):
    """Destination for the "copy proposal" action."""

    def _get_engine_type(self) -> str:
        return "Clipboard"

    @abstractmethod
    def copy(self, text: str) -> None:
        """Place text on the clipboard.

        Raises:
            ClipboardError: If the clipboard is unavailable or refuses the text.
        """
        pass
