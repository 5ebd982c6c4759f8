import shutil
import subprocess

from shared.clients.clipboard.ClipboardInterface import ClipboardInterface
from shared.exceptions.errors import ClipboardError
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig

# probed in order when CLIPBOARD_SYSTEM_COMMAND is not set
CLIPBOARD_COMMANDS: list[list[str]] = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
]


class ClipboardSystem(ClipboardInterface):
    """Clipboard backed by the operating system's clipboard command line tools.

    The text is piped to the tool's stdin as UTF-8. Set
    ``CLIPBOARD_SYSTEM_COMMAND`` (e.g. "[xclip,-selection,clipboard]") to skip
    probing.
    """

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self.timeout = helper_config.get_number_val("CLIPBOARD_TIMEOUT", default=5)
        self._command: list[str] = self.get_config_val("COMMAND", default=[], val_type="list")

    def _get_engine_name(self) -> str:
        return "System"

    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="COMMAND", val_type="list", default=[]),
        ]

    def _find_command(self) -> list[str] | None:
        if self._command:
            return self._command
        for command in CLIPBOARD_COMMANDS:
            if shutil.which(command[0]):
                return command
        return None

    def copy(self, text: str) -> None:
        command = self._find_command()
        if command is None:
            raise ClipboardError("No clipboard tool available on this system.")
        try:
            subprocess.run(
                command,
                input=text.encode("utf-8"),
                check=True,
                capture_output=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode("utf-8", errors="replace").strip()
            raise ClipboardError(f"Copy failed: {stderr or e}") from e
        except (OSError, subprocess.TimeoutExpired) as e:
            raise ClipboardError(f"Copy failed: {e}") from e
        self.logging.debug("Copied %d characters using '%s'.", len(text), command[0])
