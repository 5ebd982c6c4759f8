from datetime import date, datetime

from shared.clients.clipboard.ClipboardInterface import ClipboardInterface
from shared.exceptions.errors import NoResultError
from shared.helper.HelperConfig import HelperConfig
from shared.models.generation import ExportedFile

EXPORT_MIME_TYPE = "text/plain"


class ResultManager:
    """Holds the most recent generated proposal and exports it. Only one is retained."""

    def __init__(self, helper_config: HelperConfig, clipboard: ClipboardInterface) -> None:
        self.logging = helper_config.get_logger()
        self._clipboard = clipboard
        self._tz = helper_config.get_timezone()
        self._artifact: str | None = None
        self._generated_at: datetime | None = None

    ##########################################
    ################ GETTER ##################
    ##########################################

    def get_artifact(self) -> str | None:
        return self._artifact

    def get_generated_at(self) -> datetime | None:
        return self._generated_at

    def has_artifact(self) -> bool:
        return self._artifact is not None

    ##########################################
    ################ SETTER ##################
    ##########################################

    def set_artifact(self, artifact: str) -> None:
        """Replace the retained proposal."""
        self._artifact = artifact
        self._generated_at = datetime.now(self._tz)

    def clear(self) -> None:
        self._artifact = None
        self._generated_at = None

    ##########################################
    ################ EXPORT ##################
    ##########################################

    def export_as_file(self, today: date | None = None) -> ExportedFile:
        """Package the proposal as a dated plain text file.

        Args:
            today (date | None): Date used in the filename. Defaults to today in the configured timezone.

        Returns:
            ExportedFile: ``proposal_YYYY-MM-DD.txt`` with UTF-8 content.

        Raises:
            NoResultError: If no proposal has been generated.
        """
        artifact = self._require_artifact()
        today = today or datetime.now(self._tz).date()
        filename = f"proposal_{today.isoformat()}.txt"
        self.logging.info("Exporting proposal as '%s'.", filename)
        return ExportedFile(filename=filename, content=artifact.encode("utf-8"), mime_type=EXPORT_MIME_TYPE)

    def copy_to_clipboard(self) -> None:
        """Place the proposal on the clipboard.

        Raises:
            NoResultError: If no proposal has been generated.
            ClipboardError: If the clipboard refuses the text. The proposal is kept.
        """
        artifact = self._require_artifact()
        self._clipboard.copy(artifact)
        self.logging.info("Copied proposal (%d characters) to the clipboard.", len(artifact))

    def _require_artifact(self) -> str:
        if self._artifact is None:
            raise NoResultError("No proposal has been generated yet.")
        return self._artifact
