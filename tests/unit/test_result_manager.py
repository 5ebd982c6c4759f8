"""Tests for the result manager."""

from datetime import date

import pytest

from server.core.ResultManager import ResultManager
from shared.clients.clipboard.ClipboardInterface import ClipboardInterface
from shared.clients.clipboard.memory.ClipboardMemory import ClipboardMemory
from shared.exceptions.errors import ClipboardError, NoResultError
from shared.helper.HelperConfig import HelperConfig


class RefusingClipboard(ClipboardInterface):
    def _get_engine_name(self) -> str:
        return "Refusing"

    def copy(self, text: str) -> None:
        raise ClipboardError("Copy failed: permission denied")


def test_export_as_file_uses_dated_filename(result_manager: ResultManager) -> None:
    result_manager.set_artifact("Proposal body ✓")

    exported = result_manager.export_as_file(today=date(2024, 7, 9))

    assert exported.filename == "proposal_2024-07-09.txt"
    assert exported.content == "Proposal body ✓".encode("utf-8")
    assert exported.mime_type == "text/plain"


def test_export_defaults_to_today(result_manager: ResultManager) -> None:
    result_manager.set_artifact("x")

    exported = result_manager.export_as_file()

    assert exported.filename.startswith("proposal_")
    assert exported.filename.endswith(".txt")
    assert len(exported.filename) == len("proposal_YYYY-MM-DD.txt")


def test_copy_to_clipboard(result_manager: ResultManager, clipboard: ClipboardMemory) -> None:
    result_manager.set_artifact("Proposal body")

    result_manager.copy_to_clipboard()

    assert clipboard.content == "Proposal body"


def test_clipboard_failure_keeps_artifact(helper_config: HelperConfig) -> None:
    manager = ResultManager(helper_config=helper_config, clipboard=RefusingClipboard(helper_config=helper_config))
    manager.set_artifact("Proposal body")

    with pytest.raises(ClipboardError):
        manager.copy_to_clipboard()

    assert manager.get_artifact() == "Proposal body"


def test_exports_without_artifact_raise(result_manager: ResultManager) -> None:
    with pytest.raises(NoResultError):
        result_manager.export_as_file()
    with pytest.raises(NoResultError):
        result_manager.copy_to_clipboard()


def test_set_artifact_replaces_and_clear_removes(result_manager: ResultManager) -> None:
    result_manager.set_artifact("first")
    result_manager.set_artifact("second")
    assert result_manager.get_artifact() == "second"
    assert result_manager.get_generated_at() is not None

    result_manager.clear()

    assert not result_manager.has_artifact()
    assert result_manager.get_generated_at() is None
