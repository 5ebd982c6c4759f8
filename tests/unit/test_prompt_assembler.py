"""Tests for prompt assembly."""

from datetime import date

import pytest

from server.core.PromptAssembler import CATEGORY_GUIDANCE, PREAMBLE, PromptAssembler
from shared.helper import HelperCodec
from shared.helper.HelperCodec import BINARY_SENTINEL
from shared.models.document import DocumentCategory, DocumentRecord


def _record(document_id: int, name: str, category: DocumentCategory, content: bytes) -> DocumentRecord:
    return DocumentRecord(
        id=document_id,
        name=name,
        category=category,
        uploaded_at=date(2024, 3, 1),
        content=HelperCodec.encode(content),
    )


@pytest.fixture
def records() -> list[DocumentRecord]:
    return [
        _record(1, "capabilities.txt", DocumentCategory.BusinessCapability, b"We build bridges."),
        _record(2, "template.md", DocumentCategory.ProposalTemplate, b"# Executive Summary"),
        _record(3, "rfp.pdf", DocumentCategory.RfiRfp, b"%PDF-1.4\n\xe2\xe3\xcf\xd3"),
    ]


def test_assemble_is_deterministic(records: list[DocumentRecord]) -> None:
    assembler = PromptAssembler()

    assert assembler.assemble(records) == assembler.assemble(list(records))


def test_assemble_follows_fixed_structure(records: list[DocumentRecord]) -> None:
    prompt = PromptAssembler().assemble(records)

    assert prompt.startswith(PREAMBLE)
    listing = prompt.index("Documents provided:")
    guidance = prompt.index("Instructions:")
    contents = prompt.index("Document contents:")
    assert listing < guidance < contents

    assert "- capabilities.txt (Business Capability)" in prompt[listing:guidance]
    assert "- template.md (Proposal Template)" in prompt[listing:guidance]
    assert "- rfp.pdf (RFI/RFP)" in prompt[listing:guidance]
    for text in CATEGORY_GUIDANCE.values():
        assert text in prompt[guidance:contents]


def test_assemble_labels_each_document_section(records: list[DocumentRecord]) -> None:
    prompt = PromptAssembler().assemble(records)

    first = prompt.index("=== Document 1: capabilities.txt ===")
    second = prompt.index("=== Document 2: template.md ===")
    third = prompt.index("=== Document 3: rfp.pdf ===")
    assert first < second < third
    assert "Type: Business Capability\n\nWe build bridges." in prompt[first:second]
    assert "# Executive Summary" in prompt[second:third]
    assert BINARY_SENTINEL in prompt[third:]


def test_assemble_keeps_given_order(records: list[DocumentRecord]) -> None:
    prompt = PromptAssembler().assemble(list(reversed(records)))

    assert prompt.index("- rfp.pdf") < prompt.index("- capabilities.txt")
    assert "=== Document 1: rfp.pdf ===" in prompt


def test_assemble_rejects_empty_sequence() -> None:
    with pytest.raises(ValueError):
        PromptAssembler().assemble([])
