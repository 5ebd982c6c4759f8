"""Prompt assembly for proposal generation.

The prompt layout is fixed: preamble, document listing, category guidance,
then one labeled section per document with its decoded text.
"""

from typing import Sequence

from shared.helper import HelperCodec
from shared.models.document import DocumentCategory, DocumentRecord

PREAMBLE = (
    "Please generate a comprehensive business proposal based on the following documents. "
    "The proposal should be complete, professional and ready for review."
)

CATEGORY_GUIDANCE: dict[DocumentCategory, str] = {
    DocumentCategory.BusinessCapability: (
        "Use the Business Capability documents to describe our approach, capabilities, "
        "experience and qualifications."
    ),
    DocumentCategory.ProposalTemplate: (
        "Use the Proposal Template documents to determine the structure, sections and format "
        "of the proposal."
    ),
    DocumentCategory.RfiRfp: (
        "Use the RFI/RFP documents to identify the requirements and respond to each of them "
        "point by point."
    ),
}


class PromptAssembler:
    """Builds the single instruction text sent to the generation service."""

    def assemble(self, records: Sequence[DocumentRecord]) -> str:
        """Build the prompt for the given documents.

        Args:
            records (Sequence[DocumentRecord]): The selected documents, in prompt order. Must not be empty.

        Returns:
            str: The prompt text. Identical input always yields identical text.
        """
        if not records:
            raise ValueError("Prompt assembly requires at least one document.")

        lines: list[str] = [PREAMBLE, ""]

        lines.append("Documents provided:")
        for record in records:
            lines.append(f"- {record.name} ({record.category.value})")
        lines.append("")

        lines.append("Instructions:")
        for category in DocumentCategory:
            lines.append(f"- {CATEGORY_GUIDANCE[category]}")
        lines.append("")

        lines.append("Document contents:")
        for index, record in enumerate(records, start=1):
            lines.append("")
            lines.append(f"=== Document {index}: {record.name} ===")
            lines.append(f"Type: {record.category.value}")
            lines.append("")
            lines.append(HelperCodec.decode_to_display_text(record.content))
            lines.append(f"=== End of Document {index} ===")

        return "\n".join(lines)
