"""Proposal service.

Facade over the document store, selection, credential store, generation
service and result manager. Each public method is one user-facing action;
input errors are raised before anything is mutated.
"""

from datetime import datetime

from shared.exceptions.errors import (
    DocumentNotFoundError,
    EmptySelectionError,
    MissingCategoryError,
    MissingCredentialError,
    MissingFileError,
)
from shared.helper import HelperCodec
from shared.helper.HelperConfig import HelperConfig
from shared.models.document import DocumentCategory, DocumentRecord, DocumentSummary
from shared.models.generation import ExportedFile, GenerationSession
from server.core.CredentialStore import CredentialStore
from server.core.DocumentStore import DocumentStore
from server.core.GenerationService import GenerationService
from server.core.PromptAssembler import PromptAssembler
from server.core.ResultManager import ResultManager
from server.core.SelectionState import SelectionState


class ProposalService:
    def __init__(
        self,
        helper_config: HelperConfig,
        document_store: DocumentStore,
        selection_state: SelectionState,
        credential_store: CredentialStore,
        generation_service: GenerationService,
        result_manager: ResultManager,
        prompt_assembler: PromptAssembler | None = None,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._documents = document_store
        self._selection = selection_state
        self._credentials = credential_store
        self._generation = generation_service
        self._results = result_manager
        self._assembler = prompt_assembler or PromptAssembler()

        # selection never outlives a deleted document
        self._documents.add_removal_listener(self._selection.reconcile)

    ##########################################
    ############### DOCUMENTS ################
    ##########################################

    def upload_document(
        self,
        file_name: str | None,
        category: DocumentCategory | str | None,
        content: bytes | None,
        mime_type: str | None = None,
    ) -> DocumentRecord:
        """Encode and store an uploaded file.

        Args:
            file_name (str | None): The original file name.
            category (DocumentCategory | str | None): The document role, as enum, label or member name.
            content (bytes | None): The raw file content.
            mime_type (str | None): The MIME type sent with the upload, if any.

        Returns:
            DocumentRecord: The stored record.

        Raises:
            MissingFileError: If no file name or no content was supplied.
            MissingCategoryError: If the category is missing or unknown.
            StorageQuotaExceededError: If the store has no room left. Nothing is recorded.
        """
        if not file_name or not file_name.strip() or content is None:
            raise MissingFileError("Please select a file and document type.")
        if not content:
            raise MissingFileError(f"File '{file_name}' is empty.")
        resolved = category if isinstance(category, DocumentCategory) else DocumentCategory.parse(category)
        if resolved is None:
            raise MissingCategoryError("Please select a file and document type.")

        encoded = HelperCodec.encode(content, HelperCodec.guess_mime_type(file_name, mime_type))
        return self._documents.add(file_name.strip(), resolved, encoded)

    def list_documents(self) -> list[DocumentSummary]:
        """Returns every stored document with its selection flag, in insertion order."""
        return [self.summarize(record) for record in self._documents.list_documents()]

    def get_document(self, document_id: int) -> DocumentRecord:
        record = self._documents.get(document_id)
        if record is None:
            raise DocumentNotFoundError(f"Document {document_id} not found.")
        return record

    def delete_document(self, document_id: int) -> None:
        """Delete a document. Unknown ids are ignored."""
        self._documents.remove(document_id)

    def reset_all(self) -> None:
        """Delete every document and empty the selection."""
        self._documents.clear()
        self._selection.clear()

    ##########################################
    ############### SELECTION ################
    ##########################################

    def toggle_selection(self, document_id: int) -> bool:
        """Select or deselect a stored document.

        Returns:
            bool: True if the document is selected afterwards.

        Raises:
            DocumentNotFoundError: If no document has this id.
        """
        self.get_document(document_id)
        return self._selection.toggle(document_id)

    def is_selected(self, document_id: int) -> bool:
        return self._selection.is_selected(document_id)

    def get_selected_documents(self) -> list[DocumentRecord]:
        """Returns the selected documents in store order."""
        return self._selection.filter_selected(self._documents.list_documents())

    ##########################################
    ############### SETTINGS #################
    ##########################################

    def save_credential(self, credential: str | None) -> None:
        self._credentials.save(credential)

    def has_credential(self) -> bool:
        return self._credentials.is_configured()

    ##########################################
    ############### GENERATION ###############
    ##########################################

    async def generate_proposal(self) -> str:
        """Assemble the prompt from the selected documents and generate a proposal.

        Returns:
            str: The generated proposal, also retained by the ResultManager.

        Raises:
            EmptySelectionError: If no document is selected.
            MissingCredentialError: If no API key is stored.
            GenerationInProgressError: If a generation is already running.
            GenerationError: If the generation service call fails.
        """
        selected = self.get_selected_documents()
        if not selected:
            raise EmptySelectionError("Please select at least one file.")
        credential = self._credentials.get()
        if not credential:
            raise MissingCredentialError("Please save your API key in the settings first.")

        for record in selected:
            if not HelperCodec.is_text(record.content):
                self.logging.warning(
                    "Document '%s' is not text; its section in the prompt only carries a placeholder.",
                    record.name,
                    color="yellow",
                )

        self.logging.info(
            "Generating proposal from %d document(s): %s",
            len(selected),
            ", ".join(r.name for r in selected),
        )
        prompt = self._assembler.assemble(selected)
        return await self._generation.do_generate(prompt, credential)

    def get_generation_session(self) -> GenerationSession:
        return self._generation.get_session()

    def is_generating(self) -> bool:
        return self._generation.is_running()

    ##########################################
    ################ RESULT ##################
    ##########################################

    def get_result(self) -> str | None:
        return self._results.get_artifact()

    def get_result_generated_at(self) -> datetime | None:
        return self._results.get_generated_at()

    def export_result(self) -> ExportedFile:
        return self._results.export_as_file()

    def copy_result(self) -> None:
        self._results.copy_to_clipboard()

    def clear_result(self) -> None:
        self._results.clear()

    ##########################################
    ############### HELPERS ##################
    ##########################################

    def summarize(self, record: DocumentRecord) -> DocumentSummary:
        """Describe one record, decoding its content once."""
        try:
            content = HelperCodec.decode_to_bytes(record.content)
            mime_type = HelperCodec.get_mime_type(record.content)
        except ValueError:
            content, mime_type = None, HelperCodec.DEFAULT_MIME_TYPE
        return DocumentSummary(
            id=record.id,
            name=record.name,
            category=record.category,
            uploaded_at=record.uploaded_at,
            mime_type=mime_type,
            size_bytes=len(content) if content is not None else 0,
            is_text=content is not None and HelperCodec.is_text_bytes(content),
            selected=self._selection.is_selected(record.id),
        )
