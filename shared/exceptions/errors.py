"""Error taxonomy for the proposal generator.

Every error carries the HTTP status the API layer answers with, so the
routers never need their own mapping tables.
"""


class ProposalError(Exception):
    """Base class for all errors raised by the proposal generator."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# Input errors


class InputError(ProposalError):
    """Rejected input. Raised before any side effect."""

    status_code = 400


class MissingFileError(InputError):
    """No file (or an empty one) was supplied for upload."""

    pass


class MissingCategoryError(InputError):
    """No valid document category was supplied for upload."""

    pass


class EmptySelectionError(InputError):
    """Generation was requested without any selected document."""

    pass


class MissingCredentialError(InputError):
    """No generation service key is configured, or an empty one was supplied."""

    pass


class NoResultError(InputError):
    """An export was requested but no proposal has been generated yet."""

    pass


class InvalidCredentialsError(InputError):
    """Login with an unknown username/password pair."""

    status_code = 401


class NotAuthenticatedError(InputError):
    """The session is not logged in."""

    status_code = 401


class DocumentNotFoundError(ProposalError):
    """No document with the requested id exists."""

    status_code = 404


# Storage errors


class StorageError(ProposalError):
    """The device-local store could not be written."""

    status_code = 500


class StorageQuotaExceededError(StorageError):
    """The write would exceed the configured storage quota."""

    status_code = 507


# Service errors


class GenerationError(ProposalError):
    """The generation service did not produce a proposal."""

    status_code = 502


class GenerationTransportError(GenerationError):
    """The request never reached the service or the connection failed."""

    pass


class GenerationServiceError(GenerationError):
    """The service answered with a non-success status."""

    def __init__(self, message: str, upstream_status: int):
        super().__init__(message)
        self.upstream_status = upstream_status


class GenerationResponseFormatError(GenerationError):
    """The service answered successfully but without the expected text block."""

    def __init__(self, message: str = "Invalid response format"):
        super().__init__(message)


class GenerationInProgressError(ProposalError):
    """A generation is already running."""

    status_code = 409


class ClipboardError(ProposalError):
    """The system clipboard refused the text."""

    status_code = 500
