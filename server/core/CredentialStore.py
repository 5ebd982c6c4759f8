from shared.exceptions.errors import MissingCredentialError
from shared.helper.HelperConfig import HelperConfig
from shared.storage.StorageInterface import StorageInterface

STORAGE_KEY = "anthropicApiKey"


class CredentialStore:
    """The generation service access key, persisted as a plain string."""

    def __init__(self, helper_config: HelperConfig, storage: StorageInterface) -> None:
        self.logging = helper_config.get_logger()
        self._storage = storage

    def get(self) -> str | None:
        value = self._storage.get(STORAGE_KEY)
        return value if value else None

    def is_configured(self) -> bool:
        return self.get() is not None

    def save(self, credential: str | None) -> None:
        """Persist a new key.

        Raises:
            MissingCredentialError: If the key is empty.
        """
        if credential is None or not credential.strip():
            raise MissingCredentialError("Please enter an API key.")
        self._storage.set(STORAGE_KEY, credential.strip())
        self.logging.info("API key saved.")

    def clear(self) -> None:
        self._storage.remove(STORAGE_KEY)
        self.logging.info("API key removed.")
