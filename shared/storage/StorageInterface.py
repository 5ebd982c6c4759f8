import threading
from abc import abstractmethod

from shared.exceptions.errors import StorageQuotaExceededError
from shared.helper.HelperConfig import HelperConfig
from shared.helper.HelperEngine import ConfigurableEngine

DEFAULT_QUOTA_BYTES = 10 * 1024 * 1024


class StorageInterface(ConfigurableEngine):
    """Device-local key/value store over strings.

    Engines only load and persist the whole key space; quota accounting and
    copy-on-write semantics live here, so a rejected write never leaves the
    store partially updated.
    """

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self.quota_bytes = int(helper_config.get_number_val("STORAGE_QUOTA_BYTES", default=DEFAULT_QUOTA_BYTES))
        self._data: dict[str, str] | None = None
        # writes may arrive from worker threads
        self._write_lock = threading.RLock()

    ##########################################
    ################ GETTER ##################
    ##########################################

    def _get_engine_type(self) -> str:
        return "Storage"

    ################ USAGE ##################
    def get_usage_bytes(self) -> int:
        """Returns the number of bytes currently occupied by all keys and values."""
        return self._measure(self._get_data())

    ##########################################
    ############### BACKEND ##################
    ##########################################

    @abstractmethod
    def _load(self) -> dict[str, str]:
        """Read the whole key space from the backend. Absent or unreadable data yields an empty dict."""
        pass

    @abstractmethod
    def _persist(self, data: dict[str, str]) -> None:
        """Write the whole key space to the backend.

        Raises:
            StorageError: If the backend rejects the write.
        """
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    def get(self, key: str) -> str | None:
        """Returns the value stored under key, or None."""
        return self._get_data().get(key)

    def set(self, key: str, value: str) -> None:
        """Store value under key and persist immediately.

        Raises:
            StorageQuotaExceededError: If the write would exceed the quota.
            StorageError: If the backend fails to persist.
        """
        with self._write_lock:
            updated = dict(self._get_data())
            updated[key] = value
            size = self._measure(updated)
            if size > self.quota_bytes:
                self.logging.warning(
                    "Storage quota exceeded writing key '%s': %d bytes > quota %d bytes.",
                    key,
                    size,
                    self.quota_bytes,
                )
                raise StorageQuotaExceededError(
                    f"Storage quota exceeded: {size} bytes needed, {self.quota_bytes} bytes available."
                )
            self._persist(updated)
            self._data = updated

    def remove(self, key: str) -> None:
        """Delete key if present and persist immediately."""
        with self._write_lock:
            data = self._get_data()
            if key not in data:
                return
            updated = dict(data)
            del updated[key]
            self._persist(updated)
            self._data = updated

    ##########################################
    ############### HELPERS ##################
    ##########################################

    def _get_data(self) -> dict[str, str]:
        if self._data is None:
            self._data = self._load()
        return self._data

    @staticmethod
    def _measure(data: dict[str, str]) -> int:
        return sum(len(k.encode("utf-8")) + len(v.encode("utf-8")) for k, v in data.items())
