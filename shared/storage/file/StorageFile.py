import errno
import json
import os
import tempfile

from shared.exceptions.errors import StorageError, StorageQuotaExceededError
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig
from shared.storage.StorageInterface import StorageInterface


class StorageFile(StorageInterface):
    """Storage engine backed by a single JSON object file on the local disk.

    Writes go to a temporary file in the same directory which is then renamed
    over the target, so a crash mid-write leaves the previous file in place.
    """

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._path = self.get_config_val("PATH", default=self._get_default_path(), val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

    def _get_engine_name(self) -> str:
        return "File"

    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="PATH", val_type="string", default=self._get_default_path()),
        ]

    def _get_default_path(self) -> str:
        return os.path.join(self._helper_config.get_root_dir(), "data", "storage.json")

    def get_path(self) -> str:
        return self._path

    ##########################################
    ############### BACKEND ##################
    ##########################################

    def _load(self) -> dict[str, str]:
        if not os.path.exists(self._path):
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logging.warning("Storage file '%s' is unreadable, starting empty: %s", self._path, e)
            return {}
        if not isinstance(raw, dict):
            self.logging.warning("Storage file '%s' does not contain a JSON object, starting empty.", self._path)
            return {}
        return {k: v for k, v in raw.items() if isinstance(k, str) and isinstance(v, str)}

    def _persist(self, data: dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self._path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".storage-", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
            tmp_path = None
        except OSError as e:
            if e.errno in (errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)):
                raise StorageQuotaExceededError(f"No space left to persist storage file: {e}") from e
            raise StorageError(f"Failed to persist storage file '{self._path}': {e}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
