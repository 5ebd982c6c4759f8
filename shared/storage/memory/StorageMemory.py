from shared.helper.HelperConfig import HelperConfig
from shared.storage.StorageInterface import StorageInterface


class StorageMemory(StorageInterface):
    """Process-local storage engine. Nothing survives a restart."""

    def __init__(self, helper_config: HelperConfig, initial: dict[str, str] | None = None):
        super().__init__(helper_config=helper_config)
        self._backend: dict[str, str] = dict(initial or {})

    def _get_engine_name(self) -> str:
        return "Memory"

    def _load(self) -> dict[str, str]:
        return dict(self._backend)

    def _persist(self, data: dict[str, str]) -> None:
        self._backend = dict(data)
