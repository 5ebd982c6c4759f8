from shared.helper import HelperEngine
from shared.helper.HelperConfig import HelperConfig
from shared.storage.StorageInterface import StorageInterface


class StorageManager:
    """Instantiates the key/value store selected by ``STORAGE_ENGINE`` (File or Memory)."""

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.engine = HelperEngine.get_engine_name(helper_config, "STORAGE_ENGINE", default="File")
        self.storage: StorageInterface = HelperEngine.load_engine(
            helper_config, "storage", package="shared.storage", prefix="Storage", engine=self.engine
        )

    def get_storage(self) -> StorageInterface:
        return self.storage
