"""Pluggable engines: the shared configuration base and the loader that
resolves a configured engine name to its implementation class.

Engines live in ``<package>.<engine>.<Prefix><Engine>``, e.g. the ``File``
storage engine is ``shared.storage.file.StorageFile.StorageFile``.
"""

from abc import ABC, abstractmethod
from typing import Any

from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig


def get_engine_name(helper_config: HelperConfig, env_key: str, default: str) -> str:
    """Read an engine name from env configuration.

    Returns:
        str: Capitalised engine name (e.g. "Anthropic").
    """
    return helper_config.get_string_val(env_key, default=default).strip().lower().capitalize()


def load_engine(helper_config: HelperConfig, kind: str, package: str, prefix: str, engine: str, **kwargs: Any) -> Any:
    """Import and instantiate an engine.

    Args:
        helper_config (HelperConfig): Passed on to the engine constructor.
        kind (str): Human readable engine kind for messages, e.g. "storage".
        package (str): Dotted package holding one sub-package per engine.
        prefix (str): Class name prefix, e.g. "Storage".
        engine (str): Capitalised engine name.
        **kwargs: Extra constructor arguments.

    Raises:
        ValueError: If the engine is unsupported or cannot be imported.
    """
    class_name = f"{prefix}{engine}"
    try:
        module = __import__(f"{package}.{engine.lower()}.{class_name}", fromlist=[class_name])
        engine_class = getattr(module, class_name)
    except (ImportError, AttributeError) as e:
        raise ValueError("Unsupported %s engine '%s'. Error: %s" % (kind, engine, e))
    instance = engine_class(helper_config=helper_config, **kwargs)
    helper_config.get_logger().debug("Instantiated %s engine: %s", kind, engine)
    return instance


class ConfigurableEngine(ABC):
    """Base for pluggable engines configured through ``<TYPE>_<ENGINE>_<KEY>`` variables.

    Subclasses name their engine type (e.g. "LLM") and engine (e.g.
    "Anthropic") and list their keys in :meth:`_get_required_config`; all
    keys are validated on construction.
    """

    def __init__(self, helper_config: HelperConfig):
        self.logging = helper_config.get_logger()
        self._helper_config = helper_config
        self.validate_full_configuration()

    def validate_full_configuration(self) -> None:
        """
        Raises:
            ValueError: If any required configuration value is missing or invalid.
        """
        for config in self._get_required_config():
            _ = self.get_config_val(raw_key=config.env_key, default=config.default, val_type=config.val_type)

    def get_engine_type(self) -> str:
        """Returns the engine type in lowercase. E.g. "llm" """
        return self._get_engine_type().lower()

    @abstractmethod
    def _get_engine_type(self) -> str:
        pass

    def get_engine_name(self) -> str:
        """Returns the engine name in lowercase. E.g. "anthropic" """
        return self._get_engine_name().lower()

    @abstractmethod
    def _get_engine_name(self) -> str:
        pass

    def _get_required_config(self) -> list[EnvConfig]:
        """Returns the engine specific configuration keys. None by default."""
        return []

    def _get_config_key_name(self, raw_key: str) -> str:
        """
        Returns:
            str: The full configuration key name. E.g. "LLM_ANTHROPIC_MODEL"
        """
        return f"{self.get_engine_type().upper()}_{self.get_engine_name().upper()}_{raw_key.upper()}"

    def get_config_val(self, raw_key: str, default: Any = None, val_type: str = "string") -> Any:
        """
        Retrieves an engine specific configuration value.

        Args:
            raw_key (str): The key without its "<TYPE>_<ENGINE>_" prefix.
            default (Any): Returned if the variable is not set. None makes the key required.
            val_type (str): "string", "number", "bool" or "list".
        """
        key = self._get_config_key_name(raw_key)
        getters = {
            "string": self._helper_config.get_string_val,
            "number": self._helper_config.get_number_val,
            "bool": self._helper_config.get_bool_val,
            "list": self._helper_config.get_list_val,
        }
        if val_type not in getters:
            raise ValueError(f"Unsupported config value type '{val_type}' for env key '{key}'.")
        return getters[val_type](key, default=default)
