"""Central configuration helper for the proposal generator."""

import os
from datetime import tzinfo

from pytz import timezone
from pytz.exceptions import UnknownTimeZoneError

from shared.logging.logging_setup import ColorLogger

DEFAULT_TIMEZONE = "Europe/Berlin"
_TRUE_VALUES = ("true", "1", "yes", "on")


class HelperConfig:
    """Reads all settings from environment variables.

    Keys are case-insensitive; an empty variable counts as unset. Every getter
    raises ValueError when a key is unset and no default is given.
    """

    def __init__(self, logger: ColorLogger) -> None:
        self._logger = logger

    def _get_raw(self, key: str, required: bool) -> str | None:
        key = key.upper()
        raw = os.getenv(key) or None
        if raw is None and required:
            raise ValueError(f"Environment variable '{key}' is not set.")
        return raw.strip() if raw is not None else None

    ##########################################
    ############### GETTER ###################
    ##########################################

    def get_string_val(self, key: str, default: str | None = None) -> str:
        """Read a string environment variable.

        Args:
            key (str): Environment variable name (case-insensitive).
            default (str | None): Fallback value if the variable is not set.

        Returns:
            str: The resolved value, stripped of surrounding whitespace.
        """
        raw = self._get_raw(key, required=default is None)
        return raw if raw is not None else default

    def get_number_val(self, key: str, default: float | int | None = None) -> float | int:
        """Read a numeric environment variable.

        Returns:
            float | int: An int unless the value contains a decimal point.

        Raises:
            ValueError: If the value cannot be parsed as a number.
        """
        raw = self._get_raw(key, required=default is None)
        if raw is None:
            return default
        try:
            return int(raw) if "." not in raw else float(raw)
        except ValueError:
            raise ValueError(f"Environment variable '{key.upper()}' is not a valid number: '{raw}'.")

    def get_bool_val(self, key: str, default: bool | None = None) -> bool:
        """Read a boolean environment variable. "true", "1", "yes" and "on" count as True."""
        raw = self._get_raw(key, required=default is None)
        if raw is None:
            return default
        return raw.lower() in _TRUE_VALUES

    def get_list_val(self, key: str, default: list[str] | None = None, separator: str = ",", element_type: type = str) -> list:
        """Read a list environment variable in "[elem1,elem2,...]" form.

        Args:
            key (str): Environment variable name (case-insensitive).
            default (list[str] | None): Fallback value if the variable is not set.
            separator (str): The delimiter between elements.
            element_type (type): The type each element is cast to.

        Returns:
            list: The elements, without empty or whitespace-only entries.

        Raises:
            ValueError: If the value is not bracketed or an element cannot be cast.
        """
        raw_val = self._get_raw(key, required=default is None)
        if raw_val is None:
            return default
        if not raw_val.startswith("[") or not raw_val.endswith("]"):
            raise ValueError(f"Environment variable '{key.upper()}' must be in the format '[elem1{separator}elem2{separator}...]'. Got: '{raw_val}'")
        elements = [v.strip() for v in raw_val[1:-1].split(separator) if v.strip()]
        try:
            return [element_type(elem) for elem in elements]
        except ValueError as e:
            raise ValueError(f"Environment variable '{key.upper()}' contains invalid elements: {e}. Type set to {element_type.__name__}. Got: '{raw_val}'")

    ##########################################
    ############### DERIVED ##################
    ##########################################

    def get_root_dir(self) -> str:
        """Return the application root directory (ROOT_DIR, falls back to the working directory)."""
        return self.get_string_val("ROOT_DIR", default=os.getcwd())

    def get_timezone(self) -> tzinfo:
        """Return the configured TIMEZONE used for upload dates, export names and log stamps.

        Raises:
            ValueError: If TIMEZONE is not a known zone name.
        """
        name = self.get_string_val("TIMEZONE", default=DEFAULT_TIMEZONE)
        try:
            return timezone(name)
        except UnknownTimeZoneError:
            raise ValueError(f"Environment variable 'TIMEZONE' is not a known time zone: '{name}'.")

    def get_logger(self) -> ColorLogger:
        return self._logger
