"""Client-local login flag.

The user table is a static lookup read from ``APP_USERS``; it grants a
persisted flag, nothing more.
"""

import hmac

from shared.exceptions.errors import InvalidCredentialsError
from shared.helper.HelperConfig import HelperConfig
from shared.storage.StorageInterface import StorageInterface

STORAGE_KEY = "isAuthenticated"
DEFAULT_USERS = ["admin:password123", "user:userpass"]


class SessionState:
    def __init__(self, helper_config: HelperConfig, storage: StorageInterface) -> None:
        self.logging = helper_config.get_logger()
        self._storage = storage
        self._users = self._parse_users(helper_config.get_list_val("APP_USERS", default=DEFAULT_USERS))

    @staticmethod
    def _parse_users(entries: list[str]) -> dict[str, str]:
        users: dict[str, str] = {}
        for entry in entries:
            username, sep, password = entry.partition(":")
            if not sep or not username:
                raise ValueError(f"Invalid APP_USERS entry '{entry}'. Expected 'username:password'.")
            users[username] = password
        return users

    def is_authenticated(self) -> bool:
        return self._storage.get(STORAGE_KEY) is not None

    def login(self, username: str, password: str) -> None:
        """Set the flag if the pair matches the user table.

        Raises:
            InvalidCredentialsError: If the pair is unknown.
        """
        expected = self._users.get(username)
        if expected is None or not hmac.compare_digest(expected.encode("utf-8"), password.encode("utf-8")):
            self.logging.warning("Failed login attempt for user '%s'.", username)
            raise InvalidCredentialsError("Invalid username or password")
        self._storage.set(STORAGE_KEY, "true")
        self.logging.info("User '%s' logged in.", username)

    def logout(self) -> None:
        self._storage.remove(STORAGE_KEY)
        self.logging.info("Logged out.")
