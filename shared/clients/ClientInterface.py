from abc import abstractmethod

import httpx

from shared.helper.HelperConfig import HelperConfig
from shared.helper.HelperEngine import ConfigurableEngine


class ClientInterface(ConfigurableEngine):
    """Base for engines that talk to a remote service over HTTP.

    The httpx client is created by :meth:`boot` and released by :meth:`close`;
    the application lifespan owns both calls. ``<TYPE>_TIMEOUT`` bounds every
    request (default 120 seconds).
    """

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self.timeout = helper_config.get_number_val(f"{self.get_engine_type().upper()}_TIMEOUT", default=120.0)
        self._client: httpx.AsyncClient | None = None

    def is_booted(self) -> bool:
        return self._client is not None

    ##########################################
    ################ GETTER ##################
    ##########################################

    @abstractmethod
    def _get_auth_header(self, credential: str) -> dict:
        """
        Returns the authentication header carrying the given credential.

        Args:
            credential (str): The access key for the backend server.
        """
        pass

    @abstractmethod
    def _get_base_url(self) -> str:
        """
        Returns:
            str: The base URL of the backend server (e.g. "https://api.anthropic.com")
        """
        pass

    def _build_url(self, endpoint: str) -> str:
        endpoint = endpoint.strip().lstrip("/")
        base_url = self._get_base_url().rstrip("/")
        return f"{base_url}/{endpoint}" if endpoint else base_url

    ##########################################
    ############ CORE REQUESTS ###############
    ##########################################

    async def boot(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Create the HTTP client.

        Args:
            transport: Optional transport override (e.g. httpx.MockTransport in tests).
        """
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def do_post_json(self, endpoint: str, payload: dict, credential: str, headers: dict | None = None) -> httpx.Response:
        """POST a JSON body, authenticated with the given credential.

        Args:
            endpoint: Path appended to the base URL (leading slash optional).
            payload: JSON-serialisable request body.
            credential: Access key placed in the auth header.
            headers: Extra headers, overridden by the auth header.

        Returns:
            The raw httpx.Response, whatever its status.

        Raises:
            RuntimeError: If boot() was not called.
            httpx.RequestError: If the request cannot be sent or the connection fails.
        """
        if self._client is None:
            raise RuntimeError("HTTP client not initialised. Call boot() before making requests.")

        request_headers = {**(headers or {}), **self._get_auth_header(credential)}
        url = self._build_url(endpoint)
        self.logging.debug("POST %s (%d payload keys)", url, len(payload))
        return await self._client.post(url, json=payload, headers=request_headers, timeout=self.timeout)
