"""
Asynchronous OVH API client.

Provides OvhClient, which signs requests with the application/consumer
credentials and exposes both a raw low-level surface (get, post, put,
delete returning the httpx response) and a JSON passthrough (call)
that maps error statuses to exceptions.

Copyright (c) 2026 Snapp'
Author: Yannis Duvignau (yduvignau@snapp.fr)
"""

import asyncio
import json
import logging
import time
from pathlib import Path
from typing import Any, Optional, Union

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from ovh_async.config import OvhCredentials, load_conf, load_credentials
from ovh_async.constants import (
    DEFAULT_TIMEOUT,
    ENDPOINTS,
    HEADER_APPLICATION,
    HEADER_CONSUMER,
    HEADER_SIGNATURE,
    HEADER_TIMESTAMP,
    JSON_CONTENT_TYPE,
)
from ovh_async.exceptions import (
    InvalidConfiguration,
    InvalidRegion,
    InvalidResponse,
    NetworkError,
    raise_for_response,
)
from ovh_async.signing import compute_signature
from ovh_async.validation import mask_key

logger = logging.getLogger(__name__)


def _encode_params(params: dict) -> str:
    """Encode query parameters, dropping None values and lowering booleans."""
    cleaned = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return str(httpx.QueryParams(cleaned))


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise InvalidResponse(
            f"Invalid JSON in response to {response.request.method} {response.request.url}"
        ) from e


class OvhClient:
    """
    Async client for the OVH REST API.

    Use it as an async context manager so the underlying connection pool
    is closed::

        async with OvhClient.from_conf("ovh.conf") as client:
            me = await client.call("GET", "/me")

    Parameters:
        endpoint: Endpoint name (e.g. "ovh-eu"), see constants.ENDPOINTS
        application_key: Application key
        application_secret: Application secret
        consumer_key: Consumer key
        timeout: HTTP timeout in seconds
        http_client: Optional httpx.AsyncClient to send requests with; the
            caller keeps ownership of it

    Raises:
        InvalidRegion: When the endpoint name is unknown
    """

    def __init__(
        self,
        endpoint: str,
        application_key: str,
        application_secret: str,
        consumer_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        if endpoint not in ENDPOINTS:
            raise InvalidRegion(
                f"unknown endpoint `{endpoint}`, expected one of: {', '.join(ENDPOINTS)}"
            )

        self.endpoint = endpoint
        self.base_url = ENDPOINTS[endpoint]
        self.application_key = application_key
        self._application_secret = application_secret
        self._consumer_key = consumer_key

        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

        self._time_delta: Optional[int] = None
        self._time_delta_lock = asyncio.Lock()

        logger.debug(
            "OVH client created for %s (application key %s, consumer key %s)",
            endpoint,
            mask_key(application_key),
            mask_key(consumer_key),
        )

    @classmethod
    def from_credentials(cls, creds: OvhCredentials, **kwargs) -> "OvhClient":
        """Create a client from an OvhCredentials tuple."""
        return cls(
            creds.endpoint,
            creds.application_key,
            creds.application_secret,
            creds.consumer_key,
            **kwargs,
        )

    @classmethod
    def from_conf(cls, path: Optional[Union[str, Path]] = None, **kwargs) -> "OvhClient":
        """
        Create a client from an ovh.conf file.

        Parameters:
            path: File to read; when None, the standard locations are merged
            **kwargs: Forwarded to the constructor

        Raises:
            InvalidConfiguration: When the file or a key is missing
        """
        return cls.from_credentials(load_conf(path), **kwargs)

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None, **kwargs) -> "OvhClient":
        """
        Create a client from a .env file and OVH_* environment variables.

        Raises:
            InvalidConfiguration: When some credential is missing
        """
        creds = load_credentials(env_file)
        if creds is None:
            raise InvalidConfiguration("incomplete credentials in environment")
        return cls.from_credentials(creds, **kwargs)

    async def __aenter__(self) -> "OvhClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http.aclose()

    def url(self, path: str) -> str:
        """Build the full URL for an API path."""
        return f"{self.base_url}{path}"

    async def time_delta(self) -> int:
        """
        Get the time delta between the API server and the local machine.

        The server time is fetched from /auth/time on first use and the
        delta (server minus local, in seconds) is reused afterwards.

        Raises:
            InvalidResponse: When /auth/time does not return an integer
        """
        async with self._time_delta_lock:
            if self._time_delta is None:
                response = await self.get_noauth("/auth/time")
                raise_for_response(response)
                try:
                    server_time = int(response.text.strip())
                except ValueError as e:
                    raise InvalidResponse(
                        f"Invalid server time: {response.text[:50]!r}"
                    ) from e
                self._time_delta = server_time - int(time.time())
                logger.debug("Server time delta is %d second(s)", self._time_delta)
        return self._time_delta

    def _default_headers(self) -> dict[str, str]:
        return {HEADER_APPLICATION: self.application_key}

    async def _signed_headers(self, method: str, url: str, body: str) -> dict[str, str]:
        headers = self._default_headers()
        timestamp = str(int(time.time()) + await self.time_delta())
        headers[HEADER_CONSUMER] = self._consumer_key
        headers[HEADER_TIMESTAMP] = timestamp
        headers[HEADER_SIGNATURE] = compute_signature(
            self._application_secret,
            self._consumer_key,
            method,
            url,
            body,
            timestamp,
        )
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        data: Any = None,
        params: Optional[dict] = None,
        need_auth: bool = True,
    ) -> httpx.Response:
        method = method.upper()
        url = self.url(path)
        if params:
            query = _encode_params(params)
            if query:
                url = f"{url}?{query}"

        # The exact body bytes are signed, so serialize once here
        body = "" if data is None else json.dumps(data)

        if need_auth:
            headers = await self._signed_headers(method, url, body)
        else:
            headers = self._default_headers()
        if body:
            headers["Content-Type"] = JSON_CONTENT_TYPE

        logger.debug("%s %s", method, url)
        try:
            response = await self._http.request(
                method,
                url,
                headers=headers,
                content=body.encode("utf-8") if body else None,
            )
        except httpx.TransportError as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response

    async def get(self, path: str, **params) -> httpx.Response:
        """Perform a signed GET request; keyword arguments become the query string."""
        return await self._request("GET", path, params=params)

    async def delete(self, path: str, **params) -> httpx.Response:
        """Perform a signed DELETE request."""
        return await self._request("DELETE", path, params=params)

    async def post(self, path: str, data: Any = None) -> httpx.Response:
        """Perform a signed POST request with a JSON body."""
        return await self._request("POST", path, data=data)

    async def put(self, path: str, data: Any = None) -> httpx.Response:
        """Perform a signed PUT request with a JSON body."""
        return await self._request("PUT", path, data=data)

    async def get_noauth(self, path: str, **params) -> httpx.Response:
        """Perform an unsigned GET request."""
        return await self._request("GET", path, params=params, need_auth=False)

    async def call(
        self,
        method: str,
        path: str,
        data: Any = None,
        *,
        need_auth: bool = True,
        **params,
    ) -> Any:
        """
        Call any API route and return its decoded JSON body.

        Parameters:
            method: HTTP method
            path: API path (e.g. "/me")
            data: JSON-serializable body, or None
            need_auth: Sign the request
            **params: Query string parameters

        Returns:
            Decoded JSON, or None for an empty body

        Raises:
            NetworkError: On transport failures
            APIError: Or a subclass, on non-2xx statuses
            InvalidResponse: When the body is not JSON
        """
        response = await self._request(
            method, path, data=data, params=params, need_auth=need_auth
        )
        raise_for_response(response)
        return _decode(response)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(NetworkError),
        reraise=True,
    )
    async def check_connection(self) -> dict:
        """
        Test API connectivity by fetching the current credential.

        Retries up to 3 times with exponential backoff on network errors.

        Returns:
            API response dict from /auth/currentCredential

        Raises:
            NetworkError: On persistent network failures
            InvalidCredential: On invalid API credentials
        """
        return await self.call("GET", "/auth/currentCredential")
