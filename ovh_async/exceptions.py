"""
Exception hierarchy for the ovh-async package.

Every error raised by the library derives from OvhError, so callers can
catch broadly or pick out network failures, authentication failures and
provider-side errors individually.

Copyright (c) 2026 Snapp'
Author: Yannis Duvignau (yduvignau@snapp.fr)
"""

from typing import Optional

import httpx

from ovh_async.constants import HEADER_QUERY_ID


class OvhError(Exception):
    """Base class for all ovh-async errors."""


class InvalidConfiguration(OvhError):
    """Raised when the configuration is missing a key or cannot be read."""


class InvalidRegion(InvalidConfiguration):
    """Raised when the endpoint name is not a known API region."""


class NetworkError(OvhError):
    """Raised when the request could not reach the API."""


class InvalidResponse(OvhError):
    """Raised when the API answered with a body the client cannot decode."""


class APIError(OvhError):
    """
    Raised when the API answered with a non-2xx status.

    Attributes:
        status_code: HTTP status of the response
        error_code: The provider's ``errorCode`` field, when present
        query_id: Value of the ``X-Ovh-QueryID`` header, when present
        response: The raw httpx response
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        query_id: Optional[str] = None,
        response: Optional[httpx.Response] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.query_id = query_id
        self.response = response

    def __str__(self) -> str:
        if self.query_id:
            return f"{self.message} \nOVH-Query-ID: {self.query_id}"
        return self.message


class HTTPError(APIError):
    """Non-2xx status without a more specific class."""


class BadParametersError(APIError):
    """400 Bad Request."""


class NotCredential(APIError):
    """401: the request carried no valid consumer key."""


class Forbidden(APIError):
    """403 Forbidden."""


class InvalidKey(Forbidden):
    """403: the application key is unknown."""


class InvalidCredential(Forbidden):
    """403: the consumer key is invalid or expired."""


class NotGrantedCall(Forbidden):
    """403: the consumer key is not allowed to call this route."""


class ResourceNotFoundError(APIError):
    """404 Not Found."""


class ResourceConflictError(APIError):
    """409 Conflict."""


class ResourceExpiredError(APIError):
    """460: the service has expired."""


_STATUS_ERRORS = {
    400: BadParametersError,
    401: NotCredential,
    403: Forbidden,
    404: ResourceNotFoundError,
    409: ResourceConflictError,
    460: ResourceExpiredError,
}

_FORBIDDEN_ERRORS = {
    "INVALID_KEY": InvalidKey,
    "INVALID_CREDENTIAL": InvalidCredential,
    "NOT_GRANTED_CALL": NotGrantedCall,
}


def raise_for_response(response: httpx.Response) -> None:
    """
    Raise the APIError subclass matching a non-2xx response.

    Parameters:
        response: httpx response returned by the API

    Raises:
        APIError: Or one of its subclasses, when the status is not 2xx
    """
    if response.is_success:
        return

    message = response.reason_phrase or f"HTTP {response.status_code}"
    error_code = None
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        message = payload.get("message") or message
        error_code = payload.get("errorCode")

    error_cls = _STATUS_ERRORS.get(response.status_code, HTTPError)
    if error_cls is Forbidden:
        error_cls = _FORBIDDEN_ERRORS.get(error_code, Forbidden)

    raise error_cls(
        message,
        status_code=response.status_code,
        error_code=error_code,
        query_id=response.headers.get(HEADER_QUERY_ID),
        response=response,
    )
