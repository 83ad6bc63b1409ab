"""Transport used by the stores to reach the dashboard API.

The stores only issue logical requests (fetch a collection, create, update or
delete an item). A transport resolves each request with a decoded entity or
raises one of `NetworkError` or `ApiError`.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
import logging
from typing import Any, TypeVar

import httpx

from .config import TransportConfig
from .exceptions import ApiError, InputException, NetworkError
from .model import BaseModel, ListResponse

__all__ = [
    "Transport",
    "HttpTransport",
]

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class Transport(ABC):
    """Interface for issuing requests against the dashboard API."""

    @abstractmethod
    async def fetch_collection(self, path: str, model: type[T]) -> list[T]:
        """Fetch every item of a collection."""

    @abstractmethod
    async def fetch_item(self, path: str, model: type[T]) -> T:
        """Fetch a single item."""

    @abstractmethod
    async def create_item(self, path: str, model: type[T], item: T) -> T | None:
        """Create an item, returning the stored entity if the API echoes it."""

    @abstractmethod
    async def update_item(
        self, path: str, model: type[T], changes: Mapping[str, Any]
    ) -> T | None:
        """Apply partial changes to an item, returning the entity if echoed."""

    @abstractmethod
    async def delete_item(self, path: str) -> None:
        """Delete an item."""

    @abstractmethod
    async def put(self, path: str, payload: Mapping[str, Any]) -> None:
        """Replace a sub resource with the given payload."""

    @abstractmethod
    async def post(self, path: str, model: type[T], payload: BaseModel) -> T:
        """Submit a request document and decode the result it produces."""

    @abstractmethod
    async def get_json(self, path: str) -> Any:
        """Fetch an arbitrary JSON document."""

    async def close(self) -> None:
        """Release any resources held by the transport."""


def auth_headers(token: str) -> dict[str, str]:
    """Return the headers identifying the caller."""
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}


class HttpTransport(Transport):
    """Transport backed by an `httpx.AsyncClient`."""

    def __init__(
        self,
        config: TransportConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize HttpTransport.

        An explicit `transport` replaces the network layer of the client,
        which is how tests serve canned responses.
        """
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers=auth_headers(config.token),
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self, method: str, path: str, payload: Any | None = None
    ) -> httpx.Response:
        _LOGGER.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, json=payload)
        except httpx.TransportError as err:
            raise NetworkError(
                f"{method} {path} failed: {str(err) or err.__class__.__name__}"
            ) from err
        if response.is_error:
            message = _error_message(response)
            _LOGGER.debug(
                "%s %s returned %s: %s", method, path, response.status_code, message
            )
            raise ApiError(response.status_code, message)
        return response

    async def get_json(self, path: str) -> Any:
        return _decode_json(await self._request("GET", path))

    async def fetch_collection(self, path: str, model: type[T]) -> list[T]:
        response = await self._request("GET", path)
        doc = _decode_json(response)
        if doc is None:
            return []
        try:
            envelope = ListResponse.parse_doc(doc, model)
        except InputException as err:
            raise ApiError(response.status_code, str(err)) from err
        if not envelope.success and envelope.error:
            raise ApiError(response.status_code, envelope.error)
        return envelope.items

    async def fetch_item(self, path: str, model: type[T]) -> T:
        response = await self._request("GET", path)
        if (item := _decode_item(response, model)) is None:
            raise ApiError(response.status_code, f"Empty response for {path}")
        return item

    async def create_item(self, path: str, model: type[T], item: T) -> T | None:
        response = await self._request("POST", path, item.to_dict())
        return _decode_item(response, model)

    async def update_item(
        self, path: str, model: type[T], changes: Mapping[str, Any]
    ) -> T | None:
        response = await self._request("PUT", path, model.encode_changes(changes))
        return _decode_item(response, model)

    async def delete_item(self, path: str) -> None:
        await self._request("DELETE", path)

    async def put(self, path: str, payload: Mapping[str, Any]) -> None:
        await self._request("PUT", path, dict(payload))

    async def post(self, path: str, model: type[T], payload: BaseModel) -> T:
        response = await self._request("POST", path, payload.to_dict())
        if (result := _decode_item(response, model)) is None:
            raise ApiError(response.status_code, f"Empty response for {path}")
        return result


def _error_message(response: httpx.Response) -> str:
    try:
        doc = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(doc, dict):
        for key in ("error", "message"):
            if doc.get(key):
                return str(doc[key])
    return response.reason_phrase


def _decode_json(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as err:
        raise ApiError(response.status_code, f"Invalid JSON payload: {err}") from err


def _decode_item(response: httpx.Response, model: type[T]) -> T | None:
    """Decode a single entity, or None when the response carries no entity."""
    doc = _decode_json(response)
    if not doc:
        return None
    try:
        return model.parse_doc(doc)
    except InputException as err:
        raise ApiError(response.status_code, str(err)) from err
