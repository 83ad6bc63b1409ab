"""Module for stores backed by the dashboard API."""

from collections.abc import Awaitable, Callable, Mapping
import dataclasses
import itertools
import logging
from typing import Any, Generic, TypeVar

from cluster_dashboard.config import FetchOrdering, StoreConfig
from cluster_dashboard.context import trace_action
from cluster_dashboard.exceptions import (
    ApiError,
    NetworkError,
    StoreError,
    ValidationError,
)
from cluster_dashboard.model import BaseModel, Identity
from cluster_dashboard.api import item_path
from cluster_dashboard.transport import Transport

from .state import StoreState
from .store import Creatable, Listener, Removable, Store, Updatable

__all__ = [
    "RemoteStore",
    "CreateAction",
    "UpdateAction",
    "RemoveAction",
]

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)
R = TypeVar("R")

STORE_ERRORS = (NetworkError, ApiError, ValidationError)

FETCH = "fetch"
CREATE = "create"
UPDATE = "update"
REMOVE = "remove"


class RemoteStore(Store[T], Generic[T]):
    """Store holding a collection fetched from a single API path.

    Requests are tracked by a monotonically increasing id. Under
    `FetchOrdering.LATEST_REQUEST_WINS` only the resolution of the most
    recently issued fetch is applied; `reset()` counts as a newer request so
    fetches issued before it are discarded too.
    """

    def __init__(
        self,
        transport: Transport,
        path: str,
        model: type[T],
        config: StoreConfig | None = None,
    ) -> None:
        """Initialize the RemoteStore."""
        self._transport = transport
        self._path = path
        self._model = model
        self._config = config or StoreConfig()
        self._state: StoreState[T] = StoreState()
        self._listeners: list[Listener[T]] = []
        self._request_ids = itertools.count(1)
        self._pending: set[int] = set()
        self._latest_fetch = 0
        self._error_action: str | None = None

    @property
    def name(self) -> str:
        """Name used in logs."""
        return self.__class__.__name__

    @property
    def state(self) -> StoreState[T]:
        return self._state

    @property
    def model(self) -> type[T]:
        return self._model

    def add_listener(self, callback: Listener[T]) -> Callable[[], None]:
        def remove() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        self._listeners.append(callback)
        return remove

    def _set_state(self, state: StoreState[T]) -> None:
        if state == self._state:
            return
        self._state = state
        for cb in list(self._listeners):
            try:
                cb(state)
            except Exception:
                _LOGGER.exception("Listener callback failed for %s", self.name)

    def _begin(self) -> int:
        request_id = next(self._request_ids)
        self._pending.add(request_id)
        self._set_state(dataclasses.replace(self._state, is_loading=True))
        return request_id

    def _finish(
        self,
        request_id: int,
        action: str,
        changes: Mapping[str, Any] | None = None,
        error: StoreError | None = None,
    ) -> None:
        """Record the resolution of a request in the state."""
        self._pending.discard(request_id)
        updates: dict[str, Any] = {"is_loading": bool(self._pending)}
        if error is not None:
            _LOGGER.warning("%s %s failed: %s", self.name, action, error)
            self._error_action = action
            updates["error"] = error
        else:
            updates.update(changes or {})
            if action == FETCH or self._error_action == action:
                self._error_action = None
                updates["error"] = None
        self._set_state(dataclasses.replace(self._state, **updates))

    def _reject(self, action: str, message: str) -> None:
        """Record input rejected before any request was issued."""
        _LOGGER.warning("%s %s rejected: %s", self.name, action, message)
        self._error_action = action
        self._set_state(
            dataclasses.replace(self._state, error=ValidationError(message))
        )

    async def _run(
        self,
        action: str,
        request: Callable[[], Awaitable[R]],
        apply: Callable[[R], Mapping[str, Any]],
    ) -> bool:
        """Issue a request and apply its result to the state.

        The `apply` callback computes the state changes from the current state
        once the request has resolved. Returns True on success.
        """
        request_id = self._begin()
        try:
            with trace_action(self.name, action, request_id):
                try:
                    result = await request()
                except STORE_ERRORS as err:
                    self._finish(request_id, action, error=err)
                    return False
                self._finish(request_id, action, changes=apply(result))
                return True
        finally:
            self._release(request_id)

    async def fetch(self) -> None:
        request_id = self._begin()
        self._latest_fetch = request_id
        try:
            with trace_action(self.name, FETCH, request_id):
                try:
                    items = await self._transport.fetch_collection(
                        self._path, self._model
                    )
                except STORE_ERRORS as err:
                    if not self._is_stale(request_id):
                        self._finish(request_id, FETCH, error=err)
                    return
                if not self._is_stale(request_id):
                    self._finish(
                        request_id,
                        FETCH,
                        changes={"data": tuple(items), "fetched": True},
                    )
        finally:
            self._release(request_id)

    def _is_stale(self, request_id: int) -> bool:
        if (
            self._config.fetch_ordering == FetchOrdering.LATEST_REQUEST_WINS
            and request_id != self._latest_fetch
        ):
            _LOGGER.debug(
                "%s discarding stale fetch %d (latest %d)",
                self.name,
                request_id,
                self._latest_fetch,
            )
            return True
        return False

    def _release(self, request_id: int) -> None:
        """Stop tracking a request that ended without being applied.

        This covers stale fetches, cancelled requests and requests ended by an
        error outside the store error taxonomy. The data and error are kept.
        """
        if request_id not in self._pending:
            return
        _LOGGER.debug("%s request %d ended unapplied", self.name, request_id)
        self._pending.discard(request_id)
        self._set_state(
            dataclasses.replace(self._state, is_loading=bool(self._pending))
        )

    def reset(self) -> None:
        _LOGGER.debug("Resetting %s", self.name)
        self._pending.clear()
        self._latest_fetch = next(self._request_ids)
        self._error_action = None
        self._set_state(StoreState())

    def _merge(self, existing: T, incoming: T) -> T:
        """Return the entity replacing `existing` after an update."""
        return incoming

    async def _create(self, item: T) -> None:
        if not isinstance(item, self._model):
            self._reject(
                CREATE,
                f"Expected {self._model.__name__}, got {item.__class__.__name__}",
            )
            return

        def apply(created: T | None) -> Mapping[str, Any]:
            return {"data": self._state.data + (created or item,)}

        await self._run(
            CREATE,
            lambda: self._transport.create_item(self._path, self._model, item),
            apply,
        )

    async def _update(self, identity: Identity, changes: Mapping[str, Any]) -> None:
        if not changes:
            self._reject(UPDATE, f"No changes for {self._model.__name__} {identity}")
            return
        if unknown := set(changes) - self._model.field_names():
            self._reject(
                UPDATE,
                f"Unknown {self._model.__name__} fields: {', '.join(sorted(unknown))}",
            )
            return
        if self._model.id_attr in changes:
            self._reject(
                UPDATE, f"Cannot change {self._model.__name__}.{self._model.id_attr}"
            )
            return

        def apply(updated: T | None) -> Mapping[str, Any]:
            data = []
            for existing in self._state.data:
                if existing.identity == identity:
                    incoming = updated or dataclasses.replace(existing, **changes)
                    existing = self._merge(existing, incoming)
                data.append(existing)
            return {"data": tuple(data)}

        await self._run(
            UPDATE,
            lambda: self._transport.update_item(
                item_path(self._path, identity), self._model, changes
            ),
            apply,
        )

    async def _remove(self, identity: Identity) -> None:
        def apply(_: None) -> Mapping[str, Any]:
            return {
                "data": tuple(
                    item for item in self._state.data if item.identity != identity
                )
            }

        await self._run(
            REMOVE,
            lambda: self._transport.delete_item(item_path(self._path, identity)),
            apply,
        )


class CreateAction(RemoteStore[T], Creatable[T]):
    """Mixin exposing creation on a RemoteStore."""

    async def create(self, item: T) -> None:
        await self._create(item)


class UpdateAction(RemoteStore[T], Updatable[T]):
    """Mixin exposing in place updates on a RemoteStore."""

    async def update(self, identity: Identity, changes: Mapping[str, Any]) -> None:
        await self._update(identity, changes)


class RemoveAction(RemoteStore[T], Removable[T]):
    """Mixin exposing removal on a RemoteStore."""

    async def remove(self, identity: Identity) -> None:
        await self._remove(identity)
