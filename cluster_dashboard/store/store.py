"""Store contract shared by every feature of the dashboard."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from cluster_dashboard.model import BaseModel, Identity

from .state import StoreState

T = TypeVar("T", bound=BaseModel)

Listener = Callable[[StoreState[T]], None]


class Store(ABC, Generic[T]):
    """Read capability of a store managing a remote collection of entities.

    Every action resolves normally. Failures are reported through the `error`
    of the state rather than raised to the caller.
    """

    @property
    @abstractmethod
    def state(self) -> StoreState[T]:
        """Return the current state of the store."""

    @abstractmethod
    async def fetch(self) -> None:
        """Replace the data with the remote collection.

        On failure the error is recorded and the previous data is kept.
        """

    @abstractmethod
    def reset(self) -> None:
        """Return to the initial state, discarding data and errors."""

    @abstractmethod
    def add_listener(self, callback: Listener[T]) -> Callable[[], None]:
        """Register a callback invoked with the new state after every change.

        Returns a callable that can be called to remove the listener.
        """


class Creatable(ABC, Generic[T]):
    """Capability of a store to create entities."""

    @abstractmethod
    async def create(self, item: T) -> None:
        """Create an entity and append it to the data once confirmed."""


class Updatable(ABC, Generic[T]):
    """Capability of a store to update entities in place."""

    @abstractmethod
    async def update(self, identity: Identity, changes: Mapping[str, Any]) -> None:
        """Apply partial changes to an entity and replace it once confirmed.

        Changes naming unknown attributes are rejected before any request.
        """


class Removable(ABC, Generic[T]):
    """Capability of a store to remove entities."""

    @abstractmethod
    async def remove(self, identity: Identity) -> None:
        """Delete an entity and drop it from the data once confirmed."""
