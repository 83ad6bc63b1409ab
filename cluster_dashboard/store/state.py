"""State held by a store."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

from cluster_dashboard.exceptions import StoreError
from cluster_dashboard.model import BaseModel

T = TypeVar("T", bound=BaseModel)


class Phase(StrEnum):
    """Lifecycle phase of a store."""

    IDLE = "Idle"
    LOADING = "Loading"
    LOADED = "Loaded"
    FAILED = "Failed"


@dataclass(frozen=True)
class StoreState(Generic[T]):
    """Snapshot of the collection managed by a store."""

    data: tuple[T, ...] = ()
    """The entities in the order they were received."""

    is_loading: bool = False
    """True while any request issued by the store is in flight."""

    error: StoreError | None = None
    """The last error, kept until reset or superseded by a success."""

    fetched: bool = False
    """True once a fetch has succeeded since the last reset."""

    @property
    def phase(self) -> Phase:
        """Return the lifecycle phase derived from the state."""
        if self.is_loading:
            return Phase.LOADING
        if self.error is not None:
            return Phase.FAILED
        if self.fetched:
            return Phase.LOADED
        return Phase.IDLE

    def __str__(self) -> str:
        """Return a string representation of the state."""
        if self.error is not None:
            return f"{self.phase} ({len(self.data)} items): {self.error}"
        return f"{self.phase} ({len(self.data)} items)"
