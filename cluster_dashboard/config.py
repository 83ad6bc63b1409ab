"""Configuration objects for cluster-dashboard."""

from dataclasses import dataclass, field
from enum import StrEnum
import os

from .exceptions import InputException

ENV_BASE_URL = "DASHBOARD_BASE_URL"
ENV_TOKEN = "DASHBOARD_TOKEN"
ENV_TIMEOUT = "DASHBOARD_TIMEOUT"
ENV_FETCH_ORDERING = "DASHBOARD_FETCH_ORDERING"

DEFAULT_BASE_URL = "http://localhost:38080"
DEFAULT_TIMEOUT = 30.0


class FetchOrdering(StrEnum):
    """How a store applies overlapping fetch resolutions."""

    LAST_RESOLUTION_WINS = "last_resolution_wins"
    """Apply every resolution as it arrives, stale or not."""

    LATEST_REQUEST_WINS = "latest_request_wins"
    """Discard resolutions of fetches that are no longer the latest issued."""


@dataclass
class TransportConfig:
    """Configuration for the HTTP transport."""

    base_url: str = DEFAULT_BASE_URL
    token: str = ""
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class StoreConfig:
    """Configuration for a store."""

    fetch_ordering: FetchOrdering = FetchOrdering.LATEST_REQUEST_WINS


@dataclass
class DashboardConfig:
    """Configuration for the dashboard client."""

    transport: TransportConfig = field(default_factory=TransportConfig)
    store: StoreConfig = field(default_factory=StoreConfig)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "DashboardConfig":
        """Build the configuration from environment variables."""
        env = os.environ if environ is None else environ
        try:
            timeout = float(env.get(ENV_TIMEOUT, DEFAULT_TIMEOUT))
        except ValueError as err:
            raise InputException(f"Invalid {ENV_TIMEOUT}: {err}") from err
        ordering = env.get(ENV_FETCH_ORDERING, FetchOrdering.LATEST_REQUEST_WINS)
        try:
            fetch_ordering = FetchOrdering(ordering)
        except ValueError as err:
            raise InputException(f"Invalid {ENV_FETCH_ORDERING}: {ordering}") from err
        return cls(
            transport=TransportConfig(
                base_url=env.get(ENV_BASE_URL, DEFAULT_BASE_URL),
                token=env.get(ENV_TOKEN, ""),
                timeout=timeout,
            ),
            store=StoreConfig(fetch_ordering=fetch_ordering),
        )
