"""Entry point wiring a transport to every feature store."""

import logging
from typing import Any

from .config import DashboardConfig
from .features import (
    ApplicationStore,
    ClusterStore,
    DestinationClusterStore,
    KustomizationStore,
    SecretStoreStore,
    TenantStore,
)
from .store import RemoteStore
from .transport import HttpTransport, Transport

__all__ = ["DashboardClient"]

_LOGGER = logging.getLogger(__name__)


class DashboardClient:
    """Owns one store per dashboard area, all sharing a single transport.

    Each store exclusively owns its state; views reading the same store see
    the same state.
    """

    def __init__(
        self, config: DashboardConfig | None = None, transport: Transport | None = None
    ) -> None:
        self.config = config or DashboardConfig()
        self.transport = transport or HttpTransport(self.config.transport)
        store_config = self.config.store
        self.applications = ApplicationStore(self.transport, store_config)
        self.kustomizations = KustomizationStore(self.transport, store_config)
        self.clusters = ClusterStore(self.transport, store_config)
        self.destination_clusters = DestinationClusterStore(
            self.transport, store_config
        )
        self.secret_stores = SecretStoreStore(self.transport, store_config)
        self.tenants = TenantStore(self.transport, store_config)

    @property
    def stores(self) -> list[RemoteStore[Any]]:
        return [
            self.applications,
            self.kustomizations,
            self.clusters,
            self.destination_clusters,
            self.secret_stores,
            self.tenants,
        ]

    def reset(self) -> None:
        """Reset every store, e.g. when the user switches tenant."""
        for store in self.stores:
            store.reset()

    async def close(self) -> None:
        _LOGGER.debug("Closing dashboard client")
        self.reset()
        await self.transport.close()

    async def __aenter__(self) -> "DashboardClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
