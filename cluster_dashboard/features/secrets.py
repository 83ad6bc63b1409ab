"""Store for external secret stores."""

from cluster_dashboard import api
from cluster_dashboard.config import StoreConfig
from cluster_dashboard.security import SecretStore
from cluster_dashboard.store import CreateAction, RemoveAction, UpdateAction
from cluster_dashboard.transport import Transport


class SecretStoreStore(
    CreateAction[SecretStore],
    UpdateAction[SecretStore],
    RemoveAction[SecretStore],
):
    """External secret stores can be registered, edited and removed."""

    def __init__(self, transport: Transport, config: StoreConfig | None = None) -> None:
        super().__init__(transport, api.SECRET_STORES, SecretStore, config)

    def unhealthy(self) -> list[SecretStore]:
        """Return the loaded secret stores not reporting healthy."""
        return [store for store in self.state.data if store.health.status != "Healthy"]
