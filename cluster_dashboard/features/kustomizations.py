"""Store for kustomizations tracked by the dashboard."""

import dataclasses
import logging

from cluster_dashboard import api
from cluster_dashboard.config import StoreConfig
from cluster_dashboard.model import Kustomization
from cluster_dashboard.store import CreateAction, RemoveAction, UpdateAction
from cluster_dashboard.transport import Transport

_LOGGER = logging.getLogger(__name__)


class KustomizationStore(
    CreateAction[Kustomization],
    UpdateAction[Kustomization],
    RemoveAction[Kustomization],
):
    """Kustomizations support the full set of write actions."""

    def __init__(self, transport: Transport, config: StoreConfig | None = None) -> None:
        super().__init__(transport, api.KUSTOMIZATIONS, Kustomization, config)

    def _merge(self, existing: Kustomization, incoming: Kustomization) -> Kustomization:
        """Never move `last_applied` backwards."""
        if (incoming.last_applied or "") < (existing.last_applied or ""):
            _LOGGER.debug(
                "Keeping last applied %s for %s (update had %s)",
                existing.last_applied,
                existing.id,
                incoming.last_applied,
            )
            return dataclasses.replace(incoming, last_applied=existing.last_applied)
        return incoming

    def for_environment(self, environment: str) -> list[Kustomization]:
        """Return the loaded kustomizations targeting an environment."""
        return [k for k in self.state.data if environment in k.environments]
