"""Stores for management and destination clusters."""

from collections.abc import Mapping
import dataclasses
from typing import Any

from cluster_dashboard import api
from cluster_dashboard.cluster import (
    ALL_ENVIRONMENTS,
    ALL_PROVIDERS,
    ClusterInfo,
    ClusterStats,
    cluster_stats,
    filter_clusters,
)
from cluster_dashboard.config import StoreConfig
from cluster_dashboard.quota import UIResourceQuota, to_cluster_quota, to_ui_quota
from cluster_dashboard.store import RemoteStore
from cluster_dashboard.transport import Transport


class ClusterStore(RemoteStore[ClusterInfo]):
    """Read-only view of the registered clusters."""

    def __init__(self, transport: Transport, config: StoreConfig | None = None) -> None:
        super().__init__(transport, api.CLUSTERS, ClusterInfo, config)

    def filter(
        self,
        search: str = "",
        environment: str = ALL_ENVIRONMENTS,
        provider: str = ALL_PROVIDERS,
    ) -> list[ClusterInfo]:
        """Filter the loaded clusters."""
        return filter_clusters(self.state.data, search, environment, provider)

    def stats(self) -> ClusterStats:
        """Summarize the loaded clusters."""
        return cluster_stats(self.state.data)


class DestinationClusterStore(ClusterStore):
    """Clusters applications are deployed to, with editable quotas."""

    async def update_quota(self, name: str, quota: UIResourceQuota) -> None:
        """Apply a user quota to a cluster.

        The quota is sent with the platform default limits added. Once
        confirmed the matching cluster holds the user facing quota.
        """
        cluster_quota = to_cluster_quota(quota)

        def apply(_: None) -> Mapping[str, Any]:
            return {
                "data": tuple(
                    dataclasses.replace(cluster, quota=to_ui_quota(cluster_quota))
                    if cluster.identity == name
                    else cluster
                    for cluster in self.state.data
                )
            }

        await self._run(
            "update_quota",
            lambda: self._transport.put(
                api.cluster_quota_path(name), cluster_quota.to_dict()
            ),
            apply,
        )
