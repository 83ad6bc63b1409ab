"""Clusters registered with the dashboard."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import ClassVar, Literal

from mashumaro import field_options

from .model import BaseModel
from .quota import UIResourceQuota

__all__ = [
    "ClusterInfo",
    "ClusterVersion",
    "NodeCount",
    "ClusterResources",
    "Monitoring",
    "MonitoringUrls",
    "filter_clusters",
    "ClusterStats",
    "cluster_stats",
    "ALL_ENVIRONMENTS",
    "ALL_PROVIDERS",
]

ALL_ENVIRONMENTS = "All Environments"
ALL_PROVIDERS = "All Providers"


@dataclass
class ClusterVersion(BaseModel):
    kubernetes: str
    platform: str


@dataclass
class NodeCount(BaseModel):
    ready: int
    total: int


@dataclass
class ClusterResources(BaseModel):
    """Capacity reported by the cluster."""

    cpu: str
    memory: str
    storage: str
    pods: int


@dataclass
class MonitoringUrls(BaseModel):
    prometheus: str | None = None
    grafana: str | None = None
    alertmanager: str | None = None


@dataclass
class Monitoring(BaseModel):
    """Monitoring components installed on the cluster."""

    prometheus: bool = False
    grafana: bool = False
    alertmanager: bool = False
    urls: MonitoringUrls | None = None


@dataclass
class ClusterInfo(BaseModel):
    """A cluster known to the dashboard.

    Clusters are addressed by name in the API so the name is the identity.
    """

    id_attr: ClassVar[str] = "name"

    id: int
    name: str
    env: str
    status: Literal["active", "warning", "error"]
    provider: Literal["GKE", "OCP", "AKS", "EKS"]
    version: ClusterVersion
    nodes: NodeCount
    resources: ClusterResources
    monitoring: Monitoring = field(default_factory=Monitoring)
    console_url: str | None = field(
        metadata=field_options(alias="consoleUrl"), default=None
    )
    labels: dict[str, str] | None = None
    quota: UIResourceQuota | None = None


def filter_clusters(
    clusters: Iterable[ClusterInfo],
    search: str = "",
    environment: str = ALL_ENVIRONMENTS,
    provider: str = ALL_PROVIDERS,
) -> list[ClusterInfo]:
    """Filter clusters by a case-insensitive search term, environment and provider."""
    search_lower = search.lower()
    return [
        cluster
        for cluster in clusters
        if (search_lower in cluster.name.lower() or search_lower in cluster.env.lower())
        and (environment == ALL_ENVIRONMENTS or cluster.env == environment)
        and (provider == ALL_PROVIDERS or cluster.provider == provider)
    ]


@dataclass(frozen=True)
class ClusterStats:
    """Aggregate figures shown above the cluster list."""

    total: int
    healthy: int
    nodes_ready: int
    nodes_total: int


def cluster_stats(clusters: Iterable[ClusterInfo]) -> ClusterStats:
    """Summarize a set of clusters; only `active` clusters count as healthy."""
    cluster_list = list(clusters)
    return ClusterStats(
        total=len(cluster_list),
        healthy=sum(1 for cluster in cluster_list if cluster.status == "active"),
        nodes_ready=sum(cluster.nodes.ready for cluster in cluster_list),
        nodes_total=sum(cluster.nodes.total for cluster in cluster_list),
    )
