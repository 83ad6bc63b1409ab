"""Resource quotas as shown to users and as enforced on clusters.

Quota values are free form strings carrying units from the UI (e.g. cores,
GiB). No unit parsing or validation happens here.
"""

from dataclasses import dataclass, fields
from typing import Literal

from .model import BaseModel

__all__ = [
    "UIResourceQuota",
    "ClusterResourceQuota",
    "QuotaField",
    "QUOTA_FIELDS",
    "to_cluster_quota",
    "to_ui_quota",
]

DEFAULT_PVCS = "50"
DEFAULT_NODEPORTS = "20"


@dataclass
class UIResourceQuota(BaseModel):
    """Quota limits exposed to the end user."""

    cpu: str
    memory: str
    storage: str
    pods: str


@dataclass
class ClusterResourceQuota(UIResourceQuota):
    """Quota limits required by the cluster enforcement layer."""

    pvcs: str
    nodeports: str


@dataclass(frozen=True)
class QuotaField:
    """Metadata used to render a single quota input."""

    name: Literal["cpu", "memory", "storage", "pods"]
    label: str
    unit: str
    tooltip: str


QUOTA_FIELDS: tuple[QuotaField, ...] = (
    QuotaField(
        name="cpu",
        label="CPU Limit",
        unit="cores",
        tooltip="Maximum CPU cores that can be allocated",
    ),
    QuotaField(
        name="memory",
        label="Memory Limit",
        unit="GiB",
        tooltip="Maximum memory that can be allocated",
    ),
    QuotaField(
        name="storage",
        label="Storage Limit",
        unit="GiB",
        tooltip="Maximum storage space that can be allocated",
    ),
    QuotaField(
        name="pods",
        label="Pod Limit",
        unit="pods",
        tooltip="Maximum number of pods that can be created",
    ),
)


def to_cluster_quota(quota: UIResourceQuota) -> ClusterResourceQuota:
    """Derive the cluster quota, adding the platform default limits."""
    return ClusterResourceQuota(
        cpu=quota.cpu,
        memory=quota.memory,
        storage=quota.storage,
        pods=quota.pods,
        pvcs=DEFAULT_PVCS,
        nodeports=DEFAULT_NODEPORTS,
    )


def to_ui_quota(quota: ClusterResourceQuota) -> UIResourceQuota:
    """Strip the limits that are not exposed to the end user."""
    return UIResourceQuota(
        **{f.name: getattr(quota, f.name) for f in fields(UIResourceQuota)}
    )
