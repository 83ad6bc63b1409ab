"""Stores backing each area of the dashboard."""

from .applications import ApplicationStore
from .clusters import ClusterStore, DestinationClusterStore
from .kustomizations import KustomizationStore
from .secrets import SecretStoreStore
from .tenants import TenantStore

__all__ = [
    "ApplicationStore",
    "ClusterStore",
    "DestinationClusterStore",
    "KustomizationStore",
    "SecretStoreStore",
    "TenantStore",
]
