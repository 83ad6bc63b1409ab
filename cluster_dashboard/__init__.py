"""
cluster-dashboard is a client library for the deployment dashboard API.

It models the clusters, applications, kustomizations, quotas and secret stores
managed through the dashboard, and provides asynchronous stores that keep a
local, observable copy of each remote collection.
"""

__all__ = [
    "api",
    "application",
    "client",
    "cluster",
    "config",
    "exceptions",
    "features",
    "model",
    "quota",
    "security",
    "store",
    "tenant",
    "transport",
]
