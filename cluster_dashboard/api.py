"""Paths of the dashboard REST API."""

from .model import Identity

API_BASE = "/api/v1"

APPLICATIONS = f"{API_BASE}/deploy/applications"
APPLICATIONS_VALIDATE = f"{APPLICATIONS}/validate"
KUSTOMIZATIONS = f"{API_BASE}/deploy/kustomizations"
CLUSTERS = f"{API_BASE}/clusters"
TENANTS = f"{API_BASE}/tenants"
APP_CODES = f"{API_BASE}/appcode"
SECRET_STORES = f"{API_BASE}/security/externalsecrets/secretstore"
HEALTH = f"{API_BASE}/healthz"


def item_path(collection: str, identity: Identity) -> str:
    """Return the path of a single item in a collection."""
    return f"{collection}/{identity}"


def cluster_quota_path(name: str) -> str:
    """Return the path used to update the quota of a cluster."""
    return f"{item_path(CLUSTERS, name)}/quota"
