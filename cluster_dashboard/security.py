"""External secret stores."""

from dataclasses import dataclass, field
from typing import Literal

from mashumaro import field_options

from .model import BaseModel

__all__ = ["SecretStore", "SecretStoreHealth"]


@dataclass
class SecretStoreHealth(BaseModel):
    status: Literal["Healthy", "Warning", "Error"]
    message: str | None = None


@dataclass
class SecretStore(BaseModel):
    """A backend that external secrets are synced from."""

    id: str
    name: str
    provider: Literal["AWS", "GCP", "Azure", "Vault", "CyberArk"]
    type: str
    status: Literal["Active", "Inactive", "Error"]
    health: SecretStoreHealth
    last_synced: str = field(metadata=field_options(alias="lastSynced"), default="")
    created_at: str = field(metadata=field_options(alias="createdAt"), default="")
    last_updated: str = field(metadata=field_options(alias="lastUpdated"), default="")
    path: str | None = None
