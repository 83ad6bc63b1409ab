"""Tenants shown on the settings page."""

from dataclasses import dataclass, field

from mashumaro import field_options

from .model import BaseModel

__all__ = ["TenantInfo"]


@dataclass
class TenantInfo(BaseModel):
    """A tenant the current user belongs to."""

    id: str
    name: str
    description: str = ""
    owner: str = ""
    status: str = ""
    created_at: str = field(metadata=field_options(alias="createdAt"), default="")
    updated_at: str = field(metadata=field_options(alias="updatedAt"), default="")
    secret_path: str = field(metadata=field_options(alias="secretPath"), default="")
