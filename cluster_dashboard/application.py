"""Application templates deployed through the dashboard."""

from dataclasses import dataclass, field
from typing import ClassVar, Literal

from mashumaro import field_options

from .model import BaseModel

__all__ = [
    "ApplicationTemplate",
    "ApplicationSource",
    "ApplicationHealth",
    "ApplicationSpecifier",
    "ApplicationSourceRequest",
    "ApplicationInstantiation",
    "ApplicationTarget",
    "ApplicationCreateRequest",
    "SourceEnvironment",
    "ValidateResult",
    "DryRunEnvironment",
    "DryRunResult",
]

ApplicationHealth = Literal["Healthy", "Degraded", "Progressing", "Suspended", "Missing"]


@dataclass
class ApplicationSource(BaseModel):
    url: str
    target_revision: str = field(
        metadata=field_options(alias="targetRevision"), default=""
    )


@dataclass
class ApplicationTemplate(BaseModel):
    """An application instantiated from a repository template.

    Applications are addressed by name in the API so the name is the identity.
    """

    id_attr: ClassVar[str] = "name"

    id: int
    name: str
    owner: str
    path: str
    source: ApplicationSource
    app_type: Literal["kustomize", "helm", "helm+kustomize"] = field(
        metadata=field_options(alias="appType"), default="kustomize"
    )
    environments: list[str] = field(default_factory=list)
    description: str | None = None
    health: ApplicationHealth | None = None


@dataclass
class ApplicationSpecifier(BaseModel):
    """Variant specific settings of an application source."""

    helm_manifest_path: str | None = None
    """Directory holding `Chart.yaml`, required for Helm applications."""


@dataclass
class ApplicationSourceRequest(BaseModel):
    """The repository an application is instantiated from."""

    repo: str
    target_revision: str | None = None
    path: str | None = None
    submodules: bool = False
    application_specifier: ApplicationSpecifier | None = None


@dataclass
class ApplicationInstantiation(BaseModel):
    application_name: str
    tenant_name: str
    appcode: str
    description: str | None = None


@dataclass
class ApplicationTarget(BaseModel):
    """A cluster and namespace the application is deployed to."""

    cluster: str
    namespace: str


@dataclass
class ApplicationCreateRequest(BaseModel):
    """Request instantiating an application, or only rendering it on a dry run."""

    application_source: ApplicationSourceRequest
    application_instantiation: ApplicationInstantiation
    application_target: list[ApplicationTarget] = field(default_factory=list)
    is_dryrun: bool = False

    @property
    def name(self) -> str:
        return self.application_instantiation.application_name


@dataclass
class SourceEnvironment(BaseModel):
    """Whether a source is usable for one environment."""

    environments: str
    valid: bool = False
    error: str | None = None


@dataclass
class ValidateResult(BaseModel):
    """Outcome of validating an application source."""

    success: bool
    message: str = ""
    type: str = ""
    """The detected application type."""

    suitable_env: list[SourceEnvironment] = field(
        metadata=field_options(alias="suiteable_env"), default_factory=list
    )


@dataclass
class DryRunEnvironment(BaseModel):
    """The manifests rendered for one environment on a dry run."""

    environment: str
    is_valid: bool = False
    manifest: str | None = None
    argocd_file: str | None = None
    error: str | None = None


@dataclass
class DryRunResult(BaseModel):
    """Outcome of rendering an application without deploying it."""

    success: bool
    message: str = ""
    total: int = 0
    environments: list[DryRunEnvironment] = field(default_factory=list)

    @property
    def invalid_environments(self) -> list[str]:
        """Return the environments that failed to render."""
        return [env.environment for env in self.environments if not env.is_valid]
