"""Representation of the entities managed by the dashboard.

Entities are decoded from the camelCase documents returned by the dashboard
API with `parse_doc` and encoded back with `to_dict`. Every entity exposes an
`identity` used by the stores to replace or remove items in place.
"""

from dataclasses import dataclass, field, fields
import logging
from typing import Any, ClassVar, Generic, Literal, Mapping, TypeVar

import yaml
from mashumaro import DataClassDictMixin, field_options
from mashumaro.config import BaseConfig
from mashumaro.exceptions import InvalidFieldValue, MissingField

from .exceptions import InputException

__all__ = [
    "BaseModel",
    "GitSource",
    "Source",
    "ResourceCounts",
    "Kustomization",
    "Repository",
    "ListResponse",
    "parse_source",
]

_LOGGER = logging.getLogger(__name__)

KUSTOMIZATION_APP_TYPE = "kustomization"
GIT_SOURCE_TYPE = "git"
DEFAULT_BRANCH = "main"

Identity = str | int

T = TypeVar("T", bound="BaseModel")


@dataclass
class BaseModel(DataClassDictMixin):
    """Base class for all dashboard entities."""

    id_attr: ClassVar[str] = "id"
    """The attribute holding the identity used in API paths and store lookups."""

    @property
    def identity(self) -> Identity:
        """Return the identity of this entity."""
        return getattr(self, self.id_attr)  # type: ignore[no-any-return]

    @classmethod
    def parse_doc(cls: type[T], doc: Mapping[str, Any]) -> T:
        """Parse an entity from an API document."""
        if not isinstance(doc, Mapping):
            raise InputException(f"Invalid {cls.__name__} document: {doc!r}")
        try:
            return cls.from_dict(dict(doc))
        except (
            MissingField,
            InvalidFieldValue,
            ValueError,
            TypeError,
            AttributeError,
        ) as err:
            raise InputException(f"Invalid {cls.__name__} document: {err}") from err

    @classmethod
    def parse_yaml(cls: type[T], content: str) -> T:
        """Parse a serialized entity."""
        try:
            doc = yaml.load(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError as err:
            raise InputException(f"Unable to parse {cls.__name__}: {err}") from err
        return cls.parse_doc(doc)

    def yaml(self) -> str:
        """Return a YAML string representation of the entity."""
        return yaml.dump(self.to_dict(), sort_keys=False, explicit_start=True)

    @classmethod
    def field_names(cls) -> set[str]:
        """Return the attribute names that may be changed on an update."""
        return {f.name for f in fields(cls)}

    @classmethod
    def encode_changes(cls, changes: Mapping[str, Any]) -> dict[str, Any]:
        """Encode a partial set of attribute changes in the API wire format."""
        aliases = {f.name: f.metadata.get("alias", f.name) for f in fields(cls)}
        return {aliases[key]: _encode_value(value) for key, value in changes.items()}

    class Config(BaseConfig):
        omit_none = True
        serialize_by_alias = True


def _encode_value(value: Any) -> Any:
    if isinstance(value, DataClassDictMixin):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_encode_value(item) for item in value]
    return value


@dataclass
class Repository(BaseModel):
    """A minimal pointer to the source of a kustomization."""

    id_attr: ClassVar[str] = "url"

    url: str
    """The URL of the git repository."""

    branch: str
    """The branch to check out."""


@dataclass
class GitSource(BaseModel):
    """A kustomization sourced from a git repository.

    The branch, tag and commit are informational and may be set together.
    """

    id_attr: ClassVar[str] = "url"

    url: str
    """The URL of the git repository."""

    type: Literal["git"] = GIT_SOURCE_TYPE
    """Discriminator for the source variant."""

    branch: str | None = None
    """The git branch to checkout."""

    tag: str | None = None
    """The git tag to checkout."""

    commit: str | None = None
    """The git commit SHA to checkout."""

    @property
    def ref_str(self) -> str | None:
        """Get the most specific reference string for the source."""
        if self.commit:
            return f"commit:{self.commit}"
        if self.tag:
            return f"tag:{self.tag}"
        if self.branch:
            return f"branch:{self.branch}"
        return None

    @property
    def repository(self) -> Repository:
        """Project the source to a repository pointer."""
        return Repository(url=self.url, branch=self.branch or DEFAULT_BRANCH)


Source = GitSource
"""All supported kustomization sources, discriminated by `type`."""

SOURCE_TYPES: dict[str, type[Source]] = {
    GIT_SOURCE_TYPE: GitSource,
}


def parse_source(doc: Mapping[str, Any]) -> Source:
    """Parse a kustomization source, dispatching on its `type`."""
    if not isinstance(doc, Mapping):
        raise InputException(f"Invalid source document: {doc!r}")
    if not (source_type := doc.get("type")):
        raise InputException(f"Invalid source missing type: {doc}")
    if (
        not isinstance(source_type, str)
        or (source_cls := SOURCE_TYPES.get(source_type)) is None
    ):
        raise InputException(f"Unsupported source type '{source_type}': {doc}")
    return source_cls.parse_doc(doc)


@dataclass
class ResourceCounts(BaseModel):
    """Summary of the objects rendered by a kustomization."""

    deployments: int = 0
    services: int = 0
    configmaps: int = 0
    secrets: int = 0
    ingresses: int = 0

    def __post_init__(self) -> None:
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ValueError(f"Resource count '{f.name}' must not be negative")

    @property
    def total(self) -> int:
        """Total number of objects across all kinds."""
        return sum(getattr(self, f.name) for f in fields(self))


@dataclass
class Kustomization(BaseModel):
    """A deployable unit tracked by the dashboard."""

    id: str
    """Opaque unique identifier."""

    name: str
    """Human readable label, not guaranteed to be unique."""

    path: str
    """Repository relative location of the manifests."""

    source: Source
    """Where the manifests come from."""

    validated: bool = False
    """Set after an external validation pass."""

    owner: str = ""
    """Free text attribution."""

    environments: list[str] = field(default_factory=list)
    """Environment names targeted, in display order."""

    last_applied: str = field(
        metadata=field_options(alias="lastApplied"), default=""
    )
    """Timestamp of the last apply."""

    app_type: Literal["kustomization"] = field(
        metadata=field_options(alias="appType"), default=KUSTOMIZATION_APP_TYPE
    )
    """Discriminator for the application variant."""

    resources: ResourceCounts = field(default_factory=ResourceCounts)
    """Materialized summary of the rendered objects."""

    description: str | None = None
    """Optional description."""

    @classmethod
    def parse_doc(cls, doc: Mapping[str, Any]) -> "Kustomization":
        """Parse a Kustomization from an API document."""
        if not isinstance(doc, Mapping):
            raise InputException(f"Invalid {cls.__name__} document: {doc!r}")
        if not (kustomization_id := doc.get("id")):
            raise InputException(f"Invalid {cls.__name__} missing id: {doc}")
        if not (name := doc.get("name")):
            raise InputException(f"Invalid {cls.__name__} missing name: {doc}")
        app_type = doc.get("appType", KUSTOMIZATION_APP_TYPE)
        if app_type != KUSTOMIZATION_APP_TYPE:
            raise InputException(
                f"Invalid {cls.__name__} unsupported appType '{app_type}': {doc}"
            )
        if not (source_doc := doc.get("source")):
            raise InputException(f"Invalid {cls.__name__} missing source: {doc}")
        if not isinstance(name, str):
            raise InputException(f"Invalid {cls.__name__} name {name!r}: {doc}")
        environments = _typed(cls, doc, "environments", list, [])
        if not all(isinstance(env, str) for env in environments):
            raise InputException(
                f"Invalid {cls.__name__} environments {environments!r}: {doc}"
            )
        return cls(
            id=str(kustomization_id),
            name=name,
            path=_typed(cls, doc, "path", str, ""),
            source=parse_source(source_doc),
            validated=bool(doc.get("validated", False)),
            owner=_typed(cls, doc, "owner", str, ""),
            environments=list(environments),
            last_applied=_typed(cls, doc, "lastApplied", str, ""),
            resources=ResourceCounts.parse_doc(
                _typed(cls, doc, "resources", Mapping, {})
            ),
            description=_typed(cls, doc, "description", str, None),
        )


def _typed(
    cls: type, doc: Mapping[str, Any], key: str, expected: type, default: Any
) -> Any:
    """Return an optional document value, rejecting values of the wrong type.

    A missing or null value is replaced by `default`.
    """
    if (value := doc.get(key)) is None:
        return default
    if not isinstance(value, expected):
        raise InputException(f"Invalid {cls.__name__} {key} {value!r}: {doc}")
    return value


@dataclass
class ListResponse(Generic[T]):
    """The envelope returned by collection endpoints."""

    items: list[T]
    success: bool = True
    total: int = 0
    error: str | None = None

    @classmethod
    def parse_doc(
        cls, doc: Mapping[str, Any], model: type[T]
    ) -> "ListResponse[T]":
        """Parse a collection envelope, decoding each item as `model`."""
        if not isinstance(doc, Mapping):
            raise InputException(f"Invalid list response: {doc!r}")
        if not isinstance(raw_items := doc.get("items") or [], list):
            raise InputException(f"Invalid list response items: {raw_items!r}")
        items = [model.parse_doc(item) for item in raw_items]
        _LOGGER.debug("Parsed %d %s items", len(items), model.__name__)
        if (total := doc.get("total")) is None:
            total = len(items)
        if not isinstance(total, int) or isinstance(total, bool):
            raise InputException(f"Invalid list response total: {total!r}")
        if (error := doc.get("error") or None) is not None:
            error = str(error)
        return cls(
            items=items,
            success=bool(doc.get("success", True)),
            total=total,
            error=error,
        )
