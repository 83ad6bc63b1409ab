"""Tests for the dashboard entities."""

from typing import Any

import pytest

from cluster_dashboard.exceptions import InputException
from cluster_dashboard.model import (
    GitSource,
    Kustomization,
    ListResponse,
    Repository,
    ResourceCounts,
    parse_source,
)

KUSTOMIZATION_DOC: dict[str, Any] = {
    "id": "k-1",
    "name": "podinfo",
    "path": "apps/podinfo/overlays/prod",
    "validated": True,
    "owner": "team-a",
    "environments": ["UAT", "SIT", "PRD"],
    "lastApplied": "2024-05-01T10:00:00Z",
    "appType": "kustomization",
    "source": {
        "type": "git",
        "url": "https://github.com/example/podinfo.git",
        "branch": "main",
        "commit": "abc123",
    },
    "resources": {
        "deployments": 2,
        "services": 1,
        "configmaps": 3,
        "secrets": 1,
        "ingresses": 0,
    },
}


def test_parse_kustomization() -> None:
    """Test parsing a kustomization document."""
    kustomization = Kustomization.parse_doc(KUSTOMIZATION_DOC)
    assert kustomization.id == "k-1"
    assert kustomization.identity == "k-1"
    assert kustomization.name == "podinfo"
    assert kustomization.validated
    assert kustomization.environments == ["UAT", "SIT", "PRD"]
    assert kustomization.last_applied == "2024-05-01T10:00:00Z"
    assert kustomization.app_type == "kustomization"
    assert kustomization.source == GitSource(
        url="https://github.com/example/podinfo.git", branch="main", commit="abc123"
    )
    assert kustomization.resources.configmaps == 3
    assert kustomization.resources.total == 7
    assert kustomization.description is None


def test_kustomization_to_dict() -> None:
    """Test the kustomization is encoded back to the wire format."""
    kustomization = Kustomization.parse_doc(KUSTOMIZATION_DOC)
    assert kustomization.to_dict() == KUSTOMIZATION_DOC


def test_kustomization_yaml() -> None:
    """Test the YAML representation round trips."""
    kustomization = Kustomization.parse_doc(KUSTOMIZATION_DOC)
    content = kustomization.yaml()
    assert content.startswith("---\nid: k-1\nname: podinfo\n")
    assert "lastApplied: '2024-05-01T10:00:00Z'" in content
    assert Kustomization.parse_yaml(content) == kustomization


@pytest.mark.parametrize(
    ("doc", "match"),
    [
        ({**KUSTOMIZATION_DOC, "id": ""}, "missing id"),
        ({**KUSTOMIZATION_DOC, "name": None}, "missing name"),
        ({**KUSTOMIZATION_DOC, "appType": "helm"}, "unsupported appType 'helm'"),
        ({**KUSTOMIZATION_DOC, "source": None}, "missing source"),
        (
            {**KUSTOMIZATION_DOC, "source": {"type": "oci", "url": "oci://x"}},
            "Unsupported source type 'oci'",
        ),
        (
            {**KUSTOMIZATION_DOC, "source": {"url": "https://x"}},
            "missing type",
        ),
        (
            {**KUSTOMIZATION_DOC, "resources": {"deployments": -1}},
            "must not be negative",
        ),
        ({**KUSTOMIZATION_DOC, "source": "git"}, "Invalid source document"),
        ({**KUSTOMIZATION_DOC, "name": ["podinfo"]}, "name"),
        ({**KUSTOMIZATION_DOC, "lastApplied": 1714557600}, "lastApplied"),
        ({**KUSTOMIZATION_DOC, "environments": "PRD"}, "environments"),
        ({**KUSTOMIZATION_DOC, "environments": ["PRD", None]}, "environments"),
        ({**KUSTOMIZATION_DOC, "resources": "none"}, "resources"),
    ],
)
def test_parse_kustomization_invalid(doc: dict[str, Any], match: str) -> None:
    """Test malformed documents are rejected."""
    with pytest.raises(InputException, match=match):
        Kustomization.parse_doc(doc)


def test_parse_kustomization_defaults() -> None:
    """Test optional fields fall back to defaults."""
    kustomization = Kustomization.parse_doc(
        {"id": 7, "name": "minimal", "source": {"type": "git", "url": "https://x"}}
    )
    assert kustomization.id == "7"
    assert kustomization.path == ""
    assert not kustomization.validated
    assert kustomization.environments == []
    assert kustomization.resources == ResourceCounts()


def test_parse_yaml_invalid() -> None:
    """Test invalid YAML is reported as an input error."""
    with pytest.raises(InputException, match="Unable to parse"):
        Kustomization.parse_yaml("id: [unterminated")


def test_resource_counts_negative() -> None:
    """Test negative counts are rejected."""
    with pytest.raises(ValueError, match="services"):
        ResourceCounts(services=-2)


def test_git_source_ref() -> None:
    """Test the most specific reference is preferred."""
    source = GitSource(url="https://x", branch="main", tag="v1.0", commit="abc")
    assert source.ref_str == "commit:abc"
    assert GitSource(url="https://x", branch="main", tag="v1.0").ref_str == "tag:v1.0"
    assert GitSource(url="https://x", branch="dev").ref_str == "branch:dev"
    assert GitSource(url="https://x").ref_str is None


def test_git_source_repository() -> None:
    """Test projecting a source to a repository pointer."""
    assert GitSource(url="https://x", branch="dev").repository == Repository(
        url="https://x", branch="dev"
    )
    assert GitSource(url="https://x", tag="v1").repository == Repository(
        url="https://x", branch="main"
    )


def test_parse_source() -> None:
    """Test source dispatch on the type discriminator."""
    source = parse_source({"type": "git", "url": "https://x", "tag": "v2"})
    assert isinstance(source, GitSource)
    assert source.tag == "v2"


def test_encode_changes() -> None:
    """Test partial changes are encoded with wire names."""
    assert Kustomization.encode_changes(
        {
            "last_applied": "2024-06-01T00:00:00Z",
            "source": GitSource(url="https://y"),
            "environments": ["PRD"],
        }
    ) == {
        "lastApplied": "2024-06-01T00:00:00Z",
        "source": {"type": "git", "url": "https://y"},
        "environments": ["PRD"],
    }


def test_list_response() -> None:
    """Test parsing the collection envelope."""
    response = ListResponse.parse_doc(
        {"success": True, "total": 1, "error": "", "items": [KUSTOMIZATION_DOC]},
        Kustomization,
    )
    assert response.success
    assert response.total == 1
    assert response.error is None
    assert [k.name for k in response.items] == ["podinfo"]


def test_list_response_missing_items() -> None:
    """Test a missing item list is treated as empty."""
    response = ListResponse.parse_doc({"success": True}, Kustomization)
    assert response.items == []
    assert response.total == 0


def test_list_response_invalid() -> None:
    """Test a non-object envelope is rejected."""
    with pytest.raises(InputException):
        ListResponse.parse_doc(["not", "an", "envelope"], Kustomization)  # type: ignore[arg-type]


def test_parse_kustomization_nulls() -> None:
    """Test null optional fields fall back to defaults."""
    kustomization = Kustomization.parse_doc(
        {
            **KUSTOMIZATION_DOC,
            "lastApplied": None,
            "owner": None,
            "environments": None,
            "resources": None,
        }
    )
    assert kustomization.last_applied == ""
    assert kustomization.owner == ""
    assert kustomization.environments == []
    assert kustomization.resources == ResourceCounts()


@pytest.mark.parametrize(
    "doc",
    [
        {"items": {"a": 1}},
        {"items": [], "total": "1"},
        {"items": [], "total": True},
    ],
)
def test_list_response_malformed(doc: dict[str, Any]) -> None:
    """Test envelopes with unexpected field types are rejected."""
    with pytest.raises(InputException, match="Invalid list response"):
        ListResponse.parse_doc(doc, Kustomization)


def test_list_response_null_total() -> None:
    """Test a null total counts the items."""
    response = ListResponse.parse_doc(
        {"total": None, "items": [KUSTOMIZATION_DOC]}, Kustomization
    )
    assert response.total == 1


def test_parse_source_invalid() -> None:
    """Test a source that is not a document is rejected."""
    with pytest.raises(InputException, match="Invalid source document"):
        parse_source("git")  # type: ignore[arg-type]
