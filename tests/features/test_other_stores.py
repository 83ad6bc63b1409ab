"""Tests for the application, secret store and tenant stores."""

import pytest

from cluster_dashboard import api
from cluster_dashboard.application import (
    ApplicationCreateRequest,
    ApplicationInstantiation,
    ApplicationSource,
    ApplicationSourceRequest,
    ApplicationSpecifier,
    ApplicationTarget,
    ApplicationTemplate,
    DryRunEnvironment,
    DryRunResult,
    SourceEnvironment,
    ValidateResult,
)
from cluster_dashboard.exceptions import ApiError, NetworkError
from cluster_dashboard.features import ApplicationStore, SecretStoreStore, TenantStore
from cluster_dashboard.security import SecretStore, SecretStoreHealth
from cluster_dashboard.store import Creatable, Removable, Updatable
from cluster_dashboard.tenant import TenantInfo

from tests.fakes import FakeTransport


def make_application(app_id: int, name: str) -> ApplicationTemplate:
    return ApplicationTemplate(
        id=app_id,
        name=name,
        owner="team-a",
        path=f"apps/{name}",
        source=ApplicationSource(url="https://example.com/apps.git"),
    )


def make_secret_store(store_id: str, health: str = "Healthy") -> SecretStore:
    return SecretStore(
        id=store_id,
        name=f"store-{store_id}",
        provider="Vault",
        type="ClusterSecretStore",
        status="Active",
        health=SecretStoreHealth(status=health),  # type: ignore[arg-type]
    )


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


async def test_application_capabilities(transport: FakeTransport) -> None:
    """Test applications can be created and removed but not updated."""
    store = ApplicationStore(transport)
    assert isinstance(store, Creatable)
    assert isinstance(store, Removable)
    assert not isinstance(store, Updatable)


async def test_application_remove_by_name(transport: FakeTransport) -> None:
    """Test applications are addressed by name."""
    transport.collections[api.APPLICATIONS] = [
        make_application(1, "podinfo"),
        make_application(2, "redis"),
    ]
    store = ApplicationStore(transport)
    await store.fetch()

    await store.remove("podinfo")

    assert [a.name for a in store.state.data] == ["redis"]
    assert transport.requests[-1] == (
        "DELETE",
        "/api/v1/deploy/applications/podinfo",
        None,
    )


async def test_application_detail(transport: FakeTransport) -> None:
    """Test fetching a single application refreshes the local copy."""
    transport.collections[api.APPLICATIONS] = [make_application(1, "podinfo")]
    detail = make_application(1, "podinfo")
    detail.description = "Tiny web application"
    transport.items["/api/v1/deploy/applications/podinfo"] = detail
    store = ApplicationStore(transport)
    await store.fetch()

    result = await store.get_detail("podinfo")

    assert result == detail
    assert store.state.data[0].description == "Tiny web application"


async def test_application_detail_failure(transport: FakeTransport) -> None:
    """Test a failed detail request returns None and records the error."""
    transport.errors[("GET", "/api/v1/deploy/applications/missing")] = ApiError(404)
    store = ApplicationStore(transport)

    assert await store.get_detail("missing") is None
    assert isinstance(store.state.error, ApiError)


async def test_secret_stores(transport: FakeTransport) -> None:
    """Test the secret store write surface."""
    transport.collections[api.SECRET_STORES] = [
        make_secret_store("1"),
        make_secret_store("2", health="Error"),
    ]
    transport.echo = False
    store = SecretStoreStore(transport)
    await store.fetch()
    assert [s.id for s in store.unhealthy()] == ["2"]

    await store.update("2", {"health": SecretStoreHealth(status="Healthy")})
    assert store.unhealthy() == []

    await store.create(make_secret_store("3"))
    await store.remove("1")
    assert [s.id for s in store.state.data] == ["2", "3"]


async def test_tenants(transport: FakeTransport) -> None:
    """Test tenants and app codes."""
    transport.collections[api.TENANTS] = [TenantInfo(id="t1", name="tenant1")]
    transport.documents[api.APP_CODES] = {"appCodes": ["APP01", "APP02"]}
    store = TenantStore(transport)
    assert not isinstance(store, (Creatable, Updatable, Removable))

    await store.fetch()
    await store.fetch_app_codes()

    assert [t.name for t in store.state.data] == ["tenant1"]
    assert store.app_codes == ("APP01", "APP02")

    store.reset()
    assert store.app_codes == ()
    assert store.state.data == ()


async def test_tenant_app_codes_unexpected_payload(transport: FakeTransport) -> None:
    """Test an unexpected payload yields no app codes."""
    transport.documents[api.APP_CODES] = {"appCodes": "APP01"}
    store = TenantStore(transport)
    await store.fetch_app_codes()
    assert store.app_codes == ()
    assert store.state.error is None


async def test_tenant_app_codes_failure(transport: FakeTransport) -> None:
    """Test a failed request clears the app codes."""
    transport.documents[api.APP_CODES] = {"appCodes": ["APP01"]}
    store = TenantStore(transport)
    await store.fetch_app_codes()
    assert store.app_codes == ("APP01",)

    transport.errors[("GET", api.APP_CODES)] = NetworkError("offline")
    await store.fetch_app_codes()
    assert store.app_codes == ()
    assert isinstance(store.state.error, NetworkError)


SOURCE = ApplicationSourceRequest(
    repo="https://example.com/apps.git",
    target_revision="main",
    path="apps/podinfo",
    submodules=True,
    application_specifier=ApplicationSpecifier(helm_manifest_path=""),
)

CREATE_REQUEST = ApplicationCreateRequest(
    application_source=SOURCE,
    application_instantiation=ApplicationInstantiation(
        application_name="podinfo", tenant_name="tenant1", appcode="APP01"
    ),
    application_target=[ApplicationTarget(cluster="gke-sit", namespace="podinfo")],
)


async def test_application_validate(transport: FakeTransport) -> None:
    """Test validating a source returns the result without touching the data."""
    transport.collections[api.APPLICATIONS] = [make_application(1, "podinfo")]
    transport.items[api.APPLICATIONS_VALIDATE] = ValidateResult(
        success=False,
        message="invalid for PRD",
        type="kustomize",
        suitable_env=[
            SourceEnvironment(environments="SIT", valid=True),
            SourceEnvironment(environments="PRD", error="missing overlay"),
        ],
    )
    store = ApplicationStore(transport)
    await store.fetch()

    result = await store.validate(SOURCE)

    assert result is not None
    assert not result.success
    assert [env.environments for env in result.suitable_env if env.valid] == ["SIT"]
    assert transport.requests[-1] == ("POST", api.APPLICATIONS_VALIDATE, SOURCE)
    assert [a.name for a in store.state.data] == ["podinfo"]
    assert store.state.error is None


async def test_application_validate_failure(transport: FakeTransport) -> None:
    """Test a failed validation request is reported through the error."""
    transport.errors[("POST", api.APPLICATIONS_VALIDATE)] = NetworkError("timeout")
    store = ApplicationStore(transport)

    assert await store.validate(SOURCE) is None
    assert isinstance(store.state.error, NetworkError)
    assert not store.state.is_loading


async def test_application_dry_run(transport: FakeTransport) -> None:
    """Test a dry run always submits a preview and keeps the result."""
    transport.items[api.APPLICATIONS] = DryRunResult(
        success=False,
        total=2,
        environments=[
            DryRunEnvironment(environment="SIT", is_valid=True, manifest="kind: Pod"),
            DryRunEnvironment(environment="PRD", error="quota exceeded"),
        ],
    )
    store = ApplicationStore(transport)

    result = await store.dry_run(CREATE_REQUEST)

    assert result is not None
    assert result.invalid_environments == ["PRD"]
    assert store.dry_run_result == result
    method, path, payload = transport.requests[-1]
    assert (method, path) == ("POST", api.APPLICATIONS)
    assert payload.is_dryrun
    assert payload.to_dict()["application_target"] == [
        {"cluster": "gke-sit", "namespace": "podinfo"}
    ]
    assert not CREATE_REQUEST.is_dryrun
    assert store.state.data == ()

    store.reset()
    assert store.dry_run_result is None


async def test_application_dry_run_failure(transport: FakeTransport) -> None:
    """Test a failed dry run clears only when a later dry run succeeds."""
    transport.errors[("POST", api.APPLICATIONS)] = ApiError(400, "bad request")
    store = ApplicationStore(transport)

    assert await store.dry_run(CREATE_REQUEST) is None
    assert isinstance(store.state.error, ApiError)
    assert store.dry_run_result is None

    del transport.errors[("POST", api.APPLICATIONS)]
    transport.items[api.APPLICATIONS] = DryRunResult(success=True, total=1)
    assert await store.dry_run(CREATE_REQUEST) is not None
    assert store.state.error is None
