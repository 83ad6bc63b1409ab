"""Store for the applications deployed through the dashboard."""

from collections.abc import Mapping
import dataclasses
from typing import Any

from cluster_dashboard import api
from cluster_dashboard.application import (
    ApplicationCreateRequest,
    ApplicationSourceRequest,
    ApplicationTemplate,
    DryRunResult,
    ValidateResult,
)
from cluster_dashboard.config import StoreConfig
from cluster_dashboard.store import CreateAction, RemoveAction
from cluster_dashboard.transport import Transport

VALIDATE = "validate"
DRY_RUN = "dry_run"


class ApplicationStore(
    CreateAction[ApplicationTemplate], RemoveAction[ApplicationTemplate]
):
    """Applications can be created and deleted but not edited in place.

    A source can be checked with `validate` and a deployment previewed with
    `dry_run` before anything is created. Both leave the data untouched and
    report request failures through the state error.
    """

    def __init__(self, transport: Transport, config: StoreConfig | None = None) -> None:
        super().__init__(transport, api.APPLICATIONS, ApplicationTemplate, config)
        self._dry_run_result: DryRunResult | None = None

    @property
    def dry_run_result(self) -> DryRunResult | None:
        """The result of the last successful dry run."""
        return self._dry_run_result

    async def get_detail(self, name: str) -> ApplicationTemplate | None:
        """Fetch a single application and refresh the local copy.

        Returns None when the request failed; the error is in the state.
        """
        details: list[ApplicationTemplate] = []

        def apply(detail: ApplicationTemplate) -> Mapping[str, Any]:
            details.append(detail)
            return {
                "data": tuple(
                    detail if item.identity == name else item
                    for item in self.state.data
                )
            }

        if not await self._run(
            "get_detail",
            lambda: self._transport.fetch_item(
                api.item_path(api.APPLICATIONS, name), ApplicationTemplate
            ),
            apply,
        ):
            return None
        return details[0]

    async def validate(self, source: ApplicationSourceRequest) -> ValidateResult | None:
        """Check that a source can be rendered for the target environments.

        A source rejected by the API is a successful request whose result has
        `success` unset. Returns None when the request itself failed.
        """
        results: list[ValidateResult] = []

        def apply(result: ValidateResult) -> Mapping[str, Any]:
            results.append(result)
            return {}

        if not await self._run(
            VALIDATE,
            lambda: self._transport.post(
                api.APPLICATIONS_VALIDATE, ValidateResult, source
            ),
            apply,
        ):
            return None
        return results[0]

    async def dry_run(self, request: ApplicationCreateRequest) -> DryRunResult | None:
        """Render an application for every target without deploying it.

        The request is always submitted with `is_dryrun` set. Returns None when
        the request failed; the error is in the state.
        """
        preview = dataclasses.replace(request, is_dryrun=True)

        def apply(result: DryRunResult) -> Mapping[str, Any]:
            self._dry_run_result = result
            return {}

        if not await self._run(
            DRY_RUN,
            lambda: self._transport.post(api.APPLICATIONS, DryRunResult, preview),
            apply,
        ):
            return None
        return self._dry_run_result

    def reset(self) -> None:
        self._dry_run_result = None
        super().reset()
