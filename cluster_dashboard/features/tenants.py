"""Store for the tenants shown on the settings page."""

from collections.abc import Mapping
import logging
from typing import Any

from cluster_dashboard import api
from cluster_dashboard.config import StoreConfig
from cluster_dashboard.store import RemoteStore
from cluster_dashboard.tenant import TenantInfo
from cluster_dashboard.transport import Transport

_LOGGER = logging.getLogger(__name__)


class TenantStore(RemoteStore[TenantInfo]):
    """Read-only tenants plus the application codes available to them."""

    def __init__(self, transport: Transport, config: StoreConfig | None = None) -> None:
        super().__init__(transport, api.TENANTS, TenantInfo, config)
        self._app_codes: tuple[str, ...] = ()

    @property
    def app_codes(self) -> tuple[str, ...]:
        return self._app_codes

    async def fetch_app_codes(self) -> None:
        """Load the application codes; they are emptied when the request fails."""

        def apply(doc: Any) -> Mapping[str, Any]:
            codes = doc.get("appCodes") if isinstance(doc, dict) else None
            if not isinstance(codes, list):
                _LOGGER.warning("Unexpected app codes payload: %s", doc)
                codes = []
            self._app_codes = tuple(str(code) for code in codes)
            return {}

        if not await self._run(
            "fetch_app_codes", lambda: self._transport.get_json(api.APP_CODES), apply
        ):
            self._app_codes = ()

    def reset(self) -> None:
        self._app_codes = ()
        super().reset()
