"""HTTP client for the inventory gateway service.

The gateway fronts the inventory terminal application and exposes the two
operations the engine needs: prefix lookup by UPC and revision-checked
patches. Transport-level retries only cover idempotent lookups; the engine
decides how often a write is attempted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from vendorrecon.adapters.http_resilience import ResilienceConfig, ResilientClient
from vendorrecon.config.inventory_gateway import (
    InventoryGatewayConfig,
    get_inventory_gateway_config,
)
from vendorrecon.domain.errors import (
    InventoryError,
    InventoryUnavailableError,
    ItemNotFoundError,
    WriteConflictError,
)

from .schema import ErrorResponse, ItemsResponse
from .translator import build_patch_request, parse_inventory_record

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from vendorrecon.domain.model import InventoryRecord, Patch
    from vendorrecon.domain.ports import InventoryCollaborator

log = getLogger(__name__)

_TRANSIENT_STATUS = frozenset({408, 429, 500, 502, 503, 504})


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class InventoryGatewayError(InventoryError):
    """Raised when the gateway answers with an unexpected, non-transient error."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        payload = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        return response.text or response.reason_phrase
    return f"{payload.error}: {payload.message}" if payload.message else payload.error


@dataclass(slots=True)
class InventoryGatewayClient:
    """Inventory collaborator backed by the gateway's REST API.

    Use as an async context manager so one pooled, rate-limited HTTP client
    serves the whole batch.
    """

    config: InventoryGatewayConfig = field(default_factory=get_inventory_gateway_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> InventoryGatewayClient:
        if self._client is None:
            self._client = self.client_factory(self.config.resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def lookup_by_upc_prefix(self, key: str) -> frozenset[InventoryRecord]:
        response = await self._request("GET", "/items", params={"upc_prefix": key})
        if response.status_code != httpx.codes.OK:
            raise InventoryGatewayError(
                f"Lookup for {key} failed: {_error_message(response)}",
                status_code=response.status_code,
            )
        try:
            payload = ItemsResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise InventoryGatewayError(f"Unexpected lookup payload for {key}") from exc
        return frozenset(parse_inventory_record(item) for item in payload.items)

    async def apply_patch(self, item_number: str, patch: Patch) -> None:
        body = build_patch_request(patch).model_dump(mode="json", by_alias=True)
        response = await self._request(
            "PATCH",
            f"/items/{quote(item_number, safe='')}",
            json=body,
        )
        status = response.status_code
        if status == httpx.codes.CONFLICT:
            raise WriteConflictError(
                f"{item_number} changed since revision {patch.base_revision}",
                item_number=item_number,
            )
        if status == httpx.codes.NOT_FOUND:
            raise ItemNotFoundError(f"{item_number} does not exist", item_number=item_number)
        if not response.is_success:
            raise InventoryGatewayError(
                f"Patch of {item_number} failed: {_error_message(response)}",
                status_code=status,
            )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: object = None,
    ) -> httpx.Response:
        if self._client is None:
            raise InventoryGatewayError("Gateway client used outside of 'async with'")
        url = f"{self.config.base_url}{path}"
        try:
            response = await self._client.request(method, url, params=params or {}, json=json)
        except (httpx.TimeoutException, httpx.TransportError) as exc:
            raise InventoryUnavailableError(f"{method} {path}: {exc!r}") from exc

        if response.status_code in _TRANSIENT_STATUS:
            log.warning(f"Inventory gateway answered {response.status_code} for {method} {path}")
            raise InventoryUnavailableError(
                f"{method} {path}: {response.status_code} {_error_message(response)}"
            )
        return response


if TYPE_CHECKING:
    _collaborator_check: InventoryCollaborator = InventoryGatewayClient()
