"""Inventory gateway configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_int, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

INVENTORY_GATEWAY_TIMEOUT_SECONDS = 10.0
INVENTORY_GATEWAY_CALLS_PER_SECOND = 5


@dataclass(frozen=True)
class InventoryGatewayConfig:
    """Holds the connection settings of the inventory gateway service."""

    base_url: str
    api_token: str
    resilience: ResilienceConfig


def get_inventory_gateway_config(
    *,
    resilience: ResilienceConfig | None = None,
) -> InventoryGatewayConfig:
    values = require_env_vars(("INVENTORY_GATEWAY_URL", "INVENTORY_GATEWAY_TOKEN"))
    base_url = values["INVENTORY_GATEWAY_URL"].rstrip("/")
    token = values["INVENTORY_GATEWAY_TOKEN"]
    return InventoryGatewayConfig(
        base_url=base_url,
        api_token=token,
        resilience=resilience
        or ResilienceConfig(
            name="inventory-gateway",
            base_url=base_url,
            timeout_seconds=env_float(
                "INVENTORY_GATEWAY_TIMEOUT_SECONDS", INVENTORY_GATEWAY_TIMEOUT_SECONDS
            ),
            ratelimit=RateLimit(
                max_calls=env_int(
                    "INVENTORY_GATEWAY_CALLS_PER_SECOND",
                    INVENTORY_GATEWAY_CALLS_PER_SECOND,
                    minimum=1,
                ),
                per_seconds=1.0,
            ),
            default_headers={"Authorization": f"Bearer {token}"},
        ),
    )
