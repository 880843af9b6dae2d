import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from drinkux_pos.core.config import get_settings
from drinkux_pos.core.exceptions import MissingConfigError, MissingCredentialsError
from ..schemas.pos_schemas import (
    POSConfig,
    POSCredentials,
    POSLocationInfo,
    POSOrder,
    POSOrderResult,
    POSOrderStatus,
    POSProduct,
)

logger = logging.getLogger(__name__)


class BasePOSAdapter(ABC):
    """Capability contract every POS vendor integration satisfies.

    Adapters are built per call from an integration's credentials and config
    and discarded afterwards. ``transport`` lets callers (tests, mostly) swap
    the httpx transport without touching the request code.
    """

    provider: str = ""

    def __init__(
        self,
        credentials: Optional[POSCredentials],
        config: Optional[POSConfig],
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.credentials = credentials
        self.config = config
        self.transport = transport
        self.timeout = get_settings().POS_HTTP_TIMEOUT_SECONDS

    def _require_credentials(self) -> POSCredentials:
        if self.credentials is None:
            raise MissingCredentialsError(
                f"{self.provider}: Credentials are required", provider=self.provider
            )
        return self.credentials

    def _require_config(self) -> POSConfig:
        if self.config is None:
            raise MissingConfigError(
                f"{self.provider}: Configuration is required", provider=self.provider
            )
        return self.config

    def _http_client(self, base_url: str, headers: Dict[str, str]) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=self.timeout,
            transport=self.transport,
        )

    @abstractmethod
    async def test_connection(self) -> bool:
        """Test if credentials are valid and connection works"""
        pass

    @abstractmethod
    async def fetch_menu(self) -> List[POSProduct]:
        """Pull the full catalog, normalized; empty catalog yields []"""
        pass

    @abstractmethod
    async def submit_order(self, order: POSOrder) -> POSOrderResult:
        """Push an order; vendor rejections come back as success=False"""
        pass

    @abstractmethod
    async def get_location(self, location_id: str) -> POSLocationInfo:
        """Get location details; raises POSNotFoundError for unknown ids"""
        pass

    @abstractmethod
    async def get_order_status(self, order_id: str) -> POSOrderStatus:
        """Get vendor order state; raises POSNotFoundError for unknown ids"""
        pass

    async def validate_credentials(self) -> bool:
        return await self.test_connection()

    @staticmethod
    def minor_units_to_decimal(amount: Optional[int]) -> float:
        """Convert a vendor minor-unit amount (cents) to decimal currency"""
        return (amount or 0) / 100

    @staticmethod
    def error_payload(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            logger.debug(f"Non-JSON error body from {response.request.url}")
            return {}
