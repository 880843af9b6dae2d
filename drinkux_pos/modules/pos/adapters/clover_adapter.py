import logging
from typing import List, Optional

import httpx

from drinkux_pos.core.config import get_settings
from drinkux_pos.core.exceptions import MissingCredentialsError, POSNotFoundError
from .base_adapter import BasePOSAdapter
from ..enums.pos_enums import POSVendor
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


class CloverAdapter(BasePOSAdapter):
    """Clover adapter - connection test only, menu and orders not implemented yet"""

    provider = POSVendor.CLOVER.value

    def __init__(
        self,
        credentials: Optional[POSCredentials],
        config: Optional[POSConfig],
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(credentials, config, transport)
        self.base_url = get_settings().CLOVER_BASE_URL
        access_token = credentials.access_token if credentials else None
        self.merchant_id = credentials.merchant_id if credentials else None
        self.headers = {
            "Authorization": f"Bearer {access_token or ''}",
            "Content-Type": "application/json",
        }

    def _require_clover_credentials(self) -> POSCredentials:
        credentials = self._require_credentials()
        if not credentials.access_token:
            raise MissingCredentialsError(
                "Access token is required for Clover integration",
                provider=self.provider,
            )
        if not credentials.merchant_id:
            raise MissingCredentialsError(
                "Merchant ID is required for Clover integration",
                provider=self.provider,
            )
        return credentials

    async def test_connection(self) -> bool:
        self._require_clover_credentials()
        async with self._http_client(self.base_url, self.headers) as client:
            try:
                response = await client.get(f"/merchants/{self.merchant_id}")
            except httpx.HTTPError as e:
                logger.warning(f"Clover connection test failed: {e}")
                return False
        return response.status_code == 200

    async def fetch_menu(self) -> List[POSProduct]:
        self._require_clover_credentials()
        self._require_config()
        logger.info("Clover menu sync not implemented, returning empty catalog")
        return []

    async def submit_order(self, order: POSOrder) -> POSOrderResult:
        self._require_clover_credentials()
        self._require_config()
        return POSOrderResult(
            success=False, error="Clover order submission is not implemented"
        )

    async def get_location(self, location_id: str) -> POSLocationInfo:
        # A Clover merchant is a single location
        credentials = self._require_clover_credentials()
        if location_id != credentials.merchant_id:
            raise POSNotFoundError(
                f"Clover merchant {location_id} not found", provider=self.provider
            )
        return POSLocationInfo(id=location_id, name=f"Clover merchant {location_id}")

    async def get_order_status(self, order_id: str) -> POSOrderStatus:
        self._require_clover_credentials()
        raise POSNotFoundError(
            f"Clover order {order_id} not found", provider=self.provider
        )
