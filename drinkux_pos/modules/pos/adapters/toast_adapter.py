import logging
from typing import List

from drinkux_pos.core.exceptions import MissingCredentialsError, POSNotFoundError
from .base_adapter import BasePOSAdapter
from ..enums.pos_enums import POSVendor
from ..schemas.pos_schemas import (
    POSCredentials,
    POSLocationInfo,
    POSOrder,
    POSOrderResult,
    POSOrderStatus,
    POSProduct,
)

logger = logging.getLogger(__name__)


class ToastAdapter(BasePOSAdapter):
    """Toast adapter - credential checks only, menu and orders not implemented yet.

    Toast identifies a restaurant by GUID; it is carried in
    ``credentials.merchant_id``.
    """

    provider = POSVendor.TOAST.value

    def _require_toast_credentials(self) -> POSCredentials:
        credentials = self._require_credentials()
        if not credentials.api_key:
            raise MissingCredentialsError(
                "API key is required for Toast integration", provider=self.provider
            )
        if not credentials.merchant_id:
            raise MissingCredentialsError(
                "Restaurant GUID (Merchant ID) is required for Toast integration",
                provider=self.provider,
            )
        return credentials

    async def test_connection(self) -> bool:
        self._require_toast_credentials()
        return True

    async def fetch_menu(self) -> List[POSProduct]:
        self._require_toast_credentials()
        self._require_config()
        logger.info("Toast menu sync not implemented, returning empty catalog")
        return []

    async def submit_order(self, order: POSOrder) -> POSOrderResult:
        self._require_toast_credentials()
        self._require_config()
        return POSOrderResult(
            success=False, error="Toast order submission is not implemented"
        )

    async def get_location(self, location_id: str) -> POSLocationInfo:
        credentials = self._require_toast_credentials()
        config = self._require_config()
        if location_id != config.location_id:
            raise POSNotFoundError(
                f"Toast location {location_id} not found", provider=self.provider
            )
        return POSLocationInfo(
            id=location_id, name=f"Toast restaurant {credentials.merchant_id}"
        )

    async def get_order_status(self, order_id: str) -> POSOrderStatus:
        self._require_toast_credentials()
        raise POSNotFoundError(
            f"Toast order {order_id} not found", provider=self.provider
        )
