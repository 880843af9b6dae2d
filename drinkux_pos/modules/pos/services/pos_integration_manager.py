"""
POS integration manager.

Enforces integration lifecycle rules (active flag, location resolution) in
front of the vendor adapters and turns adapter outcomes into result objects.
Menu sync, order submission, connection tests and credential validation
never raise for expected failures; location lookup and order status raise.
"""

import logging
from typing import List, Optional

from drinkux_pos.core.exceptions import LocationRequiredError
from ..adapters.adapter_factory import AdapterFactory, get_adapter_factory
from ..adapters.base_adapter import BasePOSAdapter
from ..schemas.pos_schemas import (
    POSConfig,
    POSCredentials,
    POSIntegration,
    POSLocationInfo,
    POSOrder,
    POSOrderResult,
    POSOrderStatus,
    SyncMenuResult,
    TestConnectionResult,
)

INACTIVE_INTEGRATION_ERROR = "POS integration is not active"
LOCATION_REQUIRED_ERROR = "Location ID is required for order submission"


class POSIntegrationManager:
    def __init__(
        self,
        factory: Optional[AdapterFactory] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.factory = factory or get_adapter_factory()
        self.logger = logger or logging.getLogger(__name__)

    def _create_adapter(self, integration: POSIntegration) -> BasePOSAdapter:
        return self.factory.create_adapter(
            integration.provider, integration.credentials, integration.config
        )

    async def _fetch_location_best_effort(
        self, adapter: BasePOSAdapter, location_id: str
    ) -> Optional[POSLocationInfo]:
        """Location metadata is enrichment only; failures are logged, not raised"""
        try:
            return await adapter.get_location(location_id)
        except Exception as e:
            self.logger.warning(
                f"Could not fetch location info for {adapter.provider} "
                f"location {location_id}: {e}"
            )
            return None

    async def test_connection(self, integration: POSIntegration) -> TestConnectionResult:
        try:
            adapter = self._create_adapter(integration)
            is_connected = await adapter.test_connection()
        except Exception as e:
            self.logger.error(
                f"Connection test failed for {integration.provider} "
                f"integration {integration.id}: {e}"
            )
            return TestConnectionResult(
                success=False, provider=integration.provider, error=str(e)
            )

        if not is_connected:
            return TestConnectionResult(
                success=False,
                provider=integration.provider,
                error="Failed to connect to POS system",
            )

        location_info = None
        if integration.config.location_id:
            location_info = await self._fetch_location_best_effort(
                adapter, integration.config.location_id
            )

        return TestConnectionResult(
            success=True,
            provider=integration.provider,
            location_id=location_info.id if location_info else None,
            location_name=location_info.name if location_info else None,
        )

    async def validate_credentials(
        self,
        provider: str,
        credentials: Optional[POSCredentials],
        config: Optional[POSConfig],
    ) -> bool:
        try:
            adapter = self.factory.create_adapter(provider, credentials, config)
            return await adapter.validate_credentials()
        except Exception as e:
            self.logger.error(f"Credential validation failed for {provider}: {e}")
            return False

    async def sync_menu(self, integration: POSIntegration) -> SyncMenuResult:
        if not integration.is_active:
            return SyncMenuResult(
                success=False, products_count=0, error=INACTIVE_INTEGRATION_ERROR
            )

        try:
            adapter = self._create_adapter(integration)
            products = await adapter.fetch_menu()
        except Exception as e:
            self.logger.error(
                f"Menu sync failed for {integration.provider} "
                f"integration {integration.id}: {e}"
            )
            return SyncMenuResult(success=False, products_count=0, error=str(e))

        self.logger.info(
            f"Synced {len(products)} products from {integration.provider} "
            f"for business {integration.business_id}"
        )
        return SyncMenuResult(
            success=True, products_count=len(products), products=products
        )

    async def submit_order(
        self, integration: POSIntegration, order: POSOrder
    ) -> POSOrderResult:
        """Submit an order through the integration's adapter.

        When ``order.location_id`` is empty it is set, on the caller's object,
        to the integration's configured location.
        """
        if not integration.is_active:
            return POSOrderResult(success=False, error=INACTIVE_INTEGRATION_ERROR)

        if not order.location_id and integration.config.location_id:
            order.location_id = integration.config.location_id

        if not order.location_id:
            return POSOrderResult(success=False, error=LOCATION_REQUIRED_ERROR)

        try:
            adapter = self._create_adapter(integration)
            return await adapter.submit_order(order)
        except Exception as e:
            self.logger.error(
                f"Order submission failed for {integration.provider} "
                f"integration {integration.id}: {e}"
            )
            return POSOrderResult(success=False, error=str(e))

    async def get_location_info(
        self, integration: POSIntegration, location_id: Optional[str] = None
    ) -> POSLocationInfo:
        adapter = self._create_adapter(integration)
        resolved_location_id = location_id or integration.config.location_id

        if not resolved_location_id:
            raise LocationRequiredError(
                "Location ID is required", provider=integration.provider
            )

        return await adapter.get_location(resolved_location_id)

    async def get_order_status(
        self, integration: POSIntegration, order_id: str
    ) -> POSOrderStatus:
        adapter = self._create_adapter(integration)
        return await adapter.get_order_status(order_id)

    def get_supported_providers(self) -> List[str]:
        return self.factory.get_supported_providers()

    def is_provider_supported(self, provider: str) -> bool:
        return self.factory.is_provider_supported(provider)
