import logging
import uuid
from typing import Optional

from drinkux_pos.core.exceptions import (
    IntegrationNotFoundError,
    POSConnectionFailedError,
)
from ..repositories.pos_integration_repository import POSIntegrationRepository
from ..schemas.pos_schemas import POSConfig, POSCredentials, POSIntegration
from .pos_integration_manager import POSIntegrationManager

logger = logging.getLogger(__name__)


class POSIntegrationService:
    """Integration record lifecycle: Unconfigured -> Active <-> Inactive.

    An integration becomes (or stays) active only after a successful
    connection test; the manager itself never touches storage.
    """

    def __init__(
        self,
        repository: POSIntegrationRepository,
        manager: Optional[POSIntegrationManager] = None,
    ):
        self.repository = repository
        self.manager = manager or POSIntegrationManager()

    async def get_integration(self, business_id: str) -> Optional[POSIntegration]:
        return await self.repository.find_by_business(business_id)

    async def connect(
        self,
        business_id: str,
        provider: str,
        credentials: POSCredentials,
        config: POSConfig,
    ) -> POSIntegration:
        """Test the connection, then create or reconfigure an active integration"""
        existing = await self.repository.find_by_business(business_id)
        candidate = POSIntegration(
            id=existing.id if existing else f"pending-{uuid.uuid4()}",
            business_id=business_id,
            provider=provider,
            credentials=credentials,
            config=config,
            is_active=True,
        )

        result = await self.manager.test_connection(candidate)
        if not result.success:
            raise POSConnectionFailedError(
                f"Failed to connect to {provider}: {result.error}", provider=provider
            )

        integration = await self.repository.upsert(
            business_id, provider, credentials, config, is_active=True
        )
        logger.info(
            f"POS integration {integration.id} ({integration.provider}) "
            f"active for business {business_id}"
        )
        return integration

    async def deactivate(self, business_id: str) -> POSIntegration:
        integration = await self.repository.find_by_business(business_id)
        if integration is None:
            raise IntegrationNotFoundError(
                f"POS integration not found for business {business_id}"
            )

        updated = await self.repository.set_active(integration.id, False)
        if updated is None:
            raise IntegrationNotFoundError(
                f"POS integration {integration.id} not found"
            )
        logger.info(f"POS integration {integration.id} deactivated")
        return updated
