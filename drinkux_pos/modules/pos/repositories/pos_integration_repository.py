import uuid
from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..schemas.pos_schemas import POSConfig, POSCredentials, POSIntegration


class POSIntegrationRepository(ABC):
    """Persistence contract for integration records.

    Storage is owned by the host application; this package only reads and
    writes through these methods.
    """

    @abstractmethod
    async def find(self, integration_id: str) -> Optional[POSIntegration]:
        pass

    @abstractmethod
    async def find_by_business(self, business_id: str) -> Optional[POSIntegration]:
        pass

    @abstractmethod
    async def upsert(
        self,
        business_id: str,
        provider: str,
        credentials: Optional[POSCredentials],
        config: POSConfig,
        is_active: bool = True,
    ) -> POSIntegration:
        """Create the business's integration or replace its configuration"""
        pass

    @abstractmethod
    async def set_active(self, integration_id: str, is_active: bool) -> Optional[POSIntegration]:
        pass


class InMemoryPOSIntegrationRepository(POSIntegrationRepository):
    """Dict-backed repository, one integration per business"""

    def __init__(self):
        self._integrations: Dict[str, POSIntegration] = {}

    async def find(self, integration_id: str) -> Optional[POSIntegration]:
        integration = self._integrations.get(integration_id)
        return integration.model_copy(deep=True) if integration else None

    async def find_by_business(self, business_id: str) -> Optional[POSIntegration]:
        for integration in self._integrations.values():
            if integration.business_id == business_id:
                return integration.model_copy(deep=True)
        return None

    async def upsert(
        self,
        business_id: str,
        provider: str,
        credentials: Optional[POSCredentials],
        config: POSConfig,
        is_active: bool = True,
    ) -> POSIntegration:
        existing = await self.find_by_business(business_id)
        integration = POSIntegration(
            id=existing.id if existing else str(uuid.uuid4()),
            business_id=business_id,
            provider=provider.lower(),
            credentials=credentials,
            config=config,
            is_active=is_active,
        )
        self._integrations[integration.id] = integration
        return integration.model_copy(deep=True)

    async def set_active(self, integration_id: str, is_active: bool) -> Optional[POSIntegration]:
        integration = self._integrations.get(integration_id)
        if integration is None:
            return None
        integration.is_active = is_active
        return integration.model_copy(deep=True)
