from .adapters.adapter_factory import (
    AdapterFactory,
    get_adapter_factory,
    initialize_default_adapters,
)
from .services.pos_integration_manager import POSIntegrationManager
from .services.pos_integration_service import POSIntegrationService

__all__ = [
    "AdapterFactory",
    "get_adapter_factory",
    "initialize_default_adapters",
    "POSIntegrationManager",
    "POSIntegrationService",
]
