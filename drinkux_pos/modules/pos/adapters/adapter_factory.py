import logging
import threading
from functools import lru_cache
from typing import Dict, List, Optional, Type

from drinkux_pos.core.config import get_settings
from drinkux_pos.core.exceptions import UnsupportedProviderError
from .base_adapter import BasePOSAdapter
from .clover_adapter import CloverAdapter
from .square_adapter import SquareAdapter
from .toast_adapter import ToastAdapter
from ..enums.pos_enums import POSVendor
from ..schemas.pos_schemas import POSConfig, POSCredentials

logger = logging.getLogger(__name__)


class AdapterFactory:
    """Registry of provider name -> adapter class.

    Names are stored lower-cased. Writes happen at startup and in test
    setup/teardown; they are serialized by a lock and readers see a
    consistent snapshot.
    """

    def __init__(self):
        self._adapters: Dict[str, Type[BasePOSAdapter]] = {}
        self._lock = threading.Lock()

    def register_adapter(self, provider: str, adapter_class: Type[BasePOSAdapter]):
        """Register (or replace) the adapter for a provider"""
        key = provider.lower()
        with self._lock:
            adapters = dict(self._adapters)
            replaced = adapters.get(key)
            adapters[key] = adapter_class
            self._adapters = adapters
        if replaced is not None and replaced is not adapter_class:
            logger.info(
                f"Replaced POS adapter for {key}: "
                f"{replaced.__name__} -> {adapter_class.__name__}"
            )

    def unregister_adapter(self, provider: str):
        key = provider.lower()
        with self._lock:
            if key not in self._adapters:
                return
            adapters = dict(self._adapters)
            del adapters[key]
            self._adapters = adapters

    def get_supported_providers(self) -> List[str]:
        return list(self._adapters.keys())

    def is_provider_supported(self, provider: str) -> bool:
        return provider.lower() in self._adapters

    def create_adapter(
        self,
        provider: str,
        credentials: Optional[POSCredentials],
        config: Optional[POSConfig],
    ) -> BasePOSAdapter:
        adapters = self._adapters
        adapter_class = adapters.get(provider.lower())
        if not adapter_class:
            raise UnsupportedProviderError(provider, list(adapters.keys()))

        return adapter_class(credentials, config)


def initialize_default_adapters(
    factory: AdapterFactory, include_preview: Optional[bool] = None
) -> AdapterFactory:
    """Register the built-in vendor adapters on a factory.

    Toast and Clover are placeholders and are only registered when
    ``include_preview`` (default: POS_ENABLE_PREVIEW_ADAPTERS) is set.
    """
    if include_preview is None:
        include_preview = get_settings().POS_ENABLE_PREVIEW_ADAPTERS

    factory.register_adapter(POSVendor.SQUARE.value, SquareAdapter)
    if include_preview:
        factory.register_adapter(POSVendor.TOAST.value, ToastAdapter)
        factory.register_adapter(POSVendor.CLOVER.value, CloverAdapter)

    logger.info(
        f"POS adapters registered: {', '.join(factory.get_supported_providers())}"
    )
    return factory


@lru_cache()
def get_adapter_factory() -> AdapterFactory:
    """Process-wide factory with the default adapters registered (built once)"""
    return initialize_default_adapters(AdapterFactory())
