from .base_adapter import BasePOSAdapter
from .square_adapter import SquareAdapter
from .toast_adapter import ToastAdapter
from .clover_adapter import CloverAdapter
from .adapter_factory import (
    AdapterFactory,
    get_adapter_factory,
    initialize_default_adapters,
)

__all__ = [
    "BasePOSAdapter",
    "SquareAdapter",
    "ToastAdapter",
    "CloverAdapter",
    "AdapterFactory",
    "get_adapter_factory",
    "initialize_default_adapters",
]
