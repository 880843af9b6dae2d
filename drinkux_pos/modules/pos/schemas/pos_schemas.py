"""
Vendor-neutral POS schemas.

Every adapter produces and consumes these shapes; nothing vendor specific
crosses the adapter boundary. Prices are always decimal currency (dollars),
never vendor minor units.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any, List
from ..enums.pos_enums import ModifierSelectionType, POSLocationStatus


class POSCredentials(BaseModel):
    """Vendor-opaque credential bag; each vendor reads only what it needs"""

    access_token: Optional[str] = None
    api_key: Optional[str] = None
    refresh_token: Optional[str] = None
    merchant_id: Optional[str] = None


class POSConfig(BaseModel):
    location_id: Optional[str] = None
    sync_interval: Optional[int] = None
    auto_sync_menu: Optional[bool] = None
    webhook_url: Optional[str] = None


class POSIntegration(BaseModel):
    id: str
    business_id: str
    provider: str
    credentials: Optional[POSCredentials] = None
    config: POSConfig = Field(default_factory=POSConfig)
    is_active: bool = True


class POSModifier(BaseModel):
    id: str
    name: str
    price: float = 0.0
    available: bool = True


class POSModifierList(BaseModel):
    """A group of modifiers offered on a product.

    ``min_selections`` / ``max_selections`` are None when the vendor sets no
    limit; Square's ``-1`` ("no limit") is reported as None.
    """

    id: str
    name: str
    modifiers: List[POSModifier] = Field(default_factory=list)
    selection_type: ModifierSelectionType = ModifierSelectionType.MULTIPLE
    min_selections: Optional[int] = None
    max_selections: Optional[int] = None


class POSProductVariation(BaseModel):
    id: str
    name: str
    price: float = 0.0
    available: bool = True


class POSProduct(BaseModel):
    """Normalized menu item.

    ``variations`` and ``modifiers`` are None when the vendor item has none;
    they are never empty lists.
    """

    id: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    base_price: float = 0.0
    available: bool = True
    variations: Optional[List[POSProductVariation]] = None
    modifiers: Optional[List[POSModifierList]] = None


class POSOrderModifier(BaseModel):
    catalog_item_id: str
    quantity: Optional[int] = None


class POSOrderLineItem(BaseModel):
    catalog_item_id: str
    quantity: int = Field(default=1, gt=0)
    variation_id: Optional[str] = None
    modifiers: Optional[List[POSOrderModifier]] = None
    note: Optional[str] = None


class POSOrder(BaseModel):
    """Outbound order.

    The integration manager may set ``location_id`` in place when it is empty.
    """

    model_config = ConfigDict(validate_assignment=True)

    location_id: str = ""
    line_items: List[POSOrderLineItem] = Field(default_factory=list)
    external_id: Optional[str] = None


class POSOrderResult(BaseModel):
    success: bool
    order_id: Optional[str] = None
    error: Optional[str] = None


class POSOrderStatus(BaseModel):
    status: str
    details: Dict[str, Any] = Field(default_factory=dict)


class POSLocationInfo(BaseModel):
    id: str
    name: str
    address: Optional[str] = None
    timezone: Optional[str] = None
    status: POSLocationStatus = POSLocationStatus.ACTIVE


class POSConnectionStatus(BaseModel):
    connected: bool
    provider: str
    message: str
    location_id: Optional[str] = None
    location_name: Optional[str] = None


class TestConnectionResult(BaseModel):
    # Keep pytest from collecting this as a test class
    __test__ = False

    success: bool
    provider: str
    location_id: Optional[str] = None
    location_name: Optional[str] = None
    error: Optional[str] = None

    def to_connection_status(self) -> POSConnectionStatus:
        """Render as the connected/message shape used by the admin surface"""
        if self.success:
            message = "Successfully connected to POS system"
            if self.location_name:
                message = f"{message} ({self.location_name})"
        else:
            message = self.error or "Failed to connect to POS system"
        return POSConnectionStatus(
            connected=self.success,
            provider=self.provider,
            message=message,
            location_id=self.location_id,
            location_name=self.location_name,
        )


class SyncMenuResult(BaseModel):
    success: bool
    products_count: int = 0
    products: Optional[List[POSProduct]] = None
    error: Optional[str] = None
