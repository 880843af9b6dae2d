"""
Square wire shapes.

These models describe the subset of Square's Catalog, Locations and Orders
payloads the adapter reads. They are private to the Square adapter: only the
vendor-neutral schemas leave ``square_adapter.py``.

Catalog objects form a discriminated union on ``type``. Object types the
adapter does not map (IMAGE, TAX, DISCOUNT, ...) are skipped at parse time.
"""

import logging
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

logger = logging.getLogger(__name__)


class SquareMoney(BaseModel):
    amount: Optional[int] = None
    currency: Optional[str] = None


class SquareItemVariationData(BaseModel):
    name: str = ""
    item_id: Optional[str] = None
    price_money: Optional[SquareMoney] = None


class SquareItemVariation(BaseModel):
    id: str
    item_variation_data: SquareItemVariationData = Field(
        default_factory=SquareItemVariationData
    )


class SquareModifierListInfo(BaseModel):
    modifier_list_id: str
    min_selected_modifiers: Optional[int] = None
    max_selected_modifiers: Optional[int] = None
    enabled: Optional[bool] = None


class SquareCategoryRef(BaseModel):
    id: str


class SquareItemData(BaseModel):
    name: str = ""
    description: Optional[str] = None
    category_id: Optional[str] = None
    # Newer catalog versions list categories instead of a single category_id
    categories: List[SquareCategoryRef] = Field(default_factory=list)
    variations: List[SquareItemVariation] = Field(default_factory=list)
    modifier_list_info: List[SquareModifierListInfo] = Field(default_factory=list)

    @property
    def primary_category_id(self) -> Optional[str]:
        if self.category_id:
            return self.category_id
        if self.categories:
            return self.categories[0].id
        return None


class SquareCategoryData(BaseModel):
    name: str = ""


class SquareModifierData(BaseModel):
    name: str = ""
    price_money: Optional[SquareMoney] = None


class SquareModifierRef(BaseModel):
    id: str
    modifier_data: Optional[SquareModifierData] = None


class SquareModifierListData(BaseModel):
    name: str = ""
    selection_type: Optional[str] = None
    modifiers: List[SquareModifierRef] = Field(default_factory=list)


class SquareItemObject(BaseModel):
    type: Literal["ITEM"]
    id: str
    item_data: Optional[SquareItemData] = None


class SquareCategoryObject(BaseModel):
    type: Literal["CATEGORY"]
    id: str
    category_data: Optional[SquareCategoryData] = None


class SquareModifierListObject(BaseModel):
    type: Literal["MODIFIER_LIST"]
    id: str
    modifier_list_data: Optional[SquareModifierListData] = None


class SquareModifierObject(BaseModel):
    type: Literal["MODIFIER"]
    id: str
    modifier_data: Optional[SquareModifierData] = None


SquareCatalogObject = Annotated[
    Union[
        SquareItemObject,
        SquareCategoryObject,
        SquareModifierListObject,
        SquareModifierObject,
    ],
    Field(discriminator="type"),
]

MAPPED_CATALOG_TYPES = ("ITEM", "CATEGORY", "MODIFIER_LIST", "MODIFIER")

_catalog_object_adapter = TypeAdapter(SquareCatalogObject)


def parse_catalog_objects(raw_objects: List[Dict[str, Any]]) -> List[SquareCatalogObject]:
    """Parse raw catalog JSON into typed objects, skipping unmapped types"""
    parsed = []
    for raw in raw_objects:
        object_type = raw.get("type")
        if object_type not in MAPPED_CATALOG_TYPES:
            logger.debug(f"Skipping Square catalog object {raw.get('id')} of type {object_type}")
            continue
        parsed.append(_catalog_object_adapter.validate_python(raw))
    return parsed


class SquareCatalogListResponse(BaseModel):
    objects: List[Dict[str, Any]] = Field(default_factory=list)
    cursor: Optional[str] = None


class SquareAddress(BaseModel):
    address_line_1: Optional[str] = None
    locality: Optional[str] = None
    administrative_district_level_1: Optional[str] = None


class SquareLocation(BaseModel):
    id: str
    name: str = ""
    address: Optional[SquareAddress] = None
    timezone: Optional[str] = None
    status: str = ""


class SquareOrder(BaseModel):
    id: str
    state: str = ""
    location_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    closed_at: Optional[str] = None
    total_money: Optional[SquareMoney] = None
