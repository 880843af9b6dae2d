"""
Square POS adapter.

Uses Square's Locations, Catalog and Orders APIs. Docs:
https://developer.squareup.com/reference/square
"""

import json
import logging
import time
import uuid
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from drinkux_pos.core.config import get_settings
from drinkux_pos.core.exceptions import (
    MissingCredentialsError,
    POSAPIError,
    POSError,
    POSNotFoundError,
)
from .base_adapter import BasePOSAdapter
from .square_models import (
    SquareCatalogListResponse,
    SquareCategoryObject,
    SquareItemObject,
    SquareLocation,
    SquareModifierListInfo,
    SquareModifierListObject,
    SquareModifierObject,
    SquareOrder,
    parse_catalog_objects,
)
from ..enums.pos_enums import ModifierSelectionType, POSLocationStatus, POSVendor
from ..schemas.pos_schemas import (
    POSConfig,
    POSCredentials,
    POSLocationInfo,
    POSModifier,
    POSModifierList,
    POSOrder,
    POSOrderResult,
    POSOrderStatus,
    POSProduct,
    POSProductVariation,
)

logger = logging.getLogger(__name__)

# Production access tokens carry one of these prefixes; everything else,
# including EAAA sandbox tokens, goes to the sandbox host.
PRODUCTION_TOKEN_PREFIXES = ("sq0atp-", "sq0csp-")

CATALOG_TYPES = "ITEM,MODIFIER_LIST,MODIFIER,CATEGORY"


class SquareAdapter(BasePOSAdapter):
    provider = POSVendor.SQUARE.value

    def __init__(
        self,
        credentials: Optional[POSCredentials],
        config: Optional[POSConfig],
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(credentials, config, transport)
        settings = get_settings()
        self.api_version = settings.SQUARE_API_VERSION
        self.base_url = (
            settings.SQUARE_PRODUCTION_BASE_URL
            if self.is_production()
            else settings.SQUARE_SANDBOX_BASE_URL
        )
        self.headers = {
            "Square-Version": self.api_version,
            "Authorization": f"Bearer {self._access_token()}",
            "Content-Type": "application/json",
        }

    def _access_token(self) -> str:
        if self.credentials is None:
            return ""
        return self.credentials.access_token or ""

    def is_production(self) -> bool:
        return self._access_token().startswith(PRODUCTION_TOKEN_PREFIXES)

    def _require_access_token(self) -> str:
        self._require_credentials()
        token = self._access_token()
        if not token:
            raise MissingCredentialsError(
                "Access token is required for Square integration",
                provider=self.provider,
            )
        return token

    async def _make_request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        async with self._http_client(self.base_url, self.headers) as client:
            try:
                response = await client.request(
                    method, f"/v2{endpoint}", json=body, params=params
                )
            except httpx.HTTPError as e:
                logger.error(f"Square API request {method} {endpoint} failed: {e}")
                raise POSAPIError(
                    f"Square API request failed: {e}", provider=self.provider
                ) from e

        if not response.is_success:
            payload = self.error_payload(response)
            error_cls = POSNotFoundError if response.status_code == 404 else POSAPIError
            logger.error(
                f"Square API error on {method} {endpoint}: "
                f"{response.status_code} {payload}"
            )
            raise error_cls(
                f"Square API error: {response.status_code} - {json.dumps(payload)}",
                provider=self.provider,
                status_code=response.status_code,
                payload=payload,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Square API returned a non-JSON body on {method} {endpoint}")
            raise POSAPIError(
                f"Square API returned invalid JSON: {e}",
                provider=self.provider,
                status_code=response.status_code,
            ) from e

    async def test_connection(self) -> bool:
        self._require_access_token()
        try:
            data = await self._make_request("/locations")
        except POSAPIError as e:
            logger.warning(f"Square connection test failed: {e}")
            return False
        return bool(data.get("locations"))

    async def validate_credentials(self) -> bool:
        if not self._access_token():
            return False
        return await self.test_connection()

    async def get_location(self, location_id: str) -> POSLocationInfo:
        self._require_access_token()
        try:
            data = await self._make_request(f"/locations/{location_id}")
        except POSNotFoundError as e:
            raise POSNotFoundError(
                f"Square location {location_id} not found",
                provider=self.provider,
                status_code=e.status_code,
                payload=e.payload,
            ) from e
        except POSAPIError as e:
            logger.error(f"Failed to fetch Square location {location_id}: {e}")
            raise POSAPIError(
                "Failed to fetch location information",
                provider=self.provider,
                status_code=e.status_code,
                payload=e.payload,
            ) from e

        if not data.get("location"):
            raise POSNotFoundError(
                f"Square location {location_id} not found", provider=self.provider
            )
        return self.transform_location_from_pos(
            SquareLocation.model_validate(data["location"])
        )

    def transform_location_from_pos(self, location: SquareLocation) -> POSLocationInfo:
        """Transform Square location format to POSLocationInfo"""
        address = None
        if location.address:
            address = (
                f"{location.address.address_line_1 or ''}, "
                f"{location.address.locality or ''}, "
                f"{location.address.administrative_district_level_1 or ''}"
            )
        return POSLocationInfo(
            id=location.id,
            name=location.name,
            address=address,
            timezone=location.timezone,
            status=(
                POSLocationStatus.ACTIVE
                if location.status == "ACTIVE"
                else POSLocationStatus.INACTIVE
            ),
        )

    async def fetch_menu(self) -> List[POSProduct]:
        """Fetch the full catalog and normalize it into POSProducts"""
        self._require_access_token()
        raw_objects: List[Dict[str, Any]] = []
        cursor = None
        seen_cursors = set()
        try:
            while True:
                params = {"types": CATALOG_TYPES}
                if cursor:
                    params["cursor"] = cursor
                page = SquareCatalogListResponse.model_validate(
                    await self._make_request("/catalog/list", params=params)
                )
                raw_objects.extend(page.objects)
                if not page.cursor:
                    break
                if page.cursor in seen_cursors:
                    raise POSAPIError(
                        f"Square catalog returned repeated cursor {page.cursor}",
                        provider=self.provider,
                    )
                seen_cursors.add(page.cursor)
                cursor = page.cursor
            catalog = parse_catalog_objects(raw_objects)
        except (POSAPIError, ValidationError) as e:
            logger.error(f"Failed to fetch Square menu: {e}")
            raise POSAPIError(
                f"Failed to fetch menu from Square: {e}",
                provider=self.provider,
                status_code=getattr(e, "status_code", None),
                payload=getattr(e, "payload", None),
            ) from e

        products = self.transform_catalog_from_pos(catalog)
        logger.info(
            f"Fetched {len(products)} products from Square "
            f"({len(raw_objects)} catalog objects)"
        )
        return products

    def transform_catalog_from_pos(self, catalog: List[Any]) -> List[POSProduct]:
        """Resolve the flattened catalog graph into a product/modifier tree.

        Items reference categories and modifier lists by id and modifier lists
        reference modifiers by id, so lookup maps are built first.
        """
        modifier_lists: Dict[str, SquareModifierListObject] = {}
        modifiers: Dict[str, SquareModifierObject] = {}
        categories: Dict[str, SquareCategoryObject] = {}
        items: List[SquareItemObject] = []

        for obj in catalog:
            if isinstance(obj, SquareModifierListObject):
                modifier_lists[obj.id] = obj
            elif isinstance(obj, SquareModifierObject):
                modifiers[obj.id] = obj
            elif isinstance(obj, SquareCategoryObject):
                categories[obj.id] = obj
            elif isinstance(obj, SquareItemObject) and obj.item_data is not None:
                items.append(obj)

        return [
            self.transform_item_from_pos(item, modifier_lists, modifiers, categories)
            for item in items
        ]

    def transform_item_from_pos(
        self,
        item: SquareItemObject,
        modifier_lists: Dict[str, SquareModifierListObject],
        modifiers: Dict[str, SquareModifierObject],
        categories: Dict[str, SquareCategoryObject],
    ) -> POSProduct:
        """Transform a Square ITEM into a POSProduct"""
        item_data = item.item_data

        category_name = None
        category_id = item_data.primary_category_id
        if category_id:
            category = categories.get(category_id)
            if category and category.category_data:
                category_name = category.category_data.name

        variations = [
            POSProductVariation(
                id=variation.id,
                name=variation.item_variation_data.name,
                price=self.minor_units_to_decimal(
                    variation.item_variation_data.price_money.amount
                    if variation.item_variation_data.price_money
                    else 0
                ),
                # Square has no per-variation availability in the catalog
                available=True,
            )
            for variation in item_data.variations
        ]
        base_price = variations[0].price if variations else 0

        modifier_list_data = []
        for info in item_data.modifier_list_info:
            if info.enabled is False:
                continue
            modifier_list = self.transform_modifier_list_from_pos(
                info, modifier_lists, modifiers
            )
            if modifier_list is not None:
                modifier_list_data.append(modifier_list)

        return POSProduct(
            id=item.id,
            name=item_data.name,
            description=item_data.description,
            category=category_name,
            base_price=base_price,
            available=True,
            variations=variations or None,
            modifiers=modifier_list_data or None,
        )

    def transform_modifier_list_from_pos(
        self,
        info: SquareModifierListInfo,
        modifier_lists: Dict[str, SquareModifierListObject],
        modifiers: Dict[str, SquareModifierObject],
    ) -> Optional[POSModifierList]:
        """Resolve one item's modifier list reference; None when unresolvable"""
        modifier_list = modifier_lists.get(info.modifier_list_id)
        if modifier_list is None or modifier_list.modifier_list_data is None:
            logger.debug(f"Dropping unresolved modifier list {info.modifier_list_id}")
            return None

        list_data = modifier_list.modifier_list_data
        resolved = []
        for ref in list_data.modifiers:
            modifier = modifiers.get(ref.id)
            if modifier is None or modifier.modifier_data is None:
                logger.debug(f"Dropping unresolved modifier {ref.id}")
                continue
            price_money = modifier.modifier_data.price_money
            resolved.append(
                POSModifier(
                    id=ref.id,
                    name=modifier.modifier_data.name,
                    price=self.minor_units_to_decimal(
                        price_money.amount if price_money else 0
                    ),
                    available=True,
                )
            )

        # Square reports -1 for "no explicit limit"
        min_selections = info.min_selected_modifiers
        max_selections = info.max_selected_modifiers
        return POSModifierList(
            id=info.modifier_list_id,
            name=list_data.name,
            modifiers=resolved,
            selection_type=(
                ModifierSelectionType.SINGLE
                if list_data.selection_type == "SINGLE"
                else ModifierSelectionType.MULTIPLE
            ),
            min_selections=(
                min_selections if min_selections is not None and min_selections >= 0 else None
            ),
            max_selections=(
                max_selections if max_selections is not None and max_selections >= 0 else None
            ),
        )

    async def submit_order(self, order: POSOrder) -> POSOrderResult:
        self._require_access_token()
        self._require_config()
        payload = self.transform_order_data(order)

        try:
            data = await self._make_request("/orders", "POST", body=payload)
        except POSError as e:
            logger.error(f"Failed to submit order to Square: {e}")
            return POSOrderResult(success=False, error=str(e))

        order_id = (data.get("order") or {}).get("id")
        if not order_id:
            return POSOrderResult(
                success=False, error="Square response did not include an order id"
            )
        logger.info(f"Submitted Square order {order_id} ({payload['idempotency_key']})")
        return POSOrderResult(success=True, order_id=order_id)

    def transform_order_data(self, order: POSOrder) -> Dict[str, Any]:
        """Transform a POSOrder into a Square CreateOrder request body"""
        line_items = []
        for item in order.line_items:
            line_item: Dict[str, Any] = {
                # Square prices line items by variation when one is chosen
                "catalog_object_id": item.variation_id or item.catalog_item_id,
                "quantity": str(item.quantity),
            }
            if item.modifiers:
                line_item["modifiers"] = [
                    {
                        "catalog_object_id": modifier.catalog_item_id,
                        "quantity": str(modifier.quantity or 1),
                    }
                    for modifier in item.modifiers
                ]
            if item.note:
                line_item["note"] = item.note
            line_items.append(line_item)

        return {
            "idempotency_key": order.external_id or self.generate_idempotency_key(),
            "order": {
                "location_id": order.location_id or self.config.location_id,
                "line_items": line_items,
                "state": "OPEN",
            },
        }

    @staticmethod
    def generate_idempotency_key() -> str:
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"

    async def get_order_status(self, order_id: str) -> POSOrderStatus:
        self._require_access_token()
        try:
            data = await self._make_request(f"/orders/{order_id}")
        except POSNotFoundError as e:
            raise POSNotFoundError(
                f"Square order {order_id} not found",
                provider=self.provider,
                status_code=e.status_code,
                payload=e.payload,
            ) from e

        if not data.get("order"):
            raise POSNotFoundError(
                f"Square order {order_id} not found", provider=self.provider
            )
        square_order = SquareOrder.model_validate(data["order"])
        total = square_order.total_money
        return POSOrderStatus(
            status=square_order.state,
            details={
                "created_at": square_order.created_at,
                "updated_at": square_order.updated_at,
                "closed_at": square_order.closed_at,
                "location_id": square_order.location_id,
                "total_money": self.minor_units_to_decimal(total.amount if total else 0),
                "currency": total.currency if total else None,
            },
        )
