"""
Tests for Square catalog normalization.

Square returns the catalog as a flat list of typed objects that reference
each other by id; fetch_menu resolves them into POSProduct trees.
"""

import httpx
import pytest
import respx

from drinkux_pos.core.exceptions import POSAPIError
from drinkux_pos.modules.pos.adapters.square_adapter import CATALOG_TYPES, SquareAdapter
from drinkux_pos.modules.pos.adapters.square_models import parse_catalog_objects
from drinkux_pos.modules.pos.enums.pos_enums import ModifierSelectionType

from .conftest import SANDBOX_BASE_URL, catalog_item

CATALOG_URL = f"{SANDBOX_BASE_URL}/v2/catalog/list"


@pytest.fixture
def adapter(square_credentials, square_config):
    return SquareAdapter(square_credentials, square_config)


def modifier_list(list_id, name, modifier_ids, selection_type="MULTIPLE"):
    return {
        "type": "MODIFIER_LIST",
        "id": list_id,
        "modifier_list_data": {
            "name": name,
            "selection_type": selection_type,
            "modifiers": [{"id": modifier_id} for modifier_id in modifier_ids],
        },
    }


def modifier(modifier_id, name, amount):
    return {
        "type": "MODIFIER",
        "id": modifier_id,
        "modifier_data": {
            "name": name,
            "price_money": {"amount": amount, "currency": "USD"},
        },
    }


class TestFetchMenu:
    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_menu(self, adapter, latte_catalog):
        route = respx.get(CATALOG_URL).mock(
            return_value=httpx.Response(200, json=latte_catalog)
        )

        products = await adapter.fetch_menu()

        assert route.calls.last.request.url.params["types"] == CATALOG_TYPES
        assert len(products) == 1
        latte = products[0]
        assert latte.id == "item-1"
        assert latte.name == "Latte"
        assert latte.description == "Classic espresso with milk"
        assert latte.category == "Espresso Drinks"
        assert latte.base_price == 4.5
        assert latte.available is True

        assert [v.name for v in latte.variations] == ["Small", "Large"]
        assert [v.price for v in latte.variations] == [4.5, 5.5]
        assert all(v.available for v in latte.variations)

        assert len(latte.modifiers) == 1
        milk = latte.modifiers[0]
        assert milk.id == "mod-list-1"
        assert milk.name == "Milk Options"
        assert milk.selection_type == ModifierSelectionType.SINGLE
        assert len(milk.modifiers) == 1
        assert milk.modifiers[0].id == "mod-1"
        assert milk.modifiers[0].name == "Oat Milk"
        assert milk.modifiers[0].price == 0.75

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_catalog(self, adapter):
        respx.get(CATALOG_URL).mock(return_value=httpx.Response(200, json={}))

        assert await adapter.fetch_menu() == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_follows_pagination_cursor(self, adapter):
        route = respx.get(CATALOG_URL)
        route.side_effect = [
            httpx.Response(
                200,
                json={"objects": [catalog_item("item-1", "Latte", 450)], "cursor": "page-2"},
            ),
            httpx.Response(
                200, json={"objects": [catalog_item("item-2", "Mocha", 500)]}
            ),
        ]

        products = await adapter.fetch_menu()

        assert route.call_count == 2
        assert "cursor" not in route.calls[0].request.url.params
        assert route.calls[1].request.url.params["cursor"] == "page-2"
        assert [p.name for p in products] == ["Latte", "Mocha"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_api_failure(self, adapter):
        respx.get(CATALOG_URL).mock(
            return_value=httpx.Response(403, json={"errors": [{"code": "FORBIDDEN"}]})
        )

        with pytest.raises(POSAPIError) as exc_info:
            await adapter.fetch_menu()

        assert str(exc_info.value).startswith("Failed to fetch menu from Square:")
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_catalog_object(self, adapter):
        respx.get(CATALOG_URL).mock(
            return_value=httpx.Response(
                200, json={"objects": [{"type": "ITEM", "item_data": {"name": "no id"}}]}
            )
        )

        with pytest.raises(POSAPIError) as exc_info:
            await adapter.fetch_menu()

        assert str(exc_info.value).startswith("Failed to fetch menu from Square:")

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_json_success_body(self, adapter):
        respx.get(CATALOG_URL).mock(
            return_value=httpx.Response(200, text="<html>gateway</html>")
        )

        with pytest.raises(POSAPIError) as exc_info:
            await adapter.fetch_menu()

        assert str(exc_info.value).startswith("Failed to fetch menu from Square:")
        assert "invalid JSON" in str(exc_info.value)
        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    @respx.mock
    async def test_repeated_cursor_stops_pagination(self, adapter):
        route = respx.get(CATALOG_URL)
        route.side_effect = [
            httpx.Response(
                200,
                json={"objects": [catalog_item("item-1", "Latte", 450)], "cursor": "page-2"},
            ),
            httpx.Response(
                200,
                json={"objects": [catalog_item("item-2", "Mocha", 500)], "cursor": "page-2"},
            ),
        ]

        with pytest.raises(POSAPIError) as exc_info:
            await adapter.fetch_menu()

        assert route.call_count == 2
        assert "repeated cursor page-2" in str(exc_info.value)


class TestCatalogTransform:
    def transform(self, adapter, raw_objects):
        return adapter.transform_catalog_from_pos(parse_catalog_objects(raw_objects))

    def test_item_without_variations_or_modifiers(self, adapter):
        products = self.transform(adapter, [catalog_item("item-1", "Water")])

        product = products[0]
        assert product.base_price == 0
        assert product.variations is None
        assert product.modifiers is None
        dumped = product.model_dump(exclude_none=True)
        assert "variations" not in dumped
        assert "modifiers" not in dumped

    def test_disabled_modifier_list_is_skipped(self, adapter):
        products = self.transform(
            adapter,
            [
                catalog_item(
                    "item-1",
                    "Latte",
                    450,
                    modifier_list_info=[{"modifier_list_id": "ml-1", "enabled": False}],
                ),
                modifier_list("ml-1", "Milk", ["m-1"]),
                modifier("m-1", "Oat", 75),
            ],
        )

        assert products[0].modifiers is None
        assert "modifiers" not in products[0].model_dump(exclude_none=True)

    def test_modifier_list_enabled_when_flag_absent(self, adapter):
        products = self.transform(
            adapter,
            [
                catalog_item(
                    "item-1", "Latte", 450, modifier_list_info=[{"modifier_list_id": "ml-1"}]
                ),
                modifier_list("ml-1", "Milk", ["m-1"]),
                modifier("m-1", "Oat", 75),
            ],
        )

        assert [m.id for m in products[0].modifiers] == ["ml-1"]

    def test_unresolved_references_are_dropped(self, adapter):
        products = self.transform(
            adapter,
            [
                catalog_item(
                    "item-1",
                    "Latte",
                    450,
                    category_id="missing-category",
                    modifier_list_info=[
                        {"modifier_list_id": "missing-list"},
                        {"modifier_list_id": "ml-1"},
                    ],
                ),
                modifier_list("ml-1", "Milk", ["m-1", "missing-modifier"]),
                modifier("m-1", "Oat", 75),
            ],
        )

        product = products[0]
        assert product.category is None
        assert [m.id for m in product.modifiers] == ["ml-1"]
        assert [m.id for m in product.modifiers[0].modifiers] == ["m-1"]

    def test_category_from_categories_list(self, adapter):
        item = catalog_item("item-1", "Latte", 450)
        item["item_data"]["categories"] = [{"id": "cat-2"}]

        products = self.transform(
            adapter,
            [
                item,
                {"type": "CATEGORY", "id": "cat-2", "category_data": {"name": "Coffee"}},
            ],
        )

        assert products[0].category == "Coffee"

    def test_selection_type_and_limits(self, adapter):
        products = self.transform(
            adapter,
            [
                catalog_item(
                    "item-1",
                    "Latte",
                    450,
                    modifier_list_info=[
                        {
                            "modifier_list_id": "ml-single",
                            "min_selected_modifiers": 1,
                            "max_selected_modifiers": 1,
                        },
                        {
                            "modifier_list_id": "ml-multi",
                            "min_selected_modifiers": -1,
                            "max_selected_modifiers": -1,
                        },
                        {"modifier_list_id": "ml-untyped"},
                    ],
                ),
                modifier_list("ml-single", "Size", ["m-1"], selection_type="SINGLE"),
                modifier_list("ml-multi", "Extras", ["m-1"], selection_type="MULTIPLE"),
                {
                    "type": "MODIFIER_LIST",
                    "id": "ml-untyped",
                    "modifier_list_data": {"name": "Syrups", "modifiers": []},
                },
                modifier("m-1", "Shot", 100),
            ],
        )

        single, multi, untyped = products[0].modifiers
        assert single.selection_type == ModifierSelectionType.SINGLE
        assert single.min_selections == 1
        assert single.max_selections == 1
        assert multi.selection_type == ModifierSelectionType.MULTIPLE
        assert multi.min_selections is None
        assert multi.max_selections is None
        assert untyped.selection_type == ModifierSelectionType.MULTIPLE
        assert untyped.modifiers == []

    def test_only_items_become_products(self, adapter):
        products = self.transform(
            adapter,
            [
                {"type": "CATEGORY", "id": "cat-1", "category_data": {"name": "Coffee"}},
                modifier("m-1", "Oat", 75),
                {"type": "IMAGE", "id": "img-1", "image_data": {"url": "https://x"}},
                {"type": "TAX", "id": "tax-1", "tax_data": {"name": "Sales"}},
                catalog_item("item-1", "Latte", 450, category_id="cat-1"),
            ],
        )

        assert [p.id for p in products] == ["item-1"]
        assert products[0].category == "Coffee"

    def test_missing_price_is_zero(self, adapter):
        item = catalog_item("item-1", "Latte", 450)
        del item["item_data"]["variations"][0]["item_variation_data"]["price_money"]

        products = self.transform(adapter, [item])

        assert products[0].base_price == 0
        assert products[0].variations[0].price == 0

    def test_no_limit_sentinel_becomes_none_but_zero_is_kept(self, adapter):
        products = self.transform(
            adapter,
            [
                catalog_item(
                    "item-1",
                    "Latte",
                    450,
                    modifier_list_info=[
                        {
                            "modifier_list_id": "ml-1",
                            "min_selected_modifiers": 0,
                            "max_selected_modifiers": -1,
                        }
                    ],
                ),
                modifier_list("ml-1", "Extras", ["m-1"]),
                modifier("m-1", "Shot", 100),
            ],
        )

        extras = products[0].modifiers[0]
        assert extras.min_selections == 0
        assert extras.max_selections is None
