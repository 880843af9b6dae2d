import pytest

from drinkux_pos.modules.pos.adapters.adapter_factory import (
    AdapterFactory,
    initialize_default_adapters,
)
from drinkux_pos.modules.pos.schemas.pos_schemas import (
    POSConfig,
    POSCredentials,
    POSIntegration,
    POSOrder,
    POSOrderLineItem,
)

SANDBOX_BASE_URL = "https://connect.squareupsandbox.com"
PRODUCTION_BASE_URL = "https://connect.squareup.com"


@pytest.fixture
def square_credentials():
    return POSCredentials(access_token="EAAA_test_sandbox_token")


@pytest.fixture
def square_config():
    return POSConfig(location_id="test-location-123", auto_sync_menu=True, sync_interval=60)


@pytest.fixture
def factory():
    """Fresh factory with the built-in adapters, isolated from the process-wide one"""
    return initialize_default_adapters(AdapterFactory(), include_preview=False)


@pytest.fixture
def square_integration(square_credentials, square_config):
    return POSIntegration(
        id="integration-1",
        business_id="business-1",
        provider="square",
        credentials=square_credentials,
        config=square_config,
        is_active=True,
    )


@pytest.fixture
def sample_order():
    return POSOrder(
        location_id="",
        line_items=[
            POSOrderLineItem(catalog_item_id="item-1", quantity=2, variation_id="var-1"),
        ],
    )


def catalog_item(item_id, name, amount=None, category_id=None, modifier_list_info=None):
    """Build a raw Square ITEM catalog object"""
    variations = []
    if amount is not None:
        variations.append(
            {
                "type": "ITEM_VARIATION",
                "id": f"{item_id}-var",
                "item_variation_data": {
                    "name": "Regular",
                    "item_id": item_id,
                    "price_money": {"amount": amount, "currency": "USD"},
                },
            }
        )
    item_data = {"name": name, "variations": variations}
    if category_id:
        item_data["category_id"] = category_id
    if modifier_list_info is not None:
        item_data["modifier_list_info"] = modifier_list_info
    return {"type": "ITEM", "id": item_id, "item_data": item_data}


@pytest.fixture
def latte_catalog():
    """One item -> one enabled modifier list -> one modifier, plus its category"""
    return {
        "objects": [
            {
                "id": "item-1",
                "type": "ITEM",
                "item_data": {
                    "name": "Latte",
                    "description": "Classic espresso with milk",
                    "category_id": "cat-1",
                    "variations": [
                        {
                            "id": "var-1",
                            "item_variation_data": {
                                "name": "Small",
                                "price_money": {"amount": 450, "currency": "USD"},
                                "item_id": "item-1",
                            },
                        },
                        {
                            "id": "var-2",
                            "item_variation_data": {
                                "name": "Large",
                                "price_money": {"amount": 550, "currency": "USD"},
                                "item_id": "item-1",
                            },
                        },
                    ],
                    "modifier_list_info": [
                        {"modifier_list_id": "mod-list-1", "enabled": True},
                    ],
                },
            },
            {
                "id": "cat-1",
                "type": "CATEGORY",
                "category_data": {"name": "Espresso Drinks"},
            },
            {
                "id": "mod-list-1",
                "type": "MODIFIER_LIST",
                "modifier_list_data": {
                    "name": "Milk Options",
                    "selection_type": "SINGLE",
                    "modifiers": [
                        {
                            "id": "mod-1",
                            "modifier_data": {
                                "name": "Oat Milk",
                                "price_money": {"amount": 75, "currency": "USD"},
                            },
                        },
                    ],
                },
            },
            {
                "id": "mod-1",
                "type": "MODIFIER",
                "modifier_data": {
                    "name": "Oat Milk",
                    "price_money": {"amount": 75, "currency": "USD"},
                },
            },
        ]
    }
