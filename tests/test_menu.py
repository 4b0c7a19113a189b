import dataclasses

import pytest

from resto_orders.menu import (
    CATEGORY_ORDER,
    MENU_VERSIONS,
    MENUS,
    RESTO_VERSION_MENU,
    MenuItem,
    filter_menu,
    group_menu_by_category,
)


def test_every_version_has_a_catalog():
    assert set(MENUS) == set(MENU_VERSIONS)


def test_item_ids_are_unique():
    ids = [item.id for item in RESTO_VERSION_MENU]
    assert len(ids) == len(set(ids))


def test_grouping_follows_fixed_category_order():
    groups = group_menu_by_category(RESTO_VERSION_MENU)

    assert [group.name for group in groups] == CATEGORY_ORDER
    assert sum(len(group.items) for group in groups) == len(RESTO_VERSION_MENU)
    assert groups[0].items[0].name == "Baby Corn Soup"


def test_grouping_drops_empty_categories():
    items = [item for item in RESTO_VERSION_MENU if item.category in ("Breads", "Soups")]

    groups = group_menu_by_category(reversed(items))

    assert [group.name for group in groups] == ["Soups", "Breads"]


def test_search_is_case_insensitive():
    names = [item.name for item in filter_menu(RESTO_VERSION_MENU, search="BIRYANI")]

    assert "Veg Biryani" in names
    assert all("biryani" in name.lower() for name in names)


def test_search_and_category_combine():
    items = filter_menu(RESTO_VERSION_MENU, search="paneer", category="Rice Special")

    assert [item.name for item in items] == ["Paneer Biryani"]


def test_empty_filters_return_everything():
    assert filter_menu(RESTO_VERSION_MENU) == list(RESTO_VERSION_MENU)


def test_menu_items_are_immutable():
    item = RESTO_VERSION_MENU[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        item.price = 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"price": -5, "category": "Soups"},
        {"price": 100, "category": "Desserts"},
    ],
)
def test_invalid_menu_items_rejected(kwargs):
    with pytest.raises(ValueError):
        MenuItem("x_01", "Mystery", **kwargs)
