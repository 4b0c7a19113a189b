"""
Static Menu Catalog

The menu is configuration data, loaded once at import time and never
mutated. Orders snapshot name and price at the moment an item is added,
so editing this file never changes existing orders.
"""

from dataclasses import dataclass
from typing import Optional


MENU_VERSIONS = ["RestoVersion", "SnacksVersion", "DrinksVersion"]

CATEGORY_ORDER = [
    "Soups",
    "Salads",
    "Starters",
    "Breads",
    "Gravy/Curry",
    "Chinese",
    "Rice Special",
    "Malnad Special",
]


@dataclass(frozen=True)
class MenuItem:
    """A catalog entry available for ordering."""

    id: str
    name: str
    price: int
    category: str
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError(f"Menu item {self.id} has a negative price")
        if self.category not in CATEGORY_ORDER:
            raise ValueError(f"Menu item {self.id} has unknown category {self.category!r}")


@dataclass(frozen=True)
class MenuCategory:
    name: str
    items: tuple[MenuItem, ...]


RESTO_VERSION_MENU: tuple[MenuItem, ...] = (
    # Soups
    MenuItem("soup_01", "Baby Corn Soup", 100, "Soups"),
    MenuItem("soup_02", "Hot & Sour Soup", 120, "Soups"),
    MenuItem("soup_03", "Tomato Soup", 100, "Soups"),
    MenuItem("soup_04", "Veg Cheese Soup", 120, "Soups"),
    MenuItem("soup_05", "Burnt Garlic Soup", 100, "Soups"),
    MenuItem("soup_06", "Broccoli Soup", 120, "Soups"),

    # Salads
    MenuItem("salad_01", "Kachumber Salad", 40, "Salads"),
    MenuItem("salad_02", "Green Salad", 40, "Salads"),
    MenuItem("salad_03", "Italian Pasta Salad", 80, "Salads"),
    MenuItem("salad_04", "Veg Russian Salad", 50, "Salads"),
    MenuItem("salad_05", "Nut Salad", 50, "Salads"),
    MenuItem("salad_06", "ColeSlaw Salad", 50, "Salads"),

    # Starters
    MenuItem("starter_01", "Gobi Manchurian", 140, "Starters"),
    MenuItem("starter_02", "Paneer/Aloo/Gobi - Pepper Dry", 150, "Starters"),
    MenuItem("starter_03", "Paneer/Aloo/Gobi - Chilly", 140, "Starters"),
    MenuItem("starter_04", "Golden Fried Baby Corn", 180, "Starters"),
    MenuItem("starter_05", "Mushroom Dry/Chilly", 180, "Starters"),
    MenuItem("starter_06", "Veg Chilly/Veg Dry", 120, "Starters"),
    MenuItem("starter_07", "Baby Corn/Paneer Schezwaan", 140, "Starters"),

    # Breads
    MenuItem("bread_01", "Aloo Stuffed Parata (Per Plate)", 120, "Breads"),
    MenuItem("bread_02", "Mirch/Pudina/Methi Parata (Per Plate)", 120, "Breads"),
    MenuItem("bread_03", "Paneer Stuffed Parata (Per Plate)", 150, "Breads"),
    MenuItem("bread_04", "Roti (Per Piece)", 30, "Breads"),
    MenuItem("bread_05", "Chapathi (Per Piece)", 30, "Breads"),
    MenuItem("bread_06", "Normal Parata (Per Piece)", 40, "Breads"),
    MenuItem("bread_07", "White Maida Chapathi (Per Piece)", 40, "Breads"),

    # Gravy/Curry
    MenuItem("curry_01", "Paneer Tikka Masala", 255, "Gravy/Curry"),
    MenuItem("curry_02", "Dal Makhani", 155, "Gravy/Curry"),
    MenuItem("curry_03", "Shahi Paneer", 215, "Gravy/Curry"),
    MenuItem("curry_04", "Dal Tadka", 145, "Gravy/Curry"),
    MenuItem("curry_05", "Palak Paneer", 215, "Gravy/Curry"),
    MenuItem("curry_06", "Mixed Veg", 145, "Gravy/Curry"),
    MenuItem("curry_07", "Shahi Paneer/Paneer Kadai", 215, "Gravy/Curry"),
    MenuItem("curry_08", "Matar Mushroom", 215, "Gravy/Curry"),
    MenuItem("curry_09", "Veg Kolhapuri", 155, "Gravy/Curry"),

    # Chinese
    MenuItem("chinese_01", "Schezwaan Fried Rice/Noodles", 199, "Chinese"),
    MenuItem("chinese_02", "Masala Noodles / Pasta", 180, "Chinese"),
    MenuItem("chinese_03", "White Sause Pasta/ Noodles", 215, "Chinese"),
    MenuItem("chinese_04", "Fried Rice", 180, "Chinese"),
    MenuItem("chinese_05", "Garlic Fried Rice", 180, "Chinese"),
    MenuItem("chinese_06", "Shanghai Fried Rice", 199, "Chinese"),
    MenuItem("chinese_07", "Chinese Chopsuey", 215, "Chinese"),

    # Rice Special
    MenuItem("rice_01", "Hyderabadi Biryani", 215, "Rice Special"),
    MenuItem("rice_02", "Veg Biryani", 215, "Rice Special"),
    MenuItem("rice_03", "Dal Kichidi", 180, "Rice Special"),
    MenuItem("rice_04", "Ghee Rice / Jeera Rice", 180, "Rice Special"),
    MenuItem("rice_05", "Mushroom Biryani", 215, "Rice Special"),
    MenuItem("rice_06", "Lemon Rice / Puliogere", 120, "Rice Special"),
    MenuItem("rice_07", "Soya Chunks Biryani", 215, "Rice Special"),
    MenuItem("rice_08", "Paneer Biryani", 215, "Rice Special"),

    # Malnad Special
    MenuItem("malnad_01", "South Indian Meal (MIN. Order 4)", 210, "Malnad Special"),
    MenuItem("malnad_02", "Rice Thalipattu", 100, "Malnad Special"),
    MenuItem("malnad_03", "Rava Dosa", 120, "Malnad Special"),
    MenuItem("malnad_04", "Pathrode", 120, "Malnad Special"),
    MenuItem("malnad_05", "Poha", 80, "Malnad Special"),
    MenuItem("malnad_06", "Neer Dosa", 120, "Malnad Special"),
    MenuItem("malnad_07", "Dosa (Varieties Available)", 80, "Malnad Special"),
)

# Only the restaurant menu is stocked; the other versions are recorded on
# orders but have no catalog of their own yet.
MENUS: dict[str, tuple[MenuItem, ...]] = {
    "RestoVersion": RESTO_VERSION_MENU,
    "SnacksVersion": (),
    "DrinksVersion": (),
}


def filter_menu(
    items: tuple[MenuItem, ...],
    search: Optional[str] = None,
    category: Optional[str] = None,
) -> list[MenuItem]:
    """Case-insensitive name search combined with an exact category match."""
    needle = (search or "").lower()
    return [
        item for item in items
        if needle in item.name.lower()
        and (not category or item.category == category)
    ]


def group_menu_by_category(items) -> list[MenuCategory]:
    """
    Group items under the fixed category order.

    Categories without items are dropped; items keep their catalog order
    within a category.
    """
    grouped: dict[str, list[MenuItem]] = {}
    for item in items:
        grouped.setdefault(item.category, []).append(item)

    return [
        MenuCategory(name=name, items=tuple(grouped[name]))
        for name in CATEGORY_ORDER
        if grouped.get(name)
    ]
