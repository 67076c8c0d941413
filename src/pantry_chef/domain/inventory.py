"""Inventory filtering, sorting and expiry status."""

from datetime import date
from typing import Literal

from pantry_chef.models import Ingredient

ExpiryStatus = Literal["none", "expired", "expiring", "warning", "fresh"]
IngredientSort = Literal["name", "expiry", "quantity"]

EXPIRING_DAYS = 3
WARNING_DAYS = 7


def days_until_expiry(expiry_date: date | None, today: date | None = None) -> int | None:
    """Whole days from today to the expiry date; negative once expired."""
    if expiry_date is None:
        return None
    return (expiry_date - (today or date.today())).days


def expiry_status(expiry_date: date | None, today: date | None = None) -> ExpiryStatus:
    days = days_until_expiry(expiry_date, today)
    if days is None:
        return "none"
    if days < 0:
        return "expired"
    if days <= EXPIRING_DAYS:
        return "expiring"
    if days <= WARNING_DAYS:
        return "warning"
    return "fresh"


def filter_ingredients(
    items: list[Ingredient], search: str = "", category: str = "All"
) -> list[Ingredient]:
    """Case-insensitive name search, optionally limited to one category."""
    needle = search.lower()
    return [
        item
        for item in items
        if needle in item.name.lower() and (category == "All" or item.category == category)
    ]


def sort_ingredients(items: list[Ingredient], by: IngredientSort = "name") -> list[Ingredient]:
    """
    Sort a copy of the list.

    - name: alphabetical, case-insensitive
    - expiry: soonest first, undated items last
    - quantity: largest first
    """
    if by == "name":
        return sorted(items, key=lambda item: item.name.lower())
    if by == "expiry":
        return sorted(
            items,
            key=lambda item: (item.expiry_date is None, item.expiry_date or date.max),
        )
    if by == "quantity":
        return sorted(items, key=lambda item: item.quantity, reverse=True)
    return list(items)
