"""
Pantry Chef - Kitchen selectors.

Pure functions over the store's cached lists: filtering, sorting, expiry
tracking, the weekly meal grid and dashboard numbers.
"""

from pantry_chef.domain.dashboard import DashboardStats, dashboard_stats, expiring_soon
from pantry_chef.domain.inventory import expiry_status, filter_ingredients, sort_ingredients
from pantry_chef.domain.meal_plan import meal_for_day, week_coverage, week_days
from pantry_chef.domain.recipes import cuisine_options, filter_recipes

__all__ = [
    "DashboardStats",
    "dashboard_stats",
    "expiring_soon",
    "expiry_status",
    "filter_ingredients",
    "sort_ingredients",
    "meal_for_day",
    "week_coverage",
    "week_days",
    "cuisine_options",
    "filter_recipes",
]
