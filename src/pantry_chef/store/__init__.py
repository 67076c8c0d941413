"""Pantry Chef - Application state."""

from pantry_chef.store.state import KitchenStore

__all__ = ["KitchenStore"]
