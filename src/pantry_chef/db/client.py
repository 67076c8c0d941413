"""
Pantry Chef - Supabase Client.

Low-level database access. The store receives this client as its
DatabaseAdapter; nothing else should create one.
"""

from supabase import Client, create_client

from pantry_chef.config import settings

# Table names
INGREDIENTS = "ingredients"
RECIPES = "recipes"
MEAL_PLANS = "meal_plans"
CHAT_HISTORY = "chat_history"

# Singleton client instance
_client: Client | None = None


def get_client() -> Client:
    """
    Get the Supabase client.

    Uses singleton pattern so auth state (the signed-in session) is shared
    between the store and the auth helpers.
    """
    global _client

    if _client is None:
        _client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _client


def reset_client() -> None:
    """Drop the cached client (used after sign-out and in tests)."""
    global _client
    _client = None
