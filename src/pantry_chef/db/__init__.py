"""
Pantry Chef - Database Client.

Supabase access for the four user-scoped tables.
"""

from pantry_chef.db.adapter import DatabaseAdapter
from pantry_chef.db.client import get_client

__all__ = [
    "DatabaseAdapter",
    "get_client",
]
