"""
Pytest configuration and fixtures for Pantry Chef tests.
"""

import os

import pytest
from unittest.mock import MagicMock

# Settings need these before any pantry_chef module reads them
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ["PANTRY_ENV"] = "development"

from pantry_chef.models import User
from pantry_chef.store import KitchenStore

USER_ID = "11111111-1111-1111-1111-111111111111"


@pytest.fixture
def mock_supabase():
    """Mock Supabase client; every builder method returns the same table mock."""
    mock_client = MagicMock()

    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.insert.return_value = mock_table
    mock_table.update.return_value = mock_table
    mock_table.delete.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.order.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    return mock_client


@pytest.fixture
def mock_table(mock_supabase):
    return mock_supabase.table.return_value


@pytest.fixture
def user():
    return User(id=USER_ID, email="cook@example.com")


@pytest.fixture
def store(mock_supabase):
    """Store with no signed-in user and predictable session ids."""
    counter = iter(range(1, 100))
    return KitchenStore(mock_supabase, session_id_factory=lambda: f"session-{next(counter)}")


@pytest.fixture
def signed_in_store(store, user):
    store.set_user(user)
    return store


@pytest.fixture
def ingredient_row():
    return {
        "id": "ing-1",
        "user_id": USER_ID,
        "name": "Tomato",
        "quantity": 4,
        "unit": "pieces",
        "category": "vegetables",
        "expiry_date": "2026-10-20",
        "created_at": "2026-10-10T09:00:00+00:00",
        "updated_at": "2026-10-10T09:00:00+00:00",
    }


@pytest.fixture
def recipe_row():
    return {
        "id": "rec-1",
        "user_id": USER_ID,
        "title": "Tomato Soup",
        "description": "Silky and warming",
        "ingredients": ["4 tomatoes", "1 cup stock"],
        "instructions": ["Simmer", "Blend"],
        "prep_time": 10,
        "cook_time": 25,
        "servings": 2,
        "difficulty": "easy",
        "cuisine": "italian",
        "tags": ["soup"],
        "created_at": "2026-10-11T09:00:00+00:00",
        "updated_at": "2026-10-11T09:00:00+00:00",
    }


@pytest.fixture
def meal_plan_row():
    return {
        "id": "meal-1",
        "user_id": USER_ID,
        "date": "2026-10-19",
        "meal_type": "dinner",
        "recipe_id": "rec-1",
        "notes": None,
        "created_at": "2026-10-12T09:00:00+00:00",
        "updated_at": "2026-10-12T09:00:00+00:00",
    }


def make_chat_row(message_type="user", content="hi", metadata=None, row_id="msg-1", session_id="session-1"):
    return {
        "id": row_id,
        "user_id": USER_ID,
        "session_id": session_id,
        "message_type": message_type,
        "content": content,
        "metadata": metadata if metadata is not None else {},
        "tokens_used": 0,
        "response_time_ms": 0,
        "created_at": "2026-10-13T09:00:00+00:00",
    }


@pytest.fixture
def chat_row():
    return make_chat_row()


@pytest.fixture(name="make_chat_row")
def make_chat_row_fixture():
    return make_chat_row
