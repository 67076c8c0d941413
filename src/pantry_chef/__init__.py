"""
Pantry Chef - Kitchen management with an AI recipe assistant.

Areas:
- Inventory: ingredients with quantities and expiry dates
- Recipes: saved recipes, including ones generated by the assistant
- Meal plans: breakfast/lunch/dinner slots per day
- Chat: conversations with the Gemini-backed chef assistant
"""

__version__ = "1.0.0"
