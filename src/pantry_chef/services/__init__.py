"""Pantry Chef - Assistant and chat services."""

from pantry_chef.services.assistant import ChefAssistant
from pantry_chef.services.chat import ChatService

__all__ = ["ChefAssistant", "ChatService"]
