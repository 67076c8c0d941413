"""
Pantry Chef - Exceptions.

Store errors come from the Supabase side, assistant errors from Gemini.
Assistant errors carry a short `user_message` suitable for a notification;
none of them are fatal and the user can simply retry.
"""


class PantryChefError(Exception):
    """Base class for all Pantry Chef errors."""


class NotAuthenticatedError(PantryChefError):
    """A user-initiated mutation was attempted without a signed-in user."""


class StoreError(PantryChefError):
    """A write against the remote data store failed."""


class AuthError(PantryChefError):
    """Sign-in, sign-out or session restore failed."""


class AssistantError(PantryChefError):
    """Base class for generative endpoint failures."""

    user_message = "Failed to get response. Please try again."

    def __init__(self, message: str | None = None, *, status_code: int | None = None):
        super().__init__(message or self.user_message)
        self.status_code = status_code


class AssistantConfigError(AssistantError):
    """No Gemini API key is configured."""

    user_message = "AI service configuration error. Please contact support."


class BadRequestError(AssistantError):
    """HTTP 400 from the generative endpoint."""

    user_message = "Invalid request. Please check your API key or try again."


class ForbiddenKeyError(AssistantError):
    """HTTP 403: the API key is invalid or lacks permission."""

    user_message = "API key is invalid or doesn't have permission."


class RateLimitedError(AssistantError):
    """HTTP 429 from the generative endpoint."""

    user_message = "Too many requests. Please wait a moment and try again."


class ServiceError(AssistantError):
    """Any other non-success HTTP status."""

    user_message = "The AI service returned an error. Please try again."


class EmptyResponseError(AssistantError):
    """The endpoint answered but produced no usable text."""

    user_message = "No response generated. Please try with different input."


class ConnectionFailedError(AssistantError):
    """The request never got an HTTP response."""

    user_message = "Network error. Please check your internet connection."
