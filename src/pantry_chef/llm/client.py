"""
Pantry Chef - Gemini Client.

One POST to the generateContent endpoint per call. The reply is returned
as raw text; turning it into structure is the interpreter's job.

Failures are classified by HTTP status so the caller can show a specific
message:
- 400: BadRequestError
- 403: ForbiddenKeyError
- 429: RateLimitedError
- anything else: ServiceError

No retries and no cancellation: a slow request runs until the transport
timeout and its reply is still returned.
"""

import logging
from typing import Any

import httpx

from pantry_chef.config import settings
from pantry_chef.errors import (
    AssistantConfigError,
    AssistantError,
    BadRequestError,
    ConnectionFailedError,
    EmptyResponseError,
    ForbiddenKeyError,
    RateLimitedError,
    ServiceError,
)
from pantry_chef.llm.prompt_logger import log_prompt

logger = logging.getLogger(__name__)

# Singleton client instance
_client: "GeminiClient | None" = None


def error_for_status(status_code: int, body: str = "") -> AssistantError:
    """Map a non-success HTTP status to the matching assistant error."""
    if status_code == 400:
        return BadRequestError(status_code=status_code)
    if status_code == 403:
        return ForbiddenKeyError(status_code=status_code)
    if status_code == 429:
        return RateLimitedError(status_code=status_code)
    return ServiceError(f"Gemini API error: {status_code} - {body}", status_code=status_code)


def extract_candidate_text(data: Any) -> str:
    """Text of the first part of the first candidate."""
    candidates = data.get("candidates") if isinstance(data, dict) else None
    if not candidates:
        raise EmptyResponseError()

    try:
        text = candidates[0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        text = None

    if not text:
        raise EmptyResponseError("Empty response from AI. Please try again.")
    return text


class GeminiClient:
    """
    Async client for Gemini text generation.

    Pass `http_client` to reuse a connection pool (or a mock transport in
    tests); otherwise a short-lived httpx.AsyncClient is opened per call.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        url: str,
        model: str = "gemini",
        generation_config: dict[str, Any] | None = None,
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.url = url
        self.model = model
        self.generation_config = generation_config or {}
        self.timeout = timeout
        self._http_client = http_client

    @classmethod
    def from_settings(cls, http_client: httpx.AsyncClient | None = None) -> "GeminiClient":
        return cls(
            settings.gemini_api_key,
            url=settings.generate_content_url,
            model=settings.gemini_model,
            generation_config={
                "temperature": settings.gemini_temperature,
                "topK": settings.gemini_top_k,
                "topP": settings.gemini_top_p,
                "maxOutputTokens": settings.gemini_max_output_tokens,
            },
            timeout=settings.gemini_timeout_seconds,
            http_client=http_client,
        )

    def build_body(self, prompt: str) -> dict[str, Any]:
        body: dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if self.generation_config:
            body["generationConfig"] = dict(self.generation_config)
        return body

    async def generate_text(self, prompt: str, *, kind: str = "prompt") -> str:
        """
        Send a prompt and return the completion text.

        Raises:
            AssistantConfigError: no API key configured (no request is made)
            ConnectionFailedError: timeout or network failure
            BadRequestError, ForbiddenKeyError, RateLimitedError, ServiceError:
                non-success HTTP status
            EmptyResponseError: no candidates or no text in the reply
        """
        if not self.api_key:
            raise AssistantConfigError(
                "Gemini API key is not configured. Please set GEMINI_API_KEY."
            )

        logger.info(f"Gemini request ({kind}) to {self.model}")
        try:
            response = await self._post(self.build_body(prompt))
        except httpx.HTTPError as e:
            logger.error(f"Gemini request failed: {e}")
            log_prompt(kind=kind, model=self.model, prompt=prompt, error=str(e))
            raise ConnectionFailedError(
                "Failed to connect to AI service. Please check your internet connection and try again."
            ) from e

        logger.debug(f"Gemini response status: {response.status_code}")
        if response.status_code >= 400:
            logger.error(f"Gemini API error response: {response.text}")
            log_prompt(
                kind=kind,
                model=self.model,
                prompt=prompt,
                error=response.text,
                status_code=response.status_code,
            )
            raise error_for_status(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise ServiceError("Gemini returned a non-JSON response", status_code=response.status_code) from e

        text = extract_candidate_text(data)
        log_prompt(
            kind=kind,
            model=self.model,
            prompt=prompt,
            response=text,
            status_code=response.status_code,
        )
        return text

    async def _post(self, body: dict[str, Any]) -> httpx.Response:
        params = {"key": self.api_key}
        if self._http_client is not None:
            return await self._http_client.post(self.url, params=params, json=body)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.url, params=params, json=body)


def get_client() -> GeminiClient:
    """
    Get the shared Gemini client built from settings.

    Uses singleton pattern like the Supabase client.
    """
    global _client

    if _client is None:
        _client = GeminiClient.from_settings()

    return _client
