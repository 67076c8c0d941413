"""
Interpretation of free-text model replies.

The model is asked for a JSON recipe but nothing enforces it. The pipeline:
1. Strip code fences
2. Parse the span from the first "{" to the last "}" as JSON
3. Fall back to line heuristics when there is no object or it is malformed

interpret_recipe_response() never raises; the worst case is a recipe made
entirely of defaults.
"""

import json
import logging
import math
import re
from typing import Any

from .models import (
    DEFAULT_COOK_TIME,
    DEFAULT_CUISINE,
    DEFAULT_DESCRIPTION,
    DEFAULT_DIFFICULTY,
    DEFAULT_PREP_TIME,
    DEFAULT_SERVINGS,
    DEFAULT_TAGS,
    DEFAULT_TITLE,
    GeneratedRecipe,
    InterpretedRecipe,
    ParseMethod,
)

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n?", re.IGNORECASE)
_HEADING_RE = re.compile(r"^#+\s*")
_NUMBERED_RE = re.compile(r"^\d+\.")

INGREDIENT_MARKERS = ("cup", "tbsp", "tsp")
MAX_FALLBACK_INGREDIENTS = 10
MAX_FALLBACK_INSTRUCTIONS = 8


def interpret_recipe_response(raw: str | None) -> InterpretedRecipe:
    """
    Turn a raw model reply into a structured recipe.

    Args:
        raw: The model's reply text, exactly as returned

    Returns:
        InterpretedRecipe tagged JSON when the reply held a parseable object,
        HEURISTIC when the line-based fallback was used
    """
    text = strip_code_fences(raw or "")
    logger.debug("Interpreting recipe reply (%d chars)", len(text))

    data = _extract_json_object(text)
    if data is not None:
        try:
            return InterpretedRecipe(recipe=recipe_from_json(data), method=ParseMethod.JSON)
        except (TypeError, ValueError) as e:
            logger.warning(f"Parsed recipe JSON could not be coerced: {e}")

    logger.info("Using heuristic recipe parsing")
    return InterpretedRecipe(recipe=heuristic_recipe(text), method=ParseMethod.HEURISTIC)


def strip_code_fences(text: str) -> str:
    """Remove ``` / ```json fence markers and surrounding whitespace."""
    return _FENCE_RE.sub("", text).strip()


def recipe_from_json(data: dict[str, Any]) -> GeneratedRecipe:
    """
    Build a recipe from a decoded JSON object, defaulting every bad field.

    Also used to rebuild recipes stored in chat message metadata.
    """
    tags = data.get("tags")
    return GeneratedRecipe(
        title=_text(data.get("title"), DEFAULT_TITLE),
        description=_text(data.get("description"), DEFAULT_DESCRIPTION),
        ingredients=_string_list(data.get("ingredients")),
        instructions=_string_list(data.get("instructions")),
        prep_time=_positive_int(data.get("prepTime"), DEFAULT_PREP_TIME),
        cook_time=_positive_int(data.get("cookTime"), DEFAULT_COOK_TIME),
        servings=_positive_int(data.get("servings"), DEFAULT_SERVINGS),
        difficulty=_text(data.get("difficulty"), DEFAULT_DIFFICULTY),
        cuisine=_text(data.get("cuisine"), DEFAULT_CUISINE),
        tags=_string_list(tags) if isinstance(tags, list) else list(DEFAULT_TAGS),
        tips=_string_list(data.get("tips")),
        story=_text(data.get("story"), ""),
    )


def heuristic_recipe(text: str) -> GeneratedRecipe:
    """
    Best-effort line-based extraction.

    First non-blank line is the title, lines containing "cup", "tbsp" or
    "tsp" (case-sensitive) are ingredients, numbered lines or lines
    mentioning "step" in any case are instructions. Everything else keeps
    its default.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]

    title = _HEADING_RE.sub("", lines[0]).strip() if lines else ""
    ingredients = [
        line for line in lines if any(marker in line for marker in INGREDIENT_MARKERS)
    ]
    instructions = [
        line for line in lines if _NUMBERED_RE.match(line) or "step" in line.lower()
    ]

    return GeneratedRecipe(
        title=title or DEFAULT_TITLE,
        ingredients=ingredients[:MAX_FALLBACK_INGREDIENTS],
        instructions=instructions[:MAX_FALLBACK_INSTRUCTIONS],
    )


def parse_string_list(raw: str | None, limit: int = 5) -> list[str]:
    """
    Read a list of short strings (tips, substitutions) from a reply.

    A JSON array is taken as-is; anything else is split into its first
    `limit` non-blank lines.
    """
    text = strip_code_fences(raw or "")
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        data = None

    if isinstance(data, list):
        return _string_list(data)

    return [line.strip() for line in text.splitlines() if line.strip()][:limit]


# =============================================================================
# Coercion helpers
# =============================================================================


def _extract_json_object(text: str) -> dict[str, Any] | None:
    """Decode the first-brace-to-last-brace span, or None."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        logger.debug("No JSON object found in reply")
        return None

    try:
        data = json.loads(text[start : end + 1])
    except (ValueError, RecursionError) as e:
        logger.warning(f"Failed to parse recipe JSON: {e}")
        return None

    return data if isinstance(data, dict) else None


def _text(value: Any, default: str) -> str:
    if isinstance(value, str):
        return value if value.strip() else default
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value:
        return str(value)
    return default


def _string_list(value: Any) -> list[str]:
    """Keep non-empty entries; dict entries contribute their text/name."""
    if not isinstance(value, list):
        return []

    result = []
    for item in value:
        if isinstance(item, dict):
            item = item.get("text") or item.get("name") or ""
        if item is None or isinstance(item, (list, bool)):
            continue
        text = str(item).strip()
        if text:
            result.append(text)
    return result


def _positive_int(value: Any, default: int) -> int:
    """Numbers and numeric strings above zero; everything else is the default."""
    if isinstance(value, bool) or value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number) or number <= 0:
        return default
    return max(1, round(number))
