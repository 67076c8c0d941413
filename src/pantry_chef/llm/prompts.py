"""
Pantry Chef - Prompt construction.

All prompt text sent to Gemini is assembled here. Building a prompt never
fails; missing optional constraints are simply left out.
"""

from dataclasses import dataclass, field

RECIPE_JSON_FORMAT = """{
  "title": "Recipe Name",
  "description": "Brief appetizing description",
  "ingredients": ["ingredient 1 with amount", "ingredient 2 with amount"],
  "instructions": ["step 1", "step 2", "step 3"],
  "prepTime": 15,
  "cookTime": 30,
  "servings": 4,
  "difficulty": "easy|medium|hard",
  "cuisine": "cuisine type",
  "tags": ["tag1", "tag2", "tag3"],
  "tips": ["tip 1", "tip 2"],
  "story": "Brief interesting story about the dish"
}"""

# (keyword(s) in the user's message, preference tag)
PREFERENCE_KEYWORDS: list[tuple[tuple[str, ...], str]] = [
    (("vegetarian",), "vegetarian"),
    (("vegan",), "vegan"),
    (("gluten-free",), "gluten-free"),
    (("healthy",), "healthy"),
    (("quick", "fast"), "quick"),
    (("easy",), "easy"),
]

CONNECTION_TEST_PROMPT = "Say hello in one word."


@dataclass
class RecipeRequest:
    """What the user wants cooked."""

    ingredients: list[str]
    preferences: list[str] = field(default_factory=list)
    dietary_restrictions: list[str] = field(default_factory=list)
    cooking_time: int | None = None  # Maximum minutes
    difficulty: str = "medium"
    cuisine: str | None = None
    mood: str | None = None  # Free text, usually the user's own message


def extract_preferences(message: str) -> list[str]:
    """
    Derive preference tags from a free-text request.

    Example:
        extract_preferences("Something quick and vegan")  # ["vegan", "quick"]
    """
    lowered = message.lower()
    return [
        tag for keywords, tag in PREFERENCE_KEYWORDS if any(word in lowered for word in keywords)
    ]


def build_recipe_prompt(request: RecipeRequest) -> str:
    """Prompt asking for one creative recipe in RECIPE_JSON_FORMAT."""
    requirements = [f"- Difficulty: {request.difficulty or 'medium'}"]
    if request.cooking_time:
        requirements.append(f"- Maximum cooking time: {request.cooking_time} minutes")
    if request.cuisine:
        requirements.append(f"- Cuisine style: {request.cuisine}")
    if request.preferences:
        requirements.append(f"- Preferences: {', '.join(request.preferences)}")
    if request.dietary_restrictions:
        requirements.append(f"- Dietary restrictions: {', '.join(request.dietary_restrictions)}")
    if request.mood:
        requirements.append(f"- Mood/Style: {request.mood}")

    return (
        "Create a unique and creative recipe using these ingredients: "
        f"{', '.join(request.ingredients)}.\n\n"
        "Requirements:\n"
        + "\n".join(requirements)
        + "\n\nReturn the recipe in this exact JSON format:\n"
        + RECIPE_JSON_FORMAT
        + "\n\nMake it creative and unique, not just a standard recipe. "
        "Include interesting flavor combinations and techniques."
    )


def build_tips_prompt(recipe: str) -> str:
    return (
        f"Give me 3-5 professional cooking tips for making this recipe better: {recipe}.\n"
        "Return only the tips as a JSON array of strings."
    )


def build_substitutions_prompt(ingredient: str) -> str:
    return (
        f'What are 3-5 good substitutions for "{ingredient}" in cooking?\n'
        "Return only the substitutions as a JSON array of strings."
    )


def build_question_prompt(question: str, context: str | None = None) -> str:
    lines = [f'As a professional chef, answer this cooking question: "{question}"']
    if context:
        lines.append(f"Context: {context}")
    lines.append("")
    lines.append("Provide a helpful, practical answer in 2-3 sentences.")
    return "\n".join(lines)
