"""Recipe list filtering."""

from pantry_chef.models import Recipe


def filter_recipes(
    recipes: list[Recipe],
    search: str = "",
    difficulty: str = "All",
    cuisine: str = "All",
) -> list[Recipe]:
    """Search matches title or description; "All" disables a facet."""
    needle = search.lower()
    return [
        recipe
        for recipe in recipes
        if (needle in recipe.title.lower() or needle in recipe.description.lower())
        and (difficulty == "All" or recipe.difficulty == difficulty)
        and (cuisine == "All" or recipe.cuisine == cuisine)
    ]


def cuisine_options(recipes: list[Recipe]) -> list[str]:
    """Return "All" followed by each cuisine in first-seen order."""
    seen: dict[str, None] = {}
    for recipe in recipes:
        seen.setdefault(recipe.cuisine, None)
    return ["All", *seen]
