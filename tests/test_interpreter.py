"""Tests for model reply interpretation."""

import json

import pytest

from pantry_chef.recipe_gen import ParseMethod, interpret_recipe_response, parse_string_list
from pantry_chef.recipe_gen.interpreter import strip_code_fences

EXACT_REPLY = {
    "title": "Soup",
    "description": "d",
    "ingredients": ["a"],
    "instructions": ["b"],
    "prepTime": 10,
    "cookTime": 20,
    "servings": 2,
    "difficulty": "easy",
    "cuisine": "it",
    "tags": ["x"],
}

DEEP_ARRAY = "[" * 100000 + "]" * 100000


def assert_complete(recipe):
    """Structural guarantees that hold for every reply."""
    assert isinstance(recipe.title, str) and recipe.title
    assert isinstance(recipe.ingredients, list)
    assert isinstance(recipe.instructions, list)
    assert isinstance(recipe.tags, list)
    assert isinstance(recipe.prep_time, int) and recipe.prep_time >= 0
    assert isinstance(recipe.cook_time, int) and recipe.cook_time >= 0
    assert isinstance(recipe.servings, int) and recipe.servings >= 1


class TestJsonReplies:
    """Replies that contain a JSON object."""

    def test_exact_schema_is_taken_verbatim(self):
        result = interpret_recipe_response(json.dumps(EXACT_REPLY))
        recipe = result.recipe

        assert result.method is ParseMethod.JSON
        assert result.is_confident
        assert recipe.title == "Soup"
        assert recipe.description == "d"
        assert recipe.ingredients == ["a"]
        assert recipe.instructions == ["b"]
        assert (recipe.prep_time, recipe.cook_time, recipe.servings) == (10, 20, 2)
        assert recipe.difficulty == "easy"
        assert recipe.cuisine == "it"
        assert recipe.tags == ["x"]
        assert recipe.tips == []
        assert recipe.story == ""

    def test_to_dict_round_trips_wire_names(self):
        recipe = interpret_recipe_response(json.dumps(EXACT_REPLY)).recipe

        assert recipe.to_dict() == {**EXACT_REPLY, "tips": [], "story": ""}

    @pytest.mark.parametrize("fence", ["```json\n", "```\n", "```JSON\n"])
    def test_fenced_json_parses_like_plain(self, fence):
        plain = interpret_recipe_response(json.dumps(EXACT_REPLY))
        fenced = interpret_recipe_response(f"{fence}{json.dumps(EXACT_REPLY, indent=2)}\n```")

        assert fenced.method is ParseMethod.JSON
        assert fenced.recipe == plain.recipe

    def test_prose_around_json_is_ignored(self):
        reply = f"Here is your recipe!\n{json.dumps(EXACT_REPLY)}\nEnjoy your meal."

        result = interpret_recipe_response(reply)

        assert result.method is ParseMethod.JSON
        assert result.recipe.title == "Soup"

    def test_missing_fields_take_defaults(self):
        result = interpret_recipe_response('{"title": "Toast"}')
        recipe = result.recipe

        assert result.method is ParseMethod.JSON
        assert recipe.title == "Toast"
        assert recipe.description == "A delicious recipe created just for you"
        assert recipe.ingredients == []
        assert recipe.instructions == []
        assert (recipe.prep_time, recipe.cook_time, recipe.servings) == (15, 30, 4)
        assert recipe.difficulty == "medium"
        assert recipe.cuisine == "fusion"
        assert recipe.tags == ["ai-generated", "creative"]

    def test_wrong_types_are_coerced_or_defaulted(self):
        reply = json.dumps(
            {
                "title": "",
                "ingredients": "flour, eggs",
                "instructions": ["Mix", "", None, {"text": "Bake"}],
                "prepTime": "12",
                "cookTime": "a while",
                "servings": 0,
                "tags": [],
                "tips": ["Rest the dough"],
                "story": "Grandma's favourite",
            }
        )

        recipe = interpret_recipe_response(reply).recipe

        assert recipe.title == "Generated Recipe"
        assert recipe.ingredients == []
        assert recipe.instructions == ["Mix", "Bake"]
        assert recipe.prep_time == 12
        assert recipe.cook_time == 30
        assert recipe.servings == 4
        assert recipe.tags == []  # An explicit empty list is kept
        assert recipe.tips == ["Rest the dough"]
        assert recipe.story == "Grandma's favourite"

    def test_negative_and_fractional_numbers(self):
        recipe = interpret_recipe_response(
            '{"prepTime": -5, "cookTime": 12.6, "servings": 0.2}'
        ).recipe

        assert recipe.prep_time == 15
        assert recipe.cook_time == 13
        assert recipe.servings == 1


class TestHeuristicFallback:
    """Replies without a usable JSON object."""

    def test_prose_reply_uses_line_heuristics(self):
        reply = "\n".join(
            [
                "## Garlic Butter Pasta",
                "",
                "You will need:",
                "2 cups pasta",
                "1 tbsp butter",
                "1 tsp garlic powder",
                "1. Boil the pasta",
                "2. Melt the butter",
                "Final step: toss together",
            ]
        )

        result = interpret_recipe_response(reply)
        recipe = result.recipe

        assert result.method is ParseMethod.HEURISTIC
        assert not result.is_confident
        assert recipe.title == "Garlic Butter Pasta"
        assert recipe.ingredients == ["2 cups pasta", "1 tbsp butter", "1 tsp garlic powder"]
        assert recipe.instructions == [
            "1. Boil the pasta",
            "2. Melt the butter",
            "Final step: toss together",
        ]
        assert (recipe.prep_time, recipe.cook_time, recipe.servings) == (15, 30, 4)
        assert recipe.tags == ["ai-generated", "creative"]
        assert recipe.tips == []
        assert recipe.story == ""

    def test_unit_markers_are_case_sensitive(self):
        recipe = interpret_recipe_response("Broth\n2 Cups water\n1 TBSP salt\n1 cup stock").recipe

        assert recipe.ingredients == ["1 cup stock"]

    def test_step_marker_ignores_case(self):
        recipe = interpret_recipe_response("Broth\nSTEP ONE: boil").recipe

        assert recipe.instructions == ["STEP ONE: boil"]

    def test_malformed_json_falls_back(self):
        result = interpret_recipe_response('{"title": "Broken", "ingredients": [}')

        assert result.method is ParseMethod.HEURISTIC
        assert_complete(result.recipe)

    def test_fenced_malformed_json_does_not_use_fence_as_title(self):
        result = interpret_recipe_response('```json\n{"title": oops}\n```')

        assert result.recipe.title == '{"title": oops}'

    def test_line_limits(self):
        reply = "Big Batch\n" + "\n".join(f"{i} cup thing {i}" for i in range(15))
        reply += "\n" + "\n".join(f"{i}. do thing {i}" for i in range(1, 12))

        recipe = interpret_recipe_response(reply).recipe

        assert len(recipe.ingredients) == 10
        assert len(recipe.instructions) == 8

    @pytest.mark.parametrize(
        "reply",
        [
            "",
            "   \n\n  ",
            None,
            "{",
            "}{",
            "###",
            "[1, 2, 3]",
            pytest.param('{"title": ' + DEEP_ARRAY + "}", id="deeply-nested"),
        ],
    )
    def test_garbage_never_raises(self, reply):
        result = interpret_recipe_response(reply)

        assert_complete(result.recipe)
        assert result.recipe.prep_time == 15
        assert result.recipe.cook_time == 30
        assert result.recipe.servings == 4

    def test_empty_reply_gets_default_title(self):
        assert interpret_recipe_response("").recipe.title == "Generated Recipe"


class TestParseStringList:
    """Tips and substitutions replies."""

    def test_json_array(self):
        assert parse_string_list('["Salt early", "Rest the meat"]') == ["Salt early", "Rest the meat"]

    def test_fenced_json_array(self):
        assert parse_string_list('```json\n["Use butter"]\n```') == ["Use butter"]

    def test_lines_fallback_is_limited(self):
        reply = "\n".join(f"Tip {i}" for i in range(8))

        assert parse_string_list(reply, limit=5) == [f"Tip {i}" for i in range(5)]

    def test_json_object_uses_lines(self):
        assert parse_string_list('{"tip": "x"}') == ['{"tip": "x"}']

    def test_deeply_nested_array_falls_back_to_lines(self):
        assert parse_string_list(DEEP_ARRAY) == [DEEP_ARRAY]


def test_strip_code_fences():
    assert strip_code_fences("```json\n{}\n```") == "{}"
    assert strip_code_fences("  plain  ") == "plain"
