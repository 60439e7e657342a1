import pytest

from recipe_store.errors import InvalidRecipeError
from recipe_store.schemas import RecipeInput, parse_recipe_input, parse_recipe_update


def test_recipe_input_accepts_snake_case_names():
    recipe = parse_recipe_input(
        {
            "title": "Chicken Curry",
            "ingredients": [{"name": "Chicken breast", "amount": "500g"}],
            "preparation_time": 60,
            "portions": 4,
            "is_vegetarian": False,
        }
    )

    assert recipe.preparation_time == 60
    assert recipe.is_vegetarian is False


def test_to_document_uses_attribute_names():
    recipe = parse_recipe_input(
        {
            "title": "Chicken Curry",
            "ingredients": [{"name": "Curry powder", "amount": "2 tablespoons"}],
            "preparationTime": 60,
            "portions": 4,
        }
    )

    assert recipe.to_document() == {
        "title": "Chicken Curry",
        "description": None,
        "ingredients": [{"name": "Curry powder", "amount": "2 tablespoons"}],
        "preparation_time": 60,
        "portions": 4,
        "is_vegetarian": True,
    }


def test_already_parsed_input_is_returned_as_is():
    recipe = RecipeInput(title="Soup", ingredients=[], preparation_time=5, portions=1)

    assert parse_recipe_input(recipe) is recipe


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "   ", "ingredients": [], "preparationTime": 10, "portions": 1},
        {"title": "Soup", "ingredients": [], "preparationTime": 0, "portions": 1},
        {"title": "Soup", "ingredients": [], "preparationTime": 10, "portions": 1.5},
        {"title": "Soup", "ingredients": [{"name": "Water"}], "preparationTime": 10, "portions": 1},
        {"title": "Soup", "preparationTime": 10, "portions": 1},
    ],
)
def test_invalid_creation_payloads(payload):
    with pytest.raises(InvalidRecipeError) as excinfo:
        parse_recipe_input(payload)

    assert excinfo.value.status_code == 400


def test_non_mapping_payload_is_rejected():
    with pytest.raises(InvalidRecipeError, match="must be a mapping"):
        parse_recipe_input(["Spinach Pie"])


def test_update_changes_contain_only_supplied_fields():
    update = parse_recipe_update(
        {"description": " Updated description ", "portions": None, "createdAt": "now"}
    )

    assert update.changes() == {"description": "Updated description"}


def test_empty_update_has_no_changes():
    assert parse_recipe_update({}).changes() == {}


def test_update_rejects_blank_title():
    with pytest.raises(InvalidRecipeError, match="title"):
        parse_recipe_update({"title": "  "})
