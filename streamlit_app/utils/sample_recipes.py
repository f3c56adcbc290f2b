"""
Sample Recipes Module.

A static collection of recipes used to populate the results list and to try
the edit mode of the recipe form. The search/data-fetch layer is out of scope
for this app, so these stand in for search results.

# NOTE: Ingredients are given as (quantity, unit, description) tuples and
    converted to recipebook.models.Ingredient on load. A quantity of None
    means "to taste" / unspecified, exactly as the form produces it.
"""

from typing import Dict, List, Optional, Tuple

from recipebook.models import Ingredient, SourceRecipe

_Row = Tuple[Optional[float], str, str]

_PUBLISHER_URLS = {
    "Home Kitchen": "https://example.com/home-kitchen",
    "Weeknight Table": "https://example.com/weeknight-table",
    "Green Plate": "https://example.com/green-plate",
}

_RECIPES: List[Tuple[str, str, int, int, List[_Row]]] = [
    ("Classic Pancakes", "Home Kitchen", 20, 4, [
        (2, "cups", "flour"), (2, "", "eggs"), (1.5, "cups", "milk"), (None, "", "salt"),
    ]),
    ("Tomato Basil Pasta", "Weeknight Table", 25, 2, [
        (200, "g", "spaghetti"), (4, "", "tomatoes"), (None, "", "fresh basil"), (2, "tbsp", "olive oil"),
    ]),
    ("Lentil Soup", "Green Plate", 45, 6, [
        (1, "cup", "red lentils"), (1, "", "onion"), (2, "", "carrots"), (1, "l", "vegetable stock"),
    ]),
    ("Overnight Oats", "Green Plate", 10, 1, [
        (0.5, "cup", "rolled oats"), (0.5, "cup", "greek yogurt"), (None, "", "berries"),
    ]),
    ("Chicken Stir Fry", "Weeknight Table", 30, 3, [
        (400, "g", "chicken breast"), (1, "", "bell pepper"), (2, "tbsp", "soy sauce"), (1, "tsp", "ginger"),
    ]),
    ("Guacamole", "Home Kitchen", 10, 4, [
        (3, "", "avocados"), (1, "", "lime"), (None, "", "salt"), (0.25, "cup", "red onion"),
    ]),
    ("Banana Bread", "Home Kitchen", 70, 8, [
        (3, "", "ripe bananas"), (2, "cups", "flour"), (0.5, "cup", "sugar"), (1, "tsp", "baking soda"),
    ]),
    ("Greek Salad", "Green Plate", 15, 2, [
        (1, "", "cucumber"), (3, "", "tomatoes"), (100, "g", "feta"), (None, "", "olives"),
    ]),
    ("Shakshuka", "Weeknight Table", 35, 3, [
        (4, "", "eggs"), (400, "g", "canned tomatoes"), (1, "tsp", "cumin"), (1, "", "red pepper"),
    ]),
    ("Mushroom Risotto", "Weeknight Table", 40, 4, [
        (300, "g", "arborio rice"), (250, "g", "mushrooms"), (1, "l", "stock"), (50, "g", "parmesan"),
    ]),
    ("Pumpkin Soup", "Green Plate", 50, 6, [
        (1, "kg", "pumpkin"), (1, "", "onion"), (200, "ml", "coconut milk"),
    ]),
    ("Fish Tacos", "Weeknight Table", 30, 4, [
        (500, "g", "white fish"), (8, "", "tortillas"), (None, "", "cabbage"), (1, "", "lime"),
    ]),
    ("Chocolate Chip Cookies", "Home Kitchen", 25, 24, [
        (2.25, "cups", "flour"), (1, "cup", "butter"), (2, "cups", "chocolate chips"), (2, "", "eggs"),
    ]),
    ("Caprese Sandwich", "Home Kitchen", 10, 1, [
        (1, "", "ciabatta roll"), (1, "", "tomato"), (125, "g", "mozzarella"), (None, "", "basil"),
    ]),
    ("Vegetable Curry", "Green Plate", 40, 4, [
        (400, "ml", "coconut milk"), (2, "tbsp", "curry paste"), (1, "", "sweet potato"), (1, "cup", "chickpeas"),
    ]),
    ("French Omelette", "Home Kitchen", 8, 1, [
        (3, "", "eggs"), (1, "tbsp", "butter"), (None, "", "chives"),
    ]),
    ("Beef Chili", "Weeknight Table", 90, 6, [
        (500, "g", "ground beef"), (2, "cans", "kidney beans"), (1, "tbsp", "chili powder"), (1, "", "onion"),
    ]),
    ("Quinoa Bowl", "Green Plate", 25, 2, [
        (1, "cup", "quinoa"), (1, "", "avocado"), (1, "cup", "black beans"), (None, "", "salsa"),
    ]),
    ("Apple Crumble", "Home Kitchen", 55, 6, [
        (5, "", "apples"), (1, "cup", "oats"), (0.5, "cup", "brown sugar"), (100, "g", "butter"),
    ]),
    ("Pesto Gnocchi", "Weeknight Table", 15, 2, [
        (500, "g", "gnocchi"), (3, "tbsp", "pesto"), (None, "", "pine nuts"),
    ]),
    ("Hummus", "Green Plate", 10, 6, [
        (1, "can", "chickpeas"), (2, "tbsp", "tahini"), (1, "", "lemon"), (1, "", "garlic clove"),
    ]),
    ("Roast Chicken", "Home Kitchen", 95, 4, [
        (1, "", "whole chicken"), (1, "", "lemon"), (None, "", "thyme"), (2, "tbsp", "butter"),
    ]),
    ("Miso Ramen", "Weeknight Table", 35, 2, [
        (2, "", "ramen noodle portions"), (2, "tbsp", "miso paste"), (2, "", "eggs"), (None, "", "spring onions"),
    ]),
]


def _slug(title: str) -> str:
    return title.lower().replace(" ", "-")


def get_all_recipes() -> List[SourceRecipe]:
    """
    Get all sample recipes.

    Returns:
        List of SourceRecipe objects, in a stable order
    """
    return [
        SourceRecipe(
            id=f"recipe_{index:03d}",
            title=title,
            source_url=f"{_PUBLISHER_URLS[publisher]}/{_slug(title)}",
            image=f"{_PUBLISHER_URLS[publisher]}/img/{_slug(title)}.jpg",
            publisher=publisher,
            cooking_time=cooking_time,
            servings=servings,
            ingredients=[
                Ingredient(quantity=quantity, unit=unit, description=description)
                for quantity, unit, description in rows
            ],
        )
        for index, (title, publisher, cooking_time, servings, rows) in enumerate(_RECIPES, start=1)
    ]


def search_recipes(query: str) -> List[SourceRecipe]:
    """
    Filter sample recipes by a case-insensitive substring of title or ingredient.

    An empty query returns every recipe.
    """
    needle = query.strip().lower()
    recipes = get_all_recipes()
    if not needle:
        return recipes
    return [
        r for r in recipes
        if needle in r.title.lower()
        or any(needle in ing.description.lower() for ing in r.ingredients)
    ]


def recipes_by_id(recipes: List[SourceRecipe]) -> Dict[str, SourceRecipe]:
    """
    Map recipe id to recipe, keeping list order.

    Titles are not unique (a recipe uploaded twice shares its title), so the
    edit picker keys on id and only displays the title.
    """
    return {r.id: r for r in recipes if r.id is not None}
