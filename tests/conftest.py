"""
Shared fixtures for the recipe import tests
"""

import pytest


@pytest.fixture
def full_json_ld_recipe():
    return {
        "@context": "https://schema.org",
        "@type": "Recipe",
        "name": "Chocolate Chip Cookies",
        "description": "Classic cookies",
        "image": ["https://example.com/cookies.jpg"],
        "prepTime": "PT15M",
        "cookTime": "PT10M",
        "totalTime": "PT25M",
        "recipeYield": "24 cookies",
        "recipeIngredient": ["2 cups flour", "1 cup sugar", "1 cup chocolate chips"],
        "recipeInstructions": [
            {"@type": "HowToStep", "text": "Mix ingredients"},
            {"@type": "HowToStep", "text": "Bake at 350F"},
        ],
        "recipeCategory": "Dessert",
        "recipeCuisine": "American",
        "keywords": "cookies, baking, dessert",
        "author": {"@type": "Person", "name": "Jane Smith"},
        "nutrition": {"@type": "NutritionInformation", "calories": "250 calories"},
        "tool": ["Mixing bowl", "Baking sheet"],
    }
