"""
Tests for Next.js (__NEXT_DATA__) recipe detection
"""

import pytest

from models.recipe import DetectionMethod
from recipe_import.detectors import NextJsDetector
from recipe_import.detectors.next_data_detector import (
    RECIPE_PATHS,
    convert_time_to_iso8601,
    deep_search_for_recipe,
    extract_description,
    extract_image,
    format_ingredient,
)
from tests.html_builders import make_document, next_data_document


@pytest.fixture
def detector():
    return NextJsDetector()


def nest(path, value):
    payload = value
    for key in reversed(path):
        payload = {key: payload}
    return payload


class TestRecipeLocation:
    
    @pytest.mark.parametrize("path", RECIPE_PATHS[:6])
    def test_known_paths(self, detector, path):
        recipe = {"name": "Path Recipe", "recipeIngredient": ["1 egg"]}
        raw = detector.detect(next_data_document(nest(path, recipe)))
        
        assert raw is not None
        assert raw.name == "Path Recipe"
        assert raw.ingredients == ["1 egg"]
    
    def test_page_props_itself(self, detector):
        payload = {"props": {"pageProps": {"title": "Props Recipe", "ingredients": ["salt"]}}}
        assert detector.detect(next_data_document(payload)).name == "Props Recipe"
    
    def test_more_specific_path_wins(self, detector):
        payload = {"props": {"pageProps": {
            "title": "Page title",
            "recipe": {"name": "Specific"},
        }}}
        assert detector.detect(next_data_document(payload)).name == "Specific"
    
    def test_path_candidate_needs_a_name(self, detector):
        payload = {"props": {"pageProps": {
            "recipe": {"id": 7},
            "content": {"sections": [{"title": "Found Deep", "recipeInstructions": ["Stir"]}]},
        }}}
        raw = detector.detect(next_data_document(payload))
        assert raw.name == "Found Deep"
        assert raw.instructions == ["Stir"]
    
    def test_no_script(self, detector):
        assert detector.detect(make_document(body="<div id='__next'></div>")) is None
    
    def test_invalid_json(self, detector):
        assert detector.detect(next_data_document("{broken")) is None
    
    def test_non_object_payload(self, detector):
        assert detector.detect(next_data_document([1, 2, 3])) is None
    
    def test_no_recipe_like_object(self, detector):
        payload = {"props": {"pageProps": {"posts": [{"title": "Blog post", "body": "text"}]}}}
        assert detector.detect(next_data_document(payload)) is None
    
    def test_detection_method(self, detector):
        assert detector.detection_method == DetectionMethod.NEXT_JS


class TestDeepSearch:
    
    def test_pre_order_first_match(self):
        data = {
            "a": {"b": {"name": "First", "cookTime": "PT5M"}},
            "c": {"name": "Second", "prepTime": "PT5M"},
        }
        assert deep_search_for_recipe(data)["name"] == "First"
    
    def test_searches_lists(self):
        data = {"items": [{"x": 1}, [{"title": "Listed", "recipeYield": 2}]]}
        assert deep_search_for_recipe(data)["title"] == "Listed"
    
    def test_name_alone_is_not_enough(self):
        assert deep_search_for_recipe({"a": {"name": "Only a name"}}) is None
    
    def test_deep_nesting_does_not_exhaust_recursion(self):
        data = {"name": "Deep", "recipeIngredient": ["x"]}
        for _ in range(20000):
            data = {"child": data}
        assert deep_search_for_recipe(data)["name"] == "Deep"


class TestTimeConversion:
    
    @pytest.mark.parametrize("value, expected", [
        ("45 Minutes", "PT45M"),
        ("1 hour 30 minutes", "PT1H30M"),
        ("2 hrs", "PT2H"),
        ("10 mins", "PT10M"),
        ("1 Hour", "PT1H"),
        ("15 Minuten", "PT15M"),
        ("10 minutos", "PT10M"),
        ("1hour30minutes", "PT1H30M"),
        ("1hr30min", "PT1H30M"),
        ("PT20M", "PT20M"),
        ("overnight", "overnight"),
        ("0 minutes", "0 minutes"),
        (None, None),
        (30, 30),
    ])
    def test_convert_time(self, value, expected):
        assert convert_time_to_iso8601(value) == expected
    
    def test_overlong_digit_run_is_left_unchanged(self):
        text = "9" * 5000 + " minutes"
        assert convert_time_to_iso8601(text) == text


class TestCmsShapes:
    
    def test_description_blocks(self):
        blocks = [
            {"_type": "block", "children": [{"text": "First paragraph."}]},
            {"_type": "block", "children": [{"text": ""}, {"text": "Second paragraph."}]},
        ]
        assert extract_description(blocks) == "First paragraph.\n\nSecond paragraph."
    
    def test_plain_description(self):
        assert extract_description("Plain") == "Plain"
    
    def test_image_shapes(self):
        assert extract_image("https://cdn.example.com/a.jpg") == "https://cdn.example.com/a.jpg"
        assert extract_image({"asset": {"url": "https://cdn.example.com/b.jpg"}}) == "https://cdn.example.com/b.jpg"
        assert extract_image({"src": "https://cdn.example.com/c.jpg"}) == "https://cdn.example.com/c.jpg"
        assert extract_image([{"url": "https://cdn.example.com/d.jpg"}]) == "https://cdn.example.com/d.jpg"
    
    def test_format_ingredient(self):
        assert format_ingredient({"ingredientAmount": "2", "ingredientUnit": "cups", "ingredientName": "flour"}) == "2 cups flour"
        assert format_ingredient({"amount": "1", "name": "egg"}) == "1 egg"
        assert format_ingredient({"ingredientAmount": "3"}) is None
    
    def test_recipe_details_layout(self, detector):
        recipe = {
            "title": "Layered Cake",
            "description": [{"children": [{"text": "A tall cake."}]}],
            "featuredImage": {"asset": {"url": "https://cdn.example.com/cake.jpg"}},
            "recipeDetails": {
                "prepTime": "45 Minutes",
                "cookTime": "1 hour",
                "servings": "12",
                "recipeParts": [
                    {
                        "recipePartIngredients": {"ingredients": [
                            {"ingredientAmount": "2", "ingredientUnit": "cups", "ingredientName": "flour"},
                            {"ingredientName": "salt"},
                        ]},
                        "recipePartDirections": [
                            {"children": [{"text": "Whisk dry ingredients."}]},
                            {"text": "Bake."},
                        ],
                    },
                ],
            },
        }
        raw = detector.detect(next_data_document({"props": {"pageProps": {"recipe": recipe}}}))
        
        assert raw.name == "Layered Cake"
        assert raw.description == "A tall cake."
        assert raw.image == "https://cdn.example.com/cake.jpg"
        assert raw.prep_time == "PT45M"
        assert raw.cook_time == "PT1H"
        assert raw.total_time is None
        assert raw.recipe_yield == "12"
        assert raw.ingredients == ["2 cups flour", "salt"]
        assert raw.instructions == ["Whisk dry ingredients.", "Bake."]
    
    def test_ingredient_and_step_objects(self, detector):
        recipe = {
            "name": "Objects",
            "ingredients": [{"text": "1 lemon"}, {"ingredient": "2 limes"}],
            "instructions": [{"text": "Squeeze"}, {"name": "Serve"}],
        }
        raw = detector.detect(next_data_document({"props": {"pageProps": {"recipe": recipe}}}))
        
        assert raw.ingredients == ["1 lemon", "2 limes"]
        assert raw.instructions == ["Squeeze", "Serve"]
