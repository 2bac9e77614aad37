"""
Tests for the raw value -> canonical field extractors
"""

import pytest

from recipe_import.utils.field_extractor import (
    extract_author,
    extract_image,
    extract_ingredients,
    extract_instructions,
    extract_keywords,
    extract_nutrition,
    extract_string,
    extract_tools,
    extract_yield,
)


class TestExtractString:
    """String extraction from the formats schema.org data shows up in"""
    
    @pytest.mark.parametrize("value, expected", [
        ("Test", "Test"),
        ("  trimmed  ", "trimmed"),
        (["First", "Second"], "First"),
        ({"text": "Text"}, "Text"),
        ({"name": "Named"}, "Named"),
        ({"@value": "Value"}, "Value"),
        ({"@id": "some-id"}, "some-id"),
        ([{"name": " Nested "}], "Nested"),
    ])
    def test_supported_shapes(self, value, expected):
        assert extract_string(value) == expected
    
    def test_key_priority(self):
        assert extract_string({"name": "Named", "text": "Text"}) == "Text"
        assert extract_string({"@id": "id", "@value": "Value"}) == "Value"
    
    @pytest.mark.parametrize("value", [None, [], 42, {"other": "x"}, {"text": 5}])
    def test_unsupported_shapes_are_absent(self, value):
        assert extract_string(value) is None


class TestExtractImage:
    
    def test_plain_url(self):
        assert extract_image(" https://example.com/a.jpg ") == "https://example.com/a.jpg"
    
    def test_list_takes_first(self):
        assert extract_image(["https://example.com/1.jpg", "https://example.com/2.jpg"]) == "https://example.com/1.jpg"
    
    def test_image_object_keys_in_order(self):
        assert extract_image({"@type": "ImageObject", "url": "https://example.com/url.jpg"}) == "https://example.com/url.jpg"
        assert extract_image({"contentUrl": "https://example.com/content.jpg"}) == "https://example.com/content.jpg"
        assert extract_image({"@id": "https://example.com/id.jpg"}) == "https://example.com/id.jpg"
        assert extract_image({"thumbnail": "https://example.com/thumb.jpg"}) == "https://example.com/thumb.jpg"
        assert extract_image({"src": "https://example.com/src.jpg"}) == "https://example.com/src.jpg"
        assert extract_image({"contentUrl": "b", "url": "a"}) == "a"
    
    def test_nested_url_values(self):
        assert extract_image({"url": ["https://example.com/first.jpg"]}) == "https://example.com/first.jpg"
        assert extract_image({"image": {"url": "https://example.com/nested.jpg"}}) == "https://example.com/nested.jpg"
        assert extract_image([{"url": "https://example.com/obj.jpg"}]) == "https://example.com/obj.jpg"
    
    @pytest.mark.parametrize("value", [None, [], 3.5, {"width": 100}])
    def test_missing_image(self, value):
        assert extract_image(value) is None


class TestExtractIngredients:
    
    def test_list_of_strings(self):
        assert extract_ingredients(["a", "b"]) == ["a", "b"]
        assert extract_ingredients([" 2 cups flour ", "1 cup sugar"]) == ["2 cups flour", "1 cup sugar"]
    
    def test_newline_separated_string_drops_blank_lines(self):
        assert extract_ingredients("a\nb\n\nc") == ["a", "b", "c"]
        assert extract_ingredients("2 cups flour\r\n  1 cup sugar  \n") == ["2 cups flour", "1 cup sugar"]
    
    def test_list_of_objects_takes_text(self):
        value = [{"text": "2 eggs"}, {"name": "no text"}, {"text": " milk "}]
        assert extract_ingredients(value) == ["2 eggs", "milk"]
    
    @pytest.mark.parametrize("value", [None, 7, {"text": "x"}, ["a", {"text": "b"}]])
    def test_unsupported_shapes_are_empty(self, value):
        assert extract_ingredients(value) == []


class TestExtractInstructions:
    
    def test_list_of_strings(self):
        assert extract_instructions(["Mix ingredients", "Bake", "Cool"]) == ["Mix ingredients", "Bake", "Cool"]
    
    def test_how_to_steps(self):
        value = [
            {"@type": "HowToStep", "text": "Step one"},
            {"@type": "HowToStep", "name": "Step two"},
            {"@type": "HowToStep", "text": "Step three", "name": "ignored"},
        ]
        assert extract_instructions(value) == ["Step one", "Step two", "Step three"]
    
    def test_how_to_sections_are_flattened(self):
        value = [
            {
                "@type": "HowToSection",
                "name": "Prep",
                "itemListElement": [
                    {"@type": "HowToStep", "text": "Prep step 1"},
                    {"@type": "HowToStep", "text": "Prep step 2"},
                ],
            },
            {
                "@type": "HowToSection",
                "name": "Cook",
                "itemListElement": [{"@type": "HowToStep", "text": "Cook step 1"}],
            },
        ]
        assert extract_instructions(value) == ["Prep step 1", "Prep step 2", "Cook step 1"]
    
    def test_single_section(self):
        value = {"@type": "HowToSection", "itemListElement": [{"text": "Only step"}, {"name": "Named step"}]}
        assert extract_instructions(value) == ["Only step", "Named step"]
    
    def test_newline_separated_string(self):
        assert extract_instructions("Mix ingredients\n\nBake\nCool") == ["Mix ingredients", "Bake", "Cool"]
    
    def test_steps_without_text_yield_nothing(self):
        assert extract_instructions([{"@type": "HowToStep"}]) == []
    
    @pytest.mark.parametrize("value", [None, 1, {"text": "single step object"}])
    def test_unsupported_shapes_are_empty(self, value):
        assert extract_instructions(value) == []


class TestExtractKeywords:
    
    def test_list(self):
        assert extract_keywords(["dessert", " baking", "cookies"]) == ["dessert", "baking", "cookies"]
    
    def test_comma_separated(self):
        assert extract_keywords("dessert, baking,cookies, ") == ["dessert", "baking", "cookies"]
    
    def test_other_shapes(self):
        assert extract_keywords(None) == []
        assert extract_keywords({"name": "x"}) == []


class TestExtractAuthor:
    
    def test_string(self):
        assert extract_author("John Doe") == "John Doe"
    
    def test_object(self):
        assert extract_author({"@type": "Person", "name": "Jane Smith"}) == "Jane Smith"
    
    def test_list(self):
        assert extract_author([{"@type": "Person", "name": "First Author"}, {"name": "Second"}]) == "First Author"
    
    def test_missing(self):
        assert extract_author(None) is None
        assert extract_author({"url": "https://example.com/jane"}) is None


class TestExtractYield:
    
    @pytest.mark.parametrize("value, expected", [
        (4, (4, None)),
        ("4 servings", (4, "4 servings")),
        ("12", (12, "12")),
        ("Makes 24 cookies", (24, "Makes 24 cookies")),
        ("  serves 6 ", (6, "serves 6")),
        ("a few", (0, "a few")),
        (None, (0, None)),
        (6.0, (6, None)),
        (["8", "8 servings"], (8, "8")),
        (True, (0, None)),
        ({"value": 4}, (0, None)),
    ])
    def test_yield_shapes(self, value, expected):
        assert extract_yield(value) == expected
    
    def test_overlong_digit_run_degrades_to_zero(self):
        text = "1" * 5000 + " servings"
        assert extract_yield(text) == (0, text)


class TestExtractNutrition:
    
    def test_keeps_string_entries(self):
        value = {"calories": " 250 calories ", "fatContent": "10g", "proteinContent": "5g", "servings": 2}
        assert extract_nutrition(value) == {
            "calories": "250 calories",
            "fatContent": "10g",
            "proteinContent": "5g",
        }
    
    def test_non_mapping_is_empty(self):
        assert extract_nutrition(None) == {}
        assert extract_nutrition(["250 calories"]) == {}


class TestExtractTools:
    
    def test_list_of_strings(self):
        assert extract_tools([" bowl ", "whisk"]) == ["bowl", "whisk"]
    
    def test_list_of_objects(self):
        value = [{"@type": "HowToTool", "name": "Oven"}, {"text": "Spatula"}, {"url": "x"}]
        assert extract_tools(value) == ["Oven", "Spatula"]
    
    def test_single_string(self):
        assert extract_tools(" Stand mixer ") == ["Stand mixer"]
    
    def test_missing(self):
        assert extract_tools(None) == []
