"""
Next.js Detector - secondary detection strategy.

Handles React-based recipe sites that ship their page data in the
__NEXT_DATA__ hydration script, including CMS-specific shapes such as
rich-text description blocks, CDN image assets and recipeDetails/recipeParts
nesting.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from models.recipe import DetectionMethod, RawRecipeData, RawValue
from ..utils.raw_values import coalesce, first_present, text_runs, value_at_path
from .base_detector import RecipeDetector, script_body

logger = logging.getLogger(__name__)

NEXT_DATA_SCRIPT_ID = "__NEXT_DATA__"

# Common locations of recipe data in Next.js page props, most specific first
RECIPE_PATHS = [
    ["props", "pageProps", "recipe"],
    ["props", "pageProps", "data", "recipe"],
    ["props", "pageProps", "initialData", "recipe"],
    ["props", "pageProps", "post", "recipe"],
    ["props", "pageProps", "recipeData"],
    ["props", "pageProps", "data"],
    ["props", "pageProps"],
]

# An object needs a name/title plus one of these to count as a recipe
RECIPE_INDICATOR_KEYS = [
    "recipeIngredient",
    "ingredients",
    "recipeInstructions",
    "instructions",
    "prepTime",
    "cookTime",
    "recipeYield",
    "recipeDetails",
    "recipeParts",
]

_HOUR_PATTERN = re.compile(r"(\d+)\s*(?:hours?|hrs?)", re.IGNORECASE)
_MINUTE_PATTERN = re.compile(r"(\d+)\s*(?:minutes?|mins?)", re.IGNORECASE)


def has_name(node: Dict[str, Any]) -> bool:
    return "name" in node or "title" in node


def has_recipe_indicators(node: Dict[str, Any]) -> bool:
    return has_name(node) and any(key in node for key in RECIPE_INDICATOR_KEYS)


def deep_search_for_recipe(data: RawValue) -> Optional[Dict[str, Any]]:
    """
    Pre-order search for the first object that looks like a recipe.
    
    Uses an explicit stack so page-controlled nesting depth cannot exhaust
    the interpreter's recursion limit.
    """
    stack: List[RawValue] = [data]
    
    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            if has_recipe_indicators(node):
                return node
            children = list(node.values())
        elif isinstance(node, list):
            children = node
        else:
            continue
        
        # Reversed so the first child is popped next
        stack.extend(child for child in reversed(children) if isinstance(child, (dict, list)))
    
    return None


def convert_time_to_iso8601(value: RawValue) -> RawValue:
    """
    Convert human-readable durations to ISO 8601.
    
    "45 Minutes" -> "PT45M", "1 hour 30 minutes" -> "PT1H30M". Values already
    in ISO form, non-strings, and text without any hour or minute count are
    returned unchanged.
    """
    if not isinstance(value, str) or value.startswith("P"):
        return value
    
    hour_match = _HOUR_PATTERN.search(value)
    minute_match = _MINUTE_PATTERN.search(value)
    try:
        hours = int(hour_match.group(1)) if hour_match else 0
        minutes = int(minute_match.group(1)) if minute_match else 0
    except ValueError:
        # Digit run too long to convert
        return value
    
    if hours == 0 and minutes == 0:
        return value
    
    iso = "PT"
    if hours > 0:
        iso += f"{hours}H"
    if minutes > 0:
        iso += f"{minutes}M"
    return iso


def extract_description(value: RawValue) -> RawValue:
    """Plain string, or rich-text blocks joined into paragraphs."""
    if value is None or isinstance(value, str):
        return value
    
    texts = text_runs(value)
    if texts:
        return "\n\n".join(texts)
    return value


def extract_image(value: RawValue) -> RawValue:
    """Resolve an image URL from a string, list, or CDN image object."""
    if value is None or isinstance(value, str):
        return value
    
    if isinstance(value, list):
        return extract_image(value[0]) if value else value
    
    if isinstance(value, dict):
        for path in (["url"], ["asset", "url"], ["src"]):
            url = value_at_path(value, path)
            if isinstance(url, str):
                return url
    
    return value


def _string_field(entry: Dict[str, Any], *keys: str) -> str:
    for key in keys:
        if isinstance(entry.get(key), str):
            return entry[key]
    return ""


def format_ingredient(ingredient: Dict[str, Any]) -> Optional[str]:
    """{"ingredientAmount": "2", "ingredientUnit": "cups", "ingredientName": "flour"} -> "2 cups flour" """
    amount = _string_field(ingredient, "ingredientAmount", "amount")
    unit = _string_field(ingredient, "ingredientUnit", "unit")
    name = _string_field(ingredient, "ingredientName", "name")
    
    if not name:
        return None
    
    parts = [part for part in (amount, unit) if part]
    parts.append(name)
    return " ".join(parts).strip()


def _recipe_parts(recipe: Dict[str, Any]) -> List[Dict[str, Any]]:
    parts = value_at_path(recipe, ["recipeDetails", "recipeParts"])
    if not isinstance(parts, list):
        parts = recipe.get("recipeParts")
    if not isinstance(parts, list):
        return []
    return [part for part in parts if isinstance(part, dict)]


def extract_ingredients(recipe: Dict[str, Any]) -> RawValue:
    """Standard ingredient keys first, then the recipeParts layout."""
    ingredients = first_present(recipe, "recipeIngredient", "ingredients")
    if ingredients is not None:
        if isinstance(ingredients, list) and ingredients and all(isinstance(i, dict) for i in ingredients):
            return [
                text for text in (_string_field(i, "text", "ingredient") for i in ingredients) if text
            ]
        return ingredients
    
    all_ingredients = []
    for part in _recipe_parts(recipe):
        entries = value_at_path(part, ["recipePartIngredients", "ingredients"])
        if not isinstance(entries, list):
            continue
        for entry in entries:
            if isinstance(entry, dict):
                formatted = format_ingredient(entry)
                if formatted:
                    all_ingredients.append(formatted)
    
    return all_ingredients or None


def extract_instructions(recipe: Dict[str, Any]) -> RawValue:
    """Standard instruction keys first, then recipeParts direction blocks."""
    instructions = first_present(recipe, "recipeInstructions", "instructions")
    if instructions is not None:
        if isinstance(instructions, list) and instructions and all(isinstance(i, dict) for i in instructions):
            return [
                text for text in (_string_field(i, "text", "name") for i in instructions) if text
            ]
        return instructions
    
    all_instructions = []
    for part in _recipe_parts(recipe):
        directions = part.get("recipePartDirections")
        if not isinstance(directions, list):
            continue
        for direction in directions:
            if not isinstance(direction, dict):
                continue
            if isinstance(direction.get("children"), list):
                all_instructions.extend(text_runs([direction]))
            elif isinstance(direction.get("text"), str) and direction["text"]:
                all_instructions.append(direction["text"])
    
    return all_instructions or None


class NextJsDetector(RecipeDetector):
    """Next.js detector - hydration data of React-based recipe sites"""
    
    name = "Next.js"
    detection_method = DetectionMethod.NEXT_JS
    
    def detect(self, document: BeautifulSoup) -> Optional[RawRecipeData]:
        script = document.find("script", id=NEXT_DATA_SCRIPT_ID)
        if script is None:
            return None
        
        try:
            payload = json.loads(script_body(script))
        except (ValueError, RecursionError) as e:
            logger.debug(f"Invalid {NEXT_DATA_SCRIPT_ID} payload: {e}")
            return None
        
        if not isinstance(payload, dict):
            return None
        
        recipe = self.find_recipe(payload)
        if recipe is None:
            return None
        return self.convert_to_raw_data(recipe)
    
    def find_recipe(self, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Check the known paths, then fall back to a full-tree search."""
        for path in RECIPE_PATHS:
            candidate = value_at_path(payload, path)
            if isinstance(candidate, dict) and has_name(candidate):
                logger.debug(f"Recipe found at {'.'.join(path)}")
                return candidate
        
        return deep_search_for_recipe(payload)
    
    @staticmethod
    def convert_to_raw_data(recipe: Dict[str, Any]) -> RawRecipeData:
        details = recipe.get("recipeDetails")
        if not isinstance(details, dict):
            details = {}
        
        def detail(key: str) -> RawValue:
            return coalesce(recipe.get(key), details.get(key))
        
        return RawRecipeData(
            name=first_present(recipe, "name", "title"),
            description=extract_description(recipe.get("description")),
            image=extract_image(first_present(recipe, "image", "featuredImage")),
            prep_time=convert_time_to_iso8601(detail("prepTime")),
            cook_time=convert_time_to_iso8601(detail("cookTime")),
            total_time=convert_time_to_iso8601(detail("totalTime")),
            recipe_yield=coalesce(detail("recipeYield"), detail("servings")),
            ingredients=extract_ingredients(recipe),
            instructions=extract_instructions(recipe),
            category=first_present(recipe, "recipeCategory", "category"),
            cuisine=first_present(recipe, "recipeCuisine", "cuisine"),
            keywords=first_present(recipe, "keywords", "tags"),
            nutrition=recipe.get("nutrition"),
            author=first_present(recipe, "author", "authorName"),
            url=first_present(recipe, "url", "canonicalUrl"),
            date_created=first_present(recipe, "dateCreated", "datePublished", "publishedAt"),
            date_modified=first_present(recipe, "dateModified", "updatedAt"),
        )
