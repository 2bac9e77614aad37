"""
JSON-LD Detector - primary detection strategy.

Reads <script type="application/ld+json"> blocks, including @graph wrappers
and top-level arrays, and recovers from the malformed JSON some sites emit.
"""

import json
import logging
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup

from models.recipe import DetectionMethod, RawRecipeData, RawValue
from ..utils.html_utilities import sanitize_json_string
from ..utils.raw_values import first_present
from .base_detector import RecipeDetector, script_body

logger = logging.getLogger(__name__)

RECIPE_TYPES = {
    "recipe",
    "https://schema.org/recipe",
    "http://schema.org/recipe",
    "schema.org/recipe",
}


def _is_ld_json_type(value: Optional[str]) -> bool:
    return bool(value) and value.split(";")[0].strip().lower() == "application/ld+json"


def is_recipe_type(node: RawValue) -> bool:
    """True when a JSON-LD node's @type names schema.org Recipe."""
    if not isinstance(node, dict):
        return False
    
    node_type = node.get("@type")
    if isinstance(node_type, str):
        return node_type.strip().lower() in RECIPE_TYPES
    if isinstance(node_type, list):
        return any(isinstance(t, str) and t.strip().lower() in RECIPE_TYPES for t in node_type)
    return False


def find_recipe(data: RawValue) -> Optional[Dict[str, Any]]:
    """Find the Recipe node in a parsed JSON-LD payload."""
    # Direct recipe object
    if is_recipe_type(data):
        return data
    
    # Top-level array of objects
    if isinstance(data, list):
        for item in data:
            if is_recipe_type(item):
                return item
    
    # @graph array
    if isinstance(data, dict) and isinstance(data.get("@graph"), list):
        for item in data["@graph"]:
            if is_recipe_type(item):
                return item
    
    return None


class JsonLdDetector(RecipeDetector):
    """JSON-LD detector - standard structured recipe data"""
    
    name = "JSON-LD"
    detection_method = DetectionMethod.JSON_LD
    
    def detect(self, document: BeautifulSoup) -> Optional[RawRecipeData]:
        scripts = document.find_all("script", attrs={"type": _is_ld_json_type})
        
        for index, script in enumerate(scripts):
            data = self._parse_json(script_body(script))
            if data is None:
                logger.debug(f"Skipping unparseable JSON-LD block #{index}")
                continue
            
            recipe = find_recipe(data)
            if recipe is not None:
                logger.debug(f"Recipe node found in JSON-LD block #{index}")
                return self.extract_raw_data(recipe)
        
        return None
    
    def _parse_json(self, json_string: str) -> RawValue:
        """Parse a JSON-LD body, retrying once after sanitizing."""
        try:
            return json.loads(json_string)
        except (ValueError, RecursionError):
            pass
        
        try:
            return json.loads(sanitize_json_string(json_string))
        except (ValueError, RecursionError):
            return None
    
    @staticmethod
    def extract_raw_data(recipe: Dict[str, Any]) -> RawRecipeData:
        """Map a Recipe node to raw fields, honouring common key aliases."""
        return RawRecipeData(
            name=recipe.get("name"),
            description=recipe.get("description"),
            image=recipe.get("image"),
            prep_time=recipe.get("prepTime"),
            cook_time=recipe.get("cookTime"),
            total_time=recipe.get("totalTime"),
            recipe_yield=first_present(recipe, "recipeYield", "yield", "servings"),
            ingredients=first_present(recipe, "recipeIngredient", "ingredients", "ingredient"),
            instructions=first_present(recipe, "recipeInstructions", "instructions"),
            category=first_present(recipe, "recipeCategory", "category"),
            cuisine=first_present(recipe, "recipeCuisine", "cuisine"),
            keywords=recipe.get("keywords"),
            nutrition=recipe.get("nutrition"),
            author=recipe.get("author"),
            url=recipe.get("url"),
            date_created=first_present(recipe, "dateCreated", "datePublished"),
            date_modified=recipe.get("dateModified"),
            tools=recipe.get("tool"),
        )
