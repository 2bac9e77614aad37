"""
Microdata Detector - tertiary detection strategy.

Handles older sites that annotate recipe markup with HTML5 microdata
(itemscope/itemtype/itemprop) using the schema.org vocabulary.
"""

import logging
from typing import Dict, List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from models.recipe import DetectionMethod, RawRecipeData
from .base_detector import RecipeDetector

logger = logging.getLogger(__name__)

RECIPE_ITEMTYPE = "schema.org/Recipe"

# Standard nutrition property names from schema.org NutritionInformation
NUTRITION_PROPERTIES = [
    "calories",
    "fatContent",
    "saturatedFatContent",
    "unsaturatedFatContent",
    "transFatContent",
    "carbohydrateContent",
    "sugarContent",
    "fiberContent",
    "proteinContent",
    "sodiumContent",
    "cholesterolContent",
    "servingSize",
]

MEDIA_TAGS = {"img", "audio", "video", "source", "track", "embed", "iframe"}
LINK_TAGS = {"a", "link", "area"}
VALUE_TAGS = {"data", "meter"}


def _attr(element: Tag, name: str) -> str:
    value = element.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return (value or "").strip()


def _text(element: Tag) -> str:
    return " ".join(element.get_text(" ").split())


def _prop_selector(prop: str) -> str:
    return f'[itemprop~="{prop}"]'


def _type_selector(item_type: str) -> str:
    return f'[itemtype*="{item_type}"]'


def extract_value(element: Tag) -> Optional[str]:
    """Read a microdata property value according to the element kind."""
    tag_name = element.name.lower()
    
    if tag_name == "meta":
        return _attr(element, "content") or None
    if tag_name in MEDIA_TAGS:
        return _attr(element, "src") or None
    if tag_name in LINK_TAGS:
        return _attr(element, "href") or None
    if tag_name == "time":
        # datetime holds the machine-readable ISO 8601 value
        return _attr(element, "datetime") or _text(element) or None
    if tag_name in VALUE_TAGS:
        return _attr(element, "value") or None
    
    return _attr(element, "content") or _text(element) or None


def extract_property(element: Tag, prop: str) -> Optional[str]:
    prop_element = element.select_one(_prop_selector(prop))
    if prop_element is None:
        return None
    return extract_value(prop_element)


def extract_multiple_properties(element: Tag, prop: str) -> List[str]:
    values = (extract_value(e) for e in element.select(_prop_selector(prop)))
    return [value for value in values if value]


class MicrodataDetector(RecipeDetector):
    """Microdata detector - itemtype/itemprop annotated recipes"""
    
    name = "Microdata"
    detection_method = DetectionMethod.MICRODATA
    
    def detect(self, document: BeautifulSoup) -> Optional[RawRecipeData]:
        recipe = document.select_one(_type_selector(RECIPE_ITEMTYPE))
        if recipe is None:
            return None
        
        name = extract_property(recipe, "name")
        if name is None:
            logger.debug("Microdata recipe element has no name property")
            return None
        
        return RawRecipeData(
            name=name,
            description=extract_property(recipe, "description"),
            image=self._extract_image(recipe),
            prep_time=extract_property(recipe, "prepTime"),
            cook_time=extract_property(recipe, "cookTime"),
            total_time=extract_property(recipe, "totalTime"),
            recipe_yield=extract_property(recipe, "recipeYield"),
            ingredients=extract_multiple_properties(recipe, "recipeIngredient") or None,
            instructions=self._extract_instructions(recipe) or None,
            category=extract_property(recipe, "recipeCategory"),
            cuisine=extract_property(recipe, "recipeCuisine"),
            keywords=extract_property(recipe, "keywords"),
            nutrition=self._extract_nutrition(recipe),
            author=self._extract_author(recipe),
            url=extract_property(recipe, "url"),
            date_created=extract_property(recipe, "datePublished") or extract_property(recipe, "dateCreated"),
            date_modified=extract_property(recipe, "dateModified"),
        )
    
    def _extract_image(self, recipe: Tag) -> Optional[str]:
        for prop in ("image", "thumbnailUrl"):
            image_element = recipe.select_one(_prop_selector(prop))
            if image_element is None:
                continue
            
            tag_name = image_element.name.lower()
            if tag_name == "img":
                url = _attr(image_element, "src")
            elif tag_name in ("meta", "link"):
                url = _attr(image_element, "content") or _attr(image_element, "href")
            else:
                nested = image_element.select_one("img")
                url = (_attr(nested, "src") if nested else "") or _attr(image_element, "content")
            
            if url:
                return url
        
        return None
    
    def _extract_step(self, step: Tag) -> Optional[str]:
        for prop in ("text", "name", "description"):
            value = extract_property(step, prop)
            if value:
                return value
        return _text(step) or None
    
    def _extract_steps(self, steps: List[Tag]) -> List[str]:
        texts = (self._extract_step(step) for step in steps)
        return [text for text in texts if text]
    
    def _extract_instructions(self, recipe: Tag) -> List[str]:
        # HowToStep elements (structured instructions)
        steps = self._extract_steps(recipe.select(_type_selector("HowToStep")))
        if steps:
            return steps
        
        # HowToSection elements without step items: their itemListElement values
        section_steps = []
        for section in recipe.select(_type_selector("HowToSection")):
            section_steps.extend(extract_multiple_properties(section, "itemListElement"))
        if section_steps:
            return section_steps
        
        return (
            extract_multiple_properties(recipe, "recipeInstructions")
            or extract_multiple_properties(recipe, "instructions")
        )
    
    def _extract_author(self, recipe: Tag) -> Optional[str]:
        author = recipe.select_one(_prop_selector("author"))
        if author is None:
            return None
        
        # Person or Organization with a nested name
        name = author.select_one(_prop_selector("name"))
        if name is not None:
            return extract_value(name)
        return extract_value(author)
    
    def _extract_nutrition(self, recipe: Tag) -> Optional[Dict[str, str]]:
        nutrition_element = recipe.select_one(_type_selector("NutritionInformation"))
        if nutrition_element is None:
            nutrition_element = recipe.select_one(_prop_selector("nutrition"))
        if nutrition_element is None:
            return None
        
        nutrition = {}
        for prop in NUTRITION_PROPERTIES:
            value = extract_property(nutrition_element, prop)
            if value:
                nutrition[prop] = value
        
        return nutrition or None
