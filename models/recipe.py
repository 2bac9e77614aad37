from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from .base import BaseRecord

# JSON-shaped value produced by the detectors: absent, text, number, list or mapping
RawValue = Union[None, str, int, float, List[Any], Dict[str, Any]]


@dataclass
class RawRecipeData:
    """
    Loosely-shaped recipe fields as found on the page, before normalization.
    
    Every slot is optional and independent; None means the detector found
    nothing for it, which is different from an empty string or list.
    """
    name: RawValue = None
    description: RawValue = None
    image: RawValue = None
    prep_time: RawValue = None
    cook_time: RawValue = None
    total_time: RawValue = None
    recipe_yield: RawValue = None
    ingredients: RawValue = None
    instructions: RawValue = None
    category: RawValue = None
    cuisine: RawValue = None
    keywords: RawValue = None
    nutrition: RawValue = None
    author: RawValue = None
    url: RawValue = None
    date_created: RawValue = None
    date_modified: RawValue = None
    tools: RawValue = None
    
    def is_empty(self) -> bool:
        """True when no slot holds a value"""
        return all(getattr(self, f.name) is None for f in fields(self))


class ImportWarning(str, Enum):
    """Canonical fields that could not be populated, in reporting order"""
    MISSING_INGREDIENTS = "missingIngredients"
    MISSING_INSTRUCTIONS = "missingInstructions"
    MISSING_IMAGE = "missingImage"
    MISSING_DESCRIPTION = "missingDescription"
    MISSING_TIMES = "missingTimes"
    
    @property
    def description(self) -> str:
        return _WARNING_DESCRIPTIONS[self]
    
    @property
    def order(self) -> int:
        return list(ImportWarning).index(self)
    
    def __lt__(self, other):
        if isinstance(other, ImportWarning):
            return self.order < other.order
        return NotImplemented


_WARNING_DESCRIPTIONS = {
    ImportWarning.MISSING_INGREDIENTS: "No ingredients found",
    ImportWarning.MISSING_INSTRUCTIONS: "No instructions found",
    ImportWarning.MISSING_IMAGE: "No image found",
    ImportWarning.MISSING_DESCRIPTION: "No description found",
    ImportWarning.MISSING_TIMES: "No cooking times found",
}


class DetectionMethod(str, Enum):
    """Detection strategy that produced an import result"""
    JSON_LD = "JSON-LD"
    NEXT_JS = "Next.js"
    MICRODATA = "Microdata"


class ImportAlert(str, Enum):
    """Outcome flags reported to the client alongside an import"""
    BAD_URL = "badUrl"
    CHECK_CONNECTION = "checkConnection"
    PARSE_ERROR = "parseError"
    NO_RECIPE_FOUND = "noRecipeFound"
    PARTIAL_IMPORT = "partialImport"


class CanonicalRecipe(BaseRecord):
    """Normalized recipe, shaped like the Nextcloud Cookbook recipe JSON"""
    id: Optional[str] = Field(None, description="Assigned by the server on save")
    name: str = Field(..., description="Recipe name")
    description: str = Field("", description="Free-text description")
    image_url: str = Field("", description="Image URL", alias="imageUrl")
    prep_time: Optional[str] = Field(None, description="ISO 8601 duration", alias="prepTime")
    cook_time: Optional[str] = Field(None, description="ISO 8601 duration", alias="cookTime")
    total_time: Optional[str] = Field(None, description="ISO 8601 duration", alias="totalTime")
    recipe_yield: int = Field(0, description="Numeric servings count", alias="recipeYield")
    recipe_yield_text: Optional[str] = Field(None, description="Original yield text", alias="recipeYieldText")
    category: str = Field("", description="Recipe category", alias="recipeCategory")
    cuisine: str = Field("", description="Recipe cuisine", alias="recipeCuisine")
    keywords: List[str] = Field(default_factory=list, description="Keywords")
    nutrition: Dict[str, str] = Field(default_factory=dict, description="Nutrition facts")
    tools: List[str] = Field(default_factory=list, description="Required tools", alias="tool")
    ingredients: List[str] = Field(default_factory=list, description="Ingredient lines", alias="recipeIngredient")
    instructions: List[str] = Field(default_factory=list, description="Instruction steps", alias="recipeInstructions")
    author: Optional[str] = Field(None, description="Author name")
    url: str = Field("", description="Source URL")
    date_created: datetime = Field(..., description="Import timestamp", alias="dateCreated")
    date_modified: datetime = Field(..., description="Import timestamp", alias="dateModified")
    
    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Chocolate Chip Cookies",
                "description": "Classic cookies",
                "imageUrl": "https://example.com/cookies.jpg",
                "prepTime": "PT15M",
                "cookTime": "PT10M",
                "totalTime": "PT25M",
                "recipeYield": 24,
                "recipeYieldText": "24 cookies",
                "recipeIngredient": ["2 cups flour", "1 cup sugar"],
                "recipeInstructions": ["Mix ingredients", "Bake at 350F"],
                "url": "https://example.com/cookies",
            }
        }
    }


class RecipeImportResult(BaseRecord):
    """Accepted detection: canonical recipe, warnings and provenance"""
    recipe: CanonicalRecipe
    warnings: List[ImportWarning] = Field(default_factory=list)
    detection_method: DetectionMethod = Field(..., alias="detectionMethod")
    
    @property
    def is_partial(self) -> bool:
        return bool(self.warnings)
