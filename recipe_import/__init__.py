"""
Recipe Import - structured recipe extraction from web pages

Detects recipe data embedded in a page using, in priority order:
- JSON-LD scripts (schema.org Recipe, @graph wrappers, malformed JSON recovery)
- Next.js __NEXT_DATA__ hydration payloads
- HTML5 microdata (itemtype/itemprop)

and normalizes it into a CanonicalRecipe plus warnings for missing fields.
"""

from .scraper import RecipeScraper, compute_warnings
from .detectors import RecipeDetector, JsonLdDetector, NextJsDetector, MicrodataDetector
from .exceptions import (
    RecipeImportError,
    InvalidURLError,
    FetchError,
    DocumentParseError
)

# Public API - what external code imports
__all__ = [
    'RecipeScraper',
    'compute_warnings',
    'RecipeDetector',
    'JsonLdDetector',
    'NextJsDetector',
    'MicrodataDetector',
    'RecipeImportError',
    'InvalidURLError',
    'FetchError',
    'DocumentParseError'
]

__version__ = "1.0.0"
