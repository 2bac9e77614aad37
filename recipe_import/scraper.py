"""
Recipe Scraper - orchestrates detection, normalization and warnings.

Detectors are tried in priority order (JSON-LD, Next.js, Microdata). The
first one that yields a recipe with a usable name wins; everything it could
not fill in is reported as a warning instead of an error.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

import httpx
import logfire
from bs4 import BeautifulSoup, ParserRejectedMarkup

from config.settings import settings
from models.recipe import (
    CanonicalRecipe,
    ImportAlert,
    ImportWarning,
    RawRecipeData,
    RecipeImportResult,
)
from .detectors import JsonLdDetector, MicrodataDetector, NextJsDetector, RecipeDetector
from .exceptions import DocumentParseError, FetchError, InvalidURLError
from .fetcher import fetch_html, validate_url
from .utils import field_extractor as fields
from .utils.html_utilities import clean_ingredient, clean_instruction, clean_text

logger = logging.getLogger(__name__)


def parse_document(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        raise DocumentParseError(str(e)) from e


def compute_warnings(recipe: CanonicalRecipe) -> List[ImportWarning]:
    """Warnings for missing important fields, in fixed order."""
    warnings = []
    if not recipe.ingredients:
        warnings.append(ImportWarning.MISSING_INGREDIENTS)
    if not recipe.instructions:
        warnings.append(ImportWarning.MISSING_INSTRUCTIONS)
    if not recipe.image_url:
        warnings.append(ImportWarning.MISSING_IMAGE)
    if not recipe.description:
        warnings.append(ImportWarning.MISSING_DESCRIPTION)
    if recipe.prep_time is None and recipe.cook_time is None and recipe.total_time is None:
        warnings.append(ImportWarning.MISSING_TIMES)
    return warnings


def _polish_lines(lines: List[str], cleaner) -> List[str]:
    cleaned = (cleaner(line) for line in lines)
    return [line for line in cleaned if line]


class RecipeScraper:
    """
    Import a recipe from a web page.
    
    Usage:
        scraper = RecipeScraper()
        result, alert = await scraper.scrape("https://example.com/cookies")
    """
    
    def __init__(
        self,
        detectors: Optional[Iterable[RecipeDetector]] = None,
        polish_text: Optional[bool] = None,
        default_name: Optional[str] = None
    ):
        """
        Args:
            detectors: Detection strategies in priority order (defaults to all three)
            polish_text: Clean markup/entities/step numbers out of extracted text
            default_name: Placeholder used when the page yields no name at all
        """
        if detectors is None:
            detectors = [JsonLdDetector(), NextJsDetector(), MicrodataDetector()]
        self.detectors = list(detectors)
        self.polish_text = settings.polish_text if polish_text is None else polish_text
        self.default_name = default_name or settings.default_recipe_name
    
    async def scrape(
        self,
        url: str,
        client: Optional[httpx.AsyncClient] = None
    ) -> Tuple[Optional[RecipeImportResult], Optional[ImportAlert]]:
        """
        Fetch a page and import the recipe on it.
        
        Returns:
            (result, alert): alert is None for a complete import,
            PARTIAL_IMPORT when warnings were raised, or the failure reason
            when result is None.
        """
        try:
            url = validate_url(url)
        except InvalidURLError as e:
            logger.error(str(e))
            return None, ImportAlert.BAD_URL
        
        try:
            html = await fetch_html(url, client)
        except FetchError as e:
            logger.error(str(e))
            return None, ImportAlert.CHECK_CONNECTION
        
        try:
            document = parse_document(html)
        except DocumentParseError as e:
            logger.error(str(e))
            return None, ImportAlert.PARSE_ERROR
        
        result = self.detect(document, source_url=url)
        if result is None:
            return None, ImportAlert.NO_RECIPE_FOUND
        if result.warnings:
            return result, ImportAlert.PARTIAL_IMPORT
        return result, None
    
    def detect_html(self, html: str, source_url: str = "") -> Optional[RecipeImportResult]:
        """Parse markup and run detection; unparseable markup counts as no recipe."""
        try:
            document = parse_document(html)
        except DocumentParseError as e:
            logger.error(str(e))
            return None
        return self.detect(document, source_url=source_url)
    
    def detect(self, document: BeautifulSoup, source_url: str = "") -> Optional[RecipeImportResult]:
        """Try each detector in order and return the first accepted match."""
        for detector in self.detectors:
            logger.debug(f"Trying detector: {detector.name}")
            
            try:
                raw_data = detector.detect(document)
            except Exception:
                logger.exception(f"Detector {detector.name} failed")
                continue
            
            if raw_data is None:
                continue
            
            logger.info(f"Recipe detected using {detector.name}")
            recipe = self.normalize(raw_data, source_url)
            
            # A recipe without a name is not usable; let the next detector try
            if not recipe.name:
                logger.warning("Detected recipe has no name, trying next detector")
                logfire.warn("recipe_rejected", detector=detector.name, url=source_url)
                continue
            
            warnings = compute_warnings(recipe)
            logfire.info("recipe_detected",
                         detector=detector.name,
                         url=source_url,
                         warnings=[w.value for w in warnings])
            return RecipeImportResult(
                recipe=recipe,
                warnings=warnings,
                detection_method=detector.detection_method
            )
        
        logger.warning(f"No recipe found at URL: {source_url}")
        logfire.info("recipe_not_found", url=source_url)
        return None
    
    def normalize(self, raw_data: RawRecipeData, source_url: str = "") -> CanonicalRecipe:
        """Coerce raw detector output into a CanonicalRecipe."""
        name = fields.extract_string(raw_data.name)
        if name is None:
            name = self.default_name
        description = fields.extract_string(raw_data.description) or ""
        ingredients = fields.extract_ingredients(raw_data.ingredients)
        instructions = fields.extract_instructions(raw_data.instructions)
        recipe_yield, recipe_yield_text = fields.extract_yield(raw_data.recipe_yield)
        
        if self.polish_text:
            name = clean_text(name)
            description = clean_text(description)
            ingredients = _polish_lines(ingredients, clean_ingredient)
            instructions = _polish_lines(instructions, clean_instruction)
        
        # Import time, not the page's publication dates
        now = datetime.now(timezone.utc)
        
        return CanonicalRecipe(
            name=name,
            description=description,
            image_url=fields.extract_image(raw_data.image) or "",
            prep_time=fields.extract_string(raw_data.prep_time),
            cook_time=fields.extract_string(raw_data.cook_time),
            total_time=fields.extract_string(raw_data.total_time),
            recipe_yield=recipe_yield,
            recipe_yield_text=recipe_yield_text,
            category=fields.extract_string(raw_data.category) or "",
            cuisine=fields.extract_string(raw_data.cuisine) or "",
            keywords=fields.extract_keywords(raw_data.keywords),
            nutrition=fields.extract_nutrition(raw_data.nutrition),
            tools=fields.extract_tools(raw_data.tools),
            ingredients=ingredients,
            instructions=instructions,
            author=fields.extract_author(raw_data.author),
            url=source_url or fields.extract_string(raw_data.url) or "",
            date_created=now,
            date_modified=now,
        )
