from functools import lru_cache
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from models.recipe import CanonicalRecipe, DetectionMethod, ImportAlert, ImportWarning
from recipe_import import RecipeScraper
from storage.shared_url_store import SharedURLStore

router = APIRouter()


class URLRequest(BaseModel):
    url: str


class ImportResponse(BaseModel):
    """Import outcome; failures are reported through success/alert, not HTTP errors"""
    success: bool
    recipe: Optional[CanonicalRecipe] = None
    warnings: List[ImportWarning] = Field(default_factory=list)
    detection_method: Optional[DetectionMethod] = Field(None, alias="detectionMethod")
    alert: Optional[ImportAlert] = None
    
    model_config = {"populate_by_name": True}


class PendingURLResponse(BaseModel):
    url: Optional[str] = None
    has_pending_import: bool = Field(False, alias="hasPendingImport")
    
    model_config = {"populate_by_name": True}


@lru_cache
def get_scraper() -> RecipeScraper:
    return RecipeScraper()


@lru_cache
def get_url_store() -> SharedURLStore:
    return SharedURLStore()


@router.post("/import", response_model=ImportResponse, response_model_by_alias=True)
async def import_recipe(request: URLRequest, scraper: RecipeScraper = Depends(get_scraper)):
    """Import a recipe from a web page URL"""
    result, alert = await scraper.scrape(request.url)
    
    if result is None:
        return ImportResponse(success=False, alert=alert)
    
    return ImportResponse(
        success=True,
        recipe=result.recipe,
        warnings=result.warnings,
        detection_method=result.detection_method,
        alert=alert
    )


@router.get("/pending-url", response_model=PendingURLResponse, response_model_by_alias=True)
async def get_pending_url(store: SharedURLStore = Depends(get_url_store)):
    """Get the URL waiting to be imported, if any"""
    url = store.get_pending_import_url()
    return PendingURLResponse(url=url, has_pending_import=bool(url))


@router.put("/pending-url", response_model=PendingURLResponse, response_model_by_alias=True)
async def save_pending_url(request: URLRequest, store: SharedURLStore = Depends(get_url_store)):
    """Save a shared URL for later import"""
    store.save_pending_import_url(request.url)
    return PendingURLResponse(url=request.url, has_pending_import=bool(request.url))


@router.delete("/pending-url", status_code=status.HTTP_204_NO_CONTENT)
async def clear_pending_url(store: SharedURLStore = Depends(get_url_store)):
    """Clear the pending URL once it has been handled"""
    store.clear_pending_import_url()
