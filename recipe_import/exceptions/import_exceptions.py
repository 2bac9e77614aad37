"""
Custom exception classes for recipe import

Raised only at the fetch/parse boundary. Detection and normalization never
raise; the scraper turns these into ImportAlert values.
"""

from typing import Optional


class RecipeImportError(Exception):
    """Base exception for recipe import"""
    pass


class InvalidURLError(RecipeImportError):
    """Raised when the import URL has no scheme or host"""
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid URL: '{url}'")


class FetchError(RecipeImportError):
    """Raised when the page could not be downloaded"""
    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Failed to fetch '{url}': {reason}")


class DocumentParseError(RecipeImportError):
    """Raised when the page markup is rejected by the HTML parser"""
    def __init__(self, original_error: str):
        self.original_error = original_error
        super().__init__(f"HTML parsing failed: {original_error}")
