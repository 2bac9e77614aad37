"""
Exceptions module exports
"""

from .import_exceptions import (
    RecipeImportError,
    InvalidURLError,
    FetchError,
    DocumentParseError
)

__all__ = [
    'RecipeImportError',
    'InvalidURLError',
    'FetchError',
    'DocumentParseError'
]
