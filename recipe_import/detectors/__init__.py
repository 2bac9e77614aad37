"""
Detection strategies, in priority order
"""

from .base_detector import RecipeDetector
from .json_ld_detector import JsonLdDetector
from .next_data_detector import NextJsDetector
from .microdata_detector import MicrodataDetector

__all__ = [
    'RecipeDetector',
    'JsonLdDetector',
    'NextJsDetector',
    'MicrodataDetector'
]
