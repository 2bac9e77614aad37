"""
Utilities module exports
"""

from .field_extractor import (
    extract_author,
    extract_image,
    extract_ingredients,
    extract_instructions,
    extract_keywords,
    extract_nutrition,
    extract_string,
    extract_tools,
    extract_yield,
)
from .html_utilities import (
    clean_ingredient,
    clean_instruction,
    clean_text,
    decode_html_entities,
    sanitize_json_string,
    strip_html_tags,
)

__all__ = [
    'extract_author',
    'extract_image',
    'extract_ingredients',
    'extract_instructions',
    'extract_keywords',
    'extract_nutrition',
    'extract_string',
    'extract_tools',
    'extract_yield',
    'clean_ingredient',
    'clean_instruction',
    'clean_text',
    'decode_html_entities',
    'sanitize_json_string',
    'strip_html_tags',
]
