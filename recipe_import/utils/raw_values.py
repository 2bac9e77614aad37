"""
Helpers for walking parsed JSON trees.
"""

from typing import Any, Dict, Optional, Sequence

from models.recipe import RawValue


def first_present(mapping: Optional[Dict[str, Any]], *keys: str) -> RawValue:
    """Return the value of the first key that is present and not null."""
    if not isinstance(mapping, dict):
        return None
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return value
    return None


def value_at_path(data: RawValue, path: Sequence[str]) -> RawValue:
    """Follow a list of object keys; None when any step is missing."""
    current = data
    for key in path:
        if not isinstance(current, dict) or key not in current:
            return None
        current = current[key]
    return current


def text_runs(blocks: RawValue) -> list:
    """
    Collect non-empty text runs from rich-text blocks.
    
    Block format: [{"children": [{"text": "..."}]}]
    """
    if not isinstance(blocks, list):
        return []
    
    texts = []
    for block in blocks:
        if not isinstance(block, dict) or not isinstance(block.get("children"), list):
            continue
        for child in block["children"]:
            if isinstance(child, dict) and isinstance(child.get("text"), str) and child["text"]:
                texts.append(child["text"])
    return texts


def coalesce(*values: RawValue) -> RawValue:
    """First value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None
