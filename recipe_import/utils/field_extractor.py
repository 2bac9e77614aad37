"""
Field Extractor - coerce raw schema.org-ish values into canonical fields.

Every function here is total: an unexpected shape degrades to the field's
safe default (None, "", [], {} or (0, None)) instead of raising.
"""

import re
from typing import Dict, List, Optional, Tuple

from models.recipe import RawValue

_NUMBER_PATTERN = re.compile(r"\d+")

# Mapping keys probed, in order, when a text value is wrapped in an object
STRING_KEYS = ("text", "name", "@value", "@id")
IMAGE_KEYS = ("url", "contentUrl", "@id", "thumbnail", "src")


def _all_strings(values: list) -> bool:
    return all(isinstance(v, str) for v in values)


def _all_mappings(values: list) -> bool:
    return all(isinstance(v, dict) for v in values)


def _split_lines(text: str, separator: Optional[str] = None) -> List[str]:
    parts = text.split(separator) if separator else text.splitlines()
    return [part.strip() for part in parts if part.strip()]


def _text_or_name(entry: dict) -> Optional[str]:
    for key in ("text", "name"):
        if isinstance(entry.get(key), str):
            return entry[key].strip()
    return None


def extract_string(value: RawValue) -> Optional[str]:
    """
    Extract a string from the formats schema.org data shows up in.
    
    Handles plain strings, lists (first element wins) and objects carrying
    text, name, @value or @id.
    """
    if isinstance(value, str):
        return value.strip()
    
    if isinstance(value, list):
        return extract_string(value[0]) if value else None
    
    if isinstance(value, dict):
        for key in STRING_KEYS:
            if isinstance(value.get(key), str):
                return value[key].strip()
    
    return None


def extract_image(value: RawValue) -> Optional[str]:
    """Extract an image URL from a string, list or ImageObject."""
    if isinstance(value, str):
        return value.strip()
    
    if isinstance(value, list):
        return extract_image(value[0]) if value else None
    
    if isinstance(value, dict):
        for key in IMAGE_KEYS:
            url = extract_string(value.get(key))
            if url is not None:
                return url
        
        # ImageObject nested under an "image" key
        nested = value.get("image")
        if isinstance(nested, dict):
            return extract_string(nested.get("url"))
    
    return None


def extract_ingredients(value: RawValue) -> List[str]:
    """Extract ingredient lines from a list, a list of objects, or a multi-line string."""
    if isinstance(value, list):
        if _all_strings(value):
            return [item.strip() for item in value]
        if _all_mappings(value):
            return [item["text"].strip() for item in value if isinstance(item.get("text"), str)]
        return []
    
    if isinstance(value, str):
        return _split_lines(value)
    
    return []


def _flatten_steps(steps: list) -> List[str]:
    flattened = []
    for step in steps:
        if isinstance(step, str):
            flattened.append(step.strip())
        elif isinstance(step, dict):
            text = _text_or_name(step)
            if text is not None:
                flattened.append(text)
    return flattened


def extract_instructions(value: RawValue) -> List[str]:
    """
    Extract instruction steps.
    
    Precedence: list of strings, list of HowToStep/HowToSection objects,
    a single HowToSection, then a multi-line string. Section boundaries are
    flattened away.
    """
    if isinstance(value, list):
        if _all_strings(value):
            return [item.strip() for item in value]
        
        if _all_mappings(value):
            all_instructions = []
            for section in value:
                steps = section.get("itemListElement")
                if isinstance(steps, list):
                    all_instructions.extend(_flatten_steps(steps))
                else:
                    text = _text_or_name(section)
                    if text is not None:
                        all_instructions.append(text)
            if all_instructions:
                return all_instructions
    
    if isinstance(value, dict) and isinstance(value.get("itemListElement"), list):
        return _flatten_steps(value["itemListElement"])
    
    if isinstance(value, str):
        return _split_lines(value)
    
    return []


def extract_keywords(value: RawValue) -> List[str]:
    """Extract keywords from a list or a comma-separated string."""
    if isinstance(value, list):
        return [item.strip() for item in value] if _all_strings(value) else []
    
    if isinstance(value, str):
        return _split_lines(value, separator=",")
    
    return []


def extract_author(value: RawValue) -> Optional[str]:
    """Extract an author name from a string, list or Person/Organization object."""
    if isinstance(value, str):
        return value.strip()
    
    if isinstance(value, list):
        return extract_author(value[0]) if value else None
    
    if isinstance(value, dict) and isinstance(value.get("name"), str):
        return value["name"].strip()
    
    return None


def extract_yield(value: RawValue) -> Tuple[int, Optional[str]]:
    """
    Extract (numeric servings, original text).
    
    4 -> (4, None); "4 servings" -> (4, "4 servings");
    "Makes 24 cookies" -> (24, "Makes 24 cookies"); None -> (0, None)
    """
    if isinstance(value, bool):
        return 0, None
    
    if isinstance(value, int):
        return value, None
    
    if isinstance(value, float):
        return (int(value), None) if value.is_integer() else (0, None)
    
    if isinstance(value, str):
        trimmed = value.strip()
        match = _NUMBER_PATTERN.search(trimmed)
        if match:
            try:
                return int(match.group()), trimmed
            except ValueError:
                # Digit run too long to convert
                return 0, trimmed
        return 0, trimmed
    
    # recipeYield is often ["4", "4 servings"]
    if isinstance(value, list) and value:
        return extract_yield(value[0])
    
    return 0, None


def extract_nutrition(value: RawValue) -> Dict[str, str]:
    """Keep the string-valued entries of a nutrition object."""
    if not isinstance(value, dict):
        return {}
    
    return {
        key: item.strip()
        for key, item in value.items()
        if isinstance(item, str)
    }


def extract_tools(value: RawValue) -> List[str]:
    """Extract tools from a list of strings, a list of HowToTool objects, or a single string."""
    if isinstance(value, list):
        if _all_strings(value):
            return [item.strip() for item in value]
        if _all_mappings(value):
            tools = []
            for item in value:
                for key in ("name", "text"):
                    if isinstance(item.get(key), str):
                        tools.append(item[key].strip())
                        break
            return tools
        return []
    
    if isinstance(value, str):
        return [value.strip()]
    
    return []
