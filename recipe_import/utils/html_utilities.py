"""
HTML text utilities - polish pass for strings pulled out of recipe markup.

Not applied by the field extractors; the scraper runs it only when text
polishing is enabled.
"""

import re

# Named character references seen on recipe pages
NAMED_ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
    "nbsp": " ",
    "copy": "©",
    "reg": "®",
    "trade": "™",
    "hellip": "…",
    "mdash": "—",
    "ndash": "–",
    "lsquo": "‘",
    "rsquo": "’",
    "ldquo": "“",
    "rdquo": "”",
    "bull": "•",
    "deg": "°",
    "frac12": "½",
    "frac14": "¼",
    "frac34": "¾",
}

_ENTITY_PATTERN = re.compile(r"&(" + "|".join(NAMED_ENTITIES) + r");")
_TAG_PATTERN = re.compile(r"<[^>]+>")
_WHITESPACE_PATTERN = re.compile(r"\s+")

# Leading step markers: "1. ", "Step 1: ", "(1) ", "• "
STEP_PREFIX_PATTERNS = [
    re.compile(r"^\d+\.\s*", re.IGNORECASE),
    re.compile(r"^step\s*\d+:\s*", re.IGNORECASE),
    re.compile(r"^\(\d+\)\s*", re.IGNORECASE),
    re.compile(r"^•\s*", re.IGNORECASE),
]


def decode_html_entities(text: str) -> str:
    """Decode the known named entities in a single pass; others are left as-is."""
    return _ENTITY_PATTERN.sub(lambda match: NAMED_ENTITIES[match.group(1)], text)


def strip_html_tags(text: str) -> str:
    return _TAG_PATTERN.sub("", text)


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def sanitize_json_string(json_string: str) -> str:
    """
    Repair common JSON-LD breakage before a second parse attempt.
    
    Escapes literal newline, carriage return and tab characters, then
    collapses doubled backslashes.
    """
    result = json_string.replace("\n", "\\n")
    result = result.replace("\r", "\\r")
    result = result.replace("\t", "\\t")
    return result.replace("\\\\", "\\")


def clean_text(text: str) -> str:
    """Strip markup, decode entities and collapse whitespace."""
    return normalize_whitespace(decode_html_entities(strip_html_tags(text)))


def clean_ingredient(ingredient: str) -> str:
    return clean_text(ingredient)


def strip_step_prefix(instruction: str) -> str:
    """Remove at most one leading step marker."""
    for pattern in STEP_PREFIX_PATTERNS:
        stripped, count = pattern.subn("", instruction, count=1)
        if count:
            return stripped
    return instruction


def clean_instruction(instruction: str) -> str:
    """
    Clean an instruction step for display.
    
    Examples:
        "1. Mix flour"          -> "Mix flour"
        "<p>Mix flour</p>"      -> "Mix flour"
        "Step 2: Bake &amp; cool" -> "Bake & cool"
    """
    cleaned = decode_html_entities(strip_html_tags(instruction)).strip()
    return normalize_whitespace(strip_step_prefix(cleaned))
