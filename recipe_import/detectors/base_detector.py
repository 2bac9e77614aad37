"""
Base Detector Interface

A detector scans a parsed page for one structured-data convention and
returns the loosely-shaped fields it found, or None when the convention is
not present.
"""

from abc import ABC, abstractmethod
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from models.recipe import DetectionMethod, RawRecipeData


class RecipeDetector(ABC):
    """Abstract detection strategy"""
    
    # Human-readable name for logging/debugging
    name: str = ""
    detection_method: DetectionMethod
    
    @abstractmethod
    def detect(self, document: BeautifulSoup) -> Optional[RawRecipeData]:
        """
        Attempt to detect and extract a recipe from the parsed document.
        
        Args:
            document: Parsed HTML page
            
        Returns:
            Raw recipe data or None if detection fails
        """
        pass
    
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


def script_body(script: Tag) -> str:
    """Raw text of a <script> element."""
    if script.string is not None:
        return str(script.string)
    return script.get_text()
