import json
import logging
from pathlib import Path
from typing import Optional

from config.settings import settings

logger = logging.getLogger(__name__)

SHARED_URL_KEY = "SharedImportURL"


class SharedURLStore:
    """Local JSON file store for a URL shared into the app, awaiting import"""
    
    def __init__(self, data_directory: Optional[str] = None):
        self.data_directory = Path(data_directory or settings.data_directory)
        self.data_directory.mkdir(parents=True, exist_ok=True)
        
        self.shared_url_file = self.data_directory / "shared_url.json"
    
    def _load_json_file(self, file_path: Path) -> dict:
        """Load JSON data from file; missing or corrupt files read as empty"""
        if not file_path.exists():
            return {}
        
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Ignoring unreadable {file_path}: {e}")
            return {}
        
        return data if isinstance(data, dict) else {}
    
    def _save_json_file(self, file_path: Path, data: dict):
        """Save data to JSON file with proper formatting"""
        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    
    def get_pending_import_url(self) -> Optional[str]:
        """Retrieve the pending import URL, if any"""
        url = self._load_json_file(self.shared_url_file).get(SHARED_URL_KEY)
        return url if isinstance(url, str) else None
    
    def has_pending_import(self) -> bool:
        """Check if there's a non-empty pending import URL"""
        return bool(self.get_pending_import_url())
    
    def save_pending_import_url(self, url: str) -> None:
        """Save a URL for later import"""
        data = self._load_json_file(self.shared_url_file)
        data[SHARED_URL_KEY] = url
        self._save_json_file(self.shared_url_file, data)
    
    def clear_pending_import_url(self) -> None:
        """Clear the pending import URL after it has been handled"""
        data = self._load_json_file(self.shared_url_file)
        if data.pop(SHARED_URL_KEY, None) is not None:
            self._save_json_file(self.shared_url_file, data)
