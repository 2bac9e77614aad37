from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support"""
    
    # Page fetching
    user_agent: str = (
        "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15"
    )
    request_timeout: float = 30.0
    
    # Recipe import
    default_recipe_name: str = "New Recipe"
    polish_text: bool = False
    
    # Pending shared URL storage
    data_directory: str = "storage/data"
    
    # Logging
    log_level: str = "INFO"
    logfire_token: Optional[str] = None
    
    # Server Configuration
    port: int = 8000
    debug: bool = False
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False  # Allow LOG_LEVEL or log_level


# Create singleton instance
settings = Settings()
