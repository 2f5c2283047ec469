"""Library configuration management.

Loads settings from environment with validation.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings with environment variable support."""
    
    model_config = SettingsConfigDict(
        env_prefix="TEXTLINEAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Lineage defaults
    maintain_material_integrity: bool = True
    reject_provenance_cycles: bool = True
    
    # Development
    debug: bool = False
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
