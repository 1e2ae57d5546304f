"""
Configuration

Settings are read from environment variables or a .env file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from census_summary.core.errors import PreconditionMissing


class Settings(BaseSettings):
    """
    census-summary settings.

    PATH_TO_CENSUS points at the directory holding acs1year/, acs5year/,
    decennial/ and generated_data/.
    """

    path_to_census: Optional[Path] = None
    show_progress: bool = True
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def require_data_root(self) -> Path:
        """
        Get the data root.

        Raises:
            PreconditionMissing: If PATH_TO_CENSUS is not set
        """
        if self.path_to_census is None or str(self.path_to_census).strip() == "":
            raise PreconditionMissing()
        return Path(self.path_to_census).expanduser()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
