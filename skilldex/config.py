# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skilldex Configuration
Reads SKILLDEX_* variables from the environment or a .env file
"""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file from project root
env_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env")
load_dotenv(env_path)

# Catalog shipped with the package
DEFAULT_SKILLS_PATH = Path(__file__).parent / "data" / "skills"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Settings(BaseSettings):
    """Package settings, overridable through SKILLDEX_<FIELD> environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="SKILLDEX_",
        env_file=env_path,
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra fields from .env file
    )

    # Environment configuration
    environment: str = "development"  # development, production, or testing
    debug: bool = False
    log_level: str = "INFO"

    # Catalog source (skill-index.yaml + one YAML document per skill)
    skills_data_path: Path = DEFAULT_SKILLS_PATH

    # Matching
    match_threshold: float = 0.5
    related_skills_limit: int = 5

    # Evolution
    readiness_threshold: float = 0.8
    # When true the progression tracker asks the classifier for new levels
    # instead of applying its implementation-count step rule.
    tracker_uses_classifier: bool = False

    @property
    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment.lower() == "development"


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()


def configure_logging(settings: Settings) -> int:
    """
    Configure root logging for an application embedding Skilldex.

    Debug mode forces DEBUG; otherwise settings.log_level is used.

    Returns:
        The numeric level that was applied
    """
    if settings.debug:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(settings.log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("skilldex").setLevel(level)
    return level
