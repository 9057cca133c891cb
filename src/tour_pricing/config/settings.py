"""
Centralized application settings and path configuration.

Values come from the environment (optionally a .env file at the project
root) with sensible defaults. Catalog state never lives here.
"""
import logging
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    # Walk up from this file to find the project root
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path

    # Catalog record (routes, packages, user settings)
    data_file: Path

    # API server
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    log_level: str = "INFO"

    # Add the example route/package to an empty catalog on startup
    seed_sample_catalog: bool = False

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the environment and project structure."""
        root = project_root or get_project_root()
        load_dotenv(root / '.env')

        data_file = os.getenv('TOUR_PRICING_DATA_FILE')

        return cls(
            project_root=root,
            data_file=Path(data_file) if data_file else root / 'data' / 'tour_planner_data.json',
            api_host=os.getenv('TOUR_PRICING_HOST', '127.0.0.1'),
            api_port=int(os.getenv('TOUR_PRICING_PORT', '8000')),
            log_level=os.getenv('TOUR_PRICING_LOG_LEVEL', 'INFO').upper(),
            seed_sample_catalog=_env_flag('TOUR_PRICING_SEED'),
        )


def configure_logging(level: str = "INFO"):
    """Basic log format for scripts and the API server."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global application settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
