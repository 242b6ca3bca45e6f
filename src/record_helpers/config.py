"""Configuration loader with environment variable support."""
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from .utils.error_handling import HelperError

# Load environment variables from .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration."""

    # Dates are displayed (and stored on records) in this format; single-letter tokens (Y, m, d ...)
    DISPLAY_DATE_FORMAT: str = os.getenv("DISPLAY_DATE_FORMAT", "m-d-Y")

    # Citation Styles
    STYLE_APA: str = "APA"
    STYLE_CHICAGO: str = "Chicago"
    STYLE_MLA: str = "MLA"
    CITATION_FORMATS: str = os.getenv("CITATION_FORMATS", "APA,Chicago,MLA")

    # Icons
    ICON_CONFIG: str = os.getenv("ICON_CONFIG", "")
    ICON_DEFAULT_SET: str = os.getenv("ICON_DEFAULT_SET", "FontAwesome")
    IMAGE_BASE_URL: str = os.getenv("IMAGE_BASE_URL", "/themes/root/images")
    RTL: bool = _env_flag("RTL")

    # Translations
    LANGUAGE_FILE: str = os.getenv("LANGUAGE_FILE", "")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")

    @classmethod
    def get_citation_formats(cls) -> List[str]:
        """Get the configured citation formats, in display order."""
        return [f.strip() for f in cls.CITATION_FORMATS.split(",") if f.strip()]

    @classmethod
    def load_yaml(cls, path: str) -> Dict[str, Any]:
        """Load a YAML mapping; a missing path yields an empty mapping."""
        if not path:
            return {}
        with open(Path(path), "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise HelperError(f"{path} must contain a YAML mapping, not {type(data).__name__}")
        return data

    @classmethod
    def get_icon_config(cls, path: Optional[str] = None) -> Dict[str, Any]:
        """Get the icon configuration (sets, aliases, defaultSet)."""
        config = cls.load_yaml(path if path is not None else cls.ICON_CONFIG)
        config.setdefault("sets", {})
        config.setdefault("aliases", {})
        config.setdefault("defaultSet", cls.ICON_DEFAULT_SET)
        return config
