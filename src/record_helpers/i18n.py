"""Translation helper."""
import logging
from typing import Dict, Optional

from .config import Config

logger = logging.getLogger(__name__)


class Translator:
    """Looks up display strings; a missing translation falls back to the source string."""

    def __init__(self, strings: Optional[Dict[str, str]] = None):
        self.strings = dict(strings or {})

    @classmethod
    def from_file(cls, path: Optional[str] = None) -> "Translator":
        """Load a flat YAML mapping of source string -> translation."""
        data = Config.load_yaml(path if path is not None else Config.LANGUAGE_FILE)
        return cls({str(k): str(v) for k, v in data.items()})

    def translate(self, text: str) -> str:
        translated = self.strings.get(text)
        if translated is None:
            logger.debug(f"No translation for '{text}'")
            return text
        return translated

    __call__ = translate
