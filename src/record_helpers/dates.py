"""Date conversion between display and output formats.

Formats use single-letter date tokens (``Y``, ``m``, ``d``, ``j``, ``M``, ``F`` ...)
as catalogue configuration expresses them.
"""
import logging
from datetime import datetime
from typing import Callable, Dict

from .config import Config
from .utils.error_handling import DateError

logger = logging.getLogger(__name__)

# Format token -> strptime directive
_PARSE_TOKENS: Dict[str, str] = {
    "d": "%d", "j": "%d",
    "m": "%m", "n": "%m",
    "M": "%b", "F": "%B",
    "Y": "%Y", "y": "%y",
    "D": "%a", "l": "%A",
    "H": "%H", "G": "%H",
    "i": "%M", "s": "%S",
    "A": "%p", "a": "%p",
}

# Format token -> renderer
_FORMAT_TOKENS: Dict[str, Callable[[datetime], str]] = {
    "d": lambda dt: f"{dt.day:02d}",
    "j": lambda dt: str(dt.day),
    "m": lambda dt: f"{dt.month:02d}",
    "n": lambda dt: str(dt.month),
    "M": lambda dt: dt.strftime("%b"),
    "F": lambda dt: dt.strftime("%B"),
    "Y": lambda dt: f"{dt.year:04d}",
    "y": lambda dt: f"{dt.year % 100:02d}",
    "D": lambda dt: dt.strftime("%a"),
    "l": lambda dt: dt.strftime("%A"),
    "H": lambda dt: f"{dt.hour:02d}",
    "G": lambda dt: str(dt.hour),
    "i": lambda dt: f"{dt.minute:02d}",
    "s": lambda dt: f"{dt.second:02d}",
    "A": lambda dt: dt.strftime("%p").upper(),
    "a": lambda dt: dt.strftime("%p").lower(),
}


def _tokenize(fmt: str):
    """Yield (is_token, char) pairs; a backslash escapes the next character."""
    escaped = False
    for char in fmt:
        if escaped:
            yield False, char
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            yield True, char


def to_strptime(fmt: str) -> str:
    """Translate a token date format into a strptime pattern."""
    out = []
    for is_token, char in _tokenize(fmt):
        if is_token and char in _PARSE_TOKENS:
            out.append(_PARSE_TOKENS[char])
        elif char == "%":
            out.append("%%")
        else:
            out.append(char)
    return "".join(out)


def format_date(dt: datetime, fmt: str) -> str:
    """Render a datetime with a token date format."""
    out = []
    for is_token, char in _tokenize(fmt):
        render = _FORMAT_TOKENS.get(char) if is_token else None
        out.append(render(dt) if render else char)
    return "".join(out)


class DateConverter:
    """Converts dates between the configured display format and other formats."""

    def __init__(self, display_format: str = None):
        self.display_format = display_format or Config.DISPLAY_DATE_FORMAT

    def convert(self, input_format: str, output_format: str, date_string: str) -> str:
        """
        Convert a date from one format to another.

        Raises:
            DateError: if ``date_string`` does not match ``input_format``
        """
        date_string = (date_string or "").strip()
        try:
            parsed = datetime.strptime(date_string, to_strptime(input_format))
        except ValueError as e:
            logger.debug(f"Date '{date_string}' does not match '{input_format}': {e}")
            raise DateError(
                f"Date/time problem: '{date_string}' does not match format '{input_format}'"
            ) from e
        return format_date(parsed, output_format)

    def convert_from_display_date(self, output_format: str, display_date: str) -> str:
        """Convert a display-format date into ``output_format``."""
        return self.convert(self.display_format, output_format, display_date)

    def convert_to_display_date(self, input_format: str, date_string: str) -> str:
        """Convert a date in ``input_format`` into the display format."""
        return self.convert(input_format, self.display_format, date_string)
