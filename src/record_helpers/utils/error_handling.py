"""Error types and error handling utilities."""
import logging
from functools import wraps
from typing import Callable, Any


class HelperError(Exception):
    """Base class for errors raised by the view helpers."""


class CircularAliasError(HelperError):
    """An icon alias chain loops back on itself."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Circular icon alias detected: {name}!")


class IconSetError(HelperError):
    """An icon refers to a set that is not configured."""

    def __init__(self, set_name: str, icon: str):
        self.set_name = set_name
        self.icon = icon
        super().__init__(f"Unknown icon set '{set_name}' for icon '{icon}'")


class DateError(HelperError):
    """A date string does not match the expected format."""


class RecordError(HelperError):
    """Record data could not be loaded."""


def ajax_error_handler(func: Callable) -> Callable:
    """Decorator turning helper errors into an ERROR envelope.

    The wrapped view returns ``(payload, status_code)``; on failure the payload
    becomes ``{"status": "ERROR", "data": message}`` with status 500.
    """
    @wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except HelperError as e:
            logging.error(f"Helper error in {func.__name__}: {str(e)}")
            return {"status": "ERROR", "data": str(e)}, 500
    return wrapper


def cli_error_handler(func: Callable) -> Callable:
    """Decorator for CLI commands: log helper errors and return exit status 1."""
    @wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            print("\nOperation cancelled by user.")
            return 1
        except (HelperError, OSError) as e:
            logging.error(f"Error in {func.__name__}: {str(e)}")
            print(f"Error: {e}")
            return 1
    return wrapper
