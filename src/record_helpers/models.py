"""Data models for the view helpers."""
import json
import logging
import re
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Union

from .config import Config
from .utils.error_handling import RecordError

logger = logging.getLogger(__name__)

StrList = Union[List[str], str, None]
Scalar = Union[str, int, None]


def _snake_case(key: str) -> str:
    """'SecondaryAuthors' -> 'secondary_authors'; snake_case keys pass through."""
    key = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", key)
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", key).lower()


@dataclass
class RecordDriver:
    """Read-only bibliographic record fragment, as supplied by a record driver."""
    primary_authors: StrList = None
    secondary_authors: StrList = None
    corporate_authors: StrList = None
    short_title: Optional[str] = None
    subtitle: Optional[str] = None
    title: Optional[str] = None
    breadcrumb: Optional[str] = None
    edition: Optional[str] = None
    publishers: StrList = None
    publication_dates: StrList = None
    places_of_publication: StrList = None
    container_title: Optional[str] = None
    container_volume: Scalar = None
    container_issue: Scalar = None
    container_start_page: Scalar = None
    container_end_page: Scalar = None
    clean_doi: Optional[str] = None
    # MARC records already carry names as "Last, First"
    is_marc: bool = False
    citation_formats: List[str] = field(default_factory=Config.get_citation_formats)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecordDriver":
        """Create a record from a dict with snake_case or CamelCase keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _snake_case(key)
            if name in known:
                kwargs[name] = value
            else:
                logger.debug(f"Ignoring unknown record field: {key}")
        return cls(**kwargs)

    @classmethod
    def from_json_file(cls, path: str) -> "RecordDriver":
        """Load a record from a JSON file holding a single object."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise RecordError(f"Invalid record JSON in {path}: {e}") from e
        if not isinstance(data, dict):
            raise RecordError(f"Record file {path} must contain a JSON object")
        return cls.from_dict(data)

    def try_method(self, name: str, default: Any = None) -> Any:
        """Call ``get_<name>()`` if the record supports it, else return ``default``."""
        method = getattr(self, f"get_{name}", None)
        if not callable(method):
            return default
        return method()

    # --- Getters ---

    def get_primary_authors(self) -> List[str]:
        return _as_list(self.primary_authors)

    def get_secondary_authors(self) -> List[str]:
        return _as_list(self.secondary_authors)

    def get_corporate_authors(self) -> List[str]:
        return _as_list(self.corporate_authors)

    def get_short_title(self) -> Optional[str]:
        return self.short_title

    def get_subtitle(self) -> Optional[str]:
        return self.subtitle

    def get_title(self) -> Optional[str]:
        return self.title

    def get_breadcrumb(self) -> str:
        return self.breadcrumb or self.title or self.short_title or ""

    def get_edition(self) -> Optional[str]:
        return self.edition

    def get_publishers(self) -> List[str]:
        return _as_list(self.publishers)

    def get_publication_dates(self) -> List[str]:
        return _as_list(self.publication_dates)

    def get_places_of_publication(self) -> List[str]:
        return _as_list(self.places_of_publication)

    def get_container_title(self) -> Optional[str]:
        return self.container_title

    def get_container_volume(self) -> Scalar:
        return self.container_volume

    def get_container_issue(self) -> Scalar:
        return self.container_issue

    def get_container_start_page(self) -> Scalar:
        return self.container_start_page

    def get_container_end_page(self) -> Scalar:
        return self.container_end_page

    def get_clean_doi(self) -> Optional[str]:
        return self.clean_doi

    def get_citation_formats(self) -> List[str]:
        return list(self.citation_formats)


def _as_list(value: StrList) -> List[str]:
    """Multi-valued fields may arrive as a list, a bare string, or nothing."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]
