"""Pytest configuration and fixtures."""
import json
import sys
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

# Make the src layout importable without an editable install
PROJECT_ROOT = Path(__file__).parent.parent
SRC_PATH = str(PROJECT_ROOT / "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)


@pytest.fixture
def icon_config() -> Dict[str, Any]:
    """Return an icon configuration covering every template type."""
    return {
        "sets": {
            "FontAwesome": {
                "template": "font",
                "prefix": "fa fa-",
                "src": "vendor/font-awesome.min.css",
            },
            "Fugue": {
                "template": "images",
                "src": "icons",
            },
            "FakeSprite": {
                "template": "svg-sprite",
                "src": "mysprites.svg",
            },
            "Unicode": {
                "template": "unicode",
            },
        },
        "aliases": {
            "bar": "Fugue:baz.png",
            "bar-rtl": "Fugue:zab.png",
            "ltronly": "Fugue:ltronly.png",
            "quoted": 'Fugue:"quoted".png',
            "xyzzy": "FakeSprite:sprite",
            "same": "Alias:foo",
            "illegal": "Alias:criminal",
            "criminal": "Alias:illegal",
            "foolish": "Alias:foolish",
            "classy": "FontAwesome:spinner:extraClass",
            "extraClassy": "Fugue:zzz.png:weird:class foo",
            "smile": "Unicode:1F600",
            "wrySmile": "Unicode:1F600:wry",
            "classyWrySmile": "Unicode:1F600:wry:classy smile",
            "oddGlyph": "Unicode:c<de",
        },
        "defaultSet": "FontAwesome",
    }


@pytest.fixture
def icon_config_file(tmp_path, icon_config) -> str:
    """Write the icon configuration to a YAML file."""
    path = tmp_path / "icons.yaml"
    path.write_text(yaml.safe_dump(icon_config))
    return str(path)


@pytest.fixture
def sample_book() -> Dict[str, Any]:
    """Return a sample book record (CamelCase keys, as record drivers supply them)."""
    return {
        "SecondaryAuthors": ["Shafer, Kathleen Newton"],
        "ShortTitle": "Medical-surgical nursing",
        "Subtitle": "",
        "Edition": "",
        "PlacesOfPublication": ["St. Louis"],
        "Publishers": ["Mosby"],
        "PublicationDates": ["1958"],
    }


@pytest.fixture
def sample_article() -> Dict[str, Any]:
    """Return a sample journal article record."""
    return {
        "secondary_authors": ["One, Person"],
        "short_title": "Test Article",
        "container_title": "Test Journal",
        "container_volume": 1,
        "container_issue": 7,
        "publication_dates": ["1999"],
        "container_start_page": 19,
        "container_end_page": 21,
        "clean_doi": "testDOI",
    }


@pytest.fixture
def record_file(tmp_path, sample_book) -> str:
    """Write the sample book to a JSON file."""
    path = tmp_path / "record.json"
    path.write_text(json.dumps(sample_book))
    return str(path)
