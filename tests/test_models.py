"""Tests for the record model."""
import json

import pytest

from record_helpers.models import RecordDriver
from record_helpers.utils.error_handling import RecordError


class TestRecordDriver:
    """Record construction and getters."""

    def test_from_dict_camel_case(self, sample_book):
        driver = RecordDriver.from_dict(sample_book)
        assert driver.get_secondary_authors() == ['Shafer, Kathleen Newton']
        assert driver.get_short_title() == 'Medical-surgical nursing'
        assert driver.get_places_of_publication() == ['St. Louis']

    def test_from_dict_snake_case(self, sample_article):
        driver = RecordDriver.from_dict(sample_article)
        assert driver.get_container_title() == 'Test Journal'
        assert driver.get_container_volume() == 1
        assert driver.get_clean_doi() == 'testDOI'

    def test_acronym_keys(self):
        driver = RecordDriver.from_dict({'CleanDOI': '10.1/x', 'IsMarc': True})
        assert driver.get_clean_doi() == '10.1/x'
        assert driver.is_marc is True

    def test_unknown_keys_ignored(self):
        driver = RecordDriver.from_dict({'Title': 'T', 'Shelfmark': 'QA76'})
        assert driver.get_title() == 'T'
        assert not hasattr(driver, 'shelfmark')

    def test_multi_valued_fields_accept_strings(self):
        driver = RecordDriver.from_dict({'Publishers': 'Mosby', 'PublicationDates': ''})
        assert driver.get_publishers() == ['Mosby']
        assert driver.get_publication_dates() == []
        assert driver.get_primary_authors() == []

    def test_breadcrumb_falls_back_to_title(self):
        assert RecordDriver(title='Full title').get_breadcrumb() == 'Full title'
        assert RecordDriver(title='Full', breadcrumb='Crumb').get_breadcrumb() == 'Crumb'
        assert RecordDriver().get_breadcrumb() == ''

    def test_try_method(self):
        driver = RecordDriver(edition='2nd ed.')
        assert driver.try_method('edition') == '2nd ed.'
        assert driver.try_method('nonexistent') is None
        assert driver.try_method('nonexistent', 'fallback') == 'fallback'

    def test_default_citation_formats(self):
        assert RecordDriver().get_citation_formats() == ['APA', 'Chicago', 'MLA']

    def test_from_json_file(self, record_file):
        driver = RecordDriver.from_json_file(record_file)
        assert driver.get_publishers() == ['Mosby']

    def test_from_json_file_invalid(self, tmp_path):
        path = tmp_path / 'broken.json'
        path.write_text('{not json')
        with pytest.raises(RecordError, match='Invalid record JSON'):
            RecordDriver.from_json_file(str(path))

    def test_from_json_file_not_object(self, tmp_path):
        path = tmp_path / 'list.json'
        path.write_text(json.dumps([1, 2]))
        with pytest.raises(RecordError, match='must contain a JSON object'):
            RecordDriver.from_json_file(str(path))
