"""Tests for the JSON endpoint."""
import pytest

from record_helpers.dates import DateConverter
from record_helpers.i18n import Translator
from record_helpers.web import create_app


@pytest.fixture
def app(icon_config):
    """Create and configure a Flask app for testing."""
    app = create_app(
        icon_config=icon_config,
        date_converter=DateConverter('m-d-Y'),
        translator=Translator(),
        rtl=False,
    )
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


class TestAjaxEndpoint:
    """AJAX JSON envelope."""

    def test_health(self, client):
        response = client.get('/health')
        assert response.status_code == 200
        assert response.data == b'ok'

    def test_get_citations(self, client, sample_book):
        response = client.post(
            '/AJAX/JSON?method=getCitations',
            json={'record': sample_book, 'formats': ['APA', 'MLA']},
        )
        assert response.status_code == 200
        payload = response.get_json()
        assert payload['status'] == 'OK'
        assert payload['data'] == {
            'APA': 'Shafer, K. N. (1958). <i>Medical-surgical nursing</i>. Mosby.',
            'MLA': 'Shafer, Kathleen Newton. <i>Medical-surgical Nursing</i>. Mosby, 1958.',
        }

    def test_get_citations_default_formats(self, client, sample_article):
        response = client.post('/AJAX/JSON?method=getCitations', json={'record': sample_article})
        payload = response.get_json()
        assert payload['status'] == 'OK'
        assert set(payload['data']) == {'APA', 'Chicago', 'MLA'}

    def test_get_citations_missing_record(self, client):
        response = client.post('/AJAX/JSON?method=getCitations', json={})
        assert response.status_code == 400
        assert response.get_json() == {'status': 'ERROR', 'data': 'Missing record'}

    def test_get_icon(self, client):
        response = client.get('/AJAX/JSON?method=getIcon&name=foo&class=big')
        assert response.status_code == 200
        assert response.get_json() == {
            'status': 'OK',
            'data': '<span class="icon icon--font fa fa-foo big" '
                    'role="img" aria-hidden="true"></span>',
        }

    def test_get_icon_missing_name(self, client):
        response = client.get('/AJAX/JSON?method=getIcon')
        assert response.status_code == 400
        assert response.get_json()['status'] == 'ERROR'

    def test_get_icon_circular_alias(self, client):
        response = client.get('/AJAX/JSON?method=getIcon&name=foolish')
        assert response.status_code == 500
        assert response.get_json() == {
            'status': 'ERROR',
            'data': 'Circular icon alias detected: foolish!',
        }

    def test_unknown_method(self, client):
        response = client.get('/AJAX/JSON?method=getEverything')
        assert response.status_code == 400
        assert response.get_json() == {
            'status': 'ERROR',
            'data': 'Invalid method: getEverything',
        }

    def test_get_citations_formats_must_be_list(self, client, sample_book):
        response = client.post(
            '/AJAX/JSON?method=getCitations',
            json={'record': sample_book, 'formats': 'APA'},
        )
        assert response.status_code == 400
        assert response.get_json() == {
            'status': 'ERROR',
            'data': 'formats must be a list of strings',
        }

    def test_get_citations_format_must_be_string(self, client, sample_book):
        response = client.post(
            '/AJAX/JSON?method=getCitations',
            json={'record': sample_book, 'formats': [1]},
        )
        assert response.status_code == 400
        assert response.is_json
        assert response.get_json()['status'] == 'ERROR'

    def test_get_citations_non_object_body(self, client):
        response = client.post('/AJAX/JSON?method=getCitations', json=['record'])
        assert response.status_code == 400
        assert response.get_json() == {'status': 'ERROR', 'data': 'Missing record'}

    def test_get_icon_name_must_be_string(self, client):
        response = client.post('/AJAX/JSON?method=getIcon', json={'name': 5})
        assert response.status_code == 400
        assert response.get_json() == {
            'status': 'ERROR',
            'data': 'Icon name and class must be strings',
        }

    def test_get_icon_class_must_be_string(self, client):
        response = client.post('/AJAX/JSON?method=getIcon', json={'name': 'foo', 'class': ['a']})
        assert response.status_code == 400
        assert response.get_json()['status'] == 'ERROR'

    def test_get_icon_json_body(self, client):
        response = client.post('/AJAX/JSON?method=getIcon', json={'name': 'foo', 'class': 'big'})
        assert response.status_code == 200
        assert 'fa-foo big' in response.get_json()['data']
