"""Tests for the command line interface."""
from unittest.mock import patch

import pytest

from record_helpers.__main__ import main


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep CLI runs from attaching handlers to the root logger."""
    with patch('record_helpers.__main__.setup_logging') as mock_setup:
        yield mock_setup


class TestCiteCommand:
    """`cite` subcommand."""

    def test_cite_single_format(self, record_file, capsys):
        assert main(['cite', record_file, '--format', 'APA']) == 0
        out = capsys.readouterr().out
        assert out == 'APA: Shafer, K. N. (1958). <i>Medical-surgical nursing</i>. Mosby.\n'

    def test_cite_default_formats(self, record_file, capsys):
        assert main(['cite', record_file]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert [line.split(':', 1)[0] for line in lines] == ['APA', 'Chicago', 'MLA']

    def test_cite_missing_file(self, tmp_path, capsys):
        assert main(['cite', str(tmp_path / 'missing.json')]) == 1
        assert capsys.readouterr().out.startswith('Error: ')

    def test_logging_configured_from_arguments(self, record_file, no_logging_setup):
        main(['--log-level', 'DEBUG', '--log-dir', 'out', 'cite', record_file])
        no_logging_setup.assert_called_once_with(log_dir='out', level='DEBUG')


class TestIconCommand:
    """`icon` subcommand."""

    def test_icon(self, icon_config_file, capsys):
        assert main(['icon', 'foo', '--config', icon_config_file, '--class', 'big']) == 0
        assert capsys.readouterr().out == (
            '<span class="icon icon--font fa fa-foo big" role="img" aria-hidden="true"></span>\n'
        )

    def test_icon_rtl(self, icon_config_file, capsys, monkeypatch):
        from record_helpers.config import Config

        monkeypatch.setattr(Config, 'IMAGE_BASE_URL', '/images')
        assert main(['icon', 'bar', '--config', icon_config_file, '--rtl']) == 0
        assert 'src="/images/icons/zab.png"' in capsys.readouterr().out

    def test_icon_circular_alias(self, icon_config_file, capsys):
        assert main(['icon', 'foolish', '--config', icon_config_file]) == 1
        assert capsys.readouterr().out == 'Error: Circular icon alias detected: foolish!\n'

    def test_command_required(self):
        with pytest.raises(SystemExit):
            main([])
