"""Tests for the command-line interface."""

import pytest
import os
from pathlib import Path
from unittest.mock import patch

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from xeniria_pkg.cli import build_parser, main


class TestCli:
    """Test cases for the xeniria command."""

    def test_subcommand_required(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_build_parser_options(self):
        args = build_parser().parse_args(['build', '--content', 'src', '--site-title', 'Notes'])

        assert args.command == 'build'
        assert args.content == 'src'
        assert args.site_title == 'Notes'
        assert args.output is None

    def test_build(self, temp_dir, mock_content_dir, mock_output_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)

        with pytest.raises(SystemExit) as exc_info:
            main(['build', '--content', mock_content_dir, '--output', mock_output_dir])

        assert exc_info.value.code == 0
        assert (Path(mock_output_dir) / 'index.html').exists()
        assert (Path(mock_output_dir) / 'posts' / 'hello.html').exists()

    def test_build_with_defaults_from_config_file(self, temp_dir, mock_content_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        Path(temp_dir, 'xeniria.yml').write_text("output: site\n", encoding='utf-8')

        with pytest.raises(SystemExit) as exc_info:
            main(['build'])

        assert exc_info.value.code == 0
        assert (Path(temp_dir) / 'site' / 'about.html').exists()

    def test_build_reports_skipped_files(self, temp_dir, mock_content_dir, mock_output_dir,
                                         monkeypatch, capsys):
        monkeypatch.chdir(temp_dir)
        Path(mock_content_dir, 'broken.md').write_text("no front matter", encoding='utf-8')

        with pytest.raises(SystemExit) as exc_info:
            main(['build', '--content', mock_content_dir, '--output', mock_output_dir])

        assert exc_info.value.code == 0
        assert 'broken.md: MalformedFrontMatter' in capsys.readouterr().err

    def test_invalid_config_exits_with_error(self, temp_dir, monkeypatch, capsys):
        monkeypatch.chdir(temp_dir)
        Path(temp_dir, 'xeniria.yml').write_text("port: [unclosed\n", encoding='utf-8')

        with pytest.raises(SystemExit) as exc_info:
            main(['build'])

        assert exc_info.value.code == 1
        assert 'Error: Invalid YAML' in capsys.readouterr().err

    def test_serve(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)

        with patch('xeniria_pkg.cli.start_server') as mock_start:
            with pytest.raises(SystemExit) as exc_info:
                main(['serve'])

        assert exc_info.value.code == 0
        mock_start.assert_called_once_with('public', 8464, 'localhost')

    def test_serve_with_port(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)

        with patch('xeniria_pkg.cli.start_server') as mock_start:
            with pytest.raises(SystemExit):
                main(['serve', '--port', '9000', '--output', 'dist'])

        mock_start.assert_called_once_with('dist', 9000, 'localhost')

    def test_serve_missing_output_exits_with_error(self, temp_dir, monkeypatch, capsys):
        monkeypatch.chdir(temp_dir)

        with pytest.raises(SystemExit) as exc_info:
            main(['serve', '--port', '0'])

        assert exc_info.value.code == 1
        assert 'Output directory not found' in capsys.readouterr().err

    def test_init(self, temp_dir, monkeypatch, capsys):
        monkeypatch.chdir(temp_dir)

        main(['init'])

        assert (Path(temp_dir) / 'xeniria.yml').exists()
        assert (Path(temp_dir) / 'content' / 'hello.md').exists()
        assert (Path(temp_dir) / 'content' / 'about.md').exists()
        assert 'Created sample configuration file' in capsys.readouterr().out

    def test_init_keeps_existing_content(self, temp_dir, monkeypatch, capsys):
        monkeypatch.chdir(temp_dir)
        content_dir = Path(temp_dir) / 'content'
        content_dir.mkdir()
        (content_dir / 'hello.md').write_text('mine', encoding='utf-8')

        main(['init', '--format', 'json'])

        assert (content_dir / 'hello.md').read_text(encoding='utf-8') == 'mine'
        assert (Path(temp_dir) / 'xeniria.json').exists()
        assert 'Content already exists' in capsys.readouterr().out

    def test_init_keeps_existing_config(self, temp_dir, monkeypatch, capsys):
        monkeypatch.chdir(temp_dir)
        config_path = Path(temp_dir) / 'xeniria.yml'
        config_path.write_text("site_title: Mine\n", encoding='utf-8')

        main(['init'])

        assert config_path.read_text(encoding='utf-8') == "site_title: Mine\n"
        out = capsys.readouterr().out
        assert 'Configuration already exists' in out
        assert 'Created sample configuration file' not in out
        assert (Path(temp_dir) / 'content' / 'hello.md').exists()

    def test_init_then_build(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        main(['init'])

        with pytest.raises(SystemExit) as exc_info:
            main(['build'])

        assert exc_info.value.code == 0
        index_html = (Path(temp_dir) / 'public' / 'index.html').read_text(encoding='utf-8')
        assert '<a href="posts/hello.html">Hello</a>' in index_html
