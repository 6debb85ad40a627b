"""Tests for the preview server."""

import pytest
import os
import threading
import urllib.request
import urllib.error
from pathlib import Path
from unittest.mock import patch

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from xeniria_pkg.server import create_server, start_server


@pytest.fixture
def site_dir(temp_dir):
    site = Path(temp_dir) / 'public'
    (site / 'posts').mkdir(parents=True)
    (site / 'index.html').write_text('<h1>Xeniria Blog</h1>', encoding='utf-8')
    (site / 'posts' / 'hello.html').write_text('<h1>Hello</h1>', encoding='utf-8')
    return str(site)

@pytest.fixture
def running_server(site_dir):
    httpd = create_server(site_dir, port=0, host='127.0.0.1')
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()
    thread.join(timeout=5)


def fetch(url):
    with urllib.request.urlopen(url, timeout=5) as response:
        return response.status, response.read().decode('utf-8')


class TestPreviewServer:
    """Test cases for serving the built site."""

    def test_serves_index(self, running_server):
        status, body = fetch(running_server + '/')

        assert status == 200
        assert '<h1>Xeniria Blog</h1>' in body

    def test_serves_post(self, running_server):
        status, body = fetch(running_server + '/posts/hello.html')

        assert status == 200
        assert body == '<h1>Hello</h1>'

    def test_missing_path_returns_404(self, running_server):
        with pytest.raises(urllib.error.HTTPError) as exc_info:
            fetch(running_server + '/posts/missing.html')
        assert exc_info.value.code == 404

    def test_directory_listing_disabled(self, running_server):
        with pytest.raises(urllib.error.HTTPError) as exc_info:
            fetch(running_server + '/posts/')
        assert exc_info.value.code == 404

    def test_missing_root_directory(self, temp_dir):
        with pytest.raises(FileNotFoundError, match="xeniria build"):
            create_server(os.path.join(temp_dir, 'nope'), port=0)

    def test_start_server_stops_on_keyboard_interrupt(self, site_dir):
        with patch('xeniria_pkg.server.ThreadingHTTPServer.serve_forever',
                   side_effect=KeyboardInterrupt):
            start_server(site_dir, port=0, host='127.0.0.1')
