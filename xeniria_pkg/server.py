"""
Local preview server for a built Xeniria site.
"""

import os
import logging
from functools import partial
from http.server import ThreadingHTTPServer, SimpleHTTPRequestHandler

logger = logging.getLogger('Xeniria.PreviewServer')


class PreviewRequestHandler(SimpleHTTPRequestHandler):
    """Serve files under the site root; no directory listings."""

    def list_directory(self, path):
        self.send_error(404, "File not found")
        return None

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


def create_server(root_dir, port=8464, host='localhost'):
    """
    Bind an HTTP server serving ``root_dir``.

    Args:
        root_dir: Directory to serve
        port: TCP port to listen on (0 picks a free port)
        host: Interface to bind

    Returns:
        A ``ThreadingHTTPServer`` ready for ``serve_forever()``
    """
    if not os.path.isdir(root_dir):
        raise FileNotFoundError(f"Output directory not found: {root_dir}. Run 'xeniria build' first.")
    handler = partial(PreviewRequestHandler, directory=os.path.abspath(root_dir))
    return ThreadingHTTPServer((host, port), handler)


def start_server(root_dir, port=8464, host='localhost'):
    """Serve ``root_dir`` until interrupted."""
    httpd = create_server(root_dir, port, host)
    bound_port = httpd.server_address[1]
    logger.info(f"Starting preview server at http://{host}:{bound_port}/ (serving {root_dir})")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("Preview server stopped.")
    finally:
        httpd.server_close()
