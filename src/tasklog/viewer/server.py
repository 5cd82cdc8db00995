# src/tasklog/viewer/server.py

"""
Browser viewer for a tasks directory.

Serves:
- GET /tasks.json : the raw task file
- GET /, /index.html and other files from the bundled static/ directory

All filtering happens in the page itself; the server only reads.
"""

from __future__ import annotations

import argparse
import logging
import mimetypes
import sys
import webbrowser
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import unquote, urlsplit

from ..cli.bootstrap import TASKS_FILE_NAME
from ..config import Settings, get_settings
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


class ViewerServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: tuple[str, int], *, tasks_path: Path, static_dir: Path = STATIC_DIR) -> None:
        super().__init__(address, ViewerRequestHandler)
        self.tasks_path = tasks_path
        self.static_dir = static_dir.resolve()

    @property
    def url(self) -> str:
        host, port = self.server_address[:2]
        return f"http://{host}:{port}"


class ViewerRequestHandler(BaseHTTPRequestHandler):
    server: ViewerServer

    def do_GET(self) -> None:
        path = unquote(urlsplit(self.path).path)
        if path.endswith("/" + TASKS_FILE_NAME):
            self._send_file(self.server.tasks_path, "application/json")
            return

        if path.endswith("/"):
            path += "index.html"
        target = (self.server.static_dir / path.lstrip("/")).resolve()
        if not target.is_relative_to(self.server.static_dir):
            self._send_not_found(path)
            return
        content_type, _ = mimetypes.guess_type(target.name)
        self._send_file(target, content_type or "application/octet-stream")

    def _send_file(self, path: Path, content_type: str) -> None:
        try:
            body = path.read_bytes()
        except (FileNotFoundError, IsADirectoryError):
            self._send_not_found(self.path)
            return
        self.send_response(200)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Cache-Control", "no-store")
        self.end_headers()
        self.wfile.write(body)

    def _send_not_found(self, path: str) -> None:
        body = f"Not Found: {path}".encode("utf-8")
        self.send_response(404)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        logger.info("%s %s", self.address_string(), format % args)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasklog-viewer",
        description="Serve a tasks directory to a browser page with tag filtering.",
    )
    parser.add_argument("--dir", default=str(settings.default_dir), help="The tasks directory (default: %(default)s).")
    parser.add_argument("--host", default=settings.viewer_host, help="Bind address (default: %(default)s).")
    parser.add_argument("--port", type=int, default=settings.viewer_port, help="Port (default: %(default)s).")
    parser.add_argument("--no-browser", action="store_true", help="Do not open a browser window.")
    return parser


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)

    base_dir = Path(args.dir).expanduser()
    setup_logging(log_file=base_dir / settings.log_file_name, console_level=logging.INFO)

    tasks_path = base_dir / TASKS_FILE_NAME
    if not tasks_path.is_file():
        logger.warning("No %s in %s yet (run `tasklog init`); the page will show an error.", TASKS_FILE_NAME, base_dir)

    httpd = ViewerServer((args.host, args.port), tasks_path=tasks_path)
    print(f"serving at {httpd.url}", flush=True)
    if not args.no_browser:
        webbrowser.open(httpd.url)

    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    finally:
        httpd.server_close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
