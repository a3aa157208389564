from __future__ import annotations

import argparse
import logging
import threading
import time
import webbrowser

import uvicorn

from movie_elo.app.api import create_app
from movie_elo.cli import configure_logging
from movie_elo.core.config import get_settings


logger = logging.getLogger(__name__)


def _browser_url(host: str, port: int) -> str:
    if host in {"0.0.0.0", "::", "::0", "[::]"}:
        host = "127.0.0.1"
    return f"http://{host}:{port}/web"


def _open_browser_delayed(url: str) -> None:
    time.sleep(0.7)
    try:
        webbrowser.open(url)
    except webbrowser.Error as exc:
        logger.warning("Could not open a browser tab: %s", exc)


def run_web_server(host: str, port: int, no_open: bool = False, log_level: str = "info") -> None:
    settings = get_settings()
    url = _browser_url(host, port)
    print(f"Starting Movie ELO at {url}")
    if not no_open:
        threading.Thread(target=_open_browser_delayed, args=(url,), daemon=True).start()

    uvicorn.run(create_app(settings), host=host, port=port, log_level=log_level.lower())


def main() -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Run the Movie ELO web interface")
    parser.add_argument("--host", default=settings.web_host)
    parser.add_argument("--port", type=int, default=settings.web_port)
    parser.add_argument(
        "--no-open",
        action="store_true",
        help="Do not auto-open a browser tab",
    )
    args = parser.parse_args()
    configure_logging(settings.log_level)

    run_web_server(host=args.host, port=args.port, no_open=args.no_open, log_level=settings.log_level)


if __name__ == "__main__":
    main()
