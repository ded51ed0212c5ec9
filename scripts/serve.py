"""Run the updater locally and open it in a browser.

Refuses to start when required settings or ``PIKE13_SUBDOMAIN`` are missing,
since every route that talks to Pike13 would fail anyway.

    python -m scripts.serve            # listens on $PORT (default 3000)
    python -m scripts.serve --no-browser
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
import webbrowser

import uvicorn
from pydantic import ValidationError

from app.core.config import get_settings
from app.core.errors import ConfigurationError
from app.core.logging import configure_logging

logger = logging.getLogger("scripts.serve")


def _open_browser_later(url: str, delay_seconds: float = 1.0) -> None:
    def _open() -> None:
        try:
            webbrowser.open(url)
        except webbrowser.Error as exc:
            logger.info("Could not open a browser: %s", exc)

    timer = threading.Timer(delay_seconds, _open)
    timer.daemon = True
    timer.start()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Serve the Pike13 updater.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=None, help="Overrides $PORT.")
    parser.add_argument("--no-browser", action="store_true")
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return 2

    configure_logging(settings.log_level)
    try:
        settings.require_subdomain()
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 2

    port = args.port or settings.port
    url = f"http://localhost:{port}"
    logger.info("Server listening on %s", url)
    if not args.no_browser:
        _open_browser_later(url)

    uvicorn.run("app.main:app", host=args.host, port=port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
