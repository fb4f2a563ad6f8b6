"""Entry point for the Community Events API.

Launches the FastAPI application with uvicorn.  It is intended to be
executed from the project root, e.g. under Docker or a process manager
where you only specify a single Python file to run::

    python run.py

Configuration such as SECRET_KEY, DATABASE_URL and LOG_LEVEL is read
from environment variables by ``community_events_api.app.core.config``.
"""
import logging
import os

from uvicorn import Config, Server

from community_events_api.app.main import app


def main() -> None:
    """Serve the API until interrupted.

    Host and port are read from ``API_HOST`` and ``API_PORT``; defaults
    are ``0.0.0.0`` and ``8000``.
    """
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    logging.getLogger(__name__).info("Starting API on %s:%s", host, port)
    Server(config).run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
