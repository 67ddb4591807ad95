"""Serve the image listing and booking endpoints with Flask's built-in server.

``python -m gallery_relay`` (or the ``gallery-relay`` script) binds to every
interface on ``PORT``. Production deployments point a WSGI server at
``gallery_relay.app:application`` instead.
"""

from __future__ import annotations

import logging

from .app import app
from .config import SETTINGS

logger = logging.getLogger(__name__)


def main() -> None:
    logger.info("Gallery relay listening on port %s", SETTINGS.port)
    app.run(host="0.0.0.0", port=SETTINGS.port, debug=False)


if __name__ == "__main__":
    main()
