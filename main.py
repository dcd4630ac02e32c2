"""Process entrypoint for the todo server.

Exposes ``app`` for ``uvicorn main:app`` and, when run directly, sets up
stdout logging and serves on all interfaces.
"""

import logging
import sys

from main_db import app

__all__ = ["app"]

HOST = "0.0.0.0"
PORT = 8080


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        handlers=[logging.StreamHandler(sys.stdout)],
        format="%(levelname)s: %(message)s",
    )
    uvicorn.run("main:app", host=HOST, port=PORT)
