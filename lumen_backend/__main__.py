"""
Run the Lumen backend HTTP server.

Usage:
    python -m lumen_backend
"""
from aiohttp import web

from .config import HOST, PORT
from .routes import init_app


def main() -> None:
    web.run_app(init_app(), host=HOST, port=PORT)


if __name__ == "__main__":
    main()
