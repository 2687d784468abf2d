#!/usr/bin/env python3
"""
AUTOGIRO API -- vehicle resale tracking backend.

Usage:
  python main.py serve
  python main.py serve --port 8080
  python main.py serve --host 127.0.0.1 --reload
  python main.py seed

Environment variables (see core/config.py for the full list):
  DEBUG                  true enables development defaults for everything below.
  SECRET_KEY             Token signing key, at least 32 characters. Required in production.
  DATABASE_URL           SQLAlchemy URL. Required in production.
  PORT                   Listen port (default 3001).
  DEFAULT_USER_PASSWORD  Password for the seeded admin/seller accounts.
"""

import argparse
import sys

import uvicorn

from core.config import get_settings


def _serve(args: argparse.Namespace) -> int:
    settings = get_settings()
    uvicorn.run(
        "api.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def _seed(args: argparse.Namespace) -> int:
    """Create tables and default accounts without starting the server."""
    from api.main import open_database

    settings = get_settings()
    database = open_database(settings.database_url, settings.default_user_password)
    database.close()
    print("  Schema and default accounts are up to date.")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="autogiro",
        description="AUTOGIRO vehicle resale tracking API.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn.")
    serve.add_argument("--host", default=None, help="Bind address (default: HOST or 0.0.0.0).")
    serve.add_argument("--port", type=int, default=None, help="Listen port (default: PORT or 3001).")
    serve.add_argument("--reload", action="store_true", help="Restart on code changes (development only).")
    serve.set_defaults(func=_serve)

    seed = sub.add_parser("seed", help="Create tables and seed default accounts, then exit.")
    seed.set_defaults(func=_seed)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
