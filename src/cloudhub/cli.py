"""Command line entry point: run the server and manage the database.

    cloudhub serve [--host HOST] [--port PORT] [--reload]
    cloudhub init-db
    cloudhub create-admin --email EMAIL --password PASSWORD [--name NAME]
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from cloudhub.exceptions import CloudHubError
from cloudhub.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cloudhub",
        description="CloudHub student portfolio service",
    )
    parser.add_argument("--log-level", help="Override CLOUDHUB_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    subparsers.add_parser("init-db", help="Create database tables")

    admin = subparsers.add_parser("create-admin", help="Create an approved admin account")
    admin.add_argument("--email", required=True)
    admin.add_argument("--password", required=True)
    admin.add_argument("--name", default="Admin User", help="Display name")
    return parser


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("cloudhub.api.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def _init_db(_args: argparse.Namespace) -> int:
    from cloudhub.data.db import get_database_url, init_db

    init_db()
    print(f"Database ready at {get_database_url()}")
    return 0


def _create_admin(args: argparse.Namespace) -> int:
    from cloudhub.services.auth import ensure_admin

    user, created = ensure_admin(args.email, args.password, args.name)
    if created:
        print(f"Created admin account {user['email']}")
    else:
        print(f"Account {user['email']} already exists ({user['role']}, {user['account_status']})")
    return 0


COMMANDS = {
    "serve": _serve,
    "init-db": _init_db,
    "create-admin": _create_admin,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = create_parser().parse_args(argv)
    configure_logging(args.log_level.upper() if args.log_level else None)

    try:
        return COMMANDS[args.command](args)
    except CloudHubError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
