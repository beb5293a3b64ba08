#!/usr/bin/env python3
"""Apply or roll back the collaboration schema.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py base       # upgrade/downgrade to a revision
    python scripts/run_migrations.py -1 --down  # step back one revision
"""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config

from marquee.config import Settings
from marquee.util.observability import configure_logfire


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run Marquee database migrations")
    parser.add_argument("revision", nargs="?", default="head")
    parser.add_argument(
        "--down", action="store_true", help="Downgrade to the revision instead"
    )
    parser.add_argument("--config", default="alembic.ini", help="Alembic config file")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    settings = Settings()
    configure_logfire(settings)

    alembic_cfg = Config(args.config)
    direction = "downgrade" if args.down else "upgrade"

    with logfire.span(
        "migrations.run",
        direction=direction,
        revision=args.revision,
        environment=settings.environment,
    ):
        try:
            if args.down:
                command.downgrade(alembic_cfg, args.revision)
            else:
                command.upgrade(alembic_cfg, args.revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                direction=direction,
                revision=args.revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The container must not start on a half-migrated schema
            raise

    logfire.info("Database migrations applied", direction=direction, revision=args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
