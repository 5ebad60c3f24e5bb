#!/usr/bin/env python3
"""Apply Alembic migrations, reporting failures to Logfire.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3c1f0a9d2b71
    python scripts/run_migrations.py --downgrade base
"""

import argparse
import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from forum.config import Settings
from forum.util.logging import setup_logging
from forum.util.observability import configure_logfire

ROOT = Path(__file__).resolve().parent.parent


def build_alembic_config(settings: Settings) -> Config:
    """Alembic config rooted at the repository, pointed at the app database."""
    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT / "migrations"))
    config.set_main_option("sqlalchemy.url", settings.database_url)
    return config


def main(argv: list[str] | None = None) -> int:
    """Upgrade (or downgrade) the schema to the requested revision."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("revision", nargs="?", default="head")
    parser.add_argument("--downgrade", action="store_true")
    args = parser.parse_args(argv)

    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    direction = "downgrade" if args.downgrade else "upgrade"
    with logfire.span("run_migrations", direction=direction, revision=args.revision):
        try:
            alembic_cfg = build_alembic_config(settings)
            if args.downgrade:
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
            # Re-raise so the container fails and doesn't start with broken schema
            raise

    logfire.info("Database migrations completed", direction=direction, revision=args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
