#!/usr/bin/env python3
"""Run database migrations with Logfire error tracking.

Usage:
    run_migrations.py            upgrade to head
    run_migrations.py <rev>      upgrade to a revision
    run_migrations.py -1         downgrade one step ("base" drops everything)
"""

import sys
import logfire
from alembic import command
from alembic.config import Config

from sso.config import Settings
from sso.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Run migrations and log any errors to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    target = argv[1] if len(argv) > 1 else "head"

    try:
        logfire.info("Starting database migrations", target=target)

        alembic_cfg = Config("alembic.ini")
        alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)

        if target == "base" or target.startswith("-"):
            command.downgrade(alembic_cfg, target)
        else:
            command.upgrade(alembic_cfg, target)

        logfire.info("Database migrations completed successfully", target=target)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise


if __name__ == "__main__":
    sys.exit(main(sys.argv))
