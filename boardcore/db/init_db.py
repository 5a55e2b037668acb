"""
Database initialization.

Creates all tables and optionally seeds the staff roles the repositories
look up by name.

Usage:
    python -m boardcore.db.init_db
    python -m boardcore.db.init_db --reset --seed-roles
"""
import argparse
import logging
from typing import Iterable, List

from sqlalchemy import func

from boardcore.db import models
from boardcore.db.database import engine, SessionLocal
from boardcore.db.store import commit_changes
from boardcore.utils.log_config import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_ROLES = ("Moderator", "Administrator")


def create_tables(bind=None, reset: bool = False) -> None:
    bind = bind if bind is not None else engine
    if reset:
        logger.warning("dropping_tables: url=%s", bind.url)
        models.Base.metadata.drop_all(bind=bind)
    models.Base.metadata.create_all(bind=bind)
    logger.info("tables_created: url=%s", bind.url)


def seed_roles(db, names: Iterable[str] = DEFAULT_ROLES) -> List[str]:
    """Insert any missing role (compared case-insensitively); return the names added."""
    added = []
    for name in names:
        exists = db.query(models.Role.id).filter(func.lower(models.Role.name) == func.lower(name)).first()
        if exists is None:
            db.add(models.Role(name=name))
            added.append(name)
    commit_changes(db, "seed_roles")
    return added


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Create the message board tables")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop existing tables before creating (deletes all data)",
    )
    parser.add_argument(
        "--seed-roles",
        action="store_true",
        help="Ensure the Moderator and Administrator roles exist",
    )
    args = parser.parse_args(argv)

    configure_logging()
    create_tables(reset=args.reset)
    if args.seed_roles:
        db = SessionLocal()
        try:
            added = seed_roles(db)
        finally:
            db.close()
        logger.info("roles_seeded: added=%s", added)


if __name__ == "__main__":
    main()
