# src/plaza/scripts/migrate.py
from __future__ import annotations
import os
import sys

from alembic import command
from alembic.config import Config

from plaza.core.settings import settings

MIGRATIONS_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations"))


def build_config(database_url: str | None = None) -> Config:
    """Return an Alembic config pointed at the project's migrations folder."""
    cfg = Config(os.path.join(MIGRATIONS_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", MIGRATIONS_DIR)
    cfg.set_main_option("sqlalchemy.url", database_url or settings.effective_database_url)
    return cfg


def run_upgrade_head() -> int:
    command.upgrade(build_config(), "head")
    return 0


if __name__ == "__main__":
    sys.exit(run_upgrade_head())
