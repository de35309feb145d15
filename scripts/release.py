"""
Release phase: bring the schema to head, then make sure an admin exists.

Usage:
  python scripts/release.py [--revision REV] [--skip-seed]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from alembic import command
from alembic.config import Config

from app.konnect.config import load_settings
from scripts._db_utils import resolve_database_url


def alembic_config(db_url: str) -> Config:
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", db_url)
    return cfg


def upgrade_schema(db_url: str, revision: str = "head") -> None:
    command.upgrade(alembic_config(db_url), revision)


def run_release(*, database_url: str | None = None, revision: str = "head", seed: bool = True) -> None:
    settings = load_settings()
    is_production = settings.env.lower() in ("prod", "production")
    db_url = resolve_database_url(database_url)
    if is_production and db_url.startswith("sqlite"):
        raise RuntimeError("Production release needs a Postgres DATABASE_URL, got sqlite.")

    print(f"[release] env={settings.env} upgrading schema to {revision}", flush=True)
    upgrade_schema(db_url, revision)

    if seed:
        from scripts.init_db import seed_only

        seed_only(database_url=db_url)
    print("[release] done", flush=True)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--revision", default="head", help="Alembic revision to upgrade to")
    parser.add_argument("--skip-seed", action="store_true", help="Only run migrations")
    args = parser.parse_args()
    run_release(revision=args.revision, seed=not args.skip_seed)


if __name__ == "__main__":
    main()
