"""
ProjectHub Backend — Alembic Migration Tests
==============================================

What we test:
    ✅ upgrade head creates the four tables on a file-backed SQLite store
    ✅ downgrade base drops them again
    ✅ Offline mode renders the DDL without connecting
"""

import io
import sqlite3
from pathlib import Path

from alembic import command
from alembic.config import Config

from projecthub.config import settings

BACKEND_DIR = Path(__file__).resolve().parents[1]

TABLES = {"users", "active_tokens", "projects", "project_files"}


def alembic_config(**kwargs) -> Config:
    # No ini file: env.py then leaves the test run's logging alone
    config = Config(**kwargs)
    config.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    return config


def table_names(path: Path) -> set:
    with sqlite3.connect(path) as conn:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return {name for (name,) in rows}


class TestMigrations:

    def test_upgrade_then_downgrade(self, tmp_path, monkeypatch):
        db_path = tmp_path / "migrated.db"
        monkeypatch.setattr(settings, "database_url", f"sqlite+aiosqlite:///{db_path}")
        config = alembic_config()

        command.upgrade(config, "head")
        assert TABLES <= table_names(db_path)

        command.downgrade(config, "base")
        assert not TABLES & table_names(db_path)

    def test_offline_renders_ddl(self, monkeypatch):
        monkeypatch.setattr(settings, "database_url", "sqlite+aiosqlite:///unused.db")
        buffer = io.StringIO()

        command.upgrade(alembic_config(output_buffer=buffer), "head", sql=True)

        sql = buffer.getvalue()
        assert "CREATE TABLE project_files" in sql
        assert "ON DELETE CASCADE" in sql
