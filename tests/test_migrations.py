from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

ROOT = Path(__file__).resolve().parents[1]


def alembic_config(url: str) -> Config:
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    cfg.set_main_option("sqlalchemy.url", url)
    cfg.attributes["configure_logger"] = False
    return cfg


def test_upgrade_and_downgrade(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrations.db'}"
    cfg = alembic_config(url)

    command.upgrade(cfg, "head")

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        assert {
            "users",
            "classrooms",
            "classroom_students",
            "assignments",
            "assignment_classrooms",
            "assignment_submissions",
            "parent_students",
        } <= set(inspector.get_table_names())

        assignment_columns = {c["name"] for c in inspector.get_columns("assignments")}
        assert {"due_date", "lock_at", "max_attempts"} <= assignment_columns

        submission_columns = {c["name"] for c in inspector.get_columns("assignment_submissions")}
        assert "attempt" in submission_columns
    finally:
        engine.dispose()

    command.downgrade(cfg, "base")

    engine = create_engine(url)
    try:
        assert "assignment_submissions" not in inspect(engine).get_table_names()
    finally:
        engine.dispose()
