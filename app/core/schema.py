# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Relational schema — DDL valid on both PostgreSQL and SQLite.

Cascades are declared for PostgreSQL and also performed explicitly by the
repositories, so behaviour is identical on SQLite without FK enforcement.
"""

from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.core.logging import get_logger

logger = get_logger(__name__)

TABLES = ("allocations", "out_of_office", "work_items", "team_members", "teams")

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS teams (
        id          VARCHAR(36) PRIMARY KEY,
        name        TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        created_at  TIMESTAMP NOT NULL,
        updated_at  TIMESTAMP NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS team_members (
        id           VARCHAR(36) PRIMARY KEY,
        name         TEXT NOT NULL,
        role         TEXT NOT NULL,
        email        VARCHAR(320) NOT NULL UNIQUE,
        team_id      VARCHAR(36) REFERENCES teams(id) ON DELETE SET NULL,
        skills       TEXT NOT NULL DEFAULT '[]',
        weekly_hours INTEGER NOT NULL DEFAULT 40,
        avatar       TEXT,
        is_active    BOOLEAN NOT NULL DEFAULT TRUE,
        created_at   TIMESTAMP NOT NULL,
        updated_at   TIMESTAMP NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS work_items (
        id              VARCHAR(36) PRIMARY KEY,
        title           TEXT NOT NULL,
        description     TEXT NOT NULL DEFAULT '',
        type            VARCHAR(16) NOT NULL,
        priority        VARCHAR(16) NOT NULL DEFAULT 'normal',
        status          VARCHAR(32) NOT NULL,
        estimated_hours NUMERIC(7, 2) NOT NULL DEFAULT 0,
        due_date        DATE,
        created_at      TIMESTAMP NOT NULL,
        updated_at      TIMESTAMP NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS allocations (
        id             VARCHAR(36) PRIMARY KEY,
        team_member_id VARCHAR(36) NOT NULL REFERENCES team_members(id),
        work_item_id   VARCHAR(36) NOT NULL REFERENCES work_items(id) ON DELETE CASCADE,
        hours_per_week NUMERIC(6, 2) NOT NULL,
        start_date     DATE NOT NULL,
        end_date       DATE,
        notes          TEXT NOT NULL DEFAULT '',
        created_at     TIMESTAMP NOT NULL,
        updated_at     TIMESTAMP NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS out_of_office (
        id             VARCHAR(36) PRIMARY KEY,
        team_member_id VARCHAR(36) NOT NULL REFERENCES team_members(id),
        start_date     DATE NOT NULL,
        end_date       DATE NOT NULL,
        reason         TEXT NOT NULL DEFAULT 'Out of office',
        created_at     TIMESTAMP NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS ix_team_members_team_id ON team_members (team_id)",
    "CREATE INDEX IF NOT EXISTS ix_allocations_team_member_id ON allocations (team_member_id)",
    "CREATE INDEX IF NOT EXISTS ix_allocations_work_item_id ON allocations (work_item_id)",
    "CREATE INDEX IF NOT EXISTS ix_out_of_office_team_member_id ON out_of_office (team_member_id)",
)


def init_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(text(statement))
    logger.info("Schema ready (%d tables)", len(TABLES))


def drop_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        for table in TABLES:
            conn.execute(text(f"DROP TABLE IF EXISTS {table}"))
