# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Row mapping and write helpers shared by the repositories.

PostgreSQL hands back date/datetime/Decimal objects, SQLite hands back
strings and floats; everything funnels through these converters.
"""

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from app.core.errors import ConstraintError
from app.core.logging import get_logger

logger = get_logger(__name__)


def as_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def iso_timestamp(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return value
    return value.isoformat()


def bind_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def as_float(value: Any) -> float:
    return float(value) if value is not None else 0.0


def build_set_clause(fields: Dict[str, Any], allowed: Iterable[str]) -> str:
    """``col = :col`` fragments for the whitelisted keys present in ``fields``."""
    return ", ".join(f"{col} = :{col}" for col in allowed if col in fields)


def update_row(conn, table: str, row_id: str, fields: Dict[str, Any],
               allowed: Iterable[str]) -> int:
    allowed = tuple(allowed)
    set_clause = build_set_clause(fields, allowed)
    if not set_clause:
        return 0
    params = {col: fields[col] for col in allowed if col in fields}
    params["id"] = row_id
    result = conn.execute(
        text(f"UPDATE {table} SET {set_clause} WHERE id = :id"), params
    )
    return result.rowcount


@contextmanager
def constraint_guard(entity: str, unique_field: Optional[str] = None):
    """Translate driver IntegrityError into ConstraintError."""
    try:
        yield
    except IntegrityError as exc:
        detail = str(exc.orig)
        logger.warning("Constraint violation on %s: %s", entity, detail)
        if unique_field and unique_field in detail.lower():
            raise ConstraintError(
                f"{entity} with this {unique_field} already exists"
            ) from exc
        raise ConstraintError(f"{entity} violates a store constraint: {detail}") from exc
