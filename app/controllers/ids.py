# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Path-id guard shared by the controllers."""
import uuid

from fastapi import HTTPException


def require_uuid(value: str, entity: str = "resource") -> str:
    try:
        uuid.UUID(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {entity} ID format")
    return value
