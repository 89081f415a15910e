# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
Resource Management Service
===========================
Team rosters, work items (demand / project / om) and weekly-hour
allocations, with capacity derived from allocations on every read.

Work-item status vocabularies per type:
    demand   draft ─► submitted ─► screened ─► qualified-approved ─► complete | deferred | rejected
    project  initiating ─► planning ─► executing ─► delivering ─► closing
    om       planned ─► active ─► on-hold ─► completed

Port: 8005
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.controllers import (
    allocation_controller,
    out_of_office_controller,
    system_controller,
    team_controller,
    team_member_controller,
    work_item_controller,
)
from app.core.config import settings
from app.core.database import engine
from app.core.errors import ConstraintError, NotFoundError, ValidationError
from app.core.logging import get_logger
from app.core.schema import init_schema
from app.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    if settings.AUTO_CREATE_SCHEMA:
        init_schema(engine)
    logger.info("Service started version=%s", settings.SERVICE_VERSION)
    yield
    engine.dispose()
    logger.info("Shutting down — connection pool disposed")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Resource Management Service",
    description="Team capacity, work items and allocations.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


# ── Error mapping ─────────────────────────────────────────────────────────
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=422,
        content={"error": "validation_error", "field": exc.field, "detail": exc.message},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": "not_found", "detail": exc.message})


@app.exception_handler(ConstraintError)
async def constraint_error_handler(request: Request, exc: ConstraintError):
    return JSONResponse(
        status_code=409, content={"error": "constraint_violation", "detail": exc.message}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")
    return JSONResponse(status_code=500, content={"error": "internal_server_error", "detail": str(exc)})


# ── Routers ───────────────────────────────────────────────────────────────
app.include_router(system_controller.router)
app.include_router(team_controller.router)
app.include_router(team_member_controller.router)
app.include_router(work_item_controller.router)
app.include_router(allocation_controller.router)
app.include_router(out_of_office_controller.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.SERVICE_PORT)
