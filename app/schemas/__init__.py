# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
Shape rules live here; the type/status pairing lives in the validator,
because a partial update can only be judged against the stored record.
"""
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from app.services.status_taxonomy import WORK_ITEM_TYPES

VALID_PRIORITIES = ("critical", "high", "normal", "low")

# Upper bounds of the NUMERIC(6, 2) / NUMERIC(7, 2) hour columns.
MAX_WEEKLY_ALLOCATION = 168
MAX_ESTIMATED_HOURS = 99999.99


def _normalise_choice(v: Optional[str], choices: tuple, name: str) -> Optional[str]:
    if v is None:
        return v
    v = v.lower().strip()
    if v not in choices:
        raise ValueError(f"{name} must be one of {choices}")
    return v


def _not_null(v, name: str):
    if v is None:
        raise ValueError(f"{name} may not be null")
    return v


def _strip(v):
    return v.strip() if isinstance(v, str) else v


def _hundredths(v: Optional[float]) -> Optional[float]:
    """Round half-up to two places, as the NUMERIC hour columns store it."""
    if v is None:
        return v
    return float(Decimal(str(v)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


# ── Teams ──

class TeamCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=5000)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return _strip(v)


class TeamUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=5000)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return _strip(v)

    @field_validator("name", "description")
    @classmethod
    def reject_null(cls, v, info):
        return _not_null(v, info.field_name)


class TeamOut(BaseModel):
    id: str
    name: str
    description: str
    member_count: int = 0
    created_at: str
    updated_at: str


# ── Team members ──

class TeamMemberCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    team_id: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    weekly_hours: int = Field(default=40, gt=0, le=168)
    avatar: Optional[str] = None
    is_active: bool = True

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("skills")
    @classmethod
    def clean_skills(cls, v: List[str]) -> List[str]:
        return [s.strip() for s in v if s and s.strip()]


class TeamMemberUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    role: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = Field(
        default=None, min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$"
    )
    team_id: Optional[str] = None
    skills: Optional[List[str]] = None
    weekly_hours: Optional[int] = Field(default=None, gt=0, le=168)
    avatar: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name", "role", "email", "skills", "weekly_hours", "is_active")
    @classmethod
    def reject_null(cls, v, info):
        return _not_null(v, info.field_name)

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.strip().lower()


class TeamMemberOut(BaseModel):
    id: str
    name: str
    role: str
    email: str
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    skills: List[str]
    weekly_hours: int
    avatar: Optional[str] = None
    is_active: bool
    created_at: str
    updated_at: str


class TeamMemberWithStats(TeamMemberOut):
    allocated_hours: float
    available_hours: float
    capacity_percentage: int
    capacity_status: str
    capacity_label: str


# ── Work items ──

class WorkItemCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: str = Field(default="", max_length=10000)
    type: str
    priority: str = "normal"
    status: Optional[str] = None
    estimated_hours: float = Field(default=0, ge=0, le=MAX_ESTIMATED_HOURS)
    due_date: Optional[date] = None

    @field_validator("type")
    @classmethod
    def normalise_type(cls, v: str) -> str:
        return _normalise_choice(v, WORK_ITEM_TYPES, "type")

    @field_validator("priority")
    @classmethod
    def normalise_priority(cls, v: str) -> str:
        return _normalise_choice(v, VALID_PRIORITIES, "priority")

    @field_validator("status")
    @classmethod
    def normalise_status(cls, v: Optional[str]) -> Optional[str]:
        return v.lower().strip() if v is not None else v

    @field_validator("estimated_hours")
    @classmethod
    def round_hours(cls, v: float) -> float:
        return _hundredths(v)


class WorkItemUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    description: Optional[str] = Field(default=None, max_length=10000)
    type: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    estimated_hours: Optional[float] = Field(default=None, ge=0, le=MAX_ESTIMATED_HOURS)
    due_date: Optional[date] = None

    @field_validator("title", "description", "type", "priority", "status", "estimated_hours")
    @classmethod
    def reject_null(cls, v, info):
        return _not_null(v, info.field_name)

    @field_validator("type")
    @classmethod
    def normalise_type(cls, v: str) -> str:
        return _normalise_choice(v, WORK_ITEM_TYPES, "type")

    @field_validator("priority")
    @classmethod
    def normalise_priority(cls, v: str) -> str:
        return _normalise_choice(v, VALID_PRIORITIES, "priority")

    @field_validator("status")
    @classmethod
    def normalise_status(cls, v: str) -> str:
        return v.lower().strip()

    @field_validator("estimated_hours")
    @classmethod
    def round_hours(cls, v: float) -> float:
        return _hundredths(v)


class WorkItemOut(BaseModel):
    id: str
    title: str
    description: str
    type: str
    priority: str
    status: str
    status_label: str
    estimated_hours: float
    due_date: Optional[date] = None
    created_at: str
    updated_at: str


# ── Allocations ──

class AllocationCreate(BaseModel):
    team_member_id: str = Field(..., min_length=1)
    work_item_id: str = Field(..., min_length=1)
    hours_per_week: float = Field(..., ge=0, le=MAX_WEEKLY_ALLOCATION)
    start_date: date
    end_date: Optional[date] = None
    notes: str = Field(default="", max_length=5000)

    @field_validator("hours_per_week")
    @classmethod
    def round_hours(cls, v: float) -> float:
        return _hundredths(v)


class AllocationUpdate(BaseModel):
    hours_per_week: Optional[float] = Field(default=None, ge=0, le=MAX_WEEKLY_ALLOCATION)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = Field(default=None, max_length=5000)

    @field_validator("hours_per_week", "start_date", "notes")
    @classmethod
    def reject_null(cls, v, info):
        return _not_null(v, info.field_name)

    @field_validator("hours_per_week")
    @classmethod
    def round_hours(cls, v: float) -> float:
        return _hundredths(v)


class AllocationOut(BaseModel):
    id: str
    team_member_id: str
    work_item_id: str
    team_member_name: Optional[str] = None
    work_item_title: Optional[str] = None
    hours_per_week: float
    start_date: date
    end_date: Optional[date] = None
    notes: str
    created_at: str
    updated_at: str


class WorkItemWithAllocations(WorkItemOut):
    allocations: List[AllocationOut] = []
    total_allocated_hours: float


# ── Out of office ──

class OutOfOfficeCreate(BaseModel):
    team_member_id: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    reason: str = Field(default="Out of office", min_length=1, max_length=500)


class OutOfOfficeOut(BaseModel):
    id: str
    team_member_id: str
    start_date: date
    end_date: date
    reason: str
    created_at: str


# ── Stats ──

class TeamStats(BaseModel):
    total_members: int
    average_capacity: int
    overallocated_members: int
    hours_by_type: Dict[str, float]
    capacity_distribution: Dict[str, int]
