"""Request/response models for the project routes.

Text fields are trimmed, length-checked, then HTML-escaped at parse time; dates are
normalized to naive UTC to match the storage columns.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from ...core.constants import (
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    ProjectStatus,
)
from ...core.db.models import utcnow
from ...core.utils import clean_text


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _clean_name(value: str) -> str:
    value = value.strip()
    if not (NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH):
        raise ValueError(
            f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
        )
    return clean_text(value)


def _clean_description(value: str) -> str:
    value = value.strip()
    if not (DESCRIPTION_MIN_LENGTH <= len(value) <= DESCRIPTION_MAX_LENGTH):
        raise ValueError(
            f"Description must be between {DESCRIPTION_MIN_LENGTH} and "
            f"{DESCRIPTION_MAX_LENGTH} characters"
        )
    return clean_text(value)


class ProjectCreate(BaseModel):
    name: str
    description: str
    status: ProjectStatus = ProjectStatus.PENDING
    start_date: datetime
    end_date: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return _clean_name(v)

    @field_validator("description")
    @classmethod
    def check_description(cls, v: str) -> str:
        return _clean_description(v)

    @field_validator("start_date")
    @classmethod
    def check_start_date(cls, v: datetime) -> datetime:
        v = _to_naive_utc(v)
        if v > utcnow():
            raise ValueError("Start date cannot be in the future")
        return v

    @field_validator("end_date")
    @classmethod
    def normalize_end_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _to_naive_utc(v)

    @model_validator(mode="after")
    def check_date_order(self):
        if self.end_date is not None and self.end_date <= self.start_date:
            raise ValueError("End date must be after the start date")
        return self


class ProjectUpdate(BaseModel):
    """Partial update; only fields present in the body are applied."""

    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: Optional[str]) -> Optional[str]:
        return _clean_name(v) if v is not None else None

    @field_validator("description")
    @classmethod
    def check_description(cls, v: Optional[str]) -> Optional[str]:
        return _clean_description(v) if v is not None else None

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _to_naive_utc(v)

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        if data.get("status") is not None:
            data["status"] = ProjectStatus(data["status"]).value
        return data


class ProjectResponse(BaseModel):
    id: int
    name: str
    description: str
    status: str
    start_date: str
    end_date: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
