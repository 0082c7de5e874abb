from typing import Any

from pydantic import BaseModel, Field


class NormalizeDatesIn(BaseModel):
    values: list[str | None] = Field(default_factory=list, max_length=10000)


class NormalizeDatesOut(BaseModel):
    values: list[str] = Field(default_factory=list)


class NormalizeRecordsIn(BaseModel):
    records: list[dict[str, Any]] = Field(default_factory=list, max_length=10000)
    fields: list[str] = Field(default_factory=list)


class NormalizeRecordsOut(BaseModel):
    records: list[dict[str, Any]] = Field(default_factory=list)
