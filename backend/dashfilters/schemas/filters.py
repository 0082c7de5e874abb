from pydantic import BaseModel, Field


class FilterOptionOut(BaseModel):
    value: str
    label: str


class FilterStateOut(BaseModel):
    key: str
    state: str
    value: str | None = None
    placeholder: str = ''
    options: list[FilterOptionOut] = Field(default_factory=list)


class FiltersOut(BaseModel):
    scope: str
    filters: list[FilterStateOut] = Field(default_factory=list)


class FilterValueIn(BaseModel):
    value: str = Field(min_length=1, max_length=32)


class FilterResetOut(BaseModel):
    scope: str
    removed: int = 0
