from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from database.models import NAME_MAX_LENGTH


# ============ Department ============

class DepartmentCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    parent_id: StrictInt | None = Field(default=None)  # true/1.0 не превращаются в id

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        # обрезаем до проверки длины, пробелы по краям не считаются
        return v.strip() if isinstance(v, str) else v


class DepartmentUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    parent_id: StrictInt | None = Field(default=None)

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class DepartmentResponse(BaseModel):
    id: int
    name: str
    parent_id: int | None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class DepartmentTreeResponse(BaseModel):
    """Узел дерева; employees/children не выставляются, если пусты (и пропадают из JSON)."""

    id: int
    name: str
    parent_id: int | None
    created_at: datetime | None = None
    employees: list['EmployeeResponse'] = []
    children: list['DepartmentTreeResponse'] = []


# ============ Employee ============

class EmployeeCreateRequest(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    position: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    hired_at: date | None = Field(default=None)

    @field_validator('full_name', 'position', mode='before')
    @classmethod
    def strip_fields(cls, v):
        return v.strip() if isinstance(v, str) else v


class EmployeeResponse(BaseModel):
    id: int
    department_id: int
    full_name: str
    position: str
    hired_at: date | None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


DepartmentTreeResponse.model_rebuild()


class ErrorResponse(BaseModel):
    error: str
