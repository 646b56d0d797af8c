from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

# Departments of the construction company; new hires must belong to one of them
DEPARTMENTS = (
    "Operations",
    "Engineering & Design",
    "Safety & Compliance",
    "Equipment Management",
    "Procurement",
)


class Employee(BaseModel):
    """Roster entry as consumed by the payroll engine.

    Salary is not constrained here: a negative salary is reported by the
    engine as a per-employee validation error instead of failing the run.
    """
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    name: str
    role: str
    department: str
    salary: float
    email: Optional[str] = None


class EmployeeCreate(BaseModel):
    id: Optional[str] = Field(None, min_length=1, max_length=36)
    name: str = Field(..., min_length=1, max_length=120)
    role: str = Field(..., min_length=1, max_length=120)
    department: str
    salary: float = Field(..., ge=0, allow_inf_nan=False)
    email: Optional[str] = None

    @field_validator("department")
    @classmethod
    def department_must_exist(cls, value: str) -> str:
        if value not in DEPARTMENTS:
            raise ValueError(f"Unknown department '{value}'")
        return value
