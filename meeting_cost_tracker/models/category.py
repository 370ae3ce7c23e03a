"""
Salary Category Model

A salary category is a named pay tier (e.g. "Engineer", "Manager") with an
annual salary. Meetings are priced by counting attendees per category.

Categories are:
1. Validated at construction (non-empty title, positive finite salary)
2. Immutable once built
3. Copied by value into meetings, never shared

DESIGN DECISION: The cost rate is derived from a nominal 2,000-hour work
year rather than a calendar year. The divisor is a policy constant, pinned
here so every cost figure in the system uses the same one.
"""

import math
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from pydantic_core import PydanticCustomError


# 2000 work hours per year, 60 mins per hour, 60 secs per minute, 1000 ms per second.
MILLIS_PER_WORK_YEAR: float = 2000.0 * 60.0 * 60.0 * 1000.0


# =============================================================================
# VALIDATION ERRORS
# =============================================================================

class CategoryValidationError(ValueError):
    """Base exception for invalid category data."""
    pass


class EmptyTitleError(CategoryValidationError):
    """Title must not be empty."""
    
    def __init__(self, message: str = "Title must not be empty"):
        super().__init__(message)


class InvalidSalaryError(CategoryValidationError):
    """The salary must be greater than zero."""
    
    def __init__(self, message: str = "Salary must be greater than zero"):
        super().__init__(message)


class InvalidCountError(ValueError):
    """Attendee counts must be non-negative integers."""
    pass


# =============================================================================
# CATEGORY MODEL
# =============================================================================

class SalaryCategory(BaseModel):
    """
    An employee category with a yearly salary.
    
    Prefer SalaryCategory.create() from application code: it raises
    EmptyTitleError / InvalidSalaryError instead of pydantic's
    ValidationError, so callers can branch on the exact failure.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)
    
    title: str = Field(
        ...,
        description="Category title, unique within a category list"
    )
    annual_salary: float = Field(
        ...,
        description="Annual salary in dollars"
    )
    
    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Reject empty or whitespace-only titles."""
        if not v:
            raise PydanticCustomError("empty_title", "Title must not be empty")
        return v
    
    @field_validator('annual_salary', mode='before')
    @classmethod
    def validate_salary_type(cls, v: Any) -> Any:
        """Booleans are not salaries."""
        if isinstance(v, bool):
            raise PydanticCustomError(
                "invalid_salary", "Salary must be greater than zero"
            )
        return v
    
    @field_validator('annual_salary')
    @classmethod
    def validate_salary(cls, v: float) -> float:
        """Salary must be finite and strictly positive."""
        if not math.isfinite(v) or v <= 0:
            raise PydanticCustomError(
                "invalid_salary", "Salary must be greater than zero"
            )
        return v
    
    @classmethod
    def create(cls, title: str, annual_salary: float) -> "SalaryCategory":
        """
        Build a validated category.
        
        Args:
            title: Category title (surrounding whitespace is stripped)
            annual_salary: Annual salary in dollars
        
        Returns:
            A new SalaryCategory
        
        Raises:
            EmptyTitleError: If the title is empty or whitespace-only
            InvalidSalaryError: If the salary is not a positive finite number
        """
        try:
            return cls(title=title, annual_salary=annual_salary)
        except ValidationError as e:
            # Errors are reported in field order, so a bad title wins
            first = e.errors()[0]
            if first["loc"] and first["loc"][0] == "title":
                raise EmptyTitleError() from e
            raise InvalidSalaryError() from e
    
    @property
    def salary(self) -> float:
        """Annual salary in dollars."""
        return self.annual_salary
    
    def cost_per_millisecond(self) -> float:
        """Cost in dollars for each millisecond one attendee spends in a meeting."""
        return self.annual_salary / MILLIS_PER_WORK_YEAR


def validate_count(count: Any) -> int:
    """
    Validate an attendee count coming from outside the engine.
    
    Raises:
        InvalidCountError: If count is not a non-negative integer
    """
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidCountError(f"Attendee count must be an integer, got {count!r}")
    if count < 0:
        raise InvalidCountError(f"Attendee count cannot be negative: {count}")
    return count
