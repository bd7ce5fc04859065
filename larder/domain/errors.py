"""Domain error taxonomy and the argument guards shared by the domain entities."""
import math
from datetime import date, datetime
from typing import Any


class LarderError(Exception):
    """Base class for every error raised by the inventory and recipe core."""


class InvalidArgumentError(LarderError, ValueError):
    """A required value is missing, blank, or outside its allowed range."""


class NotFoundError(LarderError, LookupError):
    """A lookup by name or key found no matching entry."""


class AlreadyExistsError(LarderError):
    """An insertion would duplicate an existing key."""


def require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{field} cannot be None or blank")
    return value


def is_number(value: Any) -> bool:
    '''True for finite ints and floats. Booleans, NaN and infinities are not amounts.'''
    return not isinstance(value, bool) and isinstance(value, (int, float)) and math.isfinite(value)


def require_positive(value: Any, field: str) -> float:
    if not (is_number(value) and value > 0):
        raise InvalidArgumentError(f"{field} must be a positive number")
    return value


def require_date(value: Any, field: str) -> date:
    # datetime is a date subclass; comparisons between the two raise TypeError
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, date):
        raise InvalidArgumentError(f"{field} must be a date")
    return value


def require_present(value: Any, field: str) -> Any:
    if value is None:
        raise InvalidArgumentError(f"{field} cannot be None")
    return value
