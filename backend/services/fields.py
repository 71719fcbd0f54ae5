"""
Type checks for request fields that passed the presence check.
"""
from typing import Any

from domain.errors import ValidationError


def require_text(**fields: Any) -> None:
    """Raise ValidationError for the first given field that is not None and not a string."""
    for name, value in fields.items():
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"Invalid value for field '{name}': Input should be a valid string.")
