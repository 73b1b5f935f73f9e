"""
validation.py — Domain rules applied at the command boundary
Raw service calls do not run these checks.
"""

import re

from eventually.errors import ValidationError

MAX_TITLE_LENGTH = 500
MAX_CATEGORY_NAME_LENGTH = 100

_HEX_COLOR = re.compile(r"#[0-9A-Fa-f]{6}")


def validate_task_title(title: str) -> str:
    """Return the trimmed title or raise ValidationError."""
    trimmed = title.strip()
    if not trimmed:
        raise ValidationError("Title cannot be empty")
    if len(trimmed) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Title is too long (max {MAX_TITLE_LENGTH} characters)")
    return trimmed


def validate_category_name(name: str) -> str:
    trimmed = name.strip()
    if not trimmed:
        raise ValidationError("Category name cannot be empty")
    if len(trimmed) > MAX_CATEGORY_NAME_LENGTH:
        raise ValidationError(f"Category name is too long (max {MAX_CATEGORY_NAME_LENGTH} characters)")
    return trimmed


def validate_color_hex(color: str) -> str:
    if not _HEX_COLOR.fullmatch(color):
        raise ValidationError("Color must be a valid hex code (e.g., #FF5733)")
    return color


def sanitize_description(description: str | None) -> str | None:
    if description is None:
        return None
    return description.strip()
