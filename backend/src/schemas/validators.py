"""
Shared validation functions for Pydantic schemas.

Used by the category, tag, language and bookmark schemas.
"""


def strip_required(value: str, field_name: str) -> str:
    """
    Trim a required text field.

    Raises:
        ValueError: If nothing is left after trimming.
    """
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"{field_name} is required")
    return stripped


def strip_optional(value: str | None) -> str | None:
    """Trim an optional text field, turning blank input into None."""
    if value is None:
        return None
    return value.strip() or None


def normalize_tag_name(name: str) -> str:
    """
    Normalize a tag name (trimmed, lowercase).

    Raises:
        ValueError: If the name is empty after trimming.
    """
    return strip_required(name, "Tag name").lower()
