"""
Lenient field types for records parsed from LLM output.

Models return lists as comma-separated strings and numbers where text is
expected often enough that strict pydantic types would reject usable
responses.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator


def as_str_list(value: Any) -> list[str]:
    """Coerce None, a string or a sequence into a list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        items: list[Any] = value.split(',')
    elif isinstance(value, (list, tuple, set)):
        items = list(value)
    else:
        items = [value]
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


def as_optional_text(value: Any) -> str | None:
    """Coerce scalars to stripped text; empty and null-like values become None."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        value = ', '.join(str(v) for v in value if v is not None)
    text = str(value).strip()
    if text.lower() in ('', 'null', 'none', 'n/a', 'unknown'):
        return None
    return text


StrList = Annotated[list[str], BeforeValidator(as_str_list)]
OptionalText = Annotated[str | None, BeforeValidator(as_optional_text)]
