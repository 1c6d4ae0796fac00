"""
Parsing helpers for free-text LLM responses.

LLM output is parsed into a small sum type: ``Parsed(value)`` when a
usable record was found, ``Unparseable(reason, raw)`` otherwise. Callers
branch with isinstance and treat Unparseable as "insufficient data".
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

T = TypeVar('T')
M = TypeVar('M', bound=BaseModel)

_FENCE = re.compile(r'```(?:json)?', re.IGNORECASE)


@dataclass(frozen=True)
class Parsed(Generic[T]):
    """A successfully parsed value."""

    value: T


@dataclass(frozen=True)
class Unparseable:
    """No usable value could be obtained."""

    reason: str
    raw: str = ''


def parse_json_object(text: str | None) -> Parsed[dict[str, Any]] | Unparseable:
    """
    Locate and parse the JSON object in a model response.

    Code fences are stripped; the outermost ``{...}`` span is parsed.
    """
    if not text or not text.strip():
        return Unparseable(reason='empty_response')

    cleaned = _FENCE.sub('', text)
    start = cleaned.find('{')
    end = cleaned.rfind('}')
    if start == -1 or end <= start:
        return Unparseable(reason='no_json_object', raw=text)

    try:
        data = json.loads(cleaned[start:end + 1])
    except json.JSONDecodeError:
        return Unparseable(reason='invalid_json', raw=text)

    if not isinstance(data, dict):
        return Unparseable(reason='not_an_object', raw=text)
    return Parsed(data)


def parse_model(text: str | None, model: type[M]) -> Parsed[M] | Unparseable:
    """Parse a model response into a pydantic model."""
    outcome = parse_json_object(text)
    if isinstance(outcome, Unparseable):
        return outcome

    try:
        return Parsed(model.model_validate(outcome.value))
    except PydanticValidationError:
        return Unparseable(reason='schema_mismatch', raw=text or '')
