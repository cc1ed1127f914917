"""Input Validators: slug format and JSON syntax checks.

Invariants:
    - Both functions are pure and never raise
    - validate_slug does no normalization (no strip, no lowercasing)
    - parse_json returns INVALID_JSON on malformed input, never an exception

Design Decisions:
    - Sentinel over exception for JSON failures: handlers stay check-then-branch,
      and the sentinel is distinct from every parsed value including None, False, 0
    - NaN/Infinity tokens and float literals that overflow to inf (1e400) rejected:
      strict JSON cannot render them, so every later read would fail
"""

import json
import math
import re
from enum import Enum
from typing import Any

_SLUG_PATTERN = re.compile(r"[a-z0-9-]+")


class _Invalid(Enum):
    INVALID_JSON = "INVALID_JSON"

    def __repr__(self) -> str:
        return "INVALID_JSON"


INVALID_JSON = _Invalid.INVALID_JSON


def validate_slug(slug: object) -> bool:
    """True iff slug is a non-empty string of [a-z0-9-] characters."""
    if not isinstance(slug, str):
        return False
    return _SLUG_PATTERN.fullmatch(slug) is not None


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-standard JSON token: {token}")


def _finite_float(token: str) -> float:
    value = float(token)
    if math.isinf(value):
        raise ValueError(f"number out of range: {token}")
    return value


def parse_json(text: object) -> Any:
    """Parse text as JSON. Returns INVALID_JSON instead of raising.

    Nesting deep enough to trip the interpreter's recursion guard (from about
    a thousand levels, depending on the Python version) is reported as INVALID_JSON.
    """
    if not isinstance(text, str):
        return INVALID_JSON
    try:
        return json.loads(
            text, parse_constant=_reject_constant, parse_float=_finite_float,
        )
    except (ValueError, RecursionError):
        return INVALID_JSON
