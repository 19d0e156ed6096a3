from __future__ import annotations

import re
from typing import Any, Dict, Iterable, Optional
from flask import request

from ttdbazaar.app.common.errors import abort_json

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def get_json() -> Dict[str, Any]:
    if not request.is_json:
        abort_json(400, "invalid_json", "Request must be application/json")
    data = request.get_json(silent=True)
    if data is None or not isinstance(data, dict):
        abort_json(400, "invalid_json", "Malformed JSON body")
    return data


def require_fields(data: Dict[str, Any], fields: Iterable[str]) -> None:
    missing = [f for f in fields if data.get(f) in (None, "")]
    if missing:
        abort_json(400, "validation_error", "Missing required fields", {"missing": missing})


def query_int(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        abort_json(400, "validation_error", f"{name} must be an integer", {"field": name})


def min_length(data: Dict[str, Any], field: str, length: int) -> str:
    value = str(data.get(field) or "").strip()
    if len(value) < length:
        abort_json(
            400,
            "validation_error",
            f"{field} must be at least {length} characters",
            {"field": field},
        )
    return value


def optional_str(data: Dict[str, Any], field: str) -> Optional[str]:
    value = str(data.get(field) or "").strip()
    return value or None


def optional_number(
    data: Dict[str, Any],
    field: str,
    lo: float | None = None,
    hi: float | None = None,
    cast=int,
) -> Any:
    raw = data.get(field)
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool) or (cast is int and isinstance(raw, float) and not raw.is_integer()):
        abort_json(400, "validation_error", f"{field} must be a whole number", {"field": field})
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        abort_json(400, "validation_error", f"{field} must be a number", {"field": field})
    if lo is not None and value < lo:
        abort_json(400, "validation_error", f"{field} must be at least {lo}", {"field": field, "min": lo})
    if hi is not None and value > hi:
        abort_json(400, "validation_error", f"{field} must be at most {hi}", {"field": field, "max": hi})
    return value


def valid_email(data: Dict[str, Any], field: str = "email") -> str:
    value = str(data.get(field) or "").strip().lower()
    if not EMAIL_RE.match(value):
        abort_json(400, "validation_error", "Please enter a valid email", {"field": field})
    return value


TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off"}


def optional_bool(data: Dict[str, Any], field: str, default: bool = False) -> bool:
    """JSON booleans, 0/1, or the usual true/false words; anything else is a 400."""
    raw = data.get(field)
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if isinstance(raw, (int, str)) and text in TRUE_VALUES:
        return True
    if isinstance(raw, (int, str)) and text in FALSE_VALUES:
        return False
    abort_json(400, "validation_error", f"{field} must be true or false", {"field": field})
