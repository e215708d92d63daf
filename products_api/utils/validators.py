"""
Declarative request validation chains.

A chain targets one field of the request (``body("price")`` or
``param("id")``) and holds an ordered list of checks. Every check of every
chain is evaluated, so a request gets back all of its problems at once
instead of only the first one.

Checks look at the value the way form validators do: as a string. Missing
values and ``null`` become ``""``, booleans become ``"true"``/``"false"``
and integral numbers lose their trailing ``.0``.
"""
import json
import math
import re
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from fastapi import Request

from products_api.exceptions import MalformedBodyError, RequestValidationFailed

NUMERIC_RE = re.compile(r"[+-]?([0-9]*[.])?[0-9]+")
INT_RE = re.compile(r"[-+]?(0|[1-9][0-9]*)")
BOOLEAN_VALUES = {"true", "false", "1", "0"}

BODY = "body"
PARAMS = "params"

_MISSING = object()


def to_validator_string(value: Any) -> str:
    """String form of a request value as seen by the checks"""
    if value is None or value is _MISSING:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float, str)):
        return str(value)
    return json.dumps(value)


def to_number(value: Any) -> Optional[float]:
    """Finite numeric reading of a request value, None when it has none"""
    if not isinstance(value, (bool, int, float, str)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def to_boolean(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1")
    return bool(value)


def is_positive(value: Any) -> bool:
    number = to_number(value)
    return number is not None and number > 0


class ValidationChain:
    """Ordered checks for a single request field"""

    def __init__(self, field: str, location: str):
        self.field = field
        self.location = location
        self._checks: List[Tuple[Callable[[Any], bool], str]] = []

    def not_empty(self, message: str) -> "ValidationChain":
        self._checks.append((lambda v: len(to_validator_string(v)) > 0, message))
        return self

    def is_numeric(self, message: str) -> "ValidationChain":
        self._checks.append((lambda v: bool(NUMERIC_RE.fullmatch(to_validator_string(v))), message))
        return self

    def is_int(self, message: str) -> "ValidationChain":
        self._checks.append((lambda v: bool(INT_RE.fullmatch(to_validator_string(v))), message))
        return self

    def is_boolean(self, message: str) -> "ValidationChain":
        self._checks.append((lambda v: to_validator_string(v) in BOOLEAN_VALUES, message))
        return self

    def custom(self, predicate: Callable[[Any], bool], message: str) -> "ValidationChain":
        """Add a check on the raw (unconverted) value"""
        def check(value: Any) -> bool:
            return bool(predicate(None if value is _MISSING else value))

        self._checks.append((check, message))
        return self

    def run(self, source: Dict[str, Any]) -> List[Dict[str, Any]]:
        value = source.get(self.field, _MISSING)
        errors = []
        for check, message in self._checks:
            if check(value):
                continue
            error = {
                "type": "field",
                "msg": message,
                "path": self.field,
                "location": self.location,
            }
            if value is not _MISSING:
                error["value"] = value
            errors.append(error)
        return errors


def body(field: str) -> ValidationChain:
    return ValidationChain(field, BODY)


def param(field: str) -> ValidationChain:
    return ValidationChain(field, PARAMS)


def run_chains(
    chains: Sequence[ValidationChain],
    params: Dict[str, Any],
    payload: Dict[str, Any],
) -> List[Dict[str, Any]]:
    """Evaluate every chain in order and collect all failures"""
    errors: List[Dict[str, Any]] = []
    for chain in chains:
        source = params if chain.location == PARAMS else payload
        errors.extend(chain.run(source))
    return errors


async def read_json_body(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object.

    Bodies that are empty, not declared as JSON, or not a JSON object read as
    an empty object; a JSON body that does not parse is rejected.
    """
    content_type = request.headers.get("content-type", "")
    if "json" not in content_type.lower():
        return {}

    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        payload = json.loads(raw)
    except ValueError:
        raise MalformedBodyError()

    return payload if isinstance(payload, dict) else {}


def validate(*chains: ValidationChain) -> Callable:
    """
    Build a FastAPI dependency running ``chains`` against the request.

    The dependency raises RequestValidationFailed with every collected error
    before the route handler is called, and returns the parsed body otherwise.
    The body is only read when some chain targets it.
    """
    reads_body = any(chain.location == BODY for chain in chains)

    async def dependency(request: Request) -> Dict[str, Any]:
        payload = await read_json_body(request) if reads_body else {}
        errors = run_chains(chains, dict(request.path_params), payload)
        if errors:
            raise RequestValidationFailed(errors)
        return payload

    return dependency
