"""
Validation and error mapper.

Every error body this API returns goes through `error_payload`:
field validation failures become a `{"<field>": "<message>"}` map keyed
by the lower-camel-case field name, anything else becomes
`{"error": "<message>"}`.

Pydantic validation errors are first translated into the tagged
`ValidationFailure` / `GenericError` variants so that the message
templates do not depend on pydantic's error wording.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Union

from pydantic import ValidationError
from pydantic.alias_generators import to_camel


class ConstraintKind(str, Enum):
    """Constraint a field violated."""

    REQUIRED = "required"
    MIN_LENGTH = "min"
    MAX_LENGTH = "max"
    EXACT_LENGTH = "len"
    EMAIL = "email"
    ONE_OF = "oneof"
    EQUAL_FIELD = "eqfield"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FieldViolation:
    """One field failing one constraint.

    Attributes:
        field: Field name as declared on the model (snake_case).
        kind: The violated constraint.
        param: Constraint parameter (length bound, allowed values), if any.
    """

    field: str
    kind: ConstraintKind
    param: str = ""


@dataclass(frozen=True)
class ValidationFailure:
    """One or more field violations found while validating input."""

    violations: tuple[FieldViolation, ...]


@dataclass(frozen=True)
class GenericError:
    """An error not tied to a particular field."""

    message: str


AppError = Union[ValidationFailure, GenericError]

_PYDANTIC_KINDS: dict[str, ConstraintKind] = {
    "missing": ConstraintKind.REQUIRED,
    "required": ConstraintKind.REQUIRED,
    "string_too_short": ConstraintKind.MIN_LENGTH,
    "too_short": ConstraintKind.MIN_LENGTH,
    "string_too_long": ConstraintKind.MAX_LENGTH,
    "too_long": ConstraintKind.MAX_LENGTH,
    "exact_length": ConstraintKind.EXACT_LENGTH,
    "email": ConstraintKind.EMAIL,
    "literal_error": ConstraintKind.ONE_OF,
    "enum": ConstraintKind.ONE_OF,
    "eqfield": ConstraintKind.EQUAL_FIELD,
}

_PARAM_KEYS = ("min_length", "max_length", "length", "expected")


def to_lower_camel(name: str) -> str:
    """Return `name` in lowerCamelCase (`first_name` -> `firstName`)."""
    return to_camel(name)


def violation_message(violation: FieldViolation) -> str:
    """Render the human-readable message for a single violation."""
    field = to_lower_camel(violation.field)
    kind = violation.kind
    if kind is ConstraintKind.REQUIRED:
        return f"{field} is required"
    if kind is ConstraintKind.MAX_LENGTH:
        return f"{field} cannot be longer than {violation.param}"
    if kind is ConstraintKind.MIN_LENGTH:
        return f"{field} must be longer than {violation.param}"
    if kind is ConstraintKind.EMAIL:
        return "invalid email format"
    if kind is ConstraintKind.EXACT_LENGTH:
        return f"{field} must be {violation.param} characters long"
    if kind is ConstraintKind.ONE_OF:
        return f"{field} must be {violation.param}"
    return f"{field} is not valid"


def error_payload(error: Union[AppError, Exception]) -> dict[str, str]:
    """Collapse an error into the JSON body sent to clients.

    Args:
        error: A ValidationFailure, a GenericError, or any exception
            (treated as a generic error carrying its string form).

    Returns:
        A field -> message mapping, or `{"error": message}`.
    """
    if isinstance(error, ValidationFailure):
        return {
            to_lower_camel(violation.field): violation_message(violation)
            for violation in error.violations
        }
    if isinstance(error, GenericError):
        return {"error": error.message}
    return {"error": str(error)}


def _is_null_field(error: Mapping[str, Any], loc: tuple) -> bool:
    # Only a top-level field; a null list item is still "not valid".
    return (
        len(loc) == 1
        and str(error.get("type", "")).endswith("_type")
        and "input" in error
        and error["input"] is None
    )


def failure_from_errors(errors: Iterable[Mapping[str, Any]]) -> AppError:
    """Translate pydantic-style error dicts into a tagged failure.

    An error without a field location (malformed JSON, a body that is not
    an object) makes the whole failure generic. A field sent as `null`
    counts as missing, so it is reported as required.

    Args:
        errors: Items shaped like `ValidationError.errors()`.
    """
    violations = []
    for error in errors:
        loc = tuple(error.get("loc", ()))
        field = next((part for part in loc if isinstance(part, str)), None)
        if field is None:
            return GenericError(str(error.get("msg", "invalid request")))

        ctx = error.get("ctx") or {}
        param = next((str(ctx[key]) for key in _PARAM_KEYS if key in ctx), "")
        kind = _PYDANTIC_KINDS.get(error.get("type", ""), ConstraintKind.UNKNOWN)
        if _is_null_field(error, loc):
            kind = ConstraintKind.REQUIRED
        violations.append(FieldViolation(field=field, kind=kind, param=param))

    if not violations:
        return GenericError("invalid request")
    return ValidationFailure(tuple(violations))


def failure_from_validation_error(exc: ValidationError) -> AppError:
    """Translate a pydantic ValidationError into a tagged failure."""
    return failure_from_errors(exc.errors())
