"""Shared helpers for turning raw payloads into validated pydantic models."""

from typing import Any, Iterable, Mapping, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from codecollab.domain.exceptions import FieldError, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

_VALUE_ERROR_PREFIX = "Value error, "


def field_errors_from_pydantic(errors: Iterable[Mapping[str, Any]]) -> list[FieldError]:
    """Convert pydantic error entries into ``{field, message}`` pairs.

    The field name is the dotted location of the failing value (aliases are
    used, so ``firstName`` rather than ``first_name``). Errors on the payload
    itself are reported under ``body``.
    """
    details: list[FieldError] = []
    for error in errors:
        field = ".".join(str(part) for part in error.get("loc", ())) or "body"
        message = error.get("msg", "Invalid value")
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX) :]
        details.append(FieldError(field=field, message=message))
    return details


def parse_input(model: type[ModelT], data: Any) -> ModelT:
    """Validate ``data`` against ``model``.

    Args:
        model: Pydantic model class describing the expected input.
        data: Untrusted payload (usually a decoded JSON body).

    Returns:
        The validated, normalized model instance.

    Raises:
        ValidationError: If any field fails validation.
    """
    if data is None:
        data = {}
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(field_errors_from_pydantic(e.errors())) from e
