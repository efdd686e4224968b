"""
cf-cache-utils - Validation Decorators

Applies Pydantic validation to action handlers and turns validation
failures into structured error responses.
"""

import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ValidationError

from ..errors import ErrorCode, make_error_response

logger = logging.getLogger(__name__)


def _describe_errors(error: ValidationError) -> list[dict[str, Any]]:
    validation_errors = []
    for item in error.errors():
        field_path = " -> ".join(str(loc) for loc in item["loc"])
        validation_errors.append(
            {
                "field": field_path,
                "message": item["msg"],
                "type": item["type"],
            }
        )
    return validation_errors


def validate_input(schema: type[BaseModel]) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator to validate a handler's inputs using a Pydantic schema.

    The call is bound to the handler's signature first, so schema fields may
    be passed by position or by keyword. Only the schema's fields are
    validated and replaced by their dumped values; every other argument
    passes through untouched.

    Example:
        >>> @validate_input(ClearCacheInput)
        ... def handle(principal, nonce: str, url: str | None = None):
        ...     pass

    Error Response:
        {
            "success": False,
            "error_code": "INVALID_INPUT",
            "message": "Input validation failed",
            "details": {
                "validation_errors": [
                    {"field": "url", "message": "Value error, ...", "type": "value_error"}
                ],
                "function": "handle"
            }
        }
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        signature = inspect.signature(func)
        fields = set(schema.model_fields)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            bound = signature.bind_partial(*args, **kwargs)
            inputs = {name: value for name, value in bound.arguments.items() if name in fields}

            try:
                validated = schema(**inputs)
            except ValidationError as e:
                validation_errors = _describe_errors(e)
                logger.warning(
                    f"Input validation failed for {func.__name__}",
                    extra={
                        "function": func.__name__,
                        "validation_errors": validation_errors,
                    },
                )
                return make_error_response(
                    error_code=ErrorCode.INVALID_INPUT,
                    message="Input validation failed",
                    context={
                        "validation_errors": validation_errors,
                        "function": func.__name__,
                    },
                )

            bound.arguments.update(validated.model_dump(exclude_unset=False))
            return func(*bound.args, **bound.kwargs)

        return wrapper

    return decorator
