"""Request body validation for Flask endpoints.

The @validate_request decorator parses the request body into the Pydantic
model named by the view's first non-path parameter:

    @auth_bp.post("/auth/register")
    @validate_request
    def register(data: RegisterRequest):
        ...

Path parameters (anything Flask passes in view_args) are handed through
unchanged. JSON bodies are preferred; HTML form bodies are accepted too.

Pydantic errors become a ValidationError (HTTP 400) whose message is the
first error's message and whose details list every error together with the
received body. Password fields in the echoed body are masked.
"""

import inspect
from functools import wraps

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

MASK = "********"


def _mask_secrets(data: dict) -> dict:
    return {
        key: MASK if "password" in str(key).lower() else value
        for key, value in data.items()
    }


def _read_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict() if request.form else {}
    if not isinstance(data, dict):
        raise ValidationError(
            "Request body must be a JSON object",
            {"received_type": type(data).__name__}
        )
    return data


def _format_errors(error: PydanticValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]) or "body",
            "message": err["msg"],
            "expected_type": err["type"],
        }
        for err in error.errors()
    ]


def validate_request(f):
    """
    Decorator validating the request body against a Pydantic model.

    Raises:
        TypeError: At decoration time if the view has no parameters or its
            first parameter is unannotated; at request time if the body
            parameter is not annotated with a BaseModel subclass
        ValidationError: If the body fails model validation
    """
    params = list(inspect.signature(f).parameters.values())
    if not params:
        raise TypeError(f"{f.__name__}() has no parameters to validate")
    if params[0].annotation is inspect.Parameter.empty:
        raise TypeError(
            f"First parameter '{params[0].name}' of {f.__name__}() lacks a type annotation"
        )

    @wraps(f)
    def wrapper(*args, **kwargs):
        view_args = request.view_args or {}
        body_param = next(
            (p for p in params if p.name not in view_args and p.name not in kwargs),
            None
        )
        if body_param is None:
            return f(*args, **kwargs)

        model = body_param.annotation
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            raise TypeError(
                f"Parameter '{body_param.name}' of {f.__name__}() must be annotated "
                f"with a Pydantic BaseModel subclass"
            )

        data = _read_body()
        try:
            kwargs[body_param.name] = model.model_validate(data)
        except PydanticValidationError as e:
            errors = _format_errors(e)
            raise ValidationError(
                errors[0]["message"],
                {
                    "model": model.__name__,
                    "errors": errors,
                    "received": _mask_secrets(data),
                }
            ) from e

        return f(*args, **kwargs)

    return wrapper
