from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from pydantic import BaseModel, ValidationError

from ..domain.exceptions import AikidoError, ApiResponseError
from ..domain.models import ToolFailure, ToolOutcome, ToolSuccess


M = TypeVar("M", bound=BaseModel)


def capture_outcome(fn: Callable[..., Any]) -> Callable[..., ToolOutcome]:
    """Turn a handler's return value or domain error into an outcome variant.

    Only ``AikidoError`` is converted; anything else is a bug and propagates.
    """

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> ToolOutcome:
        try:
            return ToolSuccess(fn(*args, **kwargs))
        except AikidoError as e:
            return ToolFailure.from_error(e)

    return wrapper


def parse_record(model: type[M], payload: Any, endpoint: str) -> M:
    """Validate one response object against ``model``.

    Raises:
        ApiResponseError: If the payload does not fit the model
    """
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise ApiResponseError(endpoint, f"{e.error_count()} validation error(s) for {model.__name__}") from e


def parse_records(model: type[M], payload: list[Any], endpoint: str) -> list[M]:
    return [parse_record(model, item, endpoint) for item in payload]
