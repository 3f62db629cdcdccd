"""Lenient decoding of backend responses into wire models."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from packit.shared.exceptions import DataShapeError

_logger = logging.getLogger("packit.backend")

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_strict(model: type[ModelT], payload: Any, call: str) -> ModelT:
    if not isinstance(payload, dict):
        raise DataShapeError(call, f"expected a JSON object, got {type(payload).__name__}")
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise DataShapeError(call, f"{e.error_count()} invalid field(s)") from None


def decode_response(model: type[ModelT], payload: Any, call: str) -> ModelT:
    """Decode ``payload``, falling back to the model's empty defaults on shape errors."""
    try:
        return decode_strict(model, payload, call)
    except DataShapeError as e:
        _logger.warning("absorbed malformed response: %s", e)
        return model()


__all__ = ["decode_response", "decode_strict"]
