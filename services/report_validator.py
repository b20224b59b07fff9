# services/report_validator.py

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.exceptions import (
    EmptyGenerationError,
    MalformedGenerationError,
    UnexpectedShapeError,
)
from models.analysis_models import AnalysisReport

logger = logging.getLogger(__name__)

# how much of a bad generator answer goes into the log line
RAW_LOG_LIMIT = 2000

ModelT = TypeVar("ModelT", bound=BaseModel)


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
    return f"{loc}: {err.get('msg', 'invalid')}"


def validate_shape(value: Any, model: Type[ModelT]) -> ModelT:
    """
    Accept `value` only if it matches `model` completely.
    Nothing is coerced or filled in; any mismatch raises UnexpectedShapeError.
    """
    if not isinstance(value, dict):
        raise UnexpectedShapeError(f"<root>: expected object, got {type(value).__name__}")
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise UnexpectedShapeError(_first_error(e)) from e


def validate_report(value: Any) -> AnalysisReport:
    """Check a decoded generator value against the AnalysisReport contract."""
    return validate_shape(value, AnalysisReport)


def parse_generator_output(
    text: Optional[str],
    model: Type[ModelT] = AnalysisReport,
    *,
    empty_message: Optional[str] = None,
    malformed_message: Optional[str] = None,
    shape_message: Optional[str] = None,
    log_tag: str = "report_validator",
) -> ModelT:
    """
    Raw generator text -> validated model.

    - no text            -> EmptyGenerationError
    - not JSON           -> MalformedGenerationError (raw text logged)
    - JSON, wrong shape  -> UnexpectedShapeError (raw text logged)
    """
    output = (text or "").strip()
    if not output:
        raise EmptyGenerationError(empty_message)

    try:
        data = json.loads(output)
    except ValueError as e:
        logger.error("[%s] AI returned invalid JSON: %s", log_tag, output[:RAW_LOG_LIMIT])
        raise MalformedGenerationError(malformed_message) from e

    try:
        return validate_shape(data, model)
    except UnexpectedShapeError as e:
        logger.error(
            "[%s] AI returned unexpected shape (%s): %s",
            log_tag,
            e.reason,
            output[:RAW_LOG_LIMIT],
        )
        if shape_message:
            raise UnexpectedShapeError(e.reason, shape_message) from e
        raise
