"""Mapping of store and record-validation failures onto HTTP responses."""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from fastapi import HTTPException
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Turn a store failure into a 500 carrying the underlying message.

    ``action`` reads as a gerund phrase: "fetching assets".
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("store_failure", action=action, error=str(exc))
        raise HTTPException(status_code=500, detail=f"Error {action}: {exc}") from exc


@contextmanager
def record_errors() -> Iterator[None]:
    """Turn a record that fails model validation into a 422.

    Request bodies accept extra fields, so a body can pass request
    validation and still produce an invalid stored record.
    """
    try:
        yield
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False)
        logger.info("record_rejected", errors=len(errors))
        raise HTTPException(status_code=422, detail=jsonable_encoder(errors)) from exc
