"""
Validating parse of loosely-typed JSON into a tagged document union.

Each shape has its own parse function returning either the parsed document
or an InvalidDocument that says why the shape did not fit. classify() takes
the first shape whose parse succeeds (goals, then ratings).
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from core.review.errors import SchemaMismatch
from core.review.models import Document, GoalsDocument, InvalidDocument, RatingsDocument


logger = logging.getLogger(__name__)


def _describe(exc: ValueError) -> str:
    if not isinstance(exc, ValidationError):
        return str(exc)
    errors = exc.errors()
    if not errors:
        return str(exc)
    err = errors[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))


def parse_goals(payload: Any, source: Optional[str] = None) -> Union[GoalsDocument, InvalidDocument]:
    if not isinstance(payload, list):
        return InvalidDocument(source=source, reason="goals: document must be a JSON array")
    # pydantic's ValidationError is a ValueError
    try:
        return GoalsDocument(goals=payload, source=source)
    except ValueError as e:
        return InvalidDocument(source=source, reason=f"goals: {_describe(e)}")


def parse_ratings(payload: Any, source: Optional[str] = None) -> Union[RatingsDocument, InvalidDocument]:
    if not isinstance(payload, dict):
        return InvalidDocument(source=source, reason="ratings: document must be a JSON object")
    try:
        doc = RatingsDocument.model_validate(payload)
    except ValueError as e:
        return InvalidDocument(source=source, reason=f"ratings: {_describe(e)}")
    return doc.model_copy(update={"source": source})


def parse_document(payload: Any, source: Optional[str] = None) -> Union[GoalsDocument, RatingsDocument]:
    """Raises SchemaMismatch when no shape fits."""
    reasons: List[str] = []
    for parse in (parse_goals, parse_ratings):
        doc = parse(payload, source)
        if not isinstance(doc, InvalidDocument):
            return doc
        reasons.append(doc.reason)
    raise SchemaMismatch("; ".join(reasons), source=source)


def classify(payload: Any, source: Optional[str] = None) -> Document:
    try:
        return parse_document(payload, source)
    except SchemaMismatch as e:
        logger.debug("%s: matches no document shape (%s)", source or "<payload>", e.reason)
        return InvalidDocument(source=source, reason=e.reason)
