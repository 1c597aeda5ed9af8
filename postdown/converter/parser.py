"""Decode JSON input into the typed document tree."""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from postdown.converter.models import DECODE_CONTEXT, DecodeError, Document

logger = logging.getLogger(__name__)


def parse(data: bytes | str) -> Document:
    """Decode a JSON buffer into a Document.

    Only structural mismatches fail (invalid JSON, a non-object root, a field
    of the wrong JSON kind). Unknown node types and missing attrs are left
    for the renderer to resolve.
    """
    try:
        raw = json.loads(data)
    except ValueError as e:
        logger.debug("Input is not valid JSON: %s", e)
        raise DecodeError(f"invalid JSON: {e}", e) from e
    except RecursionError as e:
        raise DecodeError("document is nested too deeply", e) from e

    if not isinstance(raw, dict):
        raise DecodeError(f"expected a JSON object at the root, got {type(raw).__name__}")

    try:
        return Document.model_validate(raw, context=DECODE_CONTEXT)
    except ValidationError as e:
        logger.debug("Document failed validation with %d error(s)", e.error_count())
        raise DecodeError(f"malformed document: {e}", e) from e
    except RecursionError as e:
        raise DecodeError("document is nested too deeply", e) from e
