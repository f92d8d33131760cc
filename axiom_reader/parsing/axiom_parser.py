"""Parsing of the structured axiom extraction returned by the model.

The model is asked for bare JSON but sometimes wraps it in a markdown
code fence anyway, so the raw text is normalized before validation.
"""

import logging
import re

from pydantic import BaseModel, TypeAdapter, ValidationError

from axiom_reader.errors import MalformedResponse
from axiom_reader.models.schemas import AXIOM_COUNT, Axiom

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```[\w-]*[ \t]*\r?\n?(.*?)\r?\n?```$", re.DOTALL)

_axiom_list = TypeAdapter(list[Axiom])


class AxiomBatch(BaseModel):
    """Structured output schema requested from the model."""

    axioms: list[Axiom]


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence and trim whitespace.

    ```json\\n[...]\\n``` becomes [...]. Text without a fence is only
    trimmed.
    """
    cleaned = text.strip()
    match = _FENCE_RE.match(cleaned)
    if match:
        cleaned = match.group(1).strip()
    return cleaned


def parse_axioms(raw: str | BaseModel | list | dict | None) -> list[Axiom]:
    """Turn a model response into exactly AXIOM_COUNT axioms.

    Accepts a bare JSON array, an object with an "axioms" array, or an
    already-parsed AxiomBatch.

    Raises:
        MalformedResponse: If the payload is empty, invalid, or has the
            wrong number of entries.
    """
    if isinstance(raw, AxiomBatch):
        axioms = list(raw.axioms)
    else:
        if isinstance(raw, BaseModel):
            raw = raw.model_dump()
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            raise MalformedResponse("Model returned an empty response")

        try:
            if isinstance(raw, str):
                axioms = _validate_json(strip_code_fences(raw))
            else:
                axioms = _validate_python(raw)
        except ValidationError as e:
            logger.warning(f"Axiom extraction did not match schema: {e}")
            raise MalformedResponse(
                "Failed to deconstruct the intellectual framework of the file."
            ) from e

    if len(axioms) != AXIOM_COUNT:
        raise MalformedResponse(f"Expected {AXIOM_COUNT} axioms, got {len(axioms)}")

    return axioms


def _validate_json(text: str) -> list[Axiom]:
    try:
        return _axiom_list.validate_json(text)
    except ValidationError:
        return AxiomBatch.model_validate_json(text).axioms


def _validate_python(data: list | dict) -> list[Axiom]:
    if isinstance(data, dict):
        return AxiomBatch.model_validate(data).axioms
    return _axiom_list.validate_python(data)
