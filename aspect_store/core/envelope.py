"""
Audited aspect envelopes: the JSON stored in each aspect column of the new schema table.

Two extraction paths read the same text. extract_aspect_json_string pulls out only
the inner "aspect" payload; parse_audited_aspect decodes the whole envelope for its
provenance fields.
"""

import json
from typing import Optional

from pydantic import ValidationError

from ..util.logging import logger
from .aspects import AuditedAspect


class MalformedEnvelopeError(RuntimeError):
    """Stored envelope text is not valid under the expected JSON shape."""
    pass


def _parse_json_object(audited_aspect: str) -> dict:
    try:
        data = json.loads(audited_aspect)
    except (TypeError, ValueError) as e:
        logger.log_envelope_failure(audited_aspect, e)
        raise MalformedEnvelopeError(f"Failed to parse string {audited_aspect} as AuditedAspect") from e

    if not isinstance(data, dict):
        error = TypeError(f"expected a JSON object, got {type(data).__name__}")
        logger.log_envelope_failure(audited_aspect, error)
        raise MalformedEnvelopeError(f"Failed to parse string {audited_aspect} as AuditedAspect") from error
    return data


def extract_aspect_json_string(audited_aspect: str) -> Optional[str]:
    """
    Extract the aspect JSON string from an AuditedAspect string in its DB format.

    Returns None when the envelope carries no "aspect" key (or a null one).
    String payloads are returned as-is; structured payloads as compact JSON.
    """
    data = _parse_json_object(audited_aspect)
    if "aspect" not in data or data["aspect"] is None:
        return None

    value = data["aspect"]
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


def parse_audited_aspect(audited_aspect: str) -> AuditedAspect:
    """Decode the full envelope, provenance included."""
    data = _parse_json_object(audited_aspect)
    try:
        return AuditedAspect.model_validate(data)
    except ValidationError as e:
        logger.log_envelope_failure(audited_aspect, e)
        raise MalformedEnvelopeError(f"Failed to parse string {audited_aspect} as AuditedAspect") from e


def build_envelope(aspect_json: str, canonical_name: str, actor: str, modified_on,
                   created_for: Optional[str] = None) -> str:
    """Serialize an aspect payload with its provenance into envelope text."""
    envelope = AuditedAspect(
        aspect=json.loads(aspect_json),
        canonical_name=canonical_name,
        last_modified_on=modified_on,
        last_modified_by=actor,
        created_for=created_for,
    )
    return envelope.model_dump_json(by_alias=True, exclude_none=True)
