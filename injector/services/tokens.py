"""Helpers for reading claims out of JWT-style API keys."""

import base64
import json
import logging

logger = logging.getLogger(__name__)


def _decode_segment(segment: str) -> bytes:
    """Decode a base64 or base64url segment with optional padding."""
    normalised = segment.replace("-", "+").replace("_", "/")
    normalised += "=" * (-len(normalised) % 4)
    return base64.b64decode(normalised)


def extract_subject(token: str, fallback: str) -> str:
    """Return the ``sub`` claim of a JWT-style token.

    The payload is not verified; only its subject is read.

    Args:
        token (str): API key in ``header.payload.signature`` form
        fallback (str): User ID returned when no subject can be read

    Returns:
        str: Subject claim, or the fallback"""
    try:
        payload_segment = token.split(".")[1]
        payload = json.loads(_decode_segment(payload_segment).decode("utf-8"))
    except (IndexError, ValueError, RecursionError) as exc:
        logger.debug("Could not decode API key payload: %s", exc)
        return fallback

    subject = payload.get("sub") if isinstance(payload, dict) else None
    if not subject:
        return fallback
    return str(subject)
