"""
Raw Record Normalizer for Strapi payloads.

Strapi returns the same content in several envelopes depending on version
and query shape:
- v4 records: ``{"id": 1, "attributes": {...}}``
- v5 / flattened records: ``{"id": 1, "name": ..., ...}``
- relations: ``{"data": T}``, ``{"data": [T, ...]}``, bare ``T`` or ``[T, ...]``

The helpers here reduce any of those to plain mappings. Malformed input never
raises; it degrades to an empty list or ``None``.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


def unwrap(record: Any) -> Any:
    """
    Return the record's ``attributes`` mapping when present, else the record.

    The envelope ``id`` is carried into the unwrapped mapping when the
    attributes do not define one, so v4 records keep their identity.

    Args:
        record: Raw CMS record (any JSON value)

    Returns:
        The unwrapped mapping, or the input unchanged if it is not wrapped
    """
    if not isinstance(record, Mapping):
        return record

    attributes = record.get("attributes")
    if not isinstance(attributes, Mapping):
        return record

    if "id" in record and "id" not in attributes:
        return {"id": record["id"], **attributes}
    return attributes


def _relation_payload(relation: Any) -> Any:
    if isinstance(relation, Mapping) and "data" in relation:
        return relation["data"]
    return relation


def unwrap_relation(relation: Any) -> List[Dict[str, Any]]:
    """
    Normalize a relation field into a list of unwrapped records.

    Accepts ``{"data": T | [T]}`` or a bare ``T | [T]``. Anything falsy or
    malformed yields ``[]``; non-mapping items are dropped.

    Args:
        relation: Raw relation field value

    Returns:
        List of unwrapped record mappings
    """
    if not relation:
        return []

    payload = _relation_payload(relation)
    if isinstance(payload, Mapping):
        items = [payload]
    elif isinstance(payload, list):
        items = payload
    else:
        if payload is not None:
            logger.debug(f"Ignoring malformed relation of type {type(payload).__name__}")
        return []

    out = []
    for item in items:
        value = unwrap(item)
        if isinstance(value, Mapping) and value:
            out.append(value)
    return out


def unwrap_media(media: Any) -> List[Dict[str, Any]]:
    """Unwrap a media relation (single or multiple) into a list of media mappings."""
    return unwrap_relation(media)


def unwrap_single_media(media: Any) -> Optional[Dict[str, Any]]:
    """
    Return the single media mapping that carries a non-empty ``url``.

    For an array relation the first element is used.

    Args:
        media: Raw single-media relation (``video_poster``, ``cover``, ...)

    Returns:
        The media mapping, or None if absent or url-less
    """
    if not media:
        return None

    payload = _relation_payload(media)
    if isinstance(payload, list):
        payload = payload[0] if payload else None

    value = unwrap(payload)
    if isinstance(value, Mapping) and value.get("url"):
        return value
    return None


def get_text(record: Any, *keys: str) -> str:
    """
    Return the first non-empty value among ``keys`` as a string.

    Dotted keys read nested mappings (``"practice.description"``).
    """
    if not isinstance(record, Mapping):
        return ""

    for key in keys:
        value: Any = record
        for part in key.split("."):
            value = value.get(part) if isinstance(value, Mapping) else None
        if value is not None and value != "":
            return str(value)
    return ""
