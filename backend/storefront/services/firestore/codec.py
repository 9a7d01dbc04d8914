"""Typed-field document codec for the Firestore REST API.

Firestore's REST surface wraps every field value in a type tag::

    {"name": ".../documents/products/abc",
     "fields": {"name": {"stringValue": "Mirror"},
                "stock": {"integerValue": "3"},
                "tags": {"arrayValue": {"values": [{"stringValue": "bath"}]}}}}

``encode`` turns a flat record into that shape and ``decode`` turns it back.
"""
import logging
from typing import Any, Mapping

from storefront.core.exceptions import DecodeMismatch

logger = logging.getLogger(__name__)


def encode_value(value: Any) -> dict[str, Any] | None:
    """Encode one scalar. Returns None for unsupported types."""
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    return None


def _encode_array_element(value: Any) -> dict[str, Any]:
    if value is None:
        return {"nullValue": None}
    encoded = encode_value(value)
    if encoded is None:
        return {"stringValue": str(value)}
    return encoded


def encode(record: Mapping[str, Any]) -> dict[str, Any]:
    """
    Convert a flat record into a typed-field document body.

    None values are omitted entirely. Lists and tuples become arrays of
    scalars; non-scalar array elements are stringified. Values of any other
    type (dicts, datetimes, ...) are skipped.
    """
    fields: dict[str, Any] = {}
    for key, value in record.items():
        if value is None:
            continue

        if isinstance(value, (list, tuple)):
            fields[key] = {
                "arrayValue": {"values": [_encode_array_element(v) for v in value]}
            }
            continue

        encoded = encode_value(value)
        if encoded is None:
            logger.debug(f"Skipping field {key!r}: unsupported type {type(value).__name__}")
            continue
        fields[key] = encoded

    return {"fields": fields}


_MISSING = object()


def _expect(field: Mapping[str, Any], tag: str, kind: type, key: str) -> Any:
    value = field[tag]
    if not isinstance(value, kind):
        raise DecodeMismatch(
            f"Field {key!r} has invalid {tag}: expected {kind.__name__}, got {value!r}"
        )
    return value


def decode_value(field: Any, key: str = "") -> Any:
    """
    Decode one typed value.

    Returns ``_MISSING`` for values that carry no data for the record
    (``nullValue``) or whose type tag is not understood.
    """
    if not isinstance(field, Mapping):
        raise DecodeMismatch(f"Field {key!r} is not a typed value: {field!r}")

    if "stringValue" in field:
        return _expect(field, "stringValue", str, key)
    if "integerValue" in field:
        try:
            return int(field["integerValue"])
        except (TypeError, ValueError) as e:
            raise DecodeMismatch(f"Field {key!r} has invalid integerValue: {e}") from e
    if "doubleValue" in field:
        try:
            return float(field["doubleValue"])
        except (TypeError, ValueError) as e:
            raise DecodeMismatch(f"Field {key!r} has invalid doubleValue: {e}") from e
    if "booleanValue" in field:
        return _expect(field, "booleanValue", bool, key)
    if "timestampValue" in field:
        return _expect(field, "timestampValue", str, key)
    if "arrayValue" in field:
        array = field["arrayValue"] or {}
        if not isinstance(array, Mapping):
            raise DecodeMismatch(f"Field {key!r} has invalid arrayValue")
        values = []
        for element in array.get("values", []):
            # nullValue keeps its slot; unknown tags are dropped
            if isinstance(element, Mapping) and "nullValue" in element:
                values.append(None)
                continue
            decoded = decode_value(element, key)
            if decoded is not _MISSING:
                values.append(decoded)
        return values
    if "nullValue" in field:
        return _MISSING

    logger.debug(f"Skipping field {key!r}: unknown type tag {list(field)}")
    return _MISSING


def document_id(name: str | None) -> str | None:
    """Last path segment of a document resource name."""
    if not name:
        return None
    return name.rsplit("/", 1)[-1]


def decode(document: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """
    Convert a typed-field document into a flat record.

    Returns None when the document is missing or has no ``fields`` key. An
    empty ``fields`` object yields a record holding only the ``id``, which is
    taken from the document name.

    Raises:
        DecodeMismatch: if the document or one of its fields is malformed
    """
    if not document:
        return None
    if not isinstance(document, Mapping):
        raise DecodeMismatch(f"Document is not an object: {document!r}")

    fields = document.get("fields")
    if fields is None:
        return None
    if not isinstance(fields, Mapping):
        raise DecodeMismatch("Document 'fields' is not an object")

    record: dict[str, Any] = {"id": document_id(document.get("name"))}
    for key, field in fields.items():
        value = decode_value(field, key)
        if value is not _MISSING:
            record[key] = value
    return record
