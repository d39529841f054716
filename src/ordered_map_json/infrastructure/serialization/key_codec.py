"""
Key codec: map keys <-> JSON object-key strings.

JSON object keys are always strings, so non-string keys are marshaled to their
JSON value text and wrapped in quotes on encode (``7`` -> ``"7"``), and the
quoted text is parsed back into the declared primitive type on decode.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from ordered_map_json.domain.exceptions import (
    KeyTypeMismatchError,
    UnsupportedKeyTypeError,
    UnsupportedKeyValueError,
)
from ordered_map_json.domain.models.key_kind import KeyKind, KeySpec, classify_key
from ordered_map_json.infrastructure.serialization.json_utils import json_dumps, json_loads

logger = logging.getLogger(__name__)

NULL_KEY = "null"
_QUOTED_NULL_KEY = b'"null"'
_QUOTE = b'"'


def encode_key(key: Any) -> bytes:
    """
    Marshal a runtime key into a JSON object-key fragment.

    - str: marshaled as-is (already a quoted JSON string)
    - None: the absent optional key, forced to the quoted literal ``"null"``
      because a bare ``null`` is not a legal object key
    - bool/int/float: marshaled, then wrapped in quotes

    Raises:
        UnsupportedKeyTypeError: key is none of the supported shapes
        UnsupportedKeyValueError: float key is NaN or infinite
    """
    kind = classify_key(key)
    if kind is KeyKind.UNSUPPORTED:
        raise UnsupportedKeyTypeError(type(key))
    if key is None:
        return _QUOTED_NULL_KEY
    if not kind.is_quoted:
        return json_dumps(key)

    # orjson writes non-finite floats as null, which would not round-trip.
    if type(key) is float and not math.isfinite(key):
        raise UnsupportedKeyValueError(key)
    return _QUOTE + json_dumps(key) + _QUOTE


def _parse_scalar(token: str, spec: KeySpec) -> Any:
    # orjson.JSONDecodeError propagates unchanged on malformed text.
    parsed = json_loads(token)
    parsed_type = type(parsed)

    if parsed_type is spec.base:
        return parsed
    if spec.base is float and parsed_type is int:
        return float(parsed)
    raise KeyTypeMismatchError(token, spec.annotation)


def decode_key(token: str, spec: KeySpec) -> Any:
    """
    Turn an (already unquoted) object-key token back into a key of ``spec``.

    Args:
        token: object-key string as delivered by the tokenizer
        spec: classified target key type

    Raises:
        UnsupportedKeyTypeError: spec is dynamic (``Any``) or unsupported
        KeyTypeMismatchError: token is valid JSON of the wrong primitive type
        orjson.JSONDecodeError: token is not valid JSON for a scalar key
    """
    kind = spec.kind
    if kind is KeyKind.STRING:
        return token
    if kind is KeyKind.OPTIONAL_STRING:
        if token == NULL_KEY:
            logger.debug("Object key 'null' decoded as absent optional string key")
            return None
        return token
    if kind is KeyKind.SCALAR:
        return _parse_scalar(token, spec)
    if kind is KeyKind.OPTIONAL_SCALAR:
        if token == NULL_KEY:
            logger.debug("Object key 'null' decoded as absent optional %s key", spec.base.__name__)
            return None
        return _parse_scalar(token, spec)

    raise UnsupportedKeyTypeError(None if spec.is_dynamic else spec.annotation)


__all__ = ["encode_key", "decode_key", "NULL_KEY"]
