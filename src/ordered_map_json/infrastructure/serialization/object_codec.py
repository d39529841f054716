"""
Ordered map <-> flat JSON object codec.

encode() writes the pairs as one compact JSON object in exactly the input
order. decode() walks a token stream over one flat JSON object and stores
each (key, value) pair into the target in the order encountered.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from ordered_map_json.domain.exceptions import JSONSyntaxError
from ordered_map_json.domain.models.codec_config import DEFAULT_CODEC_CONFIG, CodecConfig
from ordered_map_json.domain.ports.pair_store import PairStore
from ordered_map_json.infrastructure.metrics.codec_metrics import record_failure, record_success
from ordered_map_json.infrastructure.serialization.json_utils import (
    JSONInput,
    json_dumps,
    to_bytes,
)
from ordered_map_json.infrastructure.serialization.key_codec import decode_key, encode_key
from ordered_map_json.infrastructure.serialization.token_stream import (
    NOT_END_WITH_BRACE,
    TokenKind,
    TokenStream,
)

logger = logging.getLogger(__name__)

NOT_START_WITH_BRACE = "The input JSON does not start with '{'"


def _syntax_error(offset: int, msg: str) -> JSONSyntaxError:
    logger.debug("Rejecting input JSON at offset %d: %s", offset, msg)
    return JSONSyntaxError(offset, msg)


def encode(
    pairs: PairStore | Mapping[Any, Any] | Iterable[tuple[Any, Any]],
    config: CodecConfig = DEFAULT_CODEC_CONFIG,
) -> bytes:
    """
    Encode ordered pairs as a flat JSON object.

    Args:
        pairs: an OrderedMap (or any PairStore / Mapping), or an iterable of
               (key, value) tuples, consumed once in order
        config: value marshaling options

    Returns:
        The JSON object bytes, ``b"{}"`` for no pairs.

    Raises:
        UnsupportedKeyTypeError: a key has an unsupported runtime type
        UnsupportedKeyValueError: a float key is NaN or infinite
        orjson.JSONEncodeError: a value cannot be marshaled
    """
    if isinstance(pairs, (PairStore, Mapping)):
        pairs = pairs.items()

    buf = bytearray(b"{")
    count = 0
    try:
        for key, value in pairs:
            if count:
                buf += b","
            buf += encode_key(key)
            buf += b":"
            buf += json_dumps(value, option=config.value_option, default=config.value_default)
            count += 1
    except Exception:
        record_failure("encode")
        raise
    buf += b"}"

    record_success("encode", len(buf))
    logger.debug("Encoded %d pairs into %d bytes", count, len(buf))
    return bytes(buf)


def decode(data: JSONInput, target: PairStore) -> None:
    """
    Decode a flat JSON object into ``target``, preserving key order.

    Empty input is a no-op. On failure, pairs stored before the failing
    token stay in ``target``.

    Args:
        data: JSON document
        target: store receiving the pairs; its key_spec drives key decoding

    Raises:
        JSONSyntaxError: missing '{' or '}', an object where a key or value
                         is expected, a non-string key, trailing content
        UnsupportedKeyTypeError: target key type cannot be decoded
        KeyTypeMismatchError: a key token does not parse as the key type
        orjson.JSONDecodeError: a key or value is not valid JSON
    """
    payload = to_bytes(data)
    try:
        stored = _decode_pairs(TokenStream(payload), target)
    except Exception:
        record_failure("decode")
        raise

    record_success("decode", len(payload))
    logger.debug("Decoded %d pairs from %d bytes", stored, len(payload))


def _decode_pairs(stream: TokenStream, target: PairStore) -> int:
    try:
        token = stream.next_token()
    except JSONSyntaxError as e:
        raise _syntax_error(0, NOT_START_WITH_BRACE) from e
    if token is None:
        return 0
    if token.kind is not TokenKind.BEGIN_OBJECT:
        raise _syntax_error(0, NOT_START_WITH_BRACE)

    key_spec = target.key_spec
    depth = 0
    stored = 0
    while (token := stream.next_token()) is not None:
        if depth < 0:
            raise _syntax_error(token.offset, f"Invalid character {token.value!r} after top-level value")
        if token.kind is TokenKind.BEGIN_OBJECT:
            raise _syntax_error(token.offset, "Invalid character '{'")
        if token.kind is TokenKind.END_OBJECT:
            depth -= 1
            continue
        if token.kind is not TokenKind.STRING:
            raise _syntax_error(
                token.offset,
                f"Invalid character {token.value!r} looking for beginning of object key string",
            )

        key = decode_key(token.value, key_spec)
        value = stream.decode_value()
        target.store(key, value)
        stored += 1

    if depth >= 0:
        raise _syntax_error(stream.offset, NOT_END_WITH_BRACE)
    return stored


def dumps(pairs: Any, config: Optional[CodecConfig] = None) -> bytes:
    """encode() that falls back to the config carried by an OrderedMap."""
    if config is None:
        config = getattr(pairs, "config", DEFAULT_CODEC_CONFIG)
    return encode(pairs, config)


def loads(
    data: JSONInput,
    key_type: Any = str,
    config: Optional[CodecConfig] = None,
):
    """Decode ``data`` into a new OrderedMap keyed by ``key_type``."""
    from ordered_map_json.domain.models.ordered_map import OrderedMap

    return OrderedMap.from_json(data, key_type, config=config)


__all__ = ["encode", "decode", "dumps", "loads", "NOT_START_WITH_BRACE", "NOT_END_WITH_BRACE"]
