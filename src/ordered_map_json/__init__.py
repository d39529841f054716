"""
ordered-map-json

삽입 순서를 보존하는 OrderedMap과, 키 순서를 보존하는 평탄한 JSON 객체 코덱입니다.
문자열/스칼라/Optional 키를 JSON 객체 키 문자열로 변환하고 다시 원래 타입으로 복원합니다.
"""

from ordered_map_json.domain.exceptions import (
    InvalidConfigurationError,
    JSONSyntaxError,
    KeyTypeMismatchError,
    OrderedMapJSONException,
    UnsupportedKeyTypeError,
    UnsupportedKeyValueError,
)
from ordered_map_json.domain.models.codec_config import (
    DEFAULT_CODEC_CONFIG,
    CodecConfig,
    create_codec_config,
)
from ordered_map_json.domain.models.key_kind import KeyKind, KeySpec, classify_key_type
from ordered_map_json.domain.models.ordered_map import Entry, OrderedMap
from ordered_map_json.infrastructure.serialization.object_codec import decode, dumps, encode, loads

__all__ = [
    "OrderedMap",
    "Entry",
    "encode",
    "decode",
    "dumps",
    "loads",
    "CodecConfig",
    "DEFAULT_CODEC_CONFIG",
    "create_codec_config",
    "KeyKind",
    "KeySpec",
    "classify_key_type",
    "OrderedMapJSONException",
    "UnsupportedKeyTypeError",
    "UnsupportedKeyValueError",
    "KeyTypeMismatchError",
    "JSONSyntaxError",
    "InvalidConfigurationError",
]
