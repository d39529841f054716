"""
키 타입 분류 모델

OrderedMap 키 타입을 코덱이 다룰 수 있는 닫힌 분류(KeyKind) 중 하나로 분류합니다.
선언된 키 타입은 맵 생성 시점에 한 번만 분류하여 KeySpec으로 보관하고,
인코딩 시에는 각 키의 런타임 타입을 분류합니다.

분류 규칙:
    str                    -> STRING
    str | None             -> OPTIONAL_STRING
    bool, int, float       -> SCALAR
    bool/int/float | None  -> OPTIONAL_SCALAR
    typing.Any             -> 동적 (인코딩은 런타임 분류, 디코딩은 지원하지 않음)
    그 외                  -> UnsupportedKeyTypeError
"""

import types
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union, get_args, get_origin

from ordered_map_json.domain.exceptions import UnsupportedKeyTypeError

# bool은 int의 서브클래스이므로 정확한 타입 비교로만 판별합니다.
SCALAR_TYPES: tuple[type, ...] = (bool, int, float)


class KeyKind(Enum):
    """
    키 분류

    Attributes:
        STRING: 네이티브 문자열 키
        OPTIONAL_STRING: None을 허용하는 문자열 키. "null" 키는 None으로 디코딩됨
        SCALAR: bool/int/float 키. JSON 값 표현을 따옴표로 감싸 객체 키로 사용
        OPTIONAL_SCALAR: None을 허용하는 스칼라 키
        UNSUPPORTED: 그 외 모든 타입
    """

    STRING = "string"
    OPTIONAL_STRING = "optional_string"
    SCALAR = "scalar"
    OPTIONAL_SCALAR = "optional_scalar"
    UNSUPPORTED = "unsupported"

    @property
    def is_optional(self) -> bool:
        return self in (KeyKind.OPTIONAL_STRING, KeyKind.OPTIONAL_SCALAR)

    @property
    def is_quoted(self) -> bool:
        """인코딩 시 JSON 값 표현을 따옴표로 감싸야 하는 분류인지 여부"""
        return self in (KeyKind.SCALAR, KeyKind.OPTIONAL_SCALAR)


@dataclass(frozen=True)
class KeySpec:
    """
    분류가 끝난 키 타입 명세

    Attributes:
        kind: 키 분류. 동적(Any) 명세이면 None.
        base: 기반 타입 (str, bool, int, float). 동적 명세이면 None.
        annotation: 사용자가 선언한 원래 타입 표현
    """

    kind: Optional[KeyKind]
    base: Optional[type]
    annotation: Any

    @property
    def is_dynamic(self) -> bool:
        return self.kind is None

    @property
    def name(self) -> str:
        if self.is_dynamic:
            return "any"
        if self.kind.is_optional:
            return f"{self.base.__name__} | None"
        return self.base.__name__

    def accepts(self, key: Any) -> bool:
        """
        런타임 키가 이 명세의 키로 저장될 수 있는지 여부

        bool은 int의 서브클래스이므로 정확한 타입으로 비교합니다.
        None은 Optional 명세에서만 허용됩니다.
        """
        if self.is_dynamic:
            return True
        if key is None:
            return self.kind.is_optional
        return type(key) is self.base


DYNAMIC_KEY_SPEC = KeySpec(kind=None, base=None, annotation=Any)


def _split_optional(annotation: Any) -> tuple[Any, bool]:
    """`X | None` / `Optional[X]`를 (X, True)로 분해합니다."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1 and len(args) < len(get_args(annotation)):
            return args[0], True
    return annotation, False


def classify_key_type(annotation: Any) -> KeySpec:
    """
    선언된 키 타입을 분류합니다.

    Args:
        annotation: 키 타입 (예: str, int, Optional[str], float | None, Any)

    Returns:
        분류 결과 KeySpec

    Raises:
        UnsupportedKeyTypeError: 지원하지 않는 키 타입일 경우

    Examples:
        >>> classify_key_type(int).kind
        <KeyKind.SCALAR: 'scalar'>
        >>> classify_key_type(str | None).kind
        <KeyKind.OPTIONAL_STRING: 'optional_string'>
    """
    if annotation is Any:
        return DYNAMIC_KEY_SPEC

    base, optional = _split_optional(annotation)
    if base is str:
        kind = KeyKind.OPTIONAL_STRING if optional else KeyKind.STRING
    elif base in SCALAR_TYPES:
        kind = KeyKind.OPTIONAL_SCALAR if optional else KeyKind.SCALAR
    else:
        raise UnsupportedKeyTypeError(annotation)

    return KeySpec(kind=kind, base=base, annotation=annotation)


def classify_key(key: Any) -> KeyKind:
    """
    런타임 키 값을 분류합니다.

    None은 Optional 키의 "부재" 상태로 간주하여 OPTIONAL_SCALAR로 분류합니다.
    문자열과 스칼라 모두 None은 같은 "null" 키로 인코딩되므로 구분하지 않습니다.
    """
    key_type = type(key)
    if key is None:
        return KeyKind.OPTIONAL_SCALAR
    if key_type is str:
        return KeyKind.STRING
    if key_type in SCALAR_TYPES:
        return KeyKind.SCALAR
    return KeyKind.UNSUPPORTED
