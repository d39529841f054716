"""
orjson 기반 JSON 유틸리티

코덱의 값 직렬화와 스칼라 키 파싱은 모두 이 모듈을 거쳐 orjson으로 처리합니다.
dumps는 bytes를 반환하며, 코덱은 결과를 그대로 출력 버퍼에 이어 붙입니다.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import orjson

JSONInput = bytes | bytearray | memoryview | str


def json_loads(data: JSONInput) -> Any:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return orjson.loads(data)
    return orjson.loads(str(data).encode("utf-8"))


def json_dumps(
    obj: Any,
    option: int = orjson.OPT_NON_STR_KEYS,
    default: Optional[Callable[[Any], Any]] = None,
) -> bytes:
    # orjson.dumps → bytes 반환, 출력 객체 버퍼에 그대로 기록
    return orjson.dumps(obj, default=default, option=option)


def to_bytes(data: JSONInput) -> bytes:
    """디코딩 입력을 바이트 오프셋 계산이 가능한 bytes로 정규화합니다."""
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    return str(data).encode("utf-8")
