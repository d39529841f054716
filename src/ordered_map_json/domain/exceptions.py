"""
순서 보존 맵 JSON 코덱 예외 정의

이 모듈은 OrderedMap JSON 인코딩/디코딩 과정에서 발생할 수 있는 예외를 정의합니다.
모든 예외는 명확한 계층 구조를 가지며, 컨텍스트 정보를 포함하고
예외 체이닝(__cause__)을 지원합니다.

orjson에서 발생한 값 직렬화/역직렬화 에러(JSONEncodeError, JSONDecodeError)는
이 계층으로 감싸지 않고 그대로 전파됩니다.

예외 계층 구조:
    Exception
    └── OrderedMapJSONException (기본 예외)
        ├── KeyCodecException (키 변환 관련)
        │   ├── UnsupportedKeyTypeError
        │   ├── UnsupportedKeyValueError
        │   └── KeyTypeMismatchError
        └── ValidationException (검증 실패)
            ├── JSONSyntaxError
            └── InvalidConfigurationError
"""

from typing import Any


class OrderedMapJSONException(Exception):
    """
    코덱 계층의 기본 예외 클래스

    이 예외를 catch하면 코덱이 직접 발생시키는 모든 예외를 처리할 수 있습니다.

    Attributes:
        message: 예외 메시지 (컨텍스트 정보 포함)

    Examples:
        >>> try:
        ...     raise ValueError("bad token")
        ... except ValueError as e:
        ...     raise OrderedMapJSONException("Failed to decode key", cause=e)
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        """
        Args:
            message: 예외 메시지. 가능한 많은 컨텍스트 정보를 포함해야 합니다.
            cause: 이 예외를 발생시킨 원본 예외 (선택 사항)
        """
        self.message = message
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        """예외를 문자열로 표현"""
        if self.__cause__:
            return f"{self.message} (Caused by: {self.__cause__})"
        return self.message


class KeyCodecException(OrderedMapJSONException):
    """
    키 변환 예외

    맵의 키를 JSON 객체 키 문자열로 만들거나, 반대로 JSON 객체 키 문자열을
    선언된 키 타입으로 되돌리는 과정에서 발생하는 에러를 나타냅니다.
    재시도로 해결되지 않는 프로그래밍/스키마 오류입니다.
    """

    pass


def _type_name(key_type: Any) -> str:
    if key_type is None:
        return "any"
    if isinstance(key_type, type):
        return key_type.__qualname__
    return str(key_type)


class UnsupportedKeyTypeError(KeyCodecException):
    """
    지원하지 않는 키 타입

    키가 문자열, Optional 문자열, 스칼라(bool/int/float), Optional 스칼라 중
    어느 것에도 해당하지 않을 때 발생합니다.

    Attributes:
        key_type: 문제가 된 키 타입. 타입을 알 수 없으면 None.

    Examples:
        >>> print(UnsupportedKeyTypeError(tuple))
        json: unsupported key type: tuple
        >>> print(UnsupportedKeyTypeError(None))
        json: unsupported key type: any
    """

    def __init__(self, key_type: Any = None) -> None:
        self.key_type = key_type
        super().__init__(f"json: unsupported key type: {_type_name(key_type)}")


class UnsupportedKeyValueError(KeyCodecException):
    """지원하는 타입이지만 JSON 객체 키로 표현할 수 없는 키 값(예: NaN)을 나타냅니다."""

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"json: unsupported key value: {key!r}")


class KeyTypeMismatchError(KeyCodecException):
    """
    키 토큰과 선언된 키 타입 불일치

    JSON 객체 키 문자열이 JSON으로는 올바르게 파싱되었지만
    선언된 스칼라 타입의 값이 아닐 때 발생합니다. (예: "1.5" → int)
    맵에 선언된 키 타입과 다른 타입의 키를 저장할 때도 발생합니다.

    Attributes:
        token: 원본 객체 키 문자열, 또는 저장하려던 키
        key_type: 선언된 키 타입
    """

    def __init__(self, token: Any, key_type: Any) -> None:
        self.token = token
        self.key_type = key_type
        super().__init__(
            f"json: key {token!r} does not match key type {_type_name(key_type)}"
        )


class ValidationException(OrderedMapJSONException):
    """
    검증 실패 예외

    입력 JSON의 구조적 오류나 잘못된 코덱 설정값을 나타냅니다.
    """

    pass


class JSONSyntaxError(ValidationException):
    """
    입력 JSON 구문 오류

    입력이 '{'로 시작하지 않거나 '}'로 끝나지 않는 경우,
    최상위 객체 안에 중첩 객체가 나타난 경우 등에 발생합니다.
    내장 SyntaxError와 이름이 겹치지 않도록 JSONSyntaxError로 명명합니다.

    Attributes:
        offset: 입력 내 바이트 오프셋
        msg: 오프셋을 제외한 사람이 읽을 수 있는 메시지

    Examples:
        >>> print(JSONSyntaxError(0, "The input JSON does not start with '{'"))
        The input JSON does not start with '{' (offset:0)
    """

    def __init__(self, offset: int, msg: str) -> None:
        self.offset = offset
        self.msg = msg
        super().__init__(f"{msg} (offset:{offset})")


class InvalidConfigurationError(ValidationException):
    """잘못된 코덱 설정 값을 나타냅니다."""

    pass
