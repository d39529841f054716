"""
코덱 설정 모델

OrderedMap JSON 코덱이 값을 직렬화할 때 사용할 orjson 옵션을 담는 불변 설정 모델입니다.
키는 항상 평탄한 JSON 문자열로 기록되므로, 설정은 값 직렬화에만 영향을 줍니다.
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Optional

import orjson

from ordered_map_json.domain.exceptions import InvalidConfigurationError

# 값에 dict가 포함될 수 있으므로 비문자열 키 dict 직렬화를 기본으로 허용합니다.
DEFAULT_VALUE_OPTION = orjson.OPT_NON_STR_KEYS

# 출력 객체는 항상 compact 형식으로 기록되므로 값 단위 들여쓰기/개행은 허용하지 않습니다.
FORBIDDEN_VALUE_OPTIONS = {
    "OPT_INDENT_2": orjson.OPT_INDENT_2,
    "OPT_APPEND_NEWLINE": orjson.OPT_APPEND_NEWLINE,
}


@dataclass(frozen=True)
class CodecConfig:
    """
    OrderedMap JSON 코덱 설정을 담는 불변 객체입니다.

    Attributes:
        value_option: 값 직렬화에 사용할 orjson 옵션 플래그 (OPT_* 조합).
        value_default: orjson이 기본적으로 직렬화하지 못하는 값을 변환하는 훅.
                       orjson.dumps(default=...)에 그대로 전달됩니다.
    """

    value_option: int = DEFAULT_VALUE_OPTION
    value_default: Optional[Callable[[Any], Any]] = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        설정 값의 유효성을 검사합니다.

        Raises:
            InvalidConfigurationError: 설정이 유효하지 않을 경우 발생합니다.
        """
        errors = []

        if isinstance(self.value_option, bool) or not isinstance(self.value_option, int):
            errors.append(f"value_option must be an int, got {type(self.value_option).__name__}.")
        elif self.value_option < 0:
            errors.append("value_option cannot be negative.")
        else:
            for name, flag in FORBIDDEN_VALUE_OPTIONS.items():
                if self.value_option & flag:
                    errors.append(f"value_option must not include orjson.{name}.")

        if self.value_default is not None and not callable(self.value_default):
            errors.append("value_default must be callable or None.")

        if errors:
            raise InvalidConfigurationError(
                f"CodecConfig validation failed: {'; '.join(errors)}"
            )

    def with_option(self, flag: int) -> "CodecConfig":
        """기존 옵션에 orjson 플래그를 추가한 새 설정을 반환합니다."""
        return replace(self, value_option=self.value_option | flag)


DEFAULT_CODEC_CONFIG = CodecConfig()


def create_codec_config(
    value_option: int = DEFAULT_VALUE_OPTION,
    value_default: Optional[Callable[[Any], Any]] = None,
) -> CodecConfig:
    """
    CodecConfig를 생성합니다.

    Args:
        value_option: 값 직렬화에 사용할 orjson 옵션 플래그
        value_default: orjson default 훅

    Returns:
        검증이 끝난 CodecConfig 객체

    Raises:
        InvalidConfigurationError: 설정 검증 실패 시

    Examples:
        >>> config = create_codec_config(orjson.OPT_NON_STR_KEYS | orjson.OPT_NAIVE_UTC)
        >>> bool(config.value_option & orjson.OPT_NAIVE_UTC)
        True
    """
    return CodecConfig(value_option=value_option, value_default=value_default)
