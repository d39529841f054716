"""
순서 있는 쌍 저장소 포트 인터페이스

JSON 코덱이 의존하는 순서 보존 맵의 추상 인터페이스입니다.
코덱은 인코딩 시 삽입 순서대로 (key, value) 쌍을 읽고,
디코딩 시 store(key, value)로 만난 순서대로 쌍을 기록합니다.
실제 저장/순회 구현은 OrderedMap이 제공합니다.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterator

from ordered_map_json.domain.models.key_kind import KeySpec


class PairStore(ABC):
    """
    순서 있는 쌍 저장소 포트

    Implementation Requirements:
        1. items()는 삽입 순서대로 (key, value) 쌍을 한 번 순회하는 이터레이터를 반환해야 함
        2. store()는 새 키는 끝에 추가하고, 기존 키는 위치를 유지한 채 값만 갱신해야 함
        3. key_spec은 디코딩 대상 키 타입의 분류 결과를 반환해야 함

    Note:
        코덱 호출 중 같은 저장소를 다른 스레드에서 변경하는 것은 정의되지 않은 동작입니다.
        동기화는 호출자의 책임입니다.
    """

    @property
    @abstractmethod
    def key_spec(self) -> KeySpec:
        """디코딩 시 키 토큰을 되돌릴 대상 키 타입 명세"""
        pass

    @abstractmethod
    def items(self) -> Iterator[tuple[Any, Any]]:
        """삽입 순서대로 (key, value) 쌍을 순회합니다."""
        pass

    @abstractmethod
    def store(self, key: Any, value: Any) -> None:
        """
        쌍 저장

        Args:
            key: 키 (key_spec에 맞는 타입)
            value: 값
        """
        pass
