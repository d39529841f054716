"""
순서 보존 맵 모델

키의 최초 삽입 순서를 보존하는 연관 컨테이너입니다.
(키 타입, 키) → 엔트리 dict와 이중 연결 리스트로 구성되어 store/load/delete가 O(1)이며,
front()/Entry.next()로 삽입 순서대로 순회할 수 있습니다.
1, True, 1.0처럼 값은 같지만 타입이 다른 키는 서로 다른 키로 취급합니다.

JSON 변환은 to_json()/from_json()으로 제공되며,
실제 작업은 infrastructure.serialization.object_codec이 수행합니다.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from ordered_map_json.domain.exceptions import KeyTypeMismatchError
from ordered_map_json.domain.models.codec_config import DEFAULT_CODEC_CONFIG, CodecConfig
from ordered_map_json.domain.models.key_kind import KeySpec, classify_key_type
from ordered_map_json.domain.ports.pair_store import PairStore


class Entry:
    """
    맵 엔트리

    맵의 한 (key, value) 쌍을 나타내며, 삽입 순서상 앞뒤 엔트리와 연결됩니다.
    삭제된 엔트리의 next()/prev()는 None을 반환합니다.
    """

    __slots__ = ("_key", "value", "_prev", "_next")

    def __init__(self, key: Any, value: Any) -> None:
        self._key = key
        self.value = value
        self._prev: Optional[Entry] = None
        self._next: Optional[Entry] = None

    @property
    def key(self) -> Any:
        return self._key

    def next(self) -> Optional[Entry]:
        return self._next

    def prev(self) -> Optional[Entry]:
        return self._prev

    def __repr__(self) -> str:
        return f"Entry({self._key!r}, {self.value!r})"


def _slot(key: Any) -> tuple[type, Any]:
    # 1 == True == 1.0 이므로 타입을 함께 묶어 서로 다른 키로 색인합니다.
    return type(key), key


class OrderedMap(PairStore):
    """
    삽입 순서를 보존하는 맵

    Attributes:
        key_spec: 생성 시점에 분류된 키 타입 명세
        config: JSON 변환에 사용할 코덱 설정

    Examples:
        >>> m = OrderedMap(int)
        >>> m.store(7, "x")
        >>> m.store(3, "y")
        >>> m.to_json()
        b'{"7":"x","3":"y"}'
        >>> OrderedMap.from_json(b'{"7":"x"}', int).load(7)
        'x'
    """

    def __init__(self, key_type: Any = Any, *, config: Optional[CodecConfig] = None) -> None:
        """
        Args:
            key_type: 키 타입 (str, int, Optional[str] 등). 기본값 Any는 디코딩을 지원하지 않습니다.
            config: 코덱 설정. None이면 DEFAULT_CODEC_CONFIG를 사용합니다.

        Raises:
            UnsupportedKeyTypeError: 지원하지 않는 키 타입일 경우
        """
        self._key_spec = classify_key_type(key_type)
        self.config = config if config is not None else DEFAULT_CODEC_CONFIG
        self._entries: dict[tuple[type, Any], Entry] = {}
        self._front: Optional[Entry] = None
        self._back: Optional[Entry] = None

    @property
    def key_spec(self) -> KeySpec:
        return self._key_spec

    def store(self, key: Any, value: Any) -> None:
        """
        키에 값을 저장합니다. 이미 있는 키는 위치를 유지한 채 값만 갱신합니다.

        Raises:
            KeyTypeMismatchError: 키가 선언된 키 타입과 맞지 않을 경우
        """
        if not self._key_spec.accepts(key):
            raise KeyTypeMismatchError(key, self._key_spec.annotation)

        slot = _slot(key)
        entry = self._entries.get(slot)
        if entry is not None:
            entry.value = value
            return

        entry = Entry(key, value)
        self._entries[slot] = entry
        if self._back is None:
            self._front = entry
        else:
            entry._prev = self._back
            self._back._next = entry
        self._back = entry

    def load(self, key: Any, default: Any = None) -> Any:
        entry = self._entries.get(_slot(key))
        return default if entry is None else entry.value

    def delete(self, key: Any) -> bool:
        """키를 삭제하고, 삭제 여부를 반환합니다."""
        entry = self._entries.pop(_slot(key), None)
        if entry is None:
            return False

        if entry._prev is None:
            self._front = entry._next
        else:
            entry._prev._next = entry._next
        if entry._next is None:
            self._back = entry._prev
        else:
            entry._next._prev = entry._prev
        entry._prev = entry._next = None
        return True

    def front(self) -> Optional[Entry]:
        return self._front

    def back(self) -> Optional[Entry]:
        return self._back

    def items(self) -> Iterator[tuple[Any, Any]]:
        entry = self._front
        while entry is not None:
            # 순회 중 현재 엔트리가 삭제돼도 다음 엔트리를 잃지 않도록 미리 읽어 둡니다.
            following = entry._next
            yield entry.key, entry.value
            entry = following

    def keys(self) -> Iterator[Any]:
        return (key for key, _ in self.items())

    def values(self) -> Iterator[Any]:
        return (value for _, value in self.items())

    def __iter__(self) -> Iterator[Any]:
        return self.keys()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Any) -> bool:
        return _slot(key) in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedMap):
            return NotImplemented
        return [(_slot(key), value) for key, value in self.items()] == [
            (_slot(key), value) for key, value in other.items()
        ]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        pairs = ", ".join(f"{key!r}: {value!r}" for key, value in self.items())
        return f"OrderedMap[{self._key_spec.name}]({{{pairs}}})"

    def to_json(self) -> bytes:
        """
        삽입 순서를 보존한 JSON 객체 바이트열을 반환합니다.

        Raises:
            UnsupportedKeyTypeError: 지원하지 않는 런타임 키가 있을 경우
            orjson.JSONEncodeError: 값 직렬화 실패 시
        """
        from ordered_map_json.infrastructure.serialization.object_codec import encode

        return encode(self.items(), self.config)

    def update_from_json(self, data: bytes | str) -> None:
        """
        JSON 객체의 쌍을 만난 순서대로 이 맵에 저장합니다.

        실패 시 실패 지점 이전까지 저장된 쌍은 되돌리지 않습니다.
        """
        from ordered_map_json.infrastructure.serialization.object_codec import decode

        decode(data, self)

    @classmethod
    def from_json(
        cls,
        data: bytes | str,
        key_type: Any = str,
        *,
        config: Optional[CodecConfig] = None,
    ) -> OrderedMap:
        """JSON 객체로부터 새 맵을 생성합니다. key_type 기본값은 str입니다."""
        om = cls(key_type, config=config)
        om.update_from_json(data)
        return om
