"""
OrderedMap JSON 왕복 변환 예제

정수 키와 Optional 문자열 키 맵을 JSON으로 인코딩한 뒤 다시 디코딩하여
키 순서와 키 타입이 그대로 복원되는지 확인합니다.
"""

import logging
import sys
from typing import Optional

from ordered_map_json import JSONSyntaxError, OrderedMap

# 로깅 설정
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)


def main() -> int:
    scores = OrderedMap(int)
    for rank, name in [(3, "carol"), (1, "alice"), (2, "bob")]:
        scores.store(rank, name)

    encoded = scores.to_json()
    logger.info("Encoded: %s", encoded.decode("utf-8"))

    restored = OrderedMap.from_json(encoded, int)
    logger.info("Restored keys: %s", list(restored))
    if restored != scores:
        logger.error("Round trip mismatch: %r != %r", restored, scores)
        return 1

    aliases = OrderedMap(Optional[str])
    aliases.store(None, "anonymous")
    aliases.store("root", "admin")
    logger.info("Optional keys: %s", aliases.to_json().decode("utf-8"))

    try:
        OrderedMap.from_json(b'{"a":1')
    except JSONSyntaxError as e:
        logger.info("Rejected malformed input at offset %d: %s", e.offset, e.msg)

    return 0


if __name__ == "__main__":
    sys.exit(main())
