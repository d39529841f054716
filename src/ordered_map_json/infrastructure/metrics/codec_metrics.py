"""
코덱 Prometheus 메트릭

인코딩/디코딩 호출 결과와 페이로드 크기를 기록합니다.
주의: 모듈 단위 등록. 테스트 프로세스 내 중복 import 환경이 아니라고 가정합니다.
"""

from prometheus_client import Counter, Histogram

CODEC_OPERATIONS = Counter(
    "ordered_map_json_operations_total",
    "Number of ordered map JSON encode/decode calls",
    ["operation", "result"],
)

CODEC_PAYLOAD_BYTES = Histogram(
    "ordered_map_json_payload_bytes",
    "Size of encoded output / decoded input in bytes",
    ["operation"],
    buckets=(64, 256, 1024, 4096, 16384, 65536, 262144, 1048576),
)


def record_success(operation: str, payload_size: int) -> None:
    CODEC_OPERATIONS.labels(operation=operation, result="success").inc()
    CODEC_PAYLOAD_BYTES.labels(operation=operation).observe(payload_size)


def record_failure(operation: str) -> None:
    CODEC_OPERATIONS.labels(operation=operation, result="error").inc()
