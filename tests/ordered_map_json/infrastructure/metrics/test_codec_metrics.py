from typing import Optional

import pytest
from prometheus_client import REGISTRY

from ordered_map_json.domain.exceptions import JSONSyntaxError
from ordered_map_json.domain.models.ordered_map import OrderedMap
from ordered_map_json.infrastructure.serialization.object_codec import decode, encode


def _operations(operation: str, result: str) -> float:
    value: Optional[float] = REGISTRY.get_sample_value(
        "ordered_map_json_operations_total",
        {"operation": operation, "result": result},
    )
    return value or 0.0


def _payload_count(operation: str) -> float:
    value: Optional[float] = REGISTRY.get_sample_value(
        "ordered_map_json_payload_bytes_count",
        {"operation": operation},
    )
    return value or 0.0


class TestCodecMetrics:
    def test_encode_success_recorded(self) -> None:
        # GIVEN
        before = _operations("encode", "success")
        payload_before = _payload_count("encode")

        # WHEN
        encode([("a", 1)])

        # THEN
        assert _operations("encode", "success") == before + 1
        assert _payload_count("encode") == payload_before + 1

    def test_encode_failure_recorded(self) -> None:
        before = _operations("encode", "error")

        with pytest.raises(TypeError):
            encode([("a", object())])

        assert _operations("encode", "error") == before + 1

    def test_decode_success_and_failure_recorded(self) -> None:
        success_before = _operations("decode", "success")
        error_before = _operations("decode", "error")

        decode(b'{"a":1}', OrderedMap(str))
        with pytest.raises(JSONSyntaxError):
            decode(b'{"a":1', OrderedMap(str))

        assert _operations("decode", "success") == success_before + 1
        assert _operations("decode", "error") == error_before + 1
