import orjson
import pytest

from ordered_map_json.domain.exceptions import JSONSyntaxError
from ordered_map_json.infrastructure.serialization.token_stream import (
    NOT_END_WITH_BRACE,
    TokenKind,
    TokenStream,
)


def _drain(data: bytes) -> list[tuple[TokenKind, object, int]]:
    stream = TokenStream(data)
    tokens = []
    while (token := stream.next_token()) is not None:
        tokens.append((token.kind, token.value, token.offset))
        if token.kind is TokenKind.STRING:
            stream.decode_value()
    return tokens


class TestTokenStream:
    def test_tokens_and_offsets(self) -> None:
        # GIVEN / WHEN
        tokens = _drain(b'{"a":1, "b":2}')

        # THEN
        assert tokens == [
            (TokenKind.BEGIN_OBJECT, "{", 0),
            (TokenKind.STRING, "a", 1),
            (TokenKind.STRING, "b", 8),
            (TokenKind.END_OBJECT, "}", 13),
        ]

    def test_empty_input(self) -> None:
        stream = TokenStream(b"  \n\t")

        assert stream.next_token() is None
        assert stream.offset == 4

    def test_string_escapes_decoded(self) -> None:
        stream = TokenStream(b'{"a\\"b\\u00e9":1}')
        stream.next_token()

        assert stream.next_token().value == 'a"bé'

    def test_offsets_are_byte_offsets(self) -> None:
        data = '{"가":1,"b":2}'.encode("utf-8")

        tokens = _drain(data)

        # "가" is three bytes in UTF-8
        assert tokens[2] == (TokenKind.STRING, "b", 9)

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (b"1", 1),
            (b"-2.5", -2.5),
            (b'"x"', "x"),
            (b"true", True),
            (b"null", None),
            (b"[1,[2,3]]", [1, [2, 3]]),
            (b'["]", "["]', ["]", "["]),
            (b'[{"x":1}]', [{"x": 1}]),
        ],
    )
    def test_decode_value(self, raw: bytes, expected: object) -> None:
        stream = TokenStream(b'{"k": ' + raw + b"}")
        stream.next_token()
        stream.next_token()

        assert stream.decode_value() == expected
        assert stream.next_token().kind is TokenKind.END_OBJECT

    def test_literal_token(self) -> None:
        stream = TokenStream(b"[1,2]")

        token = stream.next_token()

        assert token.kind is TokenKind.LITERAL
        assert token.value == "[1,2]"
        assert not token.is_delimiter


class TestTokenStreamErrors:
    def _stream_at_value(self, data: bytes) -> TokenStream:
        stream = TokenStream(data)
        stream.next_token()
        stream.next_token()
        return stream

    def test_nested_object_value_rejected(self) -> None:
        stream = self._stream_at_value(b'{"a":{"b":1}}')

        with pytest.raises(JSONSyntaxError) as exc_info:
            stream.decode_value()

        assert exc_info.value.offset == 5

    def test_missing_colon(self) -> None:
        stream = self._stream_at_value(b'{"a" 1}')

        with pytest.raises(JSONSyntaxError) as exc_info:
            stream.decode_value()

        assert exc_info.value.offset == 5
        assert "':'" in exc_info.value.msg

    def test_missing_value(self) -> None:
        stream = self._stream_at_value(b'{"a":')

        with pytest.raises(JSONSyntaxError) as exc_info:
            stream.decode_value()

        assert exc_info.value.offset == 5
        assert exc_info.value.msg == NOT_END_WITH_BRACE

    def test_invalid_value_propagates_orjson_error(self) -> None:
        stream = self._stream_at_value(b'{"a":tru}')

        with pytest.raises(orjson.JSONDecodeError):
            stream.decode_value()

    def test_missing_comma(self) -> None:
        stream = self._stream_at_value(b'{"a":1 "b":2}')
        stream.decode_value()

        with pytest.raises(JSONSyntaxError) as exc_info:
            stream.next_token()

        assert exc_info.value.offset == 7

    def test_trailing_comma(self) -> None:
        stream = self._stream_at_value(b'{"a":1,}')
        stream.decode_value()

        with pytest.raises(JSONSyntaxError) as exc_info:
            stream.next_token()

        assert exc_info.value.offset == 7

    def test_unterminated_string(self) -> None:
        stream = TokenStream(b'{"abc')
        stream.next_token()

        with pytest.raises(JSONSyntaxError) as exc_info:
            stream.next_token()

        assert exc_info.value.offset == 5
        assert exc_info.value.msg == NOT_END_WITH_BRACE

    def test_unterminated_array(self) -> None:
        stream = self._stream_at_value(b'{"a":[1,2')

        with pytest.raises(JSONSyntaxError) as exc_info:
            stream.decode_value()

        assert exc_info.value.offset == 9
        assert exc_info.value.msg == NOT_END_WITH_BRACE

    @pytest.mark.parametrize("data", [b"{,", b"{:", b"{]"])
    def test_separator_where_token_expected(self, data: bytes) -> None:
        stream = TokenStream(data)
        stream.next_token()

        with pytest.raises(JSONSyntaxError) as exc_info:
            stream.next_token()

        assert exc_info.value.offset == 1
