"""
Byte-level token stream over a single flat JSON object.

The stream yields structural delimiters (``{``, ``}``) separately from
object-key strings, tracks the byte offset for error reporting and decodes
"the next JSON value" after a key with orjson. Separators (``:`` and ``,``)
are validated and consumed internally, never yielded.

Values are located by a light scan (strings, arrays, bare literals) and the
located slice is handed to orjson, which performs the actual validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ordered_map_json.domain.exceptions import JSONSyntaxError
from ordered_map_json.infrastructure.serialization.json_utils import json_loads

_LBRACE = ord("{")
_RBRACE = ord("}")
_LBRACKET = ord("[")
_RBRACKET = ord("]")
_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_COLON = ord(":")
_COMMA = ord(",")

_WHITESPACE = b" \t\n\r"
# Bytes that terminate a bare literal such as 12, true or null.
_LITERAL_END = b' \t\n\r,:{}[]"'
_INVALID_VALUE_START = b",:]}"

NOT_END_WITH_BRACE = "The input JSON does not end with '}'"


class TokenKind(Enum):
    BEGIN_OBJECT = "{"
    END_OBJECT = "}"
    STRING = "string"
    LITERAL = "literal"


@dataclass(frozen=True)
class Token:
    """
    A unit yielded by the stream.

    Attributes:
        kind: token kind
        value: decoded text for STRING, raw text for LITERAL, the delimiter otherwise
        offset: byte offset of the token's first byte
    """

    kind: TokenKind
    value: Any
    offset: int

    @property
    def is_delimiter(self) -> bool:
        return self.kind in (TokenKind.BEGIN_OBJECT, TokenKind.END_OBJECT)


def _char(byte: int) -> str:
    return chr(byte) if byte < 0x80 else f"\\x{byte:02x}"


class TokenStream:
    """
    Cursor over the bytes of one JSON document.

    Examples:
        >>> stream = TokenStream(b'{"a":1}')
        >>> stream.next_token().kind
        <TokenKind.BEGIN_OBJECT: '{'>
        >>> stream.next_token().value
        'a'
        >>> stream.decode_value()
        1
        >>> stream.next_token().kind
        <TokenKind.END_OBJECT: '}'>
        >>> stream.next_token() is None
        True
    """

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0
        # True right after a value, when only ',' or '}' may follow.
        self._expect_separator = False

    @property
    def offset(self) -> int:
        """Byte offset of the next unread byte."""
        return self._pos

    def _at_end(self) -> bool:
        return self._pos >= len(self._data)

    def _end_of_input(self) -> JSONSyntaxError:
        return JSONSyntaxError(len(self._data), NOT_END_WITH_BRACE)

    def _skip_whitespace(self) -> None:
        data = self._data
        while self._pos < len(data) and data[self._pos] in _WHITESPACE:
            self._pos += 1

    def _consume_separator(self) -> None:
        byte = self._data[self._pos]
        if byte == _RBRACE:
            self._expect_separator = False
            return
        if byte != _COMMA:
            raise JSONSyntaxError(
                self._pos,
                f"Invalid character '{_char(byte)}' after object value; expecting ',' or '}}'",
            )

        self._pos += 1
        self._expect_separator = False
        self._skip_whitespace()
        if not self._at_end() and self._data[self._pos] == _RBRACE:
            raise JSONSyntaxError(self._pos, "Invalid character '}' after ','")

    def next_token(self) -> Optional[Token]:
        """
        Read the next token, or None at end of input.

        Raises:
            JSONSyntaxError: misplaced separator, or input ending inside a string
                             or array (reported as not ending with '}')
            orjson.JSONDecodeError: a string token contains an invalid escape
        """
        self._skip_whitespace()
        if self._at_end():
            return None

        if self._expect_separator:
            self._consume_separator()
            if self._at_end():
                return None

        start = self._pos
        byte = self._data[start]
        if byte == _LBRACE:
            self._pos += 1
            return Token(TokenKind.BEGIN_OBJECT, "{", start)
        if byte == _RBRACE:
            self._pos += 1
            return Token(TokenKind.END_OBJECT, "}", start)

        end = self._scan_value(start)
        raw = self._data[start:end]
        self._pos = end
        if byte == _QUOTE:
            return Token(TokenKind.STRING, json_loads(raw), start)
        return Token(TokenKind.LITERAL, raw.decode("utf-8", errors="replace"), start)

    def decode_value(self) -> Any:
        """
        Consume ``:`` and decode the JSON value that follows an object key.

        Object values are rejected: only one flat object level is supported.

        Raises:
            JSONSyntaxError: missing ``:``, an object value, or input ending
                             before the value is complete
            orjson.JSONDecodeError: the located value is not valid JSON
        """
        self._skip_whitespace()
        if self._at_end():
            raise self._end_of_input()
        if self._data[self._pos] != _COLON:
            raise JSONSyntaxError(self._pos, "Missing ':' after object key")
        self._pos += 1
        self._skip_whitespace()
        if self._at_end():
            raise self._end_of_input()

        start = self._pos
        if self._data[start] == _LBRACE:
            raise JSONSyntaxError(start, "Invalid character '{'; nested objects are not supported")

        end = self._scan_value(start)
        value = json_loads(memoryview(self._data)[start:end])
        self._pos = end
        self._expect_separator = True
        return value

    def _scan_value(self, start: int) -> int:
        byte = self._data[start]
        if byte == _QUOTE:
            return self._scan_string(start)
        if byte == _LBRACKET:
            return self._scan_array(start)
        if byte in _INVALID_VALUE_START:
            raise JSONSyntaxError(start, f"Invalid character '{_char(byte)}'")

        data = self._data
        end = start
        while end < len(data) and data[end] not in _LITERAL_END:
            end += 1
        return end

    def _scan_string(self, start: int) -> int:
        data = self._data
        i = start + 1
        while i < len(data):
            byte = data[i]
            if byte == _BACKSLASH:
                i += 2
                continue
            if byte == _QUOTE:
                return i + 1
            i += 1
        raise self._end_of_input()

    def _scan_array(self, start: int) -> int:
        # Objects nested inside arrays are plain values; only brackets are balanced here.
        data = self._data
        depth = 0
        i = start
        while i < len(data):
            byte = data[i]
            if byte == _QUOTE:
                i = self._scan_string(i)
                continue
            if byte in (_LBRACKET, _LBRACE):
                depth += 1
            elif byte in (_RBRACKET, _RBRACE):
                depth -= 1
                if depth == 0:
                    return i + 1
            i += 1
        raise self._end_of_input()


__all__ = ["Token", "TokenKind", "TokenStream", "NOT_END_WITH_BRACE"]
