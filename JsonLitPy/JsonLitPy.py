import re
from decimal import Decimal
from enum import Enum
from typing import Iterator

from .JsonLitErrors import JsonSyntaxError, UndefinedReferenceError
from .JsonLitOptions import JsonReaderOptions

class JsonTokenType(Enum):
    START_OBJECT = 1
    END_OBJECT = 2
    START_ARRAY = 3
    END_ARRAY = 4
    COMMA = 5
    COLON = 6
    COMMENT = 7
    STRING = 8
    NUMBER = 9
    TRUE = 10
    FALSE = 11
    NULL = 12

class JsonToken:
    json_type: JsonTokenType
    value: str
    position: int

    def __init__(self, json_type: JsonTokenType, value: str, position: int):
        self.json_type = json_type
        self.value = value
        self.position = position

    def __repr__(self) -> str:
        return f"JsonToken({self.json_type.name}, {self.value!r}, {self.position})"

class JsonNumberParser:
    _NUMBER = re.compile(r"-?(?:0|[1-9][0-9]*)(?P<fraction>\.[0-9]+)?(?P<exponent>[eE][+-]?[0-9]+)?")

    @staticmethod
    def parse(token: str, decimal_numbers: bool = False) -> int | float | Decimal:
        """
        Converts a JSON number token to an int, or to a float (or Decimal) when
        it has a fraction or exponent.
        """
        match = JsonNumberParser._NUMBER.fullmatch(token)
        if match is None:
            raise ValueError(f"Invalid number {token!r}")
        if match.group("fraction") is None and match.group("exponent") is None:
            return int(token)
        if decimal_numbers:
            return Decimal(token)
        return float(token)

class _Expect(Enum):
    VALUE = 1
    VALUE_OR_END_ARRAY = 2
    PROPERTY_NAME = 3
    PROPERTY_NAME_OR_END_OBJECT = 4
    COLON = 5
    COMMA_OR_END = 6
    END = 7

class JsonReader:
    # The string to read characters from.
    string: str
    # The index in the string.
    index: int
    # The options to use when reading JSON.
    options: JsonReaderOptions

    # Characters that are considered whitespace.
    _WHITESPACE_CHARS = set([" ", "\t", "\n", "\r"])
    # Characters that can appear in a number token.
    _NUMBER_CHARS = set("-+.eE0123456789")
    _HEX_CHARS = set("0123456789abcdefABCDEF")
    _PUNCTUATION = {
        "{": JsonTokenType.START_OBJECT,
        "}": JsonTokenType.END_OBJECT,
        "[": JsonTokenType.START_ARRAY,
        "]": JsonTokenType.END_ARRAY,
        ",": JsonTokenType.COMMA,
        ":": JsonTokenType.COLON,
    }
    _ESCAPES = {
        '"': '"', "\\": "\\", "/": "/",
        "b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t",
    }
    _LITERALS = {
        "true": JsonTokenType.TRUE,
        "false": JsonTokenType.FALSE,
        "null": JsonTokenType.NULL,
    }

    def __init__(self, string: str, options: JsonReaderOptions | None = None) -> None:
        """
        Constructs a reader that reads JSON from a string.
        """
        self.string = string
        self.index = 0
        self.options = options if options is not None else JsonReaderOptions()

    @staticmethod
    def parse_element_from_string(string: str, options: JsonReaderOptions | None = None) -> object:
        """
        Parses a single element from a string.
        """
        return JsonReader(string, options).parse_element()

    def parse_element(self) -> object:
        """
        Parses a single element from the reader.

        Containers are tracked on an explicit stack rather than by recursion, so
        deeply nested input cannot exhaust the call stack.
        """
        current_elements: list[dict | list] = []
        current_property_name: str | None = None
        root: object = None
        expect = _Expect.VALUE

        def submit_element(element: object) -> None:
            nonlocal root, current_property_name, expect

            # Root value
            if len(current_elements) == 0:
                root = element
                expect = _Expect.END
            # Array item
            elif current_property_name is None:
                current_elements[-1].append(element)
                expect = _Expect.COMMA_OR_END
            # Object property
            else:
                current_elements[-1][current_property_name] = element
                current_property_name = None
                expect = _Expect.COMMA_OR_END

        def start_element(element: dict | list, next_expect: _Expect) -> None:
            nonlocal expect

            submit_element(element)
            current_elements.append(element)
            expect = next_expect

        def end_element() -> None:
            nonlocal expect

            current_elements.pop()
            expect = _Expect.COMMA_OR_END if current_elements else _Expect.END

        for token in self.read_tokens():
            json_type = token.json_type
            if json_type == JsonTokenType.COMMENT:
                continue

            match expect:
                case _Expect.VALUE | _Expect.VALUE_OR_END_ARRAY:
                    if json_type == JsonTokenType.END_ARRAY and expect == _Expect.VALUE_OR_END_ARRAY:
                        end_element()
                    elif json_type == JsonTokenType.START_OBJECT:
                        start_element({}, _Expect.PROPERTY_NAME_OR_END_OBJECT)
                    elif json_type == JsonTokenType.START_ARRAY:
                        start_element([], _Expect.VALUE_OR_END_ARRAY)
                    else:
                        submit_element(self._to_value(token))
                case _Expect.PROPERTY_NAME | _Expect.PROPERTY_NAME_OR_END_OBJECT:
                    if json_type == JsonTokenType.END_OBJECT and expect == _Expect.PROPERTY_NAME_OR_END_OBJECT:
                        end_element()
                    elif json_type == JsonTokenType.STRING:
                        current_property_name = token.value
                        expect = _Expect.COLON
                    else:
                        raise self._err(f"Expected property name, got {token.value!r}", token.position)
                case _Expect.COLON:
                    if json_type != JsonTokenType.COLON:
                        raise self._err(f"Expected ':' after property name, got {token.value!r}", token.position)
                    expect = _Expect.VALUE
                case _Expect.COMMA_OR_END:
                    is_object = isinstance(current_elements[-1], dict)
                    if json_type == JsonTokenType.COMMA:
                        expect = _Expect.PROPERTY_NAME if is_object else _Expect.VALUE
                    elif json_type == (JsonTokenType.END_OBJECT if is_object else JsonTokenType.END_ARRAY):
                        end_element()
                    else:
                        closing = "}" if is_object else "]"
                        raise self._err(f"Expected ',' or '{closing}', got {token.value!r}", token.position)
                case _Expect.END:
                    raise self._err("Expected end of input", token.position)

            # Leave the rest of the string for the next call
            if expect == _Expect.END and not self.options.parse_single_element:
                return root

        if expect == _Expect.VALUE and not current_elements:
            raise self._err("Expected token, got end of input")
        if expect != _Expect.END:
            raise self._err("Unexpected end of input")
        return root

    def has_token(self) -> bool:
        """
        Skips whitespace and comments and reports whether any input remains.
        """
        while True:
            self._read_whitespace()
            if self._peek() == "/" and self._peek(1) == "/" and self.options.allow_comments:
                self._read_comment()
                continue
            return self._peek() is not None

    def read_tokens(self) -> Iterator[JsonToken]:
        while True:
            token = self.read_token()
            if token is None:
                return
            yield token

    def read_token(self) -> JsonToken | None:
        """
        Reads the next token, or returns None at the end of the input.
        """
        self._read_whitespace()
        start = self.index
        next: str | None = self._peek()
        if next is None:
            return None

        if next in self._PUNCTUATION:
            self._read()
            return JsonToken(self._PUNCTUATION[next], next, start)
        if next == '"':
            return self._read_string()
        if next == "-" or "0" <= next <= "9":
            return self._read_number()
        if next == "/":
            return self._read_comment()
        if next.isalpha() or next in "_$":
            return self._read_literal()
        raise self._err(f"Unexpected character {next!r}", start)

    def _to_value(self, token: JsonToken) -> object:
        match token.json_type:
            case JsonTokenType.STRING:
                return token.value
            case JsonTokenType.NUMBER:
                try:
                    return JsonNumberParser.parse(token.value, self.options.decimal_numbers)
                except ValueError as e:
                    raise self._err(str(e), token.position) from e
            case JsonTokenType.TRUE:
                return True
            case JsonTokenType.FALSE:
                return False
            case JsonTokenType.NULL:
                return None
        raise self._err(f"Expected value, got {token.value!r}", token.position)

    def _read_string(self) -> JsonToken:
        start = self.index
        self._read()
        buf: list[str] = []
        # Whether the previous character was a backslash that has not been used yet
        escaped = False
        while True:
            c = self._read()
            if c is None:
                raise self._err("Unterminated string", start)
            if escaped:
                escaped = False
                if c == "u":
                    buf.append(self._read_unicode_escape())
                elif c in self._ESCAPES:
                    buf.append(self._ESCAPES[c])
                else:
                    raise self._err(f"Invalid escape '\\{c}'", self.index - 2)
            elif c == "\\":
                escaped = True
            elif c == '"':
                return JsonToken(JsonTokenType.STRING, "".join(buf), start)
            elif c < " ":
                raise self._err("Unescaped control character in string", self.index - 1)
            else:
                buf.append(c)

    def _read_unicode_escape(self) -> str:
        code_point = self._read_hex_sequence(4)
        # High surrogate: combine with a following low surrogate if there is one
        if 0xD800 <= code_point <= 0xDBFF and self.string.startswith("\\u", self.index):
            save = self.index
            self.index += 2
            low = self._read_hex_sequence(4)
            if 0xDC00 <= low <= 0xDFFF:
                return chr(0x10000 + ((code_point - 0xD800) << 10) + (low - 0xDC00))
            self.index = save
        return chr(code_point)

    def _read_hex_sequence(self, length: int) -> int:
        digits = self.string[self.index:self.index + length]
        if len(digits) != length or any(c not in self._HEX_CHARS for c in digits):
            raise self._err("Invalid hex escape", self.index)
        self.index += length
        return int(digits, 16)

    def _read_number(self) -> JsonToken:
        start = self.index
        while self._peek() is not None and self._peek() in self._NUMBER_CHARS:
            self.index += 1
        return JsonToken(JsonTokenType.NUMBER, self.string[start:self.index], start)

    def _read_literal(self) -> JsonToken:
        start = self.index
        while self._peek() is not None and (self._peek().isalnum() or self._peek() in "_$"):
            self.index += 1
        word = self.string[start:self.index]
        if word in self._LITERALS:
            return JsonToken(self._LITERALS[word], word, start)
        raise UndefinedReferenceError(word, start)

    def _read_comment(self) -> JsonToken:
        start = self.index
        if not self.options.allow_comments or self._peek(1) != "/":
            raise self._err("Unexpected character '/'", start)
        self.index += 2
        while self._peek() is not None and self._peek() not in "\n\r":
            self.index += 1
        return JsonToken(JsonTokenType.COMMENT, self.string[start + 2:self.index], start)

    def _read_whitespace(self) -> None:
        while self._peek() is not None and self._peek() in self._WHITESPACE_CHARS:
            self.index += 1

    def _err(self, msg: str, position: int | None = None) -> JsonSyntaxError:
        return JsonSyntaxError(msg, self.index if position is None else position)

    def _peek(self, k: int = 0) -> str | None:
        j = self.index + k
        if j >= len(self.string):
            return None
        return self.string[j]

    def _read(self) -> str | None:
        next: str | None = self._peek()
        if next is not None:
            self.index += 1
        return next
