import unittest
from decimal import Decimal
from JsonLitPy import JsonReader, JsonReaderOptions, JsonToken, JsonTokenType, JsonNumberParser, JsonSyntaxError, UndefinedReferenceError, loads

class JsonLitPyTests(unittest.TestCase):
    #
    # Read Tests
    #

    def test_BasicObjectTest(self):
        json: str = """
{
    "a": "b"
}
"""
        reader: JsonReader = JsonReader(json)
        tokens: list[JsonToken] = list(reader.read_tokens())

        self.assertEqual(len(tokens), 5)
        self.assertEqual(tokens[0].json_type, JsonTokenType.START_OBJECT)
        self.assertEqual(tokens[1].json_type, JsonTokenType.STRING)
        self.assertEqual(tokens[1].value, "a")
        self.assertEqual(tokens[2].json_type, JsonTokenType.COLON)
        self.assertEqual(tokens[3].json_type, JsonTokenType.STRING)
        self.assertEqual(tokens[3].value, "b")
        self.assertEqual(tokens[4].json_type, JsonTokenType.END_OBJECT)
        self.assertEqual(tokens[4].position, 16)

    def test_LiteralTokenTest(self):
        tokens: list[JsonToken] = list(JsonReader("[true, false, null, -1.5e3]").read_tokens())

        self.assertEqual([token.json_type for token in tokens], [
            JsonTokenType.START_ARRAY,
            JsonTokenType.TRUE, JsonTokenType.COMMA,
            JsonTokenType.FALSE, JsonTokenType.COMMA,
            JsonTokenType.NULL, JsonTokenType.COMMA,
            JsonTokenType.NUMBER,
            JsonTokenType.END_ARRAY,
        ])
        self.assertEqual(tokens[7].value, "-1.5e3")

    def test_CommentTokenTest(self):
        reader: JsonReader = JsonReader("// first\n0", JsonReaderOptions(allow_comments=True))
        tokens: list[JsonToken] = list(reader.read_tokens())

        self.assertEqual(tokens[0].json_type, JsonTokenType.COMMENT)
        self.assertEqual(tokens[0].value, " first")
        self.assertEqual(tokens[1].json_type, JsonTokenType.NUMBER)
        self.assertEqual(tokens[1].value, "0")

    #
    # Parse Tests
    #

    def test_ScalarTest(self):
        self.assertIs(loads("true"), True)
        self.assertIs(loads("false"), False)
        self.assertIsNone(loads("null"))
        self.assertEqual(loads("123"), 123)
        self.assertIsInstance(loads("123"), int)
        self.assertEqual(loads("-4.5"), -4.5)
        self.assertEqual(loads("1E2"), 100.0)
        self.assertEqual(loads(' "text" '), "text")

    def test_StringEscapeFidelityTest(self):
        element: dict[str, bool] = loads(r'{"a[b]\\": true}')

        self.assertEqual(element, {"a[b]\\": True})

    def test_NestedStringTransparencyTest(self):
        element: dict[str, list[str]] = loads(r'{"x": ["null", "{\"name\": \"val\"}"]}')

        self.assertEqual(len(element["x"]), 2)
        self.assertEqual(element["x"][0], "null")
        self.assertEqual(element["x"][1], '{"name": "val"}')

    def test_UnicodeEscapeTest(self):
        element: dict[str, int] = loads(r'{"\u00B5": 1}')

        self.assertEqual(list(element), ["µ"])
        self.assertEqual(list(element)[0].encode("utf-8"), b"\xc2\xb5")

    def test_SurrogatePairTest(self):
        self.assertEqual(loads(r'"\uD83D\uDC7D and \ud83d"'), "\U0001F47D and \ud83d")

    def test_EscapedSlashTest(self):
        self.assertEqual(loads(r'{"a": "\/"}'), {"a": "/"})

    def test_EscapeSequenceTest(self):
        self.assertEqual(loads(r'"\"\\\/\b\f\n\r\t"'), "\"\\/\b\f\n\r\t")

    def test_MarkerCharacterTest(self):
        self.assertEqual(loads('{"a": "x@y", "@": "\\\\at"}'), {"a": "x@y", "@": "\\at"})

    def test_NestedTest(self):
        json: str = """
{
    "list": [1, [2, []], {}],
    "object": {"inner": {"deep": null}},
    "empty": ""
}
"""
        element: dict[str, object] = loads(json)

        self.assertEqual(element, {
            "list": [1, [2, []], {}],
            "object": {"inner": {"deep": None}},
            "empty": "",
        })

    def test_DuplicateKeyTest(self):
        self.assertEqual(loads('{"a": 1, "a": 2}'), {"a": 2})

    def test_DeepNestingTest(self):
        depth: int = 10000
        element: list[object] = loads("[" * depth + "]" * depth)

        for _ in range(depth - 1):
            self.assertEqual(len(element), 1)
            element = element[0]
        self.assertEqual(element, [])

    def test_DecimalNumbersTest(self):
        element: list[object] = loads("[1.10, 2, 3e1]", JsonReaderOptions(decimal_numbers=True))

        self.assertEqual(element, [Decimal("1.10"), 2, Decimal("3e1")])
        self.assertIsInstance(element[0], Decimal)
        self.assertIsInstance(element[1], int)

    def test_CommentTest(self):
        json: str = """
[
    1, // one
    "// not a comment"
]
"""
        element: list[object] = loads(json, JsonReaderOptions(allow_comments=True))

        self.assertEqual(element, [1, "// not a comment"])
        with self.assertRaises(JsonSyntaxError):
            loads(json)

    def test_MultipleElementsTest(self):
        reader: JsonReader = JsonReader('1 [2] {"a": 3} // end', JsonReaderOptions(
            allow_comments=True,
            parse_single_element=False,
        ))

        self.assertEqual(reader.parse_element(), 1)
        self.assertTrue(reader.has_token())
        self.assertEqual(reader.parse_element(), [2])
        self.assertEqual(reader.parse_element(), {"a": 3})
        self.assertFalse(reader.has_token())

    #
    # Error Tests
    #

    def test_UndefinedReferenceTest(self):
        with self.assertRaises(UndefinedReferenceError) as context:
            loads('{"a": undefined_token}')

        self.assertEqual(context.exception.name, "undefined_token")
        self.assertEqual(context.exception.position, 6)
        self.assertEqual(str(context.exception), "invalid value: `undefined_token` at 6")

    def test_SyntaxErrorPositionTest(self):
        cases: dict[str, int] = {
            "": 0,
            "[1,]": 3,
            "[1 2]": 3,
            '{"a" 1}': 5,
            '{"a": 1,}': 8,
            '{1: 2}': 1,
            '{"a": 1]': 7,
            "[1] 2": 4,
            '"open': 0,
            r'"\q"': 1,
            r'"\u12"': 3,
            "01": 0,
            "-": 0,
            "1.": 0,
            "[1": 2,
            "#": 0,
            "/ 1": 0,
        }
        for json, position in cases.items():
            with self.subTest(json=json):
                with self.assertRaises(JsonSyntaxError) as context:
                    loads(json)
                self.assertEqual(context.exception.position, position)

    def test_ControlCharacterTest(self):
        with self.assertRaises(JsonSyntaxError):
            loads('"a\nb"')

    def test_EmptyInputMessageTest(self):
        with self.assertRaises(JsonSyntaxError) as context:
            loads("   ")

        self.assertEqual(str(context.exception), "Expected token, got end of input at 3")

    def test_ErrorsAreValueErrorsTest(self):
        with self.assertRaises(ValueError):
            loads("[")

    #
    # Number Tests
    #

    def test_NumberParserTest(self):
        self.assertEqual(JsonNumberParser.parse("0"), 0)
        self.assertEqual(JsonNumberParser.parse("-0"), 0)
        self.assertEqual(JsonNumberParser.parse("12"), 12)
        self.assertEqual(JsonNumberParser.parse("1.5e-2"), 0.015)
        self.assertEqual(JsonNumberParser.parse("2.50", decimal_numbers=True), Decimal("2.50"))
        for token in ("+1", "01", ".5", "1.", "1e", "0x10", "1_000"):
            with self.subTest(token=token):
                with self.assertRaises(ValueError):
                    JsonNumberParser.parse(token)

if __name__ == '__main__':
    unittest.main()
