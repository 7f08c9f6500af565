import logging
import re
from typing import Callable

from .JsonLitOptions import JsonReaderOptions

logger = logging.getLogger(__name__)

# Marks the end of every string once strings have been demarcated.
END_MARKER = "@"
# Stand-ins for source text that would otherwise be mistaken for structure.
MARKER_PLACEHOLDER = "\\at"
QUOTE_PLACEHOLDER = "\\quote"

def escape_aware(target: str, replacement: str | Callable[..., str]) -> tuple[re.Pattern, Callable[[re.Match], str]]:
    """
    Builds a pattern matching a run of backslashes followed by `target`, and a
    handler for `re.sub` that replaces the target only when it is not escaped.

    The run is kept as-is. An even run means the target is not escaped and is
    replaced by `replacement` (called with the target's own captures if it is
    callable). An odd run means the target is escaped, so the whole match is
    returned untouched.
    """
    pattern = re.compile(r"(\\*)" + target)

    def handler(match: re.Match) -> str:
        backslashes = match.group(1)
        if len(backslashes) % 2 == 1:
            return match.group(0)
        if callable(replacement):
            return backslashes + replacement(*match.groups()[1:])
        return backslashes + replacement

    return pattern, handler

def _byte_escapes(text: str) -> str:
    # Octal is the only fixed-width byte escape Python bytes literals accept
    return "".join(f"\\{byte:03o}" for byte in text.encode("utf-8", "surrogatepass"))

def _surrogate_pair(high: str, low: str) -> str:
    code_point = 0x10000 + ((int(high, 16) - 0xD800) << 10) + (int(low, 16) - 0xDC00)
    return _byte_escapes(chr(code_point))

def _code_point(hex_digits: str) -> str:
    return _byte_escapes(chr(int(hex_digits, 16)))

_ESCAPED_QUOTE = escape_aware(r'\\"', QUOTE_PLACEHOLDER)
_ESCAPED_SLASH = escape_aware(r"\\/", "/")
_SURROGATE_PAIR_ESCAPE = escape_aware(r"\\u([dD][89abAB][0-9a-fA-F]{2})\\u([dD][c-fC-F][0-9a-fA-F]{2})", _surrogate_pair)
_UNICODE_ESCAPE = escape_aware(r"\\u([0-9a-fA-F]{4})", _code_point)
_MARKER_RESTORE = escape_aware(r"\\at", END_MARKER)
_QUOTE_RESTORE = escape_aware(r"\\quote", '\\"')

_STRING = re.compile(r'"([^"]*)"')
_MARKED_STRING = re.compile(r'(b"[^"@]*")@')
_PROPERTY_NAME = re.compile(r'(b"[^"@]*"@)\s*:\s*')
_NON_ASCII = re.compile(r"[^\x00-\x7f]")

# Every stretch of text outside a string, by where it starts and ends.
_OUTSIDE_STRINGS = (
    re.compile(r'\A[^"]*"'),  # start of input to the first string
    re.compile(r'@[^"]*"'),   # one string to the next
    re.compile(r'@[^"]*\Z'),  # last string to end of input
    re.compile(r'\A[^"]*\Z'), # input holding no string at all
)
# JSON brackets are already Python list and dict displays; only the words differ.
_LITERAL_WORDS = {"null": "None", "true": "True", "false": "False"}
_LITERAL_WORD = re.compile(r"\b(null|true|false)\b")

class JsonLiteralRewriter:
    # The JSON text to rewrite.
    string: str
    # The options to use when rewriting.
    options: JsonReaderOptions

    def __init__(self, string: str, options: JsonReaderOptions | None = None) -> None:
        self.string = string
        self.options = options if options is not None else JsonReaderOptions()

    @staticmethod
    def rewrite_from_string(string: str, options: JsonReaderOptions | None = None) -> str:
        """
        Rewrites JSON text into a Python literal expression.
        """
        return JsonLiteralRewriter(string, options).rewrite()

    def rewrite(self) -> str:
        """
        Runs every stage in order, each one consuming the text the previous
        stage produced.
        """
        text = self.string
        for stage in (
            self._mask_escaped_quotes,
            self._mask_end_marker,
            self._demarcate_strings,
            self._rewrite_outside_strings,
            self._rewrite_property_names,
            self._rewrite_unicode,
            self._strip_end_markers,
            self._restore_end_marker,
            self._restore_escaped_quotes,
        ):
            text = stage(text)
            logger.debug("%s: %r", stage.__name__.lstrip("_"), text)
        return text

    def _mask_escaped_quotes(self, text: str) -> str:
        return _ESCAPED_QUOTE[0].sub(_ESCAPED_QUOTE[1], text)

    def _mask_end_marker(self, text: str) -> str:
        return text.replace(END_MARKER, MARKER_PLACEHOLDER)

    def _demarcate_strings(self, text: str) -> str:
        def demarcate(match: re.Match) -> str:
            content = _ESCAPED_SLASH[0].sub(_ESCAPED_SLASH[1], match.group(1))
            return f'b"{content}"{END_MARKER}'

        return _STRING.sub(demarcate, text)

    def _rewrite_outside(self, match: re.Match) -> str:
        segment = _LITERAL_WORD.sub(lambda word: _LITERAL_WORDS[word.group(1)], match.group(0))
        if self.options.allow_comments:
            segment = segment.replace("//", "#")
        return segment

    def _rewrite_outside_strings(self, text: str) -> str:
        for pattern in _OUTSIDE_STRINGS:
            text = pattern.sub(self._rewrite_outside, text)
        return text

    def _rewrite_property_names(self, text: str) -> str:
        return _PROPERTY_NAME.sub(r"\1: ", text)

    def _rewrite_unicode(self, text: str) -> str:
        text = _SURROGATE_PAIR_ESCAPE[0].sub(_SURROGATE_PAIR_ESCAPE[1], text)
        text = _UNICODE_ESCAPE[0].sub(_UNICODE_ESCAPE[1], text)
        return _NON_ASCII.sub(lambda match: _byte_escapes(match.group(0)), text)

    def _strip_end_markers(self, text: str) -> str:
        return _MARKED_STRING.sub(r"\1", text)

    def _restore_end_marker(self, text: str) -> str:
        return _MARKER_RESTORE[0].sub(_MARKER_RESTORE[1], text)

    def _restore_escaped_quotes(self, text: str) -> str:
        return _QUOTE_RESTORE[0].sub(_QUOTE_RESTORE[1], text)
