from .JsonLitErrors import CompileError, JsonLitError, JsonSyntaxError, UndefinedReferenceError
from .JsonLitEvaluator import SandboxedEvaluator
from .JsonLitOptions import JsonReaderOptions
from .JsonLitPy import JsonNumberParser, JsonReader, JsonToken, JsonTokenType
from .JsonLitRewriter import JsonLiteralRewriter, escape_aware

def loads(string: str, options: JsonReaderOptions | None = None) -> object:
    """
    Decodes JSON text by scanning it into tokens and building the value directly.
    """
    return JsonReader.parse_element_from_string(string, options)

def to_literal(string: str, options: JsonReaderOptions | None = None) -> str:
    """
    Rewrites JSON text into the equivalent Python literal text.
    """
    return JsonLiteralRewriter.rewrite_from_string(string, options)

def literal_loads(string: str, options: JsonReaderOptions | None = None) -> object:
    """
    Decodes JSON text by rewriting it into a Python literal and evaluating that
    literal in a sandbox. Malformed input is not always detected.
    """
    return SandboxedEvaluator.evaluate_from_string(to_literal(string, options))

__all__ = [
    "CompileError",
    "JsonLiteralRewriter",
    "JsonLitError",
    "JsonNumberParser",
    "JsonReader",
    "JsonReaderOptions",
    "JsonSyntaxError",
    "JsonToken",
    "JsonTokenType",
    "SandboxedEvaluator",
    "UndefinedReferenceError",
    "escape_aware",
    "literal_loads",
    "loads",
    "to_literal",
]
