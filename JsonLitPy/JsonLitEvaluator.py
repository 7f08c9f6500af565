import ast
import logging
import warnings

from .JsonLitErrors import CompileError, UndefinedReferenceError

logger = logging.getLogger(__name__)

class SandboxedEvaluator:
    """
    Evaluates Python literal text produced by the rewriter.

    The text is compiled to an expression tree and the tree is walked directly,
    so only literal displays can produce a value. Names fail with
    UndefinedReferenceError, and any other kind of expression fails with
    CompileError.
    """

    @staticmethod
    def evaluate_from_string(literal: str) -> object:
        return SandboxedEvaluator().evaluate(literal)

    def evaluate(self, literal: str) -> object:
        try:
            # catch_warnings swaps the process-wide filters, so it is not thread-safe
            with warnings.catch_warnings():
                # Invalid escapes in a bytes literal become compile errors
                warnings.simplefilter("error", SyntaxWarning)
                warnings.simplefilter("error", DeprecationWarning)
                # Leading indentation is a syntax error in eval mode
                tree = ast.parse(literal.strip(" \t\n\r"), mode="eval")
        except SyntaxError as e:
            logger.debug("literal does not compile: %r", literal)
            raise CompileError(e.msg, e.lineno, e.offset) from e
        except ValueError as e:
            # Null bytes, on interpreters that do not report them as SyntaxError
            raise CompileError(str(e)) from e
        return self._evaluate_node(tree.body)

    def _evaluate_node(self, node: ast.AST) -> object:
        match node:
            case ast.Constant(value=bytes() as value):
                return value.decode("utf-8", "surrogatepass")
            case ast.Constant(value=None | bool() | int() | float() as value):
                return value
            case ast.List(elts=elements):
                return [self._evaluate_node(element) for element in elements]
            case ast.Dict(keys=keys, values=values):
                result: dict[str, object] = {}
                for key_node, value_node in zip(keys, values):
                    if key_node is None:
                        raise self._err("dictionary unpacking is not a literal", value_node)
                    key = self._evaluate_node(key_node)
                    if not isinstance(key, str):
                        raise self._err(f"object key must be a string, not {type(key).__name__}", key_node)
                    result[key] = self._evaluate_node(value_node)
                return result
            case ast.UnaryOp(op=ast.USub() | ast.UAdd() as op, operand=ast.Constant(value=int() | float() as value)) if not isinstance(value, bool):
                return -value if isinstance(op, ast.USub) else value
            case ast.Name(id=name):
                logger.debug("undefined name %r in literal", name)
                raise UndefinedReferenceError(name)
        raise self._err(f"unsupported expression `{ast.unparse(node)}`", node)

    def _err(self, message: str, node: ast.AST) -> CompileError:
        return CompileError(message, node.lineno, node.col_offset + 1)
