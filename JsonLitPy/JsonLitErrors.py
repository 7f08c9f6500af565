class JsonLitError(ValueError):
    pass

class JsonSyntaxError(JsonLitError):
    position: int | None

    def __init__(self, message: str, position: int | None = None):
        self.position = position
        if position is not None:
            message = f"{message} at {position}"
        super().__init__(message)

class UndefinedReferenceError(JsonSyntaxError):
    """
    A bare identifier appeared where a value was expected.
    """
    name: str

    def __init__(self, name: str, position: int | None = None):
        self.name = name
        super().__init__(f"invalid value: `{name}`", position)

class CompileError(JsonLitError):
    """
    Literal text that the evaluator cannot compile or will not run.
    """
    lineno: int | None
    offset: int | None

    def __init__(self, message: str, lineno: int | None = None, offset: int | None = None):
        self.lineno = lineno
        self.offset = offset
        if lineno is not None:
            message = f"{message} (line {lineno}, column {offset})"
        super().__init__(message)
