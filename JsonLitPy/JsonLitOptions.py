class JsonReaderOptions:
    # Accept "//" line comments outside strings.
    allow_comments: bool
    # Return non-integer numbers as Decimal instead of float.
    decimal_numbers: bool
    # Whether to reject anything after the first element.
    parse_single_element: bool

    def __init__(self, allow_comments: bool = False, decimal_numbers: bool = False, parse_single_element: bool = True):
        self.allow_comments = allow_comments
        self.decimal_numbers = decimal_numbers
        self.parse_single_element = parse_single_element

    def __repr__(self) -> str:
        return (f"JsonReaderOptions(allow_comments={self.allow_comments!r}, "
                f"decimal_numbers={self.decimal_numbers!r}, "
                f"parse_single_element={self.parse_single_element!r})")
