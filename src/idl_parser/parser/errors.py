"""Parse error taxonomy.

Every error carries the offset into the original input where parsing
stopped, what the grammar expected there, and what it found instead.
"""

END_OF_INPUT = "end of input"


class ParseError(ValueError):
    """Base class for all signature parse failures."""

    kind = "ParseError"

    def __init__(self, text: str, offset: int, expected: str, found: str | None = None):
        self.text = text
        self.offset = offset
        self.expected = expected
        self.found = found if found is not None else _found_at(text, offset)
        super().__init__(self.message)

    def __reduce__(self):
        return (self.__class__, (self.text, self.offset, self.expected, self.found))

    @property
    def message(self) -> str:
        return f"expected {self.expected}, found {self.found} at offset {self.offset}"

    @property
    def line(self) -> int:
        return self.text.count("\n", 0, self.offset) + 1

    @property
    def column(self) -> int:
        return self.offset - (self.text.rfind("\n", 0, self.offset) + 1) + 1

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "offset": self.offset,
            "line": self.line,
            "column": self.column,
            "expected": self.expected,
            "found": self.found,
            "message": self.message,
        }


class UnknownMethod(ParseError):
    kind = "UnknownMethod"


class MissingSeparator(ParseError):
    kind = "MissingSeparator"


class PathSyntaxError(ParseError):
    kind = "PathSyntaxError"


class UnknownVariableType(ParseError):
    kind = "UnknownVariableType"


class QueryParamSyntaxError(ParseError):
    kind = "QueryParamSyntaxError"


class TypeNameSyntaxError(ParseError):
    kind = "TypeNameSyntaxError"


class TrailingInputError(ParseError):
    kind = "TrailingInputError"


class LimitExceeded(ParseError):
    kind = "LimitExceeded"


def _found_at(text: str, offset: int) -> str:
    if offset >= len(text):
        return END_OF_INPUT
    return repr(text[offset])
