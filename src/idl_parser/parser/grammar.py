"""Recursive-descent parser for endpoint signatures.

    endpoint      := method SEP path query_params (SEP request_type)? (SEP "->" SEP response_type)?
    method        := "GET"|"get"|"POST"|"post"|"PUT"|"put"|"DELETE"|"delete"
    path          := (segment | path_variable)+
    segment       := "/" name
    path_variable := "/{" name ":" variable_type "}"
    query_params  := ("?" variable ("&" variable)*)?
    variable      := name ":" variable_type
    name          := LETTER (LETTER|DIGIT)*

Each rule is one function taking a Cursor. A rule either returns its node
with the cursor advanced past it, or raises a ParseError subclass. Once a
clause has started, a failure inside it aborts the whole parse.
"""

from idl_parser.config import ParserOptions

from .base import (
    METHOD_LITERALS,
    Endpoint,
    Method,
    PathComponent,
    PathVariable,
    Segment,
    Variable,
    VariableType,
)
from .errors import (
    LimitExceeded,
    MissingSeparator,
    ParseError,
    PathSyntaxError,
    QueryParamSyntaxError,
    TrailingInputError,
    TypeNameSyntaxError,
    UnknownMethod,
    UnknownVariableType,
)
from .lexer import Cursor, is_ident_start, is_separator

ARROW = "->"

_METHOD_EXPECTED = "one of " + ", ".join(METHOD_LITERALS)
_TYPE_EXPECTED = "a variable type (" + ", ".join(t.value for t in VariableType) + ")"


def parse_endpoint(text: str, options: ParserOptions | None = None) -> Endpoint:
    """Parse one endpoint signature such as ``GET /users/{id:int} -> User``.

    Raises a ParseError subclass describing the first failure.
    """
    options = options or ParserOptions()
    if options.max_input_length is not None and len(text) > options.max_input_length:
        raise LimitExceeded(
            text,
            options.max_input_length,
            f"at most {options.max_input_length} characters",
            f"{len(text)} characters",
        )

    cur = Cursor(text)
    method = parse_method(cur)
    _require_separator(cur, "whitespace after the method")
    path = parse_path(cur, options.max_path_components)
    query_params = parse_query_params(cur, options.max_query_params)
    request_type, response_type = _parse_signature_tail(cur)

    return Endpoint(
        method=method,
        path=path,
        query_params=query_params,
        request_type=request_type,
        response_type=response_type,
    )


def parse_method(cur: Cursor) -> Method:
    start = cur.pos
    token = cur.take_word()
    method = METHOD_LITERALS.get(token)
    if method is None:
        found = repr(token) if token else cur.found()
        raise UnknownMethod(cur.text, start, _METHOD_EXPECTED, found)
    return method


def parse_variable_type(cur: Cursor) -> VariableType:
    """Match a type keyword atomically: ``integer`` never matches ``int``."""
    start = cur.pos
    token = cur.take_word()
    try:
        return VariableType(token)
    except ValueError:
        found = repr(token) if token else cur.found()
        raise UnknownVariableType(cur.text, start, _TYPE_EXPECTED, found) from None


def parse_variable(cur: Cursor, syntax_error: type[ParseError]) -> tuple[str, VariableType]:
    """Parse ``name:type``.

    Shared by path variables and query params; ``syntax_error`` is the error
    class reported for a missing name or colon at the calling site.
    """
    name = _parse_name(cur, syntax_error, "a variable name")
    if not cur.eat(":"):
        raise syntax_error(cur.text, cur.pos, f"':' after variable name {name!r}", cur.found())
    return name, parse_variable_type(cur)


def parse_path(cur: Cursor, max_components: int | None = None) -> tuple[PathComponent, ...]:
    if not cur.startswith("/"):
        raise PathSyntaxError(cur.text, cur.pos, "a path starting with '/'", cur.found())

    components: list[PathComponent] = []
    while cur.startswith("/"):
        if max_components is not None and len(components) >= max_components:
            raise LimitExceeded(
                cur.text, cur.pos, f"at most {max_components} path components", "another component"
            )
        components.append(_parse_path_component(cur))
    return tuple(components)


def parse_query_params(cur: Cursor, max_params: int | None = None) -> tuple[Variable, ...]:
    """Parse the optional ``?a:int&b:bool`` clause. No ``?`` means no params."""
    if not cur.startswith("?"):
        return ()

    params: list[Variable] = []
    delimiter = "?"
    while cur.eat(delimiter):
        if max_params is not None and len(params) >= max_params:
            raise LimitExceeded(
                cur.text, cur.pos - 1, f"at most {max_params} query parameters", "another parameter"
            )
        if not is_ident_start(cur.peek()):
            raise QueryParamSyntaxError(
                cur.text, cur.pos, f"a query parameter after {delimiter!r}", cur.found()
            )
        name, var_type = parse_variable(cur, QueryParamSyntaxError)
        params.append(Variable(name=name, var_type=var_type))
        delimiter = "&"
    return tuple(params)


def _parse_path_component(cur: Cursor) -> PathComponent:
    start = cur.pos
    if cur.eat("/{"):
        name, var_type = parse_variable(cur, PathSyntaxError)
        if not cur.eat("}"):
            raise PathSyntaxError(
                cur.text, cur.pos, f"'}}' closing the path variable opened at offset {start + 1}", cur.found()
            )
        return PathVariable(name=name, var_type=var_type)

    cur.eat("/")
    return Segment(name=_parse_name(cur, PathSyntaxError, "a path segment name"))


def _parse_signature_tail(cur: Cursor) -> tuple[str | None, str | None]:
    """Parse ``(SEP request_type)? (SEP "->" SEP response_type)?`` and end of input."""
    request_type = None
    response_type = None

    if cur.take_separator():
        if is_ident_start(cur.peek()):
            request_type = cur.take_name()
            if cur.take_separator():
                if cur.startswith(ARROW):
                    response_type = _parse_response_type(cur)
            elif cur.startswith(ARROW):
                raise MissingSeparator(cur.text, cur.pos, f"whitespace before {ARROW!r}", cur.found(2))
        elif cur.startswith(ARROW):
            response_type = _parse_response_type(cur)
    elif cur.startswith(ARROW):
        raise MissingSeparator(cur.text, cur.pos, f"whitespace before {ARROW!r}", cur.found(2))

    _require_end(cur)
    return request_type, response_type


def _parse_response_type(cur: Cursor) -> str:
    cur.eat(ARROW)
    _require_separator(cur, f"whitespace after {ARROW!r}")
    name = _parse_name(cur, TypeNameSyntaxError, "a response type name")
    cur.take_separator()
    return name


def _parse_name(cur: Cursor, error: type[ParseError], what: str) -> str:
    start = cur.pos
    name = cur.take_name()
    if not name:
        raise error(cur.text, start, what, cur.found())
    return name


def _require_separator(cur: Cursor, what: str) -> None:
    if not is_separator(cur.peek()):
        raise MissingSeparator(cur.text, cur.pos, what, cur.found())
    cur.take_separator()


def _require_end(cur: Cursor) -> None:
    if not cur.at_end():
        raise TrailingInputError(
            cur.text, cur.pos, "end of input", repr(cur.text[cur.pos:cur.pos + 20])
        )
