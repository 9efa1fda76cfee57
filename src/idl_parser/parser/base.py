"""AST models for parsed endpoint signatures.

The grammar produces these immutable models; they can be dumped with
pydantic's serializers or rendered back to canonical DSL text.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

NAME_PATTERN = r"^[A-Za-z][A-Za-z0-9]*$"

Name = Annotated[str, Field(pattern=NAME_PATTERN)]


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


# Exact literals only: "Get" or "pOST" are rejected.
METHOD_LITERALS: dict[str, Method] = {
    "GET": Method.GET,
    "get": Method.GET,
    "POST": Method.POST,
    "post": Method.POST,
    "PUT": Method.PUT,
    "put": Method.PUT,
    "DELETE": Method.DELETE,
    "delete": Method.DELETE,
}


class VariableType(str, Enum):
    STRING = "string"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    BYTE = "byte"
    FLOAT = "float"
    DOUBLE = "double"
    BOOL = "bool"


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class Variable(_Node):
    """A typed ``name:type`` pair used as a query parameter."""

    name: Name
    var_type: VariableType

    def to_dsl(self) -> str:
        return f"{self.name}:{self.var_type.value}"


class Segment(_Node):
    """A literal path element, written ``/name``."""

    kind: Literal["segment"] = "segment"
    name: Name

    def to_dsl(self) -> str:
        return f"/{self.name}"


class PathVariable(_Node):
    """A typed path placeholder, written ``/{name:type}``."""

    kind: Literal["variable"] = "variable"
    name: Name
    var_type: VariableType

    def to_dsl(self) -> str:
        return f"/{{{self.name}:{self.var_type.value}}}"


PathComponent = Annotated[Union[Segment, PathVariable], Field(discriminator="kind")]


class Endpoint(_Node):
    """Root node: one fully parsed endpoint signature."""

    method: Method
    path: tuple[PathComponent, ...] = Field(min_length=1)
    query_params: tuple[Variable, ...] = ()
    request_type: Name | None = None
    response_type: Name | None = None

    def to_dsl(self) -> str:
        """Render canonical DSL text that parses back to an equal Endpoint."""
        text = self.method.value + " " + "".join(c.to_dsl() for c in self.path)
        if self.query_params:
            text += "?" + "&".join(v.to_dsl() for v in self.query_params)
        if self.request_type is not None:
            text += f" {self.request_type}"
        if self.response_type is not None:
            text += f" -> {self.response_type}"
        return text

    def __str__(self) -> str:
        return self.to_dsl()
