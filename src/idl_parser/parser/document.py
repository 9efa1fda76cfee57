"""Load endpoint signatures from files.

Two document formats are supported:

- text: one signature per line; blank lines and ``#`` comments are skipped.
- YAML: a list of signature strings, or a mapping of operation name to
  signature.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel

from idl_parser.config import ParserOptions

from .base import Endpoint
from .errors import ParseError
from .grammar import parse_endpoint

YAML_SUFFIXES = (".yaml", ".yml")
TEXT_SUFFIXES = (".idl", ".txt")


class Signature(BaseModel):
    """A raw signature string and where it came from."""

    text: str
    line: int
    column: int = 1
    name: str | None = None


class NamedEndpoint(BaseModel):
    name: str | None = None
    line: int
    endpoint: Endpoint


class Diagnostic(BaseModel):
    """One parse failure located in a document."""

    line: int
    column: int
    kind: str
    message: str
    signature: str
    name: str | None = None

    def format(self, source: str = "<input>") -> str:
        return f"{source}:{self.line}:{self.column}: {self.kind}: {self.message}"


class DocumentError(Exception):
    """A signature in a document failed to parse."""

    def __init__(self, source: str, signature: Signature, error: ParseError):
        self.source = source
        self.signature = signature
        self.error = error
        self.line, self.column = locate(signature, error)
        super().__init__(f"{source}:{self.line}:{self.column}: {error.kind}: {error.message}")

    def __reduce__(self):
        return (self.__class__, (self.source, self.signature, self.error))


def locate(signature: Signature, error: ParseError) -> tuple[int, int]:
    """Map an error offset inside a signature to a document line and column."""
    line = signature.line + error.line - 1
    if error.line == 1:
        return line, signature.column + error.column - 1
    return line, error.column


def detect_format(file_path: Path) -> str:
    """Detect the format of a signature document.

    Returns: 'yaml' or 'text'.
    """
    suffix = file_path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        return "yaml"
    if suffix in TEXT_SUFFIXES:
        return "text"

    text = file_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        return "text"
    if isinstance(data, list) and all(isinstance(item, str) for item in data):
        return "yaml"
    # "GET /a?x: int" loads as a mapping too; operation names never contain whitespace.
    if isinstance(data, dict) and all(
        isinstance(k, str) and isinstance(v, str) and k.split() == [k] for k, v in data.items()
    ):
        return "yaml"
    return "text"


def read_signatures(file_path: Path, fmt: str = "auto") -> list[Signature]:
    """Read the raw signatures of a document without parsing them."""
    if fmt == "auto":
        fmt = detect_format(file_path)

    text = file_path.read_text(encoding="utf-8")
    if fmt == "yaml":
        return signatures_from_yaml(text)
    return signatures_from_text(text)


def signatures_from_text(text: str) -> list[Signature]:
    signatures = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith("#"):
            continue
        indent = len(raw) - len(raw.lstrip())
        signatures.append(Signature(text=stripped, line=lineno, column=indent + 1))
    return signatures


def signatures_from_yaml(text: str) -> list[Signature]:
    """Collect signatures from a YAML list or mapping, keeping node positions."""
    root = yaml.compose(text)
    if root is None:
        return []

    lines = text.splitlines()
    if isinstance(root, yaml.SequenceNode):
        return [_scalar_signature(node, lines) for node in root.value]
    if isinstance(root, yaml.MappingNode):
        signatures = []
        seen: dict[str, int] = {}
        for key, value in root.value:
            name = _scalar_value(key)
            line = key.start_mark.line + 1
            if name in seen:
                raise ValueError(
                    f"duplicate operation name {name!r} at line {line} (first defined at line {seen[name]})"
                )
            seen[name] = line
            signatures.append(_scalar_signature(value, lines, name=name))
        return signatures
    raise ValueError("YAML document must be a list of signatures or a mapping of name to signature")


def load_endpoints(
    file_path: Path, fmt: str = "auto", options: ParserOptions | None = None
) -> list[NamedEndpoint]:
    """Parse every signature in a document, stopping at the first failure."""
    endpoints = []
    for sig in read_signatures(file_path, fmt):
        try:
            endpoint = parse_endpoint(sig.text, options)
        except ParseError as e:
            raise DocumentError(str(file_path), sig, e) from e
        endpoints.append(NamedEndpoint(name=sig.name, line=sig.line, endpoint=endpoint))
    return endpoints


def check_signatures(
    signatures: list[Signature], options: ParserOptions | None = None
) -> list[Diagnostic]:
    """Parse every signature and collect all failures."""
    diagnostics = []
    for sig in signatures:
        try:
            parse_endpoint(sig.text, options)
        except ParseError as e:
            line, column = locate(sig, e)
            diagnostics.append(
                Diagnostic(
                    line=line,
                    column=column,
                    kind=e.kind,
                    message=e.message,
                    signature=sig.text,
                    name=sig.name,
                )
            )
    return diagnostics


def _scalar_value(node: yaml.Node) -> str:
    if not isinstance(node, yaml.ScalarNode):
        raise ValueError(f"expected a string at line {node.start_mark.line + 1}")
    return node.value


def _scalar_signature(node: yaml.Node, lines: list[str], name: str | None = None) -> Signature:
    text = _scalar_value(node)
    line = node.start_mark.line + 1
    column = node.start_mark.column + 1
    if node.style in ("'", '"'):
        column += 1
    elif node.style in ("|", ">"):
        # start_mark points at the indicator; content starts on a later line.
        for lineno in range(node.start_mark.line + 1, node.end_mark.line + 1):
            if lineno < len(lines) and lines[lineno].strip():
                raw = lines[lineno]
                line, column = lineno + 1, len(raw) - len(raw.lstrip()) + 1
                break
    return Signature(text=text, line=line, column=column, name=name)
