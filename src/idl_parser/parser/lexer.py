"""Character classes and a cursor over a signature string."""

from .errors import END_OF_INPUT

SEPARATOR_CHARS = frozenset(" \r\n")


def is_ident_start(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def is_ident_continue(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


def is_separator(ch: str) -> bool:
    return ch in SEPARATOR_CHARS


class Cursor:
    """Forward-only position in the input text."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        """Return the current character, or '' at the end of input."""
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def startswith(self, literal: str) -> bool:
        return self.text.startswith(literal, self.pos)

    def eat(self, literal: str) -> bool:
        if self.startswith(literal):
            self.pos += len(literal)
            return True
        return False

    def take_name(self) -> str:
        """Consume an identifier (letter, then letters/digits). May return ''."""
        if not is_ident_start(self.peek()):
            return ""
        return self._take_while(is_ident_continue)

    def take_word(self) -> str:
        """Consume a maximal run of letters and digits, used for keywords."""
        return self._take_while(is_ident_continue)

    def take_separator(self) -> int:
        """Consume a whitespace run and return its length."""
        start = self.pos
        self._take_while(is_separator)
        return self.pos - start

    def found(self, width: int = 1) -> str:
        """Describe the text at the cursor for an error message."""
        if self.at_end():
            return END_OF_INPUT
        return repr(self.text[self.pos:self.pos + width])

    def _take_while(self, predicate) -> str:
        start = self.pos
        text = self.text
        while self.pos < len(text) and predicate(text[self.pos]):
            self.pos += 1
        return text[start:self.pos]
