# Semantic locator language for semloc
# Parses locators like {list} outer {listitem 'Home' current:page}

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .errors import LocatorError

# Allowed values per supported ARIA attribute. None means "any positive integer".
SUPPORTED_ATTRIBUTES: dict[str, frozenset[str] | None] = {
    "checked": frozenset({"true", "false", "mixed"}),
    "current": frozenset({"true", "false", "page", "step", "location", "date", "time"}),
    "disabled": frozenset({"true", "false"}),
    "expanded": frozenset({"true", "false"}),
    "level": None,
    "pressed": frozenset({"true", "false", "mixed"}),
    "selected": frozenset({"true", "false"}),
}

OUTER_KEYWORD: str = "outer"


# Token types for the locator lexer
class TokenType:
    LBRACE: str = "LBRACE"  # {
    RBRACE: str = "RBRACE"  # }
    WORD: str = "WORD"  # role, attribute name/value, or "outer"
    COLON: str = "COLON"  # :
    STRING: str = "STRING"  # 'name' or "name"
    EOF: str = "EOF"


class Token:
    __slots__ = ("pos", "type", "value")

    type: str
    value: str | None
    pos: int

    def __init__(self, token_type: str, value: str | None = None, pos: int = 0) -> None:
        self.type = token_type
        self.value = value
        self.pos = pos

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r})"


class LocatorTokenizer:
    """Tokenizes a semantic locator string into tokens."""

    __slots__ = ("length", "locator", "pos")

    locator: str
    pos: int
    length: int

    def __init__(self, locator: str) -> None:
        self.locator = locator
        self.pos = 0
        self.length = len(locator)

    def _is_word_char(self, ch: str) -> bool:
        return ch.isalnum() or ch == "_" or ch == "-"

    def _read_word(self) -> str:
        start = self.pos
        while self.pos < self.length and self._is_word_char(self.locator[self.pos]):
            self.pos += 1
        return self.locator[start : self.pos]

    def _read_string(self, quote: str) -> str:
        start_pos = self.pos
        # Skip opening quote
        self.pos += 1
        start = self.pos
        parts: list[str] = []

        while self.pos < self.length:
            ch = self.locator[self.pos]
            if ch == quote:
                if self.pos > start:
                    parts.append(self.locator[start : self.pos])
                self.pos += 1
                return "".join(parts)
            if ch == "\\":
                if self.pos > start:
                    parts.append(self.locator[start : self.pos])
                self.pos += 1
                if self.pos < self.length:
                    parts.append(self.locator[self.pos])
                    self.pos += 1
                start = self.pos
            else:
                self.pos += 1

        raise LocatorError(f"Unterminated string starting at position {start_pos}", self.locator, start_pos)

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []

        while self.pos < self.length:
            ch = self.locator[self.pos]

            if ch.isspace():
                self.pos += 1
                continue

            if ch == "{":
                tokens.append(Token(TokenType.LBRACE, ch, self.pos))
                self.pos += 1
                continue

            if ch == "}":
                tokens.append(Token(TokenType.RBRACE, ch, self.pos))
                self.pos += 1
                continue

            if ch == ":":
                tokens.append(Token(TokenType.COLON, ch, self.pos))
                self.pos += 1
                continue

            if ch == "'" or ch == '"':
                start = self.pos
                tokens.append(Token(TokenType.STRING, self._read_string(ch), start))
                continue

            if self._is_word_char(ch):
                start = self.pos
                tokens.append(Token(TokenType.WORD, self._read_word(), start))
                continue

            raise LocatorError(f"Unexpected character {ch!r} at position {self.pos}", self.locator, self.pos)

        tokens.append(Token(TokenType.EOF, None, self.length))
        return tokens


class SemanticNode:
    """One predicate of a locator: a role plus optional attributes and name."""

    __slots__ = ("attributes", "name", "role")

    role: str
    attributes: Mapping[str, str]
    name: str | None

    def __init__(self, role: str, attributes: Mapping[str, str] | None = None, name: str | None = None) -> None:
        object.__setattr__(self, "role", role)
        object.__setattr__(self, "attributes", MappingProxyType(dict(attributes or {})))
        object.__setattr__(self, "name", name)

    def __setattr__(self, key: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticNode):
            return NotImplemented
        return self.role == other.role and self.name == other.name and self.attributes == other.attributes

    def __hash__(self) -> int:
        return hash((self.role, self.name, frozenset(self.attributes.items())))

    def __repr__(self) -> str:
        parts = [f"SemanticNode({self.role!r}"]
        if self.attributes:
            parts.append(f", attributes={dict(self.attributes)!r}")
        if self.name is not None:
            parts.append(f", name={self.name!r}")
        parts.append(")")
        return "".join(parts)

    def __str__(self) -> str:
        parts = [self.role]
        if self.name is not None:
            parts.append(quote_name(self.name))
        parts.extend(f"{key}:{value}" for key, value in self.attributes.items())
        return "{" + " ".join(parts) + "}"


class SemanticLocator:
    """A chain of semantic nodes, optionally split once by ``outer``."""

    __slots__ = ("post_outer", "pre_outer")

    pre_outer: tuple[SemanticNode, ...]
    post_outer: tuple[SemanticNode, ...]

    def __init__(
        self,
        pre_outer: list[SemanticNode] | tuple[SemanticNode, ...],
        post_outer: list[SemanticNode] | tuple[SemanticNode, ...] = (),
    ) -> None:
        object.__setattr__(self, "pre_outer", tuple(pre_outer))
        object.__setattr__(self, "post_outer", tuple(post_outer))

    def __setattr__(self, key: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticLocator):
            return NotImplemented
        return self.pre_outer == other.pre_outer and self.post_outer == other.post_outer

    def __hash__(self) -> int:
        return hash((self.pre_outer, self.post_outer))

    def __len__(self) -> int:
        return len(self.pre_outer) + len(self.post_outer)

    def __repr__(self) -> str:
        return f"SemanticLocator({list(self.pre_outer)!r}, {list(self.post_outer)!r})"

    def __str__(self) -> str:
        parts = [str(node) for node in self.pre_outer]
        if self.post_outer:
            parts.append(OUTER_KEYWORD)
            parts.extend(str(node) for node in self.post_outer)
        return " ".join(parts)

    @property
    def nodes(self) -> tuple[SemanticNode, ...]:
        return self.pre_outer + self.post_outer

    def prefix(self, nodes: list[SemanticNode] | tuple[SemanticNode, ...]) -> SemanticLocator:
        """Rebuild a locator from a leading run of ``nodes``, keeping ``outer`` in place."""
        count = len(self.pre_outer)
        nodes = tuple(nodes)
        if len(nodes) <= count:
            return SemanticLocator(nodes)
        return SemanticLocator(nodes[:count], nodes[count:])


def quote_name(name: str) -> str:
    escaped = name.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class LocatorParser:
    """Parses a list of tokens into a SemanticLocator."""

    __slots__ = ("locator", "pos", "tokens")

    tokens: list[Token]
    pos: int
    locator: str

    def __init__(self, tokens: list[Token], locator: str = "") -> None:
        self.tokens = tokens
        self.pos = 0
        self.locator = locator

    def _peek(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return Token(TokenType.EOF)

    def _advance(self) -> Token:
        token = self._peek()
        self.pos += 1
        return token

    def _error(self, message: str, token: Token) -> LocatorError:
        return LocatorError(f"{message} at position {token.pos}", self.locator, token.pos)

    def _expect(self, token_type: str) -> Token:
        token = self._peek()
        if token.type != token_type:
            raise self._error(f"Expected {token_type}, got {token.type}", token)
        return self._advance()

    def parse(self) -> SemanticLocator:
        """Parse a complete locator."""
        pre_outer: list[SemanticNode] = []
        post_outer: list[SemanticNode] = []
        seen_outer = False
        current = pre_outer

        while self._peek().type != TokenType.EOF:
            token = self._peek()
            if token.type == TokenType.WORD and token.value == OUTER_KEYWORD:
                if seen_outer:
                    raise self._error("Only one 'outer' is supported per locator", token)
                self._advance()
                seen_outer = True
                current = post_outer
                if self._peek().type != TokenType.LBRACE:
                    raise self._error("Expected a node after 'outer'", self._peek())
                continue
            current.append(self._parse_node())

        if not pre_outer and not post_outer:
            raise LocatorError("Empty locator", self.locator, 0)

        return SemanticLocator(pre_outer, post_outer)

    def _parse_node(self) -> SemanticNode:
        """Parse one {role 'name' attr:value} block."""
        self._expect(TokenType.LBRACE)

        role_token = self._peek()
        if role_token.type != TokenType.WORD:
            raise self._error("Expected a role", role_token)
        self._advance()
        role = role_token.value or ""
        if not role.isalpha():
            raise self._error(f"Invalid role {role!r}", role_token)

        name: str | None = None
        attributes: dict[str, str] = {}

        while True:
            token = self._peek()

            if token.type == TokenType.RBRACE:
                self._advance()
                break

            if token.type == TokenType.STRING:
                if name is not None:
                    raise self._error("A node may only have one name", token)
                self._advance()
                name = token.value or ""

            elif token.type == TokenType.WORD:
                key, value = self._parse_attribute()
                if key in attributes:
                    raise self._error(f"Duplicate attribute {key!r}", token)
                attributes[key] = value

            else:
                raise self._error(f"Unexpected {token.type} in node", token)

        return SemanticNode(role.lower(), attributes, name)

    def _parse_attribute(self) -> tuple[str, str]:
        """Parse an attribute like checked:true."""
        name_token = self._expect(TokenType.WORD)
        key = (name_token.value or "").lower()
        if key not in SUPPORTED_ATTRIBUTES:
            raise self._error(f"Unsupported attribute {key!r}", name_token)

        self._expect(TokenType.COLON)
        value_token = self._expect(TokenType.WORD)
        value = (value_token.value or "").lower()

        allowed = SUPPORTED_ATTRIBUTES[key]
        if allowed is None:
            if not value.isdigit() or int(value) < 1:
                raise self._error(f"Attribute {key!r} must be a positive integer", value_token)
            value = str(int(value))
        elif value not in allowed:
            raise self._error(f"Invalid value {value!r} for attribute {key!r}", value_token)

        return key, value


def parse_locator(locator_string: str) -> SemanticLocator:
    """Parse a semantic locator string into a SemanticLocator."""
    if not locator_string or not locator_string.strip():
        raise LocatorError("Empty locator", locator_string or "", 0)

    tokenizer = LocatorTokenizer(locator_string)
    tokens = tokenizer.tokenize()
    parser = LocatorParser(tokens, locator_string)
    return parser.parse()
