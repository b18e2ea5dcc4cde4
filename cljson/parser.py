from __future__ import annotations

from typing import Callable, List, NotRequired, Optional, TypedDict, cast

from cljson.elements import Container, Element
from cljson.errors import ParseException
from cljson.lexer import Lexer, LexerConfig, Token, TokenType
from cljson.logger import Logger
from cljson.nodes import Array, Boolean, Key, Null, Number, Object, String
from cljson.utils import resolve_config


class ParserConfig(TypedDict):
    parse: NotRequired[bool]
    strip_comments: NotRequired[bool]
    enable_logger: NotRequired[bool]
    lenient: NotRequired[bool]
    lexer_config: NotRequired[LexerConfig]


class ParserConfigRequired(TypedDict):
    parse: bool
    strip_comments: bool
    enable_logger: bool
    lenient: bool
    lexer_config: LexerConfig


DEFAULT_CONFIG: ParserConfigRequired = {
    "parse": True,
    "strip_comments": True,
    "enable_logger": False,
    "lenient": False,
    "lexer_config": {},
}

# Node kind chosen from the token that opens a value.
ALLOCATORS: dict[TokenType, Callable[[str], Element]] = {
    TokenType.OPEN_BRACE: Object.allocate,
    TokenType.OPEN_BRACKET: Array.allocate,
    TokenType.STRING: String.allocate,
    TokenType.NUMBER: Number.allocate,
}

LITERALS: dict[str, Callable[[str], Element]] = {
    "true": Boolean.allocate,
    "false": Boolean.allocate,
    "null": Null.allocate,
}

CLOSERS = (TokenType.CLOSE_BRACE, TokenType.CLOSE_BRACKET, TokenType.EOF)


class Parser:
    def __init__(self, input: str, config: Optional[ParserConfig] = None):
        self.input = input
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger(config={"name": "cljson.parser", "is_enabled": self.config["enable_logger"]}).logger
        lexer_config: LexerConfig = {
            "enable_logger": self.config["enable_logger"],
            "lenient": self.config["lenient"],
            **self.config["lexer_config"],
        }
        self.lexer = Lexer(input, config=lexer_config)
        self.tokens = self.lexer.tokens
        if self.config["strip_comments"]:
            self.tokens = self._strip_comments(self.tokens)
            self.logger.debug("Comments stripped from tokens")
        self.position = 0
        self.root: Object | None = None
        if self.config["parse"]:
            self.root = self.parse()

    def _strip_comments(self, tokens: List[Token]) -> List[Token]:
        return [token for token in tokens if token.token_type != TokenType.COMMENT]

    @property
    def current_token(self) -> Token:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return Token(TokenType.EOF, "", len(self.input), len(self.input), self.lexer.line, self.lexer.column)

    @property
    def lenient(self) -> bool:
        return self.config["lenient"]

    def advance(self, steps: int = 1) -> None:
        self.position = min(self.position + steps, len(self.tokens))

    def expect(self, expected_type: TokenType | List[TokenType]) -> None:
        if not isinstance(expected_type, list):
            expected_type = [expected_type]
        token = self.current_token
        if token.token_type not in expected_type:
            names = ", ".join(t.name for t in expected_type)
            raise ParseException(
                f"Expected {names}, but got {token.token_type.name} '{token.value}' "
                f"at line {token.line}, column {token.column}"
            )

    def consume(self, expected_type: TokenType | List[TokenType]) -> Token:
        token = self.current_token
        self.expect(expected_type)
        self.advance()
        return token

    def _skip_commas(self) -> None:
        while self.current_token.token_type == TokenType.COMMA:
            self.advance()

    def parse(self) -> Object:
        try:
            self.logger.info("Parsing started")
            self.position = 0
            if self.current_token.token_type != TokenType.OPEN_BRACE:
                raise ParseException("invalid json content")
            root = self._parse_object()
            if self.current_token.token_type != TokenType.EOF and not self.lenient:
                token = self.current_token
                raise ParseException(f"unexpected content after root object at line {token.line}")
            self.logger.info("Parsing complete")
            return root
        except ParseException as e:
            self.logger.error(e)
            raise

    def _allocate(self, factory: Callable[[str], Element], token: Token) -> Element:
        element = factory(self.input)
        element.set_start(token.start)
        self.logger.debug(f"Allocated {element.kind} at line {token.line}, column {token.column}")
        return element

    def _close(self, container: Container, closing: TokenType, label: str) -> None:
        token = self.current_token
        if token.token_type == closing:
            container.set_end(self.consume(closing).end)
            return
        if self.lenient:
            # mismatched closer or end of input: the container ends where the next token starts
            self.logger.debug(f"Closing unterminated {label} at offset {token.start}")
            container.set_end(token.start)
            return
        raise ParseException(f"unterminated {label} at line {token.line}", container)

    def _parse_value(self) -> Element:
        token = self.current_token
        if token.token_type == TokenType.OPEN_BRACE:
            return self._parse_object()
        if token.token_type == TokenType.OPEN_BRACKET:
            return self._parse_array()
        if token.token_type in (TokenType.STRING, TokenType.NUMBER):
            element = self._allocate(ALLOCATORS[token.token_type], token)
            element.set_end(token.end)
            self.advance()
            return element
        if token.token_type == TokenType.IDENTIFIER and token.value in LITERALS:
            element = self._allocate(LITERALS[token.value], token)
            element.set_end(token.end)
            self.advance()
            return element
        if token.token_type == TokenType.IDENTIFIER:
            raise ParseException(f"incorrect token <{token.value}> at line {token.line}")
        raise ParseException(
            f"Unexpected token {token.token_type.name} at line {token.line}, column {token.column}"
        )

    def _parse_object(self) -> Object:
        node = cast(Object, self._allocate(ALLOCATORS[TokenType.OPEN_BRACE], self.consume(TokenType.OPEN_BRACE)))
        while True:
            self._skip_commas()
            if self.current_token.token_type in CLOSERS:
                break
            node.add(self._parse_member())
        self._close(node, TokenType.CLOSE_BRACE, "object")
        return node

    def _parse_member(self) -> Key:
        token = self.consume([TokenType.STRING, TokenType.IDENTIFIER])
        key = Key.allocate(self.input)
        key.set_span(token.start, token.end)
        key.name = key.content()
        self.logger.debug(f"Allocated Key <{key.name}> at line {token.line}, column {token.column}")
        if self.current_token.token_type == TokenType.EOF and self.lenient:
            return key
        self.consume(TokenType.COLON)
        if self.current_token.token_type == TokenType.EOF and self.lenient:
            return key
        key.add(self._parse_value())
        return key

    def _parse_array(self) -> Array:
        node = cast(Array, self._allocate(ALLOCATORS[TokenType.OPEN_BRACKET], self.consume(TokenType.OPEN_BRACKET)))
        while True:
            self._skip_commas()
            if self.current_token.token_type in CLOSERS:
                break
            node.add(self._parse_value())
        self._close(node, TokenType.CLOSE_BRACKET, "array")
        return node


def parse(input: str, config: Optional[ParserConfig] = None) -> Object:
    """Parse ``input`` and return its root object."""
    parser = Parser(input, config={**(config or {}), "parse": True})
    return cast(Object, parser.root)
