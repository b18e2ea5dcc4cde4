from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, NotRequired, Optional, TypedDict

from cljson.errors import LexerError
from cljson.logger import Logger
from cljson.utils import resolve_config


class TokenType(Enum):
    OPEN_BRACE = auto()
    CLOSE_BRACE = auto()
    OPEN_BRACKET = auto()
    CLOSE_BRACKET = auto()
    COLON = auto()
    COMMA = auto()
    STRING = auto()
    NUMBER = auto()
    IDENTIFIER = auto()
    COMMENT = auto()
    EOF = auto()


@dataclass(slots=True)
class Token:
    token_type: TokenType
    value: str
    start: int
    end: int
    line: int
    column: int


PUNCTUATION = {
    "{": TokenType.OPEN_BRACE,
    "}": TokenType.CLOSE_BRACE,
    "[": TokenType.OPEN_BRACKET,
    "]": TokenType.CLOSE_BRACKET,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
}

IDENTIFIER_CHARS = {"_", "-", ".", "$"}

# ASCII only: str.isdigit also accepts digits float() cannot read
DIGITS = frozenset("0123456789")


class LexerConfig(TypedDict):
    tokenize: NotRequired[bool]
    enable_logger: NotRequired[bool]
    lenient: NotRequired[bool]


class LexerConfigRequired(TypedDict):
    tokenize: bool
    enable_logger: bool
    lenient: bool


DEFAULT_CONFIG: LexerConfigRequired = {
    "tokenize": True,
    "enable_logger": False,
    "lenient": False,
}


class Lexer:
    def __init__(self, input: str, config: Optional[LexerConfig] = None):
        self.input = input
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger(config={"name": "cljson.lexer", "is_enabled": self.config["enable_logger"]}).logger
        self._start = 0
        self.position = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []
        if self.config["tokenize"]:
            self.tokenize()

    @property
    def has_more_chars(self) -> bool:
        return self.position < len(self.input)

    @property
    def char(self) -> str:
        return self.input[self.position] if self.has_more_chars else "\0"

    @property
    def current_value(self) -> str:
        return self.input[self._start : self.position]

    def _peek(self, steps: int = 1) -> str:
        if self.position + steps < len(self.input):
            return self.input[self.position + steps]
        return "\0"

    def _advance(self, steps: int = 1) -> None:
        for _ in range(steps):
            if not self.has_more_chars:
                raise LexerError("Attempt to advance beyond end of input", self.line, self.column)
            if self.char == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.position += 1

    def _consume_while(self, condition: Callable[[str], bool]) -> None:
        while self.has_more_chars and condition(self.char):
            self._advance()

    def _add_token(self, token_type: TokenType, start: int, end: int, line: int, column: int) -> None:
        value = self.input[start:end]
        self.logger.debug(f"Adding token {token_type} with value '{value}' at line {line}, column {column}")
        self.tokens.append(Token(token_type, value, start, end, line, column))

    def tokenize(self) -> list[Token]:
        self.tokens = []
        try:
            self.logger.info("Starting tokenization")
            while self.has_more_chars:
                char = self.char
                if char.isspace():
                    self._consume_while(lambda c: c.isspace())
                elif char == "/" and self._peek() == "/":
                    self._handle_comment()
                elif char in PUNCTUATION:
                    self._add_token(PUNCTUATION[char], self.position, self.position + 1, self.line, self.column)
                    self._advance()
                elif char in ('"', "'"):
                    self._handle_string()
                elif char in DIGITS or char in {"-", "+", "."}:
                    self._handle_number()
                elif char.isalpha() or char in IDENTIFIER_CHARS:
                    self._handle_identifier()
                else:
                    raise LexerError(f"Unexpected character '{char}'", self.line, self.column)
            self._add_token(TokenType.EOF, self.position, self.position, self.line, self.column)
            self.logger.info("Tokenization complete")
        except LexerError as e:
            self.logger.error(e)
            raise
        return self.tokens

    def _handle_comment(self) -> None:
        self._start = self.position
        line, column = self.line, self.column
        self._consume_while(lambda c: c != "\n")
        self._add_token(TokenType.COMMENT, self._start, self.position, line, column)

    def _handle_string(self) -> None:
        quote = self.char
        line, column = self.line, self.column
        self._advance()
        self._start = self.position
        while self.has_more_chars and self.char != quote:
            if self.char == "\\" and self._peek() != "\0":
                self._advance()
            self._advance()
        if not self.has_more_chars:
            if not self.config["lenient"]:
                raise LexerError("Unterminated string", line, column)
            self._add_token(TokenType.STRING, self._start, self.position, line, column)
            return
        self._add_token(TokenType.STRING, self._start, self.position, line, column)
        self._advance()

    def _handle_number(self) -> None:
        self._start = self.position
        line, column = self.line, self.column
        if self.char in {"-", "+"}:
            self._advance()
        self._consume_while(lambda c: c in DIGITS)
        if self.char == ".":
            self._advance()
            self._consume_while(lambda c: c in DIGITS)
        if not any(c in DIGITS for c in self.current_value):
            raise LexerError(f"Invalid number '{self.current_value}'", line, column)
        if self.char in {"e", "E"}:
            self._advance()
            if self.char in {"-", "+"}:
                self._advance()
            if self.char not in DIGITS:
                raise LexerError(f"Invalid number exponent '{self.current_value}'", line, column)
            self._consume_while(lambda c: c in DIGITS)
        if self.char.isalpha() or self.char in IDENTIFIER_CHARS:
            raise LexerError(f"Invalid number '{self.current_value}{self.char}'", line, column)
        if not math.isfinite(float(self.current_value)):
            raise LexerError(f"Number out of range '{self.current_value}'", line, column)
        self._add_token(TokenType.NUMBER, self._start, self.position, line, column)

    def _handle_identifier(self) -> None:
        self._start = self.position
        line, column = self.line, self.column
        self._consume_while(lambda c: c.isalnum() or c in IDENTIFIER_CHARS)
        self._add_token(TokenType.IDENTIFIER, self._start, self.position, line, column)
