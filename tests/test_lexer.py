"""Tests for the Lexer."""

import pytest

from cljson import Lexer, LexerError, TokenType


def types(text, **config):
    return [token.token_type for token in Lexer(text, config=config).tokens]


def test_token_types():
    assert types('{a: [1, "x"]}') == [
        TokenType.OPEN_BRACE,
        TokenType.IDENTIFIER,
        TokenType.COLON,
        TokenType.OPEN_BRACKET,
        TokenType.NUMBER,
        TokenType.COMMA,
        TokenType.STRING,
        TokenType.CLOSE_BRACKET,
        TokenType.CLOSE_BRACE,
        TokenType.EOF,
    ]

def test_token_offsets_are_half_open():
    text = '{a: [1, "x"]}'
    tokens = Lexer(text).tokens
    number = tokens[4]
    assert (number.start, number.end, number.value) == (5, 6, "1")
    assert text[number.start : number.end] == "1"
    eof = tokens[-1]
    assert (eof.start, eof.end) == (len(text), len(text))

def test_string_span_excludes_quotes():
    string = Lexer('{a: [1, "x"]}').tokens[6]
    assert string.value == "x"
    assert (string.start, string.end) == (9, 10)
    assert (string.line, string.column) == (1, 9)

def test_single_quoted_string():
    token = Lexer("'hello world'").tokens[0]
    assert token.token_type == TokenType.STRING
    assert token.value == "hello world"

def test_escaped_quote_does_not_end_string():
    token = Lexer(r'"a\"b"').tokens[0]
    assert token.value == r"a\"b"

def test_comment_tokens():
    tokens = Lexer("{\n  // note\n  a: 1\n}").tokens
    comment = tokens[1]
    assert comment.token_type == TokenType.COMMENT
    assert comment.value == "// note"
    assert (comment.line, comment.column) == (2, 3)
    assert tokens[2].line == 3

@pytest.mark.parametrize("text", ["1", "-1", "+1", "1.5", ".5", "-0.25", "1e5", "2.5E-3"])
def test_numbers(text):
    tokens = Lexer(text).tokens
    assert tokens[0].token_type == TokenType.NUMBER
    assert tokens[0].value == text

@pytest.mark.parametrize("text", ["-", ".", "1.2.3", "1e", "12px", "1e999", "-1e400"])
def test_invalid_numbers(text):
    with pytest.raises(LexerError):
        Lexer(text)

def test_identifiers():
    tokens = Lexer("start_toStart $ref a.b true").tokens
    assert [t.value for t in tokens[:-1]] == ["start_toStart", "$ref", "a.b", "true"]
    assert all(t.token_type == TokenType.IDENTIFIER for t in tokens[:-1])

def test_unexpected_character():
    with pytest.raises(LexerError) as info:
        Lexer("{\n  a: @\n}")
    assert (info.value.line, info.value.column) == (2, 6)

def test_unterminated_string():
    with pytest.raises(LexerError):
        Lexer("'abc")

def test_lenient_unterminated_string():
    token = Lexer("'abc", config={"lenient": True}).tokens[0]
    assert token.token_type == TokenType.STRING
    assert token.value == "abc"

def test_tokenize_disabled():
    lexer = Lexer("{}", config={"tokenize": False})
    assert lexer.tokens == []
    assert len(lexer.tokenize()) == 3

def test_non_ascii_digits_are_rejected():
    with pytest.raises(LexerError) as info:
        Lexer("{a: [1, ²]}")
    assert (info.value.line, info.value.column) == (1, 9)

def test_overflowing_number():
    with pytest.raises(LexerError, match="out of range"):
        Lexer("{a: 1e999}")
