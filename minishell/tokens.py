"""Lexical analysis of a command line into shell tokens."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Kinds of token recognised by the lexer."""

    PIPE = enum.auto()
    REDIR_APPEND = enum.auto()
    HEREDOC = enum.auto()
    REDIR_IN = enum.auto()
    REDIR_OUT = enum.auto()
    SINGLE_QUOTE = enum.auto()
    DOUBLE_QUOTE = enum.auto()
    DOLLAR = enum.auto()
    WORD = enum.auto()
    UNKNOWN = enum.auto()


_TYPE_NAMES = {
    TokenType.PIPE: "PIPE",
    TokenType.REDIR_APPEND: "REDIRECT_APPEND",
    TokenType.HEREDOC: "HEREDOC",
    TokenType.REDIR_IN: "REDIRECT_IN",
    TokenType.REDIR_OUT: "REDIRECT_OUT",
    TokenType.SINGLE_QUOTE: "SINGLE_QUOTE",
    TokenType.DOUBLE_QUOTE: "DOUBLE_QUOTE",
    TokenType.DOLLAR: "DOLLAR",
    TokenType.WORD: "WORD",
}

_OPERATORS = {
    "|": TokenType.PIPE,
    ">>": TokenType.REDIR_APPEND,
    "<<": TokenType.HEREDOC,
    "<": TokenType.REDIR_IN,
    ">": TokenType.REDIR_OUT,
    "'": TokenType.SINGLE_QUOTE,
    '"': TokenType.DOUBLE_QUOTE,
    "$": TokenType.DOLLAR,
}

_QUOTES = ("'", '"')


class UnclosedQuoteError(ValueError):
    """Raised when a quote in the input is never closed."""


@dataclass
class Token:
    """One token of a command line, with the quotes it was built from."""

    text: str
    type: TokenType
    single_quote: bool = False
    double_quote: bool = False


def token_type_name(kind: TokenType) -> str:
    """Return the display name of a token type."""
    return _TYPE_NAMES.get(kind, "UNKNOWN")


def determine_token_type(text: str) -> TokenType:
    """Classify the text of a token."""
    return _OPERATORS.get(text, TokenType.WORD)


def _read_quoted(text: str, pos: int) -> tuple[str, int]:
    """Read a quoted segment starting at the opening quote."""
    quote = text[pos]
    end = text.find(quote, pos + 1)
    if end == -1:
        raise UnclosedQuoteError("Unclosed quote detected")
    return text[pos + 1:end], end + 1


def _read_plain(text: str, pos: int) -> tuple[str, int]:
    """Read an unquoted segment up to a space or a quote."""
    end = pos
    while end < len(text) and text[end] != " " and text[end] not in _QUOTES:
        end += 1
    return text[pos:end], end


def lexer(text: str) -> list[Token]:
    """Split a command line into tokens.

    Tokens are separated by spaces. Adjacent quoted and unquoted
    segments join into a single token, and quotes are removed.
    """
    tokens: list[Token] = []
    pos = 0
    length = len(text)
    while pos < length:
        while pos < length and text[pos] == " ":
            pos += 1
        parts: list[str] = []
        single = double = False
        while pos < length and text[pos] != " ":
            if text[pos] in _QUOTES:
                quote = text[pos]
                part, pos = _read_quoted(text, pos)
                if quote == "'":
                    single = True
                else:
                    double = True
            else:
                part, pos = _read_plain(text, pos)
            parts.append(part)
        if parts:
            word = "".join(parts)
            tokens.append(Token(word, determine_token_type(word), single, double))
        if pos < length and text[pos] == " ":
            pos += 1
    return tokens