"""A small interactive shell with a quote-aware lexer and built-in commands."""

__version__ = "0.1.0"