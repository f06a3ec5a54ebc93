import pytest

from minishell.tokens import (
    Token,
    TokenType,
    UnclosedQuoteError,
    determine_token_type,
    lexer,
    token_type_name,
)


@pytest.mark.parametrize(
    "text, kind",
    [
        ("|", TokenType.PIPE),
        (">>", TokenType.REDIR_APPEND),
        ("<<", TokenType.HEREDOC),
        ("<", TokenType.REDIR_IN),
        (">", TokenType.REDIR_OUT),
        ("'", TokenType.SINGLE_QUOTE),
        ('"', TokenType.DOUBLE_QUOTE),
        ("$", TokenType.DOLLAR),
        ("ls", TokenType.WORD),
        (">>>", TokenType.WORD),
    ],
)
def test_determine_token_type(text, kind):
    assert determine_token_type(text) is kind


@pytest.mark.parametrize(
    "kind, name",
    [
        (TokenType.PIPE, "PIPE"),
        (TokenType.REDIR_APPEND, "REDIRECT_APPEND"),
        (TokenType.HEREDOC, "HEREDOC"),
        (TokenType.REDIR_IN, "REDIRECT_IN"),
        (TokenType.REDIR_OUT, "REDIRECT_OUT"),
        (TokenType.SINGLE_QUOTE, "SINGLE_QUOTE"),
        (TokenType.DOUBLE_QUOTE, "DOUBLE_QUOTE"),
        (TokenType.DOLLAR, "DOLLAR"),
        (TokenType.WORD, "WORD"),
        (TokenType.UNKNOWN, "UNKNOWN"),
    ],
)
def test_token_type_name(kind, name):
    assert token_type_name(kind) == name


def test_lexer_simple_pipeline():
    tokens = lexer("ls -l | wc")
    assert [t.text for t in tokens] == ["ls", "-l", "|", "wc"]
    assert [t.type for t in tokens] == [
        TokenType.WORD,
        TokenType.WORD,
        TokenType.PIPE,
        TokenType.WORD,
    ]


def test_lexer_joins_quoted_segments():
    tokens = lexer("abc'  cd'e")
    assert tokens == [Token("abc  cde", TokenType.WORD, True, False)]


def test_lexer_double_quotes_flag():
    tokens = lexer('echo "hello world"')
    assert [t.text for t in tokens] == ["echo", "hello world"]
    assert tokens[1].double_quote is True
    assert tokens[1].single_quote is False
    assert tokens[0].double_quote is False


def test_lexer_skips_repeated_spaces():
    assert [t.text for t in lexer("   a    b   ")] == ["a", "b"]


def test_lexer_empty_input():
    assert lexer("") == []
    assert lexer("    ") == []


def test_lexer_empty_quotes_make_empty_token():
    tokens = lexer("''")
    assert len(tokens) == 1
    assert tokens[0].text == ""
    assert tokens[0].single_quote is True


def test_lexer_quoted_operator_classified_by_text():
    tokens = lexer("'|'")
    assert tokens[0].text == "|"
    assert tokens[0].type is TokenType.PIPE


def test_lexer_redirections():
    tokens = lexer("cat << EOF >> out")
    assert [t.type for t in tokens] == [
        TokenType.WORD,
        TokenType.HEREDOC,
        TokenType.WORD,
        TokenType.REDIR_APPEND,
        TokenType.WORD,
    ]


@pytest.mark.parametrize("line", ["echo 'abc", 'echo "abc', "a'b\"c"])
def test_lexer_unclosed_quote(line):
    with pytest.raises(UnclosedQuoteError):
        lexer(line)


def test_lexer_other_quote_inside_quotes_kept():
    tokens = lexer("\"it's\"")
    assert tokens[0].text == "it's"
    assert tokens[0].double_quote is True