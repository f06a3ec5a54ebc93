"""Command processing and the interactive read-eval loop of the shell."""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from minishell.builtins import is_builtin, run_builtin
from minishell.state import ShellState
from minishell.tokens import Token, TokenType, UnclosedQuoteError, lexer

COLOR_RED = "\033[31m"
BLUE = "\033[1;34m"
COLOR_ORANGE = "\033[1;38;5;208m"
COLOR_RESET = "\033[0m"

PROMPT = f"{BLUE}MINIPROMPT$ {COLOR_RESET}"
HEREDOC_PROMPT = "<"

ReadLine = Callable[[str], "str | None"]


class _ShellError(Exception):
    """A command line that cannot be carried out."""


def _read_line(prompt: str) -> str | None:
    """Read one line from the terminal, or None at end of input."""
    try:
        return input(prompt)
    except EOFError:
        return None


def copy_command(tokens: Sequence[Token], start: int) -> list[str]:
    """Return the command at ``start`` together with the options that follow it."""
    cmd = [tokens[start].text]
    for token in tokens[start + 1:]:
        if not token.text.startswith("-"):
            break
        cmd.append(token.text)
    return cmd


def handle_dollar(state: ShellState, token: str) -> None:
    """Append the expansion of a ``$`` token to the command input."""
    current = state.input or ""
    if len(token) == 1:
        state.input = current + "$ "
    elif token == "$?":
        state.input = current + str(state.exit_status)
    else:
        name = token[1:]
        value = next(
            (val for key, val in state.exports.items() if key.startswith(name)),
            "",
        )
        state.input = current + value


def handle_word(state: ShellState, token: str) -> None:
    """Append a word to the command input, separated by a space."""
    if state.input is None:
        state.input = token
    else:
        state.input = f"{state.input} {token}"


def handle_heredoc(
    state: ShellState, delimiter: str, read_line: ReadLine | None = None
) -> None:
    """Read lines until one starts with ``delimiter``, appending them to the input."""
    reader = read_line or _read_line
    collected = state.input or ""
    while True:
        line = reader(HEREDOC_PROMPT)
        if line is None or line.startswith(delimiter):
            break
        collected += line + "\n"
    state.input = collected + "\n"


def redirect_output(state: ShellState, path: str, append: bool = False) -> TextIO:
    """Open ``path`` for the command's output, truncating or appending."""
    state.redirect = True
    return open(path, "a" if append else "w", encoding="utf-8")


def redirect_input(state: ShellState, path: str) -> TextIO:
    """Open ``path`` as the command's input."""
    state.redirect = True
    return open(path, encoding="utf-8")


def _operand(tokens: Sequence[Token], pos: int) -> str:
    if pos + 1 >= len(tokens):
        raise _ShellError("syntax error near unexpected token `newline'")
    return tokens[pos + 1].text


def update_state(
    state: ShellState,
    tokens: Sequence[Token],
    start: int,
    read_line: ReadLine | None = None,
) -> tuple[int, TextIO | None]:
    """Fill the state from the command segment beginning at ``start``.

    The segment ends after a pipe or at the end of the tokens. Returns the
    index of the next segment and the file output is redirected to, if any.
    """
    state.cmd = copy_command(tokens, start)
    pos = start + len(state.cmd)
    output: TextIO | None = None
    try:
        while pos < len(tokens):
            token = tokens[pos]
            if token.text.startswith("$"):
                handle_dollar(state, token.text)
            elif token.type is TokenType.WORD:
                handle_word(state, token.text)
            elif token.type is TokenType.PIPE:
                state.pipe_check = True
            elif token.type is TokenType.HEREDOC:
                if pos + 1 >= len(tokens):
                    state.exit_status = -1
                    raise _ShellError("error delimiter")
                handle_heredoc(state, tokens[pos + 1].text, read_line)
                pos += 1
            elif token.type in (TokenType.REDIR_OUT, TokenType.REDIR_APPEND):
                path = _operand(tokens, pos)
                try:
                    opened = redirect_output(
                        state, path, token.type is TokenType.REDIR_APPEND
                    )
                except OSError as exc:
                    raise _ShellError("error '>'") from exc
                if output is not None:
                    output.close()
                output = opened
                pos += 1
            elif token.type is TokenType.REDIR_IN:
                path = _operand(tokens, pos)
                try:
                    redirect_input(state, path).close()
                except OSError as exc:
                    raise _ShellError("error '<'") from exc
                pos += 1
            pos += 1
            if tokens[pos - 1].type is TokenType.PIPE:
                break
    except BaseException:
        if output is not None:
            output.close()
        raise
    return pos, output


def process_input(
    state: ShellState,
    line: str,
    out: TextIO | None = None,
    read_line: ReadLine | None = None,
) -> None:
    """Tokenise a command line and run the first built-in it names."""
    stream = sys.stdout if out is None else out
    try:
        tokens = lexer(line)
    except UnclosedQuoteError:
        sys.stderr.write(f"{COLOR_RED}Error: Unclosed quote detected\n{COLOR_RESET}")
        tokens = []
    if not tokens:
        stream.write(f"{COLOR_RED}Error creating tokens.\n{COLOR_RESET}")
        return
    pos = 0
    while pos < len(tokens):
        try:
            pos, output = update_state(state, tokens, pos, read_line)
        except _ShellError as exc:
            stream.write(f"{exc}\n")
            return
        try:
            if state.cmd and is_builtin(state.cmd[0]):
                run_builtin(state, output or stream)
                break
        finally:
            if output is not None:
                output.close()


def shell_loop(
    state: ShellState, read_line: ReadLine | None = None, out: TextIO | None = None
) -> None:
    """Read and process command lines until ``exit`` or end of input."""
    reader = read_line or _read_line
    stream = sys.stdout if out is None else out
    while True:
        try:
            line = reader(PROMPT)
        except KeyboardInterrupt:
            stream.write("\n")
            continue
        if line is None or line.startswith("exit"):
            stream.write(f"{COLOR_ORANGE}\nFarewell my friend\n{COLOR_RESET}")
            break
        if line == "":
            continue
        process_input(state, line, stream, reader)
        state.reset()


def main(argv: Sequence[str] | None = None) -> int:
    """Start an interactive shell; no arguments are accepted."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args:
        prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "minishell"
        sys.stdout.write(f"{COLOR_RED}{prog}\t[No Additional Arguments]\n{COLOR_RESET}")
        return -1
    try:
        import readline  # noqa: F401  (enables line editing and history)
    except ImportError:
        pass
    if hasattr(signal, "SIGQUIT"):
        signal.signal(signal.SIGQUIT, signal.SIG_IGN)
    shell_loop(ShellState.from_environ(os.environ))
    return 0