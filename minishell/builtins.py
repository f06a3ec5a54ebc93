"""Built-in commands of the shell: echo, cd, pwd, env and export."""

from __future__ import annotations

import os
import sys
from typing import TextIO

from minishell.state import ShellState

COLOR_RED = "\033[31m"
COLOR_RESET = "\033[0m"

_QUOTE_CHARS = ("'", '"')


def _stream(out: TextIO | None) -> TextIO:
    return sys.stdout if out is None else out


def check_word(text: str, word: str, n: int) -> bool:
    """Tell whether ``text`` starts with the first ``n`` characters of ``word``.

    Quote characters in ``text`` are ignored while comparing, and the match
    must be followed by a space or the end of ``text``.
    """
    i = j = 0
    while i < n and j < len(text) and i < len(word):
        ch = text[j]
        if ch in _QUOTE_CHARS:
            j += 1
            continue
        if ch != word[i]:
            return False
        i += 1
        j += 1
    if i != n:
        return False
    return j == len(text) or text[j] == " "


def is_builtin(cmd: str) -> bool:
    """Tell whether a command name is handled by the shell itself."""
    return any(
        check_word(cmd, word, n)
        for word, n in (
            ("echo", 4),
            ("cd", 2),
            ("pwd", 3),
            ("export", 6),
            ("unset", 4),
            ("env", 3),
        )
    )


def closed_quote(text: str, i: int) -> bool:
    """Tell whether the double quotes in ``text[:i + 1]`` are balanced."""
    count = text[: max(i + 1, 0)].count('"')
    return count % 2 == 0


def skip_prefix(text: str, prefix: str) -> int:
    """Return the index past the characters matching ``prefix`` or spaces."""
    i = 0
    while i < len(text) and (
        (i < len(prefix) and text[i] == prefix[i]) or text[i] == " "
    ):
        i += 1
    return i


def key_compare(s1: str, s2: str, sep: str) -> int:
    """Compare two strings up to the first ``sep`` in either of them.

    Returns zero when they agree, otherwise the difference of the first
    differing character codes (an exhausted string counts as code zero).
    """
    if not sep:
        return 0
    i = 0
    while (
        i < len(s1)
        and i < len(s2)
        and s1[i] != sep
        and s2[i] != sep
        and s1[i] == s2[i]
    ):
        i += 1
    c1 = ord(s1[i]) if i < len(s1) else 0
    c2 = ord(s2[i]) if i < len(s2) else 0
    return c1 - c2


def echo(state: ShellState, out: TextIO | None = None) -> None:
    """Write the argument text of the current command.

    Balanced double quotes are dropped; a newline ends the output unless
    the command carries an option.
    """
    stream = _stream(out)
    text = state.input or ""
    i = skip_prefix(text, "echo ")
    balanced = closed_quote(text, len(text))
    pieces: list[str] = []
    while i < len(text):
        if text[i] == '"' and balanced:
            i += 1
            if i >= len(text):
                break
        pieces.append(text[i])
        i += 1
    stream.write("".join(pieces))
    cmd = state.cmd or []
    if len(cmd) < 2:
        stream.write("\n")


def _record_oldpwd(state: ShellState) -> None:
    try:
        cwd = os.getcwd()
    except OSError:
        return
    for index, entry in enumerate(state.env):
        if entry.startswith("OLDPWD"):
            state.env[index] = f"OLDPWD={cwd}"
            break


def _change_dir(path: str) -> bool:
    try:
        os.chdir(path)
    except OSError:
        return False
    return True


def cd(state: ShellState, out: TextIO | None = None) -> None:
    """Change the working directory to the path held in the input."""
    stream = _stream(out)
    target = state.input or ""
    if target.startswith("/"):
        if not _change_dir(target):
            stream.write(f"cd: no such file or directory: {target}\n")
        return
    _record_oldpwd(state)
    if target.startswith("..") and (len(target) == 2 or target[2] == " "):
        cwd = os.getcwd()
        parent = cwd[: max(cwd.rfind("/"), 0)]
        if parent:
            _change_dir(parent)
        return
    if not _change_dir(f"{os.getcwd()}/{target}"):
        stream.write(f"cd: no such file or directory: {target}\n")


def pwd(out: TextIO | None = None) -> None:
    """Print the working directory."""
    stream = _stream(out)
    try:
        cwd = os.getcwd()
    except OSError:
        stream.write("Error pwd")
        return
    stream.write(f"{cwd}\n")


def env(state: ShellState, out: TextIO | None = None) -> None:
    """Print every environment entry, one per line."""
    stream = _stream(out)
    for entry in state.env:
        stream.write(f"{entry}\n")


def export(state: ShellState, out: TextIO | None = None) -> bool:
    """Set an environment entry from a ``NAME=value`` input.

    With no input the environment is printed. An existing entry with the
    same name is replaced; otherwise an input holding ``=`` is appended.
    Returns whether the environment was changed.
    """
    stream = _stream(out)
    text = state.input or ""
    if not text:
        env(state, stream)
        return False
    for index, entry in enumerate(state.env):
        if key_compare(entry, text, "=") == 0:
            state.env[index] = text
            return True
    if "=" in text:
        state.env.append(text)
        return True
    stream.write(f"{COLOR_RED}check input\n{COLOR_RESET}")
    return False


def run_builtin(state: ShellState, out: TextIO | None = None) -> None:
    """Run the built-in named by the current command, if it is one."""
    stream = _stream(out)
    if not state.cmd:
        return
    name = state.cmd[0]
    if check_word(name, "echo", 4):
        echo(state, stream)
    elif check_word(name, "cd", 2):
        cd(state, stream)
    elif check_word(name, "pwd", 3):
        pwd(stream)
    elif check_word(name, "env", 3):
        env(state, stream)
    elif check_word(name, "export", 6):
        export(state, stream)