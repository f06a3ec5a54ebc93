"""Mutable state of an interactive shell session."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field


@dataclass
class ShellState:
    """Everything a shell session carries between and during commands."""

    env: list[str] = field(default_factory=list)
    env_original: list[str] = field(default_factory=list)
    exports: dict[str, str] = field(default_factory=dict)
    input: str | None = None
    cmd: list[str] | None = None
    pipe_check: bool = False
    redirect: bool = False
    exit_status: int = 0

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | Iterable[str]) -> "ShellState":
        """Build a fresh state from an environment.

        The environment may be a mapping or ``NAME=value`` strings.
        """
        if isinstance(environ, Mapping):
            entries = [f"{name}={value}" for name, value in environ.items()]
        else:
            entries = list(environ)
        return cls(env=list(entries), env_original=list(entries))

    def reset(self) -> None:
        """Clear per-command state, keeping environment and exit status."""
        self.pipe_check = False
        self.redirect = False
        self.input = None
        self.cmd = None