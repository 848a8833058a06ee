"""Interactive read-parse-execute loop."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from typing import Callable, MutableMapping, Optional, Union

from .parser import ParseError, Parser
from .textutils import is_blank

EXIT_OK = 0
PROMPT_TEXT = "minishell ▸ "
PROMPT_RESET = "\033[0m"
PROMPT_RED_BOLD = "\033[1;31m"

Environment = MutableMapping[str, Optional[str]]
Executor = Callable[[list, Environment], int]
Environ = Union[Mapping[str, Optional[str]], Iterable[str], None]


def get_prompt(prev_status: int) -> str:
    """Return the prompt colour for the status of the previous command."""
    return PROMPT_RESET if prev_status == EXIT_OK else PROMPT_RED_BOLD


def _build_env(environ: Environ) -> dict[str, Optional[str]]:
    if environ is None:
        return {}
    if isinstance(environ, Mapping):
        return dict(environ)
    env: dict[str, Optional[str]] = {}
    for entry in environ:
        key, sep, value = entry.partition("=")
        env[key] = value if sep else None
    return env


class Shell:
    """Reads command lines, tokenizes them and hands the words to an executor.

    ``environ`` is either a mapping or a sequence of ``KEY=VALUE`` strings
    (a bare ``KEY`` gives a variable without a value).  ``execute`` is called
    with the list of words and the environment and returns an exit status.
    """

    def __init__(self, environ: Environ, execute: Executor) -> None:
        self.env: dict[str, Optional[str]] = _build_env(environ)
        self.execute = execute
        self.prev_status = EXIT_OK
        self.history: list[str] = []

    def prompt(self) -> str:
        """Return the prompt, coloured by the previous status."""
        return f"{get_prompt(self.prev_status)}{PROMPT_TEXT}{PROMPT_RESET}"

    def handle_line(self, line: str) -> int:
        """Parse and run one line; return the resulting status.

        Blank lines are ignored and leave the status unchanged.
        """
        if is_blank(line):
            return self.prev_status
        self.history.append(line)
        parser = Parser(line, self.env, self.prev_status)
        try:
            parser.parse()
        except ParseError as err:
            print(f"minishell: {err}", file=sys.stderr)
            self.prev_status = err.status
            return self.prev_status
        parser.reorder()
        self.prev_status = self.execute(parser.words(), self.env)
        return self.prev_status

    def run(self, read_line: Optional[Callable[[str], Optional[str]]] = None) -> int:
        """Loop until end of input and return the last status.

        ``read_line`` receives the prompt and returns a line, or None (or
        raises EOFError) at end of input.
        """
        reader = input if read_line is None else read_line
        while True:
            try:
                line = reader(self.prompt())
            except EOFError:
                line = None
            if line is None:
                return self.prev_status
            self.handle_line(line)