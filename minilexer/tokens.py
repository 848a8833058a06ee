"""Token model produced by the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import MutableSequence, TypeVar

T = TypeVar("T")


class TokenType(Enum):
    """Role of a token within a command line."""

    CMD = "cmd"
    ARG = "arg"
    FILE = "file"
    RED = "red"
    PIPE = "pipe"


@dataclass
class Token:
    """One word of the command line together with its lexical role."""

    type: TokenType = TokenType.CMD
    text: str = ""
    pipe_idx: int = 0
    is_end: bool = False
    is_quote: bool = False

    def append(self, text: str) -> None:
        """Extend the token's text."""
        self.text += text


def move_token(tokens: MutableSequence[T], index: int, position: int) -> int:
    """Move ``tokens[index]`` to ``position``, shifting the ones between right.

    Returns the position following the moved token.
    """
    if not 0 <= position <= index < len(tokens):
        if 0 <= index < len(tokens) and 0 <= position < len(tokens):
            raise ValueError("a token can only be moved towards the front")
        raise IndexError("token index out of range")
    tokens.insert(position, tokens.pop(index))
    return position + 1