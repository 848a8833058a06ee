"""Character-level lexer that splits a command line into typed tokens."""

from __future__ import annotations

from typing import Callable, Mapping, Optional

from .tokens import Token, TokenType, move_token

_END = "\0"
_BLANKS = (" ", "\t")
_DELIMITERS = frozenset(" |<>$\0\"'\t")
_SYNTAX_STATUS = 2


def _is_word_char(char: str) -> bool:
    return char == "_" or ("a" <= char <= "z") or ("A" <= char <= "Z") or ("0" <= char <= "9")


def is_delimiter(char: str) -> bool:
    """Return True when ``char`` ends a plain word (an empty string counts as end of input)."""
    return char == "" or char in _DELIMITERS


class ParseError(Exception):
    """A syntax error in the command line."""

    def __init__(self, token: str, status: int = _SYNTAX_STATUS) -> None:
        super().__init__(f"syntax error near unexpected token `{token}'")
        self.token = token
        self.status = status


class Parser:
    """Splits one command line into tokens, expanding variables on the way."""

    def __init__(
        self,
        line: str,
        env: Optional[Mapping[str, Optional[str]]] = None,
        prev_status: int = 0,
    ) -> None:
        self.line = line.split(_END, 1)[0]
        self.env: Mapping[str, Optional[str]] = {} if env is None else env
        self.prev_status = prev_status
        self.tokens: list[Token] = []
        self._reset()

    def _reset(self) -> None:
        self.tokens = []
        self._i = 0
        self._start = 0
        self._pipe_count = 0
        self._has_cmd = False

    # ----------------------------------------------------------- primitives

    def _at(self, index: int) -> str:
        return self.line[index] if index < len(self.line) else _END

    def _append(self, text: str) -> None:
        self.tokens[-1].append(text)

    def _next_type(self) -> TokenType:
        if not self.tokens:
            return TokenType.CMD
        if self.tokens[-1].type is TokenType.RED:
            return TokenType.FILE
        return TokenType.ARG if self._has_cmd else TokenType.CMD

    def _new_token(self, token_type: TokenType) -> Token:
        if token_type is TokenType.PIPE:
            self._pipe_count += 1
            self._has_cmd = False
        elif token_type is TokenType.CMD:
            self._has_cmd = True
        token = Token(type=token_type, pipe_idx=self._pipe_count)
        self.tokens.append(token)
        return token

    def _working_token(self) -> None:
        if not self.tokens or self.tokens[-1].is_end:
            self._new_token(self._next_type())

    def _end_prev_token(self) -> None:
        if not self.tokens:
            return
        prev = self.tokens[-1]
        if prev.is_end:
            return
        prev.append(self.line[self._start:self._i])
        prev.is_end = True

    def _skip_space(self) -> None:
        while self._at(self._i) in _BLANKS:
            self._i += 1

    # ------------------------------------------------------------- handlers

    def _space(self) -> None:
        if self._i > 0:
            self._end_prev_token()
        self._skip_space()
        self._start = self._i

    def _pipe(self) -> None:
        if not self.tokens:
            raise ParseError("|")
        self._end_prev_token()
        if self.tokens[-1].type not in (TokenType.CMD, TokenType.FILE, TokenType.ARG):
            raise ParseError("|")
        self._new_token(TokenType.PIPE).append("|")
        self._end_prev_token()
        self._i += 1
        self._skip_space()
        if self._at(self._i) in (_END, "|"):
            raise ParseError("|")
        self._start = self._i

    def _redirect(self) -> None:
        self._end_prev_token()
        self._new_token(TokenType.RED)
        char = self._at(self._i)
        following = self._at(self._i + 1)
        if following == _END:
            raise ParseError("newline")
        if following == char:
            self._append(self.line[self._i:self._i + 2])
            self._i += 1
        else:
            self._append(char)
        self._i += 1
        self._start = self._i
        self._end_prev_token()
        self._skip_space()
        self._check_redirect_target()
        self._start = self._i

    def _check_redirect_target(self) -> None:
        char = self._at(self._i)
        operator = self.tokens[-1].text
        if char == _END:
            raise ParseError("newline")
        if char in ("<", ">"):
            if self._at(self._i + 1) == char:
                raise ParseError(operator[:2])
            raise ParseError(operator[:1])

    def _normal(self) -> None:
        self._working_token()
        while not is_delimiter(self._at(self._i)):
            self._i += 1
        self._append(self.line[self._start:self._i])
        self._start = self._i

    def _quote(self, body: Callable[[], None]) -> None:
        self._i += 1
        self._start = self._i
        self._working_token()
        body()
        self._append(self.line[self._start:self._i])
        self.tokens[-1].is_quote = True
        self._i += 1
        self._start = self._i
        if self._at(self._i) in ("|", "<", ">", " ", "\t"):
            self._end_prev_token()
            self._skip_space()
        self._start = self._i

    def _double_quote_body(self) -> None:
        while self._at(self._i) not in (_END, '"'):
            self._start = self._i
            while self._at(self._i) not in (_END, '"', "$"):
                self._i += 1
            if self._i > self._start:
                self._append(self.line[self._start:self._i])
                self._start = self._i
            if self._at(self._i) == "$":
                self._expand(in_double_quote=True)
        if self._at(self._i) == _END:
            raise ParseError('"')

    def _single_quote_body(self) -> None:
        while self._at(self._i) not in (_END, "'"):
            self._i += 1
        if self._at(self._i) == _END:
            raise ParseError("'")

    # ------------------------------------------------------------ expansion

    def _is_heredoc_delimiter(self) -> bool:
        return (
            len(self.tokens) > 1
            and self.tokens[-1].type is TokenType.FILE
            and not self.tokens[-1].is_end
            and self.tokens[-2].text == "<<"
        )

    def _expand(self, in_double_quote: bool) -> None:
        self._start = self._i
        self._i += 1
        self._working_token()
        if self._is_heredoc_delimiter():
            self._append("$")
            self._start += 1
            return
        if self._needs_expansion(in_double_quote):
            self._append(self._lookup())
        self._start = self._i

    def _needs_expansion(self, in_double_quote: bool) -> bool:
        end = self._i
        if self._at(end) == "?":
            self._append(str(self.prev_status))
            self._i = end + 1
            return False
        while self._at(end) == "$":
            end += 1
        char = self._at(self._i)
        if (
            end == self._i
            and char not in (" ", "\t", _END, "<", ">", "|")
            and not (in_double_quote and char == '"')
        ):
            return True
        self._append(self.line[self._i - 1:end])
        self._i = end
        return False

    def _lookup(self) -> str:
        self._start = self._i
        if not "0" <= self._at(self._i) <= "9":
            while _is_word_char(self._at(self._i)):
                self._i += 1
        value = self.env.get(self.line[self._start:self._i])
        return value or ""

    # ----------------------------------------------------------- public API

    def parse(self) -> list[Token]:
        """Tokenize the whole line and return the tokens in source order.

        Raises ParseError on a syntax error.
        """
        self._reset()
        while True:
            char = self._at(self._i)
            if char in _BLANKS:
                self._space()
            elif char == "|":
                self._pipe()
            elif char in ("<", ">"):
                self._redirect()
            elif char == "$":
                self._expand(in_double_quote=False)
            elif char == '"':
                self._quote(self._double_quote_body)
            elif char == "'":
                self._quote(self._single_quote_body)
            elif char == _END:
                self._end_prev_token()
                return self.tokens
            else:
                self._normal()

    def reorder(self) -> list[Token]:
        """Move command and argument words ahead of redirections in each pipe block."""
        pipe_count = 0
        latest = 0
        red_seen = False
        for index, token in enumerate(list(self.tokens)):
            if token.pipe_idx > pipe_count:
                pipe_count += 1
                latest = 0
                red_seen = False
            if not latest and token.type is TokenType.RED:
                latest = index
                red_seen = True
            if red_seen and token.type in (TokenType.CMD, TokenType.ARG):
                latest = move_token(self.tokens, index, latest)
        return self.tokens

    def words(self) -> list[str]:
        """Return the text of every token."""
        return [token.text for token in self.tokens]


def tokenize(
    line: str,
    env: Optional[Mapping[str, Optional[str]]] = None,
    prev_status: int = 0,
) -> list[str]:
    """Parse and reorder a command line, returning its words."""
    parser = Parser(line, env, prev_status)
    parser.parse()
    parser.reorder()
    return parser.words()