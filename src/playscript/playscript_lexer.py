"""
Lexical analyzer for the PlayScript language.

This module turns raw source text into a position-addressable token stream using
a deterministic finite automaton: every input character causes exactly one state
transition, and the character that ends a token is re-dispatched from the
``Initial`` state to start the next one.

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: A single immutable token with kind, raw text, and source location.
    TokenStream: Cursor over a token sequence with read/peek/unread and rewind support.
    Lexer: Drives the DFA over a CharacterStream and produces a TokenStream.

Features:
    - Identifiers (``[A-Za-z][A-Za-z0-9]*``) and integer literals (``[0-9]+``)
    - The reserved word ``int``, recognised through three partial-match states
    - Operators ``+ - * / = ; ( )`` and the ``>`` / ``>=`` pair
    - Whitespace and unrecognised characters are skipped without an error

Example:
    >>> stream = tokenize("int age = 30")
    >>> [str(t.kind) for t in stream]
    ['IntKeyword', 'Identifier', 'Assignment', 'IntLiteral']

Exports:
    - CharacterStream
    - Token
    - TokenStream
    - Lexer
    - tokenize
    - dump_tokens
"""

import logging
import string
from collections.abc import Iterable, Iterator
from typing import Any

from playscript.playscript_constants import (
    BLANK_CHARS,
    KEYWORD_INT,
    DfaState,
    TokenKind,
    one_shot_states,
    single_char_tokens,
)

logger = logging.getLogger(__name__)

ALPHA = frozenset(string.ascii_letters)
DIGITS = frozenset(string.digits)
ALNUM = ALPHA | DIGITS


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the PlayScript language.

    Tokens are immutable once produced.

    Attributes:
        kind (TokenKind): The token's category.
        text (str): The raw lexeme.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    __slots__ = ("kind", "text", "line", "col")

    def __init__(self, kind: TokenKind, text: str, line: int = 0, col: int = 0):
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "text", text)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable, cannot set {name!r}")

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text!r})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.text == other.text
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.text, self.line, self.col))


class TokenStream:
    """Position-addressable reader over a finished token sequence.

    The cursor is the only mutable state and always lies in ``[0, len(tokens)]``.
    ``unread`` steps back one token; ``get_position``/``set_position`` allow an
    arbitrary rewind for multi-token backtracking.
    """

    def __init__(self, tokens: Iterable[Token]):
        self._tokens: tuple[Token, ...] = tuple(tokens)
        self._pos = 0

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._tokens

    def read(self) -> Token | None:
        """Consumes and returns the next token, or None at the end."""
        if self._pos < len(self._tokens):
            token = self._tokens[self._pos]
            self._pos += 1
            return token
        return None

    def peek(self) -> Token | None:
        """Returns the next token without consuming it, or None at the end."""
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def unread(self) -> None:
        """Moves the cursor back exactly one token (no-op at the start)."""
        if self._pos > 0:
            self._pos -= 1

    def get_position(self) -> int:
        return self._pos

    def set_position(self, position: int) -> None:
        """Rewinds (or advances) the cursor to ``position``.

        Raises:
            ValueError: If ``position`` lies outside ``[0, len(tokens)]``.
        """
        if not 0 <= position <= len(self._tokens):
            raise ValueError(
                f"Token position {position} out of range [0, {len(self._tokens)}]"
            )
        self._pos = position

    def at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __repr__(self) -> str:
        return f"TokenStream(pos={self._pos}, tokens={list(self._tokens)!r})"


class _LexState:
    """Per-call automaton state: current DFA state, lexeme buffer and output."""

    def __init__(self) -> None:
        self.state = DfaState.INITIAL
        self.text = ""
        self.kind = TokenKind.IDENTIFIER
        self.line = 0
        self.col = 0
        self.tokens: list[Token] = []


class Lexer:
    """DFA tokenizer for PlayScript.

    Every call to :meth:`tokenize` allocates its own automaton state, so one
    Lexer can be reused without leaking a half-built token between calls.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def tokenize(self) -> TokenStream:
        """Consumes the whole character stream and returns its tokens."""
        lex = _LexState()
        while not self.stream.end_of_file():
            line, col = self.stream.line, self.stream.column
            ch = self.stream.next()
            lex.state = self._step(lex, ch, line, col)

        # end of input: close out whatever is mid-accumulation
        if lex.text:
            self._close_out(lex)
        return TokenStream(lex.tokens)

    def _step(self, lex: _LexState, ch: str, line: int, col: int) -> DfaState:
        state = lex.state

        if state is DfaState.INITIAL:
            return self._init_token(lex, ch, line, col)

        if state is DfaState.IDENTIFIER:
            if ch in ALNUM:
                lex.text += ch
                return state
            return self._init_token(lex, ch, line, col)

        if state is DfaState.INT_LITERAL:
            if ch in DIGITS:
                lex.text += ch
                return state
            return self._init_token(lex, ch, line, col)

        if state is DfaState.ID_INT1 or state is DfaState.ID_INT2:
            expected = KEYWORD_INT[1] if state is DfaState.ID_INT1 else KEYWORD_INT[2]
            if ch == expected:
                lex.text += ch
                return DfaState.ID_INT2 if state is DfaState.ID_INT1 else DfaState.ID_INT3
            if ch in ALNUM:
                lex.text += ch
                return DfaState.IDENTIFIER
            return self._init_token(lex, ch, line, col)

        if state is DfaState.ID_INT3:
            # "int" only becomes a keyword when a blank follows it directly
            if ch in BLANK_CHARS:
                lex.kind = TokenKind.INT_KEYWORD
                return self._init_token(lex, ch, line, col)
            if ch in ALNUM:
                lex.text += ch
                return DfaState.IDENTIFIER
            return self._init_token(lex, ch, line, col)

        if state is DfaState.GREATER_THAN:
            if ch == "=":
                lex.kind = TokenKind.GREATER_EQUAL
                lex.text += ch
                return DfaState.GREATER_EQUAL
            return self._init_token(lex, ch, line, col)

        if state in one_shot_states:
            return self._init_token(lex, ch, line, col)

        raise AssertionError(f"Unhandled lexer state: {state}")  # pragma: no cover

    def _close_out(self, lex: _LexState) -> None:
        token = Token(lex.kind, lex.text, lex.line, lex.col)
        logger.debug("token %s %r at %d:%d", token.kind, token.text, lex.line, lex.col)
        lex.tokens.append(token)
        lex.text = ""
        lex.kind = TokenKind.IDENTIFIER

    def _init_token(self, lex: _LexState, ch: str, line: int, col: int) -> DfaState:
        """Finalizes the pending token (if any) and dispatches ``ch`` from Initial."""
        if lex.text:
            self._close_out(lex)

        if ch in ALPHA:
            new_state = DfaState.ID_INT1 if ch == KEYWORD_INT[0] else DfaState.IDENTIFIER
            kind = TokenKind.IDENTIFIER
        elif ch in DIGITS:
            new_state, kind = DfaState.INT_LITERAL, TokenKind.INT_LITERAL
        elif ch in single_char_tokens:
            new_state, kind = single_char_tokens[ch]
        else:
            if ch not in BLANK_CHARS:
                logger.debug("skipping unrecognised character %r at %d:%d", ch, line, col)
            return DfaState.INITIAL

        lex.kind = kind
        lex.text = ch
        lex.line, lex.col = line, col
        return new_state


def tokenize(source: str) -> TokenStream:
    """Tokenizes ``source`` in one pass and returns a fresh TokenStream."""
    return Lexer(CharacterStream(source)).tokenize()


def dump_tokens(stream: TokenStream) -> str:
    """Formats every token as a ``text``/``kind`` table. The cursor is not moved."""
    lines = ["[text]\t\t[type]"]
    for token in stream:
        separator = "\t" * max(1, 3 - len(token.text) // 4)
        lines.append(f"{token.text}{separator}{token.kind}")
    return "\n".join(lines)


__all__ = [
    "CharacterStream",
    "Lexer",
    "Token",
    "TokenStream",
    "dump_tokens",
    "tokenize",
]
