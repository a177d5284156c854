"""
Error taxonomy for PlayScript.

Syntax errors derive from the builtin ``SyntaxError`` (through ``ParseError``)
so callers can catch them the same way as any other syntax failure. Semantic
errors raised while evaluating derive from ``EvaluationError``.

Lexing never raises: unknown characters are skipped by the lexer.
"""

from typing import Any


class PlayScriptError(Exception):
    """Base class for every error raised by the PlayScript toolchain.

    Attributes:
        reason (str): The message without location information.
        line (int | None): 1-based source line, when known.
        col (int | None): 1-based source column, when known.
    """

    def __init__(self, reason: str, line: int | None = None, col: int | None = None):
        self.reason = reason
        self.line = line
        self.col = col
        if line is not None and col is not None:
            message = f"{reason} at line {line}, col {col}"
        else:
            message = reason
        super().__init__(message)

    @classmethod
    def at(cls, reason: str, token: Any = None) -> "PlayScriptError":
        """Builds the error positioned at ``token`` (or unpositioned at EOF)."""
        if token is None:
            return cls(f"{reason}, got end of input")
        return cls(f"{reason}, got {token.text!r}", token.line, token.col)


class ParseError(PlayScriptError, SyntaxError):
    """A committed grammar rule could not be completed."""


class MissingSemicolon(ParseError):
    pass


class MissingRightParen(ParseError):
    pass


class MissingOperand(ParseError):
    """A binary operator was consumed but no right-hand operand follows."""


class MissingExpression(ParseError):
    """No expression after ``=`` or inside parentheses."""


class MissingVariableName(ParseError):
    pass


class UnknownStatement(ParseError):
    pass


class UnexpectedToken(ParseError):
    """Tokens left over after a complete single expression."""


class EvaluationError(PlayScriptError, RuntimeError):
    pass


class UnknownVariable(EvaluationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown variable: {name}")


class UnsetVariable(EvaluationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"variable {name} has not been set any value")


class DivisionByZero(EvaluationError):
    pass


__all__ = [
    "DivisionByZero",
    "EvaluationError",
    "MissingExpression",
    "MissingOperand",
    "MissingRightParen",
    "MissingSemicolon",
    "MissingVariableName",
    "ParseError",
    "PlayScriptError",
    "UnexpectedToken",
    "UnknownStatement",
    "UnknownVariable",
    "UnsetVariable",
]
