"""
Shared vocabulary for the PlayScript front end.

Exports:
    - TokenKind: every token the lexer can emit.
    - ASTKind: every node the parser can build.
    - DfaState: the lexer's automaton states.
    - single_char_tokens: one-character operators and the state/kind they start.
    - KEYWORD_INT, BLANK_CHARS
"""

from enum import Enum


class TokenKind(str, Enum):
    IDENTIFIER = "Identifier"
    INT_LITERAL = "IntLiteral"
    INT_KEYWORD = "IntKeyword"
    PLUS = "Plus"
    MINUS = "Minus"
    STAR = "Star"
    SLASH = "Slash"
    ASSIGNMENT = "Assignment"
    SEMICOLON = "SemiColon"
    LEFT_PAREN = "LeftParen"
    RIGHT_PAREN = "RightParen"
    GREATER_THAN = "GreaterThan"
    GREATER_EQUAL = "GreaterEqual"

    def __str__(self) -> str:
        return self.value


class ASTKind(str, Enum):
    PROGRAM = "Program"
    INT_DECLARATION = "IntDeclaration"
    EXPRESSION_STMT = "ExpressionStmt"
    ASSIGNMENT_STMT = "AssignmentStmt"
    ADDITIVE = "Additive"
    MULTIPLICATIVE = "Multiplicative"
    IDENTIFIER = "Identifier"
    INT_LITERAL = "IntLiteral"

    def __str__(self) -> str:
        return self.value


class DfaState(Enum):
    INITIAL = "Initial"
    IDENTIFIER = "Identifier"
    INT_LITERAL = "IntLiteral"
    # partial matches of the reserved word: "i", "in", "int"
    ID_INT1 = "IdInt1"
    ID_INT2 = "IdInt2"
    ID_INT3 = "IdInt3"
    GREATER_THAN = "GreaterThan"
    GREATER_EQUAL = "GreaterEqual"
    ASSIGNMENT = "Assignment"
    PLUS = "Plus"
    MINUS = "Minus"
    STAR = "Star"
    SLASH = "Slash"
    SEMICOLON = "SemiColon"
    LEFT_PAREN = "LeftParen"
    RIGHT_PAREN = "RightParen"


single_char_tokens: dict[str, tuple[DfaState, TokenKind]] = {
    "+": (DfaState.PLUS, TokenKind.PLUS),
    "-": (DfaState.MINUS, TokenKind.MINUS),
    "*": (DfaState.STAR, TokenKind.STAR),
    "/": (DfaState.SLASH, TokenKind.SLASH),
    ";": (DfaState.SEMICOLON, TokenKind.SEMICOLON),
    "(": (DfaState.LEFT_PAREN, TokenKind.LEFT_PAREN),
    ")": (DfaState.RIGHT_PAREN, TokenKind.RIGHT_PAREN),
    "=": (DfaState.ASSIGNMENT, TokenKind.ASSIGNMENT),
    ">": (DfaState.GREATER_THAN, TokenKind.GREATER_THAN),
}

# states that hold exactly one finished token and close out on any next char
one_shot_states: frozenset[DfaState] = frozenset(
    {
        DfaState.GREATER_EQUAL,
        DfaState.ASSIGNMENT,
        DfaState.PLUS,
        DfaState.MINUS,
        DfaState.STAR,
        DfaState.SLASH,
        DfaState.SEMICOLON,
        DfaState.LEFT_PAREN,
        DfaState.RIGHT_PAREN,
    }
)

KEYWORD_INT = "int"
BLANK_CHARS = " \t\n\r"

__all__ = [
    "ASTKind",
    "BLANK_CHARS",
    "DfaState",
    "KEYWORD_INT",
    "TokenKind",
    "one_shot_states",
    "single_char_tokens",
]
