"""
PlayScript Parser

Recursive-descent parser that turns a PlayScript token stream into an AST.

Grammar
-------
    program             -> (intDeclaration | expressionStatement | assignmentStatement)*
    intDeclaration      -> 'int' Identifier ('=' additive)? ';'
    expressionStatement -> additive ';'
    assignmentStatement -> Identifier '=' additive ';'
    additive            -> multiplicative (('+'|'-') multiplicative)*
    multiplicative      -> primary (('*'|'/') primary)*
    primary             -> IntLiteral | Identifier | '(' additive ')'

Parser Behavior
---------------
Each rule method reports its outcome through one of two channels:

- ``None``: the rule does not apply here. The cursor is left exactly where it
  was before the attempt, so the caller can try another rule.
- an exception from :mod:`playscript.playscript_errors`: the rule was
  committed (e.g. an operator or ``=`` was consumed) and then failed. Nothing
  is recovered; the first error aborts the whole ``parse`` call.

``additive`` and ``multiplicative`` fold operators into the accumulated left
operand inside a loop, so ``2+3+4`` becomes ``(2+3)+4``.

Entry Points
------------
- ``parse()``: Parse a full program into a Program node.
- ``parse_expression()``: Parse exactly one unterminated expression.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from playscript.playscript_ast import ASTNode
from playscript.playscript_constants import ASTKind, TokenKind
from playscript.playscript_errors import (
    MissingExpression,
    MissingOperand,
    MissingRightParen,
    MissingSemicolon,
    MissingVariableName,
    UnexpectedToken,
    UnknownStatement,
)
from playscript.playscript_lexer import Token, TokenStream, tokenize

logger = logging.getLogger(__name__)

ADDITIVE_OPS = frozenset({TokenKind.PLUS, TokenKind.MINUS})
MULTIPLICATIVE_OPS = frozenset({TokenKind.STAR, TokenKind.SLASH})


class Parser:
    """
    PlayScript Parser Class

    Attributes
    ----------
    tokens : TokenStream
        The token stream being parsed; its cursor is the parser's only state.

    Raises
    ------
    SyntaxError
        Subclasses from :mod:`playscript.playscript_errors` when a committed
        rule fails or no statement rule matches.
    """

    def __init__(self, tokens: TokenStream) -> None:
        self.tokens = tokens

    def check(self, *kinds: TokenKind) -> bool:
        tok = self.tokens.peek()
        return tok is not None and tok.kind in kinds

    def accept(self, *kinds: TokenKind) -> Token | None:
        """Consumes and returns the next token if it has one of ``kinds``."""
        if self.check(*kinds):
            return self.tokens.read()
        return None

    def parse(self, name: str = "script") -> ASTNode:
        """Parse every statement in the stream into a Program node."""
        program = ASTNode(ASTKind.PROGRAM, name)
        while self.tokens.peek() is not None:
            child = self.int_declaration()
            if child is None:
                child = self.expression_statement()
            if child is None:
                child = self.assignment_statement()
            if child is None:
                raise UnknownStatement.at("unknown statement", self.tokens.peek())
            program.add_child(child)
        return program

    def parse_expression(self) -> ASTNode:
        """Parse one additive expression that must span the whole stream."""
        node = self.additive()
        if node is None:
            raise MissingExpression.at("expression expected", self.tokens.peek())
        if not self.tokens.at_end():
            raise UnexpectedToken.at("unexpected token after expression", self.tokens.peek())
        return node

    def int_declaration(self) -> ASTNode | None:
        """intDeclaration -> 'int' Identifier ('=' additive)? ';'"""
        int_tok = self.accept(TokenKind.INT_KEYWORD)
        if int_tok is None:
            return None

        name_tok = self.accept(TokenKind.IDENTIFIER)
        if name_tok is None:
            raise MissingVariableName.at("variable name expected", self.tokens.peek())
        node = ASTNode(
            ASTKind.INT_DECLARATION, name_tok.text, line=int_tok.line, col=int_tok.col
        )

        if self.accept(TokenKind.ASSIGNMENT) is not None:
            init = self.additive()
            if init is None:
                raise MissingExpression.at(
                    "invalid variable initialization, expecting an expression",
                    self.tokens.peek(),
                )
            node.add_child(init)

        self.expect_semicolon()
        return node

    def expression_statement(self) -> ASTNode | None:
        """expressionStatement -> additive ';'

        Speculative: without a trailing ``;`` the cursor is rewound and None returned.
        """
        start = self.tokens.get_position()
        expr = self.additive()
        if expr is None:
            return None
        if self.accept(TokenKind.SEMICOLON) is None:
            logger.debug(
                "expression statement probe failed at %d, rewinding to %d",
                self.tokens.get_position(),
                start,
            )
            self.tokens.set_position(start)
            return None
        return ASTNode(ASTKind.EXPRESSION_STMT, "", [expr], line=expr.line, col=expr.col)

    def assignment_statement(self) -> ASTNode | None:
        """assignmentStatement -> Identifier '=' additive ';'"""
        name_tok = self.accept(TokenKind.IDENTIFIER)
        if name_tok is None:
            return None
        if self.accept(TokenKind.ASSIGNMENT) is None:
            logger.debug("no '=' after %r, giving the identifier back", name_tok.text)
            self.tokens.unread()
            return None

        value = self.additive()
        if value is None:
            raise MissingExpression.at(
                "invalid assignment statement, expecting an expression",
                self.tokens.peek(),
            )
        self.expect_semicolon()
        return ASTNode(
            ASTKind.ASSIGNMENT_STMT,
            name_tok.text,
            [value],
            line=name_tok.line,
            col=name_tok.col,
        )

    def expect_semicolon(self) -> None:
        if self.accept(TokenKind.SEMICOLON) is None:
            raise MissingSemicolon.at(
                "invalid statement, expecting semicolon", self.tokens.peek()
            )

    def additive(self) -> ASTNode | None:
        """additive -> multiplicative (('+'|'-') multiplicative)*"""
        return self._binary_chain(
            ASTKind.ADDITIVE, ADDITIVE_OPS, self.multiplicative, "additive"
        )

    def multiplicative(self) -> ASTNode | None:
        """multiplicative -> primary (('*'|'/') primary)*"""
        return self._binary_chain(
            ASTKind.MULTIPLICATIVE, MULTIPLICATIVE_OPS, self.primary, "multiplicative"
        )

    def _binary_chain(
        self,
        kind: ASTKind,
        ops: frozenset[TokenKind],
        operand: Callable[[], ASTNode | None],
        rule_name: str,
    ) -> ASTNode | None:
        node = operand()
        if node is None:
            return None
        while True:
            op_tok = self.accept(*ops)
            if op_tok is None:
                return node
            right = operand()
            if right is None:
                raise MissingOperand.at(
                    f"invalid {rule_name} expression, expecting the right part",
                    self.tokens.peek(),
                )
            # the accumulated node becomes the left child: left-associative
            node = ASTNode.binary(
                kind, op_tok.text, node, right, line=op_tok.line, col=op_tok.col
            )

    def primary(self) -> ASTNode | None:
        """primary -> IntLiteral | Identifier | '(' additive ')'"""
        tok = self.accept(TokenKind.INT_LITERAL, TokenKind.IDENTIFIER)
        if tok is not None:
            kind = (
                ASTKind.INT_LITERAL
                if tok.kind is TokenKind.INT_LITERAL
                else ASTKind.IDENTIFIER
            )
            return ASTNode(kind, tok.text, line=tok.line, col=tok.col)

        if self.accept(TokenKind.LEFT_PAREN) is None:
            return None
        inner = self.additive()
        if inner is None:
            raise MissingExpression.at(
                "expecting an additive expression inside parenthesis",
                self.tokens.peek(),
            )
        if self.accept(TokenKind.RIGHT_PAREN) is None:
            raise MissingRightParen.at("expecting right parenthesis", self.tokens.peek())
        return inner


def _as_stream(source: TokenStream | str) -> TokenStream:
    return tokenize(source) if isinstance(source, str) else source


def parse(source: TokenStream | str, name: str = "script") -> ASTNode:
    """Parse a token stream (or raw source text) into a Program node."""
    return Parser(_as_stream(source)).parse(name)


def parse_expression(source: TokenStream | str) -> ASTNode:
    """Parse a single unterminated expression such as ``2+3*4``."""
    return Parser(_as_stream(source)).parse_expression()


__all__ = ["Parser", "parse", "parse_expression"]
