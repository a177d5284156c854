"""
Tree-walking evaluator for PlayScript.

The evaluator walks an AST produced by :mod:`playscript.playscript_parser`
against a mutable variable environment. Its only side effect is mutating that
environment.

Integer semantics:
    - Values are Python ints (no overflow checking).
    - ``/`` is floor division; a zero divisor raises ``DivisionByZero``.

Environment:
    A ``dict[str, int | None]``: a missing key is an undeclared variable, a
    ``None`` value a declared but unset one. An ``Interpreter`` keeps its
    environment across calls until :meth:`Interpreter.reset`; the module-level
    :func:`evaluate` uses a fresh dictionary unless one is passed in.
"""

import logging
from collections.abc import Callable, Iterator
from typing import NamedTuple

from playscript.playscript_ast import BINARY_KINDS, ASTNode
from playscript.playscript_constants import ASTKind
from playscript.playscript_errors import DivisionByZero, UnknownVariable, UnsetVariable
from playscript.playscript_parser import parse, parse_expression

logger = logging.getLogger(__name__)

Environment = dict[str, int | None]
Tracer = Callable[[str], None]

BINDING_KINDS = frozenset({ASTKind.INT_DECLARATION, ASTKind.ASSIGNMENT_STMT})

UNSET = "<unset>"


def format_value(value: int | None) -> str:
    return UNSET if value is None else str(value)


class StatementResult(NamedTuple):
    """The outcome of one top-level statement.

    ``name`` is the bound variable for declarations and assignments, else None.
    """

    kind: ASTKind
    name: str | None
    value: int | None

    def __str__(self) -> str:
        if self.name is not None:
            return f"{self.name}: {format_value(self.value)}"
        return format_value(self.value)


class Interpreter:
    """Evaluates PlayScript ASTs against one variable environment.

    Args:
        environment (Environment | None): Bindings to start from. The dictionary
            is used (and mutated) in place; a new one is created when omitted.
        trace (Callable[[str], None] | None): Receives one
            ``"<indent>Calculating: <Kind>"`` line per visited node.
    """

    def __init__(
        self, environment: Environment | None = None, trace: Tracer | None = None
    ) -> None:
        self.variables: Environment = {} if environment is None else environment
        self.trace = trace
        self._handlers: dict[ASTKind, Callable[[ASTNode, int], int | None]] = {
            ASTKind.PROGRAM: self._eval_program,
            ASTKind.INT_DECLARATION: self._eval_declaration,
            ASTKind.ASSIGNMENT_STMT: self._eval_assignment,
            ASTKind.EXPRESSION_STMT: self._eval_expression_stmt,
            ASTKind.ADDITIVE: self._eval_binary,
            ASTKind.MULTIPLICATIVE: self._eval_binary,
            ASTKind.IDENTIFIER: self._eval_identifier,
            ASTKind.INT_LITERAL: self._eval_literal,
        }

    def handled_kinds(self) -> frozenset[ASTKind]:
        return frozenset(self._handlers)

    def reset(self) -> None:
        self.variables.clear()

    def evaluate(self, node: ASTNode) -> int | None:
        """Evaluates ``node`` and returns its value (None for an unset declaration)."""
        return self._visit(node, 0)

    def iter_results(self, program: ASTNode) -> Iterator[StatementResult]:
        """Evaluates each top-level statement of ``program`` lazily, in order.

        Bindings made by statements before a failing one stay in the environment.
        """
        statements = program.children if program.kind is ASTKind.PROGRAM else (program,)
        for stmt in statements:
            value = self._visit(stmt, 0)
            name = stmt.text if stmt.kind in BINDING_KINDS else None
            yield StatementResult(stmt.kind, name, value)

    def execute(self, program: ASTNode) -> list[StatementResult]:
        return list(self.iter_results(program))

    def run(self, source: str) -> list[StatementResult]:
        """Parses and executes ``source``; returns one result per statement."""
        return self.execute(parse(source))

    def _visit(self, node: ASTNode, depth: int) -> int | None:
        self._trace(node, depth)
        handler = self._handlers.get(node.kind)
        if handler is None:
            raise TypeError(f"Cannot evaluate node of kind {node.kind!r}")
        return handler(node, depth + 1)

    def _trace(self, node: ASTNode, depth: int) -> None:
        if self.trace is not None:
            indent = "\t" * depth
            self.trace(f"{indent}Calculating: {node.kind}")

    def _eval_program(self, node: ASTNode, depth: int) -> int | None:
        result: int | None = None
        for child in node.children:
            result = self._visit(child, depth)
        return result

    def _eval_expression_stmt(self, node: ASTNode, depth: int) -> int | None:
        return self._visit(node.children[0], depth)

    def _eval_assignment(self, node: ASTNode, depth: int) -> int | None:
        if node.text not in self.variables:
            raise UnknownVariable(node.text)
        return self._bind(node, depth)

    def _eval_declaration(self, node: ASTNode, depth: int) -> int | None:
        # redeclaring an existing name simply overwrites it
        return self._bind(node, depth)

    def _bind(self, node: ASTNode, depth: int) -> int | None:
        value = self._visit(node.children[0], depth) if node.children else None
        logger.debug("bind %s = %r", node.text, value)
        self.variables[node.text] = value
        return value

    def _eval_identifier(self, node: ASTNode, depth: int) -> int:
        if node.text not in self.variables:
            raise UnknownVariable(node.text)
        value = self.variables[node.text]
        if value is None:
            raise UnsetVariable(node.text)
        return value

    def _eval_literal(self, node: ASTNode, depth: int) -> int:
        return int(node.text, 10)

    def _eval_binary(self, node: ASTNode, depth: int) -> int:
        # The parser folds chains into a left spine; walk it in a loop so a long
        # chain costs no stack. Trace depths match a recursive visit.
        spine = [node]
        leftmost = node.children[0]
        while leftmost.kind in BINARY_KINDS:
            self._trace(leftmost, depth + len(spine) - 1)
            spine.append(leftmost)
            leftmost = leftmost.children[0]
        value = self._visit(leftmost, depth + len(spine) - 1)
        for level in range(len(spine) - 1, -1, -1):
            op_node = spine[level]
            right = self._visit(op_node.children[1], depth + level)
            # operands are identifiers, literals or operators, never None
            assert value is not None and right is not None
            value = self._apply(op_node, value, right)
        assert value is not None
        return value

    def _apply(self, node: ASTNode, left: int, right: int) -> int:
        op = node.text
        if op == "+":
            return left + right
        if op == "-":
            return left - right
        if op == "*":
            return left * right
        if op == "/":
            if right == 0:
                raise DivisionByZero(
                    f"division by zero in {left} / {right}",
                    node.line or None,
                    node.col or None,
                )
            return left // right
        raise TypeError(f"Unknown operator {op!r} in {node.kind} node")


def evaluate(node: ASTNode, environment: Environment | None = None) -> int | None:
    """Evaluates ``node`` against ``environment`` (a fresh one when omitted)."""
    return Interpreter(environment).evaluate(node)


def calculate(source: str, trace: Tracer | None = None) -> int:
    """Evaluates a single unterminated expression such as ``1 + 2 * 3``."""
    value = Interpreter(trace=trace).evaluate(parse_expression(source))
    assert value is not None
    return value


__all__ = [
    "Environment",
    "Interpreter",
    "StatementResult",
    "calculate",
    "evaluate",
    "format_value",
]
