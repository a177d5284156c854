"""
Defines the abstract syntax tree (AST) node structure for the PlayScript language.

Classes:
    ASTNode:
        A node in the syntax tree built by the parser and walked by the evaluator.
        Children are owned by their parent; the parent back-reference is a weak
        reference used for navigation and diagnostics only.

    ASTDict:
        TypedDict representation for serializing ASTNode instances to plain Python
        dictionaries, suitable for JSON output or debugging.

Each ASTNode tracks:
    kind (ASTKind): The syntactic construct (e.g. Program, Additive, Identifier).
    text (str): Operator symbol, variable name, or literal digits depending on kind.
    children (tuple[ASTNode, ...]): Ordered child nodes; 0 for leaves, 1 for a
        statement with an expression, 2 for binary operators.
    line (int): Source line number for error messages.
    col (int): Source column number for error messages.

Example:
    node = ASTNode.binary(ASTKind.ADDITIVE, "+", ASTNode(ASTKind.INT_LITERAL, "2"),
                          ASTNode(ASTKind.INT_LITERAL, "3"))
    print(node.dump())
"""

import weakref
from collections.abc import Iterator
from typing import Any, TypedDict

from playscript.playscript_constants import ASTKind

BINARY_KINDS = frozenset({ASTKind.ADDITIVE, ASTKind.MULTIPLICATIVE})


class ASTDict(TypedDict):
    """
    Serialized shape of an ASTNode.

    Fields:
        kind (str): The node kind name (e.g. "Additive").
        text (str): The node payload.
        line (int): Line number in the source code where the node originates.
        col (int): Column number in the source code where the node originates.
        children (list[ASTDict]): Child nodes in order.
    """

    kind: str
    text: str
    line: int
    col: int
    children: list["ASTDict"]


class ASTNode:
    """
    Represents a node in the abstract syntax tree for PlayScript.

    Args:
        kind (ASTKind): The type of node.
        text (str, optional): Payload text (operator, name, or digits).
        children (list[ASTNode], optional): Initial children; each is attached
            through :meth:`add_child` so its parent reference is set.
        line (int): Source line number (default is 0).
        col (int): Source column number (default is 0).

    Methods:
        add_child(child): Appends a child and points its parent back at this node.
        binary(kind, op, left, right): Builds an Additive/Multiplicative node.
        dump(indent): Depth-first textual dump, one line per node.
        walk(): Pre-order iterator over this node and its descendants.
        to_dict(): Converts the node (and all descendants) into a nested dict.
    """

    def __init__(
        self,
        kind: ASTKind,
        text: str = "",
        children: list["ASTNode"] | None = None,
        line: int = 0,
        col: int = 0,
    ):
        self.kind = kind
        self.text = text
        self.line = line
        self.col = col
        self._children: list["ASTNode"] = []
        self._parent: weakref.ref["ASTNode"] | None = None
        for child in children or []:
            self.add_child(child)

    @classmethod
    def binary(
        cls,
        kind: ASTKind,
        op: str,
        left: "ASTNode",
        right: "ASTNode",
        line: int = 0,
        col: int = 0,
    ) -> "ASTNode":
        """Builds a binary operator node; it always has exactly two children."""
        if kind not in BINARY_KINDS:
            raise ValueError(f"{kind} is not a binary operator node")
        return cls(kind, op, [left, right], line=line, col=col)

    @property
    def children(self) -> tuple["ASTNode", ...]:
        return tuple(self._children)

    @property
    def parent(self) -> "ASTNode | None":
        return self._parent() if self._parent is not None else None

    def add_child(self, child: "ASTNode") -> None:
        self._children.append(child)
        child._parent = weakref.ref(self)

    def walk(self) -> Iterator["ASTNode"]:
        # explicit stack: long operator chains nest deeper than the recursion limit
        stack: list["ASTNode"] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def dump(self, indent: str = "\t") -> str:
        """Returns ``"<indent * depth><Kind> <text>"`` for every node, depth-first."""
        lines: list[str] = []
        stack: list[tuple["ASTNode", int]] = [(self, 0)]
        while stack:
            node, depth = stack.pop()
            lines.append(f"{indent * depth}{node.kind} {node.text}")
            stack.extend((child, depth + 1) for child in reversed(node._children))
        return "\n".join(lines)

    def __repr__(self) -> str:
        parts = [f"{self.kind}"]
        if self.text:
            parts.append(f"text={self.text!r}")
        if self._children:
            preview = ", ".join(repr(c) for c in self._children[:3])
            if len(self._children) > 3:
                preview += ", ..."
            parts.append(f"children=[{preview}]")
        return f"ASTNode({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        # structural: positions and parents are not part of a node's identity
        if not isinstance(other, ASTNode):
            return False
        pending: list[tuple[ASTNode, ASTNode]] = [(self, other)]
        while pending:
            a, b = pending.pop()
            if a.kind != b.kind or a.text != b.text or len(a._children) != len(b._children):
                return False
            pending.extend(zip(a._children, b._children))
        return True

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> ASTDict:
        return {
            "kind": str(self.kind),
            "text": self.text,
            "line": self.line,
            "col": self.col,
            "children": [c.to_dict() for c in self._children],
        }


def dump_ast(node: ASTNode, indent: str = "\t") -> str:
    return node.dump(indent)


__all__ = ["ASTDict", "ASTNode", "dump_ast"]
