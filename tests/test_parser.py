import pytest
from hypothesis import given
from hypothesis import strategies as st

from playscript.playscript_ast import ASTNode
from playscript.playscript_constants import ASTKind, TokenKind
from playscript.playscript_errors import (
    MissingExpression,
    MissingOperand,
    MissingRightParen,
    MissingSemicolon,
    MissingVariableName,
    ParseError,
    UnexpectedToken,
    UnknownStatement,
)
from playscript.playscript_lexer import tokenize
from playscript.playscript_parser import Parser, parse, parse_expression


def lit(text: str) -> ASTNode:
    return ASTNode(ASTKind.INT_LITERAL, text)


def ident(name: str) -> ASTNode:
    return ASTNode(ASTKind.IDENTIFIER, name)


def add(op: str, left: ASTNode, right: ASTNode) -> ASTNode:
    return ASTNode.binary(ASTKind.ADDITIVE, op, left, right)


def mul(op: str, left: ASTNode, right: ASTNode) -> ASTNode:
    return ASTNode.binary(ASTKind.MULTIPLICATIVE, op, left, right)


def expr_stmt(expr: ASTNode) -> ASTNode:
    return ASTNode(ASTKind.EXPRESSION_STMT, "", [expr])


def statements(source: str) -> tuple[ASTNode, ...]:
    return parse(source).children


def test_program_root() -> None:
    tree = parse("1;")
    assert tree.kind is ASTKind.PROGRAM
    assert tree.text == "script"
    assert parse("", name="demo") == ASTNode(ASTKind.PROGRAM, "demo")


def test_addition_is_left_associative() -> None:
    (stmt,) = statements("2+3+4;")
    outer = stmt.children[0]
    assert outer.kind is ASTKind.ADDITIVE
    assert outer.children[0] == add("+", lit("2"), lit("3"))
    assert outer.children[1] == lit("4")


def test_subtraction_is_left_associative() -> None:
    (stmt,) = statements("10-4-3;")
    assert stmt == expr_stmt(add("-", add("-", lit("10"), lit("4")), lit("3")))


def test_multiplication_is_left_associative() -> None:
    (stmt,) = statements("8/4/2;")
    assert stmt == expr_stmt(mul("/", mul("/", lit("8"), lit("4")), lit("2")))


def test_multiplicative_binds_tighter() -> None:
    (stmt,) = statements("1+2*3;")
    assert stmt == expr_stmt(add("+", lit("1"), mul("*", lit("2"), lit("3"))))


def test_parentheses_override_precedence() -> None:
    (stmt,) = statements("(1+2)*3;")
    assert stmt == expr_stmt(mul("*", add("+", lit("1"), lit("2")), lit("3")))


def test_nested_parentheses() -> None:
    (stmt,) = statements("((a));")
    assert stmt == expr_stmt(ident("a"))


def test_int_declaration_with_initializer() -> None:
    (stmt,) = statements("int age = 1+2;")
    assert stmt == ASTNode(
        ASTKind.INT_DECLARATION, "age", [add("+", lit("1"), lit("2"))]
    )


def test_int_declaration_without_initializer() -> None:
    (stmt,) = statements("int a;")
    assert stmt == ASTNode(ASTKind.INT_DECLARATION, "a")
    assert stmt.children == ()


def test_assignment_statement() -> None:
    (stmt,) = statements("a = a * 2;")
    assert stmt == ASTNode(
        ASTKind.ASSIGNMENT_STMT, "a", [mul("*", ident("a"), lit("2"))]
    )


def test_statement_sequence() -> None:
    kinds = [s.kind for s in statements("int age = 1+2; age+3; age = 4;")]
    assert kinds == [
        ASTKind.INT_DECLARATION,
        ASTKind.EXPRESSION_STMT,
        ASTKind.ASSIGNMENT_STMT,
    ]


def test_parent_links_after_parse() -> None:
    tree = parse("int a = 1+2;")
    decl = tree.children[0]
    assert decl.parent is tree
    assert decl.children[0].parent is decl


def test_dump_of_parsed_program() -> None:
    assert parse("2+3+4;").dump("  ") == (
        "Program script\n"
        "  ExpressionStmt \n"
        "    Additive +\n"
        "      Additive +\n"
        "        IntLiteral 2\n"
        "        IntLiteral 3\n"
        "      IntLiteral 4"
    )


def test_node_positions() -> None:
    (decl, stmt) = statements("int a = 1;\nb = 2;")
    assert (decl.line, decl.col) == (1, 1)
    assert (stmt.line, stmt.col) == (2, 1)


@pytest.mark.parametrize(
    "source,error",
    [
        ("2+;", MissingOperand),
        ("2*;", MissingOperand),
        ("2+", MissingOperand),
        ("(1+2;", MissingRightParen),
        ("();", MissingExpression),
        ("int a = ;", MissingExpression),
        ("a = ;", MissingExpression),
        ("a = 1", MissingSemicolon),
        ("int a = 1", MissingSemicolon),
        ("int a 1;", MissingSemicolon),
        ("int = 1;", MissingVariableName),
        ("int", UnknownStatement),
        ("2+3", UnknownStatement),
        ("a", UnknownStatement),
        ("= 1;", UnknownStatement),
        (";", UnknownStatement),
        ("a >= 1;", UnknownStatement),
        ("1; 2", UnknownStatement),
    ],
)
def test_syntax_errors(source: str, error: type[ParseError]) -> None:
    with pytest.raises(error):
        parse(source)


def test_syntax_errors_are_builtin_syntax_errors() -> None:
    with pytest.raises(SyntaxError, match="expecting semicolon"):
        parse("int a = 1")


def test_error_message_has_location() -> None:
    with pytest.raises(MissingOperand) as excinfo:
        parse("1 +\n  ;")
    err = excinfo.value
    assert (err.line, err.col) == (2, 3)
    assert "line 2, col 3" in str(err)


def test_error_message_at_end_of_input() -> None:
    with pytest.raises(MissingOperand, match="end of input"):
        parse("2+")


def test_expression_probe_restores_position() -> None:
    tokens = tokenize("2+3")
    parser = Parser(tokens)
    assert parser.expression_statement() is None
    assert tokens.get_position() == 0


def test_expression_probe_restores_position_before_assignment() -> None:
    tokens = tokenize("b = 2+3;")
    parser = Parser(tokens)
    assert parser.expression_statement() is None
    assert tokens.get_position() == 0
    stmt = parser.assignment_statement()
    assert stmt is not None and stmt.text == "b"
    assert tokens.at_end()


def test_assignment_probe_unreads_identifier() -> None:
    tokens = tokenize("a + 1;")
    parser = Parser(tokens)
    assert parser.assignment_statement() is None
    assert tokens.get_position() == 0
    assert tokens.peek().kind is TokenKind.IDENTIFIER  # type: ignore[union-attr]


def test_declaration_probe_without_int_consumes_nothing() -> None:
    tokens = tokenize("a = 1;")
    assert Parser(tokens).int_declaration() is None
    assert tokens.get_position() == 0


def test_primary_probe_consumes_nothing() -> None:
    tokens = tokenize(";")
    assert Parser(tokens).primary() is None
    assert tokens.get_position() == 0


def test_parse_accepts_token_stream() -> None:
    assert parse(tokenize("1;")) == parse("1;")


def test_parse_expression_calculator_mode() -> None:
    assert parse_expression("2+3+4") == add("+", add("+", lit("2"), lit("3")), lit("4"))


@pytest.mark.parametrize(
    "source,error",
    [
        ("", MissingExpression),
        ("2+", MissingOperand),
        ("2 3", UnexpectedToken),
        ("2;", UnexpectedToken),
    ],
)
def test_parse_expression_errors(source: str, error: type[ParseError]) -> None:
    with pytest.raises(error):
        parse_expression(source)


@given(st.lists(st.integers(min_value=0, max_value=99), min_size=2, max_size=10))  # type: ignore[misc]
def test_sums_fold_to_the_left(values: list[int]) -> None:
    tree = parse_expression("+".join(str(v) for v in values))
    node = tree
    for value in reversed(values[1:]):
        assert node.kind is ASTKind.ADDITIVE
        assert node.children[1] == lit(str(value))
        node = node.children[0]
    assert node == lit(str(values[0]))
