import re

import pytest

from calculator_api.errors import DivisionByZeroError, ParseError
from calculator_api.expression import (
    TokenType,
    compile_expression,
    eval_rpn,
    evaluate_expression,
    to_rpn,
    tokenize,
)


def _texts(tokens):
    return [tok.text for tok in tokens]


def test_tokenize_strips_whitespace():
    tokens = tokenize(" 12.5 *( 3 + 4 ) ")
    assert _texts(tokens) == ["12.5", "*", "(", "3", "+", "4", ")"]
    assert tokens[0].type is TokenType.NUMBER
    assert tokens[0].value == 12.5
    assert tokens[1].type is TokenType.OPERATOR
    assert tokens[2].type is TokenType.LPAREN
    assert tokens[-1].type is TokenType.RPAREN


def test_tokenize_leading_decimal_point():
    assert tokenize(".5")[0].value == 0.5


@pytest.mark.parametrize("expr", [".", "1+.", "1.2.3", ".+1"])
def test_tokenize_invalid_number(expr):
    with pytest.raises(ParseError, match="invalid numeric literal"):
        tokenize(expr)


@pytest.mark.parametrize("expr,symbol", [
    ("5&3", "&"),
    ("2^3", "^"),
    ("x+1", "x"),
    ("١+١", "١"),
    ("2²", "²"),
])
def test_tokenize_unsupported_symbol(expr, symbol):
    with pytest.raises(ParseError, match=re.escape(f"unsupported symbol '{symbol}'")):
        tokenize(expr)


def test_to_rpn_precedence():
    assert _texts(to_rpn(tokenize("3+4*2"))) == ["3", "4", "2", "*", "+"]


def test_to_rpn_left_associative():
    assert _texts(to_rpn(tokenize("10-3-2"))) == ["10", "3", "-", "2", "-"]


def test_to_rpn_parentheses():
    assert _texts(to_rpn(tokenize("(10+20)*5"))) == ["10", "20", "+", "5", "*"]


@pytest.mark.parametrize("expr", ["5*(3+2", "(1+2))", ")(", "((1)"])
def test_to_rpn_unbalanced(expr):
    with pytest.raises(ParseError, match="unbalanced parentheses"):
        to_rpn(tokenize(expr))


@pytest.mark.parametrize("expr,expected", [
    ("10+20*5", 110),
    ("(10+20)*5", 150),
    ("10-3-2", 5),
    ("100/10/2", 5),
    ("2*(3+4)*5", 70),
    ("7 + 3 * 2 - 4 / 2", 11),
    ("1.5+2.25", 3.75),
    ("((2))", 2),
    ("0/5", 0),
])
def test_evaluate_valid(expr, expected):
    assert evaluate_expression(expr) == pytest.approx(expected)


def test_evaluate_division_by_zero():
    with pytest.raises(DivisionByZeroError):
        evaluate_expression("10/0")


def test_division_by_zero_is_arithmetic_error():
    with pytest.raises(ArithmeticError):
        evaluate_expression("1/(2-2)")


@pytest.mark.parametrize("expr", ["5+", "*5", "5 5 +", "()", "5(3)"])
def test_evaluate_invalid_structure(expr):
    with pytest.raises(ParseError):
        evaluate_expression(expr)


def test_evaluate_trailing_operator_message():
    with pytest.raises(ParseError, match="invalid expression"):
        evaluate_expression("5+")


@pytest.mark.parametrize("expr", ["", "   ", None])
def test_compile_rejects_blank(expr):
    with pytest.raises(ParseError, match="non-empty string"):
        compile_expression(expr)


def test_eval_rpn_empty():
    with pytest.raises(ParseError, match="invalid expression"):
        eval_rpn([])
