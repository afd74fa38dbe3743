import logging
import string
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional

from .errors import DivisionByZeroError, ParseError

logger = logging.getLogger(__name__)


class TokenType(Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    LPAREN = "lparen"
    RPAREN = "rparen"


class Token(NamedTuple):
    type: TokenType
    text: str
    value: Optional[float] = None


def _divide(x: float, y: float) -> float:
    if y == 0:
        raise DivisionByZeroError("division by zero")
    return x / y


OPS_PRECEDENCE: Dict[str, int] = {"+": 1, "-": 1, "*": 2, "/": 2}
OPS_FUNC: Dict[str, Callable[[float, float], float]] = {
    "+": lambda x, y: x + y,
    "-": lambda x, y: x - y,
    "*": lambda x, y: x * y,
    "/": _divide,
}

_PARENS = {"(": TokenType.LPAREN, ")": TokenType.RPAREN}


def _number(literal: str) -> Token:
    try:
        return Token(TokenType.NUMBER, literal, float(literal))
    except ValueError:
        raise ParseError("invalid numeric literal") from None


def tokenize(expr: str) -> List[Token]:
    s = "".join(expr.split())
    tokens: List[Token] = []
    num = ""
    for ch in s:
        if ch in string.digits or ch == ".":
            num += ch
            continue
        if num:
            tokens.append(_number(num))
            num = ""
        if ch in OPS_PRECEDENCE:
            tokens.append(Token(TokenType.OPERATOR, ch))
        elif ch in _PARENS:
            tokens.append(Token(_PARENS[ch], ch))
        else:
            raise ParseError(f"unsupported symbol '{ch}'")
    if num:
        tokens.append(_number(num))
    return tokens


def to_rpn(tokens: List[Token]) -> List[Token]:
    """Shunting-yard: reorder infix tokens into postfix.

    All operators are left-associative, so an operator of equal precedence
    already on the stack is popped before the new one is pushed.
    """
    output: List[Token] = []
    stack: List[Token] = []
    for tok in tokens:
        if tok.type is TokenType.NUMBER:
            output.append(tok)
        elif tok.type is TokenType.OPERATOR:
            while (
                stack
                and stack[-1].type is TokenType.OPERATOR
                and OPS_PRECEDENCE[stack[-1].text] >= OPS_PRECEDENCE[tok.text]
            ):
                output.append(stack.pop())
            stack.append(tok)
        elif tok.type is TokenType.LPAREN:
            stack.append(tok)
        else:
            while stack and stack[-1].type is not TokenType.LPAREN:
                output.append(stack.pop())
            if not stack:
                raise ParseError("unbalanced parentheses")
            stack.pop()
    while stack:
        top = stack.pop()
        if top.type is not TokenType.OPERATOR:
            raise ParseError("unbalanced parentheses")
        output.append(top)
    return output


def eval_rpn(rpn: List[Token]) -> float:
    stack: List[float] = []
    for tok in rpn:
        if tok.type is TokenType.NUMBER:
            stack.append(tok.value)
            continue
        if tok.type is not TokenType.OPERATOR:
            raise ParseError(f"unexpected token: {tok.text}")
        if len(stack) < 2:
            raise ParseError("invalid expression")
        b = stack.pop()
        a = stack.pop()
        stack.append(OPS_FUNC[tok.text](a, b))
    if len(stack) != 1:
        raise ParseError("invalid expression")
    return stack[0]


def compile_expression(expr: str) -> List[Token]:
    """Validate ``expr`` and return it in postfix order."""
    if not isinstance(expr, str) or not expr.strip():
        raise ParseError("expression must be a non-empty string")
    return to_rpn(tokenize(expr))


def evaluate_expression(expr: str) -> float:
    rpn = compile_expression(expr)
    result = eval_rpn(rpn)
    logger.debug("evaluated %r -> %s", expr, result)
    return result
