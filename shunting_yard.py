"""Traducción de tokens infijos a notación postfija (RPN) con shunting-yard.

La gramática se valida durante el recorrido: paréntesis balanceados,
comas solo dentro de llamadas a función, sin operadores colgantes.
El número de argumentos de cada llamada se resuelve en el sitio de la
llamada, por lo que min/max admiten cualquier cantidad.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from calculator_types import ExpressionSyntaxError
from expression_tokenizer import (
    Comma,
    Function,
    LeftParen,
    Number,
    Operator,
    RightParen,
    Token,
    Variable,
)

PRECEDENCE = {
    "^": 4,
    "u+": 3,
    "u-": 3,
    "*": 2,
    "/": 2,
    "+": 1,
    "-": 1,
}

RIGHT_ASSOCIATIVE = frozenset({"^", "u+", "u-"})

UNARY_FORMS = {"+": "u+", "-": "u-"}


@dataclass(frozen=True)
class FunctionCall:
    name: str
    arg_count: int


Instruction = Union[Number, Operator, FunctionCall, Variable]

_StackEntry = Union[Operator, Function, LeftParen]


class LastKind(Enum):
    """Clase del último token significativo; decide operadores unarios y comas."""

    START = "start"
    VALUE = "value"
    OPERATOR = "operator"
    LPAREN = "lparen"
    RPAREN = "rparen"
    COMMA = "comma"
    FUNCTION = "function"


# Tras estos tokens un '+' o '-' es unario
_UNARY_CONTEXT = frozenset({LastKind.START, LastKind.OPERATOR, LastKind.LPAREN, LastKind.COMMA})
_INCOMPLETE_AT_END = frozenset(
    {LastKind.OPERATOR, LastKind.COMMA, LastKind.LPAREN, LastKind.FUNCTION}
)


def _unbalanced() -> ExpressionSyntaxError:
    return ExpressionSyntaxError("unbalanced parentheses", code="UNBALANCED_PARENTHESES")


def _missing_argument() -> ExpressionSyntaxError:
    return ExpressionSyntaxError("missing argument", code="MISSING_ARGUMENT")


def to_rpn(tokens: list[Token]) -> list[Instruction]:
    """Convierte la secuencia de tokens a instrucciones en orden postfijo.

    Raises:
        ExpressionSyntaxError: paréntesis desbalanceados, argumento
            faltante, coma fuera de lugar o expresión incompleta.
    """
    output: list[Instruction] = []
    stack: list[_StackEntry] = []
    # Un contador por paréntesis abierto: int en llamadas, None en agrupaciones
    arg_counts: list[Optional[int]] = []
    last = LastKind.START

    for token in tokens:
        if isinstance(token, (Number, Variable)):
            output.append(token)
            last = LastKind.VALUE

        elif isinstance(token, Function):
            stack.append(token)
            last = LastKind.FUNCTION

        elif isinstance(token, Comma):
            if not arg_counts or arg_counts[-1] is None:
                raise ExpressionSyntaxError("misplaced comma", code="MISPLACED_COMMA")
            if last not in (LastKind.VALUE, LastKind.RPAREN):
                raise _missing_argument()
            _drain_to_paren(stack, output)
            arg_counts[-1] += 1
            last = LastKind.COMMA

        elif isinstance(token, LeftParen):
            stack.append(token)
            arg_counts.append(0 if last is LastKind.FUNCTION else None)
            last = LastKind.LPAREN

        elif isinstance(token, RightParen):
            if last in (LastKind.COMMA, LastKind.LPAREN):
                raise _missing_argument()
            _drain_to_paren(stack, output)
            if not stack:
                raise _unbalanced()
            stack.pop()
            count = arg_counts.pop()
            if count is not None:
                func = stack.pop() if stack else None
                if not isinstance(func, Function):
                    raise ExpressionSyntaxError("malformed function call", code="MALFORMED_CALL")
                # +1: el último argumento no va seguido de coma
                output.append(FunctionCall(func.name, count + 1))
            last = LastKind.RPAREN

        elif isinstance(token, Operator):
            symbol = token.symbol
            if symbol in UNARY_FORMS and last in _UNARY_CONTEXT:
                stack.append(Operator(UNARY_FORMS[symbol]))
            else:
                _pop_by_precedence(symbol, stack, output)
                stack.append(token)
            last = LastKind.OPERATOR

        else:
            raise TypeError(f"unexpected token: {token!r}")

    if last in _INCOMPLETE_AT_END:
        raise ExpressionSyntaxError("incomplete expression", code="INCOMPLETE_EXPRESSION")

    while stack:
        entry = stack.pop()
        if isinstance(entry, LeftParen):
            raise _unbalanced()
        output.append(_as_instruction(entry))

    return output


def _pop_by_precedence(symbol: str, stack: list[_StackEntry], output: list[Instruction]):
    precedence = PRECEDENCE[symbol]
    right_assoc = symbol in RIGHT_ASSOCIATIVE
    while stack and isinstance(stack[-1], Operator):
        top = PRECEDENCE[stack[-1].symbol]
        should_pop = precedence < top if right_assoc else precedence <= top
        if not should_pop:
            break
        output.append(stack.pop())


def _drain_to_paren(stack: list[_StackEntry], output: list[Instruction]):
    while stack and not isinstance(stack[-1], LeftParen):
        output.append(_as_instruction(stack.pop()))


def _as_instruction(entry: _StackEntry) -> Instruction:
    if isinstance(entry, Operator):
        return entry
    if isinstance(entry, Function):
        # Función escrita sin paréntesis (p. ej. "sin 30"): un argumento
        return FunctionCall(entry.name, 1)
    raise _unbalanced()
