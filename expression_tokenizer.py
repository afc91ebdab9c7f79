"""Análisis léxico: texto de la expresión -> secuencia de tokens."""

from __future__ import annotations

import math
import string
from dataclasses import dataclass
from typing import Union

from calculator_config import MAX_INPUT_LENGTH
from calculator_types import LexError

FUNCTION_NAMES = frozenset(
    {
        "sin",
        "cos",
        "tan",
        "asin",
        "acos",
        "atan",
        "log",
        "ln",
        "sqrt",
        "abs",
        "exp",
        "min",
        "max",
    }
)

CONSTANTS = {
    "pi": math.pi,
    "e": math.e,
}

VARIABLE_NAMES = frozenset({"ans"})

# Glifos de la interfaz normalizados al operador ASCII
_OPERATOR_GLYPHS = {
    "+": "+",
    "-": "-",
    "*": "*",
    "/": "/",
    "^": "^",
    "×": "*",
    "÷": "/",
}

_DIGITS = frozenset(string.digits)
_LETTERS = frozenset(string.ascii_letters)


# ── Tokens ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Operator:
    symbol: str


@dataclass(frozen=True)
class LeftParen:
    pass


@dataclass(frozen=True)
class RightParen:
    pass


@dataclass(frozen=True)
class Comma:
    pass


@dataclass(frozen=True)
class Function:
    name: str


@dataclass(frozen=True)
class Variable:
    name: str


Token = Union[Number, Operator, LeftParen, RightParen, Comma, Function, Variable]


# ── Tokenizador ──────────────────────────────────────────────────


def tokenize(text: str) -> list[Token]:
    """Convierte la expresión en tokens, de izquierda a derecha.

    Raises:
        LexError: carácter desconocido, identificador desconocido o
            literal numérico mal formado.
    """
    if len(text) > MAX_INPUT_LENGTH:
        raise LexError(
            f"expression too long ({len(text)} > {MAX_INPUT_LENGTH} characters)",
            code="TOO_LONG",
        )

    tokens: list[Token] = []
    i = 0
    length = len(text)

    while i < length:
        ch = text[i]

        if ch.isspace():
            i += 1
            continue

        if ch in _DIGITS or ch == ".":
            token, i = _scan_number(text, i)
            tokens.append(token)
            continue

        if ch in _LETTERS:
            start = i
            while i < length and text[i] in _LETTERS:
                i += 1
            tokens.append(_classify_identifier(text[start:i]))
            continue

        if ch == "π":
            tokens.append(Number(CONSTANTS["pi"]))
        elif ch == ",":
            tokens.append(Comma())
        elif ch == "(":
            tokens.append(LeftParen())
        elif ch == ")":
            tokens.append(RightParen())
        elif ch in _OPERATOR_GLYPHS:
            tokens.append(Operator(_OPERATOR_GLYPHS[ch]))
        else:
            raise LexError(f"unknown character: {ch}", code="UNKNOWN_CHARACTER", fragment=ch)
        i += 1

    return tokens


def _scan_number(text: str, start: int) -> tuple[Number, int]:
    i = start
    length = len(text)
    has_digit = False
    has_dot = False

    while i < length:
        c = text[i]
        if c in _DIGITS:
            has_digit = True
        elif c == "." and not has_dot:
            has_dot = True
        else:
            break
        i += 1

    # El exponente solo se consume si le siguen dígitos; si no, la 'e'
    # queda para el análisis de identificadores.
    if i < length and text[i] in "eE":
        j = i + 1
        if j < length and text[j] in "+-":
            j += 1
        exp_start = j
        while j < length and text[j] in _DIGITS:
            j += 1
        if j > exp_start:
            i = j

    raw = text[start:i]
    if not has_digit:
        raise LexError(f"invalid number: {raw}", code="INVALID_NUMBER", fragment=raw)

    value = float(raw)
    if not math.isfinite(value):
        raise LexError(f"invalid number: {raw}", code="INVALID_NUMBER", fragment=raw)
    return Number(value), i


def _classify_identifier(raw: str) -> Token:
    name = raw.lower()
    if name in FUNCTION_NAMES:
        return Function(name)
    if name in CONSTANTS:
        return Number(CONSTANTS[name])
    if name in VARIABLE_NAMES:
        return Variable(name)
    raise LexError(f"unknown token: {name}", code="UNKNOWN_TOKEN", fragment=raw)
