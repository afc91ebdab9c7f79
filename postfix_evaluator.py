"""Evaluación de la secuencia postfija sobre una pila de floats."""

from __future__ import annotations

import math
from typing import Callable

from calculator_config import INVERSE_TRIG_TOLERANCE
from calculator_types import AngleMode, EvalContext, MathError
from expression_tokenizer import Number, Operator, Variable
from shunting_yard import FunctionCall, Instruction

MathFunction = Callable[[list[float]], float]


def _float_call(fn, *args) -> float:
    """Llama a una rutina de math devolviendo inf/NaN en vez de excepciones."""
    try:
        return fn(*args)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan


def _domain_error(message: str) -> MathError:
    return MathError(message, code="DOMAIN_ERROR")


def _missing_operand() -> MathError:
    return MathError("missing operand", code="MISSING_OPERAND")


class PythonMathProvider:
    """Funciones matemáticas con chequeo de aridad y dominio según el modo angular."""

    def __init__(self, angle_mode: AngleMode | str = AngleMode.DEG):
        self._angle_mode = AngleMode.parse(angle_mode)

    @property
    def angle_mode(self) -> AngleMode:
        return self._angle_mode

    def to_radians(self, value: float) -> float:
        return math.radians(value) if self._angle_mode is AngleMode.DEG else value

    def from_radians(self, value: float) -> float:
        return math.degrees(value) if self._angle_mode is AngleMode.DEG else value

    def build_namespace(self) -> dict[str, MathFunction]:
        def _single(name, fn):
            def w(args):
                if len(args) != 1:
                    raise MathError(f"{name} expects 1 argument", code="ARITY_ERROR")
                return fn(args[0])

            return w

        def _trig(fn):
            return lambda x: _float_call(fn, self.to_radians(x))

        def _inv_trig(name, fn):
            def w(x):
                return self.from_radians(_float_call(fn, _clamp_unit_range(name, x)))

            return w

        def _log(name, fn):
            def w(x):
                if x <= 0:
                    raise _domain_error(f"{name}: argument must be positive")
                return _float_call(fn, x)

            return w

        def _sqrt(x):
            if x < 0:
                raise _domain_error("sqrt: argument must be non-negative")
            return math.sqrt(x)

        def _variadic(name, fn):
            def w(args):
                if not args:
                    raise MathError(f"{name}: missing arguments", code="ARITY_ERROR")
                if any(math.isnan(a) for a in args):
                    return math.nan
                return fn(args)

            return w

        return {
            "sin": _single("sin", _trig(math.sin)),
            "cos": _single("cos", _trig(math.cos)),
            "tan": _single("tan", _trig(math.tan)),
            "asin": _single("asin", _inv_trig("asin", math.asin)),
            "acos": _single("acos", _inv_trig("acos", math.acos)),
            "atan": _single("atan", lambda x: self.from_radians(math.atan(x))),
            "log": _single("log", _log("log", math.log10)),
            "ln": _single("ln", _log("ln", math.log)),
            "sqrt": _single("sqrt", _sqrt),
            "abs": _single("abs", abs),
            "exp": _single("exp", lambda x: _float_call(math.exp, x)),
            "min": _variadic("min", min),
            "max": _variadic("max", max),
        }


def _clamp_unit_range(name: str, value: float) -> float:
    # Tolera errores de redondeo como sin(90)=1.0000000000000002 y recorta a [-1, 1]
    if math.isnan(value):
        return value
    if value < -1 - INVERSE_TRIG_TOLERANCE or value > 1 + INVERSE_TRIG_TOLERANCE:
        raise _domain_error(f"{name}: argument out of range")
    return min(1.0, max(-1.0, value))


# ── Operadores ───────────────────────────────────────────────────


def _apply_operator(stack: list[float], symbol: str):
    if symbol in ("u+", "u-"):
        if not stack:
            raise _missing_operand()
        value = stack.pop()
        stack.append(-value if symbol == "u-" else value)
        return

    if len(stack) < 2:
        raise _missing_operand()
    right = stack.pop()
    left = stack.pop()

    if symbol == "+":
        stack.append(left + right)
    elif symbol == "-":
        stack.append(left - right)
    elif symbol == "*":
        stack.append(left * right)
    elif symbol == "/":
        if right == 0:
            raise MathError("division by zero", code="DIVISION_BY_ZERO")
        stack.append(left / right)
    elif symbol == "^":
        # Base negativa con exponente fraccionario -> NaN, se reporta al final
        stack.append(_float_call(math.pow, left, right))
    else:
        raise MathError(f"unknown operator: {symbol}", code="MALFORMED_EXPRESSION")


def _pull_arguments(stack: list[float], count: int) -> list[float]:
    """Saca los últimos `count` valores conservando su orden de escritura."""
    if count > len(stack):
        raise _missing_operand()
    if count == 0:
        return []
    args = stack[-count:]
    del stack[-count:]
    return args


def evaluate_rpn(rpn: list[Instruction], context: EvalContext) -> float:
    """Evalúa la secuencia postfija y devuelve el único valor resultante.

    Raises:
        MathError: división por cero, ans indefinido, dominio o aridad
            inválidos, o una pila final distinta de un solo valor.
    """
    namespace = PythonMathProvider(context.angle_mode).build_namespace()
    stack: list[float] = []

    for instruction in rpn:
        if isinstance(instruction, Number):
            stack.append(instruction.value)
        elif isinstance(instruction, Variable):
            stack.append(_lookup_variable(instruction.name, context))
        elif isinstance(instruction, Operator):
            _apply_operator(stack, instruction.symbol)
        elif isinstance(instruction, FunctionCall):
            fn = namespace.get(instruction.name)
            if fn is None:
                raise MathError(f"unknown function: {instruction.name}", code="MALFORMED_EXPRESSION")
            args = _pull_arguments(stack, instruction.arg_count)
            stack.append(fn(args))
        else:
            raise TypeError(f"unexpected instruction: {instruction!r}")

    if len(stack) != 1:
        raise MathError("malformed expression", code="MALFORMED_EXPRESSION")
    return stack[0]


def _lookup_variable(name: str, context: EvalContext) -> float:
    if name == "ans":
        if context.prior_result is None:
            raise MathError("ans undefined", code="UNDEFINED_VARIABLE", fragment=name)
        return context.prior_result
    raise MathError(f"unknown variable: {name}", code="UNDEFINED_VARIABLE", fragment=name)
