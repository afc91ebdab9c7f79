"""
Motor de cálculo para la calculadora científica.

Este módulo provee la clase CalculatorEngine, una sesión que guarda el
modo angular y el último resultado (ans) entre evaluaciones, y las
funciones de formato usadas para mostrar expresiones y resultados.
La evaluación en sí es pura y vive en formula_evaluator.

Contrato de interfaz:
    - evaluate(expression: str) -> str
    - evaluate_result(expression: str) -> EvalResult
    - angle_mode: propiedad AngleMode.DEG | AngleMode.RAD
    - ans: último resultado correcto o None
"""

from __future__ import annotations

import math
import re

from calculator_config import (
    DEFAULT_ANGLE_MODE,
    DISPLAY_PRECISION,
    SCI_LOWER_THRESHOLD,
    SCI_MANTISSA_DIGITS,
    SCI_UPPER_THRESHOLD,
)
from calculator_types import (
    AngleMode,
    CalculatorError,
    EvalContext,
    EvalResult,
    ExpressionSyntaxError,
)
from formula_evaluator import FormulaEvaluator


class CalculatorEngine:
    """Sesión de cálculo con modo angular y memoria del último resultado."""

    def __init__(self, angle_mode: AngleMode | str = DEFAULT_ANGLE_MODE, ans: float | None = None):
        self._evaluator = FormulaEvaluator(angle_mode)
        self._angle_mode = AngleMode.parse(angle_mode)
        self._ans = EvalContext(prior_result=ans).prior_result

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> AngleMode:
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: AngleMode | str):
        self._angle_mode = AngleMode.parse(mode)

    def toggle_angle_mode(self) -> AngleMode:
        self._angle_mode = self._angle_mode.toggled()
        return self._angle_mode

    # ── Memoria del último resultado ─────────────────────────────

    @property
    def ans(self) -> float | None:
        return self._ans

    def clear(self):
        self._ans = None

    @property
    def context(self) -> EvalContext:
        return EvalContext(angle_mode=self._angle_mode, prior_result=self._ans)

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str) -> str:
        """Evalúa la expresión y devuelve el resultado como cadena.

        Raises:
            CalculatorError: expresión vacía, inválida o no computable.
        """
        return self._format_result(self._compute(expression))

    def evaluate_result(self, expression: str) -> EvalResult:
        """Evalúa sin lanzar; ans solo cambia si la evaluación tiene éxito."""
        try:
            return EvalResult.success(self._compute(expression))
        except CalculatorError as exc:
            return EvalResult.failure(exc)

    def _compute(self, expression: str) -> float:
        if not expression or not expression.strip():
            raise ExpressionSyntaxError("empty expression", code="EMPTY_EXPRESSION")
        value = self._evaluator.compute(expression.strip(), self.context)
        self._ans = value
        return value

    # ── Formato del resultado ────────────────────────────────────

    @staticmethod
    def _format_result(value: float) -> str:
        return format_number(value)


def format_number(value: float) -> str:
    """Representación para pantalla: 12 cifras significativas o notación científica."""
    if not math.isfinite(value):
        return "Error"
    if value == 0:
        return "0"

    magnitude = abs(value)
    if magnitude >= SCI_UPPER_THRESHOLD or magnitude < SCI_LOWER_THRESHOLD:
        return _format_exponential(value, SCI_MANTISSA_DIGITS)
    return _format_precision(value, DISPLAY_PRECISION)


def _format_exponential(value: float, digits: int) -> str:
    mantissa, exponent = f"{value:.{digits}e}".split("e")
    return f"{_trim_zeros(mantissa)}e{int(exponent):+d}"


def _format_precision(value: float, precision: int) -> str:
    # El exponente se toma después del redondeo (9.9999999999995 -> 10)
    exponent = int(f"{value:.{precision - 1}e}".split("e")[1])
    if exponent < -6 or exponent >= precision:
        return _format_exponential(value, precision - 1)
    return _trim_zeros(f"{value:.{precision - 1 - exponent}f}")


def _trim_zeros(text: str) -> str:
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")


_PI_WORD = re.compile(r"\bpi\b", re.IGNORECASE)
_ANS_WORD = re.compile(r"\bans\b", re.IGNORECASE)


def format_expression(expression: str) -> str:
    """Sustituye operadores y nombres por los glifos de pantalla."""
    if not expression.strip():
        return "0"
    text = expression.replace("*", "×").replace("/", "÷")
    text = _PI_WORD.sub("π", text)
    return _ANS_WORD.sub("ANS", text)
