"""Evaluación de expresiones: tokenizar -> traducir a RPN -> evaluar.

Cada llamada es una función pura de (texto, modo angular, resultado
previo); no se guarda estado entre evaluaciones.
"""

from __future__ import annotations

import math

from calculator_config import DEFAULT_ANGLE_MODE
from calculator_logging import get_logger
from calculator_types import (
    AngleMode,
    CalculatorError,
    EvalContext,
    EvalResult,
    ExpressionSyntaxError,
    MathError,
)
from expression_tokenizer import tokenize
from postfix_evaluator import evaluate_rpn
from shunting_yard import to_rpn

logger = get_logger("formula_evaluator")


class FormulaEvaluator:
    """Evalúa expresiones de la calculadora a un float finito."""

    def __init__(self, default_angle_mode: AngleMode | str = DEFAULT_ANGLE_MODE):
        self._default_context = EvalContext(angle_mode=AngleMode.parse(default_angle_mode))

    def compute(self, expression: str, context: EvalContext | None = None) -> float:
        """Evalúa la expresión y devuelve su valor.

        Raises:
            LexError: carácter o literal no reconocido.
            ExpressionSyntaxError: expresión vacía o mal formada.
            MathError: error de dominio, división por cero o resultado no finito.
        """
        context = context or self._default_context
        logger.debug("Evaluating %r (mode=%s)", expression, context.angle_mode.value)

        tokens = tokenize(expression)
        if not tokens:
            raise ExpressionSyntaxError("empty expression", code="EMPTY_EXPRESSION")

        rpn = to_rpn(tokens)
        logger.debug("RPN: %d instructions", len(rpn))

        value = evaluate_rpn(rpn, context)
        if not math.isfinite(value):
            raise MathError("computation error", code="COMPUTATION_ERROR")
        return value

    def evaluate(self, expression: str, context: EvalContext | None = None) -> EvalResult:
        """Como compute(), pero devuelve un EvalResult en lugar de lanzar."""
        try:
            return EvalResult.success(self.compute(expression, context))
        except CalculatorError as exc:
            logger.debug("Evaluation failed [%s]: %s", exc.code, exc.message)
            return EvalResult.failure(exc)


def evaluate(expression: str, context: EvalContext | None = None) -> EvalResult:
    """Evalúa `expression` con el contexto dado (por defecto, modo configurado y sin ans)."""
    return FormulaEvaluator().evaluate(expression, context)
