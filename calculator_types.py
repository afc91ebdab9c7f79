"""Tipos compartidos del motor: modo angular, contexto, resultado y errores."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any


class AngleMode(str, Enum):
    """Unidad angular de las funciones trigonométricas."""

    DEG = "deg"
    RAD = "rad"

    @classmethod
    def parse(cls, mode: AngleMode | str) -> AngleMode:
        if isinstance(mode, cls):
            return mode
        try:
            return cls(str(mode).strip().lower())
        except ValueError:
            raise ValueError(f"angle mode must be 'deg' or 'rad', got {mode!r}") from None

    def toggled(self) -> AngleMode:
        return AngleMode.RAD if self is AngleMode.DEG else AngleMode.DEG


@dataclass(frozen=True)
class EvalContext:
    """Contexto de una evaluación: modo angular y resultado previo (ans)."""

    angle_mode: AngleMode = AngleMode.DEG
    prior_result: float | None = None

    def __post_init__(self):
        object.__setattr__(self, "angle_mode", AngleMode.parse(self.angle_mode))
        if self.prior_result is not None:
            value = float(self.prior_result)
            if not math.isfinite(value):
                raise ValueError("prior result must be a finite number")
            object.__setattr__(self, "prior_result", value)


@dataclass
class EvalResult:
    """Resultado de evaluar una expresión: un valor finito o un mensaje de error."""

    ok: bool
    value: float | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def success(cls, value: float) -> EvalResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, exc: CalculatorError) -> EvalResult:
        return cls(ok=False, error=exc.message, error_code=exc.code)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.value is not None:
            result_dict["value"] = self.value
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, error_code={self.error_code!r})"
        return f"EvalResult(ok=True, value={self.value!r})"


# ── Errores ──────────────────────────────────────────────────────


class CalculatorError(ValueError):
    """Base de todos los errores del motor."""

    default_code = "CALCULATOR_ERROR"

    def __init__(self, message: str, code: str | None = None, fragment: str | None = None):
        self.message = message
        self.code = code or self.default_code
        self.fragment = fragment
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class LexError(CalculatorError):
    """Carácter o literal numérico no reconocido."""

    default_code = "LEX_ERROR"


class ExpressionSyntaxError(CalculatorError):
    """Violación de la gramática: paréntesis, comas, operadores colgantes."""

    default_code = "SYNTAX_ERROR"


class MathError(CalculatorError):
    """Fallo en tiempo de evaluación: dominio, aridad, división por cero."""

    default_code = "MATH_ERROR"
