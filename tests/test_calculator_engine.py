"""Tests for the calculator session and display formatting."""

import math

import pytest

from calculator_engine import CalculatorEngine, format_expression, format_number
from calculator_types import AngleMode, ExpressionSyntaxError, MathError


class TestSession:
    def test_evaluate_returns_formatted_result(self):
        engine = CalculatorEngine("deg")
        assert engine.evaluate("2+2") == "4"
        assert engine.ans == 4
        assert engine.evaluate("1/3") == "0.333333333333"

    def test_ans_carries_between_evaluations(self):
        engine = CalculatorEngine("deg")
        engine.evaluate("2+2")
        assert engine.evaluate("ans*10") == "40"
        assert engine.evaluate_result("ans+2").value == 42

    def test_failure_keeps_previous_ans(self):
        engine = CalculatorEngine("deg", ans=5)
        result = engine.evaluate_result("1/0")
        assert not result.ok
        assert result.error == "division by zero"
        assert engine.ans == 5
        with pytest.raises(MathError):
            engine.evaluate("sqrt(-1)")
        assert engine.ans == 5

    def test_blank_input_rejected_before_evaluation(self):
        engine = CalculatorEngine("deg")
        result = engine.evaluate_result("   ")
        assert result.error_code == "EMPTY_EXPRESSION"
        with pytest.raises(ExpressionSyntaxError):
            engine.evaluate("")

    def test_clear_forgets_ans(self):
        engine = CalculatorEngine("deg", ans=3)
        engine.clear()
        assert engine.ans is None
        assert engine.evaluate_result("ans").error == "ans undefined"

    def test_angle_mode(self):
        engine = CalculatorEngine("deg")
        assert engine.angle_mode is AngleMode.DEG
        assert engine.evaluate("sin(90)") == "1"
        assert engine.toggle_angle_mode() is AngleMode.RAD
        assert engine.evaluate("sin(pi/2)") == "1"
        engine.angle_mode = "DEG"
        assert engine.context.angle_mode is AngleMode.DEG

    def test_invalid_settings(self):
        engine = CalculatorEngine("rad")
        with pytest.raises(ValueError):
            engine.angle_mode = "gradians"
        with pytest.raises(ValueError):
            CalculatorEngine("deg", ans=float("nan"))


class TestFormatNumber:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (3.0, "3"),
            (-2.5, "-2.5"),
            (0.1 + 0.2, "0.3"),
            (2 / 3 * 1e6, "666666.666667"),
            (0.0, "0"),
            (-0.0, "0"),
            (1e12, "1e+12"),
            (1.5e20, "1.5e+20"),
            (-1.23456789123e15, "-1.23456789e+15"),
            (1e-10, "1e-10"),
            (1.5e-8, "1.5e-8"),
            (0.000123, "0.000123"),
        ],
    )
    def test_format(self, value, expected):
        assert format_number(value) == expected

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite(self, value):
        assert format_number(value) == "Error"


class TestFormatExpression:
    def test_glyph_substitution(self):
        assert format_expression("2*pi/ans") == "2×π÷ANS"
        assert format_expression("PI*2") == "π×2"

    def test_words_containing_names_untouched(self):
        assert format_expression("sin(x)") == "sin(x)"

    def test_blank(self):
        assert format_expression("  ") == "0"
