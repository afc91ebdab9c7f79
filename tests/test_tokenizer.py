"""Unit tests for the expression tokenizer."""

import math

import pytest

from calculator_config import MAX_INPUT_LENGTH
from calculator_types import LexError
from expression_tokenizer import (
    Comma,
    Function,
    LeftParen,
    Number,
    Operator,
    RightParen,
    Variable,
    tokenize,
)


class TestNumbers:
    def test_integer_and_decimal(self):
        assert tokenize("1 + 2.5") == [Number(1.0), Operator("+"), Number(2.5)]

    def test_leading_dot(self):
        assert tokenize(".5") == [Number(0.5)]

    def test_exponent(self):
        assert tokenize("1.5e3") == [Number(1500.0)]
        assert tokenize("2E-2") == [Number(0.02)]
        assert tokenize("4e+1") == [Number(40.0)]

    def test_exponent_without_digits_leaves_constant_e(self):
        """'2e' is the number 2 followed by the constant e."""
        assert tokenize("2e") == [Number(2.0), Number(math.e)]
        assert tokenize("2e+") == [Number(2.0), Number(math.e), Operator("+")]

    def test_second_dot_starts_new_literal(self):
        assert tokenize("1.2.3") == [Number(1.2), Number(0.3)]

    def test_lone_dot_is_rejected(self):
        with pytest.raises(LexError) as exc_info:
            tokenize(".")
        assert exc_info.value.code == "INVALID_NUMBER"

    def test_non_finite_literal_is_rejected(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("1e999")
        assert exc_info.value.code == "INVALID_NUMBER"


class TestIdentifiers:
    def test_function_names_are_case_insensitive(self):
        assert tokenize("SIN(Pi)") == [
            Function("sin"),
            LeftParen(),
            Number(math.pi),
            RightParen(),
        ]

    def test_all_functions_recognized(self):
        names = "sin cos tan asin acos atan log ln sqrt abs exp min max".split()
        for name in names:
            assert tokenize(name) == [Function(name)]

    def test_constants(self):
        assert tokenize("pi") == [Number(math.pi)]
        assert tokenize("e") == [Number(math.e)]
        assert tokenize("π") == [Number(math.pi)]

    def test_ans_variable(self):
        assert tokenize("ans") == [Variable("ans")]
        assert tokenize("ANS") == [Variable("ans")]

    def test_letters_then_digits_split(self):
        assert tokenize("sqrt2") == [Function("sqrt"), Number(2.0)]

    def test_unknown_identifier(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("2 + Foo")
        assert str(exc_info.value) == "unknown token: foo"
        assert exc_info.value.code == "UNKNOWN_TOKEN"
        assert exc_info.value.fragment == "Foo"


class TestSymbols:
    def test_display_glyphs_are_normalized(self):
        assert tokenize("3×4÷2") == [
            Number(3.0),
            Operator("*"),
            Number(4.0),
            Operator("/"),
            Number(2.0),
        ]

    def test_operators(self):
        assert [t.symbol for t in tokenize("+-*/^")] == ["+", "-", "*", "/", "^"]

    def test_comma_and_parens(self):
        assert tokenize("min(1,2)") == [
            Function("min"),
            LeftParen(),
            Number(1.0),
            Comma(),
            Number(2.0),
            RightParen(),
        ]

    def test_whitespace_is_skipped(self):
        assert tokenize(" \t1\n") == [Number(1.0)]
        assert tokenize("") == []
        assert tokenize("   ") == []

    def test_unknown_character(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("2 # 3")
        assert str(exc_info.value) == "unknown character: #"
        assert exc_info.value.code == "UNKNOWN_CHARACTER"

    def test_too_long_input(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("1" * (MAX_INPUT_LENGTH + 1))
        assert exc_info.value.code == "TOO_LONG"
