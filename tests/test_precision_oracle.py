"""Cross-check double-precision results against mpmath at 50 digits."""

import pytest
from mpmath import mp

from calculator_types import AngleMode, EvalContext
from formula_evaluator import evaluate

CASES = [
    ("sin(30)", AngleMode.DEG, lambda: mp.sin(mp.pi / 6)),
    ("cos(1)", AngleMode.RAD, lambda: mp.cos(1)),
    ("tan(45)", AngleMode.DEG, lambda: mp.tan(mp.pi / 4)),
    ("tan(0.5)", AngleMode.RAD, lambda: mp.tan(mp.mpf("0.5"))),
    ("asin(0.5)", AngleMode.DEG, lambda: mp.degrees(mp.asin(mp.mpf("0.5")))),
    ("acos(0.25)", AngleMode.RAD, lambda: mp.acos(mp.mpf("0.25"))),
    ("atan(2)", AngleMode.DEG, lambda: mp.degrees(mp.atan(2))),
    ("log(2)", AngleMode.DEG, lambda: mp.log10(2)),
    ("ln(10)", AngleMode.DEG, lambda: mp.log(10)),
    ("sqrt(2)", AngleMode.DEG, lambda: mp.sqrt(2)),
    ("exp(1.5)", AngleMode.DEG, lambda: mp.exp(mp.mpf("1.5"))),
    ("2^0.5", AngleMode.DEG, lambda: mp.sqrt(2)),
    ("1/3+1/7", AngleMode.DEG, lambda: mp.mpf(1) / 3 + mp.mpf(1) / 7),
    ("-2^2+3*4", AngleMode.DEG, lambda: mp.mpf(8)),
    ("e^pi", AngleMode.DEG, lambda: mp.exp(mp.pi)),
]


@pytest.mark.parametrize("expression,mode,reference", CASES)
def test_matches_high_precision_reference(expression, mode, reference):
    result = evaluate(expression, EvalContext(angle_mode=mode))
    assert result.ok, result.error
    with mp.workdps(50):
        expected = float(reference())
    assert result.value == pytest.approx(expected, rel=1e-13)
