"""
Tests for format_result and calculate: display text and re-entry.
"""

import math

import pytest

from Calculator import MathEngine
from Calculator import error as E


@pytest.mark.unit
class TestFormatResult:
    @pytest.mark.parametrize("value, expected", [
        (4.0, "4"),
        (-2.5, "-2.5"),
        (0.0, "0"),
        (-0.0, "0"),
        (1200.0, "1200"),
        (0.1 + 0.2, "0.30000000000000004"),
        (1e16, "10000000000000000"),
        (1e22, "10000000000000000000000"),
        (1e-05, "0.00001"),
        (1.5e-07, "0.00000015"),
    ])
    def test_plain_decimal_text(self, value, expected):
        assert MathEngine.format_result(value) == expected

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite_is_rejected(self, value):
        with pytest.raises(E.MathDomainError):
            MathEngine.format_result(value)

    @pytest.mark.parametrize("text", [
        "2+2", "1/3", "-1/3", "2^0.5", "10^20", "1/1024^3", "sin(30)",
        "-5", "pi", "0.1+0.2", "2^-30", "e^40", "-1/7^9",
    ])
    def test_formatted_result_evaluates_to_same_value(self, text):
        value = MathEngine.evaluate(text)
        assert MathEngine.evaluate(MathEngine.format_result(value)) == value

    def test_calculate_returns_display_text(self):
        assert MathEngine.calculate("2+2") == "4"
        assert MathEngine.calculate("1/4") == "0.25"
        assert MathEngine.calculate("") == "0"

    def test_calculate_raises_engine_errors(self):
        with pytest.raises(E.MathDomainError):
            MathEngine.calculate("1/0")
