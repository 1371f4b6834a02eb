"""
Tests for the dimension parser and formatter.

Run with: pytest tests/ -v
"""
import pytest

from gasketgen.model.errors import ParseError
from gasketgen.model.units import format_dimension, parse_dimension


class TestParseDimension:
    """Test decimal and fractional dimension parsing."""

    def test_decimal(self) -> None:
        assert parse_dimension("1.25") == 1.25

    def test_simple_fraction(self) -> None:
        assert parse_dimension("3/4") == 0.75

    def test_mixed_fraction_space(self) -> None:
        assert parse_dimension("1 1/2") == 1.5

    def test_mixed_fraction_hyphen(self) -> None:
        assert parse_dimension("1-1/2") == 1.5

    def test_mixed_fraction_spaced_hyphen(self) -> None:
        assert parse_dimension("1 - 1/2") == 1.5
        assert parse_dimension("2 -3/8") == 2.375

    def test_surrounding_whitespace(self) -> None:
        assert parse_dimension("  2 ") == 2.0

    def test_collapsed_inner_whitespace(self) -> None:
        assert parse_dimension("2   3/8") == 2.375

    def test_spaces_around_slash(self) -> None:
        assert parse_dimension("3 / 4") == 0.75

    def test_leading_dot(self) -> None:
        assert parse_dimension(".5") == 0.5

    def test_signed_decimal_kept(self) -> None:
        assert parse_dimension("-0.5") == -0.5

    def test_exponent(self) -> None:
        assert parse_dimension("1e-3") == pytest.approx(0.001)

    def test_no_rounding(self) -> None:
        assert parse_dimension("1/3") == 1 / 3

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_rejected(self, text) -> None:
        with pytest.raises(ParseError):
            parse_dimension(text)

    @pytest.mark.parametrize("text", ["abc", "1//2", "1.2.3", "1 1/2 3", "1/", "/2", "two"])
    def test_malformed_rejected(self, text: str) -> None:
        with pytest.raises(ParseError):
            parse_dimension(text)

    @pytest.mark.parametrize("text", ["1/0", "1 1/0", "1-1/0"])
    def test_zero_denominator_rejected(self, text: str) -> None:
        with pytest.raises(ParseError, match="denominator"):
            parse_dimension(text)

    @pytest.mark.parametrize("text", ["inf", "nan", "1e999"])
    def test_non_finite_rejected(self, text: str) -> None:
        with pytest.raises(ParseError):
            parse_dimension(text)

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_dimension("x")


class TestFormatDimension:
    """Test report formatting of dimensions."""

    def test_strips_trailing_zeros(self) -> None:
        assert format_dimension(1.5) == "1.5"

    def test_whole_number(self) -> None:
        assert format_dimension(2.0) == "2"

    def test_rounds_to_digits(self) -> None:
        assert format_dimension(1.23456) == "1.235"

    def test_custom_digits(self) -> None:
        assert format_dimension(0.123456, digits=5) == "0.12346"

    def test_negative_zero(self) -> None:
        assert format_dimension(-0.0001) == "0"

    def test_non_finite(self) -> None:
        assert format_dimension(float("nan")) == "—"
        assert format_dimension(float("inf")) == "—"

    @pytest.mark.parametrize("value", [0.75, 1.5, 3.125, 12.0, 0.001])
    def test_round_trip(self, value: float) -> None:
        assert parse_dimension(format_dimension(value)) == pytest.approx(value)
