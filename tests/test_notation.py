"""Unit tests for the dice notation parser."""

import pytest

from Dicebag.metrics import get_counter
from Dicebag.rules import (
    CustomDieSyntaxError,
    ImpossibleDie,
    InvalidDiceCount,
    InvalidDieValue,
    InvalidDigit,
    InvalidRoll,
    InvalidSides,
    ParseRollError,
    Roll,
    parse_roll,
    parse_rolls,
)
from Dicebag.rules.notation import build_die, check_shape, parse_custom_die, split_tokens

FUDGE = (1, 1, 0, 0, -1, -1)


class TestParseRoll:
    def test_simple_notation(self) -> None:
        r = parse_roll("3d6")
        assert r.dice_count == 3
        assert r.sides == 6
        assert r.values == (1, 2, 3, 4, 5, 6)

    def test_implicit_one_die(self) -> None:
        assert parse_roll("d20").dice_count == 1
        assert parse_roll("d20") == parse_roll("1d20")

    def test_leading_zeros_in_count(self) -> None:
        assert parse_roll("02d4").dice_count == 2

    def test_fudge(self) -> None:
        r = parse_roll("2dF")
        assert r.dice_count == 2
        assert r.sides == 6
        assert r.values == FUDGE

    def test_fudge_lowercase(self) -> None:
        assert parse_roll("4df").values == FUDGE

    def test_percentile(self) -> None:
        r = parse_roll("1d%")
        assert r.sides == 100
        assert r.values == tuple(range(1, 101))

    def test_custom(self) -> None:
        r = parse_roll("1d{1,1,0,0,-1,-1}")
        assert r.sides == 6
        assert r.values == FUDGE

    @pytest.mark.parametrize(
        "token",
        [
            "1d{ 1,1,0,0,-1,-1}",
            "1d{1 ,1 , 0,0 ,-1, -1 }",
            "1d{  1  ,  1  ,  0  ,  0  ,  -1  ,  -1  }",
            "1d{\t1,\n1,0,0,-1,-1\t}",
        ],
    )
    def test_custom_ignores_whitespace(self, token: str) -> None:
        r = parse_roll(token)
        assert r.sides == 6
        assert r.values == FUDGE

    def test_custom_keeps_order_and_duplicates(self) -> None:
        assert parse_roll("3d{10, -2, 10, 7}").values == (10, -2, 10, 7)

    def test_surrounding_whitespace_is_ignored(self) -> None:
        assert parse_roll("  2d8 ") == Roll.normal(2, 8)

    def test_str_is_canonical(self) -> None:
        assert str(parse_roll("d20")) == "1d20"
        assert str(parse_roll("2dF")) == "2d6"
        assert str(parse_roll("d%")) == "1d100"
        assert str(parse_roll("3d{1,2}")) == "3d2"


class TestParseRollErrors:
    @pytest.mark.parametrize("token", ["2d1", "3d3", "d0", "1d3"])
    def test_impossible_numeric(self, token: str) -> None:
        with pytest.raises(ImpossibleDie):
            parse_roll(token)

    def test_impossible_carries_sides(self) -> None:
        with pytest.raises(ImpossibleDie) as excinfo:
            parse_roll("3d3")
        assert excinfo.value.sides == 3

    @pytest.mark.parametrize(
        ("token", "sides"),
        [("1d{}", 0), ("1d{ }", 0), ("1d{5}", 1), ("1d{1,2,3}", 3)],
    )
    def test_impossible_custom(self, token: str, sides: int) -> None:
        with pytest.raises(ImpossibleDie) as excinfo:
            parse_roll(token)
        assert excinfo.value.sides == sides

    @pytest.mark.parametrize("token", ["0d6", "00d6", "0dF"])
    def test_zero_dice(self, token: str) -> None:
        with pytest.raises(InvalidDiceCount):
            parse_roll(token)

    @pytest.mark.parametrize(
        "token", ["", "6", "foo", "roll some dice", "2D6", "d", "3d", "xd6", "2d6+3", "d6x", "-1d6", "dFF"]
    )
    def test_invalid_roll(self, token: str) -> None:
        with pytest.raises(InvalidRoll):
            parse_roll(token)

    def test_invalid_digit_carries_char(self) -> None:
        with pytest.raises(InvalidDigit) as excinfo:
            parse_roll("1d{1,x}")
        assert excinfo.value.char == "x"

    def test_trailing_comma_is_invalid_digit(self) -> None:
        with pytest.raises(InvalidDigit) as excinfo:
            parse_roll("1d{1,2,}")
        assert excinfo.value.char == "}"

    @pytest.mark.parametrize(("token", "char"), [("1d{1a,2}", "a"), ("1d{1-2}", "-"), ("1d{1 2}", "2")])
    def test_invalid_die_value(self, token: str, char: str) -> None:
        with pytest.raises(InvalidDieValue) as excinfo:
            parse_roll(token)
        assert excinfo.value.char == char

    @pytest.mark.parametrize("token", ["1d{1,2", "1d{", "1d{1,2}x", "1d{-"])
    def test_unterminated_custom(self, token: str) -> None:
        with pytest.raises(CustomDieSyntaxError):
            parse_roll(token)

    @pytest.mark.parametrize(
        ("token", "error"),
        [
            ("1d" + "9" * 5000, InvalidSides),
            ("9" * 5000 + "d6", InvalidDiceCount),
            ("1d{" + "9" * 5000 + ",1}", InvalidDieValue),
        ],
    )
    def test_oversized_numbers(self, token: str, error: type, fresh_metrics) -> None:
        with pytest.raises(error):
            parse_roll(token)
        assert get_counter("dice.parse.failed") == 1

    def test_oversized_number_in_batch(self) -> None:
        with pytest.raises(InvalidSides):
            parse_rolls("2d6 1d" + "9" * 5000)

    def test_all_errors_share_base(self) -> None:
        with pytest.raises(ParseRollError) as excinfo:
            parse_roll("3d3")
        assert isinstance(excinfo.value, ValueError)
        assert excinfo.value.kind == "ImpossibleDie"

    def test_failures_are_counted(self, fresh_metrics) -> None:
        parse_roll("2d6")
        with pytest.raises(ParseRollError):
            parse_roll("bad")
        assert get_counter("dice.parse.ok") == 1
        assert get_counter("dice.parse.failed") == 1


class TestHelpers:
    def test_custom_die_requires_brace(self) -> None:
        with pytest.raises(CustomDieSyntaxError):
            parse_custom_die("1,2}")

    def test_custom_die_empty(self) -> None:
        assert parse_custom_die("{}") == ()

    def test_build_die_rejects_non_numeric_sides(self) -> None:
        with pytest.raises(InvalidSides):
            build_die("12x")

    def test_build_die_kinds(self) -> None:
        assert build_die("4") == (1, 2, 3, 4)
        assert build_die("F") == FUDGE
        assert len(build_die("%")) == 100
        assert build_die("{ -3 }") == (-3,)

    @pytest.mark.parametrize("sides", [2, 4, 6, 100])
    def test_check_shape_allows(self, sides: int) -> None:
        check_shape(sides)

    @pytest.mark.parametrize("sides", [-1, 0, 1, 3])
    def test_check_shape_rejects(self, sides: int) -> None:
        with pytest.raises(ImpossibleDie):
            check_shape(sides)


class TestParseRolls:
    def test_batch_in_order(self) -> None:
        rolls = parse_rolls("3d6 2d8 1d20")
        assert [str(r) for r in rolls] == ["3d6", "2d8", "1d20"]

    def test_batch_fails_fast(self) -> None:
        with pytest.raises(InvalidRoll) as excinfo:
            parse_rolls("3d6 2d8 badtoken 3d3")
        assert excinfo.value.token == "badtoken"

    def test_extra_whitespace_is_dropped(self) -> None:
        assert len(parse_rolls("  d4 \t\n 2d6  ")) == 2

    def test_empty_input(self) -> None:
        assert parse_rolls("") == []
        assert parse_rolls("   ") == []

    def test_custom_die_with_spaces_stays_one_token(self) -> None:
        rolls = parse_rolls("1d{ 1 , 1 , 0 , 0 , -1 , -1 } 2d6")
        assert len(rolls) == 2
        assert rolls[0].values == FUDGE
        assert rolls[1] == Roll.normal(2, 6)

    def test_unclosed_brace_swallows_rest(self) -> None:
        assert split_tokens("1d{1,2 2d6 d4") == ["1d{1,2 2d6 d4"]
        with pytest.raises(InvalidDieValue) as excinfo:
            parse_rolls("1d{1,2 2d6")
        assert excinfo.value.char == "2"

    def test_split_tokens(self) -> None:
        assert split_tokens(" 2d6  d{1, 2}\td% ") == ["2d6", "d{1, 2}", "d%"]
