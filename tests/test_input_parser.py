from hypothesis import given, strategies as st

from watchread.input.parser import first_value, parse_scalar


def test_comments_and_blank_lines_are_skipped():
    lines = "# note\n\n  \n7\n".splitlines(keepends=True)
    assert first_value(lines, int) == 7


def test_first_parseable_line_wins():
    assert first_value(["abc\n", "5\n", "9\n"], int) == 5


def test_no_value_returns_none():
    assert first_value(["# only a comment\n", "\n", "nope\n"], int) is None
    assert first_value([], float) is None


def test_surrounding_whitespace_is_trimmed():
    assert parse_scalar("  \t42 \r\n", int) == 42


def test_leading_token_is_parsed():
    assert parse_scalar("3.5 metres", float) == 3.5
    assert parse_scalar("hello world", str) == "hello"


def test_int_takes_numeric_prefix():
    assert parse_scalar("3.7", int) == 3
    assert parse_scalar("5abc", int) == 5
    assert parse_scalar("1_000", int) == 1
    assert parse_scalar("+12", int) == 12
    assert parse_scalar("-8kg", int) == -8
    assert parse_scalar("3.7", float) == 3.7


def test_float_takes_numeric_prefix():
    assert parse_scalar("2.5e3x", float) == 2500.0
    assert parse_scalar(".5", float) == 0.5
    assert parse_scalar("7.", float) == 7.0
    assert parse_scalar("1e", float) == 1.0


def test_token_without_numeric_prefix_is_skipped():
    assert parse_scalar("abc", int) is None
    assert parse_scalar("-", int) is None
    assert parse_scalar(".", float) is None
    assert parse_scalar("x1", float) is None


def test_decimal_line_yields_its_integer_part():
    assert first_value(["3.7\n", "5\n"], int) == 3


def test_other_types_convert_the_whole_token():
    assert parse_scalar("5abc", str) == "5abc"

    def strict(token):
        return int(token, 16)

    assert parse_scalar("ff", strict) == 255
    assert parse_scalar("zz", strict) is None


def test_indented_comment_is_still_a_comment():
    assert parse_scalar("   # 12", int) is None


def test_later_lines_are_not_consumed():
    consumed = []

    def lines():
        for line in ["1\n", "2\n", "3\n"]:
            consumed.append(line)
            yield line

    assert first_value(lines(), int) == 1
    assert consumed == ["1\n"]


@given(st.integers())
def test_integer_behind_comments_is_found(n):
    """Property: an integer line after comments/blanks is always the result."""
    assert first_value(["# header\n", "\n", f"  {n}  \n", "0\n"], int) == n


@given(st.text(max_size=40))
def test_comment_lines_never_parse(text):
    """Property: anything after a comment marker is ignored."""
    assert parse_scalar("#" + text, str) is None
