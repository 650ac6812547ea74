import pytest

from rustlings.lessons.errors import (
    CreationError,
    ParsePosNonzeroError,
    PositiveNonzeroInteger,
    generate_nametag_text,
    maybe_icecream,
    parse_pos_nonzero,
    total_cost,
)


def test_check_icecream():
    assert maybe_icecream(9) == 5
    assert maybe_icecream(10) == 5
    assert maybe_icecream(23) == 0
    assert maybe_icecream(22) == 0
    assert maybe_icecream(25) is None


def test_raw_value():
    icecreams = maybe_icecream(12)
    assert icecreams == 5


def test_icecream_negative_hour_rejected():
    with pytest.raises(ValueError):
        maybe_icecream(-1)


def test_generates_nametag_text_for_a_nonempty_name():
    assert generate_nametag_text("Beyoncé") == "Hi! My name is Beyoncé"


def test_explains_why_generating_nametag_text_fails():
    with pytest.raises(ValueError) as excinfo:
        generate_nametag_text("")
    assert str(excinfo.value) == "`name` was empty; it must be nonempty."


def test_item_quantity_is_a_valid_number():
    assert total_cost("34") == 171


def test_item_quantity_is_an_invalid_number():
    with pytest.raises(ValueError) as excinfo:
        total_cost("beep boop")
    assert str(excinfo.value) == "invalid digit found in string"


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("", "cannot parse integer from empty string"),
        ("-", "invalid digit found in string"),
        ("1_0", "invalid digit found in string"),
        (" 3", "invalid digit found in string"),
        ("2147483648", "number too large to fit in target type"),
        ("-2147483649", "number too small to fit in target type"),
    ],
)
def test_total_cost_parse_errors(text, message):
    with pytest.raises(ValueError) as excinfo:
        total_cost(text)
    assert str(excinfo.value) == message


def test_total_cost_signed_quantities():
    assert total_cost("+2") == 11
    assert total_cost("-2") == -9


def test_total_cost_overflow():
    with pytest.raises(OverflowError):
        total_cost("2147483647")


def test_creation():
    assert PositiveNonzeroInteger(10).value == 10
    with pytest.raises(CreationError) as negative:
        PositiveNonzeroInteger(-10)
    assert negative.value == CreationError(CreationError.Kind.NEGATIVE)
    with pytest.raises(CreationError) as zero:
        PositiveNonzeroInteger(0)
    assert zero.value == CreationError(CreationError.Kind.ZERO)


def test_creation_error_messages():
    assert str(CreationError(CreationError.Kind.NEGATIVE)) == "number is negative"
    assert str(CreationError(CreationError.Kind.ZERO)) == "number is zero"


def test_parse_error():
    with pytest.raises(ParsePosNonzeroError) as excinfo:
        parse_pos_nonzero("not a number")
    assert excinfo.value.is_creation is False
    assert str(excinfo.value) == "invalid digit found in string"


def test_negative():
    with pytest.raises(ParsePosNonzeroError) as excinfo:
        parse_pos_nonzero("-555")
    assert excinfo.value.error == CreationError(CreationError.Kind.NEGATIVE)


def test_zero():
    with pytest.raises(ParsePosNonzeroError) as excinfo:
        parse_pos_nonzero("0")
    assert excinfo.value.error == CreationError(CreationError.Kind.ZERO)


def test_positive():
    x = PositiveNonzeroInteger(42)
    assert parse_pos_nonzero("42") == x