import pytest

from crabdrill.drills.errors import (
    CreationError,
    CreationReason,
    ParsePosNonzeroError,
    PositiveNonzeroInteger,
    generate_nametag_text,
    parse_pos_nonzero,
    remaining_tokens,
    total_cost,
)


def test_generates_nametag_text_for_a_nonempty_name():
    assert generate_nametag_text("Beyoncé") == "Hi! My name is Beyoncé"


def test_explains_why_generating_nametag_text_fails():
    with pytest.raises(ValueError) as info:
        generate_nametag_text("")
    assert str(info.value) == "`name` was empty; it must be nonempty."


def test_item_quantity_is_a_valid_number():
    assert total_cost("34") == 171


def test_item_quantity_is_an_invalid_number():
    with pytest.raises(ValueError) as info:
        total_cost("beep boop")
    assert str(info.value) == "invalid digit found in string"


def test_item_quantity_empty():
    with pytest.raises(ValueError) as info:
        total_cost("")
    assert str(info.value) == "cannot parse integer from empty string"


def test_item_quantity_with_surrounding_space_is_invalid():
    with pytest.raises(ValueError) as info:
        total_cost(" 34")
    assert str(info.value) == "invalid digit found in string"


def test_item_quantity_too_large():
    with pytest.raises(ValueError) as info:
        total_cost("99999999999")
    assert str(info.value) == "number too large to fit in target type"


def test_item_quantity_with_plus_sign():
    assert total_cost("+3") == 16


def test_remaining_tokens_after_purchase():
    assert remaining_tokens(100, "8") == 59


def test_remaining_tokens_when_unaffordable():
    assert remaining_tokens(10, "8") == 10


def test_remaining_tokens_propagates_parse_error():
    with pytest.raises(ValueError):
        remaining_tokens(100, "eight")


def test_creation():
    assert PositiveNonzeroInteger.new(10) == PositiveNonzeroInteger(10)
    with pytest.raises(CreationError) as negative:
        PositiveNonzeroInteger.new(-10)
    assert negative.value.reason is CreationReason.NEGATIVE
    with pytest.raises(CreationError) as zero:
        PositiveNonzeroInteger.new(0)
    assert zero.value.reason is CreationReason.ZERO


def test_creation_error_messages():
    assert str(CreationError(CreationReason.NEGATIVE)) == "number is negative"
    assert str(CreationError(CreationReason.ZERO)) == "number is zero"


def test_parse_error():
    with pytest.raises(ParsePosNonzeroError) as info:
        parse_pos_nonzero("not a number")
    assert info.value.parse_int is not None
    assert info.value.creation is None


def test_negative():
    with pytest.raises(ParsePosNonzeroError) as info:
        parse_pos_nonzero("-555")
    assert info.value.creation.reason is CreationReason.NEGATIVE


def test_zero():
    with pytest.raises(ParsePosNonzeroError) as info:
        parse_pos_nonzero("0")
    assert info.value.creation.reason is CreationReason.ZERO


def test_positive():
    expected = PositiveNonzeroInteger.new(42)
    assert parse_pos_nonzero("42") == expected