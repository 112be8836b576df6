import pytest


@pytest.mark.parametrize(
    "a, b",
    [
        ("999", "1"),
        ("5", "12"),
        ("-12", "12"),
        ("-999999999999999999999", "-1"),
        ("123456789012345678901234567890", "-98765432109876543210"),
        ("0", "0"),
    ],
)
def test_arithmetic_matches_python_int(a, b):
    from bigint.decimal_int import DecimalBigInt

    x, y = DecimalBigInt(a), DecimalBigInt(b)
    assert int(x + y) == int(a) + int(b)
    assert int(x - y) == int(a) - int(b)
    assert int(x * y) == int(a) * int(b)
    assert x + y == y + x
    assert x * y == y * x


def test_canonical_formatting():
    from bigint.decimal_int import DecimalBigInt

    assert str(DecimalBigInt("000123")) == "123"
    assert str(DecimalBigInt("5") - DecimalBigInt("12")) == "-7"
    assert str(DecimalBigInt("-12") * DecimalBigInt("12")) == "-144"
    assert str(DecimalBigInt("0") * DecimalBigInt("-12")) == "0"
    assert repr(DecimalBigInt("-42")) == "DecimalBigInt('-42')"


def test_decimal_rejects_hex_digits():
    from bigint.decimal_int import DecimalBigInt
    from bigint.errors import InvalidInput

    with pytest.raises(InvalidInput) as excinfo:
        DecimalBigInt("12a")
    assert excinfo.value.message.startswith("Invalid input:")


def test_capacity_limits():
    from bigint.decimal_int import MAX_DIGITS, MAX_RESULT_DIGITS, DecimalBigInt
    from bigint.errors import Overflow

    largest = DecimalBigInt("9" * MAX_DIGITS)
    square = largest * largest
    assert square.length <= MAX_RESULT_DIGITS
    assert int(square) == int("9" * MAX_DIGITS) ** 2

    with pytest.raises(Overflow) as excinfo:
        DecimalBigInt("9" * (MAX_DIGITS + 1))
    assert excinfo.value.message == f"Overflow occurred during BigInt creation - exceeds {MAX_DIGITS} digits"


def test_addition_result_may_exceed_operand_capacity():
    from bigint.decimal_int import MAX_DIGITS, DecimalBigInt

    total = DecimalBigInt("9" * MAX_DIGITS) + DecimalBigInt("1")
    assert total.length == MAX_DIGITS + 1


def test_decimal_and_hex_values_never_compare_equal():
    from bigint.decimal_int import DecimalBigInt
    from bigint.hex_int import HexBigInt

    assert DecimalBigInt("1") != HexBigInt("1")
