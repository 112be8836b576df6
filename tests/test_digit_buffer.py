import pytest


def test_trim_keeps_single_zero():
    from bigint.digit_buffer import trim

    assert trim([0, 0, 0]) == (0,)
    assert trim([]) == (0,)
    assert trim([3, 0, 1, 0, 0]) == (3, 0, 1)


def test_compare_magnitudes_by_length_then_top_digit():
    from bigint.digit_buffer import compare_magnitudes

    assert compare_magnitudes((1, 2), (9,)) == 1
    assert compare_magnitudes((9,), (1, 2)) == -1
    assert compare_magnitudes((1, 2), (2, 2)) == -1
    assert compare_magnitudes((4, 5, 6), (4, 5, 6)) == 0


def test_add_magnitudes_propagates_carry():
    from bigint.digit_buffer import add_magnitudes

    assert add_magnitudes((9, 9, 9), (1,), 10) == [0, 0, 0, 1]
    assert add_magnitudes((15,), (1,), 16) == [0, 1]


def test_sub_magnitudes_propagates_borrow():
    from bigint.digit_buffer import sub_magnitudes, trim

    assert trim(sub_magnitudes((0, 0, 1), (1,), 10)) == (9, 9)
    assert trim(sub_magnitudes((0, 1), (1,), 16)) == (15,)


def test_mul_magnitudes_schoolbook():
    from bigint.digit_buffer import mul_magnitudes, trim

    # 99 * 99 = 9801
    assert trim(mul_magnitudes((9, 9), (9, 9), 10)) == (1, 0, 8, 9)
    # 0xff * 0xff = 0xfe01
    assert trim(mul_magnitudes((15, 15), (15, 15), 16)) == (1, 0, 14, 15)


def test_buffer_is_trimmed_and_zero_is_never_negative():
    from bigint.digit_buffer import DigitBuffer

    buf = DigitBuffer([5, 0, 0], capacity=4, negative=True)
    assert buf.digits == (5,)
    assert buf.length == 1
    assert buf.negative

    zero = DigitBuffer([0, 0], capacity=4, negative=True)
    assert zero.is_zero()
    assert not zero.negative
    assert zero == DigitBuffer([0], capacity=1)


def test_buffer_reads_zero_past_significant_length():
    from bigint.digit_buffer import DigitBuffer

    buf = DigitBuffer([1, 2], capacity=8)
    assert buf[0] == 1 and buf[1] == 2
    assert buf[5] == 0
    assert len(buf) == 2


def test_buffer_capacity_is_checked_after_trimming():
    from bigint.digit_buffer import DigitBuffer
    from bigint.errors import Overflow

    assert DigitBuffer([1, 2, 3, 0, 0], capacity=3).length == 3
    with pytest.raises(Overflow) as excinfo:
        DigitBuffer([1, 2, 3, 4], capacity=3, operation="addition")
    assert excinfo.value.message == "Overflow occurred during addition"
