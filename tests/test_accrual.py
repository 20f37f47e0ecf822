"""
Tests for the tuition accrual model (30-day billing periods).
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ccldi.errors import ComputationError, InvalidTemporalRange
from ccldi.receivables import PERIOD_DAYS, compute_accrual

AS_OF = date(2024, 6, 30)

tuitions = st.decimals(min_value=0, max_value=10000, places=2, allow_nan=False, allow_infinity=False)
elapsed_days = st.integers(min_value=0, max_value=3650)


class TestComputeAccrual:
    def test_ninety_five_days_is_three_periods(self):
        """95 days at 200 -> 3 elapsed periods, 4 expected payments, 800 expected."""
        result = compute_accrual(AS_OF - timedelta(days=95), Decimal("200"), AS_OF)

        assert result.elapsed_periods == 3
        assert result.expected_payments == 4
        assert result.expected_total == Decimal("800")

    def test_enrollment_day_is_billable(self):
        """A student enrolled on the evaluation date already owes one period."""
        result = compute_accrual(AS_OF, Decimal("250"), AS_OF)

        assert result.elapsed_periods == 0
        assert result.expected_payments == 1
        assert result.expected_total == Decimal("250")

    @pytest.mark.parametrize("days,periods", [(29, 0), (30, 1), (59, 1), (60, 2), (89, 2), (90, 3)])
    def test_period_boundaries(self, days, periods):
        result = compute_accrual(AS_OF - timedelta(days=days), Decimal("100"), AS_OF)
        assert result.elapsed_periods == periods

    def test_periods_ignore_calendar_months(self):
        """Jan 1 -> Mar 1 is two calendar months but only 60 days = 2 periods in a leap year."""
        result = compute_accrual(date(2024, 1, 1), Decimal("100"), date(2024, 3, 1))
        assert result.elapsed_periods == 2

        result = compute_accrual(date(2023, 1, 1), Decimal("100"), date(2023, 3, 1))
        assert result.elapsed_periods == 1

    def test_zero_tuition_expects_nothing(self):
        result = compute_accrual(AS_OF - timedelta(days=400), Decimal("0"), AS_OF)

        assert result.expected_payments == 14
        assert result.expected_total == Decimal("0")

    def test_enrollment_after_evaluation_date_fails(self):
        with pytest.raises(InvalidTemporalRange) as exc_info:
            compute_accrual(AS_OF + timedelta(days=1), Decimal("200"), AS_OF)

        assert exc_info.value.enrollment_date == AS_OF + timedelta(days=1)
        assert exc_info.value.as_of == AS_OF

    @pytest.mark.parametrize("tuition", [Decimal("NaN"), Decimal("Infinity"), "abc", None])
    def test_invalid_tuition_is_a_computation_error(self, tuition):
        with pytest.raises(ComputationError):
            compute_accrual(AS_OF - timedelta(days=10), tuition, AS_OF)

    def test_negative_tuition_is_a_computation_error(self):
        with pytest.raises(ComputationError):
            compute_accrual(AS_OF - timedelta(days=10), Decimal("-1"), AS_OF)

    def test_float_tuition_is_read_exactly(self):
        result = compute_accrual(AS_OF, 0.1, AS_OF)
        assert result.expected_total == Decimal("0.1")


@given(tuition=tuitions, days=elapsed_days)
def test_expected_total_formula(tuition, days):
    """expected_total = tuition * (floor(days / 30) + 1)."""
    result = compute_accrual(AS_OF - timedelta(days=days), tuition, AS_OF)

    assert result.elapsed_periods == days // PERIOD_DAYS
    assert result.expected_payments == result.elapsed_periods + 1
    assert result.expected_total == tuition * (days // PERIOD_DAYS + 1)


@given(tuition=tuitions, days=elapsed_days, extra=st.integers(min_value=0, max_value=365))
def test_expected_total_never_decreases_with_time(tuition, days, extra):
    enrolled = AS_OF - timedelta(days=days)
    earlier = compute_accrual(enrolled, tuition, AS_OF)
    later = compute_accrual(enrolled, tuition, AS_OF + timedelta(days=extra))

    assert later.elapsed_periods >= earlier.elapsed_periods
    assert later.expected_total >= earlier.expected_total
