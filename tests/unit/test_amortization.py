"""Unit tests for the amortization engine"""

import pytest
from datetime import date
from decimal import Decimal
from land_sales.domain.amortization import generate_schedule, monthly_payment, monthly_rate, schedule_for
from land_sales.domain.models import LoanTerms
from land_sales.domain.money import round2


class TestMonthlyPayment:
    def test_standard_mortgage(self):
        """$400K at 7% for 360 months"""
        pmt = monthly_payment(400000, 7, 360)
        assert round2(pmt) == Decimal("2661.21")

    def test_result_is_unrounded(self):
        pmt = monthly_payment(1000, 12, 2)
        assert pmt != round2(pmt)
        assert round2(pmt) == Decimal("507.51")

    def test_zero_rate_divides_evenly(self):
        assert monthly_payment(360000, 0, 360) == Decimal("1000")

    def test_zero_rate_is_not_rounded(self):
        assert monthly_payment(1000, 0, 3) == Decimal("1000") / 3

    def test_zero_principal(self):
        assert monthly_payment(0, 9.9, 60) == 0

    def test_zero_term(self):
        assert monthly_payment(10000, 9.9, 0) == 0

    def test_negative_principal_means_no_payment(self):
        assert monthly_payment(-500, 9.9, 60) == 0

    def test_monthly_rate(self):
        assert monthly_rate(12) == Decimal("0.01")


class TestScheduleShape:
    def test_single_month(self):
        """1000 at 12% for one month: 10.00 interest, all principal retired"""
        schedule = generate_schedule(1000, 12, 1, date(2024, 1, 1))

        assert len(schedule) == 1
        entry = schedule[0]
        assert entry.payment_number == 1
        assert entry.interest == Decimal("10.00")
        assert entry.principal == Decimal("1000.00")
        assert entry.amount_due == Decimal("1010.00")
        assert entry.balance == 0

    def test_last_installment_absorbs_residual(self):
        """1000 at 12% over 2 months: fixed 507.51, last principal takes the remaining balance"""
        first, last = generate_schedule(1000, 12, 2, date(2024, 1, 1))

        assert first.interest == Decimal("10.00")
        assert first.principal == Decimal("497.51")
        assert first.amount_due == Decimal("507.51")
        assert first.balance == Decimal("502.49")

        assert last.interest == Decimal("5.02")
        assert last.principal == Decimal("502.49")
        assert last.amount_due == Decimal("507.51")
        assert last.balance == 0

    def test_amount_due_tracks_payment_until_last(self):
        """Rows round principal and interest separately, so amount_due stays within a cent"""
        schedule = generate_schedule(10000, 9.9, 60, date(2024, 1, 15))
        fixed = round2(monthly_payment(10000, 9.9, 60))
        assert all(abs(e.amount_due - fixed) <= Decimal("0.01") for e in schedule[:-1])

    def test_first_interest(self):
        schedule = generate_schedule(400000, 7, 360, date(2024, 1, 1))
        # 400000 * 0.07 / 12 = 2333.33
        assert schedule[0].interest == Decimal("2333.33")
        assert schedule[0].principal == Decimal("327.88")


class TestScheduleInvariants:
    @pytest.mark.parametrize(
        "amount, rate, months",
        [
            (10000, 9.9, 60),
            (8000, 9.9, 60),
            (400000, 7, 360),
            ("12345.67", "5.25", 84),
            (999.99, 18, 7),
        ],
    )
    def test_principal_sums_to_finance_amount(self, amount, rate, months):
        schedule = generate_schedule(amount, rate, months, date(2024, 1, 15))
        assert sum(e.principal for e in schedule) == round2(amount)

    @pytest.mark.parametrize("amount, rate, months", [(10000, 9.9, 60), (2500, 0, 7), (75000, 6.5, 240)])
    def test_amount_due_decomposes(self, amount, rate, months):
        for entry in generate_schedule(amount, rate, months, date(2024, 1, 15)):
            assert entry.amount_due == entry.principal + entry.interest

    def test_balance_non_increasing_and_terminates(self):
        schedule = generate_schedule(10000, 9.9, 60, date(2024, 1, 15))
        for prev, curr in zip(schedule, schedule[1:]):
            assert curr.balance <= prev.balance
        assert schedule[-1].balance == 0

    def test_balance_tracks_principal(self):
        schedule = generate_schedule(10000, 9.9, 60, date(2024, 1, 15))
        retired = Decimal("0")
        for entry in schedule:
            retired += entry.principal
            assert entry.balance == Decimal("10000.00") - retired

    def test_all_amounts_in_cents(self):
        for entry in generate_schedule("7777.77", "8.75", 36, date(2024, 1, 15)):
            for value in (entry.amount_due, entry.principal, entry.interest, entry.balance):
                assert value == round2(value)


class TestKnownRows:
    """Rows pinned to the per-row rounding: unrounded balance, rounded on store"""

    def test_ten_thousand_row_three(self):
        row = generate_schedule(10000, 9.9, 60, date(2024, 1, 15))[2]
        assert row.principal == Decimal("131.62")
        assert row.interest == Decimal("80.35")
        assert row.amount_due == Decimal("211.97")

    def test_ten_thousand_last_row(self):
        schedule = generate_schedule(10000, 9.9, 60, date(2024, 1, 15))
        last = schedule[-1]
        assert last.interest == Decimal("1.73")
        assert abs(last.amount_due - Decimal("211.98")) <= Decimal("0.10")
        assert last.principal == Decimal("10000.00") - sum(e.principal for e in schedule[:-1])

    def test_mortgage_row_nineteen_interest(self):
        schedule = generate_schedule(400000, 7, 360, date(2024, 1, 1))
        assert schedule[18].interest == Decimal("2297.14")

    def test_interest_accrues_on_unrounded_balance(self):
        schedule = generate_schedule(10000, 9.9, 60, date(2024, 1, 15))
        payment = monthly_payment(10000, 9.9, 60)
        r = monthly_rate(9.9)
        balance = Decimal("10000")
        for entry in schedule:
            interest = balance * r
            assert entry.interest == round2(interest)
            balance -= payment - interest


class TestZeroRate:
    def test_no_interest(self):
        schedule = generate_schedule(1000, 0, 12, date(2024, 1, 1))
        assert all(e.interest == 0 for e in schedule)
        assert all(e.principal == e.amount_due for e in schedule)

    def test_remainder_on_last_installment(self):
        schedule = generate_schedule(1000, 0, 3, date(2024, 1, 1))
        assert [e.principal for e in schedule] == [Decimal("333.33"), Decimal("333.33"), Decimal("333.34")]
        assert sum(e.principal for e in schedule) == Decimal("1000.00")

    def test_rounded_up_payment_leaves_smaller_last(self):
        schedule = generate_schedule(200, 0, 3, date(2024, 1, 1))
        assert [e.principal for e in schedule] == [Decimal("66.67"), Decimal("66.67"), Decimal("66.66")]


class TestDegenerateInputs:
    def test_zero_amount(self):
        assert generate_schedule(0, 5, 60, date(2024, 1, 1)) == []

    def test_zero_term(self):
        assert generate_schedule(1000, 5, 0, date(2024, 1, 1)) == []

    def test_negative_amount(self):
        assert generate_schedule(-1000, 5, 12, date(2024, 1, 1)) == []

    def test_sub_cent_payment_retires_balance_early(self):
        """$1.00 over 200 months pays a cent a month, then $0.00 installments"""
        schedule = generate_schedule(1, 0, 200, date(2024, 1, 1))

        assert len(schedule) == 200
        assert all(e.principal == Decimal("0.01") for e in schedule[:100])
        assert schedule[99].balance == 0
        assert all(e.amount_due == 0 and e.balance == 0 for e in schedule[100:])
        assert sum(e.principal for e in schedule) == Decimal("1.00")

    def test_sub_cent_payment_short_term(self):
        schedule = generate_schedule(0.02, 0, 3, date(2024, 1, 1))
        assert [e.amount_due for e in schedule] == [Decimal("0.01"), Decimal("0.01"), Decimal("0.00")]


class TestDueDates:
    def test_due_dates_follow_start(self):
        schedule = generate_schedule(10000, 9.9, 60, date(2024, 1, 15))
        assert schedule[0].due_date == date(2024, 2, 15)
        assert schedule[11].due_date == date(2025, 1, 15)
        assert schedule[-1].due_date == date(2029, 1, 15)

    def test_month_end_clamped(self):
        schedule = generate_schedule(900, 0, 3, date(2024, 1, 31))
        assert [e.due_date for e in schedule] == [date(2024, 2, 29), date(2024, 3, 31), date(2024, 4, 30)]


class TestEndToEnd:
    def test_ten_thousand_at_nine_point_nine(self):
        """$10,000 at 9.9% over 60 months from 2024-01-15"""
        pmt = monthly_payment(10000, 9.9, 60)
        assert Decimal("211.90") < pmt < Decimal("212.10")

        schedule = generate_schedule(10000, 9.9, 60, date(2024, 1, 15))
        assert len(schedule) == 60
        assert [e.payment_number for e in schedule] == list(range(1, 61))
        assert schedule[0].due_date == date(2024, 2, 15)
        assert schedule[0].interest == Decimal("82.50")
        assert schedule[59].balance == 0
        assert sum(e.principal for e in schedule) == Decimal("10000.00")

    def test_idempotent(self):
        first = generate_schedule(10000, 9.9, 60, date(2024, 1, 15))
        second = generate_schedule(10000, 9.9, 60, date(2024, 1, 15))
        assert first == second

    def test_float_and_string_inputs_agree(self):
        assert generate_schedule(1234.56, 7.5, 24, date(2024, 3, 1)) == generate_schedule(
            "1234.56", "7.5", 24, date(2024, 3, 1)
        )

    def test_schedule_for_terms(self):
        terms = LoanTerms(
            principal=Decimal("8000"),
            annual_rate_percent=Decimal("9.9"),
            term_months=60,
            start_date=date(2024, 1, 15),
        )
        assert schedule_for(terms) == generate_schedule(8000, 9.9, 60, date(2024, 1, 15))
