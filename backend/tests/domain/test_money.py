"""
账单金额计算测试
"""
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from hoteldesk.models.hotel import BillItem
from hoteldesk.services.billing_service import calculate_nights, calculate_totals, to_money


class TestCalculateNights:

    def test_whole_days(self):
        start = datetime(2026, 3, 10, 14, 0)
        assert calculate_nights(start, start + timedelta(days=3)) == 3

    def test_partial_day_rounds_up(self):
        start = datetime(2026, 3, 10, 14, 0)
        assert calculate_nights(start, start + timedelta(days=1, hours=2)) == 2

    def test_same_day_is_one_night(self):
        start = datetime(2026, 3, 10, 9, 0)
        assert calculate_nights(start, start + timedelta(hours=3)) == 1

    def test_zero_length_is_one_night(self):
        start = datetime(2026, 3, 10, 9, 0)
        assert calculate_nights(start, start) == 1


class TestCalculateTotals:

    def test_room_only(self):
        items = [BillItem(amount=Decimal("100.00"), quantity=2)]
        assert calculate_totals(items, Decimal("10")) == (
            Decimal("200.00"), Decimal("20.00"), Decimal("220.00")
        )

    def test_room_and_service(self):
        items = [
            BillItem(amount=Decimal("100.00"), quantity=2),
            BillItem(amount=Decimal("15.00"), quantity=1),
        ]
        subtotal, tax, total = calculate_totals(items, Decimal("10.00"))
        assert subtotal == Decimal("215.00")
        assert tax == Decimal("21.50")
        assert total == Decimal("236.50")

    def test_tax_rounds_half_up(self):
        items = [BillItem(amount=Decimal("0.05"), quantity=1)]
        subtotal, tax, total = calculate_totals(items, Decimal("10"))
        assert tax == Decimal("0.01")
        assert total == Decimal("0.06")

    def test_no_items(self):
        assert calculate_totals([], Decimal("10")) == (Decimal("0.00"), Decimal("0.00"), Decimal("0.00"))

    @pytest.mark.parametrize("value,expected", [
        ("12.345", "12.35"),
        ("12.344", "12.34"),
        (7, "7.00"),
    ])
    def test_to_money(self, value, expected):
        assert to_money(value) == Decimal(expected)
