"""
Tests for inventory domain records and numeric coercion.
"""

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from inventory_kernel.domain.coercion import coerce_decimal, coerce_int, parse_positive_int
from inventory_kernel.domain.models import (
    Movement,
    MovementType,
    Product,
    ProductInput,
)


class TestProduct:

    def test_frozen(self):
        product = Product(id="p1", name="Widget", sku="WID")
        with pytest.raises(FrozenInstanceError):
            product.quantity = 99

    def test_negative_price_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            Product(id="p1", name="Widget", sku="WID", price=Decimal("-1"))

    def test_label_and_total_value(self):
        product = Product(id="p1", name="Widget", sku="WID", quantity=4, price=Decimal("2.50"))
        assert product.label == "Widget (WID)"
        assert product.total_value == Decimal("10.00")

    def test_input_prefilled_from_product(self):
        product = Product(id="p1", name="Widget", sku="WID", quantity=4, reorder_level=2)
        data = ProductInput.from_product(product)
        assert data.id == "p1"
        assert data.quantity == 4
        assert data.reorder_level == 2


class TestMovement:

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_rejected(self, quantity):
        with pytest.raises(ValueError, match="positive"):
            Movement(id="m1", product_id="p1", type=MovementType.IN,
                     quantity=quantity, timestamp=0)

    def test_signed_quantity(self):
        m_in = Movement(id="m1", product_id="p1", type=MovementType.IN, quantity=3, timestamp=0)
        m_out = Movement(id="m2", product_id="p1", type=MovementType.OUT, quantity=3, timestamp=0)
        assert m_in.signed_quantity == 3
        assert m_out.signed_quantity == -3


class TestCoercion:

    @pytest.mark.parametrize("raw, expected", [
        (8, 8),
        ("8", 8),
        (" 8 ", 8),
        ("8.0", 8),
        (8.0, 8),
        (Decimal("8"), 8),
        ("-3", -3),
        ("2.5", 0),
        ("", 0),
        (None, 0),
        ("abc", 0),
        ("NaN", 0),
        (float("inf"), 0),
        ("1e5000", 0),
        (10**15, 0),
        (-(10**15), 0),
        (10**15 - 1, 10**15 - 1),
        (True, 0),
    ])
    def test_coerce_int(self, raw, expected):
        assert coerce_int(raw) == expected

    @pytest.mark.parametrize("raw, expected", [
        ("45000", Decimal("45000")),
        (699, Decimal("699")),
        (0.1, Decimal("0.1")),
        ("12.50", Decimal("12.50")),
        ("", Decimal("0")),
        ("x", Decimal("0")),
        (None, Decimal("0")),
    ])
    def test_coerce_decimal(self, raw, expected):
        assert coerce_decimal(raw) == expected

    @pytest.mark.parametrize("raw, expected", [
        (1, 1),
        ("5", 5),
        (0, None),
        (-2, None),
        ("1.5", None),
        ("", None),
        (None, None),
        ("1e5000", None),
        (10**15, None),
        (False, None),
    ])
    def test_parse_positive_int(self, raw, expected):
        assert parse_positive_int(raw) == expected
