from decimal import Decimal

import pytest

from procurement.services.currency import ExchangeRates
from procurement.services.settlement import (
    calculate_product_costs, calculate_order_summary, cost_amounts, payment_amounts
)

from tests.factories import make_product, make_cost, make_link, make_payment

RATES = ExchangeRates.of("3.76", "0.52")


@pytest.fixture
def products():
    return [
        make_product("A", price_total=100, quantity=10, cbm_total=2, kg_total=50),
        make_product("B", price_total=200, quantity=5, cbm_total=8, kg_total=150),
    ]


class TestVolumeScenario:
    """$37.6 freight by volume, no explicit links"""

    @pytest.fixture
    def costs(self):
        return [make_cost("C", "37.6", allocation_method="נפח")]

    def test_cost_in_ils(self, costs):
        assert cost_amounts(costs, [], RATES)[0].amount_ils == Decimal("141.376")

    def test_product_costs(self, products, costs):
        a, b = calculate_product_costs(products, costs, [], RATES)
        assert a.price_ils == Decimal("376")
        assert a.additional_costs_ils == Decimal("28.2752")
        assert a.final_cost_ils == Decimal("404.2752")
        assert a.final_cost_per_unit_ils == Decimal("40.42752")
        assert b.price_ils == Decimal("752")
        assert b.additional_costs_ils == Decimal("113.1008")
        assert b.final_cost_ils == Decimal("865.1008")
        assert b.final_cost_per_unit_ils == Decimal("173.02016")

    def test_order_totals(self, products, costs):
        summary = calculate_order_summary(
            calculate_product_costs(products, costs, [], RATES),
            cost_amounts(costs, [], RATES),
            [],
        )
        assert summary.product_count == 2
        assert summary.total_products_ils == Decimal("1128")
        assert summary.total_costs_ils == Decimal("141.376")
        assert summary.total_order_ils == Decimal("1269.376")
        assert summary.balance_ils == Decimal("1269.376")
        assert summary.total_cbm == Decimal("10")
        assert summary.total_kg == Decimal("200")


class TestEqualScenario:
    """$10 cost split equally over both products"""

    def test_each_product_gets_half(self, products):
        costs = [make_cost("D", 10, allocation_method="שווה")]
        links = [make_link("D", "A"), make_link("D", "B")]
        a, b = calculate_product_costs(products, costs, links, RATES)
        assert a.additional_costs_ils == Decimal("18.8")
        assert b.additional_costs_ils == Decimal("18.8")

    def test_linked_product_count(self):
        links = [make_link("D", "A"), make_link("D", "B"), make_link("E", "A")]
        amounts = cost_amounts([make_cost("D", 10)], links, RATES)
        assert amounts[0].linked_product_count == 2


class TestBalance:

    def _summary(self, products, payments):
        return calculate_order_summary(
            calculate_product_costs(products, [], [], RATES),
            [],
            payment_amounts(payments, RATES),
        )

    def test_pending_payments_are_not_paid(self, products):
        summary = self._summary(products, [make_payment(100, status="pending")])
        assert summary.total_paid_ils == Decimal("0")
        assert summary.balance_ils == summary.total_order_ils

    def test_balance_is_total_minus_paid(self, products):
        payments = [make_payment(50, status="approved"), make_payment(500, currency="ILS", status="approved")]
        summary = self._summary(products, payments)
        assert summary.total_paid_ils == Decimal("688")
        assert summary.balance_ils == summary.total_order_ils - summary.total_paid_ils

    def test_toggling_status_moves_paid_by_payment_amount(self, products):
        approved = make_payment(50, status="approved")
        toggled = make_payment(20, status="pending")
        before = self._summary(products, [approved, toggled])

        toggled.status = "approved"
        after = self._summary(products, [approved, toggled])

        assert after.total_paid_ils - before.total_paid_ils == Decimal("75.2")
        assert after.balance_ils == after.total_order_ils - after.total_paid_ils

        toggled.status = "pending"
        assert self._summary(products, [approved, toggled]).total_paid_ils == before.total_paid_ils


def test_zero_quantity_has_zero_unit_cost():
    (item,) = calculate_product_costs([make_product("A", price_total=10, quantity=0)], [], [], RATES)
    assert item.final_cost_per_unit_ils == Decimal("0")


def test_empty_order():
    summary = calculate_order_summary([], [], [])
    assert summary.product_count == 0
    assert summary.total_order_ils == Decimal("0")
    assert summary.balance_ils == Decimal("0")
