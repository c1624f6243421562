from datetime import datetime
from decimal import Decimal

import httpx
import pytest
from sqlalchemy import select

from procurement.models import (
    AdditionalCost, CostProductLink, OrderMilestone, Payment, PaymentCostLink,
    PaymentProductLink, Product, ProductMilestone,
)
from procurement.services import costs as cost_service
from procurement.services import milestones as milestone_service
from procurement.services import orders as order_service
from procurement.services import payments as payment_service
from procurement.services import products as product_service
from procurement.services.ids import generate_order_id
from procurement.services.rates import RateProvider


async def count(db, model, column, value):
    result = await db.execute(select(model).where(column == value))
    return len(result.scalars().all())


class TestCreateOrder:

    async def test_order_ids_follow_the_year(self, db, order):
        year = datetime.now().year
        assert order.order_id == f"PO-{year}-001"
        second, _ = await order_service.create_order(db, {"order_name": "Second", "usd_rate": 3.7, "cny_rate": 0.5})
        assert second.order_id == f"PO-{year}-002"

    async def test_sequence_is_max_plus_one(self, db):
        first, _ = await order_service.create_order(db, {"order_name": "1", "usd_rate": 3.7, "cny_rate": 0.5})
        second, _ = await order_service.create_order(db, {"order_name": "2", "usd_rate": 3.7, "cny_rate": 0.5})
        await order_service.delete_order(db, first.order_id)

        third, _ = await order_service.create_order(db, {"order_name": "3", "usd_rate": 3.7, "cny_rate": 0.5})
        assert third.order_id.endswith("-003")

    async def test_sequence_restarts_per_year(self, db, order):
        assert await generate_order_id(db, year=1999) == "PO-1999-001"

    async def test_default_status(self, order):
        assert order.status == "חדש"

    async def test_missing_rates_fall_back_to_defaults(self, db, offline_provider):
        order, live = await order_service.create_order(db, {"order_name": "Offline"}, rate_provider=offline_provider)
        assert live is False
        assert order.usd_rate == Decimal("3.76")
        assert order.cny_rate == Decimal("0.52")

    async def test_missing_rates_use_live_quote(self, db):
        def handler(request):
            return httpx.Response(200, json={"exchangeRates": [
                {"key": "USD", "currentExchangeRate": 3.65},
                {"key": "CNY", "currentExchangeRate": 0.505},
            ]})
        provider = RateProvider(url="http://rates.test/", transport=httpx.MockTransport(handler))

        order, live = await order_service.create_order(db, {"order_name": "Live", "cny_rate": 0.6}, rate_provider=provider)
        assert live is True
        assert order.usd_rate == Decimal("3.65")
        assert order.cny_rate == Decimal("0.6")


class TestUpdateOrder:

    async def test_new_rate_changes_totals(self, db, order, two_products):
        await order_service.update_order(db, order.order_id, {"usd_rate": 4})
        full = await order_service.get_order_full(db, order.order_id)
        assert full.summary.total_products_ils == Decimal("1200")

    async def test_missing_order(self, db):
        assert not await order_service.update_order(db, "PO-missing", {"status": "x"})
        assert not await order_service.delete_order(db, "PO-missing")
        assert await order_service.get_order_full(db, "PO-missing") is None


class TestOrderFull:

    async def test_volume_scenario(self, db, order, two_products):
        await cost_service.add_cost(db, order.order_id, {
            "description": "Freight", "amount": 37.6, "currency": "USD", "allocation_method": "נפח",
        })

        full = await order_service.get_order_full(db, order.order_id)

        a, b = full.products
        assert a.final_cost_ils == Decimal("404.2752")
        assert b.final_cost_ils == Decimal("865.1008")
        assert full.costs[0].amount_ils == Decimal("141.376")
        assert full.summary.total_order_ils == Decimal("1269.376")
        # three pending stubs, nothing paid yet
        assert len(full.payments) == 3
        assert full.summary.total_paid_ils == Decimal("0")
        assert len(full.payment_product_links) == 2
        assert len(full.payment_cost_links) == 1

    async def test_approving_a_stub_reduces_balance(self, db, order, two_products):
        full = await order_service.get_order_full(db, order.order_id)
        stub = next(p for p in full.payments if p.amount_ils == Decimal("376"))

        await payment_service.approve_payment(db, stub.payment.payment_id)

        full = await order_service.get_order_full(db, order.order_id)
        assert full.summary.total_paid_ils == Decimal("376")
        assert full.summary.balance_ils == Decimal("752")

    async def test_equal_scenario_with_links(self, db, order, two_products):
        a, b = two_products
        cost = await cost_service.add_cost(db, order.order_id, {
            "description": "Handling", "amount": 10, "currency": "USD", "allocation_method": "שווה",
        })
        await cost_service.set_cost_product_links(db, cost.cost_id, [a.product_id, b.product_id])

        full = await order_service.get_order_full(db, order.order_id)
        assert [p.additional_costs_ils for p in full.products] == [Decimal("18.8"), Decimal("18.8")]
        assert full.costs[0].linked_product_count == 2

    async def test_read_does_not_write(self, db, order, two_products):
        await order_service.get_order_full(db, order.order_id)
        assert not db.new and not db.dirty and not db.deleted

    async def test_list_with_summary(self, db, order, two_products):
        listed = await order_service.list_orders_with_summary(db)
        assert len(listed) == 1
        listed_order, summary = listed[0]
        assert listed_order.order_id == order.order_id
        assert summary.total_order_ils == Decimal("1128")


class TestDeleteOrder:

    async def test_cascade(self, db, order, two_products):
        a, _ = two_products
        other, _ = await order_service.create_order(db, {"order_name": "Other", "usd_rate": 3.7, "cny_rate": 0.5})
        cost = await cost_service.add_cost(db, order.order_id, {
            "description": "Freight", "amount": 10, "currency": "USD", "allocation_method": "שווה",
        })
        await cost_service.set_cost_product_links(db, cost.cost_id, [a.product_id])
        await milestone_service.add_order_milestone(db, order.order_id, {"milestone_type_id": "shipped"})
        await milestone_service.add_product_milestone(db, a.product_id, {"milestone_type_id": "produced"})
        await cost_service.add_cost(db, other.order_id, {
            "description": "Kept", "amount": 1, "currency": "ILS", "allocation_method": "שווה",
        })

        assert await order_service.delete_order(db, order.order_id)

        assert await order_service.get_order(db, order.order_id) is None
        assert await count(db, Product, Product.order_id, order.order_id) == 0
        assert await count(db, AdditionalCost, AdditionalCost.order_id, order.order_id) == 0
        assert await count(db, Payment, Payment.order_id, order.order_id) == 0
        assert await count(db, OrderMilestone, OrderMilestone.order_id, order.order_id) == 0
        assert await count(db, ProductMilestone, ProductMilestone.product_id, a.product_id) == 0
        assert await count(db, CostProductLink, CostProductLink.cost_id, cost.cost_id) == 0
        assert await count(db, PaymentProductLink, PaymentProductLink.product_id, a.product_id) == 0
        assert await count(db, PaymentCostLink, PaymentCostLink.cost_id, cost.cost_id) == 0

        # the other order is untouched
        assert await count(db, AdditionalCost, AdditionalCost.order_id, other.order_id) == 1
        assert await count(db, Payment, Payment.order_id, other.order_id) == 1


@pytest.mark.parametrize("name", ["", "  "])
async def test_product_suppliers_skip_blanks(db, order, two_products, name):
    await product_service.add_product(db, order.order_id, {"name": "C", "supplier": name, "quantity": 1})
    await product_service.add_product(db, order.order_id, {"name": "D", "supplier": " Ningbo Tools ", "quantity": 1})
    assert await product_service.list_product_suppliers(db) == ["Ningbo Tools", "Shenzhen Parts"]
