from procurement.services import costs as cost_service
from procurement.services import links as link_registry
from procurement.services import payments as payment_service


async def add_freight(db, order_id):
    return await cost_service.add_cost(db, order_id, {
        "description": "Freight", "amount": 37.6, "currency": "USD", "allocation_method": "נפח",
    })


class TestCostLinks:

    async def test_new_cost_has_no_links(self, db, order, two_products):
        cost = await add_freight(db, order.order_id)
        assert await link_registry.cost_links_for_costs(db, [cost.cost_id]) == []

    async def test_set_replaces_previous_set(self, db, order, two_products):
        a, b = two_products
        cost = await add_freight(db, order.order_id)

        await cost_service.set_cost_product_links(db, cost.cost_id, [a.product_id, b.product_id])
        await cost_service.set_cost_product_links(db, cost.cost_id, [b.product_id])

        links = await link_registry.cost_links_for_costs(db, [cost.cost_id])
        assert [(l.product_id, l.is_linked) for l in links] == [(b.product_id, True)]

    async def test_duplicates_are_stored_once(self, db, order, two_products):
        a, _ = two_products
        cost = await add_freight(db, order.order_id)
        await cost_service.set_cost_product_links(db, cost.cost_id, [a.product_id, a.product_id])
        assert len(await link_registry.cost_links_for_costs(db, [cost.cost_id])) == 1

    async def test_empty_set_clears_links(self, db, order, two_products):
        a, _ = two_products
        cost = await add_freight(db, order.order_id)
        await cost_service.set_cost_product_links(db, cost.cost_id, [a.product_id])
        await cost_service.set_cost_product_links(db, cost.cost_id, [])
        assert await link_registry.cost_links_for_costs(db, [cost.cost_id]) == []

    async def test_deleting_cost_removes_its_links(self, db, order, two_products):
        a, _ = two_products
        cost = await add_freight(db, order.order_id)
        await cost_service.set_cost_product_links(db, cost.cost_id, [a.product_id])

        await cost_service.delete_cost(db, cost.cost_id)

        assert await link_registry.cost_links_by_product(db, a.product_id) == []

    async def test_missing_cost(self, db):
        assert not await cost_service.set_cost_product_links(db, "COST-missing", [])


class TestPaymentLinks:

    async def test_add_payment_with_links(self, db, order, two_products):
        a, _ = two_products
        cost = await add_freight(db, order.order_id)
        payment = await payment_service.add_payment(db, order.order_id, {
            "date": order.created_date.date(), "amount": 50, "currency": "USD",
            "linked_product_ids": [a.product_id], "linked_cost_ids": [cost.cost_id],
        })

        product_links = await link_registry.payment_product_links_by_payment(db, [payment.payment_id])
        cost_links = await link_registry.payment_cost_links_by_payment(db, [payment.payment_id])
        assert [l.product_id for l in product_links] == [a.product_id]
        assert [l.cost_id for l in cost_links] == [cost.cost_id]

    async def test_set_replaces_both_sides(self, db, order, two_products):
        a, b = two_products
        cost = await add_freight(db, order.order_id)
        payment = await payment_service.add_payment(db, order.order_id, {
            "date": order.created_date.date(), "amount": 50, "currency": "USD",
            "linked_product_ids": [a.product_id], "linked_cost_ids": [cost.cost_id],
        })

        assert await payment_service.set_payment_links(db, payment.payment_id, [b.product_id], [])

        product_links = await link_registry.payment_product_links_by_payment(db, [payment.payment_id])
        assert [l.product_id for l in product_links] == [b.product_id]
        assert await link_registry.payment_cost_links_by_payment(db, [payment.payment_id]) == []

    async def test_lookups_without_ids(self, db):
        assert await link_registry.payment_product_links_by_payment(db, []) == []
        assert await link_registry.payment_cost_links_by_payment(db, []) == []
        assert await link_registry.cost_links_for_costs(db, []) == []
