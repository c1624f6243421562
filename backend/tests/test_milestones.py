from procurement.models.milestone import LEGACY_TYPE_ID
from procurement.services import milestones as milestone_service
from procurement.services import products as product_service


class TestMilestoneTypes:

    async def test_list_by_level_in_default_order(self, db):
        await milestone_service.add_milestone_type(db, {"name": "Shipped", "level": "order", "default_order": 2})
        await milestone_service.add_milestone_type(db, {"name": "Ordered", "level": "order", "default_order": 1})
        await milestone_service.add_milestone_type(db, {"name": "QC", "level": "product", "default_order": 0})

        order_types = await milestone_service.list_milestone_types(db, "order")
        assert [t.name for t in order_types] == ["Ordered", "Shipped"]
        assert len(await milestone_service.list_milestone_types(db)) == 3

    async def test_seed_is_idempotent(self, db):
        data = {"type_id": "customs", "name": "Customs", "level": "order", "default_order": 5, "color": "#000000"}
        assert await milestone_service.seed_milestone_type(db, data) == "customs"
        assert await milestone_service.seed_milestone_type(db, dict(data, name="Renamed")) == "customs"

        (milestone_type,) = await milestone_service.list_milestone_types(db)
        assert milestone_type.name == "Customs"

    async def test_update_and_delete(self, db):
        milestone_type = await milestone_service.add_milestone_type(db, {"name": "Shipped", "level": "order"})
        assert await milestone_service.update_milestone_type(db, milestone_type.type_id, {"color": "#ff0000"})
        assert (await milestone_service.list_milestone_types(db))[0].color == "#ff0000"

        assert await milestone_service.delete_milestone_type(db, milestone_type.type_id)
        assert await milestone_service.list_milestone_types(db) == []
        assert not await milestone_service.delete_milestone_type(db, milestone_type.type_id)


class TestMilestones:

    async def test_order_milestones(self, db, order):
        milestone = await milestone_service.add_order_milestone(db, order.order_id, {"milestone_type_id": "shipped"})
        assert milestone.milestone_id.startswith("OMS-")

        assert await milestone_service.update_order_milestone(db, milestone.milestone_id, {"status": "done"})
        (stored,) = await milestone_service.list_order_milestones(db, order.order_id)
        assert stored.status == "done"

        assert await milestone_service.delete_order_milestone(db, milestone.milestone_id)
        assert await milestone_service.list_order_milestones(db, order.order_id) == []

    async def test_product_milestones_go_with_the_product(self, db, two_products):
        a, _ = two_products
        milestone = await milestone_service.add_product_milestone(db, a.product_id, {"milestone_type_id": "qc"})
        assert milestone.milestone_id.startswith("PMS-")

        await product_service.delete_product(db, a.product_id)
        assert await milestone_service.list_product_milestones(db, a.product_id) == []

    async def test_legacy_with_product(self, db, order, two_products):
        a, _ = two_products
        milestone_id = await milestone_service.add_legacy_milestone(db, {
            "order_id": order.order_id, "product_id": a.product_id, "description": "Left the factory",
        })

        (milestone,) = await milestone_service.list_product_milestones(db, a.product_id)
        assert milestone.milestone_id == milestone_id
        assert milestone.milestone_type_id == LEGACY_TYPE_ID
        assert milestone.status == "Left the factory"

    async def test_legacy_without_product(self, db, order):
        await milestone_service.add_legacy_milestone(db, {"order_id": order.order_id, "description": "At port"})
        (milestone,) = await milestone_service.list_order_milestones(db, order.order_id)
        assert milestone.milestone_type_id == LEGACY_TYPE_ID
        assert milestone.status == "At port"
