from procurement.services import suppliers as supplier_service


async def test_add_and_find(db):
    supplier = await supplier_service.add_supplier(db, {"name": "Ningbo Tools", "country": "CN"})
    assert supplier.supplier_id.startswith("SUP-")
    assert (await supplier_service.get_supplier_by_name(db, "Ningbo Tools")).supplier_id == supplier.supplier_id
    assert await supplier_service.get_supplier_by_name(db, "Nobody") is None


async def test_list_sorted_by_name(db):
    await supplier_service.add_supplier(db, {"name": "Zhejiang Mold"})
    await supplier_service.add_supplier(db, {"name": "Anhui Steel"})
    assert [s.name for s in await supplier_service.list_suppliers(db)] == ["Anhui Steel", "Zhejiang Mold"]


async def test_seed_keeps_existing(db):
    assert await supplier_service.seed_supplier(db, {"supplier_id": "SUP-1", "name": "First"}) == "SUP-1"
    assert await supplier_service.seed_supplier(db, {"supplier_id": "SUP-1", "name": "Second"}) == "SUP-1"
    assert (await supplier_service.get_supplier(db, "SUP-1")).name == "First"


async def test_update_and_delete(db):
    supplier = await supplier_service.add_supplier(db, {"name": "Ningbo Tools"})
    assert await supplier_service.update_supplier(db, supplier.supplier_id, {"phone": "+86 574 0000"})
    assert (await supplier_service.get_supplier(db, supplier.supplier_id)).phone == "+86 574 0000"

    assert await supplier_service.delete_supplier(db, supplier.supplier_id)
    assert await supplier_service.get_supplier(db, supplier.supplier_id) is None
    assert not await supplier_service.update_supplier(db, supplier.supplier_id, {"phone": "x"})
