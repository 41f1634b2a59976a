"""Local JSON slot backend: durability and save failures."""
import json

import pytest

from inventory_console.adapters.local import LocalCollection
from inventory_console.config_io import JsonSlotStore
from inventory_console.errors import PersistenceFailure


class TestSlots:
    async def test_records_survive_a_new_collection_instance(self, slot_store, widget):
        created = await LocalCollection("products", slot_store).insert_one(widget)

        reopened = LocalCollection("products", slot_store)

        assert await reopened.find_by_id(created["id"]) == created

    async def test_slot_holds_native_key(self, slot_store, widget):
        created = await LocalCollection("products", slot_store, prefix="shop_").insert_one(widget)

        raw = json.loads(slot_store.slot_path("shop_products").read_text(encoding="utf-8"))

        assert raw == [{**widget, "_id": created["id"]}]
        assert "shop_products" in slot_store.slots()

    async def test_unreadable_slot_loads_empty(self, slot_store):
        slot_store.slot_path("inventory_products").write_text("{not json", encoding="utf-8")

        coll = LocalCollection("products", slot_store)

        assert await coll.find({}) == []

    async def test_slot_that_is_not_a_list_loads_empty(self, slot_store):
        slot_store.slot_path("inventory_products").write_text('{"a": 1}', encoding="utf-8")

        assert await LocalCollection("products", slot_store).count() == 0

    async def test_unreadable_slot_is_kept_aside_not_overwritten(self, slot_store, widget):
        truncated = '[{"_id": "1", "name": "kept", "price": 1'
        slot_store.slot_path("inventory_products").write_text(truncated, encoding="utf-8")

        coll = LocalCollection("products", slot_store)
        await coll.insert_one(widget)

        bad = slot_store.root / "inventory_products.json.bad"
        assert bad.read_text(encoding="utf-8") == truncated
        saved = json.loads(slot_store.slot_path("inventory_products").read_text(encoding="utf-8"))
        assert [r["name"] for r in saved] == ["Widget"]
        assert slot_store.slots() == ["inventory_products"]

    def test_quarantine_numbers_repeated_moves(self, slot_store):
        for _ in range(2):
            slot_store.slot_path("s").write_text("{", encoding="utf-8")
            slot_store.quarantine("s")

        assert sorted(p.name for p in slot_store.root.iterdir()) == ["s.json.bad", "s.json.bad1"]
        assert slot_store.quarantine("s") is None

    async def test_reload_picks_up_external_changes(self, slot_store, widget):
        coll = LocalCollection("products", slot_store)
        other = LocalCollection("products", slot_store)
        await other.insert_one(widget)

        assert await coll.count() == 0
        coll.reload()
        assert await coll.count() == 1

    def test_remove_slot_is_idempotent(self, slot_store):
        slot_store.save("x", [])
        slot_store.remove("x")
        slot_store.remove("x")
        assert slot_store.load("x") is None


class TestSaveFailures:
    async def test_unserializable_value_is_rejected_before_mutation(self, slot_store, widget):
        coll = LocalCollection("products", slot_store)

        with pytest.raises(PersistenceFailure) as exc_info:
            await coll.insert_one({**widget, "made": object()})

        assert exc_info.value.record is None
        assert await coll.count() == 0
        assert slot_store.load("inventory_products") is None

    async def test_write_error_keeps_change_in_memory(self, slot_store, widget, monkeypatch):
        coll = LocalCollection("products", slot_store)
        existing = await coll.insert_one(widget)

        def disk_full(slot, records):
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(slot_store, "save", disk_full)

        with pytest.raises(PersistenceFailure) as exc_info:
            await coll.update_one({"id": existing["id"]}, {"stock": 1})

        assert exc_info.value.record["stock"] == 1
        assert (await coll.find_by_id(existing["id"]))["stock"] == 1
        # the slot on disk still holds the last good state
        assert JsonSlotStore(slot_store.root).load("inventory_products")[0]["stock"] == 10

    async def test_write_error_on_delete_still_removes_from_memory(self, slot_store, widget, monkeypatch):
        coll = LocalCollection("products", slot_store)
        existing = await coll.insert_one(widget)

        def read_only(slot, records):
            raise OSError(30, "Read-only file system")

        monkeypatch.setattr(slot_store, "save", read_only)

        with pytest.raises(PersistenceFailure):
            await coll.delete_one({"id": existing["id"]})

        assert await coll.find_by_id(existing["id"]) is None
