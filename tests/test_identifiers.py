"""Id generation and public/native key translation."""
import re

from bson import ObjectId

from inventory_console.adapters.document import as_object_id
from inventory_console.identifiers import (
    from_native, native_query, prefixed_id, random_token, timestamp_id, to_native, uuid_id,
)


class TestGeneration:
    def test_prefixed_id_uses_collection_prefix(self):
        assert re.fullmatch(r"pro_[a-z0-9]{8}", prefixed_id("products"))
        assert re.fullmatch(r"ord_[a-z0-9]{8}", prefixed_id("orderItems"))

    def test_timestamp_id_is_millis_plus_token(self):
        ident = timestamp_id()
        assert re.fullmatch(r"\d{13}[a-z0-9]{7}", ident)

    def test_uuid_id_is_hex(self):
        assert re.fullmatch(r"[0-9a-f]{32}", uuid_id())

    def test_tokens_do_not_repeat(self):
        assert len({random_token() for _ in range(200)}) == 200


class TestTranslation:
    def test_to_native_renames_id(self):
        assert to_native({"id": "abc", "name": "Widget"}) == {"_id": "abc", "name": "Widget"}

    def test_to_native_generates_missing_id(self):
        assert to_native({"name": "Widget"}, new_id=lambda: "gen") == {"name": "Widget", "_id": "gen"}

    def test_to_native_leaves_key_out_without_generator(self):
        assert to_native({"name": "Widget"}) == {"name": "Widget"}

    def test_from_native_stringifies_id(self):
        oid = ObjectId()
        assert from_native({"_id": oid, "name": "Widget"}) == {"id": str(oid), "name": "Widget"}

    def test_from_native_passes_none_through(self):
        assert from_native(None) is None

    def test_translation_round_trip(self):
        record = {"id": "abc", "name": "Widget", "stock": 3}
        assert from_native(to_native(record)) == record

    def test_custom_native_key(self):
        assert to_native({"id": "a"}, key="pk") == {"pk": "a"}
        assert from_native({"pk": "a", "x": 1}, key="pk") == {"id": "a", "x": 1}

    def test_native_query_converts_id_only(self):
        oid = ObjectId()
        q = native_query({"id": str(oid), "status": "pending"}, convert=as_object_id)
        assert q == {"_id": oid, "status": "pending"}

    def test_as_object_id_keeps_non_object_ids(self):
        assert as_object_id("nonexistent") == "nonexistent"
        assert as_object_id(None) is None
        oid = ObjectId()
        assert as_object_id(oid) is oid
