"""ABOUTME: Tests for the in-memory item store and JSON loading."""

import json

import pytest

from item_picker.error_handling import NotFoundError
from item_picker.resolve import (
    BUILTIN_KINDS,
    EntityContext,
    Item,
    ItemCollection,
    ItemStore,
    SiteContext,
    create_store,
    load_store,
)


class TestItemStore:
    """Tests for item storage and relations."""

    def test_from_dict_keeps_fields(self, store):
        ada = store.find("user", "u-ada")
        assert ada.kind == "user"
        assert ada.get("username") == "Ada"
        assert ada.parent is None

    def test_parent_is_not_a_field(self, store):
        post = store.find("page", "post-a")
        assert post.parent == "blog"
        assert "parent" not in post.fields

    def test_all_keeps_insertion_order(self, store):
        assert store.all("page").ids() == ["home", "blog", "post-b", "post-a"]

    def test_children(self, store):
        assert store.children("home", "file").ids() == ["f-hero", "f-terms"]

    def test_find_unknown_item(self, store):
        with pytest.raises(NotFoundError, match="User not found: nobody"):
            store.find("user", "nobody")

    def test_unknown_kind(self, store):
        with pytest.raises(NotFoundError, match="Kind not found"):
            store.kind("widget")

    def test_duplicate_ids_rejected(self):
        store = create_store()
        store.add(Item(id="x", kind="user"))
        with pytest.raises(ValueError, match="Duplicate"):
            store.add(Item(id="x", kind="user"))

    def test_unknown_item_kind_rejected(self):
        with pytest.raises(ValueError, match="Unknown kind"):
            create_store().add(Item(id="x", kind="widget"))

    def test_unknown_collection_is_skipped(self):
        store = ItemStore.from_dict({"widgets": [{"id": "w"}]}, BUILTIN_KINDS)
        assert len(store.all("user")) == 0

    def test_record_without_id_rejected(self):
        with pytest.raises(ValueError, match="without id"):
            ItemStore.from_dict({"users": [{"username": "ghost"}]}, BUILTIN_KINDS)

    def test_collection_must_be_homogeneous(self):
        with pytest.raises(ValueError, match="cannot hold"):
            ItemCollection(kind="user", items=[Item(id="p", kind="page")])


class TestContexts:
    """Tests for building resolution contexts from parent references."""

    def test_no_parent_is_site(self, store):
        assert store.context(None) == SiteContext()
        assert store.context("") == SiteContext()

    def test_entity_parent(self, store):
        context = store.context("page/blog")
        assert isinstance(context, EntityContext)
        assert context.kind == "page"
        assert context.item.id == "blog"

    def test_missing_parent(self, store):
        with pytest.raises(NotFoundError, match="Parent not found: page/nowhere"):
            store.context("page/nowhere")

    def test_parent_of_unknown_kind(self, store):
        """Test an unregistered parent kind is reported as a missing parent."""
        with pytest.raises(NotFoundError) as exc_info:
            store.context("widget/home")

        assert exc_info.value.message == "Parent not found: widget/home"


class TestLoadStore:
    """Tests for loading stores from JSON files."""

    def test_load_store(self, tmp_path, sample_data):
        path = tmp_path / "items.json"
        path.write_text(json.dumps(sample_data), encoding="utf-8")

        store = load_store(path, BUILTIN_KINDS)
        assert len(store.all("file")) == 4

    def test_load_store_requires_object(self, tmp_path):
        path = tmp_path / "items.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ValueError, match="JSON object"):
            load_store(path, BUILTIN_KINDS)
