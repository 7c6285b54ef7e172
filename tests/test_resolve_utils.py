"""ABOUTME: Tests for the item pipeline utilities.

Tests search filtering, sorting, pagination and template rendering.
"""

import pytest

from item_picker.resolve import Item, ItemCollection
from item_picker.resolve.factory import USER_KIND
from item_picker.resolve.utils import (
    filter_by_search,
    item_to_dict,
    normalize_term,
    paginate,
    render_template,
    sort_items,
)


def users(*usernames):
    return ItemCollection(
        kind="user",
        items=[Item(id=f"u{idx}", kind="user", fields={"username": name}) for idx, name in enumerate(usernames)]
    )


def usernames(collection):
    return [item.get("username") for item in collection]


class TestSearchFilter:
    """Tests for free-text search filtering."""

    def test_filter_is_case_insensitive_substring(self):
        """Test 'jo' keeps John and Joanna but not Amy."""
        filtered = filter_by_search(users("John", "Amy", "Joanna"), "jo", ["username"])
        assert usernames(filtered) == ["John", "Joanna"]

    def test_filter_matches_inside_words(self):
        filtered = filter_by_search(users("Barbara", "Alan"), "BAR", ["username"])
        assert usernames(filtered) == ["Barbara"]

    def test_empty_term_is_identity(self):
        collection = users("b", "a")
        assert filter_by_search(collection, "", ["username"]) is collection
        assert filter_by_search(collection, None, ["username"]) is collection
        assert filter_by_search(collection, "   ", ["username"]) is collection

    def test_term_is_stripped(self):
        filtered = filter_by_search(users("John", "Amy"), "  amy ", ["username"])
        assert usernames(filtered) == ["Amy"]

    def test_any_search_field_can_match(self):
        collection = ItemCollection(kind="user", items=[
            Item(id="1", kind="user", fields={"username": "ada", "email": "countess@example.com"}),
            Item(id="2", kind="user", fields={"username": "alan", "email": "alan@example.com"}),
        ])
        filtered = filter_by_search(collection, "countess", ["username", "email"])
        assert filtered.ids() == ["1"]

    def test_missing_fields_do_not_match(self):
        collection = ItemCollection(kind="user", items=[Item(id="1", kind="user")])
        assert len(filter_by_search(collection, "x", ["username"])) == 0

    def test_filter_empty_collection(self):
        assert len(filter_by_search(users(), "jo", ["username"])) == 0

    def test_normalize_term(self):
        assert normalize_term(None) == ""
        assert normalize_term(" JoHn ") == "john"


class TestSorter:
    """Tests for deterministic sorting."""

    def test_sort_casefolded_ascending(self):
        """Test the 'jo' scenario ends up as Joanna before John."""
        filtered = filter_by_search(users("John", "Amy", "Joanna"), "jo", ["username"])
        assert usernames(sort_items(filtered, "username")) == ["Joanna", "John"]

    def test_sort_ignores_case(self):
        assert usernames(sort_items(users("bob", "Alice", "carol"), "username")) == ["Alice", "bob", "carol"]

    def test_sort_is_stable_for_equal_keys(self):
        collection = users("Sam", "sam", "SAM", "adam")
        ordered = sort_items(collection, "username")
        assert ordered.ids() == ["u3", "u0", "u1", "u2"]

    def test_missing_sort_field_sorts_first(self):
        collection = ItemCollection(kind="user", items=[
            Item(id="named", kind="user", fields={"username": "a"}),
            Item(id="anonymous", kind="user"),
        ])
        assert sort_items(collection, "username").ids() == ["anonymous", "named"]

    def test_sort_does_not_mutate_input(self):
        collection = users("b", "a")
        sort_items(collection, "username")
        assert usernames(collection) == ["b", "a"]


class TestPaginator:
    """Tests for page slicing."""

    @pytest.mark.parametrize("total,page,limit", [
        (0, 1, 20), (5, 1, 2), (5, 2, 2), (5, 3, 2), (5, 4, 2), (20, 1, 20), (21, 2, 20), (3, 9, 1),
    ])
    def test_page_size_formula(self, total, page, limit):
        """Test a page holds min(L, max(0, T-(p-1)*L)) items and reports T."""
        collection = users(*[f"user{i:02d}" for i in range(total)])
        items, pagination = paginate(collection, page, limit)
        assert len(items) == min(limit, max(0, total - (page - 1) * limit))
        assert pagination.total == total

    def test_slice_boundaries(self):
        collection = users("a", "b", "c", "d", "e")
        items, pagination = paginate(collection, 2, 2)
        assert [item.get("username") for item in items] == ["c", "d"]
        assert pagination.page == 2
        assert pagination.limit == 2
        assert pagination.pages == 3

    def test_unset_page_is_served_as_first(self):
        items, pagination = paginate(users("a", "b"), 0, 1)
        assert pagination.page == 1
        assert [item.get("username") for item in items] == ["a"]

    def test_page_past_the_end_is_empty(self):
        items, pagination = paginate(users("a", "b"), 5, 10)
        assert items == []
        assert pagination.total == 2

    def test_empty_collection_has_one_page(self):
        items, pagination = paginate(users(), 1, 20)
        assert items == []
        assert pagination.pages == 1


class TestRendering:
    """Tests for display templates."""

    def test_render_template(self):
        item = Item(id="u1", kind="user", fields={"username": "ada"})
        assert render_template("{{ item.username }} ({{item.id}})", item) == "ada (u1)"

    def test_unknown_field_renders_empty(self):
        item = Item(id="u1", kind="user")
        assert render_template("{{ item.username }}", item) == ""

    def test_item_to_dict(self):
        item = Item(id="u1", kind="user", fields={"username": "ada", "email": "ada@example.com"})
        assert item_to_dict(item, USER_KIND) == {
            "id": "u1",
            "kind": "user",
            "text": "ada",
            "info": "ada@example.com",
        }
