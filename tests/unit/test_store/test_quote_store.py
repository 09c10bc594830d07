"""
Unit tests for the in-memory quote store
"""

import threading

import pytest

from store.models import Quote, SEED_QUOTES
from store.quote_store import QuoteStore, create_default_store
from utils import QuoteRangeError


@pytest.mark.unit
class TestQuoteStore:
    """Test cases for QuoteStore"""

    def test_seeded_on_creation(self, quote_store):
        """Seed quotes get ids 1-5 in order"""
        quotes = quote_store.snapshot()
        assert [q.id for q in quotes] == [1, 2, 3, 4, 5]
        assert [q.text for q in quotes] == list(SEED_QUOTES)
        assert len(quote_store) == 5
        assert quote_store.next_id == 6

    def test_empty_store(self, empty_store):
        """Empty seed sequence gives an empty store"""
        assert empty_store.count() == 0
        assert empty_store.next_id == 1
        assert empty_store.create("first").id == 1

    def test_custom_seeds_start_counter_after_seed_count(self):
        """Counter starts one past the number of seeds"""
        store = QuoteStore(seed_quotes=["a", "b"])
        assert store.next_id == 3
        assert store.find(2).text == "b"

    def test_find_existing_ids(self, quote_store):
        """find returns a record whose id equals the query"""
        for quote_id in range(1, 6):
            quote = quote_store.find(quote_id)
            assert quote is not None
            assert quote.id == quote_id

    def test_find_missing_id(self, quote_store):
        """find returns None for unknown ids"""
        assert quote_store.find(0) is None
        assert quote_store.find(6) is None
        assert quote_store.find(-1) is None

    def test_find_last_match_wins(self, quote_store):
        """With duplicate ids the last record in the collection is returned"""
        quote_store._quotes.append(Quote(id=2, text="duplicate"))
        assert quote_store.find(2).text == "duplicate"

    def test_create_appends_with_next_id(self, quote_store):
        """create grows the collection by one and assigns the next id"""
        quote = quote_store.create("Test")
        assert quote.id == 6
        assert quote.text == "Test"
        assert quote_store.count() == 6
        assert quote_store.snapshot()[-1] == Quote(id=6, text="Test")

    def test_ids_not_reused_after_delete(self, quote_store):
        """Deleted ids are never handed out again"""
        first = quote_store.create("one")
        assert quote_store.delete(first.id) is True
        second = quote_store.create("two")
        assert second.id == first.id + 1

        quote_store.delete(5)
        assert quote_store.create("three").id == 8

    def test_update_existing(self, quote_store):
        """update changes only the target record"""
        before = quote_store.snapshot()
        updated = quote_store.update(3, "new text")

        assert updated.id == 3
        assert quote_store.find(3).text == "new text"

        after = quote_store.snapshot()
        for old, new in zip(before, after):
            if old.id != 3:
                assert old == new
        assert quote_store.count() == 5

    def test_update_missing(self, quote_store):
        """update on an unknown id returns None and changes nothing"""
        before = quote_store.snapshot()
        assert quote_store.update(42, "nothing") is None
        assert quote_store.snapshot() == before

    def test_delete_existing(self, quote_store):
        """delete removes the record and shrinks the collection"""
        assert quote_store.delete(3) is True
        assert quote_store.find(3) is None
        assert quote_store.count() == 4
        assert [q.id for q in quote_store.snapshot()] == [1, 2, 4, 5]

    def test_delete_missing(self, quote_store):
        """delete on an unknown id returns False"""
        assert quote_store.delete(99) is False
        assert quote_store.count() == 5

    def test_delete_removes_all_duplicates(self, quote_store):
        """delete drops every record carrying the id"""
        quote_store._quotes.append(Quote(id=4, text="duplicate"))
        assert quote_store.delete(4) is True
        assert quote_store.find(4) is None
        assert quote_store.count() == 4

    def test_snapshot_is_a_copy(self, quote_store):
        """Mutating a snapshot does not touch the store"""
        snapshot = quote_store.snapshot()
        snapshot[0].text = "changed"
        snapshot.pop()
        assert quote_store.find(1).text == SEED_QUOTES[0]
        assert quote_store.count() == 5


@pytest.mark.unit
class TestQuoteStorePagination:
    """Test cases for positional slicing and paging"""

    def test_first_page_returns_seeds_in_order(self, quote_store):
        """page=1, per_page=5 returns the five seed quotes"""
        quotes = quote_store.page(1, 5)
        assert [q.id for q in quotes] == [1, 2, 3, 4, 5]

    def test_second_page_out_of_range(self, quote_store):
        """page=2, per_page=5 on five quotes fails"""
        with pytest.raises(QuoteRangeError) as exc_info:
            quote_store.page(2, 5)
        assert exc_info.value.index == 5
        assert exc_info.value.size == 5

    def test_range_error_is_index_error(self, quote_store):
        """Out-of-range slices raise an IndexError subtype"""
        with pytest.raises(IndexError):
            quote_store.list_range(3, 3)

    def test_partial_page_is_not_truncated(self, quote_store):
        """A window that runs past the end fails rather than truncating"""
        with pytest.raises(QuoteRangeError):
            quote_store.page(2, 3)

    def test_list_range_is_positional(self, quote_store):
        """Slices are taken by position, not by id"""
        quote_store.delete(1)
        quotes = quote_store.list_range(0, 2)
        assert [q.id for q in quotes] == [2, 3]

    def test_smaller_pages(self, quote_store):
        """page=2, per_page=2 returns positions 2 and 3"""
        assert [q.id for q in quote_store.page(2, 2)] == [3, 4]

    def test_zero_per_page_is_empty(self, quote_store):
        """An empty window returns nothing"""
        assert quote_store.page(1, 0) == []
        assert quote_store.page(3, 0) == []

    def test_negative_start_out_of_range(self, quote_store):
        """page=0 starts before the collection"""
        with pytest.raises(QuoteRangeError) as exc_info:
            quote_store.page(0, 5)
        assert exc_info.value.index == -5

    def test_empty_store_first_page_fails(self, empty_store):
        """Default window over an empty store is out of range"""
        with pytest.raises(QuoteRangeError):
            empty_store.page(1, 5)


@pytest.mark.unit
class TestQuoteStoreConcurrency:
    """Concurrent access through the store lock"""

    def test_concurrent_creates_get_unique_ids(self, empty_store):
        """Parallel creates never hand out the same id"""
        def worker():
            for i in range(50):
                empty_store.create(f"quote {i}")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        ids = [q.id for q in empty_store.snapshot()]
        assert len(ids) == 200
        assert len(set(ids)) == 200
        assert empty_store.next_id == 201


@pytest.mark.unit
class TestCreateDefaultStore:
    """Store construction from configuration"""

    def test_seeded_by_default(self):
        """Shipped configuration seeds the store"""
        assert create_default_store().count() == 5

    def test_seeding_disabled(self, monkeypatch):
        """seed_on_startup false gives an empty store"""
        from utils import config_manager, StoreConfig

        monkeypatch.setattr(config_manager, "get_store_config", lambda: StoreConfig(seed_on_startup=False))
        assert create_default_store().count() == 0
