"""Tests for the add/remove/reset mutation protocol."""

import pytest

from reactive_collection import Collection, Items, Model, Page


class Photo(Model):
    defaults = {"rank": 0}


class TestAdd:
    def test_add_promotes_records_with_configured_model(self):
        photos = Collection(model=Photo)

        photos.add({"id": 1})

        model = photos.at(0)
        assert isinstance(model, Photo)
        assert model.collection is photos
        assert model.get("rank") == 0

    def test_add_preserves_insertion_order(self, collection):
        collection.add([{"id": 1}, {"id": 2}])
        collection.add({"id": 3})

        assert collection.pluck("id") == [1, 2, 3]

    def test_add_at_index_keeps_batch_order(self, collection):
        collection.add([{"id": 1}, {"id": 4}])

        collection.add([{"id": 2}, {"id": 3}], at=1)

        assert collection.pluck("id") == [1, 2, 3, 4]

    def test_add_event_reports_insertion_index(self, collection, recorder):
        collection.add([{"id": 1}, {"id": 2}])
        events = recorder(collection)

        collection.add({"id": 9}, at=1, origin="test")

        (model, source, options), = events.of("add")
        assert model.get("id") == 9
        assert source is collection
        assert options["index"] == 1
        assert options["origin"] == "test"

    def test_silent_add_emits_nothing(self, collection, recorder):
        events = recorder(collection)

        collection.add([{"id": 1}, {"id": 2}], silent=True)

        assert events.events == []
        assert collection.count() == 2

    def test_adopted_model_keeps_original_owner(self, collection):
        owner = Collection()
        model = owner.push({"id": 1})

        collection.add(model)

        assert model.collection is owner
        assert collection.get(model) is model

    def test_same_model_is_not_added_twice(self, collection):
        model = collection.push({"id": 1})

        collection.add(model)

        assert collection.count() == 1

    def test_records_with_equal_ids_are_not_merged(self, collection):
        collection.add([{"id": 1}, {"id": 1}])

        assert collection.count() == 2

    def test_page_sets_total_count(self, collection):
        collection.add(Page(items=[{"id": 1}, {"id": 2}], total=7))

        assert collection.count() == 2
        assert collection.total_count() == 7
        assert collection.has_more() == 5

    def test_dict_with_list_and_n_is_a_plain_record(self, collection):
        collection.add({"list": [1, 2], "n": 2})

        assert collection.count() == 1
        assert collection.at(0).get("n") == 2
        assert collection.total_count() == 1

    def test_items_variant_adds_without_total(self, collection):
        collection.add(Items([{"id": 1}]))

        assert collection.count() == 1
        assert collection.total_count() == 1

    def test_rejects_non_mapping_values(self, collection):
        with pytest.raises(TypeError):
            collection.add(42)

    def test_rejected_batch_inserts_nothing(self, collection, recorder):
        collection.add({"id": 0})
        events = recorder(collection)

        with pytest.raises(TypeError):
            collection.add(Page([{"id": 1}, "oops", {"id": 2}], 9))

        assert collection.pluck("id") == [0]
        assert collection.total_count() == 1
        assert events.events == []

    def test_rejected_reset_keeps_contents(self, collection):
        collection.add([{"id": 1}])

        with pytest.raises(TypeError):
            collection.reset([{"id": 2}, 3])

        assert collection.pluck("id") == [1]


class TestRemove:
    def test_add_then_remove_restores_count(self, collection):
        collection.add([{"id": 1}, {"id": 2}])
        model = collection.push({"id": 3})

        collection.remove(model)

        assert collection.count() == 2
        assert model not in collection
        assert all(item is not model for item in collection)

    def test_remove_event_reports_pre_removal_index(self, collection, recorder):
        collection.add([{"id": 1}, {"id": 2}, {"id": 3}])
        events = recorder(collection)

        collection.remove(collection.at(1))

        (model, source, options), = events.of("remove")
        assert model.get("id") == 2
        assert source is collection
        assert options["index"] == 1

    def test_remove_by_instance_and_cid(self, collection):
        collection.add([{"id": 1}, {"id": 2}, {"id": 3}])
        first = collection.at(0)
        cid = collection.at(2).cid

        collection.remove([first, cid])

        assert collection.pluck("id") == [2]

    def test_remove_ignores_ids_and_records(self, collection, recorder):
        collection.add([{"id": 1}, {"id": 2}])
        events = recorder(collection)

        collection.remove(1)
        collection.remove({"id": 2})

        assert collection.pluck("id") == [1, 2]
        assert events.events == []

    def test_remove_id_after_explicit_lookup(self, collection):
        collection.add([{"id": 1}, {"id": 2}])

        collection.remove(collection.get(1))

        assert collection.pluck("id") == [2]

    def test_remove_decrements_known_total(self, collection):
        collection.reset(Page(items=[{"id": i} for i in range(5)], total=10))

        collection.remove(collection.at(0))

        assert collection.total_count() == 9

    def test_total_count_floors_at_zero(self, collection):
        collection.reset(Page(items=[{"id": 1}, {"id": 2}], total=1))

        collection.remove([collection.at(0), collection.at(1)])

        assert collection.total_count() == 0

    def test_removing_unknown_model_is_a_noop(self, collection, recorder):
        collection.reset(Page(items=[{"id": 1}], total=4))
        events = recorder(collection)

        collection.remove(Model({"id": 99}))

        assert events.events == []
        assert collection.total_count() == 4

    def test_removed_model_is_released(self, collection, recorder):
        model = collection.push({"id": 1})
        collection.remove(model)
        events = recorder(collection)

        model.set("title", "later")

        assert model.collection is None
        assert events.events == []


class TestReset:
    def test_reset_with_page_envelope(self, collection):
        collection.reset(Page(items=[{"id": 1}, {"id": 2}], total=10))

        assert collection.count() == 2
        assert collection.total_count() == 10
        assert collection.has_more() == 8

    def test_reset_emits_single_event(self, collection, recorder):
        events = recorder(collection)

        collection.reset([{"id": 1}, {"id": 2}], reason="reload")

        assert events.names() == ["reset"]
        (source, options), = events.of("reset")
        assert source is collection
        assert options == {"reason": "reload"}

    def test_reset_rewinds_cursor_and_total(self):
        photos = Collection(start_index=20)
        photos.add(Page(items=[{"id": 1}], total=50))

        photos.reset([{"id": 2}])

        assert photos.options.start_index == 0
        assert photos.total_count() == 1

    def test_reset_loaded_models_still_rebroadcast(self, collection, recorder):
        collection.reset([{"id": 1}])
        events = recorder(collection)

        collection.at(0).set("title", "x")

        assert "change" in events.names()

    def test_constructor_keeps_configured_start_index(self):
        photos = Collection([{"id": 1}], start_index=30)

        assert photos.options.start_index == 30

    def test_initial_models_are_loaded_silently(self):
        photos = Collection([{"id": 1}, {"id": 2}])

        assert photos.pluck("id") == [1, 2]


class TestStackHelpers:
    def test_push_and_pop(self, collection):
        collection.add({"id": 1})

        pushed = collection.push({"id": 2})
        popped = collection.pop()

        assert pushed is popped
        assert collection.pluck("id") == [1]

    def test_unshift_and_shift(self, collection):
        collection.add({"id": 2})

        first = collection.unshift({"id": 1})

        assert collection.pluck("id") == [1, 2]
        assert collection.shift() is first
        assert collection.pluck("id") == [2]

    def test_pop_and_shift_on_empty(self, collection):
        assert collection.pop() is None
        assert collection.shift() is None
