"""Tests for the proxied sequence helpers and query methods."""

import pytest

from reactive_collection import Collection


@pytest.fixture
def people() -> Collection:
    return Collection(
        [
            {"id": 1, "name": "ann", "team": "red", "age": 31},
            {"id": 2, "name": "bob", "team": "blue", "age": 25},
            {"id": 3, "name": "cy", "team": "red", "age": 40},
        ]
    )


def test_dunder_protocols(people):
    assert len(people) == 3
    assert [model.get("name") for model in people] == ["ann", "bob", "cy"]
    assert people[0].get("name") == "ann"
    assert 2 in people
    assert 99 not in people


def test_at_handles_out_of_range(people):
    assert people.at(-1).get("name") == "cy"
    assert people.at(3) is None


def test_where_and_find_where(people):
    assert [m.get("name") for m in people.where(team="red")] == ["ann", "cy"]
    assert people.where() == []
    assert people.find_where(team="blue").get("name") == "bob"
    assert people.find_where(team="green") is None


def test_map_filter_reject(people):
    assert people.map("name") == ["ann", "bob", "cy"]
    assert [m.id for m in people.filter(lambda m: m.get("age") > 30)] == [1, 3]
    assert [m.id for m in people.reject(lambda m: m.get("age") > 30)] == [2]


def test_reduce_and_reduce_right(people):
    assert people.reduce(lambda total, m: total + m.get("age"), 0) == 96
    assert people.reduce_right(lambda names, m: names + [m.get("name")], []) == ["cy", "bob", "ann"]


def test_every_some_contains(people):
    assert people.every(lambda m: m.get("age") > 20)
    assert people.some(lambda m: m.get("team") == "blue")
    assert people.contains(people.at(0))


def test_max_min_sort_by_group_by(people):
    assert people.max("age").get("name") == "cy"
    assert people.min("age").get("name") == "bob"
    assert [m.get("name") for m in people.sort_by("age")] == ["bob", "ann", "cy"]
    groups = people.group_by("team")
    assert sorted(groups) == ["blue", "red"]
    assert [m.id for m in groups["red"]] == [1, 3]


def test_slicing_helpers(people):
    assert people.first().id == 1
    assert [m.id for m in people.first(2)] == [1, 2]
    assert [m.id for m in people.initial()] == [1, 2]
    assert [m.id for m in people.rest()] == [2, 3]
    assert people.last().id == 3
    assert [m.id for m in people.last(2)] == [2, 3]
    assert [m.id for m in people.without(people.at(1))] == [1, 3]


def test_index_helpers(people):
    bob = people.at(1)
    assert people.index_of(bob) == 1
    assert people.last_index_of(bob) == 1
    assert people.sorted_index(bob, "id") == 1


def test_shuffle_keeps_members(people):
    shuffled = people.shuffle()
    assert sorted(m.id for m in shuffled) == [1, 2, 3]
    assert people.pluck("id") == [1, 2, 3]


def test_invoke_and_to_json(people):
    assert people.invoke("get", "team") == ["red", "blue", "red"]
    assert people.to_json()[1] == {"id": 2, "name": "bob", "team": "blue", "age": 25}


def test_empty_collection_helpers():
    empty = Collection()
    assert empty.is_empty()
    assert empty.size() == 0
    assert empty.first() is None
    assert empty.max("age") is None
