from __future__ import annotations

import pytest

from reactive_collection import Collection, Model


class Recorder:
    """Collect ``(name, args)`` pairs from an emitter's catch-all channel."""

    def __init__(self, emitter) -> None:
        self.events = []
        emitter.on("all", self._record)

    def _record(self, event) -> None:
        self.events.append((event.name, event.args))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def of(self, name: str) -> list[tuple]:
        return [args for event_name, args in self.events if event_name == name]


@pytest.fixture
def recorder():
    return Recorder


@pytest.fixture
def collection() -> Collection:
    return Collection()


@pytest.fixture
def make_models():
    def _make(*ids: int) -> list[Model]:
        return [Model({"id": value}) for value in ids]

    return _make
