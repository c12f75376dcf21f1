"""Generic sequence helpers proxied onto ``Collection.models``.

None of these mutate the collection; ``shuffle`` and ``sort_by`` return new
lists.
"""

from __future__ import annotations

import bisect
import random
from functools import reduce as _reduce
from typing import Any, Callable, Dict, List, Optional, Union

from .model import Model

Iteratee = Union[str, Callable[[Model], Any], None]

_NO_INITIAL = object()


def _iteratee(value: Iteratee) -> Callable[[Model], Any]:
    if value is None:
        return lambda model: model
    if isinstance(value, str):
        return lambda model: model.get(value)
    return value


class SequenceMethods:
    """Mixin; the host class provides ``models``."""

    models: List[Model]

    def each(self, func: Callable[[Model, int], Any]) -> None:
        for index, model in enumerate(list(self.models)):
            func(model, index)

    for_each = each

    def map(self, func: Iteratee) -> List[Any]:
        func = _iteratee(func)
        return [func(model) for model in self.models]

    def reduce(self, func: Callable[[Any, Model], Any], initial: Any = _NO_INITIAL) -> Any:
        if initial is _NO_INITIAL:
            return _reduce(func, self.models)
        return _reduce(func, self.models, initial)

    def reduce_right(self, func: Callable[[Any, Model], Any], initial: Any = _NO_INITIAL) -> Any:
        reversed_models = list(reversed(self.models))
        if initial is _NO_INITIAL:
            return _reduce(func, reversed_models)
        return _reduce(func, reversed_models, initial)

    def find(self, predicate: Callable[[Model], bool]) -> Optional[Model]:
        return next((model for model in self.models if predicate(model)), None)

    detect = find

    def filter(self, predicate: Callable[[Model], bool]) -> List[Model]:
        return [model for model in self.models if predicate(model)]

    select = filter

    def reject(self, predicate: Callable[[Model], bool]) -> List[Model]:
        return [model for model in self.models if not predicate(model)]

    def every(self, predicate: Iteratee = None) -> bool:
        predicate = _iteratee(predicate)
        return all(predicate(model) for model in self.models)

    def some(self, predicate: Iteratee = None) -> bool:
        predicate = _iteratee(predicate)
        return any(predicate(model) for model in self.models)

    def include(self, model: Model) -> bool:
        return any(candidate is model for candidate in self.models)

    contains = include

    def invoke(self, method_name: str, *args: Any, **kwargs: Any) -> List[Any]:
        return [getattr(model, method_name)(*args, **kwargs) for model in self.models]

    def max(self, key: Iteratee = None) -> Optional[Model]:
        if not self.models:
            return None
        return max(self.models, key=_iteratee(key))

    def min(self, key: Iteratee = None) -> Optional[Model]:
        if not self.models:
            return None
        return min(self.models, key=_iteratee(key))

    def sort_by(self, key: Iteratee) -> List[Model]:
        return sorted(self.models, key=_iteratee(key))

    def sorted_index(self, model: Model, key: Iteratee) -> int:
        """Insertion point for *model* that keeps ``sort_by(key)`` order."""
        rank = _iteratee(key)
        ranks = [rank(candidate) for candidate in self.models]
        return bisect.bisect_left(ranks, rank(model))

    def group_by(self, key: Iteratee) -> Dict[Any, List[Model]]:
        rank = _iteratee(key)
        groups: Dict[Any, List[Model]] = {}
        for model in self.models:
            groups.setdefault(rank(model), []).append(model)
        return groups

    def to_list(self) -> List[Model]:
        return list(self.models)

    def size(self) -> int:
        return len(self.models)

    def first(self, n: Optional[int] = None) -> Any:
        if n is None:
            return self.models[0] if self.models else None
        return self.models[:n]

    def initial(self, n: int = 1) -> List[Model]:
        return self.models[: max(0, len(self.models) - n)]

    def rest(self, n: int = 1) -> List[Model]:
        return self.models[n:]

    def last(self, n: Optional[int] = None) -> Any:
        if n is None:
            return self.models[-1] if self.models else None
        return self.models[-n:] if n > 0 else []

    def without(self, *excluded: Model) -> List[Model]:
        return [model for model in self.models if all(model is not other for other in excluded)]

    def index_of(self, model: Model) -> int:
        for index, candidate in enumerate(self.models):
            if candidate is model:
                return index
        return -1

    def last_index_of(self, model: Model) -> int:
        for index in range(len(self.models) - 1, -1, -1):
            if self.models[index] is model:
                return index
        return -1

    def shuffle(self) -> List[Model]:
        return random.sample(self.models, len(self.models))

    def is_empty(self) -> bool:
        return not self.models
