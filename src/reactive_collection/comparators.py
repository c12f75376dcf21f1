"""Sort configuration variants for collections."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, List, Sequence, Union

from .model import Model


def _ranker(key: Union[str, Callable[[Model], Any]]) -> Callable[[Model], Any]:
    if isinstance(key, str):
        return lambda model: model.get(key)
    return key


@dataclass(frozen=True)
class SortByKey:
    """Ascending order of a single rank per model.

    *key* is an attribute name or a ``(model) -> rank`` callable. Models
    whose rank is ``None`` are placed after the ranked ones.
    """

    key: Union[str, Callable[[Model], Any]]

    def sort(self, models: Sequence[Model]) -> List[Model]:
        rank = _ranker(self.key)

        def sort_key(model: Model) -> tuple:
            value = rank(model)
            return (value is None, value if value is not None else 0)

        return sorted(models, key=sort_key)


@dataclass(frozen=True)
class SortByComparator:
    """Pairwise ordering with a ``(a, b) -> int`` function."""

    compare: Callable[[Model, Model], int]

    def sort(self, models: Sequence[Model]) -> List[Model]:
        return sorted(models, key=cmp_to_key(self.compare))


Comparator = Union[SortByKey, SortByComparator]


def as_comparator(value: Any) -> Comparator | None:
    """Normalise a comparator setting; a bare string names a sort attribute."""

    if value is None or isinstance(value, (SortByKey, SortByComparator)):
        return value
    if isinstance(value, str):
        return SortByKey(value)
    raise TypeError(
        f"comparator must be SortByKey, SortByComparator or an attribute name, not {value!r}"
    )
