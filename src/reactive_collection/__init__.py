"""Reactive, ordered model collections with paginated loading."""

from .collection import Collection, LoadOutcome
from .comparators import SortByComparator, SortByKey, as_comparator
from .errors import (
    CollectionError,
    ComparatorMissingError,
    LoaderNotFoundError,
    OptionsValidationError,
    ReactiveCollectionError,
)
from .events import ALL, Event, EventEmitter, EventKind
from .model import Model
from .options import CollectionOptions, build_options
from .page import Items, Page
from .tasks import SequentialTaskQueue

__all__ = [
    "ALL",
    "Collection",
    "CollectionError",
    "CollectionOptions",
    "ComparatorMissingError",
    "Event",
    "EventEmitter",
    "EventKind",
    "Items",
    "LoadOutcome",
    "LoaderNotFoundError",
    "Model",
    "OptionsValidationError",
    "Page",
    "ReactiveCollectionError",
    "SequentialTaskQueue",
    "SortByComparator",
    "SortByKey",
    "as_comparator",
    "build_options",
]
