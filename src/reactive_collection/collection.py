"""Ordered, sorted, event re-broadcasting collection of models.

The collection is the single owner of its ``models`` list. Structural
changes go through :meth:`Collection.add`, :meth:`Collection.remove` and
:meth:`Collection.reset`; paginated growth goes through
:meth:`Collection.get_more`, which serializes loader calls on the
collection's private :class:`~reactive_collection.tasks.SequentialTaskQueue`.
"""

from __future__ import annotations

import asyncio
import inspect
from enum import Enum
from typing import Any, Callable, Iterator, List, Mapping, Optional, Sequence, Tuple, Type

from .comparators import Comparator, as_comparator
from .errors import ComparatorMissingError, LoaderNotFoundError
from .events import ALL, Event, EventEmitter, EventKind
from .model import Model
from .options import CollectionOptions, build_options
from .page import Items, Page
from .sequence import SequenceMethods
from .tasks import SequentialTaskQueue
from .utils.logging import get_logger

LOGGER = get_logger(__name__)


class LoadOutcome(str, Enum):
    """How a queued ``get_more`` unit finished without raising."""

    LOADED = "loaded"
    EXHAUSTED = "exhausted"
    NO_LOADER = "no_loader"


def _is_batch(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


class Collection(SequenceMethods, EventEmitter):
    """A list of :class:`Model` kept unique by ``cid`` and optionally sorted.

    Subclasses may override ``model`` and ``comparator`` and define loader
    coroutines referenced by name through the ``loader`` option::

        class Photos(Collection):
            comparator = SortByKey("taken_at")

            async def fetch_page(self, album_id):
                rows, total = await api.photos(
                    album_id, self.options.start_index, self.options.limit
                )
                return Page(rows, total)

        photos = Photos(loader="fetch_page", loader_args=("a1",), limit=50)
        await photos.get_more()
    """

    model: Type[Model] = Model
    comparator: Optional[Comparator] = None

    def __init__(
        self,
        models: Any = None,
        *,
        model: Optional[Type[Model]] = None,
        comparator: Any = None,
        **options: Any,
    ) -> None:
        super().__init__()
        if model is not None:
            self.model = model
        self.comparator = as_comparator(
            comparator if comparator is not None else type(self).comparator
        )
        if models is not None:
            options["models"] = models
        self.options: CollectionOptions = build_options(**options)
        self.queue = SequentialTaskQueue(name=f"{type(self).__name__}.queue")
        self.is_loading = False
        self.models: List[Model] = []
        self._total_count: Optional[int] = None
        start_index = self.options.start_index
        self.reset(self.options.models or [], silent=True)
        self.options.start_index = start_index

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(count={self.count()}, "
            f"total_count={self.total_count()}, start_index={self.options.start_index})"
        )

    def __len__(self) -> int:
        return len(self.models)

    def __iter__(self) -> Iterator[Model]:
        return iter(list(self.models))

    def __getitem__(self, index):
        return self.models[index]

    def __contains__(self, obj: Any) -> bool:
        return self.get(obj) is not None

    # ------------------------------------------------------------------
    # Mutation protocol
    # ------------------------------------------------------------------
    def add(
        self,
        models: Any,
        *,
        at: Optional[int] = None,
        silent: bool = False,
        **options: Any,
    ) -> "Collection":
        """Insert a record, a model, a batch of either, a ``Page`` or ``Items``.

        Each inserted model fires ``add(model, collection, options)`` with
        ``options["index"]`` set to its insertion position, followed by a
        ``sort`` event when a comparator is configured. Silent adds fire
        nothing but still keep the comparator order.

        Every element is checked before the first one is inserted: a batch
        holding anything other than mappings and models raises ``TypeError``
        and leaves the collection and its total count untouched.
        """

        staged, total = self._stage(models)
        if total is not None:
            self._total_count = total
        inserted = 0
        for model in staged:
            position = None if at is None else at + inserted
            inserted += 1 if self._add_one(model, position, silent, options) else 0
        if silent and self.comparator is not None:
            self._sort_models()
        return self

    def remove(self, models: Any, *, silent: bool = False, **options: Any) -> "Collection":
        """Remove models given as instances, client ids or a batch of those.

        Ids and raw records are not resolved; look them up with :meth:`get`
        first.
        """

        if _is_batch(models):
            for item in list(models):
                self.remove(item, silent=silent, **options)
            return self

        model = self._owned(models)
        if model is None:
            LOGGER.debug("remove(%r): not in %r", models, self)
            return self

        index = self._index_of_cid(model.cid)
        del self.models[index]
        if self._total_count is not None:
            self._total_count = max(0, self._total_count - 1)
        if not silent:
            model.trigger(EventKind.REMOVE, model, self, dict(options, index=index), source=self)
        self._release(model)
        return self

    def reset(self, models: Any = None, *, silent: bool = False, **options: Any) -> "Collection":
        """Replace the whole contents and rewind pagination.

        Fires a single ``reset(collection, options)`` event instead of
        per-model ``add`` events. A ``Page`` sets the known total count;
        anything else leaves it unknown.
        """

        staged, total = self._stage(models if models is not None else [])
        self.options.start_index = 0
        self._total_count = total
        for model in self.models:
            self._release(model)
        self.models = []
        self.add(staged, silent=True, **options)
        if not silent:
            self.trigger(EventKind.RESET, self, dict(options))
        return self

    def push(self, model: Any, **options: Any) -> Model:
        model = self._prepare_model(model)
        self.add(model, **options)
        return model

    def pop(self, **options: Any) -> Optional[Model]:
        model = self.at(len(self.models) - 1)
        if model is not None:
            self.remove(model, **options)
        return model

    def unshift(self, model: Any, **options: Any) -> Model:
        model = self._prepare_model(model)
        options["at"] = 0
        self.add(model, **options)
        return model

    def shift(self, **options: Any) -> Optional[Model]:
        model = self.at(0)
        if model is not None:
            self.remove(model, **options)
        return model

    def sort(self, *, silent: bool = False, **options: Any) -> "Collection":
        if self.comparator is None:
            raise ComparatorMissingError("Cannot sort a collection without a comparator")
        self._sort_models()
        if not silent:
            self.trigger(EventKind.SORT, self, dict(options))
        return self

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def at(self, index: int) -> Optional[Model]:
        if -len(self.models) <= index < len(self.models):
            return self.models[index]
        return None

    def get(self, obj: Any) -> Optional[Model]:
        """Look a model up by instance, client id, id or raw record."""

        if obj is None:
            return None
        if isinstance(obj, Model):
            return obj if self._index_of_cid(obj.cid) != -1 else None
        if isinstance(obj, Mapping):
            obj = obj.get(self.model.id_attribute)
            if obj is None:
                return None
        for model in self.models:
            if model.cid == obj or (model.id is not None and model.id == obj):
                return model
        return None

    def where(self, **attrs: Any) -> List[Model]:
        if not attrs:
            return []
        return [
            model
            for model in self.models
            if all(model.get(key) == value for key, value in attrs.items())
        ]

    def find_where(self, **attrs: Any) -> Optional[Model]:
        matches = self.where(**attrs)
        return matches[0] if matches else None

    def pluck(self, attr: str) -> List[Any]:
        return [model.get(attr) for model in self.models]

    def to_json(self, **options: Any) -> List[Any]:
        return [model.to_json(**options) for model in self.models]

    # ------------------------------------------------------------------
    # Counts and pagination
    # ------------------------------------------------------------------
    def count(self) -> int:
        return len(self.models)

    def total_count(self) -> int:
        """Items available at the source; the loaded count while unknown."""
        if self._total_count is None:
            return self.count()
        return self._total_count

    def has_more(self) -> int:
        return self.total_count() - self.count()

    def get_more(self, *, refresh: bool = False) -> "asyncio.Task[LoadOutcome]":
        """Queue one page load; the task resolves to a :class:`LoadOutcome`.

        Loader errors propagate through the returned task and leave
        ``options.start_index`` untouched so the same page can be retried.
        """

        return self.queue.defer(self._load_more, refresh)

    def refresh(self) -> "asyncio.Task[LoadOutcome]":
        return self.get_more(refresh=True)

    async def _load_more(self, refresh: bool) -> LoadOutcome:
        if self.options.loader is None:
            return LoadOutcome.NO_LOADER
        loader = self._resolve_loader(self.options.loader)

        if refresh:
            self.reset([])

        if not (self._total_count is None or self.has_more() > 0 or refresh):
            LOGGER.debug("%r: nothing more to load", self)
            return LoadOutcome.EXHAUSTED

        start_index = self.options.start_index
        self._set_loading(True)
        try:
            result = loader(*self.options.loader_args)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            LOGGER.error("Loader failed at start_index %d: %s", start_index, exc)
            raise
        finally:
            self._set_loading(False)

        if result is not None:
            try:
                self.add(result)
            except TypeError as exc:
                LOGGER.error("Rejected loader result at start_index %d: %s", start_index, exc)
                raise
        # A reset while the loader ran rewinds the cursor; advance from there.
        self.options.start_index += self.options.limit
        LOGGER.debug("%r: loaded page at %d", self, start_index)
        return LoadOutcome.LOADED

    def _set_loading(self, value: bool) -> None:
        if self.is_loading == value:
            return
        self.is_loading = value
        self.trigger(EventKind.LOADING, self, value)

    def _resolve_loader(self, loader: Any) -> Callable[..., Any]:
        if callable(loader):
            return loader
        method = getattr(self, loader, None)
        if not callable(method):
            raise LoaderNotFoundError(f"{type(self).__name__} has no loader named {loader!r}")
        return method

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _stage(self, value: Any) -> Tuple[List[Model], Optional[int]]:
        """Flatten *value* into models in insertion order, plus a ``Page`` total.

        Raises ``TypeError`` on the first element that is neither a mapping
        nor a :class:`Model`, before anything has been inserted.
        """

        total = None
        staged: List[Model] = []
        pending = [value]
        while pending:
            item = pending.pop()
            if isinstance(item, Page):
                total = item.total
                pending.extend(reversed(list(item.items)))
            elif isinstance(item, Items):
                pending.extend(reversed(list(item.items)))
            elif _is_batch(item):
                pending.extend(reversed(list(item)))
            elif isinstance(item, Model):
                staged.append(item)
            elif isinstance(item, Mapping):
                staged.append(self.model(item, collection=self))
            else:
                raise TypeError(
                    f"cannot add {item!r} to {type(self).__name__}; expected a mapping or Model"
                )
        return staged, total

    def _add_one(self, item: Any, at: Optional[int], silent: bool, options: dict) -> bool:
        model = self._prepare_model(item)
        if self._index_of_cid(model.cid) != -1:
            LOGGER.warning("%r already holds %s; not adding it twice", self, model.cid)
            return False

        model.on(ALL, self._on_model_event)
        index = self._insert_position(at)
        self.models.insert(index, model)

        if silent:
            return True
        model.trigger(EventKind.ADD, model, self, dict(options, index=index), source=self)
        if self.comparator is not None:
            self.sort()
        return True

    def _insert_position(self, at: Optional[int]) -> int:
        size = len(self.models)
        if at is None:
            return size
        if at < 0:
            return max(0, size + at)
        return min(at, size)

    def _prepare_model(self, item: Any) -> Model:
        if isinstance(item, Model):
            if item.collection is None:
                item.collection = self
            return item
        if not isinstance(item, Mapping):
            raise TypeError(f"cannot add {item!r} to {type(self).__name__}; expected a mapping or Model")
        return self.model(item, collection=self)

    def _release(self, model: Model) -> None:
        if model.is_listening(ALL, self._on_model_event):
            model.off(ALL, self._on_model_event)
        if model.collection is self:
            model.collection = None

    def _sort_models(self) -> None:
        self.models = self.comparator.sort(self.models)

    def _owned(self, obj: Any) -> Optional[Model]:
        if isinstance(obj, Model):
            index = self._index_of_cid(obj.cid)
        elif isinstance(obj, str):
            index = self._index_of_cid(obj)
        else:
            return None
        return self.models[index] if index != -1 else None

    def _index_of_cid(self, cid: str) -> int:
        for index, model in enumerate(self.models):
            if model.cid == cid:
                return index
        return -1

    def _on_model_event(self, event: Event) -> None:
        # add/remove bubbling from another collection holding the same model
        if event.name in (EventKind.ADD, EventKind.REMOVE) and event.source is not self:
            return
        if event.name == EventKind.DESTROY and isinstance(event.origin, Model):
            options = event.args[2] if len(event.args) > 2 else None
            self.remove(event.origin, **(options if isinstance(options, dict) else {}))
        self.dispatch(event)
