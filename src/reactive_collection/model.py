"""Attribute-holding, event-emitting model owned by collections."""

from __future__ import annotations

import itertools
from copy import deepcopy
from typing import Any, Dict, Mapping, Optional, TYPE_CHECKING

from .events import EventEmitter, EventKind

if TYPE_CHECKING:  # pragma: no cover - import only for type checking
    from .collection import Collection

_cid_counter = itertools.count(1)
_MISSING = object()


class Model(EventEmitter):
    """A unit of client state with a stable client id.

    ``cid`` is the identity collections compare by; ``id`` is whatever the
    data source calls the record (``id_attribute``) and may be absent.
    """

    id_attribute: str = "id"
    defaults: Mapping[str, Any] = {}

    def __init__(
        self,
        attributes: Optional[Mapping[str, Any]] = None,
        *,
        collection: Optional["Collection"] = None,
        **options: Any,
    ) -> None:
        super().__init__()
        self.cid = f"c{next(_cid_counter)}"
        self.collection = collection
        self.options = options
        self.attributes: Dict[str, Any] = deepcopy(dict(self.defaults))
        if attributes:
            self.attributes.update(attributes)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(cid={self.cid!r}, attributes={self.attributes!r})"

    @property
    def id(self) -> Any:
        return self.attributes.get(self.id_attribute)

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def has(self, key: str) -> bool:
        return self.attributes.get(key) is not None

    def set(
        self,
        key: str | Mapping[str, Any],
        value: Any = _MISSING,
        *,
        silent: bool = False,
        **options: Any,
    ) -> "Model":
        """Update one attribute, or several from a mapping.

        Emits ``change:<attr>`` for every attribute whose value changed and a
        single ``change`` afterwards.
        """

        if isinstance(key, Mapping):
            updates = dict(key)
        elif value is _MISSING:
            raise TypeError("set() needs a value when called with a single key")
        else:
            updates = {key: value}

        changed = []
        for attr, new_value in updates.items():
            if self.attributes.get(attr, _MISSING) != new_value:
                self.attributes[attr] = new_value
                changed.append(attr)

        if silent or not changed:
            return self
        for attr in changed:
            self.trigger(f"change:{attr}", self, self.attributes[attr], options)
        self.trigger(EventKind.CHANGE, self, options)
        return self

    def unset(self, key: str, *, silent: bool = False, **options: Any) -> "Model":
        if key not in self.attributes:
            return self
        del self.attributes[key]
        if not silent:
            self.trigger(f"change:{key}", self, None, options)
            self.trigger(EventKind.CHANGE, self, options)
        return self

    def destroy(self, **options: Any) -> None:
        """Announce destruction; every collection holding the model drops it."""

        self.trigger(EventKind.DESTROY, self, self.collection, options)

    def to_json(self, **options: Any) -> Dict[str, Any]:
        return deepcopy(self.attributes)
