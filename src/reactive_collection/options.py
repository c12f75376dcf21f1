"""Construction options for collections, validated against a JSON schema."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple, Union

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from .errors import OptionsValidationError

OPTIONS_SCHEMA: dict[str, Any] = {
    "$id": "reactive_collection/options.schema.json",
    "type": "object",
    "properties": {
        "loader": {"type": ["string", "null"], "minLength": 1},
        "loader_args": {"type": "array"},
        "start_index": {"type": "integer", "minimum": 0},
        "limit": {"type": "integer", "minimum": 1},
        "models": {},
    },
    "additionalProperties": False,
}

DEFAULT_OPTIONS: dict[str, Any] = {
    "loader": None,
    "loader_args": [],
    "start_index": 0,
    "limit": 10,
    "models": [],
}

_validator = Draft202012Validator(OPTIONS_SCHEMA)


@dataclass
class CollectionOptions:
    """Resolved options of one collection.

    ``start_index`` is the pagination cursor and is advanced by the
    collection after every successful page load.
    """

    loader: Union[str, Callable[..., Any], None] = None
    loader_args: Tuple[Any, ...] = ()
    start_index: int = 0
    limit: int = 10
    models: Any = field(default_factory=list)


def _schema_view(data: Dict[str, Any]) -> Dict[str, Any]:
    # Only the JSON-typed part is schema checked; callables and model
    # instances are not representable in JSON.
    view: Dict[str, Any] = {}
    for key, value in data.items():
        if key == "models":
            view[key] = None
        elif key == "loader" and callable(value):
            view[key] = None
        elif key == "loader_args" and isinstance(value, tuple):
            view[key] = list(value)
        else:
            view[key] = value
    return view


def merge_with_defaults(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_OPTIONS` and validate the result."""

    merged = deepcopy(DEFAULT_OPTIONS)
    if data:
        merged.update(data)
    try:
        _validator.validate(_schema_view(merged))
    except ValidationError as exc:
        location = ".".join(str(part) for part in exc.absolute_path) or "options"
        raise OptionsValidationError(f"{location}: {exc.message}") from exc
    return merged


def build_options(**kwargs: Any) -> CollectionOptions:
    """Return validated :class:`CollectionOptions` for the given keywords."""

    merged = merge_with_defaults(kwargs)
    return CollectionOptions(
        loader=merged["loader"],
        loader_args=tuple(merged["loader_args"]),
        start_index=merged["start_index"],
        limit=merged["limit"],
        models=merged["models"] if merged["models"] is not None else [],
    )


__all__ = [
    "CollectionOptions",
    "DEFAULT_OPTIONS",
    "OPTIONS_SCHEMA",
    "build_options",
    "merge_with_defaults",
]
