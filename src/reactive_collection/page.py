"""Tagged result variants exchanged with loaders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence


@dataclass(frozen=True)
class Page:
    """One batch of raw records plus the total available at the source."""

    items: Sequence[Any] = field(default_factory=tuple)
    total: int = 0

    @classmethod
    def from_envelope(cls, envelope: Mapping[str, Any]) -> "Page":
        """Convert a legacy ``{"list": [...], "n": total}`` payload."""

        try:
            items = envelope["list"]
            total = envelope["n"]
        except KeyError as exc:
            raise ValueError(f"not a page envelope, missing {exc.args[0]!r}") from exc
        return cls(items=list(items), total=int(total))


@dataclass(frozen=True)
class Items:
    """A batch of raw records without a known total."""

    items: Sequence[Any] = field(default_factory=tuple)
