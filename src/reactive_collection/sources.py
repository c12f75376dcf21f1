"""File-backed data source and the collection that pages through it."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from .collection import Collection
from .page import Page
from .utils.logging import get_logger

LOGGER = get_logger(__name__)


class JsonFileSource:
    """Serve slices of a JSON file holding a list of records.

    A legacy ``{"list": [...], "n": total}`` envelope is accepted too; its
    ``list`` is used as the record list.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._records: Optional[List[Dict[str, Any]]] = None

    def records(self) -> List[Dict[str, Any]]:
        if self._records is None:
            with self.path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
            if isinstance(payload, dict) and "list" in payload and "n" in payload:
                payload = list(Page.from_envelope(payload).items)
            if not isinstance(payload, list) or not all(isinstance(row, dict) for row in payload):
                raise ValueError(f"{self.path} must contain a list of JSON objects")
            self._records = payload
            LOGGER.debug("Read %d records from %s", len(payload), self.path)
        return self._records

    def count(self) -> int:
        return len(self.records())

    async def fetch(self, start: int, limit: int) -> Page:
        records = self.records()
        return Page(items=records[start : start + limit], total=len(records))


class SourceCollection(Collection):
    """Collection whose ``get_more`` reads the next slice of a source."""

    def __init__(self, source: JsonFileSource, **options: Any) -> None:
        self.source = source
        options.setdefault("loader", "load_page")
        super().__init__(**options)

    async def load_page(self) -> Page:
        return await self.source.fetch(self.options.start_index, self.options.limit)
