"""Qt list model mirroring a :class:`~reactive_collection.Collection`."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, List, Sequence

from PySide6.QtCore import (
    Property,
    QAbstractListModel,
    QModelIndex,
    QObject,
    Qt,
    Signal,
)

from ..collection import Collection
from ..events import EventKind
from ..model import Model
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)


class CollectionRoles(IntEnum):
    """Fixed roles; attribute roles are numbered from ``FIRST_ATTRIBUTE``."""

    ModelRole = Qt.ItemDataRole.UserRole + 1
    CidRole = Qt.ItemDataRole.UserRole + 2
    FIRST_ATTRIBUTE = Qt.ItemDataRole.UserRole + 16


class CollectionListModel(QAbstractListModel):
    """Expose a collection's models to Qt views.

    The model keeps its own row snapshot so that ``begin*``/``end*`` pairs
    always bracket the change Qt sees, even though collection events fire
    after the collection has already been mutated.
    """

    countChanged = Signal()  # noqa: N815

    def __init__(
        self,
        collection: Collection,
        roles: Sequence[str] = (),
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._collection = collection
        self._rows: List[Model] = list(collection.models)
        self._attribute_roles: Dict[int, str] = {
            int(CollectionRoles.FIRST_ATTRIBUTE) + offset: name
            for offset, name in enumerate(roles)
        }
        collection.on(EventKind.ADD, self._on_add)
        collection.on(EventKind.REMOVE, self._on_remove)
        collection.on(EventKind.RESET, self._on_reset)
        collection.on(EventKind.SORT, self._on_reset)
        collection.on(EventKind.CHANGE, self._on_change)

    def dispose(self) -> None:
        """Stop listening to the collection."""

        collection = self._collection
        collection.off(EventKind.ADD, self._on_add)
        collection.off(EventKind.REMOVE, self._on_remove)
        collection.off(EventKind.RESET, self._on_reset)
        collection.off(EventKind.SORT, self._on_reset)
        collection.off(EventKind.CHANGE, self._on_change)

    def collection(self) -> Collection:
        return self._collection

    def roleNames(self) -> dict[int, bytes]:  # noqa: N802  # Qt override
        names = {
            int(Qt.ItemDataRole.DisplayRole): b"display",
            int(CollectionRoles.ModelRole): b"model",
            int(CollectionRoles.CidRole): b"cid",
        }
        for role, name in self._attribute_roles.items():
            names[role] = name.encode("utf-8")
        return names

    def rowCount(self, parent: QModelIndex | None = None) -> int:  # noqa: N802  # Qt override
        if parent is not None and parent.isValid():
            return 0
        return len(self._rows)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        row = index.row()
        if not index.isValid() or row < 0 or row >= len(self._rows):
            return None

        model = self._rows[row]
        if role == Qt.ItemDataRole.DisplayRole:
            return str(model.id if model.id is not None else model.cid)
        if role == CollectionRoles.ModelRole:
            return model
        if role == CollectionRoles.CidRole:
            return model.cid
        name = self._attribute_roles.get(int(role))
        if name is not None:
            return model.get(name)
        return None

    def model_at(self, row: int) -> Model | None:
        if 0 <= row < len(self._rows):
            return self._rows[row]
        return None

    def _get_count(self) -> int:
        return len(self._rows)

    count = Property(int, _get_count, notify=countChanged)

    # ------------------------------------------------------------------
    # Collection event handlers
    # ------------------------------------------------------------------
    def _on_add(self, model: Model, collection: Collection, options: dict) -> None:
        row = min(max(int(options.get("index", len(self._rows))), 0), len(self._rows))
        self.beginInsertRows(QModelIndex(), row, row)
        self._rows.insert(row, model)
        self.endInsertRows()
        self.countChanged.emit()

    def _on_remove(self, model: Model, collection: Collection, options: dict) -> None:
        row = self._row_of(model)
        if row == -1:
            LOGGER.debug("Removed model %s was not mirrored", model.cid)
            return
        self.beginRemoveRows(QModelIndex(), row, row)
        del self._rows[row]
        self.endRemoveRows()
        self.countChanged.emit()

    def _on_reset(self, collection: Collection, options: dict) -> None:
        self.beginResetModel()
        self._rows = list(collection.models)
        self.endResetModel()
        self.countChanged.emit()

    def _on_change(self, model: Model, options: dict) -> None:
        row = self._row_of(model)
        if row == -1:
            return
        model_index = self.index(row, 0)
        self.dataChanged.emit(model_index, model_index, [])

    def _row_of(self, model: Model) -> int:
        for row, candidate in enumerate(self._rows):
            if candidate is model:
                return row
        return -1
