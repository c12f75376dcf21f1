"""Qt adapters; importing this package requires PySide6."""

from .list_model import CollectionListModel, CollectionRoles

__all__ = ["CollectionListModel", "CollectionRoles"]
