"""Custom exception hierarchy for reactive_collection."""

from __future__ import annotations


class ReactiveCollectionError(Exception):
    """Base class for all custom errors raised by reactive_collection."""


class CollectionError(ReactiveCollectionError):
    """Base class for errors caused by misusing a collection."""


class ComparatorMissingError(CollectionError):
    """Raised when a collection is sorted without a configured comparator."""


class LoaderNotFoundError(CollectionError):
    """Raised when the configured loader name does not resolve to a callable."""


class OptionsValidationError(ReactiveCollectionError):
    """Raised when collection options fail schema validation."""
