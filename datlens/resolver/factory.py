"""Factory function — returns the strategy for a given family category."""

from __future__ import annotations

from .base import AbstractCategoryResolver
from .models import FamilyCategory
from .strategies import (
    CompositeSubtypeResolver,
    DictionaryCollectionResolver,
    RangeCollectionResolver,
    SingleObjectResolver,
)

__all__ = ["get_resolver"]

_RESOLVER_MAP: dict[FamilyCategory, AbstractCategoryResolver] = {
    FamilyCategory.SINGLE_OBJECT:         SingleObjectResolver(),
    FamilyCategory.DICTIONARY_COLLECTION: DictionaryCollectionResolver(),
    FamilyCategory.COMPOSITE_SUBTYPES:    CompositeSubtypeResolver(),
    FamilyCategory.RANGE_COLLECTION:      RangeCollectionResolver(),
}


def get_resolver(category: FamilyCategory) -> AbstractCategoryResolver:
    """
    Return the shared strategy instance for *category*.

    The category set is closed; there is no fallback strategy.

    Raises
    ------
    ValueError if *category* has no strategy.
    """
    try:
        return _RESOLVER_MAP[FamilyCategory(category)]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"No resolver for family category {category!r}") from exc
