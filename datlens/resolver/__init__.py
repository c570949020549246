"""
Record resolution — from a navigation identifier to typed data.

The store only offers exact-id reads and id-range header listings, so
family classification, range dispatch, deferred loading and named
collections are all built here on top of those two calls.
"""

from .base import AbstractCategoryResolver, ResolveRequest
from .collections import CollectionResolver
from .engine import RecordResolver
from .factory import get_resolver
from .families import BUILTIN_FAMILIES, FamilyClassifier, get_classifier
from .materializer import LazyMaterializer
from .models import (
    CollectionView,
    FamilyCategory,
    FamilyDescriptor,
    FamilyRef,
    NavigationIdentifier,
    RangeEntry,
    ResolutionResult,
    ResultKind,
    SelectionContext,
    TagRef,
    ViewOrder,
)
from .range_resolver import RangeResolver
from .strategies import (
    CompositeSubtypeResolver,
    DictionaryCollectionResolver,
    RangeCollectionResolver,
    SingleObjectResolver,
)

__all__ = [
    "AbstractCategoryResolver",
    "ResolveRequest",
    "CollectionResolver",
    "RecordResolver",
    "get_resolver",
    "BUILTIN_FAMILIES",
    "FamilyClassifier",
    "get_classifier",
    "LazyMaterializer",
    "CollectionView",
    "FamilyCategory",
    "FamilyDescriptor",
    "FamilyRef",
    "NavigationIdentifier",
    "RangeEntry",
    "ResolutionResult",
    "ResultKind",
    "SelectionContext",
    "TagRef",
    "ViewOrder",
    "RangeResolver",
    "CompositeSubtypeResolver",
    "DictionaryCollectionResolver",
    "RangeCollectionResolver",
    "SingleObjectResolver",
]
