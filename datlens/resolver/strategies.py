"""
The four category strategies.

SingleObjectResolver          — read the family record, show it
DictionaryCollectionResolver  — read the family record, one row per key
CompositeSubtypeResolver      — like a dictionary, but a subtype is required
RangeCollectionResolver       — header-only listing of the family's id range
"""

from __future__ import annotations

import logging

from datlens.exceptions import RangeQueryFailedError, UnsupportedSubtypeError
from .base import AbstractCategoryResolver, ResolveRequest
from .models import FamilyCategory, ResolutionResult

__all__ = [
    "SingleObjectResolver",
    "DictionaryCollectionResolver",
    "CompositeSubtypeResolver",
    "RangeCollectionResolver",
]

logger = logging.getLogger(__name__)


class SingleObjectResolver(AbstractCategoryResolver):

    @property
    def category(self) -> FamilyCategory:
        return FamilyCategory.SINGLE_OBJECT

    def resolve(self, request: ResolveRequest) -> ResolutionResult:
        if request.identifier.subtype:
            raise UnsupportedSubtypeError(request.descriptor.name, request.identifier.subtype)
        record = self.read_table(request)
        return ResolutionResult.of_record(
            request.identifier,
            record,
            descriptor=request.descriptor,
            status_message=f"Loaded {request.descriptor.name}.",
        )


class DictionaryCollectionResolver(AbstractCategoryResolver):
    """
    Keyed collections.  The default ("") view is used for an empty subtype;
    families with named sub-collections accept those names as well.
    """

    @property
    def category(self) -> FamilyCategory:
        return FamilyCategory.DICTIONARY_COLLECTION

    def resolve(self, request: ResolveRequest) -> ResolutionResult:
        view = self.select_view(request)
        record = self.read_table(request)
        entries = self.project(view, record, request.descriptor.family_id)
        logger.debug(
            "%s/%s: %d entries", request.descriptor.name, view.title, len(entries)
        )
        return ResolutionResult.of_entries(
            request.identifier,
            entries,
            descriptor=request.descriptor,
            status_message=f"{len(entries)} {view.title.lower()}.",
            is_filterable=view.filterable,
            record=record,
        )


class CompositeSubtypeResolver(DictionaryCollectionResolver):
    """
    Tables made of several unrelated sub-collections.  Without a subtype
    there is nothing sensible to list, so the result is a notice naming
    the choices.
    """

    @property
    def category(self) -> FamilyCategory:
        return FamilyCategory.COMPOSITE_SUBTYPES

    def resolve(self, request: ResolveRequest) -> ResolutionResult:
        if not request.identifier.subtype:
            choices = " or ".join(f"'{s}'" for s in request.descriptor.subtypes)
            return ResolutionResult.notice(
                request.identifier,
                f"Select {choices} from the tree.",
                descriptor=request.descriptor,
            )
        return super().resolve(request)


class RangeCollectionResolver(AbstractCategoryResolver):
    """
    A failed range query is contained here: it becomes an ERROR result for
    this family only.
    """

    @property
    def category(self) -> FamilyCategory:
        return FamilyCategory.RANGE_COLLECTION

    def resolve(self, request: ResolveRequest) -> ResolutionResult:
        descriptor = request.descriptor
        if request.identifier.subtype:
            raise UnsupportedSubtypeError(descriptor.name, request.identifier.subtype)

        try:
            entries = request.range_resolver.resolve_range(request.session, descriptor.family_id)
        except RangeQueryFailedError as exc:
            logger.warning("%s", exc)
            return ResolutionResult.failure(request.identifier, exc, descriptor=descriptor)

        if not entries:
            message = f"No files found for {descriptor.name}."
        else:
            message = f"{len(entries)} files. Select one."
        return ResolutionResult.of_entries(
            request.identifier, entries, descriptor=descriptor, status_message=message,
        )
