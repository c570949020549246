"""
CLI entry point for datlens.

Usage
─────
  # Print the family table
  datlens families
  datlens families --kind cell

  # Resolve a family (or a named collection) against a store file
  datlens resolve --db client_portal.db --family 0x0E00000E
  datlens resolve --db client_portal.db --family 0x0E00000E --filter strength
  datlens resolve --db client_portal.db --family 0x0E000002 --subtype StartingAreas
  datlens resolve --db client_portal.db --family 0x05000000 --open 0x05000001
  datlens resolve --db client_cell_1.db --tag LandBlocks

  # Show which cross-reference tables load
  datlens lookups --db client_portal.db

Subcommands are implemented as standalone functions (cmd_families,
cmd_resolve, cmd_lookups) so they can be unit-tested without invoking
argparse.
"""

import argparse
import logging
import sys
from typing import Optional

from datlens.config import EngineConfig, configure_logging
from datlens.exceptions import DatLensError
from datlens.filters.spell_filter import FilterState
from datlens.lookups.builder import LookupContextBuilder
from datlens.resolver.engine import RecordResolver
from datlens.resolver.families import FamilyClassifier, get_classifier
from datlens.resolver.models import (
    FamilyDescriptor,
    FamilyRef,
    ResolutionResult,
    ResultKind,
    TagRef,
)
from datlens.store.db import open_store
from datlens.store.models import StoreKind
from datlens.store.registry import SessionRegistry

__all__ = ["build_parser", "cmd_families", "cmd_resolve", "cmd_lookups", "main"]

logger = logging.getLogger(__name__)


def _u32(text: str) -> int:
    try:
        value = int(text, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from exc
    if not 0 <= value <= 0xFFFFFFFF:
        raise argparse.ArgumentTypeError(f"not a 32-bit id: {text!r}")
    return value


# ── Argument parser ────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Subcommands: families | resolve | lookups
    """
    parser = argparse.ArgumentParser(
        prog="datlens",
        description="Resolve records and cross-references in dat stores",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable verbose debug logging",
    )

    sub = parser.add_subparsers(dest="subcommand")

    # ── families ──────────────────────────────────────────────────────────
    fam = sub.add_parser("families", help="List known record families")
    fam.add_argument(
        "--kind",
        choices=["portal", "cell"],
        default=None,
        help="Only families valid for this store kind",
    )

    # ── resolve ───────────────────────────────────────────────────────────
    res = sub.add_parser("resolve", help="Resolve a family id or named collection")
    res.add_argument(
        "--db",
        required=True,
        metavar="PATH",
        help="Store file to open (read-only)",
    )
    target = res.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--family",
        type=_u32,
        metavar="ID",
        help="Family id, e.g. 0x0E00000E",
    )
    target.add_argument(
        "--tag",
        metavar="NAME",
        help="Named collection, e.g. LandBlocks",
    )
    res.add_argument(
        "--subtype",
        default="",
        metavar="NAME",
        help="Sub-collection of a composite family, e.g. StartingAreas",
    )
    res.add_argument(
        "--open",
        type=_u32,
        default=None,
        dest="open_id",
        metavar="ID",
        help="Materialize this entry of the listing",
    )
    res.add_argument(
        "--filter",
        default="",
        dest="name_filter",
        metavar="TEXT",
        help="Name substring for the spell view",
    )
    res.add_argument(
        "--limit",
        type=int,
        default=50,
        metavar="N",
        help="Print at most N entries (default: 50, 0 = all)",
    )

    # ── lookups ───────────────────────────────────────────────────────────
    look = sub.add_parser("lookups", help="Show cross-reference lookup tables")
    look.add_argument(
        "--db",
        required=True,
        metavar="PATH",
        help="Store file to open (read-only)",
    )

    return parser


# ── Subcommand implementations ────────────────────────────────────────────────


def cmd_families(
    kind: Optional[str] = None,
    classifier: Optional[FamilyClassifier] = None,
) -> list[FamilyDescriptor]:
    """Print the family table to stdout."""
    classifier = classifier or get_classifier()
    store_kind = StoreKind(kind.capitalize()) if kind else None
    descriptors = classifier.descriptors(store_kind)
    for d in descriptors:
        decoder = d.record_type.type_name() if d.has_decoder else "(no decoder)"
        extra = f"  [{', '.join(d.subtypes)}]" if d.subtypes else ""
        print(f"0x{d.family_id:08X}  {d.category.value:<22} {d.name:<20} {decoder}{extra}")
    return descriptors


def cmd_resolve(
    db_path: str,
    family: Optional[int] = None,
    subtype: str = "",
    tag: Optional[str] = None,
    open_id: Optional[int] = None,
    name_filter: str = "",
    limit: int = 50,
    config: Optional[EngineConfig] = None,
) -> ResolutionResult:
    """
    Resolve one identifier against *db_path* and print the outcome.

    Raises StoreOpenError if the file cannot be opened.
    """
    if (family is None) == (tag is None):
        raise ValueError("exactly one of family or tag is required")

    registry = SessionRegistry()
    try:
        session_id = registry.register(open_store(db_path))
        engine = RecordResolver(registry, config=config)
        identifier = (
            TagRef(tag=tag, session_id=session_id) if tag is not None
            else FamilyRef(family_id=family, subtype=subtype, session_id=session_id)
        )
        result = engine.resolve(identifier)
        engine.activate(result)

        if result.is_filterable and name_filter:
            filtered = engine.apply_filter(FilterState(name_substring=name_filter))
            print(filtered.status_message)
            rows = [(key, label) for key, label, _spell in filtered.items]
        else:
            print(result.status_message)
            rows = [(e.id, e.display_label) for e in result.entries]

        if result.kind is ResultKind.RECORD:
            print(repr(result.record))
        shown = rows if limit <= 0 else rows[:limit]
        for _key, label in shown:
            print(f"  {label}")
        if len(shown) < len(rows):
            print(f"  … {len(rows) - len(shown)} more")

        if open_id is not None and result.kind is ResultKind.ENTRIES:
            entry = result.entry(open_id)
            if entry is None:
                print(f"Error: 0x{open_id:08X} is not in this listing", file=sys.stderr)
            else:
                opened = engine.open_entry(identifier, entry)
                if opened.ok:
                    print(repr(opened.record))
                    for cell in opened.entries[:limit] if limit > 0 else opened.entries:
                        print(f"  {cell.display_label}")
                else:
                    print(f"Error: {opened.status_message}", file=sys.stderr)
                result = opened
        return result
    finally:
        registry.close_all()


def cmd_lookups(db_path: str, config: Optional[EngineConfig] = None) -> dict[str, dict[int, str]]:
    """Print the size of every cross-reference table that loads."""
    config = config or EngineConfig()
    registry = SessionRegistry()
    try:
        session = registry.find(registry.register(open_store(db_path)))
        context = LookupContextBuilder(enabled=config.lookup_sources).build(session)
    finally:
        registry.close_all()

    if not context:
        print("No lookup tables available.")
    for key in config.lookup_sources:
        if key in context:
            print(f"{key:<16} {len(context[key])} names")
        else:
            print(f"{key:<16} unavailable")
    return context


# ── Entry point ───────────────────────────────────────────────────────────────


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point. Returns exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)

    config = EngineConfig.from_env()
    configure_logging(config, debug=ns.debug)

    if ns.subcommand is None:
        parser.print_help()
        return 0

    if ns.subcommand == "families":
        cmd_families(kind=ns.kind)
        return 0

    try:
        if ns.subcommand == "resolve":
            result = cmd_resolve(
                db_path=ns.db,
                family=ns.family,
                subtype=ns.subtype,
                tag=ns.tag,
                open_id=ns.open_id,
                name_filter=ns.name_filter,
                limit=ns.limit,
                config=config,
            )
            return 0 if result.ok else 1

        if ns.subcommand == "lookups":
            cmd_lookups(db_path=ns.db, config=config)
            return 0
    except DatLensError as exc:
        logger.debug("%s failed", ns.subcommand, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
