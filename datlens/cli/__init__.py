"""
cli — command-line interface for datlens.

Entry points
────────────
  python -m datlens   (via datlens/__main__.py)
  datlens             (via pyproject.toml [project.scripts])

Subcommands: families | resolve | lookups
"""

from datlens.cli.main import build_parser, cmd_families, cmd_lookups, cmd_resolve, main

__all__ = ["build_parser", "cmd_families", "cmd_lookups", "cmd_resolve", "main"]
