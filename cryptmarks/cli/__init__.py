"""
cli — command-line interface for cryptmarks.

Entry points
────────────
  python -m cryptmarks   (via cryptmarks/__main__.py)
  cryptmarks             (via pyproject.toml [project.scripts])

Subcommands: init | list | add | delete | edit | urls | gui
"""

from cryptmarks.cli.main import build_parser, cmd_list, cmd_add, main

__all__ = ["build_parser", "cmd_list", "cmd_add", "main"]
