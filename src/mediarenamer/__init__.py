"""
Metadata-driven renaming for media libraries.

Renames series folders, season folders, movie folders and episode files so
their names follow naming templates filled from library metadata. Renames are
idempotent (a correct name is left alone), never overwrite an occupied name,
and are verified after they happen.

The module is organized into two packages:
- rename: template rendering, filename heuristics, provider-id reconciliation
  and the rename executor.
- utils: constants and env-driven settings, structured logging, and the
  filename sanitizer with the filesystem port.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
