"""CLI entrypoint for the crossword construction engine."""

from __future__ import annotations

from crossfill.cli import main


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
