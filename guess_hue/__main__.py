from __future__ import annotations

import logging
import os
import sys
from pathlib import Path


def _ensure_repo_root_on_path() -> None:
    """Put the repository root on ``sys.path`` when run as a plain script.

    ``python guess_hue/__main__.py`` does not make the package importable by
    itself, so the parent of the package directory is inserted first.
    """
    repo_root_str = str(Path(__file__).resolve().parent.parent)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


try:
    # python -m guess_hue
    from .app import run  # type: ignore[attr-defined]
except ImportError:
    # Executed as a script (IDE "Run Python File", absolute path, etc.)
    _ensure_repo_root_on_path()
    from guess_hue.app import run  # type: ignore[attr-defined]


def main() -> int:
    """Launch the game window."""
    level = logging.DEBUG if os.environ.get("GUESS_HUE_DEBUG") else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
