"""Starts the interactive RCON console with repository-relative imports."""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> int:
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))

    # Lazy import after adjusting sys.path
    from webrcon.console import main as console_main  # type: ignore

    return console_main()


if __name__ == "__main__":
    sys.exit(main())
