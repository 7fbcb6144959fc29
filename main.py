from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

# Make sure the 'src' directory is on sys.path so 'breathmon' can be imported
REPO_ROOT = Path(__file__).resolve().parent
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from breathmon.app import main as run_app_main


def main(argv: Sequence[str] | None = None) -> int:
    """Run the headless breathing monitor from a source checkout."""
    return run_app_main(None if argv is None else list(argv))


if __name__ == "__main__":
    sys.exit(main())
