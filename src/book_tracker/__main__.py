from __future__ import annotations

import sys
from typing import List, Optional


def cli(argv: Optional[List[str]] = None) -> int:
    """Point d'entrée du script `book-tracker`; retourne toujours un code de sortie."""
    try:
        from .main import main  # type: ignore
    except Exception as exc:  # pragma: no cover
        sys.stderr.write(f"Failed to import book_tracker.main: {exc}\n")
        return 1

    try:
        return main(argv) or 0
    except KeyboardInterrupt:
        sys.stderr.write("Search interrupted\n")
        return 130
    except SystemExit as se:
        return int(se.code) if isinstance(se.code, int) else 1
    except Exception as exc:  # pragma: no cover
        sys.stderr.write(f"Unhandled error: {exc}\n")
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(cli())
