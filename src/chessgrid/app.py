"""Application entry point."""

from __future__ import annotations

import logging
import sys


def main() -> None:
    """Launch the Chessgrid desktop window."""
    from chessgrid.ui.bootstrap import run_application

    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s"
    )
    sys.exit(run_application())


if __name__ == "__main__":
    main()
