"""Main entry point for the frc_scheduler package."""

from __future__ import annotations

import logging
import sys

from .cli import app

logger = logging.getLogger(__name__)


def main_cli() -> None:
    """Run the frc_scheduler application from the command line interface."""
    try:
        app()
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)
    except Exception:
        logger.exception("Scheduler process failed unexpectedly.")
        sys.exit(1)


if __name__ == "__main__":
    main_cli()
