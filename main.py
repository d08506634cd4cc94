"""
SellerHub Entry Point.

Runs the seller command-line interface.  All wiring happens in
:func:`sellerhub.container.create_container`; this module only handles
process-level concerns.

Usage::

    python main.py list
    python main.py search --by location_title tehran
"""

from __future__ import annotations

import sys
import traceback

from sellerhub.cli import main as cli_main


def _report_fatal_error(exc: BaseException) -> None:
    """Write an unexpected error and its traceback to stderr."""
    detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    sys.stderr.write(f"FATAL: {type(exc).__name__}: {exc}\n{detail}")


if __name__ == "__main__":
    try:
        cli_main(prog_name="sellerhub")
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as exc:
        _report_fatal_error(exc)
        sys.exit(1)
