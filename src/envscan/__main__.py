# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Entry point for the envscan CLI (run via ``envscan`` or ``python -m envscan``)."""

from __future__ import annotations

import sys


def main() -> None:
    """Run the CLI."""
    try:
        from envscan.cli import cli
    except ImportError:
        sys.stderr.write("envscan CLI dependencies missing. Install with: pip install envscan\n")
        sys.exit(1)
    cli()


if __name__ == "__main__":
    main()
