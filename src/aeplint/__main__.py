# SPDX-License-Identifier: MIT
"""Package entry point — run aeplint via `python -m aeplint`."""

import sys

from aeplint.cli import main

if __name__ == "__main__":
    sys.exit(main())
