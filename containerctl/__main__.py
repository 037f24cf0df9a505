"""Позволяет запускать утилиту как ``python -m containerctl``."""

from __future__ import annotations

import sys

from containerctl.main import main

if __name__ == "__main__":
    sys.exit(main())
