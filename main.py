#!/usr/bin/env python3
"""
ArgZero - first-argument command dispatch with plugin discovery

Development entry point; the installed package provides the ``argzero``
console script.
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from argzero.main import main


if __name__ == "__main__":
    sys.exit(main())
