# File: tests/__init__.py
"""Test suite for the parking allocator."""

import sys
from pathlib import Path

# Make the src layout importable without installing the package
_SRC = str(Path(__file__).parent.parent / "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)
