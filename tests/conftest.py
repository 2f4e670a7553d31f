"""Pytest configuration for path setup.

The test suite imports the ``pricing`` package from ``pricing/src`` and
the fakes under ``tests/helpers``.  When pytest is executed as an
installed script neither location is automatically on ``sys.path``, so
this file adds the project root and ``pricing/src`` before collection.
"""

from __future__ import annotations

import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]

for path in (ROOT, ROOT / "pricing" / "src"):
    path_str = str(path)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)
