"""Pytest configuration to make the project root importable.

This ensures that ``import mpxscan`` works when tests are run from the
repository root or other locations without installing the package.
"""

import os
import sys

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
