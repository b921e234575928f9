"""Make the checkout importable when pytest runs without an installed package.

With a plain ``pytest`` invocation the repository root may be missing from
``sys.path``; prepend it so ``import fxbrowser`` picks up the working tree.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = str(Path(__file__).resolve().parents[1])

if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)
