"""Root-level conftest.py: make the working tree importable.

Puts this checkout first on sys.path so the tests exercise the local dri
package (and can import tests.helpers) even when another copy of dri is
installed.
"""

import sys
from pathlib import Path

_root = str(Path(__file__).parent)
if _root not in sys.path:
    sys.path.insert(0, _root)
