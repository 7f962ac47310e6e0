"""Root conftest: ensure the checkout's src is first in sys.path."""
import sys
from pathlib import Path

# Keep this checkout's src ahead of any installed ffvumeter
# so that an older editable install doesn't shadow it.
_src = str(Path(__file__).parent / "src")
if _src not in sys.path:
    sys.path.insert(0, _src)
