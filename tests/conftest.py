"""
Pytest configuration for shadowcore tests.
Adds the project root (for tests.test_fixtures) and src/ (for running
without an editable install) to sys.path.
"""
import sys
from pathlib import Path

_project_root = Path(__file__).parent.parent
for path in (_project_root, _project_root / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
