# tests/conftest.py
import sys
from pathlib import Path

# Make the src/ layout importable when the package is not installed
SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
