from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Allow `pytest` to import flux_space directly from the src layout
# without requiring an editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def write_file(tmp_path):
    """Write text to a file under tmp_path and return its path as str."""

    def _write(name: str, text: str) -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write
