"""Configure pytest."""

import sys
from pathlib import Path
from typing import Callable, Iterable

import pytest

# Add src directory to Python path so tests run without an editable install
src_path = str(Path(__file__).parent / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)


@pytest.fixture()
def make_tree(tmp_path: Path) -> Callable[[Iterable[str]], Path]:
    """Return a factory creating empty files (relative paths) under a temp root."""

    def _make(paths: Iterable[str]) -> Path:
        root = tmp_path / "src"
        root.mkdir(exist_ok=True)
        for rel in paths:
            p = root / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(b"")
        return root

    return _make
