from pathlib import Path

import pytest
from loguru import logger

from podpatcher.models import MARKER_FILES


@pytest.fixture
def pod_dir(tmp_path: Path) -> Path:
    """A valid installation root with marker files at different depths."""
    root = tmp_path / "Path Of Diablo"
    (root / "launcher").mkdir(parents=True)
    (root / "launcher" / MARKER_FILES[0]).write_bytes(b"launcher")
    for name in MARKER_FILES[1:]:
        (root / name).write_bytes(b"exe")
    return root


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger.remove()
