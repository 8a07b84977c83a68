from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.extension_builder import ExtensionBuilder


@pytest.fixture
def extension_builder(tmp_path: Path) -> ExtensionBuilder:
    """Provide a reusable extension builder rooted at the pytest tmp_path."""
    return ExtensionBuilder(tmp_path)
