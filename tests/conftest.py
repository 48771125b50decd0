from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.symbols import ACME_MANIFEST, LibraryBuilder


@pytest.fixture
def library(tmp_path: Path) -> LibraryBuilder:
    """Provide a manifest tree holding the Acme example library."""
    builder = LibraryBuilder(tmp_path)
    builder.write({"Library/acme.symbols.yml": ACME_MANIFEST})
    return builder
