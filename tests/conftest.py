"""
Shared test fixtures.

Provides: fake embedders, a temporary assets tree holding the default
catalog's images, and empty output / store locations under tmp_path.
"""

from pathlib import Path
from typing import Callable

import pytest

from multimodal_search.catalog import DEFAULT_CATALOG
from tests.fakes import FakeEmbedder


@pytest.fixture
def make_embedder() -> Callable[..., FakeEmbedder]:
    """Provide a factory for fake embedders, optionally failing on a given call."""
    return FakeEmbedder


@pytest.fixture
def fake_embedder(make_embedder: Callable[..., FakeEmbedder]) -> FakeEmbedder:
    """Provide a fresh fake embedder that records its calls."""
    return make_embedder()


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    """Provide an assets directory with a small file for every default catalog image."""
    root = tmp_path / "assets"
    for rel in DEFAULT_CATALOG.images:
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(f"{Path(rel).stem} image \x00\xff".encode("latin-1"))
    return root


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Provide an existing, empty output directory."""
    out = tmp_path / "output"
    out.mkdir()
    return out


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    """Provide a store location that does not exist yet."""
    return tmp_path / "vector_store"
