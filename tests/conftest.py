"""Shared test fixtures."""

from pathlib import Path

import pytest
from fileserve.config import Config, ListenAddress, ServerConfig, StaticConfig


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """Create the served root directory.

    Use exist_ok=True to allow other fixtures to also create it.
    """
    root = tmp_path / "static"
    root.mkdir(exist_ok=True)
    return root


@pytest.fixture
def test_config(static_dir: Path) -> Config:
    """Create a test configuration serving static_dir on an ephemeral port."""
    return Config(
        server=ServerConfig(listen_addr=ListenAddress(host="127.0.0.1", port=0)),
        static=StaticConfig(root_dir=static_dir),
    )
