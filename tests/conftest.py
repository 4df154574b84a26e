"""
Shared test fixtures and configuration for aspell-pipe tests.

This module provides common fixtures used across all test types:
- Isolated config directory (never touches ~/.aspell-pipe)
- Scripted fake channel for protocol tests
- Patched subprocess.Popen for session tests
"""

from unittest.mock import patch

import pytest

from aspell_pipe.config_manager import ConfigManager
from tests.mocks.aspell_mock import FakeChannel, make_aspell_process

# ============================================================================
# CONFIG FIXTURES
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point ConfigManager at a temporary directory.

    Tests must never read or modify the real ~/.aspell-pipe/config.toml,
    and environment overrides from the developer's shell must not leak in.
    """
    config_dir = tmp_path / ".aspell-pipe"
    monkeypatch.setattr(ConfigManager, "DEFAULT_CONFIG_DIR", config_dir)
    monkeypatch.setattr(ConfigManager, "DEFAULT_CONFIG_FILE", config_dir / "config.toml")
    monkeypatch.delenv("ASPELL_PIPE_EXECUTABLE", raising=False)
    monkeypatch.delenv("ASPELL_PIPE_READ_TIMEOUT", raising=False)
    return config_dir


# ============================================================================
# ASPELL FIXTURES
# ============================================================================


@pytest.fixture
def fake_channel():
    """Factory for scripted fake channels."""

    def _make(replies=None):
        return FakeChannel(replies)

    return _make


@pytest.fixture
def mock_popen():
    """Patch subprocess.Popen for session lifecycle tests.

    The default process answers the handshake and nothing else.
    """
    with patch("aspell_pipe.session.subprocess.Popen") as popen:
        popen.return_value = make_aspell_process("")
        yield popen
