import os
import sys
from pathlib import Path
import pytest
from helpers import mark_by_dir


@pytest.fixture(autouse=True)
def _ensure_src_on_syspath():
    # Add project src/ to sys.path for src-layout imports
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))
    yield


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    # Credentials from a developer's shell or .env must not leak into tests
    for name in ("AIKIDO_CLIENT_ID", "AIKIDO_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("AIKIDO_MCP_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AIKIDO_MCP_DIRECTORIES__HOME", str(tmp_path / "home"))
    monkeypatch.setenv("AIKIDO_MCP_LOGGING__CONSOLE_OUTPUT", "false")
    yield


TESTS = Path(__file__).parent

def pytest_collection_modifyitems(config, items):
    # Mark tests by directory structure
    mark_by_dir(items, TESTS / "aikido_mcp" / "core", pytest.mark.unit)
    mark_by_dir(items, TESTS / "aikido_mcp" / "infra", pytest.mark.integration)
    mark_by_dir(items, TESTS / "aikido_mcp" / "app", pytest.mark.e2e)
    mark_by_dir(items, TESTS / "aikido_mcp" / "shared", pytest.mark.unit)
