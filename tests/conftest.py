"""
Pytest configuration and shared fixtures for all sceneimport tests.

Every test gets its own DataDirectories so that nothing touches the
process-wide directory list, and the ambient active builder is reset afterwards.
"""

import sys
import textwrap
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from sceneimport.importer.context_stack import set_active_builder
from sceneimport.importer.search_paths import DataDirectories
from sceneimport.importer.session import ImportSession
from sceneimport.scene.builder import SceneBuilder


# =============================================================================
# Function-scoped fixtures (default - one per test)
# =============================================================================

@pytest.fixture
def data_dirs():
    """Empty, test-local data directory list."""
    return DataDirectories()


@pytest.fixture
def session(data_dirs):
    return ImportSession(data_dirs)


@pytest.fixture
def builder(data_dirs):
    return SceneBuilder(data_directories=data_dirs)


@pytest.fixture
def write_scene(tmp_path):
    """
    Write a scene script under tmp_path and return its absolute path.

    Usage:
        def test_something(write_scene):
            path = write_scene("scenes/a.pyscene", "sceneBuilder.add_node('a')")
    """
    def _write(relative: str, body: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(body).lstrip("\n"), encoding="utf-8")
        return path
    return _write


# =============================================================================
# Test execution hooks
# =============================================================================

@pytest.fixture(autouse=True)
def reset_active_builder():
    """Clear the legacy ambient builder so a failing test cannot leak it."""
    yield
    set_active_builder(None)


def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
