"""
Tests for PathResolver: absolute-only import paths and directory extraction.
"""

import pytest
from pathlib import Path

from sceneimport.importer.path_resolver import PathResolver, normalize_path, same_path
from sceneimport.shared.errors import InvalidPathError


class TestPathResolver:
    def test_absolute_path_resolves_to_parent_directory(self):
        resolved = PathResolver().resolve("/scenes/a.pyscene")
        assert resolved.is_absolute
        assert resolved.path == Path("/scenes/a.pyscene")
        assert resolved.directory == Path("/scenes")

    def test_relative_path_is_rejected(self):
        """Relative paths are never resolved against the working directory."""
        with pytest.raises(InvalidPathError) as exc_info:
            PathResolver().resolve("scenes/a.pyscene")
        assert exc_info.value.path == Path("scenes/a.pyscene")
        assert "absolute" in exc_info.value.message

    def test_path_is_normalized(self):
        resolved = PathResolver().resolve("/scenes/nested/../a.pyscene")
        assert resolved.path == Path("/scenes/a.pyscene")
        assert resolved.directory == Path("/scenes")

    def test_is_absolute_does_not_raise(self):
        resolver = PathResolver()
        assert resolver.is_absolute("/x/y.pyscene")
        assert not resolver.is_absolute("y.pyscene")


class TestPathHelpers:
    def test_normalize_collapses_separators_and_dots(self):
        assert normalize_path("/a//b/./c") == Path("/a/b/c")

    def test_same_path_ignores_lexical_differences(self):
        assert same_path("/data/scenes", "/data/scenes/")
        assert same_path("/data/x/../scenes", Path("/data/scenes"))
        assert not same_path("/data/scenes", "/data/other")
