"""
Tests for DataDirectories (directory visibility) and SearchPathRegistry
(reference-counted directory stack of open import scopes).
"""

import pytest

from sceneimport.importer.search_paths import DataDirectories, SearchPathRegistry
from sceneimport.shared.errors import ImportScopeError


@pytest.fixture
def dirs(tmp_path):
    out = {}
    for name in ("d", "e", "f"):
        p = tmp_path / name
        p.mkdir()
        out[name] = p
    return out


class TestDataDirectories:
    def test_priority_insertion(self, dirs):
        data = DataDirectories()
        assert data.add_data_directory(dirs["d"])
        assert data.add_data_directory(dirs["e"], high_priority=True)
        assert data.directories == [dirs["e"], dirs["d"]]

    def test_duplicate_add_moves_to_front_only_when_high_priority(self, dirs):
        data = DataDirectories([dirs["d"], dirs["e"]])
        assert not data.add_data_directory(dirs["e"])
        assert data.directories == [dirs["d"], dirs["e"]]
        assert not data.add_data_directory(dirs["e"], high_priority=True)
        assert data.directories == [dirs["e"], dirs["d"]]

    def test_remove(self, dirs):
        data = DataDirectories([dirs["d"]])
        assert data.remove_data_directory(dirs["d"] / ".")
        assert not data.remove_data_directory(dirs["d"])
        assert len(data) == 0

    def test_relative_directory_rejected(self):
        with pytest.raises(ValueError):
            DataDirectories().add_data_directory("relative/dir")

    def test_find_file_respects_priority(self, dirs):
        (dirs["d"] / "x.pyscene").write_text("", encoding="utf-8")
        (dirs["e"] / "x.pyscene").write_text("", encoding="utf-8")
        data = DataDirectories([dirs["d"], dirs["e"]])
        assert data.find_file("x.pyscene") == dirs["d"] / "x.pyscene"
        data.add_data_directory(dirs["e"], high_priority=True)
        assert data.find_file("x.pyscene") == dirs["e"] / "x.pyscene"
        assert data.find_file("missing.pyscene") is None


class TestSearchPathRegistry:
    def test_push_prepends_and_pop_evicts(self, dirs):
        data = DataDirectories([dirs["f"]])
        registry = SearchPathRegistry(data)
        registry.push(dirs["d"])
        assert data.directories == [dirs["d"], dirs["f"]]
        registry.pop(dirs["d"])
        assert data.directories == [dirs["f"]]
        assert len(registry) == 0

    def test_shared_directory_survives_inner_pop(self, dirs):
        """A nested scope in the same directory must not evict it for its parent."""
        data = DataDirectories()
        registry = SearchPathRegistry(data)
        registry.push(dirs["d"])
        registry.push(dirs["d"])
        assert registry.references(dirs["d"]) == 2
        registry.pop(dirs["d"])
        assert dirs["d"] in data
        registry.pop(dirs["d"])
        assert dirs["d"] not in data

    def test_reference_count_is_position_independent(self, dirs):
        data = DataDirectories()
        registry = SearchPathRegistry(data)
        registry.push(dirs["d"])
        registry.push(dirs["e"])
        registry.push(dirs["d"])
        assert data.directories[0] == dirs["d"]
        registry.pop(dirs["d"])
        assert data.directories == [dirs["e"], dirs["d"]]
        registry.pop(dirs["e"])
        assert data.directories == [dirs["d"]]
        registry.pop(dirs["d"])
        assert data.directories == []

    def test_preconfigured_directory_is_not_evicted(self, dirs):
        data = DataDirectories([dirs["d"]])
        registry = SearchPathRegistry(data)
        registry.push(dirs["d"])
        registry.pop(dirs["d"])
        assert data.directories == [dirs["d"]]

    def test_pop_matches_normalized_path(self, dirs):
        data = DataDirectories()
        registry = SearchPathRegistry(data)
        registry.push(dirs["d"])
        registry.pop(dirs["d"] / "sub" / "..")
        assert len(data) == 0

    def test_pop_unknown_directory_is_fatal(self, dirs):
        registry = SearchPathRegistry(DataDirectories())
        with pytest.raises(ImportScopeError) as exc_info:
            registry.pop(dirs["d"])
        assert exc_info.value.error_code == "E9002"

    def test_preconfigured_directory_returns_to_its_position(self, dirs):
        data = DataDirectories([dirs["f"], dirs["d"]])
        registry = SearchPathRegistry(data)
        registry.push(dirs["d"])
        assert data.directories == [dirs["d"], dirs["f"]]
        registry.pop(dirs["d"])
        assert data.directories == [dirs["f"], dirs["d"]]

    def test_ancestor_pushed_again_is_moved_back_on_pop(self, dirs):
        """A(d) -> B(e) -> C(d): once C closes, B sees its own directory first again."""
        data = DataDirectories()
        registry = SearchPathRegistry(data)
        registry.push(dirs["d"])
        registry.push(dirs["e"])
        assert data.directories == [dirs["e"], dirs["d"]]
        registry.push(dirs["d"])
        assert data.directories == [dirs["d"], dirs["e"]]
        registry.pop(dirs["d"])
        assert data.directories == [dirs["e"], dirs["d"]]
        registry.pop(dirs["e"])
        registry.pop(dirs["d"])
        assert data.directories == []

    def test_push_of_front_directory_leaves_order_alone(self, dirs):
        data = DataDirectories([dirs["d"], dirs["f"]])
        registry = SearchPathRegistry(data)
        registry.push(dirs["d"])
        registry.pop(dirs["d"])
        assert data.directories == [dirs["d"], dirs["f"]]


class TestMoveDataDirectory:
    def test_move_and_clamp(self, dirs):
        data = DataDirectories([dirs["d"], dirs["e"], dirs["f"]])
        assert data.move_data_directory(dirs["f"], 0)
        assert data.directories == [dirs["f"], dirs["d"], dirs["e"]]
        assert data.move_data_directory(dirs["f"], 10)
        assert data.directories == [dirs["d"], dirs["e"], dirs["f"]]
        assert data.index_of(dirs["e"]) == 1

    def test_move_absent_directory(self, tmp_path, dirs):
        data = DataDirectories([dirs["d"]])
        assert not data.move_data_directory(tmp_path / "nowhere", 0)
        assert data.index_of(tmp_path / "nowhere") is None
