"""
Data Search Paths

Two layers:
- DataDirectories: the ordered list of directories consulted when a relative
  resource or scene reference is resolved. Process-wide by default, shared with
  anything else that looks up data files.
- SearchPathRegistry: per-session stack of directories contributed by open
  import scopes. A directory stays visible while any stack entry references it,
  so a nested scene living next to its parent does not evict the parent's
  directory when it finishes. Pops undo pushes in reverse, which puts the list
  back in the order the enclosing scope saw.
"""

import logging
import threading
from pathlib import Path
from typing import Dict, Iterable, List, NamedTuple, Optional, Union

from ..shared.errors import ImportScopeError
from ..utils.config import data_directories_from_env
from .path_resolver import normalize_path, same_path

logger = logging.getLogger(__name__)


class DataDirectories:
    """
    Ordered data directory list (highest priority first).

    add_data_directory(dir, high_priority=True)  → dir moves/inserts to front
    add_data_directory(dir, high_priority=False) → dir appended if not present
    remove_data_directory(dir)                   → dir removed if present
    """

    def __init__(self, directories: Optional[Iterable[Union[Path, str]]] = None):
        self._lock = threading.Lock()
        self._directories: List[Path] = []
        for d in directories or ():
            self.add_data_directory(d)

    def __iter__(self):
        return iter(self.directories)

    def __len__(self) -> int:
        return len(self._directories)

    def __contains__(self, directory: Union[Path, str]) -> bool:
        return self._index(directory) is not None

    @property
    def directories(self) -> List[Path]:
        with self._lock:
            return list(self._directories)

    def _index(self, directory: Union[Path, str]) -> Optional[int]:
        for i, d in enumerate(self._directories):
            if same_path(d, directory):
                return i
        return None

    def add_data_directory(self, directory: Union[Path, str], high_priority: bool = False) -> bool:
        """
        Make directory visible.

        Returns:
            True if directory was not in the list before the call
        """
        directory = normalize_path(directory)
        if not directory.is_absolute():
            raise ValueError(f"Data directory must be absolute: {directory}")
        if not directory.is_dir():
            logger.warning(f"Data directory {directory} does not exist")
        with self._lock:
            index = self._index(directory)
            if index is not None:
                if high_priority and index != 0:
                    self._directories.insert(0, self._directories.pop(index))
                return False
            if high_priority:
                self._directories.insert(0, directory)
            else:
                self._directories.append(directory)
            return True

    def remove_data_directory(self, directory: Union[Path, str]) -> bool:
        """Returns True if directory was present."""
        with self._lock:
            index = self._index(directory)
            if index is None:
                return False
            del self._directories[index]
            return True

    def index_of(self, directory: Union[Path, str]) -> Optional[int]:
        """Priority position of directory (0 = highest), or None if not present."""
        with self._lock:
            return self._index(directory)

    def move_data_directory(self, directory: Union[Path, str], index: int) -> bool:
        """Move a present directory to position index (clamped). Returns False if absent."""
        with self._lock:
            current = self._index(directory)
            if current is None:
                return False
            entry = self._directories.pop(current)
            self._directories.insert(min(max(index, 0), len(self._directories)), entry)
            return True

    def find_file(self, relative: Union[Path, str]) -> Optional[Path]:
        """First existing match for relative in priority order, or None."""
        relative = Path(relative)
        if relative.is_absolute():
            return relative if relative.exists() else None
        for directory in self.directories:
            candidate = normalize_path(directory / relative)
            if candidate.exists():
                return candidate
        return None


_default_directories: Optional[DataDirectories] = None
_default_lock = threading.Lock()


def get_data_directories() -> DataDirectories:
    """Process-wide data directories, seeded from SCENEIMPORT_DATA_PATH on first use."""
    global _default_directories
    with _default_lock:
        if _default_directories is None:
            _default_directories = DataDirectories(data_directories_from_env())
        return _default_directories


def add_data_directory(directory: Union[Path, str], high_priority: bool = False) -> bool:
    return get_data_directories().add_data_directory(directory, high_priority)


def remove_data_directory(directory: Union[Path, str]) -> bool:
    return get_data_directories().remove_data_directory(directory)


class _Push(NamedTuple):
    directory: Path
    # Position the directory had before this push moved it to the front
    moved_from: Optional[int]


class SearchPathRegistry:
    """
    Reference-counted view of the directories pushed by open import scopes.

    Each pop undoes its matching push, so the lookup order seen by the scope
    below is the order it had before the nested scope opened:
    - a directory the registry inserted is evicted once no entry references it
    - a directory a push moved to the front goes back to its previous position
    """

    def __init__(self, data_directories: Optional[DataDirectories] = None):
        self.data_directories = data_directories if data_directories is not None else get_data_directories()
        self._stack: List[_Push] = []
        self._owned: Dict[Path, bool] = {}

    def __len__(self) -> int:
        return len(self._stack)

    @property
    def stack(self) -> List[Path]:
        return [entry.directory for entry in self._stack]

    def _key(self, directory: Path) -> Optional[Path]:
        for d in self._owned:
            if same_path(d, directory):
                return d
        return None

    def references(self, directory: Union[Path, str]) -> int:
        return sum(1 for entry in self._stack if same_path(entry.directory, directory))

    def push(self, directory: Union[Path, str]) -> None:
        directory = normalize_path(directory)
        index = self.data_directories.index_of(directory)
        added = False
        moved_from = None
        if index is None:
            added = self.data_directories.add_data_directory(directory, high_priority=True)
        elif index != 0:
            self.data_directories.move_data_directory(directory, 0)
            moved_from = index
        if self._key(directory) is None:
            self._owned[directory] = added
        self._stack.append(_Push(directory, moved_from))
        logger.debug(f"Pushed search directory {directory} (refs {self.references(directory)})")

    def pop(self, directory: Union[Path, str]) -> None:
        for i in range(len(self._stack) - 1, -1, -1):
            if same_path(self._stack[i].directory, directory):
                entry = self._stack.pop(i)
                break
        else:
            raise ImportScopeError(
                f"Search directory {directory} popped but was never pushed", error_code="E9002"
            )
        if self.references(directory) == 0 and self._owned.pop(self._key(directory), False):
            self.data_directories.remove_data_directory(directory)
            logger.debug(f"Evicted search directory {directory}")
        elif entry.moved_from is not None:
            self.data_directories.move_data_directory(directory, entry.moved_from)
            logger.debug(f"Moved search directory {directory} back to position {entry.moved_from}")
