"""
Scene Path Resolution

Pure path checks for scene imports. Every import is keyed by an absolute,
lexically normalized path; relative paths are rejected rather than resolved
against the process working directory, because nested scenes each have their
own effective base directory.

This class is stateless and can be shared/reused.
"""

import logging
import os
from pathlib import Path
from typing import NamedTuple, Union

from ..shared.errors import InvalidPathError

logger = logging.getLogger(__name__)


def normalize_path(path: Union[Path, str]) -> Path:
    """Lexically normalize a path (collapses `.`, `..` and duplicate separators)."""
    return Path(os.path.normpath(os.fspath(path)))


def same_path(a: Union[Path, str], b: Union[Path, str]) -> bool:
    """True if both paths name the same location after normalization."""
    return os.path.normcase(os.fspath(normalize_path(a))) == os.path.normcase(os.fspath(normalize_path(b)))


class ResolvedPath(NamedTuple):
    is_absolute: bool
    path: Path
    directory: Path


class PathResolver:
    """
    Validates import paths and extracts their containing directory.

    resolve('/scenes/a.pyscene') → ResolvedPath(True, /scenes/a.pyscene, /scenes)
    resolve('a.pyscene')         → InvalidPathError
    """

    def resolve(self, path: Union[Path, str]) -> ResolvedPath:
        """
        Args:
            path: Scene path as given by the caller

        Returns:
            ResolvedPath with the normalized path and its parent directory

        Raises:
            InvalidPathError: If path is not absolute
        """
        p = Path(path)
        if not p.is_absolute():
            raise InvalidPathError(p, "Expected absolute path.")
        normalized = normalize_path(p)
        return ResolvedPath(True, normalized, normalized.parent)

    def is_absolute(self, path: Union[Path, str]) -> bool:
        return Path(path).is_absolute()
