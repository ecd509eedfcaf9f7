"""
Import Cycle Guard

Set of scene paths currently between scope open and scope close. Membership is
keyed by path, not position: importing the same scene twice one after the other
is fine, entering it again while it is still running is a cycle.
"""

import logging
from pathlib import Path
from typing import List

from ..shared.errors import ImportScopeError, RecursiveImportError

logger = logging.getLogger(__name__)


class ImportCycleGuard:
    def __init__(self) -> None:
        self._active: List[Path] = []

    def __contains__(self, path: Path) -> bool:
        return path in self._active

    def __len__(self) -> int:
        return len(self._active)

    def is_active(self, path: Path) -> bool:
        return path in self._active

    def active_paths(self) -> List[Path]:
        """Active paths in the order they were entered (outermost first)."""
        return list(self._active)

    def try_enter(self, path: Path) -> bool:
        """
        Claim path for the duration of one import.

        Raises:
            RecursiveImportError: If path is already active
        """
        if path in self._active:
            raise RecursiveImportError(
                path,
                "Scene is imported recursively.",
                chain=self._active + [path],
            )
        self._active.append(path)
        logger.debug(f"Entered import {path} (depth {len(self._active)})")
        return True

    def leave(self, path: Path) -> None:
        """Release a claim made by try_enter()."""
        try:
            self._active.remove(path)
        except ValueError:
            raise ImportScopeError(
                f"Import path {path} released but was never entered", error_code="E9001"
            ) from None
        logger.debug(f"Left import {path}")
