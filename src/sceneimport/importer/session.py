"""
Import Session and Import Scope

An ImportSession owns the state of one top-level import and everything it
imports in turn: the cycle guard, the search directory stack and the execution
context stack. The top-level call creates it and hands it down to every nested
import by reference.

An ImportScope covers exactly one import attempt. Opening it claims the path,
snapshots the builder settings, pushes the scene's directory and makes the
builder the active context. Closing undoes all of it in reverse order, on success
and on failure alike.

    with session.open_scope(path, builder):
        engine.run_script_from_file(path, context)
"""

import logging
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterator, List, Optional, Union

from ..shared.errors import ImportDepthError, ImportScopeError, RecursiveImportError
from ..utils.config import MAX_IMPORT_DEPTH
from ..scene.settings import ScopedSettings
from .context_stack import ExecutionContext, ExecutionContextStack
from .cycle_guard import ImportCycleGuard
from .path_resolver import PathResolver
from .search_paths import DataDirectories, SearchPathRegistry

logger = logging.getLogger(__name__)


class ScopeState(Enum):
    UNOPENED = "unopened"
    OPEN = "open"
    CLOSED = "closed"


class ImportSession:
    """
    Shared state of one import chain.

    Idle (all structures empty) before the first scope opens and again after the
    outermost scope closes, whether the import succeeded or not.
    """

    def __init__(
        self,
        data_directories: Optional[DataDirectories] = None,
        max_depth: int = MAX_IMPORT_DEPTH,
    ):
        """
        Args:
            data_directories: Directory list that scene directories are pushed onto
                              (process-wide list if None)
            max_depth: Maximum number of simultaneously open scopes
        """
        self.path_resolver = PathResolver()
        self.cycle_guard = ImportCycleGuard()
        self.search_paths = SearchPathRegistry(data_directories)
        self.contexts = ExecutionContextStack()
        self.max_depth = max_depth

    @property
    def data_directories(self) -> DataDirectories:
        return self.search_paths.data_directories

    @property
    def depth(self) -> int:
        return len(self.cycle_guard)

    @property
    def active_context(self) -> Optional[ExecutionContext]:
        return self.contexts.active

    def is_idle(self) -> bool:
        return len(self.cycle_guard) == 0 and len(self.search_paths) == 0 and len(self.contexts) == 0

    def is_recursive(self, path: Path) -> bool:
        return self.cycle_guard.is_active(path)

    def active_paths(self) -> List[Path]:
        return self.cycle_guard.active_paths()

    def directory_stack(self) -> List[Path]:
        return self.search_paths.stack

    def open_scope(self, path: Union[Path, str], builder: Any) -> "ImportScope":
        scope = ImportScope(self, path, builder)
        scope.open()
        return scope

    @contextmanager
    def bind(self, builder: Any) -> Iterator["ImportSession"]:
        """
        Attach this session to builder for the duration of the block so that
        imports the builder starts from inside a script join this session.
        """
        previous = getattr(builder, "import_session", None)
        builder.import_session = self
        try:
            yield self
        finally:
            builder.import_session = previous


class ImportScope:
    """
    One import attempt: UNOPENED → OPEN → CLOSED. Never reopened.
    """

    def __init__(self, session: ImportSession, path: Union[Path, str], builder: Any):
        self.session = session
        self.requested_path = path
        self.builder = builder
        self.state = ScopeState.UNOPENED
        self.path: Optional[Path] = None
        self.directory: Optional[Path] = None
        self._settings: Optional[ScopedSettings] = None
        self._context: Optional[ExecutionContext] = None

    def __repr__(self) -> str:
        return f"ImportScope({self.path or self.requested_path}, {self.state.value})"

    def open(self) -> "ImportScope":
        """
        Raises:
            InvalidPathError: If path is not absolute
            RecursiveImportError: If path is already open in this session
            ImportDepthError: If the session is at its depth limit
        """
        if self.state is not ScopeState.UNOPENED:
            raise ImportScopeError(f"{self!r} cannot be opened again", error_code="E9004")

        resolved = self.session.path_resolver.resolve(self.requested_path)
        path = resolved.path

        # Cycle and depth checks come before any mutation of the session.
        if self.session.is_recursive(path):
            raise RecursiveImportError(
                path, "Scene is imported recursively.",
                chain=self.session.active_paths() + [path],
            )
        if self.session.depth >= self.session.max_depth:
            raise ImportDepthError(
                path,
                f"Scene import depth limit ({self.session.max_depth}) exceeded.",
                chain=self.session.active_paths() + [path],
            )

        self.session.cycle_guard.try_enter(path)
        self.path = path
        self.directory = resolved.directory
        undo: List[Callable[[], Any]] = [lambda: self.session.cycle_guard.leave(path)]
        try:
            self._settings = ScopedSettings(self.builder)
            undo.append(self._settings.restore)
            self.session.search_paths.push(self.directory)
            undo.append(lambda: self.session.search_paths.pop(self.directory))
            self._context = self.session.contexts.push(self.builder, self._settings.saved)
        except BaseException:
            self.state = ScopeState.CLOSED
            for step in reversed(undo):
                step()
            raise

        self.state = ScopeState.OPEN
        logger.debug(f"Opened import scope {path} (depth {self.session.depth})")
        return self

    def close(self) -> None:
        """
        Undo open() in reverse order. Every step runs even if an earlier one fails;
        any failure is reported as ImportScopeError once all steps have run.
        """
        if self.state is not ScopeState.OPEN:
            raise ImportScopeError(f"{self!r} is not open", error_code="E9004")
        self.state = ScopeState.CLOSED

        failures: List[BaseException] = []
        for step in (
            self._pop_context,
            lambda: self.session.search_paths.pop(self.directory),
            self._settings.restore,
            lambda: self.session.cycle_guard.leave(self.path),
        ):
            try:
                step()
            except Exception as e:
                failures.append(e)

        if failures:
            details = "; ".join(str(f) for f in failures)
            raise ImportScopeError(
                f"Import scope {self.path} closed partially: {details}", error_code="E9005"
            ) from failures[0]
        logger.debug(f"Closed import scope {self.path} (depth {self.session.depth})")

    def _pop_context(self) -> None:
        popped = self.session.contexts.pop()
        if popped is not self._context:
            raise ImportScopeError(
                f"Execution context of {self.path} was not on top of the stack", error_code="E9006"
            )

    def __enter__(self) -> "ImportScope":
        if self.state is ScopeState.UNOPENED:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
