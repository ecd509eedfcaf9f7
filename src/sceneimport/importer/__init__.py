"""Importer: path checks, cycle guard, search paths, context stack, scoped imports."""

from .path_resolver import PathResolver, ResolvedPath, normalize_path, same_path
from .cycle_guard import ImportCycleGuard
from .search_paths import (
    DataDirectories,
    SearchPathRegistry,
    get_data_directories,
    add_data_directory,
    remove_data_directory,
)
from .context_stack import ExecutionContext, ExecutionContextStack, set_active_builder, get_active_builder
from .session import ImportSession, ImportScope, ScopeState
from .importer import Importer, PythonSceneImporter, parse_legacy_header
from .registry import ImporterRegistry, get_default_registry

__all__ = [
    'PathResolver',
    'ResolvedPath',
    'normalize_path',
    'same_path',
    'ImportCycleGuard',
    'DataDirectories',
    'SearchPathRegistry',
    'get_data_directories',
    'add_data_directory',
    'remove_data_directory',
    'ExecutionContext',
    'ExecutionContextStack',
    'set_active_builder',
    'get_active_builder',
    'ImportSession',
    'ImportScope',
    'ScopeState',
    'Importer',
    'PythonSceneImporter',
    'parse_legacy_header',
    'ImporterRegistry',
    'get_default_registry',
]
