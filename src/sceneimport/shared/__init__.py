"""Shared types used across the importer, scripting and scene packages."""

from .errors import (
    SceneImportError,
    InvalidPathError,
    RecursiveImportError,
    ImportDepthError,
    UnsupportedFormatError,
    ScriptExecutionError,
    UnknownImporterError,
    SceneFileNotFoundError,
    ImportScopeError,
    format_import_error,
)

__all__ = [
    'SceneImportError',
    'InvalidPathError',
    'RecursiveImportError',
    'ImportDepthError',
    'UnsupportedFormatError',
    'ScriptExecutionError',
    'UnknownImporterError',
    'SceneFileNotFoundError',
    'ImportScopeError',
    'format_import_error',
]
