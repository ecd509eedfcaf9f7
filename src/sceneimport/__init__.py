"""
sceneimport: scoped, cycle-safe importing of Python scene scripts.

    builder = SceneBuilder()
    builder.import_scene("/scenes/living_room.pyscene")
"""

from .shared.errors import (
    SceneImportError,
    InvalidPathError,
    RecursiveImportError,
    ImportDepthError,
    UnsupportedFormatError,
    ScriptExecutionError,
    UnknownImporterError,
    SceneFileNotFoundError,
    ImportScopeError,
)
from .importer import (
    DataDirectories,
    ImportSession,
    ImportScope,
    Importer,
    ImporterRegistry,
    PythonSceneImporter,
    get_data_directories,
    get_default_registry,
    get_active_builder,
)
from .scene import SceneBuilder, SceneBuilderSettings, SceneBuilderFlags

__version__ = "0.1.0"

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
    'DataDirectories',
    'ImportSession',
    'ImportScope',
    'Importer',
    'ImporterRegistry',
    'PythonSceneImporter',
    'get_data_directories',
    'get_default_registry',
    'get_active_builder',
    'SceneBuilder',
    'SceneBuilderSettings',
    'SceneBuilderFlags',
]
