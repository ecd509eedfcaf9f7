"""
Scene scripting API.

Scene scripts run `from sceneimport.scene import *` before their own code, so
everything listed in __all__ is available to them by name.
"""

from .settings import SceneBuilderFlags, SceneBuilderSettings, ScopedSettings
from .transform import identity, translation, scaling, rotation_y, compose
from .builder import SceneBuilder, SceneNode, Mesh, Light, Camera
from ..importer.context_stack import get_active_builder

__all__ = [
    'SceneBuilderFlags',
    'SceneBuilderSettings',
    'ScopedSettings',
    'identity',
    'translation',
    'scaling',
    'rotation_y',
    'compose',
    'SceneBuilder',
    'SceneNode',
    'Mesh',
    'Light',
    'Camera',
    'get_active_builder',
]
