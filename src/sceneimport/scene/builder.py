"""
Scene Builder

In-memory destination for scene imports. Scene scripts reach it as
`sceneBuilder` and populate it through the add_* calls; import_scene() lets a
script pull in another scene file, resolved against the data directories (the
importing script's own directory first).
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from ..importer.search_paths import DataDirectories, get_data_directories
from ..shared.errors import SceneFileNotFoundError
from .settings import SceneBuilderSettings
from .transform import as_transform

logger = logging.getLogger(__name__)


@dataclass
class SceneNode:
    name: str
    transform: np.ndarray
    parent: Optional[int] = None


@dataclass
class Mesh:
    name: str
    vertices: np.ndarray
    indices: Optional[np.ndarray] = None
    node: Optional[int] = None


@dataclass
class Light:
    name: str
    kind: str
    intensity: np.ndarray
    node: Optional[int] = None


@dataclass
class Camera:
    name: str
    position: np.ndarray
    target: np.ndarray
    up: np.ndarray = field(default_factory=lambda: np.array([0.0, 1.0, 0.0], dtype=np.float32))


class SceneBuilder:
    """
    Collects nodes, meshes, lights and cameras.

    Attributes:
        settings: Current builder settings (scoped per imported scene)
        import_session: Session of the import currently running on this builder
        imported_scenes: Scene files imported so far, in completion order
    """

    def __init__(
        self,
        settings: Optional[SceneBuilderSettings] = None,
        data_directories: Optional[DataDirectories] = None,
        registry: Optional[Any] = None,
    ):
        self.settings = settings if settings is not None else SceneBuilderSettings()
        self.data_directories = data_directories if data_directories is not None else get_data_directories()
        self.registry = registry
        self.import_session = None
        self.nodes: List[SceneNode] = []
        self.meshes: List[Mesh] = []
        self.lights: List[Light] = []
        self.cameras: List[Camera] = []
        self.imported_scenes: List[Path] = []

    def __repr__(self) -> str:
        return (f"SceneBuilder(nodes={len(self.nodes)}, meshes={len(self.meshes)}, "
                f"lights={len(self.lights)}, cameras={len(self.cameras)})")

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    def get_settings(self) -> SceneBuilderSettings:
        """Independent copy of the current settings."""
        return self.settings.copy()

    def set_settings(self, settings: SceneBuilderSettings) -> None:
        self.settings = settings

    # -------------------------------------------------------------------------
    # Population
    # -------------------------------------------------------------------------

    def add_node(self, name: str, transform=None, parent: Optional[int] = None) -> int:
        if parent is not None and not 0 <= parent < len(self.nodes):
            raise ValueError(f"Invalid parent node id {parent} for node '{name}'")
        self.nodes.append(SceneNode(name=name, transform=as_transform(transform), parent=parent))
        return len(self.nodes) - 1

    def add_mesh(
        self,
        name: str,
        vertices: Sequence[Sequence[float]],
        indices: Optional[Sequence[int]] = None,
        node: Optional[int] = None,
    ) -> int:
        v = np.asarray(vertices, dtype=np.float32)
        if v.ndim != 2 or v.shape[1] != 3:
            raise ValueError(f"Mesh '{name}' vertices must have shape (N, 3), got {v.shape}")
        idx = None
        if indices is not None:
            idx = np.asarray(indices, dtype=np.uint32)
            if idx.size and int(idx.max()) >= len(v):
                raise ValueError(f"Mesh '{name}' index out of range")
        self.meshes.append(Mesh(name=name, vertices=v, indices=idx, node=node))
        return len(self.meshes) - 1

    def add_light(self, name: str, kind: str = "point", intensity=(1.0, 1.0, 1.0), node: Optional[int] = None) -> int:
        self.lights.append(Light(name=name, kind=kind, intensity=np.asarray(intensity, dtype=np.float32), node=node))
        return len(self.lights) - 1

    def add_camera(self, name: str, position, target, up=(0.0, 1.0, 0.0)) -> int:
        self.cameras.append(Camera(
            name=name,
            position=np.asarray(position, dtype=np.float32),
            target=np.asarray(target, dtype=np.float32),
            up=np.asarray(up, dtype=np.float32),
        ))
        return len(self.cameras) - 1

    def get_node(self, name: str) -> Optional[SceneNode]:
        for node in self.nodes:
            if node.name == name:
                return node
        return None

    # -------------------------------------------------------------------------
    # Importing
    # -------------------------------------------------------------------------

    def find_scene_file(self, path: Union[Path, str]) -> Path:
        """
        Absolute paths are used as is; relative ones are looked up in the data
        directories of the running import (highest priority first).

        Raises:
            SceneFileNotFoundError: If the file does not exist
        """
        path = Path(path)
        directories = self.import_session.data_directories if self.import_session else self.data_directories
        found = directories.find_file(path)
        if found is None:
            if path.is_absolute():
                raise SceneFileNotFoundError(path, "Scene file does not exist.")
            searched = ", ".join(str(d) for d in directories) or "<none>"
            raise SceneFileNotFoundError(path, f"Can't find scene file in data directories. Searched: {searched}")
        return found

    def import_scene(self, path: Union[Path, str], dict: Optional[Dict[str, Any]] = None) -> None:
        """
        Import a scene file into this builder.

        Called from application code for the top-level scene and from scene
        scripts for nested ones; nested calls join the running import session.
        """
        from ..importer.session import ImportSession

        if self.import_session is not None:
            self._import_with(self.import_session, path, dict)
            return
        session = ImportSession(self.data_directories)
        with session.bind(self):
            self._import_with(session, path, dict)

    def _import_with(self, session, path, dict) -> None:
        from ..importer.registry import get_default_registry

        resolved = self.find_scene_file(path)
        registry = self.registry if self.registry is not None else get_default_registry()
        importer = registry.get_importer(resolved)
        logger.debug(f"Importing {resolved} with {type(importer).__name__}")
        importer.import_scene(resolved, self, dict, session=session)
        self.imported_scenes.append(resolved)
