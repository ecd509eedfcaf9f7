"""
Importer Registry

Maps scene file extensions to importer factories. The scene builder asks the
registry which importer handles a file.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from ..shared.errors import UnknownImporterError
from .importer import Importer, PythonSceneImporter

logger = logging.getLogger(__name__)

ImporterFactory = Callable[[], Importer]


class ImporterRegistry:
    def __init__(self) -> None:
        self._factories: Dict[str, ImporterFactory] = {}
        self._instances: Dict[str, Importer] = {}

    def register(self, extensions: Union[str, Iterable[str]], factory: ImporterFactory) -> None:
        """Register factory for one or more extensions (".pyscene" or "pyscene")."""
        if isinstance(extensions, str):
            extensions = [extensions]
        for ext in extensions:
            key = self._normalize(ext)
            if key in self._factories:
                logger.warning(f"Replacing importer registered for '{key}'")
            self._factories[key] = factory
            self._instances.pop(key, None)

    def supported_extensions(self) -> List[str]:
        return sorted(self._factories)

    def has_importer(self, path: Union[Path, str]) -> bool:
        return self._normalize(Path(path).suffix) in self._factories

    def get_importer(self, path: Union[Path, str]) -> Importer:
        """
        Raises:
            UnknownImporterError: If no importer handles the file extension
        """
        key = self._normalize(Path(path).suffix)
        if key not in self._factories:
            raise UnknownImporterError(
                path,
                f"No importer registered for '{key or Path(path).name}'. "
                f"Supported: {', '.join(self.supported_extensions())}",
            )
        if key not in self._instances:
            self._instances[key] = self._factories[key]()
        return self._instances[key]

    @staticmethod
    def _normalize(ext: str) -> str:
        ext = ext.lower()
        if ext and not ext.startswith("."):
            ext = "." + ext
        return ext


_default_registry: Optional[ImporterRegistry] = None


def get_default_registry() -> ImporterRegistry:
    """Process-wide registry with the built-in importers registered."""
    global _default_registry
    if _default_registry is None:
        _default_registry = ImporterRegistry()
        _default_registry.register(PythonSceneImporter.extensions, PythonSceneImporter)
    return _default_registry
