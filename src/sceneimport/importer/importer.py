"""
Scene Importers

Importer is the interface the scene builder dispatches to by file extension.
PythonSceneImporter runs a Python scene script against a builder:

    validate path → cycle check → read script → reject legacy header
        → open scope → run prelude + script → close scope

Scripts may import further scenes through the builder; those imports join the
same ImportSession and open nested scopes. Any failure closes every open scope on
its way out.
"""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from ..scripting.engine import PythonScriptEngine, ScriptContext, ScriptEngine
from ..shared.errors import (
    ImportScopeError,
    RecursiveImportError,
    SceneFileNotFoundError,
    ScriptExecutionError,
    UnsupportedFormatError,
)
from ..utils.config import LEGACY_HEADER_PATTERN, PYSCENE_EXTENSIONS, SCENE_BUILDER_BINDING, SCRIPT_PRELUDE
from ..utils.io_utils import first_line, read_source_file
from .session import ImportSession

logger = logging.getLogger(__name__)

_LEGACY_HEADER = re.compile(LEGACY_HEADER_PATTERN)


def parse_legacy_header(script: str) -> Optional[str]:
    """
    Parse the retired header on the first line of a scene script:

        # filename.extension

    Returns:
        The file name from the header, or None if the first line is not one
    """
    match = _LEGACY_HEADER.fullmatch(first_line(script))
    if match:
        return match.group(1)
    return None


class Importer(ABC):
    """Imports one scene file format into a scene builder."""

    extensions: Tuple[str, ...] = ()

    @abstractmethod
    def import_scene(
        self,
        path: Union[Path, str],
        builder: Any,
        dict: Optional[Dict[str, Any]] = None,
        session: Optional[ImportSession] = None,
    ) -> None:
        ...


class PythonSceneImporter(Importer):
    """
    Importer for Python scene scripts (.pyscene).

    The builder is bound as `sceneBuilder` in the script namespace, together with
    any entries of `dict`.
    """

    extensions = PYSCENE_EXTENSIONS

    def __init__(self, engine: Optional[ScriptEngine] = None, prelude: Optional[str] = SCRIPT_PRELUDE):
        self.engine = engine if engine is not None else PythonScriptEngine()
        self.prelude = prelude

    def import_scene(
        self,
        path: Union[Path, str],
        builder: Any,
        dict: Optional[Dict[str, Any]] = None,
        session: Optional[ImportSession] = None,
    ) -> None:
        """
        Args:
            path: Absolute path of the scene script
            builder: Scene builder populated by the script
            dict: Extra objects bound into the script namespace
            session: Session of the enclosing import (None for a top-level import)

        Raises:
            InvalidPathError: If path is not absolute
            RecursiveImportError: If path is already being imported in this session
            SceneFileNotFoundError: If the script cannot be read
            UnsupportedFormatError: If the script uses the legacy header comment
            ScriptExecutionError: If running the script failed
        """
        if session is None:
            session = ImportSession()
        if getattr(builder, "import_session", None) is session:
            self._import(path, builder, dict, session)
        else:
            with session.bind(builder):
                self._import(path, builder, dict, session)

    def _import(self, path, builder, dict, session: ImportSession) -> None:
        path = session.path_resolver.resolve(path).path

        if session.is_recursive(path):
            raise RecursiveImportError(
                path, "Scene is imported recursively.",
                chain=session.active_paths() + [path],
            )

        try:
            script = read_source_file(path)
        except OSError as e:
            raise SceneFileNotFoundError(path, f"Failed to read scene script: {e}") from e

        legacy_file = parse_legacy_header(script)
        if legacy_file is not None:
            raise UnsupportedFormatError(
                path,
                "Python scene file is using old header comment syntax. "
                f"Use the new '{SCENE_BUILDER_BINDING}' object instead.",
                legacy_file=legacy_file,
            )

        with session.open_scope(path, builder):
            context = ScriptContext(dict)
            context.set_object(SCENE_BUILDER_BINDING, builder)
            try:
                if self.prelude:
                    self.engine.run_script(self.prelude, context)
                self.engine.run_script_from_file(path, context)
            except ImportScopeError:
                raise
            except Exception as e:
                logger.debug(f"Scene script {path} failed: {e}")
                raise ScriptExecutionError(path, e) from e
        logger.debug(f"Imported scene {path}")
