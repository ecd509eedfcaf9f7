"""
Scripting Engine

Runs scene script source against a ScriptContext. The context is a name → object
binding table that becomes the script's global namespace; the importer binds the
scene builder into it. Scripts call back into the importer through the builder
(sceneBuilder.importScene(...)), which nests further imports on the native call
stack.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from typing_extensions import Protocol

from ..utils.io_utils import read_source_file

logger = logging.getLogger(__name__)


class ScriptContext:
    """Global namespace of one script execution."""

    def __init__(self, objects: Optional[Dict[str, Any]] = None):
        self.namespace: Dict[str, Any] = {"__name__": "__scene__", "__builtins__": __builtins__}
        for name, obj in (objects or {}).items():
            self.set_object(name, obj)

    def set_object(self, name: str, obj: Any) -> None:
        self.namespace[name] = obj


class ScriptEngine(Protocol):
    def run_script(self, source: str, context: ScriptContext) -> None:
        ...

    def run_script_from_file(self, path: Union[Path, str], context: ScriptContext) -> None:
        ...


class PythonScriptEngine:
    """
    Executes Python source with exec() in the context namespace.

    Exceptions raised by the script propagate unchanged; wrapping them with scene
    information is the importer's job.
    """

    def run_script(self, source: str, context: ScriptContext, filename: str = "<string>") -> None:
        code = compile(source, filename, "exec")
        exec(code, context.namespace)

    def run_script_from_file(self, path: Union[Path, str], context: ScriptContext) -> None:
        path = Path(path)
        source = read_source_file(path)
        context.set_object("__file__", str(path))
        logger.debug(f"Running script {path}")
        self.run_script(source, context, filename=str(path))
