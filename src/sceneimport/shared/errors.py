"""
Error Reporting

Importer failures carry the path of the scene that failed and a stable error code.
Internal-consistency failures of the import scope machinery use a separate
hierarchy so that they are never mistaken for (or wrapped as) user errors.
"""

import os
from pathlib import Path
from typing import List, Optional, Union


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get("SCENEIMPORT_COLOR", "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return True

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


def format_import_error(error: "SceneImportError", color: Optional[bool] = None) -> str:
    """
    Render an importer error in rustc style.

    Example output (plain, no color)::

        error[E1002]: Scene is imported recursively.
         --> /scenes/a.pyscene
    """
    use_color = color if color is not None else _use_color()
    out: List[str] = [
        _style(f"error[{error.error_code}]", _BOLD, _RED, color=use_color)
        + _style(f": {error.message}", _BOLD, color=use_color)
    ]
    if error.path is not None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=use_color) + str(error.path))
    return "\n".join(out)


# ============================================================================
# Exception Classes
# ============================================================================

class SceneImportError(Exception):
    """Base exception for all scene import errors"""
    error_code = "E1000"

    def __init__(self, path: Optional[Union[Path, str]], message: str):
        super().__init__(message)
        self.path = Path(path) if path is not None else None
        self.message = message

    def __str__(self):
        if self.path is not None:
            return f"error[{self.error_code}]: {self.message}\n --> {self.path}"
        return self.message


class InvalidPathError(SceneImportError):
    """Path handed to the importer is not absolute."""
    error_code = "E1001"


class RecursiveImportError(SceneImportError):
    """Path is already being imported further up the import chain."""
    error_code = "E1002"

    def __init__(self, path, message: str, chain: Optional[List[Path]] = None):
        super().__init__(path, message)
        self.chain = list(chain) if chain else []


class ImportDepthError(RecursiveImportError):
    """Import chain exceeded the configured nesting depth."""
    error_code = "E1003"


class UnsupportedFormatError(SceneImportError):
    """
    Scene file uses the retired `# filename.ext` header comment.

    `legacy_file` is the file name the header points at.
    """
    error_code = "E1004"

    def __init__(self, path, message: str, legacy_file: Optional[str] = None):
        super().__init__(path, message)
        self.legacy_file = legacy_file


class ScriptExecutionError(SceneImportError):
    """
    Scene script raised while running.

    The underlying exception is kept as `cause` (and as `__cause__` when raised
    with `raise ... from`).
    """
    error_code = "E1005"

    def __init__(self, path, cause: BaseException, message: Optional[str] = None):
        if message is None:
            message = f"Failed to run python scene script: {_describe(cause)}"
        super().__init__(path, message)
        self.cause = cause

    @property
    def root_cause(self) -> BaseException:
        """Innermost failure, looking through nested script execution errors."""
        cause = self.cause
        while isinstance(cause, ScriptExecutionError):
            cause = cause.cause
        return cause

    @property
    def import_chain(self) -> List[Path]:
        """Paths of every import level the failure propagated through, outermost first."""
        chain = [self.path]
        cause = self.cause
        while isinstance(cause, ScriptExecutionError):
            chain.append(cause.path)
            cause = cause.cause
        if isinstance(cause, SceneImportError) and cause.path is not None:
            chain.append(cause.path)
        return chain


class UnknownImporterError(SceneImportError):
    """No importer is registered for the file extension."""
    error_code = "E1006"


class SceneFileNotFoundError(SceneImportError):
    """Scene file does not exist or could not be found in any data directory."""
    error_code = "E1007"


def _describe(cause: BaseException) -> str:
    if isinstance(cause, SceneImportError):
        return f"{cause.message} ({cause.path})" if cause.path is not None else cause.message
    text = str(cause)
    return text if text else type(cause).__name__


class ImportScopeError(Exception):
    """
    Internal consistency failure in the import scope machinery.

    Raised when the scope discipline is broken (releasing a path that was never
    claimed, popping an empty stack, a close that could not complete). Never
    raised for problems in user scene files, and never wrapped by the importer.
    """
    def __init__(self, message: str, error_code: str = "E9001"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self):
        return f"[{self.error_code}] {self.message}"
