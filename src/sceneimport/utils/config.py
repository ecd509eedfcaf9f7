"""
Configuration constants for scene importing
"""

import os
from pathlib import Path
from typing import List

from typing_extensions import Final

# File encoding constants
DEFAULT_FILE_ENCODING: Final = "utf-8"

# Scripting constants
SCENE_BUILDER_BINDING: Final = "sceneBuilder"
SCRIPT_PRELUDE: Final = "from sceneimport.scene import *"

# Retired header comment on the first line of a scene script: "# filename.extension"
LEGACY_HEADER_PATTERN: Final = r"#\s+([\w-]+\.[\w]{1,10})"

# Importer constants
PYSCENE_EXTENSIONS: Final = (".pyscene",)
MAX_IMPORT_DEPTH: Final = 64

# Environment
DATA_PATH_ENV_VAR: Final = "SCENEIMPORT_DATA_PATH"


def data_directories_from_env() -> List[Path]:
    """Directories listed in SCENEIMPORT_DATA_PATH (os.pathsep separated)."""
    raw = os.environ.get(DATA_PATH_ENV_VAR, "")
    return [Path(p) for p in raw.split(os.pathsep) if p.strip()]
