"""
Scene Builder Settings

Settings are a plain value: copy() produces an independent snapshot that can be
handed back to the builder later. ScopedSettings uses that to keep setting
changes made by a nested scene from leaking into its parent.
"""

import copy
from dataclasses import dataclass, field
from enum import Flag, auto
from typing import Any, Dict, Iterator, Optional


class SceneBuilderFlags(Flag):
    NONE = 0
    DONT_MERGE_MATERIALS = auto()
    DONT_MERGE_MESHES = auto()
    USE_ORIGINAL_TANGENT_SPACE = auto()
    ASSUME_LINEAR_SPACE_TEXTURES = auto()
    FLATTEN_STATIC_MESH_INSTANCES = auto()
    DONT_OPTIMIZE_GRAPH = auto()
    RT_DONT_MERGE_STATIC = auto()


@dataclass
class SceneBuilderSettings:
    """
    Builder configuration: import flags plus free-form named options.

    Scene scripts use item access for options:
        sceneBuilder.settings["units"] = "cm"
    """
    flags: SceneBuilderFlags = SceneBuilderFlags.NONE
    options: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Any:
        return self.options[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self.options[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self.options

    def __iter__(self) -> Iterator[str]:
        return iter(self.options)

    def get(self, name: str, default: Optional[Any] = None) -> Any:
        return self.options.get(name, default)

    def copy(self) -> "SceneBuilderSettings":
        return SceneBuilderSettings(flags=self.flags, options=copy.deepcopy(self.options))

    def assign(self, other: "SceneBuilderSettings") -> None:
        """Overwrite this object in place with the values of other."""
        self.flags = other.flags
        self.options.clear()
        self.options.update(copy.deepcopy(other.options))


class ScopedSettings:
    """
    Snapshot a builder's settings now, put them back on restore().

    Restoring writes into the settings object the builder had at capture time
    and makes it the builder's settings again, so references scripts hold to
    `sceneBuilder.settings` stay live.

    Usable as a context manager (restores on exit, including on exception).
    """

    def __init__(self, builder: Any):
        self.builder = builder
        self.live = builder.settings
        self.saved = builder.get_settings()
        self._restored = False

    def restore(self) -> None:
        if self._restored:
            return
        self.live.assign(self.saved)
        if self.builder.settings is not self.live:
            self.builder.set_settings(self.live)
        self._restored = True

    def __enter__(self) -> "ScopedSettings":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()
