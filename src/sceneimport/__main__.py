"""CLI entry point: run `sceneimport scene.pyscene` or `python -m sceneimport scene.pyscene`."""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional


def _parse_defines(defines: List[str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for item in defines:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise ValueError(f"expected NAME=VALUE, got '{item}'")
        out[name] = value
    return out


def main(argv: Optional[List[str]] = None) -> int:
    import argparse
    from .importer.search_paths import DataDirectories, get_data_directories
    from .scene.builder import SceneBuilder
    from .shared.errors import SceneImportError, format_import_error

    parser = argparse.ArgumentParser(prog="sceneimport", description="Import a Python scene (.pyscene) file.")
    parser.add_argument("file", type=Path, help="Path to scene file")
    parser.add_argument("--data-dir", action="append", default=[], type=Path,
                        help="Extra data directory (repeatable, searched in order)")
    parser.add_argument("-D", "--define", action="append", default=[], metavar="NAME=VALUE",
                        help="Bind NAME to the string VALUE in the scene script")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = args.file.resolve()
    if not path.is_file():
        sys.stderr.write(f"sceneimport: error: not a file: {path}\n")
        return 1

    try:
        defines = _parse_defines(args.define)
    except ValueError as e:
        sys.stderr.write(f"sceneimport: error: {e}\n")
        return 1

    directories = DataDirectories(get_data_directories().directories)
    for d in args.data_dir:
        directories.add_data_directory(d.resolve())

    builder = SceneBuilder(data_directories=directories)
    try:
        builder.import_scene(path, defines)
    except SceneImportError as e:
        sys.stderr.write(format_import_error(e) + "\n")
        return 1

    print(f"Imported {path}")
    print(f"  scenes:  {len(builder.imported_scenes)}")
    print(f"  nodes:   {len(builder.nodes)}")
    print(f"  meshes:  {len(builder.meshes)}")
    print(f"  lights:  {len(builder.lights)}")
    print(f"  cameras: {len(builder.cameras)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
