"""
sceneimport utilities package
"""

from .io_utils import read_source_file, first_line

__all__ = ["read_source_file", "first_line"]
