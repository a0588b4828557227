"""Filesystem subsystem: the node arena, path resolution, and the seed layout.

Re-exports public symbols so callers can write::

    from nexus_shell.fs import FileSystem, resolve_path
"""

from nexus_shell.fs.filesystem import (
    DEFAULT_DIR_PERMISSIONS,
    DEFAULT_FILE_PERMISSIONS,
    DIRECTORY_SIZE,
    FileSystem,
    FileType,
    NodeInfo,
)
from nexus_shell.fs.paths import HOME_DIR, join_path, normalize_path, resolve_path, split_path
from nexus_shell.fs.template import build_filesystem

__all__ = [
    "DEFAULT_DIR_PERMISSIONS",
    "DEFAULT_FILE_PERMISSIONS",
    "DIRECTORY_SIZE",
    "HOME_DIR",
    "FileSystem",
    "FileType",
    "NodeInfo",
    "build_filesystem",
    "join_path",
    "normalize_path",
    "resolve_path",
    "split_path",
]
