"""In-memory filesystem tree stored as a node arena.

Models the simulated root filesystem the shell operates on:

- **Node**: a record for a file or directory (type, content, size,
  permissions, owner, modification time).  The name does NOT live in the
  node; it lives in the parent directory's ``children`` map.

- **Directory**: a node whose ``children`` maps child names to node ids.
  A file never has children.

- **Arena**: every node lives in one table indexed by id.  Handlers never
  hold references into the tree; they hand absolute paths to the
  ``FileSystem`` that owns the table, so every mutation is explicit and
  observed by every later command in the same session.

Path lookup walks the tree component by component from the root after
canonicalising ``.`` and ``..`` segments.  ``permissions`` and ``owner``
are display attributes only; nothing here enforces them.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from itertools import count

from nexus_shell.fs.paths import join_path, normalize_path, split_path

DEFAULT_FILE_PERMISSIONS = "-rw-r--r--"
DEFAULT_DIR_PERMISSIONS = "drwxr-xr-x"
DEFAULT_OWNER = "user"

# Block size reported for a directory entry (``ls -l``, ``du``).
DIRECTORY_SIZE = 4096


class FileType(StrEnum):
    """The kind of object a node represents."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class NodeInfo:
    """Read-only snapshot of a node's metadata (returned by stat/lookup)."""

    node_id: int
    file_type: FileType
    size: int
    permissions: str
    owner: str
    modified: datetime | None = None

    @property
    def is_dir(self) -> bool:
        """Return True if the node is a directory."""
        return self.file_type is FileType.DIRECTORY

    @property
    def is_executable(self) -> bool:
        """Return True if any execute bit is shown in the permissions."""
        return "x" in self.permissions[1:]


@dataclass
class _Node:
    """Internal arena entry.

    For files, ``content`` holds the text and ``size`` the reported size.
    For directories, ``children`` maps names to node ids.
    """

    node_id: int
    file_type: FileType
    content: str = ""
    size: int = 0
    permissions: str = ""
    owner: str = DEFAULT_OWNER
    modified: datetime | None = None
    children: dict[str, int] = field(default_factory=dict)  # pyright: ignore[reportUnknownVariableType]

    def to_info(self) -> NodeInfo:
        """Create a read-only snapshot of this node."""
        size = self.size if self.file_type is FileType.FILE else DIRECTORY_SIZE
        return NodeInfo(
            node_id=self.node_id,
            file_type=self.file_type,
            size=size,
            permissions=self.permissions,
            owner=self.owner,
            modified=self.modified,
        )


class FileSystem:
    """An in-memory hierarchical filesystem with exactly one root at ``/``.

    All operations take absolute paths.  Errors are reported with the
    built-in ``OSError`` family so callers can tell "missing" from
    "wrong kind" without string matching.
    """

    def __init__(self, *, clock: Callable[[], datetime] = datetime.now) -> None:
        """Create a filesystem with an empty root directory.

        Args:
            clock: Source of modification timestamps.

        """
        self._clock = clock
        self._ids = count(start=0)
        root = self._new_node(FileType.DIRECTORY, permissions=DEFAULT_DIR_PERMISSIONS, owner="root")
        self._nodes: dict[int, _Node] = {root.node_id: root}
        self._root_id = root.node_id

    def _new_node(self, file_type: FileType, **attrs: object) -> _Node:
        """Allocate a node with a fresh id (not yet linked into the tree)."""
        node = _Node(node_id=next(self._ids), file_type=file_type, **attrs)  # type: ignore[arg-type]
        node.modified = self._clock()
        return node

    def _resolve(self, path: str) -> _Node | None:
        """Walk the canonical path from root and return the node, or None."""
        current = self._nodes[self._root_id]
        for part in normalize_path(path).strip("/").split("/"):
            if not part:
                continue
            if current.file_type is not FileType.DIRECTORY:
                return None
            child_id = current.children.get(part)
            if child_id is None:
                return None
            current = self._nodes[child_id]
        return current

    def _require(self, path: str) -> _Node:
        """Return the node at *path* or raise FileNotFoundError."""
        node = self._resolve(path)
        if node is None:
            msg = f"No such file or directory: {path}"
            raise FileNotFoundError(msg)
        return node

    def _require_dir(self, path: str) -> _Node:
        """Return the directory at *path*, raising for missing or non-directories."""
        node = self._require(path)
        if node.file_type is not FileType.DIRECTORY:
            msg = f"Not a directory: {path}"
            raise NotADirectoryError(msg)
        return node

    def _require_file(self, path: str) -> _Node:
        """Return the file at *path*, raising for missing paths or directories."""
        node = self._require(path)
        if node.file_type is FileType.DIRECTORY:
            msg = f"Is a directory: {path}"
            raise IsADirectoryError(msg)
        return node

    # -- queries -----------------------------------------------------------

    def lookup(self, path: str) -> NodeInfo | None:
        """Return a snapshot of the node at *path*, or None if absent.

        A path is absent when any segment is missing or an intermediate
        segment names a file rather than a directory.
        """
        node = self._resolve(path)
        return node.to_info() if node is not None else None

    def exists(self, path: str) -> bool:
        """Check whether a path exists in the filesystem."""
        return self._resolve(path) is not None

    def is_dir(self, path: str) -> bool:
        """Check whether *path* exists and is a directory."""
        node = self._resolve(path)
        return node is not None and node.file_type is FileType.DIRECTORY

    def stat(self, path: str) -> NodeInfo:
        """Return metadata for the given path.

        Raises:
            FileNotFoundError: If the path does not exist.

        """
        return self._require(path).to_info()

    def list_dir(self, path: str) -> list[str]:
        """List the names in a directory, sorted.

        Raises:
            FileNotFoundError: If the path does not exist.
            NotADirectoryError: If the path is not a directory.

        """
        return sorted(self._require_dir(path).children)

    def entries(self, path: str) -> list[tuple[str, NodeInfo]]:
        """Return ``(name, info)`` pairs for a directory, sorted by name."""
        directory = self._require_dir(path)
        return [
            (name, self._nodes[directory.children[name]].to_info())
            for name in sorted(directory.children)
        ]

    def read(self, path: str) -> str:
        """Read the contents of a file.

        Raises:
            FileNotFoundError: If the path does not exist.
            IsADirectoryError: If the path is a directory.

        """
        return self._require_file(path).content

    def walk(self, path: str) -> Iterator[tuple[str, NodeInfo]]:
        """Yield ``(path, info)`` for every descendant of a directory.

        Entries are produced depth-first, a directory before its
        children.  The starting directory itself is not yielded.
        """
        directory = self._require_dir(path)
        for name, child_id in list(directory.children.items()):
            child = self._nodes[child_id]
            child_path = join_path(path, name)
            yield child_path, child.to_info()
            if child.file_type is FileType.DIRECTORY:
                yield from self.walk(child_path)

    def disk_usage(self, path: str) -> int:
        """Return the total size in bytes of a node and everything below it."""
        node = self._require(path)
        return self._usage(node)

    def _usage(self, node: _Node) -> int:
        if node.file_type is FileType.FILE:
            return node.size
        return DIRECTORY_SIZE + sum(self._usage(self._nodes[c]) for c in node.children.values())

    # -- mutations ---------------------------------------------------------

    def create_file(
        self,
        path: str,
        content: str = "",
        *,
        permissions: str = DEFAULT_FILE_PERMISSIONS,
        size: int | None = None,
    ) -> None:
        """Create a file at the given path.

        Args:
            path: Absolute path for the new file.
            content: Initial text content.
            permissions: Display permission string.
            size: Reported size; defaults to the UTF-8 length of *content*.

        Raises:
            FileExistsError: If the path already exists.
            FileNotFoundError: If the parent directory does not exist.

        """
        reported = len(content.encode()) if size is None else size
        node = self._new_node(FileType.FILE, content=content, size=reported, permissions=permissions)
        self._link(path, node)

    def create_dir(self, path: str, *, permissions: str = DEFAULT_DIR_PERMISSIONS) -> None:
        """Create an empty directory at the given path.

        Raises:
            FileExistsError: If the path already exists.
            FileNotFoundError: If the parent directory does not exist.

        """
        self._link(path, self._new_node(FileType.DIRECTORY, permissions=permissions))

    def _link(self, path: str, node: _Node) -> None:
        """Register *node* in the arena and name it in its parent directory."""
        parent_path, name = split_path(normalize_path(path))
        if not name:
            msg = "Already exists: /"
            raise FileExistsError(msg)
        parent = self._resolve(parent_path)
        if parent is None or parent.file_type is not FileType.DIRECTORY:
            msg = f"Parent directory not found: {parent_path}"
            raise FileNotFoundError(msg)
        if name in parent.children:
            msg = f"Already exists: {name}"
            raise FileExistsError(msg)
        self._nodes[node.node_id] = node
        parent.children[name] = node.node_id
        parent.modified = self._clock()

    def write(self, path: str, content: str) -> None:
        """Replace a file's content and reset its size.

        Raises:
            FileNotFoundError: If the path does not exist.
            IsADirectoryError: If the path is a directory.

        """
        node = self._require_file(path)
        node.content = content
        node.size = len(content.encode())
        node.modified = self._clock()

    def touch(self, path: str) -> None:
        """Create an empty file, or refresh the timestamp of an existing node."""
        node = self._resolve(path)
        if node is None:
            self.create_file(path)
        else:
            node.modified = self._clock()

    def delete(self, path: str, *, recursive: bool = False) -> None:
        """Delete a file or directory.

        Args:
            path: Absolute path to delete.
            recursive: Allow deleting a non-empty directory and its subtree.

        Raises:
            FileNotFoundError: If the path does not exist.
            OSError: If the path is the root, or a non-empty directory
                without *recursive*.

        """
        canonical = normalize_path(path)
        if canonical == "/":
            msg = "Cannot delete root directory"
            raise OSError(msg)

        node = self._require(canonical)
        if node.file_type is FileType.DIRECTORY and node.children and not recursive:
            msg = f"Directory not empty: {path}"
            raise OSError(msg)

        parent_path, name = split_path(canonical)
        parent = self._require_dir(parent_path)
        del parent.children[name]
        parent.modified = self._clock()
        self._free(node)

    def _free(self, node: _Node) -> None:
        """Drop a node and its whole subtree from the arena."""
        for child_id in node.children.values():
            self._free(self._nodes[child_id])
        del self._nodes[node.node_id]

    def copy(self, src: str, dst: str) -> None:
        """Deep-copy the node at *src* to *dst*, replacing any existing *dst*.

        The copy shares nothing with the source: later edits to either
        side are invisible to the other.

        Raises:
            FileNotFoundError: If *src* or the parent of *dst* does not exist.

        """
        source = self._require(src)
        clone = self._clone(source)
        if self.exists(dst):
            self.delete(dst, recursive=True)
        self._link(dst, clone)

    def _clone(self, node: _Node) -> _Node:
        """Return a detached deep copy of *node* registered in the arena."""
        copy = self._new_node(
            node.file_type,
            content=node.content,
            size=node.size,
            permissions=node.permissions,
            owner=node.owner,
        )
        for name, child_id in node.children.items():
            child = self._clone(self._nodes[child_id])
            self._nodes[child.node_id] = child
            copy.children[name] = child.node_id
        return copy

    def rename(self, src: str, dst: str) -> None:
        """Move the node at *src* to *dst*, replacing any existing *dst*.

        Raises:
            FileNotFoundError: If *src* or the parent of *dst* does not exist.
            OSError: If *dst* lies inside *src*.

        """
        src_canonical = normalize_path(src)
        dst_canonical = normalize_path(dst)
        if src_canonical == dst_canonical:
            return
        if dst_canonical.startswith(src_canonical + "/"):
            msg = f"Cannot move {src} into itself"
            raise OSError(msg)

        node = self._require(src_canonical)
        src_parent_path, src_name = split_path(src_canonical)
        if self.exists(dst_canonical):
            self.delete(dst_canonical, recursive=True)

        dst_parent_path, dst_name = split_path(dst_canonical)
        dst_parent = self._require_dir(dst_parent_path)
        src_parent = self._require_dir(src_parent_path)
        del src_parent.children[src_name]
        dst_parent.children[dst_name] = node.node_id
        node.modified = self._clock()

    def __len__(self) -> int:
        """Return the number of nodes, the root included."""
        return len(self._nodes)
