"""Path resolution: turning what the user typed into an absolute path.

A shell user rarely types full paths.  They type ``notes.txt``,
``../Downloads`` or ``~/Documents`` and expect the shell to work out
which node they mean, relative to the **current working directory**.

Resolution rules:

- ``/etc/hosts``: already absolute, returned unchanged.
- ``~/Documents``: the leading ``~`` becomes the home directory and the
  remainder is treated as absolute.
- anything else: walked segment by segment from the cwd: ``..`` pops
  one segment (never above the root), ``.`` and empty segments are
  dropped, everything else is pushed.

Resolution is pure string work; it never consults the filesystem.
Looking the result up is the filesystem's job.
"""

HOME_DIR = "/home/user"


def _canonical_parts(parts: list[str], segments: list[str]) -> list[str]:
    """Apply ``.``/``..`` rules to *segments* on top of *parts*."""
    for segment in segments:
        if segment == "..":
            if parts:
                parts.pop()
        elif segment not in (".", ""):
            parts.append(segment)
    return parts


def resolve_path(cwd: str, path: str, *, home: str = HOME_DIR) -> str:
    """Resolve *path* against *cwd* and return an absolute path.

    Args:
        cwd: The current working directory (absolute).
        path: The path the user typed.
        home: The directory ``~`` expands to.

    Returns:
        An absolute path starting with ``/``.

    """
    if path.startswith("/"):
        return path
    if path.startswith("~"):
        return home + path[1:]

    parts = [p for p in cwd.split("/") if p]
    return "/" + "/".join(_canonical_parts(parts, path.split("/")))


def normalize_path(path: str) -> str:
    """Return the canonical form of an absolute path.

    Examples::

        "/home/user/../tmp" → "/home/tmp"
        "/a/./b/"           → "/a/b"
        "/.."               → "/"

    """
    return "/" + "/".join(_canonical_parts([], path.split("/")))


def split_path(path: str) -> tuple[str, str]:
    """Split an absolute path into (parent_path, child_name).

    Examples::

        "/foo/bar/baz.txt" → ("/foo/bar", "baz.txt")
        "/hello.txt"       → ("/", "hello.txt")
        "/"                → ("", "")

    """
    if path == "/":
        return ("", "")
    path = path.rstrip("/")
    last_slash = path.rfind("/")
    if last_slash == 0:
        return ("/", path[1:])
    return (path[:last_slash], path[last_slash + 1 :])


def join_path(directory: str, name: str) -> str:
    """Join a directory path and a child name."""
    return f"{directory.rstrip('/')}/{name}"
