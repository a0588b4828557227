"""Tests for path resolution.

``resolve_path`` turns what the user typed into an absolute path
relative to the working directory.  It is pure string work, so these
tests need no filesystem at all.
"""

from nexus_shell.fs.paths import join_path, normalize_path, resolve_path, split_path


class TestResolvePath:
    """Verify resolution of relative, absolute and home paths."""

    def test_absolute_path_unchanged(self) -> None:
        """A path starting with / is returned as typed."""
        assert resolve_path("/home/user", "/etc/hosts") == "/etc/hosts"

    def test_relative_name(self) -> None:
        """A bare name is appended to the cwd."""
        assert resolve_path("/home/user", "Documents") == "/home/user/Documents"

    def test_dot_dot_pops(self) -> None:
        """``..`` removes one segment."""
        assert resolve_path("/home/user/Documents", "../Downloads") == "/home/user/Downloads"

    def test_dot_dot_clamped_at_root(self) -> None:
        """Excess ``..`` segments stop at the root instead of failing."""
        assert resolve_path("/home", "../../../..") == "/"

    def test_dot_and_empty_segments_dropped(self) -> None:
        """``.`` and doubled slashes disappear."""
        assert resolve_path("/home/user", "./Documents//notes.md") == (
            "/home/user/Documents/notes.md"
        )

    def test_tilde_expands_home(self) -> None:
        """``~/x`` is the home directory plus the remainder."""
        assert resolve_path("/tmp", "~/Music") == "/home/user/Music"

    def test_tilde_alone(self) -> None:
        """``~`` alone is the home directory."""
        assert resolve_path("/tmp", "~") == "/home/user"

    def test_custom_home(self) -> None:
        """The home directory is configurable."""
        assert resolve_path("/", "~/x", home="/home/alice") == "/home/alice/x"

    def test_resolution_is_idempotent(self) -> None:
        """Resolving an already-resolved path gives the same path."""
        for cwd, path in [("/home/user", "../user/./Documents"), ("/", "a/b/../c"), ("/tmp", "~")]:
            once = resolve_path(cwd, path)
            assert resolve_path(cwd, once) == once

    def test_result_always_absolute(self) -> None:
        """Relative resolution always yields a path starting with /."""
        for path in ["", ".", "..", "a", "../../b"]:
            assert resolve_path("/home/user", path).startswith("/")


class TestNormalizePath:
    """Verify canonical forms of absolute paths."""

    def test_removes_dot_dot(self) -> None:
        """``/home/user/../tmp`` becomes ``/home/tmp``."""
        assert normalize_path("/home/user/../tmp") == "/home/tmp"

    def test_trailing_slash(self) -> None:
        """A trailing slash is dropped."""
        assert normalize_path("/a/./b/") == "/a/b"

    def test_root_parent_is_root(self) -> None:
        """``/..`` is the root."""
        assert normalize_path("/..") == "/"


class TestSplitAndJoin:
    """Verify splitting a path into parent and name."""

    def test_split_nested(self) -> None:
        """A nested path splits at the last slash."""
        assert split_path("/foo/bar/baz.txt") == ("/foo/bar", "baz.txt")

    def test_split_top_level(self) -> None:
        """A top-level entry has the root as its parent."""
        assert split_path("/hello.txt") == ("/", "hello.txt")

    def test_split_root(self) -> None:
        """The root has no parent and no name."""
        assert split_path("/") == ("", "")

    def test_join_at_root(self) -> None:
        """Joining under the root does not double the slash."""
        assert join_path("/", "etc") == "/etc"
        assert join_path("/etc", "hosts") == "/etc/hosts"
