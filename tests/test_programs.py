"""Tests for the simulated programs behind installed packages."""

from datetime import datetime

from nexus_shell.fs.template import build_filesystem
from nexus_shell.packages.catalog import InstalledPackage
from nexus_shell.packages.programs import ProgramContext, run_program


def _ctx(cwd: str = "/home/user/Documents") -> ProgramContext:
    """Create a program context over the seeded filesystem."""
    return ProgramContext(
        cwd=cwd, fs=build_filesystem(), installed_count=6, user="user", hostname="nexusos"
    )


def _pkg(name: str) -> InstalledPackage:
    return InstalledPackage(name, "1.0.0", f"{name} description", "100 kB")


class TestPrograms:
    """Verify a few of the simulated programs."""

    def test_cowsay_wraps_message(self) -> None:
        """cowsay draws a bubble as wide as the message."""
        out = run_program(_pkg("cowsay"), ["moo"], _ctx())
        assert out.splitlines()[1] == "< moo >"
        assert out.splitlines()[0] == " _____"

    def test_tree_lists_cwd(self) -> None:
        """tree shows the entries of the working directory."""
        out = run_program(_pkg("tree"), [], _ctx())
        assert out.startswith(".")
        assert "notes.md" in out
        assert "0 directories, 2 files" in out

    def test_git_status(self) -> None:
        """git status reports a clean tree."""
        out = run_program(_pkg("git"), ["status"], _ctx())
        assert "nothing to commit, working tree clean" in out

    def test_git_log_uses_clock(self) -> None:
        """git log dates the commit with the session clock."""
        ctx = ProgramContext(
            cwd="/home/user",
            fs=build_filesystem(),
            installed_count=6,
            clock=lambda: datetime(2025, 1, 15, 10, 30),
        )
        out = run_program(_pkg("git"), ["log"], ctx)
        assert "Date:   Wed Jan 15 2025" in out
        assert "Author: User <user@nexusos.local>" in out

    def test_figlet_has_six_rows(self) -> None:
        """figlet renders banner text six rows tall."""
        assert len(run_program(_pkg("figlet"), ["HI"], _ctx()).splitlines()) == 6

    def test_unknown_program_falls_back(self) -> None:
        """A package with no simulation prints its name, version and description."""
        out = run_program(_pkg("zz9plural"), [], _ctx())
        assert out == (
            "zz9plural 1.0.0\nzz9plural description\n\n"
            "Run 'zz9plural --help' for usage information."
        )
