"""Tests for the readline tab-completion engine.

The Completer class provides context-aware completion for the console
REPL.  Its logic is pure (no I/O): it looks at the input line and
returns candidate strings, making it fully testable without readline.
"""

from unittest.mock import patch

from nexus_shell.completer import Completer
from nexus_shell.session import Session
from nexus_shell.shell import Shell


def _completer() -> tuple[Shell, Completer]:
    """Create a shell and a completer over a fresh session."""
    shell = Shell(Session())
    return shell, Completer(shell)


class TestCommandCompletion:
    """Verify completion of the first word on the line."""

    def test_empty_line_returns_all_commands(self) -> None:
        """Tab on a blank line lists every command."""
        shell, completer = _completer()
        assert set(shell.command_names()) <= set(completer.completions("", ""))

    def test_partial_match(self) -> None:
        """A prefix returns only matching commands."""
        _shell, completer = _completer()
        candidates = completer.completions("mk", "mk")
        assert candidates == ["mkdir"]

    def test_installed_packages_complete(self) -> None:
        """Installed packages are completed like commands."""
        shell, completer = _completer()
        shell.session.packages.install(["cowsay"])
        assert "cowsay" in completer.completions("cow", "cow")

    def test_aliases_complete(self) -> None:
        """Aliases are completed like commands."""
        _shell, completer = _completer()
        assert "ll" in completer.completions("l", "l")


class TestArgumentCompletion:
    """Verify completion of arguments."""

    def test_apt_subcommands(self) -> None:
        """The second word of apt completes to sub-commands."""
        _shell, completer = _completer()
        assert completer.completions("in", "apt in") == ["install"]

    def test_apt_install_catalog(self) -> None:
        """apt install completes catalog names."""
        _shell, completer = _completer()
        assert "cowsay" in completer.completions("cow", "apt install cow")

    def test_apt_remove_installed(self) -> None:
        """apt remove completes installed names."""
        _shell, completer = _completer()
        assert completer.completions("ba", "apt remove ba") == ["bash"]

    def test_paths_in_cwd(self) -> None:
        """A bare prefix completes names in the cwd; directories get a slash."""
        _shell, completer = _completer()
        assert completer.completions("Do", "ls Do") == ["Documents/", "Downloads/"]

    def test_absolute_paths(self) -> None:
        """An absolute prefix completes in that directory."""
        _shell, completer = _completer()
        assert completer.completions("/etc/ho", "cat /etc/ho") == ["/etc/hostname", "/etc/hosts"]

    def test_missing_directory(self) -> None:
        """A prefix under a missing directory completes to nothing."""
        _shell, completer = _completer()
        assert completer.completions("/nope/x", "cat /nope/x") == []

    def test_env_vars_after_unset(self) -> None:
        """unset completes variable names."""
        _shell, completer = _completer()
        assert completer.completions("HO", "unset HO") == ["HOME", "HOSTNAME"]

    def test_dollar_vars(self) -> None:
        """``$`` prefixes complete to variable references."""
        _shell, completer = _completer()
        assert completer.completions("$US", "echo $US") == ["$USER"]


class TestReadlineCallback:
    """Verify the readline state protocol."""

    def test_complete_walks_candidates(self) -> None:
        """complete(text, state) returns candidates in order, then None."""
        _shell, completer = _completer()
        with patch("nexus_shell.completer.readline.get_line_buffer", return_value="mkd"):
            assert completer.complete("mkd", 0) == "mkdir"
            assert completer.complete("mkd", 1) is None
