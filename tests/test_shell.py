"""Tests for the shell dispatcher.

The shell tokenizes a line, expands aliases, gates admin commands,
finds the handler and turns whatever it returns (or raises) into an
``Outcome``.  These tests cover the dispatch rules and the commands that
touch session state other than the filesystem.
"""

import random

import pytest

from nexus_shell.auth import StaticAuth
from nexus_shell.logging import LogLevel
from nexus_shell.packages import programs
from nexus_shell.session import Session
from nexus_shell.shell import Command, CommandError, Outcome, Shell, format_size


def _shell(*, admin: bool = False) -> Shell:
    """Create a shell over a fresh, seeded session."""
    return Shell(Session(auth=StaticAuth(admin=admin), rng=random.Random(1)))


async def _run(shell: Shell, line: str) -> Outcome:
    """Execute *line* and return its outcome."""
    return await shell.execute(line)


class TestDispatch:
    """Verify lookup, unknown commands and the catch-all."""

    async def test_blank_line(self) -> None:
        """A blank line produces empty output and no log entry."""
        shell = _shell()
        assert await _run(shell, "   ") == Outcome("")
        assert shell.session.logger.entries == []

    async def test_unknown_command(self) -> None:
        """A name that is neither a command nor a package is not found."""
        outcome = await _run(_shell(), "frobnicate --now")
        assert outcome == Outcome("frobnicate: command not found", is_error=True)

    async def test_catalog_package_not_installed(self) -> None:
        """A known but uninstalled package suggests installing it."""
        outcome = await _run(_shell(), "cowsay hi")
        assert outcome.is_error
        assert outcome.text == "cowsay: command not found. Install it with: sudo apt install cowsay"

    async def test_installed_package_runs(self) -> None:
        """After installing, the package name runs its program."""
        shell = _shell()
        await _run(shell, "apt install cowsay")
        outcome = await _run(shell, "cowsay moo")
        assert not outcome.is_error
        assert "< moo >" in outcome.text

    async def test_uncatalogued_package_installs_and_runs(self) -> None:
        """A made-up package installs via sudo and then runs its fallback output."""
        shell = _shell()
        await _run(shell, "sudo apt install zz9plural")
        assert shell.session.packages.registry.is_installed("zz9plural")
        outcome = await _run(shell, "zz9plural")
        assert outcome.text.startswith("zz9plural ")
        assert "zz9plural - Package from Ubuntu repositories" in outcome.text

    async def test_handler_exception_becomes_error_line(self) -> None:
        """An unexpected exception is reported, logged and never escapes."""
        shell = _shell()

        def boom(args: list[str], is_admin: bool) -> str:
            raise RuntimeError("kaput")

        shell.register(Command("boom", boom))
        outcome = await _run(shell, "boom")
        assert outcome == Outcome("Error executing boom", is_error=True)
        errors = shell.session.logger.filter(min_level=LogLevel.ERROR)
        assert len(errors) == 1
        assert "kaput" in errors[0].message

    async def test_program_exception_becomes_error_line(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A failing installed program is caught like any handler."""
        shell = _shell()
        await _run(shell, "apt install cowsay")

        def broken(args: list[str], ctx: programs.ProgramContext) -> str:
            raise RuntimeError("moo")

        monkeypatch.setitem(programs.PROGRAMS, "cowsay", broken)
        outcome = await _run(shell, "cowsay hi")
        assert outcome == Outcome("Error executing cowsay", is_error=True)
        assert "moo" in shell.session.logger.filter(min_level=LogLevel.ERROR)[0].message

    async def test_command_error_is_error_line(self) -> None:
        """CommandError text is shown as an error line."""
        shell = _shell()

        def fails(args: list[str], is_admin: bool) -> str:
            raise CommandError("fails: nope")

        shell.register(Command("fails", fails))
        assert await _run(shell, "fails") == Outcome("fails: nope", is_error=True)

    async def test_awaitable_result_is_awaited(self) -> None:
        """A handler may return a coroutine; its result is shown."""
        shell = _shell()

        async def later(args: list[str], is_admin: bool) -> str:
            return " ".join(args)

        shell.register(Command("later", later))
        assert await _run(shell, "later a b") == Outcome("a b")

    async def test_every_command_is_logged(self) -> None:
        """Each dispatched line leaves an INFO entry from the shell."""
        shell = _shell()
        await _run(shell, "pwd")
        await _run(shell, "nope")
        messages = [e.message for e in shell.session.logger.filter(source="shell")]
        assert messages == ["pwd", "nope"]

    def test_command_names_sorted(self) -> None:
        """command_names returns the dispatch table sorted."""
        names = _shell().command_names()
        assert names == sorted(names)
        assert {"ls", "apt-get", "sudo", "users", "audit"} <= set(names)


class TestAdminGate:
    """Verify that admin-only commands need admin rights."""

    async def test_denied_without_admin(self) -> None:
        """Non-admins get a permission error and the handler is not called."""
        shell = _shell()
        called: list[bool] = []

        def secret(args: list[str], is_admin: bool) -> str:
            called.append(True)
            return "secret"

        shell.register(Command("secret", secret, admin_only=True))
        outcome = await _run(shell, "secret")
        assert outcome == Outcome(
            "secret: Permission denied - Admin access required", is_error=True
        )
        assert called == []

    async def test_denial_is_logged(self) -> None:
        """A refused admin command is logged as a warning from auth."""
        shell = _shell()
        await _run(shell, "shutdown")
        warnings = shell.session.logger.filter(source="auth")
        assert len(warnings) == 1
        assert warnings[0].level is LogLevel.WARNING

    async def test_admin_allowed(self) -> None:
        """Admins run admin commands."""
        outcome = await _run(_shell(admin=True), "shutdown")
        assert not outcome.is_error
        assert "Shutdown initiated" in outcome.text

    async def test_explicit_flag_overrides_provider(self) -> None:
        """An explicit is_admin wins over the auth provider."""
        outcome = await _shell().execute("shutdown", is_admin=True)
        assert not outcome.is_error

    async def test_sudo_does_not_grant_admin(self) -> None:
        """sudo re-dispatches with the caller's own admin flag."""
        outcome = await _run(_shell(), "sudo shutdown")
        assert outcome.is_error
        assert outcome.text == (
            "[sudo] password for user: \nshutdown: Permission denied - Admin access required"
        )

    async def test_help_shows_admin_section_only_to_admins(self) -> None:
        """The admin command list appears in help for admins."""
        assert "Admin Commands" not in (await _run(_shell(), "help")).text
        assert "Admin Commands" in (await _run(_shell(admin=True), "help")).text


class TestSudo:
    """Verify sudo's cosmetic prompt and listing."""

    async def test_prefix(self) -> None:
        """Output is prefixed with the password prompt."""
        outcome = await _run(_shell(), "sudo whoami")
        assert outcome.text == "[sudo] password for user: \nuser"

    async def test_list(self) -> None:
        """sudo -l shows the sudoers entry."""
        outcome = await _run(_shell(), "sudo -l")
        assert outcome.text.endswith("(ALL : ALL) ALL")

    async def test_missing_command(self) -> None:
        """sudo alone needs a command."""
        assert (await _run(_shell(), "sudo")).text == "sudo: a command is required"

    async def test_unknown_command(self) -> None:
        """sudo with an unknown name reports it."""
        assert (await _run(_shell(), "sudo nope")).text == "sudo: nope: command not found"

    async def test_apt_install_git(self) -> None:
        """sudo apt install git shows the dependency lines and installs them."""
        shell = _shell()
        outcome = await _run(shell, "sudo apt install git")
        assert "The following additional packages will be installed:" in outcome.text
        assert "libcurl4 libssl1.1" in outcome.text
        registry = shell.session.packages.registry
        assert all(registry.is_installed(n) for n in ("git", "libcurl4", "libssl1.1"))


class TestAliases:
    """Verify alias expansion and the alias commands."""

    async def test_seeded_alias_expands(self) -> None:
        """``ll`` runs ``ls -la``."""
        shell = _shell()
        assert (await _run(shell, "ll")).text == (await _run(shell, "ls -la")).text

    async def test_alias_keeps_arguments(self) -> None:
        """Arguments after an alias are passed on."""
        shell = _shell()
        await _run(shell, "alias say=echo")
        assert (await _run(shell, "say hi there")).text == "hi there"

    async def test_dot_dot_alias(self) -> None:
        """``..`` changes to the parent directory."""
        shell = _shell()
        await _run(shell, "..")
        assert shell.session.cwd == "/home"

    async def test_list_aliases(self) -> None:
        """alias with no arguments lists every alias."""
        out = (await _run(_shell(), "alias")).text
        assert "alias ll='ls -la'" in out

    async def test_unalias(self) -> None:
        """unalias removes an alias; a second time is an error."""
        shell = _shell()
        assert (await _run(shell, "unalias ll")).text == ""
        assert (await _run(shell, "unalias ll")).is_error


class TestEnvironmentCommands:
    """Verify echo, export, unset and env."""

    async def test_echo_substitutes_variables(self) -> None:
        """``$USER`` is replaced by its value."""
        assert (await _run(_shell(), "echo hello $USER")).text == "hello user"

    async def test_echo_unknown_variable_is_empty(self) -> None:
        """An unset variable expands to nothing."""
        assert (await _run(_shell(), "echo [$NOPE]")).text == "[]"

    async def test_echo_strips_quotes(self) -> None:
        """Outer quotes are removed."""
        assert (await _run(_shell(), 'echo "hi there"')).text == "hi there"

    async def test_export_then_echo(self) -> None:
        """An exported variable is visible to echo and env."""
        shell = _shell()
        await _run(shell, "export GREETING=hello")
        assert (await _run(shell, "echo $GREETING")).text == "hello"
        assert "GREETING=hello" in (await _run(shell, "env")).text

    async def test_export_invalid(self) -> None:
        """A malformed export is rejected."""
        outcome = await _run(_shell(), "export 1abc")
        assert outcome == Outcome("export: '1abc': not a valid identifier", is_error=True)

    async def test_export_listing(self) -> None:
        """export alone lists variables as declare -x lines."""
        assert 'declare -x HOME="/home/user"' in (await _run(_shell(), "export")).text

    async def test_export_pwd_moves_cwd(self) -> None:
        """Exporting PWD to a directory changes the working directory."""
        shell = _shell()
        await _run(shell, "export PWD=/etc")
        assert shell.session.cwd == "/etc"

    async def test_export_pwd_missing(self) -> None:
        """PWD cannot point at a path that does not exist."""
        shell = _shell()
        outcome = await _run(shell, "export PWD=/nope")
        assert outcome == Outcome("export: /nope: No such file or directory", is_error=True)
        assert shell.session.cwd == "/home/user"

    async def test_export_pwd_file(self) -> None:
        """PWD cannot point at a file."""
        outcome = await _run(_shell(), "export PWD=readme.txt")
        assert outcome == Outcome("export: readme.txt: Not a directory", is_error=True)

    async def test_unset(self) -> None:
        """unset removes a variable."""
        shell = _shell()
        await _run(shell, "unset EDITOR")
        assert "EDITOR" not in shell.session.env


class TestSessionCommands:
    """Verify history, exit, help, man and which."""

    async def test_history_empty(self) -> None:
        """A shell with no history says so."""
        assert (await _run(_shell(), "history")).text == "No history"

    async def test_history_numbered(self) -> None:
        """History entries are numbered from one."""
        shell = _shell()
        shell.session.history.extend(["pwd", "ls"])
        assert (await _run(shell, "history")).text == "     1  pwd\n     2  ls"

    async def test_exit_sets_flag(self) -> None:
        """exit asks the front end to end the session."""
        assert await _run(_shell(), "exit") == Outcome("", exit=True)

    async def test_exit_text_is_just_text(self) -> None:
        """Output that happens to spell a marker never ends the session."""
        outcome = await _run(_shell(), "echo __EXIT__")
        assert outcome == Outcome("__EXIT__")

    async def test_clear_sets_flag(self) -> None:
        """clear, its alias and sudo clear all ask for a clear screen."""
        shell = _shell()
        assert (await _run(shell, "clear")).clear
        assert (await _run(shell, "cls")).clear
        assert (await _run(shell, "sudo clear")).clear

    async def test_help_lists_categories(self) -> None:
        """help shows the header and each category."""
        out = (await _run(_shell(), "help")).text
        assert out.startswith("NexusOS Terminal - Available Commands\n" + "=" * 40)
        assert "\x1b[33mFile Operations:\x1b[0m" in out

    async def test_help_command_is_man_page(self) -> None:
        """help <cmd> shows the same page as man <cmd>."""
        shell = _shell()
        assert (await _run(shell, "help ls")).text == (await _run(shell, "man ls")).text

    async def test_man_without_argument(self) -> None:
        """man alone asks which page."""
        assert (await _run(_shell(), "man")).text == "What manual page do you want?"

    async def test_man_unknown(self) -> None:
        """An unknown page says there is no entry."""
        assert (await _run(_shell(), "man nope")).text.startswith("No manual entry for nope")

    async def test_which(self) -> None:
        """which knows table commands and reports unknown names."""
        shell = _shell()
        assert (await _run(shell, "which ls")).text == "/usr/bin/ls"
        assert (await _run(shell, "which pwd")).text == "/usr/bin/pwd"
        assert (await _run(shell, "which nope")).text == "nope not found"


class TestSystemCommands:
    """Verify a sample of the canned system commands."""

    async def test_uname_all(self) -> None:
        """uname -a prints the full system string."""
        assert (await _run(_shell(), "uname -a")).text == (
            "NexusOS nexusos 1.0.0-nexus #1 SMP PREEMPT x86_64 GNU/Linux"
        )

    async def test_whoami_and_id(self) -> None:
        """whoami and id report the session user."""
        shell = _shell()
        assert (await _run(shell, "whoami")).text == "user"
        assert (await _run(shell, "id")).text.startswith("uid=1000(user)")

    async def test_hostname_flags(self) -> None:
        """hostname -I prints the address; -f the FQDN."""
        shell = _shell()
        assert (await _run(shell, "hostname -I")).text == "192.168.1.100"
        assert (await _run(shell, "hostname -f")).text == "nexusos.local"

    async def test_ping_count(self) -> None:
        """ping -c N sends N packets."""
        out = (await _run(_shell(), "ping -c 2 example.com")).text
        assert out.count("icmp_seq=") == 2
        assert "2 packets transmitted, 2 received" in out

    async def test_kill_usage_and_list(self) -> None:
        """kill with no arguments is a usage error; -l lists signals."""
        shell = _shell()
        assert (await _run(shell, "kill")).is_error
        assert "SIGHUP" in (await _run(shell, "kill -l")).text
        assert (await _run(shell, "kill 42")).text == "[Simulated] Sent signal to process 42"

    async def test_tar_invalid_option(self) -> None:
        """tar without -c or -x is rejected."""
        assert (await _run(_shell(), "tar -t a.tar")).text == "tar: invalid option"

    async def test_chmod_acknowledged(self) -> None:
        """chmod prints an acknowledgement and changes nothing."""
        assert (await _run(_shell(), "chmod 755 notes.txt")).text == (
            "[Simulated] Changed permissions of notes.txt to 755"
        )

    async def test_umask(self) -> None:
        """umask alone prints the default mask."""
        assert (await _run(_shell(), "umask")).text == "0022"

    async def test_neofetch_counts_packages(self) -> None:
        """neofetch reports the installed package count."""
        assert "6 (dpkg)" in (await _run(_shell(), "neofetch")).text

    async def test_cal_highlights_today(self) -> None:
        """cal marks today in inverse video."""
        assert "\x1b[7m" in (await _run(_shell(), "cal")).text


class TestFormatSize:
    """Verify human-readable sizes."""

    def test_bytes(self) -> None:
        """Below 1024 the number is shown as-is."""
        assert format_size(58) == "58"

    def test_kilobytes(self) -> None:
        """Kilobytes get one decimal and a K."""
        assert format_size(4096) == "4.0K"

    def test_megabytes(self) -> None:
        """Megabytes get one decimal and an M."""
        assert format_size(2048576) == "2.0M"
