"""The shell: command interpreter for the virtual machine.

The shell reads one submitted line, splits it into a command name and
arguments, looks the name up in its dispatch table and runs the
handler against the session.

Design choices:
    - **Returns text, not prints.**  Handlers return strings; the caller
      (a ``Terminal``, the REPL, the web app) decides how to show them.
      ``clear`` and ``exit`` return an ``Outcome`` with a flag set, so
      no output text is ever mistaken for a screen action.
    - **Command dispatch via a table of ``Command`` records.**  Each
      record names its handler and whether it is admin-only, so the
      privilege gate is data, not a chain of ``if`` statements.
    - **Ready or pending.**  A handler returns either a ``str`` or an
      awaitable of one.  ``Shell.execute`` is a coroutine and always
      awaits pending results, so the two async admin handlers need no
      special casing.
    - **Errors are lines.**  A handler signals a user-facing failure by
      raising ``CommandError``; anything else it raises becomes the
      line ``Error executing <cmd>`` and is logged.  Nothing a handler
      does can end the session.
"""

import calendar
import inspect
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from datetime import UTC
from typing import TypeAlias

from nexus_shell import canned
from nexus_shell.admin_api import AdminApiError, ServiceResponseError
from nexus_shell.fs.filesystem import DIRECTORY_SIZE, NodeInfo
from nexus_shell.logging import LogLevel
from nexus_shell.packages.programs import run_program
from nexus_shell.session import Session

Handler: TypeAlias = "Callable[[list[str], bool], str | Outcome | Awaitable[str | Outcome]]"

_DEFAULT_LINES = 10
_ROOT_INODES = 3276800
_QUOTES = ("'", '"')


class CommandError(Exception):
    """Raised by a handler to report a user-facing error line."""


@dataclass(frozen=True)
class Command:
    """One entry in the dispatch table."""

    name: str
    handler: Handler
    admin_only: bool = False


@dataclass(frozen=True)
class Outcome:
    """The visible result of one dispatched command.

    ``clear`` and ``exit`` ask the front end to wipe the screen or end
    the session; they are never encoded in ``text``.
    """

    text: str
    is_error: bool = False
    clear: bool = False
    exit: bool = False


def format_size(size: int) -> str:
    """Render a byte count the way ``ls -h`` does (``2.0M``, ``4.0K``)."""
    if size < 1024:  # noqa: PLR2004
        return str(size)
    for unit, scale in (("K", 1024), ("M", 1024**2)):
        if size < scale * 1024:
            return f"{size / scale:.1f}{unit}"
    return f"{size / 1024**3:.1f}G"


def _flags(args: list[str]) -> set[str]:
    """Return every single-letter flag in *args* (``-la`` gives l and a)."""
    letters: set[str] = set()
    for arg in args:
        if arg.startswith("-") and not arg.startswith("--"):
            letters.update(arg[1:])
    return letters


def _operands(args: list[str]) -> list[str]:
    """Return the arguments that are not flags."""
    return [a for a in args if not a.startswith("-")]


def _strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in _QUOTES:  # noqa: PLR2004
        return text[1:-1]
    return text


def _line_count_option(args: list[str]) -> tuple[int, list[str]]:
    """Split ``-n N`` out of *args* for head/tail."""
    count = _DEFAULT_LINES
    rest: list[str] = []
    skip = False
    for i, arg in enumerate(args):
        if skip:
            skip = False
            continue
        if arg == "-n" and i + 1 < len(args):
            try:
                count = int(args[i + 1])
            except ValueError:
                count = _DEFAULT_LINES
            skip = True
        elif not arg.startswith("-"):
            rest.append(arg)
    return count, rest


class Shell:
    """Command interpreter bound to one session."""

    def __init__(self, session: Session | None = None) -> None:
        """Create a shell over *session* (a fresh one when omitted)."""
        self._session = session or Session()
        self._commands: dict[str, Command] = {}
        for name, handler in (
            # File operations
            ("ls", self._cmd_ls),
            ("cd", self._cmd_cd),
            ("pwd", self._cmd_pwd),
            ("cat", self._cmd_cat),
            ("head", self._cmd_head),
            ("tail", self._cmd_tail),
            ("touch", self._cmd_touch),
            ("mkdir", self._cmd_mkdir),
            ("rm", self._cmd_rm),
            ("rmdir", self._cmd_rmdir),
            ("cp", self._cmd_cp),
            ("mv", self._cmd_mv),
            ("find", self._cmd_find),
            ("locate", self._cmd_locate),
            ("file", self._cmd_file),
            # Text processing
            ("grep", self._cmd_grep),
            ("sed", self._cmd_sed),
            ("awk", self._cmd_awk),
            ("sort", self._cmd_sort),
            ("uniq", self._cmd_uniq),
            ("wc", self._cmd_wc),
            ("cut", self._cmd_cut),
            ("tr", self._cmd_tr),
            ("diff", self._cmd_diff),
            ("tee", self._cmd_tee),
            # System info
            ("uname", self._cmd_uname),
            ("hostname", self._cmd_hostname),
            ("uptime", self._cmd_uptime),
            ("date", self._cmd_date),
            ("cal", self._cmd_cal),
            ("whoami", self._cmd_whoami),
            ("id", self._cmd_id),
            ("groups", self._cmd_groups),
            ("w", self._cmd_w),
            ("who", self._cmd_who),
            ("last", self._cmd_last),
            # Processes
            ("ps", self._cmd_ps),
            ("top", self._cmd_top),
            ("htop", self._cmd_htop),
            ("kill", self._cmd_kill),
            ("killall", self._cmd_killall),
            ("jobs", self._cmd_jobs),
            ("bg", self._cmd_bg),
            ("fg", self._cmd_fg),
            ("nohup", self._cmd_nohup),
            # Disk and memory
            ("df", self._cmd_df),
            ("du", self._cmd_du),
            ("free", self._cmd_free),
            ("mount", self._cmd_mount),
            ("umount", self._cmd_umount),
            # Network
            ("ping", self._cmd_ping),
            ("ifconfig", self._cmd_ifconfig),
            ("ip", self._cmd_ip),
            ("netstat", self._cmd_netstat),
            ("ss", self._cmd_ss),
            ("curl", self._cmd_curl),
            ("wget", self._cmd_wget),
            ("host", self._cmd_host),
            ("dig", self._cmd_dig),
            ("nslookup", self._cmd_nslookup),
            # Permissions
            ("chmod", self._cmd_chmod),
            ("chown", self._cmd_chown),
            ("chgrp", self._cmd_chgrp),
            ("umask", self._cmd_umask),
            # Archives
            ("tar", self._cmd_tar),
            ("gzip", self._cmd_gzip),
            ("gunzip", self._cmd_gunzip),
            ("zip", self._cmd_zip),
            ("unzip", self._cmd_unzip),
            # Packages
            ("apt", self._cmd_apt),
            ("apt-get", self._cmd_apt),
            ("dpkg", self._cmd_dpkg),
            # Users
            ("useradd", self._cmd_useradd),
            ("userdel", self._cmd_userdel),
            ("passwd", self._cmd_passwd),
            ("su", self._cmd_su),
            ("sudo", self._cmd_sudo),
            # Remote
            ("ssh", self._cmd_ssh),
            ("scp", self._cmd_scp),
            ("sftp", self._cmd_sftp),
            ("rsync", self._cmd_rsync),
            # Misc
            ("echo", self._cmd_echo),
            ("printf", self._cmd_printf),
            ("clear", self._cmd_clear),
            ("history", self._cmd_history),
            ("alias", self._cmd_alias),
            ("unalias", self._cmd_unalias),
            ("export", self._cmd_export),
            ("unset", self._cmd_unset),
            ("env", self._cmd_env),
            ("which", self._cmd_which),
            ("whereis", self._cmd_whereis),
            ("man", self._cmd_man),
            ("info", self._cmd_info),
            ("help", self._cmd_help),
            ("exit", self._cmd_exit),
            ("neofetch", self._cmd_neofetch),
        ):
            self.register(Command(name, handler))
        for name, handler in (
            ("users", self._cmd_users),
            ("sysadmin", self._cmd_sysadmin),
            ("logs", self._cmd_logs),
            ("audit", self._cmd_audit),
            ("shutdown", self._cmd_shutdown),
        ):
            self.register(Command(name, handler, admin_only=True))

    @property
    def session(self) -> Session:
        """Return the session this shell operates on."""
        return self._session

    def register(self, command: Command) -> None:
        """Add or replace an entry in the dispatch table."""
        self._commands[command.name] = command

    def command_names(self) -> list[str]:
        """Return every command name, sorted."""
        return sorted(self._commands)

    def get(self, name: str) -> Command | None:
        """Return the dispatch-table entry for *name*, or None."""
        return self._commands.get(name)

    # -- dispatch ----------------------------------------------------------

    def _expand_alias(self, tokens: list[str]) -> list[str]:
        """Replace the first token with its alias text, keeping arguments."""
        alias = self._session.aliases.get(tokens[0])
        if alias is None:
            return tokens
        return alias.split() + tokens[1:]

    async def execute(self, line: str, *, is_admin: bool | None = None) -> Outcome:
        """Tokenize and run one command line.

        Args:
            line: The raw text the user submitted.
            is_admin: The caller's admin flag; asked of the session's auth
                provider when omitted.

        Returns:
            The text to show and whether it is an error line.

        """
        tokens = line.split()
        if not tokens:
            return Outcome("")
        tokens = self._expand_alias(tokens)
        admin = await self._session.is_admin() if is_admin is None else is_admin
        self._session.logger.log(
            LogLevel.INFO, " ".join(tokens), source="shell", user=self._session.user
        )
        return await self.dispatch(tokens[0], tokens[1:], is_admin=admin)

    async def dispatch(self, name: str, args: list[str], *, is_admin: bool) -> Outcome:
        """Gate, look up and invoke one command."""
        command = self._commands.get(name)
        if command is None:
            return await self._invoke(name, lambda: self._run_package(name, args))

        if command.admin_only and not is_admin:
            self._session.logger.log(
                LogLevel.WARNING,
                f"denied admin command {name}",
                source="auth",
                user=self._session.user,
            )
            return Outcome(f"{name}: Permission denied - Admin access required", is_error=True)

        return await self._invoke(name, lambda: command.handler(args, is_admin))

    async def _invoke(
        self, name: str, call: Callable[[], str | Outcome | Awaitable[str | Outcome]]
    ) -> Outcome:
        """Run *call* under the catch-all that turns failures into lines."""
        try:
            result = call()
            if inspect.isawaitable(result):
                result = await result
        except CommandError as e:
            return Outcome(str(e), is_error=True)
        except Exception as e:  # noqa: BLE001
            self._session.logger.log(
                LogLevel.ERROR, f"{name} failed: {e!r}", source="shell", user=self._session.user
            )
            return Outcome(f"Error executing {name}", is_error=True)
        if isinstance(result, Outcome):
            return result
        return Outcome(result)

    def _run_package(self, name: str, args: list[str]) -> Outcome:
        """Run an installed package by name, or report the name as unknown."""
        packages = self._session.packages
        installed = packages.registry.get(name)
        if installed is not None:
            return Outcome(run_program(installed, args, self._session.program_context()))
        if name in packages.catalog:
            return Outcome(
                f"{name}: command not found. Install it with: sudo apt install {name}",
                is_error=True,
            )
        return Outcome(f"{name}: command not found", is_error=True)

    # -- helpers -----------------------------------------------------------

    def _entry_path(self, cmd: str, verb: str, name: str) -> str:
        """Return the path of *name* in the cwd, refusing names with slashes."""
        if "/" in name or name in (".", ".."):
            msg = f"{cmd}: cannot {verb} '{name}': Invalid argument"
            raise CommandError(msg)
        return self._session.child_path(name)

    def _read_file(self, cmd: str, name: str) -> str:
        """Read *name* for a text command, raising the conventional errors."""
        info = self._session.fs.lookup(self._session.resolve(name))
        if info is None:
            msg = f"{cmd}: {name}: No such file or directory"
            raise CommandError(msg)
        if info.is_dir:
            msg = f"{cmd}: {name}: Is a directory"
            raise CommandError(msg)
        return self._session.fs.read(self._session.resolve(name))

    def _now(self) -> str:
        return self._session.clock().strftime("%H:%M:%S")

    # -- file operations ---------------------------------------------------

    def _cmd_pwd(self, _args: list[str], _admin: bool) -> str:
        """Print the working directory."""
        return self._session.cwd

    def _cmd_cd(self, args: list[str], _admin: bool) -> str:
        """Change the working directory (``cd`` alone goes home)."""
        target = args[0] if args else self._session.home
        path = self._session.resolve(target)
        info = self._session.fs.lookup(path)
        if info is None:
            msg = f"cd: {target}: No such file or directory"
            raise CommandError(msg)
        if not info.is_dir:
            msg = f"cd: {target}: Not a directory"
            raise CommandError(msg)
        self._session.cwd = path
        return ""

    @staticmethod
    def _colour_name(name: str, info: NodeInfo) -> str:
        if info.is_dir:
            return f"\x1b[34m{name}\x1b[0m"
        if info.is_executable:
            return f"\x1b[32m{name}\x1b[0m"
        return name

    def _long_line(self, name: str, info: NodeInfo, *, human: bool) -> str:
        size = format_size(info.size) if human else str(info.size)
        stamp = info.modified.strftime("%b %d %H:%M") if info.modified else "Jan 15 10:00"
        return (
            f"{info.permissions} 1 {info.owner} {info.owner} {size:>5} {stamp} "
            f"{self._colour_name(name, info)}"
        )

    def _cmd_ls(self, args: list[str], _admin: bool) -> str:
        """List a directory (``-a`` hidden, ``-l`` long, ``-h`` human sizes)."""
        flags = _flags(args)
        show_all, long_format, human = "a" in flags, "l" in flags, "h" in flags
        targets = _operands(args)
        target = targets[0] if targets else "."
        path = self._session.resolve(target)
        fs = self._session.fs
        info = fs.lookup(path)
        if info is None:
            msg = f"ls: cannot access '{target}': No such file or directory"
            raise CommandError(msg)
        if not info.is_dir:
            if long_format:
                return self._long_line(target, info, human=True)
            return target

        entries = [(n, i) for n, i in fs.entries(path) if show_all or not n.startswith(".")]
        if long_format:
            lines = [f"total {len(entries)}"]
            if show_all:
                here = fs.stat(path)
                stamp = here.modified.strftime("%b %d %H:%M") if here.modified else "Jan 15 10:00"
                for dot in (".", ".."):
                    lines.append(
                        f"{here.permissions} 2 {here.owner} {here.owner} "
                        f"{DIRECTORY_SIZE:>5} {stamp} {dot}"
                    )
            lines.extend(self._long_line(n, i, human=human) for n, i in entries)
            return "\n".join(lines)
        return "  ".join(self._colour_name(n, i) for n, i in entries)

    def _cmd_cat(self, args: list[str], _admin: bool) -> str:
        """Print files (``-n`` numbers lines)."""
        files = _operands(args)
        if not files:
            msg = "cat: missing file operand"
            raise CommandError(msg)
        number = "n" in _flags(args)
        chunks: list[str] = []
        failures = 0
        for name in files:
            try:
                content = self._read_file("cat", name)
            except CommandError as e:
                chunks.append(str(e))
                failures += 1
                continue
            if number:
                content = "\n".join(
                    f"     {i}  {line}" for i, line in enumerate(content.split("\n"), start=1)
                )
            chunks.append(content)
        if failures == len(files):
            raise CommandError("\n".join(chunks))
        return "\n".join(chunks)

    def _head_tail(self, cmd: str, args: list[str]) -> list[str]:
        count, operands = _line_count_option(args)
        if not operands:
            msg = f"{cmd}: missing file operand"
            raise CommandError(msg)
        name = operands[0]
        info = self._session.fs.lookup(self._session.resolve(name))
        if info is None:
            msg = f"{cmd}: cannot open '{name}': No such file or directory"
            raise CommandError(msg)
        if info.is_dir:
            msg = f"{cmd}: {name}: Is a directory"
            raise CommandError(msg)
        lines = self._session.fs.read(self._session.resolve(name)).split("\n")
        return lines[:count] if cmd == "head" else lines[-count:] if count > 0 else []

    def _cmd_head(self, args: list[str], _admin: bool) -> str:
        """Print the first lines of a file."""
        return "\n".join(self._head_tail("head", args))

    def _cmd_tail(self, args: list[str], _admin: bool) -> str:
        """Print the last lines of a file."""
        return "\n".join(self._head_tail("tail", args))

    def _cmd_touch(self, args: list[str], _admin: bool) -> str:
        """Create empty files or refresh their timestamps."""
        names = _operands(args)
        if not names:
            msg = "touch: missing file operand"
            raise CommandError(msg)
        for name in names:
            self._session.fs.touch(self._entry_path("touch", "touch", name))
        return ""

    def _cmd_mkdir(self, args: list[str], _admin: bool) -> str:
        """Create directories in the cwd (``-p`` tolerates existing ones)."""
        names = _operands(args)
        if not names:
            msg = "mkdir: missing operand"
            raise CommandError(msg)
        parents = "p" in _flags(args)
        fs = self._session.fs
        for name in names:
            path = self._entry_path("mkdir", "create directory", name)
            if fs.exists(path):
                if parents and fs.is_dir(path):
                    continue
                msg = f"mkdir: cannot create directory '{name}': File exists"
                raise CommandError(msg)
            fs.create_dir(path)
        return ""

    def _cmd_rm(self, args: list[str], _admin: bool) -> str:
        """Remove entries (``-r`` for directories, ``-f`` ignores missing)."""
        flags = _flags(args)
        recursive = "r" in flags or "R" in flags
        force = "f" in flags
        names = _operands(args)
        if not names:
            msg = "rm: missing operand"
            raise CommandError(msg)
        fs = self._session.fs
        for name in names:
            path = self._entry_path("rm", "remove", name)
            info = fs.lookup(path)
            if info is None:
                if force:
                    continue
                msg = f"rm: cannot remove '{name}': No such file or directory"
                raise CommandError(msg)
            if info.is_dir and not recursive:
                msg = f"rm: cannot remove '{name}': Is a directory"
                raise CommandError(msg)
            fs.delete(path, recursive=True)
        return ""

    def _cmd_rmdir(self, args: list[str], _admin: bool) -> str:
        """Remove empty directories."""
        names = _operands(args)
        if not names:
            msg = "rmdir: missing operand"
            raise CommandError(msg)
        fs = self._session.fs
        for name in names:
            path = self._entry_path("rmdir", "remove", name)
            info = fs.lookup(path)
            reason = None
            if info is None:
                reason = "No such file or directory"
            elif not info.is_dir:
                reason = "Not a directory"
            elif fs.list_dir(path):
                reason = "Directory not empty"
            if reason is not None:
                msg = f"rmdir: failed to remove '{name}': {reason}"
                raise CommandError(msg)
            fs.delete(path)
        return ""

    def _cmd_cp(self, args: list[str], _admin: bool) -> str:
        """Copy a file or, with ``-r``, a directory tree into the cwd."""
        names = _operands(args)
        if len(names) < 2:  # noqa: PLR2004
            msg = "cp: missing file operand"
            raise CommandError(msg)
        src, dest = names[0], names[1]
        src_path = self._session.resolve(src)
        info = self._session.fs.lookup(src_path)
        if info is None:
            msg = f"cp: cannot stat '{src}': No such file or directory"
            raise CommandError(msg)
        if info.is_dir and not (_flags(args) & {"r", "R"}):
            msg = f"cp: -r not specified; omitting directory '{src}'"
            raise CommandError(msg)
        self._session.fs.copy(src_path, self._entry_path("cp", "create", dest))
        return ""

    def _cmd_mv(self, args: list[str], _admin: bool) -> str:
        """Rename an entry within the cwd."""
        names = _operands(args)
        if len(names) < 2:  # noqa: PLR2004
            msg = "mv: missing file operand"
            raise CommandError(msg)
        src, dest = names[0], names[1]
        src_path = self._entry_path("mv", "move", src)
        dest_path = self._entry_path("mv", "move", dest)
        fs = self._session.fs
        if not fs.exists(src_path):
            msg = f"mv: cannot stat '{src}': No such file or directory"
            raise CommandError(msg)
        if src_path != dest_path and fs.is_dir(dest_path):
            msg = f"mv: cannot overwrite directory '{dest}'"
            raise CommandError(msg)
        fs.rename(src_path, dest_path)
        return ""

    def _cmd_find(self, args: list[str], _admin: bool) -> str:
        """Search a tree for names containing a pattern (``-name``)."""
        pattern = "*"
        start = "."
        i = 0
        while i < len(args):
            if args[i] == "-name" and i + 1 < len(args):
                pattern = args[i + 1]
                i += 2
                continue
            if not args[i].startswith("-"):
                start = args[i]
            i += 1
        root = self._session.resolve(start)
        if not self._session.fs.is_dir(root):
            msg = f"find: '{start}': No such file or directory"
            raise CommandError(msg)

        needle = pattern.replace("*", "")
        prefix_len = len(root.rstrip("/")) + 1
        shown = start.rstrip("/")
        results = [
            f"{shown}/{path[prefix_len:]}"
            for path, _info in self._session.fs.walk(root)
            if pattern == "*" or needle in path.rsplit("/", 1)[-1]
        ]
        return "\n".join(results) or f"find: '{start}': No matches found"

    def _cmd_locate(self, args: list[str], _admin: bool) -> str:
        """Pretend to query the locate database."""
        if not args:
            msg = "locate: no pattern to search for specified"
            raise CommandError(msg)
        return (
            "locate: warning: database is not up to date\n"
            f"Use 'updatedb' to update the database.\n{self._session.home}/{args[0]}"
        )

    def _cmd_file(self, args: list[str], _admin: bool) -> str:
        """Guess a file's type from its extension."""
        if not args:
            msg = "file: missing file operand"
            raise CommandError(msg)
        name = args[0]
        info = self._session.fs.lookup(self._session.resolve(name))
        if info is None:
            return f"{name}: cannot open (No such file or directory)"
        if info.is_dir:
            return f"{name}: directory"
        if name.endswith((".txt", ".md")):
            return f"{name}: ASCII text"
        if name.endswith(".sh"):
            return f"{name}: Bourne-Again shell script, ASCII text executable"
        if name.endswith((".jpg", ".png")):
            return f"{name}: image data"
        if name.endswith(".csv"):
            return f"{name}: CSV text"
        return f"{name}: data"

    # -- text processing ---------------------------------------------------

    def _cmd_grep(self, args: list[str], _admin: bool) -> str:
        """Print lines matching a regular expression (``-i -n -c -v``)."""
        if len(args) < 2:  # noqa: PLR2004
            msg = "grep: usage: grep [OPTION]... PATTERN [FILE]..."
            raise CommandError(msg)
        flags = _flags(args)
        operands = _operands(args)
        if len(operands) < 2:  # noqa: PLR2004
            msg = "grep: missing file operand"
            raise CommandError(msg)
        pattern, name = operands[0], operands[1]
        try:
            regex = re.compile(pattern, re.IGNORECASE if "i" in flags else 0)
        except re.error as e:
            msg = f"grep: Invalid regular expression: {e}"
            raise CommandError(msg) from e
        content = self._read_file("grep", name)

        invert = "v" in flags
        matches = [
            f"{i}:{line}" if "n" in flags else line
            for i, line in enumerate(content.split("\n"), start=1)
            if (regex.search(line) is not None) != invert
        ]
        if "c" in flags:
            return str(len(matches))
        return "\n".join(matches)

    def _cmd_sed(self, args: list[str], _admin: bool) -> str:
        if len(args) < 2:  # noqa: PLR2004
            msg = "sed: usage: sed 's/pattern/replacement/' file"
            raise CommandError(msg)
        return f"[sed simulation] Would process: {' '.join(args)}"

    def _cmd_awk(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "awk: usage: awk 'pattern { action }' file"
            raise CommandError(msg)
        return f"[awk simulation] Would process: {' '.join(args)}"

    def _cmd_cut(self, args: list[str], _admin: bool) -> str:
        return f"[cut simulation] Would process: {' '.join(args)}"

    def _cmd_tr(self, args: list[str], _admin: bool) -> str:
        if len(args) < 2:  # noqa: PLR2004
            msg = "tr: usage: tr SET1 SET2"
            raise CommandError(msg)
        return f"[tr simulation] Would translate {args[0]} to {args[1]}"

    def _cmd_diff(self, args: list[str], _admin: bool) -> str:
        if len(args) < 2:  # noqa: PLR2004
            msg = "diff: missing operand after 'diff'"
            raise CommandError(msg)
        return f"[diff simulation] Would compare {args[0]} and {args[1]}"

    def _cmd_tee(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "tee: missing file operand"
            raise CommandError(msg)
        return f"[tee simulation] Would write to {', '.join(args)}"

    def _cmd_sort(self, args: list[str], _admin: bool) -> str:
        """Sort a file's lines (``-r`` reverse, ``-n`` numeric, ``-u`` unique)."""
        operands = _operands(args)
        if not operands:
            msg = "sort: missing file operand"
            raise CommandError(msg)
        flags = _flags(args)
        lines = self._read_file("sort", operands[0]).split("\n")

        if "n" in flags:

            def numeric(line: str) -> float:
                match = re.match(r"\s*[-+]?\d*\.?\d+", line)
                return float(match.group()) if match else 0.0

            lines.sort(key=numeric)
        else:
            lines.sort()
        if "r" in flags:
            lines.reverse()
        if "u" in flags:
            lines = list(dict.fromkeys(lines))
        return "\n".join(lines)

    def _cmd_uniq(self, args: list[str], _admin: bool) -> str:
        """Collapse repeated lines (``-c`` prefixes counts)."""
        operands = _operands(args)
        if not operands:
            msg = "uniq: missing file operand"
            raise CommandError(msg)
        name = operands[0]
        info = self._session.fs.lookup(self._session.resolve(name))
        if info is None or info.is_dir:
            msg = f"uniq: {name}: No such file or directory"
            raise CommandError(msg)
        counts: dict[str, int] = {}
        for line in self._session.fs.read(self._session.resolve(name)).split("\n"):
            counts[line] = counts.get(line, 0) + 1
        if "c" in _flags(args):
            return "\n".join(f"      {count} {line}" for line, count in counts.items())
        return "\n".join(counts)

    def _cmd_wc(self, args: list[str], _admin: bool) -> str:
        """Count lines, words and characters (``-l``, ``-w``, ``-c``)."""
        operands = _operands(args)
        if not operands:
            msg = "wc: missing file operand"
            raise CommandError(msg)
        name = operands[0]
        content = self._read_file("wc", name)
        counts = {
            "l": len(content.split("\n")),
            "w": len(content.split()),
            "c": len(content),
        }
        selected = _flags(args) & counts.keys()
        if len(selected) == 1:
            return f"{counts[selected.pop()]} {name}"
        return f"  {counts['l']}   {counts['w']} {counts['c']} {name}"

    # -- system info -------------------------------------------------------

    def _cmd_uname(self, args: list[str], _admin: bool) -> str:
        """Print system information."""
        flags = _flags(args)
        if "a" in flags or "--all" in args:
            return f"NexusOS {self._session.hostname} 1.0.0-nexus #1 SMP PREEMPT x86_64 GNU/Linux"
        for flag, value in (
            ("r", "1.0.0-nexus"),
            ("n", self._session.hostname),
            ("m", "x86_64"),
            ("o", "GNU/Linux"),
        ):
            if flag in flags:
                return value
        return "NexusOS"

    def _cmd_hostname(self, args: list[str], _admin: bool) -> str:
        if "-I" in args:
            return "192.168.1.100"
        if "-f" in args or "--fqdn" in args:
            return f"{self._session.hostname}.local"
        return self._session.hostname

    def _cmd_uptime(self, _args: list[str], _admin: bool) -> str:
        rng = self._session.rng
        hours, mins = rng.randint(1, 24), rng.randint(0, 59)
        load = (0.5 + rng.random() * 0.5, 0.4 + rng.random() * 0.4, 0.3 + rng.random() * 0.3)
        return (
            f" {self._now()} up {hours}:{mins:02d},  1 user,  load average: "
            f"{load[0]:.2f}, {load[1]:.2f}, {load[2]:.2f}"
        )

    def _cmd_date(self, args: list[str], _admin: bool) -> str:
        """Print the date (``-u`` UTC, ``-I`` ISO date, ``-R`` RFC 5322)."""
        now = self._session.clock()
        if "-u" in args or "--utc" in args or "-R" in args:
            return now.astimezone(UTC).strftime("%a, %d %b %Y %H:%M:%S GMT")
        if "-I" in args:
            return now.date().isoformat()
        return now.strftime("%a %b %d %H:%M:%S %Y")

    def _cmd_cal(self, _args: list[str], _admin: bool) -> str:
        """Print this month's calendar with today in inverse video."""
        now = self._session.clock()
        weekday, days = calendar.monthrange(now.year, now.month)
        first = (weekday + 1) % 7  # Sunday-first columns
        out = f"     {calendar.month_name[now.month]} {now.year}\nSu Mo Tu We Th Fr Sa\n"
        out += "   " * first
        for day in range(1, days + 1):
            cell = f"{day:>2}"
            out += f"\x1b[7m{cell}\x1b[0m " if day == now.day else f"{cell} "
            if (first + day) % 7 == 0:
                out += "\n"
        return out

    def _cmd_whoami(self, _args: list[str], _admin: bool) -> str:
        return self._session.user

    def _cmd_id(self, _args: list[str], _admin: bool) -> str:
        user = self._session.user
        return f"uid=1000({user}) gid=1000({user}) groups=1000({user}),27(sudo),1001(docker)"

    def _cmd_groups(self, _args: list[str], _admin: bool) -> str:
        return f"{self._session.user} sudo docker"

    def _cmd_w(self, _args: list[str], _admin: bool) -> str:
        return canned.W.format(user=self._session.user)

    def _cmd_who(self, _args: list[str], _admin: bool) -> str:
        today = self._session.clock().date().isoformat()
        return f"{self._session.user:<8} pts/0        {today} 10:00 (:0)"

    def _cmd_last(self, _args: list[str], _admin: bool) -> str:
        day = self._session.clock().strftime("%b %d")
        return (
            f"{self._session.user:<8} pts/0        :0               {day} 10:00   still logged in\n"
            f"reboot   system boot  1.0.0-nexus      {day} 10:00   still running\n\n"
            f"wtmp begins {day} 10:00"
        )

    # -- processes ---------------------------------------------------------

    def _cmd_ps(self, args: list[str], _admin: bool) -> str:
        if {"aux", "-aux", "-ef"} & set(args):
            return canned.PS_AUX.format(now=self._now()[:5])
        return canned.PS_SHORT

    def _cmd_top(self, _args: list[str], _admin: bool) -> str:
        return canned.TOP.format(now=self._now())

    def _cmd_htop(self, _args: list[str], _admin: bool) -> str:
        return canned.HTOP

    def _cmd_kill(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = (
                "kill: usage: kill [-s sigspec | -n signum | -sigspec] pid | jobspec ... "
                "or kill -l [sigspec]"
            )
            raise CommandError(msg)
        if "-l" in args:
            return canned.KILL_SIGNALS
        pids = _operands(args)
        return f"[Simulated] Sent signal to process {pids[0] if pids else ''}"

    def _cmd_killall(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "killall: no process selection criteria specified"
            raise CommandError(msg)
        return f"[Simulated] Sent signal to all {args[0]} processes"

    def _cmd_jobs(self, _args: list[str], _admin: bool) -> str:
        return "[1]+  Running                 sleep 100 &"

    def _cmd_bg(self, _args: list[str], _admin: bool) -> str:
        return "[1]+ sleep 100 &"

    def _cmd_fg(self, _args: list[str], _admin: bool) -> str:
        return "sleep 100"

    def _cmd_nohup(self, args: list[str], _admin: bool) -> str:
        return (
            "nohup: ignoring input and appending output to 'nohup.out'\n"
            f"[Simulated] {' '.join(args)} running in background"
        )

    # -- disk and memory ---------------------------------------------------

    def _cmd_df(self, args: list[str], _admin: bool) -> str:
        """Report disk space, or inode use of the root filesystem with ``-i``."""
        flags = _flags(args)
        if "i" in flags:
            used = len(self._session.fs)
            percent = -(-used * 100 // _ROOT_INODES)
            return (
                "Filesystem      Inodes  IUsed   IFree IUse% Mounted on\n"
                f"/dev/sda1     {_ROOT_INODES:>7} {used:>6} {_ROOT_INODES - used:>7} "
                f"{percent:>4}% /"
            )
        return canned.DF_HUMAN if "h" in flags else canned.DF

    def _cmd_free(self, args: list[str], _admin: bool) -> str:
        return canned.FREE_HUMAN if "h" in _flags(args) else canned.FREE

    def _cmd_du(self, args: list[str], _admin: bool) -> str:
        """Report disk usage computed from the tree (``-h``, ``-s``)."""
        flags = _flags(args)
        operands = _operands(args)
        target = operands[0] if operands else "."
        root = self._session.resolve(target)
        fs = self._session.fs
        if not fs.exists(root):
            msg = f"du: cannot access '{target}': No such file or directory"
            raise CommandError(msg)

        def render(size: int) -> str:
            if "h" in flags:
                return format_size(size) if size >= 1024 else f"{size / 1024:.1f}K"  # noqa: PLR2004
            return str(-(-size // 1024))

        lines: list[str] = []
        if "s" not in flags and fs.is_dir(root):
            prefix_len = len(root.rstrip("/")) + 1
            shown = target.rstrip("/")
            lines.extend(
                f"{render(fs.disk_usage(path))}\t{shown}/{path[prefix_len:]}"
                for path, info in fs.walk(root)
                if info.is_dir
            )
        lines.append(f"{render(fs.disk_usage(root))}\t{target}")
        return "\n".join(lines)

    def _cmd_mount(self, _args: list[str], _admin: bool) -> str:
        return canned.MOUNT

    def _cmd_umount(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "umount: usage: umount [-lf] <source>..."
            raise CommandError(msg)
        return f"[Simulated] Unmounted {args[0]}"

    # -- network -----------------------------------------------------------

    def _cmd_ping(self, args: list[str], _admin: bool) -> str:
        """Print a fabricated ping transcript (``-c N`` sets the count)."""
        if not args:
            msg = "ping: usage: ping [-c count] destination"
            raise CommandError(msg)
        count = 4
        host = "localhost"
        i = 0
        while i < len(args):
            if args[i] == "-c" and i + 1 < len(args):
                if args[i + 1].isdigit():
                    count = max(1, int(args[i + 1]))
                i += 2
                continue
            if not args[i].startswith("-"):
                host = args[i]
            i += 1
        address = "127.0.0.1" if host == "localhost" else "93.184.216.34"
        lines = [f"PING {host} ({address}) 56(84) bytes of data."]
        for seq in range(1, count + 1):
            rtt = 20 + self._session.rng.random() * 10
            lines.append(f"64 bytes from {host}: icmp_seq={seq} ttl=64 time={rtt:.1f} ms")
        lines.append("")
        lines.append(f"--- {host} ping statistics ---")
        lines.append(
            f"{count} packets transmitted, {count} received, 0% packet loss, time {count * 1000}ms"
        )
        return "\n".join(lines)

    def _cmd_ifconfig(self, _args: list[str], _admin: bool) -> str:
        return canned.IFCONFIG

    def _cmd_ip(self, args: list[str], _admin: bool) -> str:
        sub = args[0] if args else ""
        if sub in ("addr", "a"):
            return canned.IP_ADDR
        if sub in ("route", "r"):
            return canned.IP_ROUTE
        return "Usage: ip [ addr | route | link | ... ]"

    def _cmd_netstat(self, _args: list[str], _admin: bool) -> str:
        return canned.NETSTAT

    def _cmd_ss(self, _args: list[str], _admin: bool) -> str:
        return canned.SS

    def _cmd_curl(self, args: list[str], _admin: bool) -> str:
        urls = _operands(args)
        if not urls:
            msg = "curl: try 'curl --help' for more information"
            raise CommandError(msg)
        url = urls[0]
        return (
            f"[curl simulation] Would fetch: {url}\nHTTP/1.1 200 OK\nContent-Type: text/html\n"
            f"<!DOCTYPE html><html><body>Response from {url}</body></html>"
        )

    def _cmd_wget(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "wget: missing URL"
            raise CommandError(msg)
        now = self._session.clock().isoformat(timespec="seconds")
        return canned.WGET.format(url=args[0], now=now)

    def _cmd_host(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = (
                "Usage: host [-aCdilrTvVw] [-c class] [-N ndots] [-t type] [-W time] "
                "[-R number] [-m flag] hostname [server]"
            )
            raise CommandError(msg)
        return (
            f"{args[0]} has address 93.184.216.34\n"
            f"{args[0]} has IPv6 address 2606:2800:220:1:248:1893:25c8:1946"
        )

    def _cmd_dig(self, args: list[str], _admin: bool) -> str:
        domain = args[0] if args else "example.com"
        now = self._session.clock().strftime("%a %b %d %H:%M:%S %Y")
        return canned.DIG.format(domain=domain, now=now)

    def _cmd_nslookup(self, args: list[str], _admin: bool) -> str:
        return canned.NSLOOKUP.format(domain=args[0] if args else "example.com")

    # -- permissions (acknowledged, never enforced) ------------------------

    def _acknowledge(self, cmd: str, what: str, args: list[str]) -> str:
        if len(args) < 2:  # noqa: PLR2004
            msg = f"{cmd}: missing operand"
            raise CommandError(msg)
        return f"[Simulated] Changed {what} of {args[1]} to {args[0]}"

    def _cmd_chmod(self, args: list[str], _admin: bool) -> str:
        return self._acknowledge("chmod", "permissions", args)

    def _cmd_chown(self, args: list[str], _admin: bool) -> str:
        return self._acknowledge("chown", "owner", args)

    def _cmd_chgrp(self, args: list[str], _admin: bool) -> str:
        return self._acknowledge("chgrp", "group", args)

    def _cmd_umask(self, args: list[str], _admin: bool) -> str:
        return f"[Simulated] Set umask to {args[0]}" if args else "0022"

    # -- archives ----------------------------------------------------------

    def _cmd_tar(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "tar: You must specify one of the '-Acdtrux' options"
            raise CommandError(msg)
        flags = _flags(args)
        operands = _operands(args)
        archive = operands[-1] if operands else ""
        if "c" in flags:
            return f"[Simulated] Created archive {archive}"
        if "x" in flags:
            return f"[Simulated] Extracted archive {archive}"
        msg = "tar: invalid option"
        raise CommandError(msg)

    def _cmd_gzip(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "gzip: missing file operand"
            raise CommandError(msg)
        return f"[Simulated] Compressed {args[0]} -> {args[0]}.gz"

    def _cmd_gunzip(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "gunzip: missing file operand"
            raise CommandError(msg)
        return f"[Simulated] Decompressed {args[0]}"

    def _cmd_zip(self, args: list[str], _admin: bool) -> str:
        if len(args) < 2:  # noqa: PLR2004
            msg = "zip: missing archive name"
            raise CommandError(msg)
        return "\n".join(f"  adding: {name} (deflated 60%)" for name in args[1:])

    def _cmd_unzip(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "unzip: missing archive name"
            raise CommandError(msg)
        return (
            f"Archive:  {args[0]}\n  inflating: file1.txt\n  inflating: file2.txt\n"
            "  extracting: file3.dat"
        )

    # -- packages ----------------------------------------------------------

    def _cmd_apt(self, args: list[str], _admin: bool) -> str:
        """Manage packages: install, remove, update, upgrade, list, search, show."""
        return self._session.packages.apt(args)

    def _cmd_dpkg(self, args: list[str], _admin: bool) -> str:
        """Query the installed registry (``-l``, ``-s <pkg>``)."""
        return self._session.packages.dpkg(args)

    # -- users -------------------------------------------------------------

    def _cmd_useradd(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "useradd: missing username"
            raise CommandError(msg)
        return f"[Simulated] Created user {args[-1]}"

    def _cmd_userdel(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "userdel: missing username"
            raise CommandError(msg)
        return f"[Simulated] Deleted user {args[0]}"

    def _cmd_passwd(self, args: list[str], _admin: bool) -> str:
        user = args[0] if args else self._session.user
        return (
            f"[Simulated] Changing password for {user}\nNew password: \n"
            "Retype new password: \npasswd: password updated successfully"
        )

    def _cmd_su(self, args: list[str], _admin: bool) -> str:
        users = _operands(args)
        return f"[Simulated] Switched to user {users[0] if users else 'root'}"

    async def _cmd_sudo(self, args: list[str], is_admin: bool) -> str | Outcome:
        """Run a command "as root".

        The password prompt is cosmetic.  The inner command goes back
        through the dispatcher with the caller's own admin flag, so
        ``sudo`` never lifts the admin gate.
        """
        if not args:
            msg = "sudo: a command is required"
            raise CommandError(msg)
        if args[0] == "-l":
            return (
                f"User {self._session.user} may run the following commands on "
                f"{self._session.hostname}:\n    (ALL : ALL) ALL"
            )
        name = args[0]
        if name not in self._commands and name not in self._session.packages.registry:
            msg = f"sudo: {name}: command not found"
            raise CommandError(msg)
        prompt = f"[sudo] password for {self._session.user}: "
        outcome = await self.dispatch(name, args[1:], is_admin=is_admin)
        text = f"{prompt}\n{outcome.text}" if outcome.text else prompt
        if outcome.is_error:
            raise CommandError(text)
        return replace(outcome, text=text)

    # -- remote ------------------------------------------------------------

    def _cmd_ssh(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = (
                "usage: ssh [-46AaCfGgKkMNnqsTtVvXxYy] [-B bind_interface] ... "
                "destination [command]"
            )
            raise CommandError(msg)
        return canned.SSH.format(host=args[-1])

    def _cmd_scp(self, args: list[str], _admin: bool) -> str:
        if len(args) < 2:  # noqa: PLR2004
            msg = "usage: scp [-346BCpqrTv] ... [[user@]host1:]file1 ... [[user@]host2:]file2"
            raise CommandError(msg)
        return (
            f"[Simulated] Copying {args[0]} to {args[1]}...\n"
            f"{args[0]}                                    100%  1234     1.2KB/s   00:01"
        )

    def _cmd_sftp(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "usage: sftp [-46BCpqrv] ... [user@]host[:path]"
            raise CommandError(msg)
        return f"[Simulated] Connecting to {args[0]}...\nConnected to {args[0]}.\nsftp>"

    def _cmd_rsync(self, args: list[str], _admin: bool) -> str:
        if len(args) < 2:  # noqa: PLR2004
            msg = "rsync: missing destination"
            raise CommandError(msg)
        return canned.RSYNC

    # -- misc --------------------------------------------------------------

    def _cmd_echo(self, args: list[str], _admin: bool) -> str:
        """Print arguments, substituting ``$VAR`` and stripping outer quotes."""
        return _strip_quotes(self._session.env.expand(" ".join(args)))

    def _cmd_printf(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "printf: usage: printf format [arguments]"
            raise CommandError(msg)
        return " ".join(args).replace("\\n", "\n").replace("\\t", "\t")

    def _cmd_clear(self, _args: list[str], _admin: bool) -> Outcome:
        return Outcome("", clear=True)

    def _cmd_history(self, _args: list[str], _admin: bool) -> str:
        history = self._session.history
        if not history:
            return "No history"
        return "\n".join(f"  {i:>4}  {entry}" for i, entry in enumerate(history, start=1))

    def _cmd_alias(self, args: list[str], _admin: bool) -> str:
        """List aliases, or define one with ``alias NAME=COMMAND``."""
        aliases = self._session.aliases
        if not args:
            return "\n".join(f"alias {name}='{text}'" for name, text in sorted(aliases.items()))
        pair = " ".join(args)
        if "=" not in pair:
            if pair in aliases:
                return f"alias {pair}='{aliases[pair]}'"
            msg = f"alias: {pair}: not found"
            raise CommandError(msg)
        name, text = pair.split("=", 1)
        text = _strip_quotes(text.strip())
        if not name.strip() or not text:
            msg = "alias: usage: alias NAME=COMMAND"
            raise CommandError(msg)
        aliases[name.strip()] = text
        return ""

    def _cmd_unalias(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "unalias: usage: unalias name [name ...]"
            raise CommandError(msg)
        for name in args:
            if self._session.aliases.pop(name, None) is None:
                msg = f"unalias: {name}: not found"
                raise CommandError(msg)
        return ""

    def _cmd_export(self, args: list[str], _admin: bool) -> str:
        """List exported variables, or set ``KEY=VALUE``."""
        env = self._session.env
        if not args:
            return "\n".join(f'declare -x {key}="{value}"' for key, value in env.items())
        key, _, value = args[0].partition("=")
        if not key or not value or not re.fullmatch(r"[A-Za-z_]\w*", key):
            msg = f"export: '{args[0]}': not a valid identifier"
            raise CommandError(msg)
        value = _strip_quotes(" ".join([value, *args[1:]]))
        if key == "PWD":
            path = self._session.resolve(value)
            info = self._session.fs.lookup(path)
            if info is None:
                msg = f"export: {value}: No such file or directory"
                raise CommandError(msg)
            if not info.is_dir:
                msg = f"export: {value}: Not a directory"
                raise CommandError(msg)
            self._session.cwd = path
        else:
            env.set(key, value)
        return ""

    def _cmd_unset(self, args: list[str], _admin: bool) -> str:
        for key in args:
            if key in self._session.env:
                self._session.env.delete(key)
        return ""

    def _cmd_env(self, _args: list[str], _admin: bool) -> str:
        return "\n".join(f"{key}={value}" for key, value in self._session.env.items())

    def _cmd_which(self, args: list[str], _admin: bool) -> str:
        if not args:
            return ""
        name = args[0]
        if name in canned.WHICH_PATHS:
            return canned.WHICH_PATHS[name]
        if name in self._commands or name in self._session.packages.registry:
            return f"/usr/bin/{name}"
        msg = f"{name} not found"
        raise CommandError(msg)

    def _cmd_whereis(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "whereis: usage: whereis program..."
            raise CommandError(msg)
        return f"{args[0]}: /usr/bin/{args[0]} /usr/share/man/man1/{args[0]}.1.gz"

    def _cmd_man(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "What manual page do you want?"
            raise CommandError(msg)
        return canned.man_page(args[0])

    def _cmd_info(self, args: list[str], _admin: bool) -> str:
        if not args:
            msg = "info: missing argument"
            raise CommandError(msg)
        return f"[info simulation] Would display GNU info page for {args[0]}"

    def _cmd_help(self, args: list[str], is_admin: bool) -> str:
        """List commands by category, or show one command's manual page."""
        if args:
            return canned.man_page(args[0])
        out = "NexusOS Terminal - Available Commands\n" + "=" * 40 + "\n\n"
        for category, names in canned.HELP_CATEGORIES.items():
            out += f"\x1b[33m{category}:\x1b[0m\n  {', '.join(names)}\n\n"
        if is_admin:
            out += f"\x1b[31mAdmin Commands:\x1b[0m\n  {', '.join(canned.ADMIN_COMMANDS)}\n\n"
        return out + "Type 'help <command>' or 'man <command>' for detailed usage."

    def _cmd_exit(self, _args: list[str], _admin: bool) -> Outcome:
        return Outcome("", exit=True)

    def _cmd_neofetch(self, _args: list[str], _admin: bool) -> str:
        rng = self._session.rng
        return canned.NEOFETCH.format(
            user=self._session.user,
            hostname=self._session.hostname,
            hours=rng.randint(0, 23),
            mins=rng.randint(0, 59),
            packages=len(self._session.packages.registry),
        )

    # -- admin -------------------------------------------------------------

    def _api_failure(self, e: AdminApiError, *, failed: str, error: str) -> CommandError:
        """Log an admin API failure and build the line the user sees."""
        self._session.logger.log(
            LogLevel.WARNING, str(e), source="admin_api", user=self._session.user
        )
        if isinstance(e, ServiceResponseError) and e.status_code is not None:
            return CommandError(failed)
        return CommandError(error)

    async def _cmd_users(self, _args: list[str], _admin: bool) -> str:
        """List registered users from the user directory."""
        try:
            users = await self._session.api.list_users()
        except AdminApiError as e:
            raise self._api_failure(
                e, failed="Failed to fetch users", error="Error fetching users"
            ) from e
        if not users:
            return "No registered users"
        lines = ["USER ID          | NAME                | STATUS      | TAGS", "-" * 80]
        for user in users:
            status = "\x1b[31mBANNED\x1b[0m    " if user.banned else "\x1b[32mActive\x1b[0m    "
            tags = "\x1b[36mADMIN\x1b[0m" if user.is_admin else "-"
            lines.append(
                f"{user.id[:14]:<16}| {user.display_name[:18]:<20}| {status}| {tags}"
            )
        return "\n".join(lines)

    async def _cmd_sysadmin(self, _args: list[str], _admin: bool) -> str:
        """Show host diagnostics from the admin service."""
        try:
            d = await self._session.api.get_diagnostics()
        except AdminApiError as e:
            raise self._api_failure(
                e, failed="Failed to fetch diagnostics", error="Error fetching system info"
            ) from e
        gib = 1024**3
        uptime = int(d.system_uptime)
        return "\n".join(
            [
                "System Administration Panel",
                "=" * 30,
                f"Platform:     {d.platform}",
                f"Architecture: {d.arch}",
                f"Node Version: {d.node_version}",
                f"System Uptime: {uptime // 3600}h {uptime % 3600 // 60}m",
                "",
                "Memory:",
                f"  Total: {d.memory_total / gib:.2f} GB",
                f"  Used:  {d.memory_used / gib:.2f} GB",
                f"  Free:  {d.memory_free / gib:.2f} GB",
                "",
                "Process:",
                f"  PID: {d.pid}",
                f"  CPU Cores: {d.cpu_cores}",
                f"  Heap Used: {d.heap_used / 1024**2:.1f} MB",
            ]
        )

    def _cmd_logs(self, args: list[str], _admin: bool) -> str:
        """Show the session log (``-n N`` for the last N, ``--level LEVEL``)."""
        logger = self._session.logger
        entries = logger.entries
        if "--level" in args:
            i = args.index("--level")
            level_name = args[i + 1].upper() if i + 1 < len(args) else ""
            if level_name not in LogLevel.__members__:
                msg = f"logs: unknown level '{level_name.lower()}'"
                raise CommandError(msg)
            entries = logger.filter(min_level=LogLevel[level_name])
        if "-n" in args:
            count, _ = _line_count_option(args)
            entries = entries[-count:] if count > 0 else []
        if not entries:
            return "No log entries"
        return "\n".join(
            f"[{e.timestamp.isoformat(timespec='seconds')}] {e.level.name:<7} "
            f"{e.source}: {e.message}"
            for e in entries
        )

    def _cmd_audit(self, _args: list[str], _admin: bool) -> str:
        """Show package transactions and refused admin commands."""
        logger = self._session.logger
        entries = sorted(
            [*logger.filter(source="apt"), *logger.filter(source="auth")],
            key=lambda e: e.timestamp,
        )
        lines = [
            f"\x1b[36mAdmin Audit Log\x1b[0m\n{'=' * 70}\n",
            "TIMESTAMP           | USER     | SOURCE | ACTION",
            "-" * 70,
        ]
        lines.extend(
            f"{e.timestamp.isoformat(timespec='seconds')} | {e.user:<8} | {e.source:<6} | "
            f"{e.message}"
            for e in entries
        )
        if not entries:
            lines.append("(no audited actions)")
        return "\n".join(lines)

    def _cmd_shutdown(self, _args: list[str], _admin: bool) -> str:
        self._session.logger.log(
            LogLevel.WARNING, "shutdown requested", source="shell", user=self._session.user
        )
        return (
            "\x1b[31mShutdown initiated...\x1b[0m\n"
            "Broadcasting message to all terminals...\n"
            "System going down for maintenance in 60 seconds!"
        )
