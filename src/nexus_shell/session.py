"""Per-terminal session state.

A ``Session`` is everything one terminal window owns: the filesystem
arena, the working directory, environment variables, command history,
aliases, the installed-package registry and the audit log.  Command
handlers never capture any of this implicitly; the shell hands them the
session and every mutation goes through it.
"""

import random
from collections.abc import Callable
from datetime import datetime

from nexus_shell.admin_api import AdminApiClient
from nexus_shell.auth import AuthProvider, StaticAuth
from nexus_shell.config import TerminalConfig
from nexus_shell.env import Environment, default_environment
from nexus_shell.fs.filesystem import FileSystem
from nexus_shell.fs.paths import normalize_path, resolve_path
from nexus_shell.fs.template import build_filesystem
from nexus_shell.logging import Logger
from nexus_shell.packages.programs import ProgramContext
from nexus_shell.packages.registry import PackageManager, PackageRegistry

DEFAULT_ALIASES: dict[str, str] = {
    "ll": "ls -la",
    "cls": "clear",
    "..": "cd ..",
}


class Session:
    """State shared by every command run in one terminal."""

    def __init__(
        self,
        config: TerminalConfig | None = None,
        *,
        fs: FileSystem | None = None,
        auth: AuthProvider | None = None,
        api: AdminApiClient | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Create a session at the user's home directory.

        Args:
            config: Terminal settings; defaults to ``TerminalConfig()``.
            fs: The filesystem to operate on; defaults to the seeded tree.
            auth: Admin check; defaults to a non-admin ``StaticAuth``.
            api: Admin REST client; built from *config* when omitted.
            rng: Random source for simulated output and invented packages.
            clock: Source of "now" for dates and audit entries.

        """
        self.config = config or TerminalConfig()
        self.fs = fs if fs is not None else build_filesystem()
        if not self.fs.exists(self.config.home):
            self.fs.create_dir(self.config.home)
        self.auth: AuthProvider = auth or StaticAuth(admin=False)
        self.api = api or AdminApiClient(
            self.config.api_base_url, timeout=self.config.request_timeout
        )
        self.rng = rng or random.Random(self.config.seed)
        self.clock = clock
        self.logger = Logger(clock=clock)
        self.env = Environment(
            default_environment(
                user=self.config.user,
                home=self.config.home,
                hostname=self.config.hostname,
                cwd=self.config.home,
            )
        )
        self.history: list[str] = []
        self.aliases: dict[str, str] = dict(DEFAULT_ALIASES)
        self.packages = PackageManager(
            PackageRegistry(), rng=self.rng, logger=self.logger, user=self.config.user
        )
        self._cwd = self.config.home

    # -- identity ----------------------------------------------------------

    @property
    def user(self) -> str:
        """Return the current login name (``$USER``)."""
        return self.env.get("USER") or self.config.user

    @property
    def hostname(self) -> str:
        """Return the machine name (``$HOSTNAME``)."""
        return self.env.get("HOSTNAME") or self.config.hostname

    @property
    def home(self) -> str:
        """Return the home directory (``$HOME``)."""
        return self.env.get("HOME") or self.config.home

    async def is_admin(self) -> bool:
        """Ask the auth provider whether the caller is an admin."""
        return await self.auth.is_admin()

    # -- working directory -------------------------------------------------

    @property
    def cwd(self) -> str:
        """Return the current working directory."""
        return self._cwd

    @cwd.setter
    def cwd(self, path: str) -> None:
        """Change directory, keeping ``$PWD`` in step."""
        self._cwd = normalize_path(path)
        self.env.set("PWD", self._cwd)

    def resolve(self, path: str) -> str:
        """Resolve a user-typed path against the working directory."""
        return resolve_path(self._cwd, path, home=self.home)

    def child_path(self, name: str) -> str:
        """Return the absolute path of *name* inside the working directory."""
        return f"{self._cwd.rstrip('/')}/{name}"

    @property
    def prompt(self) -> str:
        """Return the prompt shown before each input line."""
        return f"{self.user}@{self.hostname}:{self._cwd}$ "

    def program_context(self) -> ProgramContext:
        """Return the view of the session a simulated program may use."""
        return ProgramContext(
            cwd=self._cwd,
            fs=self.fs,
            installed_count=len(self.packages.registry),
            user=self.user,
            hostname=self.hostname,
            clock=self.clock,
        )
