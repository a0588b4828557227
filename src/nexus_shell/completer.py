"""Context-aware tab completer for the console REPL.

Candidates come from the live session: command names (built-ins,
installed packages and aliases), apt subcommands and package names,
environment variables, and entries of the virtual filesystem.

``completions(text, line)`` is pure and is what the tests drive;
``complete(text, state)`` is the thin readline callback around it.
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nexus_shell.session import Session
    from nexus_shell.shell import Shell

# Commands that accept subcommands as a second word.
_SUBCOMMANDS: dict[str, list[str]] = {
    "apt": ["install", "remove", "purge", "update", "upgrade", "list", "search", "show"],
    "apt-get": ["install", "remove", "purge", "update", "upgrade", "list", "search", "show"],
    "ip": ["addr", "route"],
    "git": ["status", "log", "branch"],
}

# Word count at which a subcommand is still being typed.
_SUBCOMMAND_WORDS = 2


class Completer:
    """Context-aware tab completer for the shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance.

        Args:
            shell: The shell whose commands, session and packages are
                   used to generate completion candidates.

        """
        self._shell = shell
        self._session: Session = shell.session

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback, return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, ...).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        words = line.lstrip().split()

        # Still typing the first word: command names
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return self._complete_commands(text)

        return self._complete_argument(words, text, line)

    # -- private completers ------------------------------------------------

    def _complete_argument(self, words: list[str], text: str, line: str) -> list[str]:
        """Dispatch argument completion based on the command and context."""
        cmd = words[0]

        if cmd in _SUBCOMMANDS and (
            len(words) == 1 or (len(words) == _SUBCOMMAND_WORDS and not line.endswith(" "))
        ):
            return sorted(sub for sub in _SUBCOMMANDS[cmd] if sub.startswith(text))

        if cmd in ("apt", "apt-get") and words[1] in ("install", "show"):
            return self._complete_catalog(text)

        if cmd in ("apt", "apt-get") and words[1] in ("remove", "purge"):
            return sorted(n for n in self._session.packages.registry.names() if n.startswith(text))

        if cmd in ("unset", "export"):
            return self._complete_env_vars(text)

        if cmd in ("man", "help", "which", "sudo"):
            return self._complete_commands(text)

        if text.startswith("$"):
            return self._complete_dollar_vars(text)

        return self._complete_paths(text)

    def _complete_commands(self, text: str) -> list[str]:
        """Complete command names and installed package names."""
        names = set(self._shell.command_names()) | set(self._session.packages.registry.names())
        names |= set(self._session.aliases)
        return sorted(name for name in names if name.startswith(text))

    def _complete_catalog(self, text: str) -> list[str]:
        return sorted(name for name in self._session.packages.catalog if name.startswith(text))

    def _complete_paths(self, text: str) -> list[str]:
        """Complete filesystem paths.

        Split the partial path into a directory and a name prefix, list
        the directory, and filter by prefix.  Directories get a trailing
        ``/`` suffix.
        """
        last_slash = text.rfind("/")
        directory = text[: last_slash + 1]
        prefix = text[last_slash + 1 :]

        fs = self._session.fs
        resolved = self._session.resolve(directory or ".")
        if not fs.is_dir(resolved):
            return []

        return sorted(
            f"{directory}{name}/" if info.is_dir else f"{directory}{name}"
            for name, info in fs.entries(resolved)
            if name.startswith(prefix)
        )

    def _complete_env_vars(self, text: str) -> list[str]:
        """Complete environment variable names (without $ prefix)."""
        return sorted(key for key, _val in self._session.env.items() if key.startswith(text))

    def _complete_dollar_vars(self, text: str) -> list[str]:
        """Complete $VAR references with the dollar prefix."""
        prefix = text[1:]
        return sorted(f"${key}" for key, _val in self._session.env.items() if key.startswith(prefix))
