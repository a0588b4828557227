"""The terminal: scrollback, input buffer and the keys that drive them.

A ``Terminal`` is the model behind one terminal window.  It owns what
the window shows (the scrollback), what the user is typing (the input
buffer), where history recall currently points, and a processing flag
that keeps a second command from starting while one is in flight.

Front ends (the console REPL, the web app) translate key presses into
calls on this class:

- Enter → ``submit()``
- Up / Down → ``recall_previous()`` / ``recall_next()``
- Tab → ``complete()``
- Ctrl+C → ``interrupt()``
- Ctrl+L → ``clear_screen()``
"""

from dataclasses import dataclass
from enum import StrEnum

from nexus_shell import canned
from nexus_shell.session import Session
from nexus_shell.shell import Shell

# History cursor value meaning "not recalling".
NOT_RECALLING = -1


class LineKind(StrEnum):
    """How a scrollback line is styled."""

    INPUT = "input"
    OUTPUT = "output"
    ERROR = "error"


@dataclass(frozen=True)
class Line:
    """One entry in the scrollback."""

    kind: LineKind
    text: str


def banner_lines() -> list[Line]:
    """Return the lines shown when a terminal opens."""
    return [
        Line(LineKind.OUTPUT, canned.BANNER),
        Line(LineKind.OUTPUT, f"{canned.BANNER_HINT}\n"),
    ]


class Terminal:
    """One terminal window bound to a session and its shell."""

    def __init__(self, session: Session | None = None, shell: Shell | None = None) -> None:
        """Open a terminal showing the banner.

        Args:
            session: The session to run commands in; shared with *shell*
                when only one is given.
            shell: The interpreter; created over *session* when omitted.

        """
        if shell is None:
            shell = Shell(session)
        self.shell = shell
        self.session = session if session is not None else shell.session
        self.scrollback: list[Line] = banner_lines()
        self.input = ""
        self.history_cursor = NOT_RECALLING
        self.processing = False

    @property
    def prompt(self) -> str:
        """Return the prompt for the next input line."""
        return self.session.prompt

    @property
    def history(self) -> list[str]:
        """Return the submitted commands, oldest first."""
        return self.session.history

    def _append(self, kind: LineKind, text: str) -> None:
        self.scrollback.append(Line(kind, text))

    # -- submission --------------------------------------------------------

    async def submit(self, text: str | None = None) -> bool:
        """Submit a line (the input buffer when *text* is omitted).

        Returns:
            False if the line was rejected because a command is still
            running; True otherwise, including for blank lines.

        """
        if self.processing:
            return False
        line = (self.input if text is None else text).strip()
        self.input = ""
        if not line:
            return True

        self._append(LineKind.INPUT, f"{self.prompt}{line}")
        self.session.history.append(line)
        self.history_cursor = NOT_RECALLING

        self.processing = True
        try:
            outcome = await self.shell.execute(line)
        finally:
            self.processing = False

        if outcome.exit:
            self.scrollback = [Line(LineKind.OUTPUT, "logout"), *banner_lines()]
            return True
        if outcome.clear:
            self.scrollback.clear()
            return True
        if outcome.text:
            self._append(LineKind.ERROR if outcome.is_error else LineKind.OUTPUT, outcome.text)
        return True

    # -- history recall ----------------------------------------------------

    def recall_previous(self) -> None:
        """Step back through history, stopping at the oldest entry."""
        history = self.session.history
        if not history:
            return
        if self.history_cursor == NOT_RECALLING:
            self.history_cursor = len(history) - 1
        elif self.history_cursor > 0:
            self.history_cursor -= 1
        self.input = history[self.history_cursor]

    def recall_next(self) -> None:
        """Step forward through history; past the newest, clear the buffer."""
        if self.history_cursor == NOT_RECALLING:
            return
        history = self.session.history
        if self.history_cursor < len(history) - 1:
            self.history_cursor += 1
            self.input = history[self.history_cursor]
        else:
            self.history_cursor = NOT_RECALLING
            self.input = ""

    # -- control keys ------------------------------------------------------

    def complete(self) -> list[str]:
        """Complete the last word of the buffer against names in the cwd.

        One match replaces the word in place.  Several matches are echoed
        into the scrollback, joined by two spaces.

        Returns:
            The matching names.

        """
        fs = self.session.fs
        if not fs.is_dir(self.session.cwd):
            return []
        head, sep, word = self.input.rpartition(" ")
        matches = [name for name in fs.list_dir(self.session.cwd) if name.startswith(word)]
        if len(matches) == 1:
            self.input = f"{head}{sep}{matches[0]}"
        elif len(matches) > 1:
            self._append(LineKind.INPUT, f"$ {self.input}")
            self._append(LineKind.OUTPUT, "  ".join(matches))
        return matches

    def interrupt(self) -> None:
        """Abandon the current input line (Ctrl+C)."""
        self._append(LineKind.INPUT, f"$ {self.input}^C")
        self.input = ""
        self.history_cursor = NOT_RECALLING

    def clear_screen(self) -> None:
        """Wipe the scrollback (Ctrl+L)."""
        self.scrollback.clear()
