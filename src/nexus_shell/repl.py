"""Interactive REPL (Read-Eval-Print Loop) for the terminal.

The REPL is the console front end.  It builds a session from the
configuration, creates a shell, and enters the classic loop:

    1. **Read**: display a prompt and read user input.
    2. **Eval**: pass the command to ``shell.execute()``.
    3. **Print**: display the result; colour tokens are kept on a
       terminal and stripped when the stream is redirected.
    4. **Loop**: repeat until the shell reports an exit.

The shell is fully testable (returns outcomes, no I/O); the REPL is the
thin I/O wrapper that connects it to ``stdin``/``stdout``.
"""

import asyncio
import readline
import sys
from typing import TextIO

from nexus_shell import canned
from nexus_shell.auth import StaticAuth
from nexus_shell.completer import Completer
from nexus_shell.config import ConfigError, TerminalConfig
from nexus_shell.render import to_plain
from nexus_shell.session import Session
from nexus_shell.shell import Shell


def format_banner() -> str:
    """Return the text printed when the REPL starts."""
    return f"{canned.BANNER}\n{canned.BANNER_HINT}\n"


def _for_stream(text: str, stream: TextIO) -> str:
    """Return *text* with colour tokens kept only for an interactive stream."""
    return text if stream.isatty() else to_plain(text)


def build_shell(config: TerminalConfig, *, admin: bool = False) -> Shell:
    """Create a shell over a fresh session.

    Args:
        config: Terminal settings.
        admin: Whether the console user may run admin commands.

    """
    session = Session(config, auth=StaticAuth(admin=admin))
    return Shell(session)


def run() -> None:
    """Start the console terminal.

    This is the ``nexus-shell`` entry point.  It handles:
    - Reading settings from ``NEXUS_CONFIG`` and ``NEXUS_*`` variables.
    - Shell creation and readline tab completion.
    - The read-eval-print loop.
    - Graceful handling of Ctrl+C and Ctrl+D.
    """
    try:
        config = TerminalConfig.load()
    except ConfigError as e:
        print(f"nexus-shell: {e}", file=sys.stderr)  # noqa: T201
        raise SystemExit(2) from e

    shell = build_shell(config, admin="--admin" in sys.argv[1:])

    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner())  # noqa: T201

    try:
        while True:
            try:
                command = input(shell.session.prompt)
            except EOFError:
                # Ctrl+D
                print()  # noqa: T201
                break

            if command.strip():
                shell.session.history.append(command.strip())

            outcome = asyncio.run(shell.execute(command))
            if outcome.exit:
                print("logout")  # noqa: T201
                break
            if outcome.clear:
                print("\x1b[2J\x1b[H", end="")  # noqa: T201
                continue
            if outcome.text:
                stream = sys.stderr if outcome.is_error else sys.stdout
                print(_for_stream(outcome.text, stream), file=stream)  # noqa: T201

    except KeyboardInterrupt:
        print("\n^C")  # noqa: T201
