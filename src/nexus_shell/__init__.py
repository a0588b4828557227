"""NexusOS virtual shell: a simulated Unix terminal.

The package models the shell that lives inside the NexusOS "Terminal"
application:

- ``nexus_shell.fs``: the in-memory filesystem tree and path resolution.
- ``nexus_shell.packages``: the package catalog, installed registry and
  the ``apt`` state machine.
- ``nexus_shell.shell``: the command dispatcher and its handlers.
- ``nexus_shell.session`` / ``nexus_shell.terminal``: per-session state
  and the input loop (history, completion, scrollback).
"""

__version__ = "0.1.0"
