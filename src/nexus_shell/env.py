"""Shell environment variables.

The session's environment is a flat set of ``KEY=VALUE`` string pairs.
``export`` and ``unset`` change it, ``env`` prints it, and ``echo``
substitutes ``$KEY`` references from it.  ``PWD`` is kept in step with
the session's working directory by the session itself.
"""

import re

_VAR_REFERENCE = re.compile(r"\$(\w+)")


def default_environment(*, user: str, home: str, hostname: str, cwd: str) -> dict[str, str]:
    """Return the variables a new login shell starts with."""
    return {
        "HOME": home,
        "USER": user,
        "PATH": "/usr/local/bin:/usr/bin:/bin",
        "SHELL": "/bin/bash",
        "TERM": "xterm-256color",
        "LANG": "en_US.UTF-8",
        "PWD": cwd,
        "HOSTNAME": hostname,
        "EDITOR": "nano",
    }


class Environment:
    """A key-value store for environment variables."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        """Create an environment, optionally pre-populated.

        Args:
            initial: Starting variables (copied, not referenced).

        """
        self._vars: dict[str, str] = dict(initial) if initial else {}

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for *key*, or *default* if not set."""
        return self._vars.get(key, default)

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value* (creates or overwrites)."""
        self._vars[key] = value

    def delete(self, key: str) -> None:
        """Remove *key* from the environment.

        Raises:
            KeyError: If *key* does not exist.

        """
        del self._vars[key]

    def items(self) -> list[tuple[str, str]]:
        """Return all (key, value) pairs in insertion order."""
        return list(self._vars.items())

    def expand(self, text: str) -> str:
        """Replace each ``$NAME`` in *text* with its value.

        Unknown names expand to the empty string, as in bash.
        """
        return _VAR_REFERENCE.sub(lambda m: self._vars.get(m.group(1), ""), text)

    def __contains__(self, key: object) -> bool:
        """Return True if *key* is set."""
        return key in self._vars
