"""Browser-based web UI for the terminal.

This package provides a Flask application that exposes one terminal
through a web browser.  It is an **optional** extra, install with::

    pip install nexus-shell[web]

The ``create_app`` factory in ``app.py`` builds a session and a
terminal and serves five endpoints:

- ``GET /``: HTML terminal page.
- ``POST /api/execute``: submit a command line and return the scrollback.
- ``POST /api/complete``: tab-complete the input buffer.
- ``POST /api/key``: history recall, Ctrl+C and Ctrl+L.
- ``GET /api/status``: prompt, cwd and processing state for polling.
"""
