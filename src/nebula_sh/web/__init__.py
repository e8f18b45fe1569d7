"""Browser-based terminal for nebula-sh.

This package provides a Flask application that exposes a session
through a web browser.  It is an **optional** extra — install with::

    pip install nebula-sh[web]

The ``create_app`` factory in ``app.py`` creates a session and serves
three endpoints:

- ``GET /`` — HTML terminal page.
- ``POST /api/execute`` — run a command and return JSON.
- ``GET /api/status`` — session status for polling.
"""
