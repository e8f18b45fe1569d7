"""nebula-sh — a simulated single-user computer.

An in-memory filesystem, a command driver with typed arguments and
flags, and a session that ties them together::

    from nebula_sh import create_session

    session = create_session()
    session.run_command("mkdir docs")
    session.run_command("ls")
"""

from nebula_sh.session import Session, create_session

__all__ = ["Session", "create_session"]
