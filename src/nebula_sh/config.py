"""Shell configuration — the settings a session is built from.

A ``ShellConfig`` is a small, immutable record the session factory reads
when it sets itself up.  It can be built in code or loaded from a JSON
file::

    {"hostname": "nebula-sh", "default_user": "root", "strict_registry": true}

Unknown keys are ignored; missing keys fall back to the defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from nebula_sh.privileges import Privilege, parse_privilege

if TYPE_CHECKING:
    from pathlib import Path


class ConfigError(RuntimeError):
    """Raise when a configuration file cannot be loaded."""


@dataclass(frozen=True)
class ShellConfig:
    """Settings for a session.

    Attributes:
        hostname: Shown at the start of the prompt.
        default_user: The user a fresh session starts as.
        default_privilege: Privilege given to ``default_user`` when it is
            not root and has to be created.
        strict_registry: Reject duplicate command names at registration.
        history_limit: Keep at most this many history lines (0 = no limit).

    """

    hostname: str = "nebula-sh"
    default_user: str = "root"
    default_privilege: Privilege = Privilege.ROOT
    strict_registry: bool = False
    history_limit: int = 0


def load_config(path: Path) -> ShellConfig:
    """Load a ``ShellConfig`` from a JSON file.

    Raises:
        ConfigError: If the file cannot be read, is not a JSON object, or
            names an unknown privilege.

    """
    defaults = ShellConfig()
    try:
        data = json.loads(path.read_text())
        return ShellConfig(
            hostname=data.get("hostname", defaults.hostname),
            default_user=data.get("default_user", defaults.default_user),
            default_privilege=parse_privilege(
                data.get("default_privilege", defaults.default_privilege.name)
            ),
            strict_registry=bool(data.get("strict_registry", defaults.strict_registry)),
            history_limit=int(data.get("history_limit", defaults.history_limit)),
        )
    except (OSError, AttributeError, ValueError) as e:
        msg = f"Cannot load config: {e}"
        raise ConfigError(msg) from e
