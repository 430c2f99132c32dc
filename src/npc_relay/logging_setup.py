"""Root logger configuration for the relay process.

Every module logs through ``logging.getLogger(__name__)``; this module only
decides where those records go and how they look.  ``configure_logging`` is
called once by the CLI before the server starts.
"""

from __future__ import annotations

import logging

from npc_relay.config import LoggingSettings

_FORMATS = {
    "simple": "%(levelname)s %(message)s",
    "detailed": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
}


def configure_logging(settings: LoggingSettings) -> None:
    """Install a single stream handler on the root logger.

    Calling it again replaces the previous handler instead of stacking
    duplicates, so reloading config in a long-lived process is safe.
    """
    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMATS.get(settings.format, _FORMATS["detailed"])))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_npc_relay_handler", False):
            root.removeHandler(existing)
    handler._npc_relay_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
