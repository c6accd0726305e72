"""Logger lookup for minifmt modules.

Every logger lives under the ``minifmt`` namespace so an application can
enable formatter diagnostics with a single ``logging.getLogger("minifmt")``
call. The package root carries a NullHandler and never configures output
itself.

Example:
    >>> from minifmt.utils.logger import get_logger
    >>> get_logger("renderers.rust").name
    'minifmt.renderers.rust'
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "minifmt"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the minifmt logger for a module.

    Module names from inside the package (``minifmt.serialization``) are used
    as is; anything else is nested under the root namespace.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
