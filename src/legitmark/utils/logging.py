"""Configuration du logging du SDK (logger racine `legitmark`)."""

from __future__ import annotations

import logging

LOGGER_NAME = "legitmark"
LOG_FORMAT = "[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s"

_HANDLER_MARKER = "_legitmark_handler"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Installe un handler console sur le logger `legitmark` (idempotent).

    À appeler par l'application hôte ; le SDK lui-même n'ajoute aucun handler.
    """
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(level)
    if not any(getattr(h, _HANDLER_MARKER, False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        setattr(handler, _HANDLER_MARKER, True)
        root.addHandler(handler)
    return root


def enable_debug_logging() -> None:
    """Abaisse le logger `legitmark` au niveau DEBUG (traces HTTP)."""
    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG)
